"""
Form Submissions Module

Visitor intake behind a QR code and the owner's review workflow:
1. Public multipart submission with optional resume upload
2. Server-side geofence re-check when the owner has a location
3. Best-effort owner notification (in-app and email)
4. Owner listing, review, stats and resume download
"""

from .router import form_router, router

__all__ = ["router", "form_router"]
