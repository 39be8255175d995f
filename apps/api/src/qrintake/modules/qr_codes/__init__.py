"""
QR Codes Module

Owner-created QR codes. Each account owns at most one code and every code
string is globally unique. Codes are public capabilities: anyone holding
one can look it up, validate a position against it, and submit its form.
"""

from .router import router

__all__ = ["router"]
