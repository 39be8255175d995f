"""Owner catalogs: application types, designations and departments."""

from .router import router

__all__ = ["router"]
