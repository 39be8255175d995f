"""Geofence locations: one optional allowed area per account."""

from .router import router

__all__ = ["router"]
