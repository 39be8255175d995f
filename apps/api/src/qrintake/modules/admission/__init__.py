"""Geofence admission decisions for public codes."""
