"""
Lokasi API - FastAPI Dependencies
===================================

What:  Resolves the LocationService / LocationStore owned by the running app.
How:   create_app() stores both on `app.state`; route handlers receive them
       through Depends() instead of reaching for module-level globals.
"""

from fastapi import Request

from lokasi.services.location_service import LocationService
from lokasi.services.location_store import LocationStore


def get_location_service(request: Request) -> LocationService:
    return request.app.state.location_service


def get_location_store(request: Request) -> LocationStore:
    return request.app.state.location_store
