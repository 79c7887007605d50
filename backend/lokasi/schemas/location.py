"""
Lokasi API - Pydantic Request/Response Schemas
================================================

What:  Pydantic models defining the JSON contract of /api/lokasi.
How:   FastAPI validates request bodies against LocationInput and serializes
       responses through LocationResponse (by alias, so `id` goes out as `_id`).

Record JSON shape:
    {
      "_id": "65a4f1c29b1e0d44a7c3f812",
      "nama": "Taman Suropati",
      "kategori": "Park",
      "deskripsi": "Taman kota",
      "koordinat": {"type": "Point", "coordinates": [106.83, -6.2]}
    }
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, FiniteFloat

POINT_TYPE = "Point"


class GeoPoint(BaseModel):
    """
    GeoJSON Point: a type tag plus [longitude, latitude].

    `type` defaults to "Point" and is normalized to it by LocationService;
    the coordinate array length is not checked, but NaN and infinities are
    rejected.
    """
    type: str = Field(default=POINT_TYPE, description="GeoJSON type tag, always 'Point' once stored")
    coordinates: List[FiniteFloat] = Field(description="[longitude, latitude]")


class LocationInput(BaseModel):
    """
    Request body for POST and PUT.

    Any `_id` the client sends is accepted by the decoder but ignored: the
    identifier comes from the server (create) or the `id` query param (update).
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = Field(default=None, alias="_id", description="Ignored on input")
    nama: str = Field(default="", description="Display name")
    kategori: str = Field(default="", description="Classification tag")
    deskripsi: str = Field(default="", description="Free-text note")
    koordinat: GeoPoint = Field(description="GeoJSON Point")


class LocationResponse(BaseModel):
    """A stored location as returned by every /api/lokasi read or write."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id", description="24-char hex identifier")
    nama: str
    kategori: str
    deskripsi: str
    koordinat: GeoPoint


class MessageResponse(BaseModel):
    """Confirmation body for DELETE."""
    message: str = Field(description="Human-readable confirmation")


class ErrorResponse(BaseModel):
    """
    Error body shared by every endpoint.

    Example:
        {"error": "ID tidak valid", "request_id": "a1b2c3d4"}
    """
    error: str = Field(description="Human-readable error message")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response for GET /health."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
