"""
Lokasi API - Location SQLAlchemy Model
========================================

What:  ORM model for the `lokasis` table (named after the original collection).
How:   One row per location. The GeoJSON coordinate object is stored verbatim
       in a JSON column, so each row mirrors the original document shape.
Who:   Used by LocationStore for CRUD and by Alembic for schema management.

Table Design:
    - id: 24-char hex string (see lokasi/identifiers.py), assigned in Python
      at creation and never changed
    - nama / kategori / deskripsi: free text, default ''
    - koordinat: {"type": "Point", "coordinates": [lon, lat]}
"""

from typing import Any, Dict

from sqlalchemy import JSON, CHAR, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from lokasi.database import Base


class Location(Base):
    """A single geotagged point record."""

    __tablename__ = "lokasis"

    id: Mapped[str] = mapped_column(
        CHAR(24),
        primary_key=True,
        comment="24-char hex identifier, assigned once at creation",
    )

    nama: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        server_default=text("''"),
    )

    kategori: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        server_default=text("''"),
    )

    deskripsi: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        server_default=text("''"),
    )

    koordinat: Mapped[Dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        comment="GeoJSON Point object",
    )

    def to_document(self) -> Dict[str, Any]:
        """Row as a plain document in the API field layout."""
        return {
            "_id": self.id,
            "nama": self.nama,
            "kategori": self.kategori,
            "deskripsi": self.deskripsi,
            "koordinat": self.koordinat,
        }

    def __repr__(self) -> str:
        return f"<Location(id={self.id}, nama='{self.nama}')>"
