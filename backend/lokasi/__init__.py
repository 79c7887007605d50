"""
Lokasi API - Application Package
==================================

CRUD service for geotagged point records ("lokasi").

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     LocationService (Business)      │  ← id parsing, normalization
    ├─────────────────────────────────────┤
    │     LocationStore (Persistence)     │  ← CRUD over async SQLAlchemy
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
