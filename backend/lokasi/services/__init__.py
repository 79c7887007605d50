# Services package init
"""
Lokasi API - Services Layer
=============================

What:  Business logic between routes (HTTP) and the database (persistence).

Service Inventory:
    - LocationStore: CRUD interface over the `lokasis` table (owns the engine)
    - LocationService: id validation, normalization, not-found handling
"""
