# Routes package init
"""
Lokasi API - API Routes Package
=================================

Route Inventory:
    - locations.py:  GET    /api/lokasi[?id=]   (one location or all)
                     POST   /api/lokasi         (create)
                     PUT    /api/lokasi?id=     (replace)
                     DELETE /api/lokasi?id=     (delete)
    - health.py:     GET    /health             (service health check)

Routes stay thin: they pull the query parameter and body, call
LocationService, and return its result. Errors propagate to the global
exception handlers in main.py.
"""
