# Middleware package init
"""
Lokasi API - Middleware Package
=================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → [Unhandled Error] → Route Handler

    1. Request ID: correlation ID for logs and the X-Request-ID header
    2. Logging: method, path, status and duration, tagged with the request ID
    3. CORS: FastAPI's CORSMiddleware (answers preflight OPTIONS requests)
    4. Unhandled Error: unexpected exceptions become a JSON 500 that still
       carries the CORS and X-Request-ID headers
"""
