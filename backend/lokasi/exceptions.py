"""
Lokasi API - Custom Exception Hierarchy
=========================================

What:  Application-specific exceptions for every failure a request can hit.
How:   Each exception carries a client-facing message and an optional context
       dict. Global exception handlers (registered in main.py) catch these and
       return `{"error": <message>}` JSON bodies with the mapped status code.
Who:   Raised by LocationService and LocationStore; caught by global handlers.

Exception Hierarchy:
    LokasiError (base)
    ├── InvalidIdentifierError   → 400 Bad Request
    ├── MalformedBodyError       → 400 Bad Request
    ├── NotFoundError            → 404 Not Found
    ├── ServiceUnavailableError  → 500 Internal Server Error (store not connected)
    ├── StoreError               → 500 Internal Server Error (store call failed)
    └── ConfigurationError       → startup failure, never reaches a client

Client-facing messages are Indonesian to stay compatible with existing
frontends of this API; log messages are English.
"""

from typing import Any, Dict, Optional


class LokasiError(Exception):
    """
    Base exception for all Lokasi API errors.

    Attributes:
        message:  Client-facing error description (returned as `error`)
        context:  Extra debug info (logged, NOT returned to the client)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "Terjadi kesalahan pada server",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class InvalidIdentifierError(LokasiError):
    """
    Raised when the `id` query parameter is missing or not a 24-char hex string.

    HTTP: 400 Bad Request. Raised before any store access.
    """

    status_code = 400

    def __init__(
        self,
        raw_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["raw_id"] = raw_id
        super().__init__(message="ID tidak valid", context=ctx)
        self.raw_id = raw_id


class MalformedBodyError(LokasiError):
    """
    Raised when the request body cannot be decoded into the record shape.

    HTTP: 400 Bad Request. FastAPI's own RequestValidationError is rendered
    with the same status and body shape (see main.register_exception_handlers).
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Body request tidak valid",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(LokasiError):
    """
    Raised when no location matches the requested identifier.

    HTTP: 404 Not Found
    """

    status_code = 404

    def __init__(
        self,
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message="Data tidak ditemukan", context=ctx)
        self.resource_id = resource_id


class ServiceUnavailableError(LokasiError):
    """
    Raised when a request arrives but the store connection was never established.

    HTTP: 500 Internal Server Error
    """

    status_code = 500

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Database belum terkoneksi", context=context)


class StoreError(LokasiError):
    """
    Raised when an underlying store operation fails (network, server-side, timeout).

    HTTP: 500 Internal Server Error. The underlying driver message is surfaced
    to the client as the `error` field.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Operasi database gagal",
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if operation:
            ctx["operation"] = operation
        super().__init__(message=message, context=ctx)
        self.operation = operation


class ConfigurationError(LokasiError):
    """
    Raised at startup when required configuration is missing or the store is
    unreachable. Aborts application startup.
    """

    def __init__(
        self,
        message: str = "Configuration validation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
