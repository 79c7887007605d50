"""
Lokasi API - Location Service (Business Logic)
================================================

What:  The four operations behind /api/lokasi: read, create, update, delete.
How:   Validates identifiers, normalizes the GeoJSON type tag, calls the
       injected LocationStore, and turns "no such record" into NotFoundError.
Who:   Called by the route handlers in routes/locations.py.

Flow per operation:
    read    → [parse id] → find_one / find_all         → record | [records]
    create  → new id + type="Point" → insert_one       → record
    update  → parse id → type="Point" → update_one     → record as submitted
    delete  → parse id → delete_one                    → confirmation message

Missing records on update/delete raise NotFoundError unless the service was
built with `report_missing_as_success=True` (legacy clients expect 200).
"""

import logging
from typing import List, Optional

from lokasi.exceptions import NotFoundError, ServiceUnavailableError
from lokasi.identifiers import new_location_id, parse_location_id
from lokasi.schemas.location import (
    POINT_TYPE,
    LocationInput,
    LocationResponse,
    MessageResponse,
)
from lokasi.services.location_store import LocationStore

logger = logging.getLogger(__name__)

DELETED_MESSAGE = "Berhasil dihapus"


class LocationService:
    """
    Business logic layer for location records.

    Stateless apart from the store handle it is constructed with.
    """

    def __init__(self, store: LocationStore, report_missing_as_success: bool = False):
        self.store = store
        self.report_missing_as_success = report_missing_as_success

    def _require_store(self) -> None:
        if not self.store.is_connected:
            logger.error("Request rejected: location store is not connected")
            raise ServiceUnavailableError()

    async def get_location(self, raw_id: Optional[str]) -> LocationResponse:
        """
        Fetch one location by its client-supplied id.

        Raises:
            InvalidIdentifierError: `raw_id` is not a 24-char hex string
            NotFoundError: no record with that id
            ServiceUnavailableError / StoreError
        """
        location_id = parse_location_id(raw_id)
        self._require_store()

        document = await self.store.find_one(location_id)
        if document is None:
            raise NotFoundError(resource_id=location_id)
        return LocationResponse.model_validate(document)

    async def list_locations(self) -> List[LocationResponse]:
        """Every stored location; an empty store yields an empty list."""
        self._require_store()
        documents = await self.store.find_all()
        return [LocationResponse.model_validate(doc) for doc in documents]

    async def create_location(self, payload: LocationInput) -> LocationResponse:
        """
        Store a new location.

        The client `_id` (if any) is discarded and replaced by a fresh one;
        `koordinat.type` is forced to "Point".
        """
        self._require_store()

        location_id = new_location_id()
        if payload.id is not None:
            logger.debug("Discarding client-supplied _id %r on create", payload.id)

        document = _to_document(location_id, payload)
        await self.store.insert_one(document)

        logger.info("Created location %s (%s)", location_id, payload.nama)
        return LocationResponse.model_validate(document)

    async def update_location(self, raw_id: Optional[str], payload: LocationInput) -> LocationResponse:
        """
        Replace nama, kategori, deskripsi and koordinat of one location.

        Returns the record as submitted with the requested id attached.

        Raises:
            InvalidIdentifierError: missing or malformed `raw_id`
            NotFoundError: no record matched (unless in legacy mode)
        """
        location_id = parse_location_id(raw_id)
        self._require_store()

        document = _to_document(location_id, payload)
        matched = await self.store.update_one(location_id, document)
        if matched == 0:
            if not self.report_missing_as_success:
                raise NotFoundError(resource_id=location_id)
            logger.warning("Update matched no location for id %s; reporting success", location_id)
        else:
            logger.info("Updated location %s", location_id)

        return LocationResponse.model_validate(document)

    async def delete_location(self, raw_id: Optional[str]) -> MessageResponse:
        """
        Permanently remove one location.

        Raises:
            InvalidIdentifierError: missing or malformed `raw_id`
            NotFoundError: nothing was deleted (unless in legacy mode)
        """
        location_id = parse_location_id(raw_id)
        self._require_store()

        deleted = await self.store.delete_one(location_id)
        if deleted == 0:
            if not self.report_missing_as_success:
                raise NotFoundError(resource_id=location_id)
            logger.warning("Delete matched no location for id %s; reporting success", location_id)
        else:
            logger.info("Deleted location %s", location_id)

        return MessageResponse(message=DELETED_MESSAGE)


def _to_document(location_id: str, payload: LocationInput) -> dict:
    """Store document for `payload` under `location_id`, with the Point type tag."""
    return {
        "_id": location_id,
        "nama": payload.nama,
        "kategori": payload.kategori,
        "deskripsi": payload.deskripsi,
        "koordinat": {
            "type": POINT_TYPE,
            "coordinates": list(payload.koordinat.coordinates),
        },
    }
