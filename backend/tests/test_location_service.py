"""
Lokasi API - Location Service Unit Tests
==========================================

What:  Tests for LocationService (read, list, create, update, delete).
How:   Uses a mock LocationStore (no database).

What we test:
    ✅ Identifier validation happens before any store access
    ✅ Create assigns a fresh id and forces koordinat.type = "Point"
    ✅ Update normalizes the type tag and keeps the requested id
    ✅ Missing records raise NotFoundError (or succeed in legacy mode)
    ✅ Unconnected store raises ServiceUnavailableError
"""

import pytest

from lokasi.exceptions import (
    InvalidIdentifierError,
    NotFoundError,
    ServiceUnavailableError,
    StoreError,
)
from lokasi.identifiers import is_valid_location_id
from lokasi.schemas.location import LocationInput
from lokasi.services.location_service import DELETED_MESSAGE, LocationService

VALID_ID = "65a4f1c29b1e0d44a7c3f812"


def _payload(**overrides):
    data = {
        "nama": "Taman",
        "kategori": "Park",
        "deskripsi": "x",
        "koordinat": {"type": "Polygon", "coordinates": [106.8, -6.2]},
    }
    data.update(overrides)
    return LocationInput.model_validate(data)


class TestLocationServiceRead:
    """Tests for get_location and list_locations."""

    @pytest.mark.asyncio
    async def test_get_location_found(self, mock_store, sample_document):
        mock_store.find_one.return_value = sample_document
        service = LocationService(mock_store)

        result = await service.get_location(sample_document["_id"])

        assert result.id == sample_document["_id"]
        assert result.nama == "Monas"
        assert result.koordinat.coordinates == [106.8272, -6.1754]
        mock_store.find_one.assert_awaited_once_with(sample_document["_id"])

    @pytest.mark.asyncio
    async def test_get_location_uppercase_id_is_canonicalized(self, mock_store, sample_document):
        mock_store.find_one.return_value = sample_document
        service = LocationService(mock_store)

        await service.get_location(sample_document["_id"].upper())

        mock_store.find_one.assert_awaited_once_with(sample_document["_id"])

    @pytest.mark.asyncio
    async def test_get_location_not_found(self, mock_store):
        mock_store.find_one.return_value = None
        service = LocationService(mock_store)

        with pytest.raises(NotFoundError):
            await service.get_location(VALID_ID)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_id", ["", "abc", "zz" * 12, VALID_ID + "0", VALID_ID[:-1]])
    async def test_get_location_invalid_id_skips_store(self, mock_store, raw_id):
        service = LocationService(mock_store)

        with pytest.raises(InvalidIdentifierError):
            await service.get_location(raw_id)

        mock_store.find_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_list_locations_empty(self, mock_store):
        mock_store.find_all.return_value = []
        service = LocationService(mock_store)

        assert await service.list_locations() == []

    @pytest.mark.asyncio
    async def test_list_locations_with_results(self, mock_store, sample_document):
        second = dict(sample_document, _id="65a4f1c29b1e0d44a7c3f813", nama="Kota Tua")
        mock_store.find_all.return_value = [sample_document, second]
        service = LocationService(mock_store)

        result = await service.list_locations()

        assert [loc.nama for loc in result] == ["Monas", "Kota Tua"]

    @pytest.mark.asyncio
    async def test_store_not_connected(self, mock_store):
        mock_store.is_connected = False
        service = LocationService(mock_store)

        with pytest.raises(ServiceUnavailableError):
            await service.list_locations()
        with pytest.raises(ServiceUnavailableError):
            await service.get_location(VALID_ID)

    @pytest.mark.asyncio
    async def test_store_error_propagates(self, mock_store):
        mock_store.find_all.side_effect = StoreError(message="connection reset")
        service = LocationService(mock_store)

        with pytest.raises(StoreError, match="connection reset"):
            await service.list_locations()


class TestLocationServiceCreate:
    """Tests for create_location."""

    @pytest.mark.asyncio
    async def test_create_forces_point_and_assigns_id(self, mock_store):
        service = LocationService(mock_store)

        result = await service.create_location(_payload())

        assert result.koordinat.type == "Point"
        assert is_valid_location_id(result.id)
        inserted = mock_store.insert_one.await_args.args[0]
        assert inserted["_id"] == result.id
        assert inserted["koordinat"] == {"type": "Point", "coordinates": [106.8, -6.2]}

    @pytest.mark.asyncio
    async def test_create_discards_client_id(self, mock_store):
        service = LocationService(mock_store)

        result = await service.create_location(_payload(_id=VALID_ID))

        assert result.id != VALID_ID

    @pytest.mark.asyncio
    async def test_create_ids_are_unique(self, mock_store):
        service = LocationService(mock_store)

        first = await service.create_location(_payload())
        second = await service.create_location(_payload())

        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_create_store_failure(self, mock_store):
        mock_store.insert_one.side_effect = StoreError(message="duplicate key")
        service = LocationService(mock_store)

        with pytest.raises(StoreError):
            await service.create_location(_payload())


class TestLocationServiceUpdate:
    """Tests for update_location."""

    @pytest.mark.asyncio
    async def test_update_returns_submitted_record(self, mock_store):
        mock_store.update_one.return_value = 1
        service = LocationService(mock_store)

        result = await service.update_location(VALID_ID, _payload(nama="Baru"))

        assert result.id == VALID_ID
        assert result.nama == "Baru"
        assert result.koordinat.type == "Point"
        location_id, fields = mock_store.update_one.await_args.args
        assert location_id == VALID_ID
        assert fields["koordinat"]["type"] == "Point"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_id", [None, "", "not-an-id"])
    async def test_update_invalid_id_skips_store(self, mock_store, raw_id):
        service = LocationService(mock_store)

        with pytest.raises(InvalidIdentifierError):
            await service.update_location(raw_id, _payload())

        mock_store.update_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_missing_record_raises(self, mock_store):
        mock_store.update_one.return_value = 0
        service = LocationService(mock_store)

        with pytest.raises(NotFoundError):
            await service.update_location(VALID_ID, _payload())

    @pytest.mark.asyncio
    async def test_update_missing_record_legacy_mode(self, mock_store):
        mock_store.update_one.return_value = 0
        service = LocationService(mock_store, report_missing_as_success=True)

        result = await service.update_location(VALID_ID, _payload(nama="Ghost"))

        assert result.id == VALID_ID
        assert result.nama == "Ghost"


class TestLocationServiceDelete:
    """Tests for delete_location."""

    @pytest.mark.asyncio
    async def test_delete_success(self, mock_store):
        service = LocationService(mock_store)

        result = await service.delete_location(VALID_ID)

        assert result.message == DELETED_MESSAGE
        mock_store.delete_one.assert_awaited_once_with(VALID_ID)

    @pytest.mark.asyncio
    async def test_delete_invalid_id_skips_store(self, mock_store):
        service = LocationService(mock_store)

        with pytest.raises(InvalidIdentifierError):
            await service.delete_location(None)

        mock_store.delete_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_missing_record_raises(self, mock_store):
        mock_store.delete_one.return_value = 0
        service = LocationService(mock_store)

        with pytest.raises(NotFoundError):
            await service.delete_location(VALID_ID)

    @pytest.mark.asyncio
    async def test_delete_missing_record_legacy_mode(self, mock_store):
        mock_store.delete_one.return_value = 0
        service = LocationService(mock_store, report_missing_as_success=True)

        result = await service.delete_location(VALID_ID)

        assert result.message == DELETED_MESSAGE
