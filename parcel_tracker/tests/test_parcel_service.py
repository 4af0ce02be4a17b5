"""
Tests for the parcel workflow service.
"""

from datetime import datetime, timezone

import pytest

from parcel_tracker.app.core.exceptions import ParcelNotFoundError, ParcelStateError
from parcel_tracker.app.models.parcel_enums import ParcelStatus
from parcel_tracker.app.schemas.parcel import RFC3339_UTC, ParcelRecord
from parcel_tracker.app.services.parcel_service import ParcelService


@pytest.fixture
def service(store):
    return ParcelService(store)


@pytest.mark.asyncio
async def test_register_stamps_status_and_time(service, store):
    before = datetime.now(timezone.utc).replace(microsecond=0)

    parcel = await service.register(client=42, address="Lenina 1")

    after = datetime.now(timezone.utc)
    created = datetime.strptime(parcel.created_at, RFC3339_UTC).replace(tzinfo=timezone.utc)
    assert before <= created <= after

    assert parcel.status == ParcelStatus.REGISTERED
    assert parcel.client == 42
    assert await store.get(parcel.number) == parcel


@pytest.mark.asyncio
async def test_next_status_walks_forward_and_stops(service, store):
    parcel = await service.register(client=1, address="A")

    assert await service.next_status(parcel.number) == ParcelStatus.SENT
    assert await service.next_status(parcel.number) == ParcelStatus.DELIVERED
    assert await service.next_status(parcel.number) is None

    stored = await store.get(parcel.number)
    assert stored.status == ParcelStatus.DELIVERED


@pytest.mark.asyncio
async def test_next_status_unknown_parcel(service):
    with pytest.raises(ParcelNotFoundError):
        await service.next_status(999)


@pytest.mark.asyncio
async def test_change_address_only_before_sending(service, store):
    parcel = await service.register(client=1, address="A")

    await service.change_address(parcel.number, "B")
    assert (await store.get(parcel.number)).address == "B"

    await service.next_status(parcel.number)

    with pytest.raises(ParcelStateError):
        await service.change_address(parcel.number, "C")
    assert (await store.get(parcel.number)).address == "B"


@pytest.mark.asyncio
async def test_delete_only_before_sending(service, store):
    kept = await service.register(client=7, address="A")
    dropped = await service.register(client=7, address="B")

    await service.next_status(kept.number)

    with pytest.raises(ParcelStateError):
        await service.delete(kept.number)
    await service.delete(dropped.number)

    assert await service.client_parcels(7) == [await store.get(kept.number)]


def test_describe():
    parcel = ParcelRecord(
        number=7,
        client=42,
        status=ParcelStatus.SENT,
        address="Lenina 1",
        created_at="2024-01-02T03:04:05Z",
    )

    assert ParcelService.describe(parcel) == (
        "Parcel 7: address Lenina 1, client 42, "
        "registered 2024-01-02T03:04:05Z, status sent"
    )
