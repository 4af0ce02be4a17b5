"""
Parcel workflow service.

The layer that drives ParcelStore: it stamps new parcels as REGISTERED with
the current UTC time and walks them forward through the status flow.
"""

from typing import List, Optional

from parcel_tracker.app.core.observability import get_logger
from parcel_tracker.app.models.parcel_enums import ParcelStatus
from parcel_tracker.app.schemas.parcel import ParcelCreate, ParcelRecord, utc_now
from parcel_tracker.app.services.parcel_store import ParcelStore

logger = get_logger("service")


class ParcelService:

    def __init__(self, store: ParcelStore):
        self.store = store

    async def register(self, client: int, address: str) -> ParcelRecord:
        """
        Register a new parcel for ``client``.

        Args:
            client: Owning client identifier
            address: Delivery address

        Returns:
            The stored parcel, number included
        """
        parcel = ParcelCreate(
            client=client,
            status=ParcelStatus.REGISTERED,
            address=address,
            created_at=utc_now(),
        )
        number = await self.store.add(parcel)

        logger.info("Parcel registered", extra={"number": number, "client": client})
        return ParcelRecord(number=number, **parcel.model_dump())

    async def next_status(self, number: int) -> Optional[ParcelStatus]:
        """
        Move a parcel one step forward: registered -> sent -> delivered.

        Returns:
            The new status, or None if the parcel was already delivered
        """
        parcel = await self.store.get(number)

        new_status = parcel.status.next_status()
        if new_status is None:
            logger.info("Parcel already delivered", extra={"number": number})
            return None

        await self.store.set_status(number, new_status)
        return new_status

    async def change_address(self, number: int, address: str) -> None:
        await self.store.set_address(number, address)

    async def delete(self, number: int) -> None:
        await self.store.delete(number)

    async def client_parcels(self, client: int) -> List[ParcelRecord]:
        return await self.store.get_by_client(client)

    @staticmethod
    def describe(parcel: ParcelRecord) -> str:
        """One-line summary of a parcel."""
        return (
            f"Parcel {parcel.number}: address {parcel.address}, client {parcel.client}, "
            f"registered {parcel.created_at}, status {parcel.status.value}"
        )
