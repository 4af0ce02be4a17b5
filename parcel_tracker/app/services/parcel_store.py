"""
Parcel storage service.

Thin persistence layer over the ``parcel`` table. The store is built on an
already-open AsyncSession and never opens or closes sessions itself.

Every operation is a single statement followed by a commit. Deleting a
parcel and changing its address are guarded mutations: both are allowed
only while the parcel is still REGISTERED, and the guard is part of the
statement's WHERE clause.
"""

from typing import List, Union

from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession

from parcel_tracker.app.core.exceptions import ParcelNotFoundError, ParcelStateError
from parcel_tracker.app.core.observability import get_logger
from parcel_tracker.app.models.parcel import Parcel
from parcel_tracker.app.models.parcel_enums import ParcelStatus
from parcel_tracker.app.schemas.parcel import ParcelCreate, ParcelRecord

logger = get_logger("store")


def _to_record(row: Parcel) -> ParcelRecord:
    return ParcelRecord.model_validate(row)


class ParcelStore:
    """Storage and retrieval of Parcel records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, parcel: ParcelCreate) -> int:
        """
        Insert a new parcel.

        Status, client, address and created_at are taken from ``parcel``
        as given; callers registering a new parcel pass REGISTERED.

        Returns:
            The number assigned to the new parcel
        """
        row = Parcel(
            client=parcel.client,
            status=parcel.status,
            address=parcel.address,
            created_at=parcel.created_at,
        )
        self.db.add(row)
        try:
            await self.db.flush()
            number = row.number
            await self.db.commit()
        except Exception:
            await self._rollback("add", client=parcel.client)
            raise

        logger.info("Parcel added", extra={"number": number, "client": parcel.client})
        return number

    async def get(self, number: int) -> ParcelRecord:
        """
        Fetch a parcel by number.

        Raises:
            ParcelNotFoundError: If no parcel has this number
        """
        result = await self._read(
            "get",
            select(Parcel).where(Parcel.number == number),
            number=number
        )
        row = result.scalar_one_or_none()

        if row is None:
            raise ParcelNotFoundError(number)

        return _to_record(row)

    async def delete(self, number: int) -> None:
        """
        Delete a parcel that is still REGISTERED.

        Raises:
            ParcelNotFoundError: If no parcel has this number
            ParcelStateError: If the parcel has left REGISTERED; the row is kept
        """
        affected = await self._write(
            "delete",
            delete(Parcel).where(
                Parcel.number == number,
                Parcel.status == ParcelStatus.REGISTERED
            ),
            number=number
        )

        if affected == 0:
            await self._raise_guard_failure(number, "delete")

        logger.info("Parcel deleted", extra={"number": number})

    async def set_address(self, number: int, address: str) -> None:
        """
        Change the delivery address of a parcel that is still REGISTERED.

        Raises:
            ParcelNotFoundError: If no parcel has this number
            ParcelStateError: If the parcel has left REGISTERED; the address is kept
        """
        affected = await self._write(
            "set_address",
            update(Parcel)
            .where(
                Parcel.number == number,
                Parcel.status == ParcelStatus.REGISTERED
            )
            .values(address=address),
            number=number
        )

        if affected == 0:
            await self._raise_guard_failure(number, "change address of")

        logger.info("Parcel address changed", extra={"number": number})

    async def set_status(self, number: int, status: Union[ParcelStatus, str]) -> None:
        """
        Set the status of a parcel.

        Any status may follow any other; no transition graph is enforced here.

        Raises:
            InvalidParcelStatusError: If ``status`` is not a ParcelStatus value
            ParcelNotFoundError: If no parcel has this number
        """
        status = ParcelStatus.parse(status)

        affected = await self._write(
            "set_status",
            update(Parcel)
            .where(Parcel.number == number)
            .values(status=status),
            number=number
        )

        if affected == 0:
            raise ParcelNotFoundError(number)

        logger.info("Parcel status changed", extra={"number": number, "status": status.value})

    async def get_by_client(self, client: int) -> List[ParcelRecord]:
        """
        List all parcels owned by ``client``, ordered by number.

        Returns an empty list when the client has no parcels.
        """
        result = await self._read(
            "get_by_client",
            select(Parcel)
            .where(Parcel.client == client)
            .order_by(Parcel.number),
            client=client
        )
        return [_to_record(row) for row in result.scalars().all()]

    async def _write(self, operation: str, statement, **context) -> int:
        """Execute one DML statement and commit; return the affected row count."""
        try:
            result = await self.db.execute(statement)
            affected = result.rowcount
            await self.db.commit()
        except Exception:
            await self._rollback(operation, **context)
            raise
        return affected

    async def _read(self, operation: str, statement, **context):
        """Execute one SELECT; a failed read rolls the session back before re-raising."""
        try:
            return await self.db.execute(statement)
        except Exception:
            await self._rollback(operation, **context)
            raise

    async def _rollback(self, operation: str, **context) -> None:
        await self.db.rollback()
        logger.error(
            "Parcel storage failure",
            extra={"operation": operation, **context},
            exc_info=True
        )

    async def _raise_guard_failure(self, number: int, action: str) -> None:
        # Nothing matched number + REGISTERED: tell a missing row from a locked one
        current = await self._read(
            action,
            select(Parcel.status).where(Parcel.number == number),
            number=number
        )
        status = current.scalar_one_or_none()

        if status is None:
            raise ParcelNotFoundError(number)

        logger.warning(
            "Guarded mutation rejected",
            extra={"number": number, "status": status.value, "action": action}
        )
        raise ParcelStateError(number, status.value, action)
