"""
Parcel Status Enumeration.
"""

import enum
from typing import Optional

from parcel_tracker.app.core.exceptions import InvalidParcelStatusError


class ParcelStatus(str, enum.Enum):
    """
    Parcel status enumeration.

    Status flow:
        REGISTERED → SENT → DELIVERED

    Only the forward flow is offered by next_status(); the store itself
    accepts any status after any other.
    """
    REGISTERED = "registered"
    SENT = "sent"
    DELIVERED = "delivered"

    @classmethod
    def parse(cls, value) -> "ParcelStatus":
        """Return the member for ``value`` or raise InvalidParcelStatusError."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidParcelStatusError(value) from None

    def next_status(self) -> Optional["ParcelStatus"]:
        return _NEXT_STATUS.get(self)


_NEXT_STATUS = {
    ParcelStatus.REGISTERED: ParcelStatus.SENT,
    ParcelStatus.SENT: ParcelStatus.DELIVERED,
}
