"""
Parcel database model.

A single table of shipment records keyed by an auto-incrementing number.
"""

from sqlalchemy import Column, Integer, String, Enum
from parcel_tracker.app.db.session import Base
from parcel_tracker.app.models.parcel_enums import ParcelStatus


class Parcel(Base):
    """
    Parcel model.

    ``created_at`` is kept as RFC3339 UTC text so rows sort by creation
    time as plain strings.
    """
    __tablename__ = "parcel"

    number = Column(Integer, primary_key=True, autoincrement=True)

    # Owner (opaque to the store, no foreign key)
    client = Column(Integer, nullable=False, index=True)

    # Status is stored by value ('registered', 'sent', 'delivered')
    status = Column(
        Enum(
            ParcelStatus,
            name="parcel_status",
            native_enum=False,
            length=16,
            validate_strings=True,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=ParcelStatus.REGISTERED,
    )

    address = Column(String, nullable=False)
    created_at = Column(String, nullable=False)

    # sqlite_autoincrement keeps numbers from being reused after deletes
    __table_args__ = {"sqlite_autoincrement": True}

    def __repr__(self):
        return f"<Parcel(number={self.number}, client={self.client}, status='{self.status.value}')>"
