import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column


def generate_uuid() -> uuid.UUID:
    return uuid.uuid4()


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        onupdate=lambda: datetime.now(timezone.utc),
    )


class ResidentRecordMixin(TimestampMixin):
    """Columns shared by every activity record: one resident, one house."""

    @declared_attr
    def id(cls) -> Mapped[uuid.UUID]:
        return mapped_column(Uuid, primary_key=True, default=generate_uuid)

    @declared_attr
    def resident_id(cls) -> Mapped[uuid.UUID]:
        return mapped_column(Uuid, ForeignKey("residents.id"), nullable=False, index=True)

    @declared_attr
    def house_id(cls) -> Mapped[uuid.UUID]:
        return mapped_column(Uuid, ForeignKey("houses.id"), nullable=False, index=True)
