"""Read-only access to resident activity for the report pipeline."""

import enum
import uuid
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from houseguide.residents.models import (
    Accomplishment,
    Checklist,
    Chore,
    Goal,
    House,
    Incident,
    Meeting,
    Note,
    ProgramFee,
    Resident,
)


class ActivityKind(str, enum.Enum):
    GOALS = "goals"
    CHORES = "chores"
    ACCOMPLISHMENTS = "accomplishments"
    INCIDENTS = "incidents"
    MEETINGS = "meetings"
    PROGRAM_FEES = "program_fees"
    NOTES = "notes"


MODEL_BY_KIND = {
    ActivityKind.GOALS: Goal,
    ActivityKind.CHORES: Chore,
    ActivityKind.ACCOMPLISHMENTS: Accomplishment,
    ActivityKind.INCIDENTS: Incident,
    ActivityKind.MEETINGS: Meeting,
    ActivityKind.PROGRAM_FEES: ProgramFee,
    ActivityKind.NOTES: Note,
}


class RecordStore(ABC):
    """Records are any objects exposing the model attributes; only read here."""

    @abstractmethod
    async def get_by_resident(self, kind: ActivityKind, resident_id: uuid.UUID) -> Sequence[Any]:
        pass

    @abstractmethod
    async def get_resident(self, resident_id: uuid.UUID) -> Any | None:
        pass

    @abstractmethod
    async def get_house(self, house_id: uuid.UUID) -> Any | None:
        pass

    @abstractmethod
    async def get_checklist(self, resident_id: uuid.UUID) -> Any | None:
        pass


class SqlRecordStore(RecordStore):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_resident(self, kind: ActivityKind, resident_id: uuid.UUID) -> list:
        model = MODEL_BY_KIND[kind]
        result = await self.db.execute(
            select(model).where(model.resident_id == resident_id).order_by(model.created_at)
        )
        return list(result.scalars().all())

    async def get_resident(self, resident_id: uuid.UUID) -> Resident | None:
        result = await self.db.execute(select(Resident).where(Resident.id == resident_id))
        return result.scalar_one_or_none()

    async def get_house(self, house_id: uuid.UUID) -> House | None:
        result = await self.db.execute(select(House).where(House.id == house_id))
        return result.scalar_one_or_none()

    async def get_checklist(self, resident_id: uuid.UUID) -> Checklist | None:
        result = await self.db.execute(
            select(Checklist)
            .where(Checklist.resident_id == resident_id)
            .order_by(Checklist.updated_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()
