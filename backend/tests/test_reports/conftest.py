"""In-memory record store for report pipeline tests."""

import uuid
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from houseguide.residents.store import ActivityKind, RecordStore

RESIDENT_ID = uuid.UUID("00000000-0000-0000-0000-000000000001")
HOUSE_ID = uuid.UUID("00000000-0000-0000-0000-0000000000aa")


def record(created: str = "2024-01-03", **fields) -> SimpleNamespace:
    return SimpleNamespace(
        id=uuid.uuid4(),
        resident_id=RESIDENT_ID,
        house_id=HOUSE_ID,
        created_at=datetime.fromisoformat(created).replace(tzinfo=timezone.utc),
        **fields,
    )


class FakeStore(RecordStore):
    def __init__(self, records: dict[ActivityKind, list] | None = None, checklist=None):
        self.records = records or {}
        self.checklist = checklist
        self.resident = SimpleNamespace(
            id=RESIDENT_ID, house_id=HOUSE_ID, first_name="John", last_initial="D", display_name="John D.",
        )
        self.house = SimpleNamespace(id=HOUSE_ID, name="Oak House")

    async def get_by_resident(self, kind, resident_id):
        if resident_id != RESIDENT_ID:
            return []
        return list(self.records.get(kind, []))

    async def get_resident(self, resident_id):
        return self.resident if resident_id == RESIDENT_ID else None

    async def get_house(self, house_id):
        return self.house if house_id == HOUSE_ID else None

    async def get_checklist(self, resident_id):
        return self.checklist


@pytest.fixture
def make_record():
    return record


@pytest.fixture
def make_store():
    return FakeStore
