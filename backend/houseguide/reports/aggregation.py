"""Collect a resident's activity records for an inclusive calendar window."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

import structlog

from houseguide.residents.store import ActivityKind, RecordStore

logger = structlog.get_logger()


class ReportInputError(ValueError):
    """The caller supplied a missing or unreadable resident id or week bound."""


# Kind-specific windowing field; None means the kind has no domain date.
WINDOW_FIELDS: dict[ActivityKind, str | None] = {
    ActivityKind.GOALS: None,
    ActivityKind.CHORES: "assigned_date",
    ActivityKind.ACCOMPLISHMENTS: "date_achieved",
    ActivityKind.INCIDENTS: "date_occurred",
    ActivityKind.MEETINGS: "date_attended",
    ActivityKind.PROGRAM_FEES: "due_date",
    ActivityKind.NOTES: None,
}
CREATED_FIELD = "created_at"


@dataclass(frozen=True)
class AggregatedWeek:
    resident_id: Any
    week_start: date
    week_end: date
    goals: tuple = ()
    chores: tuple = ()
    accomplishments: tuple = ()
    incidents: tuple = ()
    meetings: tuple = ()
    program_fees: tuple = ()
    notes: tuple = ()
    # Current state, not windowed
    checklist: Any = None

    def records(self, kind: ActivityKind) -> tuple:
        return getattr(self, kind.value)

    @property
    def total_records(self) -> int:
        return sum(len(self.records(kind)) for kind in ActivityKind)


def to_calendar_date(value) -> date | None:
    """Day-level date from a date, datetime or ISO string; None if unreadable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def parse_week_bound(value, name: str) -> date:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ReportInputError(f"{name} is required")
    parsed = to_calendar_date(value)
    if parsed is None:
        raise ReportInputError(f"{name} must be an ISO date (YYYY-MM-DD), got {value!r}")
    return parsed


def record_date(record, kind: ActivityKind) -> date | None:
    field = WINDOW_FIELDS[kind]
    value = getattr(record, field, None) if field else None
    if value in (None, ""):
        value = getattr(record, CREATED_FIELD, None)
    return to_calendar_date(value)


def filter_window(records, kind: ActivityKind, start: date, end: date) -> tuple:
    kept = []
    for record in records:
        day = record_date(record, kind)
        if day is None:
            logger.warning(
                "activity_record_undated",
                kind=kind.value,
                record_id=str(getattr(record, "id", "")),
            )
            continue
        if start <= day <= end:
            kept.append(record)
    return tuple(kept)


async def aggregate_week(
    store: RecordStore,
    resident_id,
    week_start: date | str,
    week_end: date | str,
) -> AggregatedWeek:
    """Every activity kind for the resident, filtered to ``[week_start, week_end]``.

    Range length and alignment are not checked; an inverted range simply
    matches nothing. Only a missing resident id or unreadable bound raises.
    """
    if resident_id is None or (isinstance(resident_id, str) and not resident_id.strip()):
        raise ReportInputError("resident_id is required")
    start = parse_week_bound(week_start, "week_start")
    end = parse_week_bound(week_end, "week_end")

    collected: dict[str, tuple] = {}
    for kind in ActivityKind:
        records = await store.get_by_resident(kind, resident_id)
        collected[kind.value] = filter_window(records, kind, start, end)

    checklist = await store.get_checklist(resident_id)

    logger.info(
        "week_aggregated",
        resident_id=str(resident_id),
        week_start=start.isoformat(),
        week_end=end.isoformat(),
        counts={name: len(items) for name, items in collected.items()},
    )
    return AggregatedWeek(
        resident_id=resident_id,
        week_start=start,
        week_end=end,
        checklist=checklist,
        **collected,
    )
