import uuid

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from houseguide.providers.base import GenerationProvider
from houseguide.reports.aggregation import aggregate_week, parse_week_bound
from houseguide.reports.synthesizer import ReportSynthesizer, WeeklyReportDraft
from houseguide.residents.models import WeeklyReport
from houseguide.residents.store import RecordStore, SqlRecordStore

logger = structlog.get_logger()


class ResidentNotFoundError(LookupError):
    pass


async def generate_weekly_report(
    store: RecordStore,
    resident_id: uuid.UUID,
    week_start,
    week_end,
    provider: GenerationProvider | None = None,
) -> WeeklyReportDraft:
    """Aggregate the week and synthesize a draft. Nothing is persisted."""
    resident = await store.get_resident(resident_id)
    if resident is None:
        raise ResidentNotFoundError(f"Resident {resident_id} not found")
    house = await store.get_house(resident.house_id)

    week = await aggregate_week(store, resident_id, week_start, week_end)
    synthesizer = ReportSynthesizer(provider=provider)
    return await synthesizer.synthesize_draft(
        week,
        resident.display_name,
        house.name if house is not None else "Unassigned",
    )


async def get_weekly_report(db: AsyncSession, resident_id: uuid.UUID, week_start) -> WeeklyReport | None:
    start = parse_week_bound(week_start, "week_start").isoformat()
    result = await db.execute(
        select(WeeklyReport).where(
            WeeklyReport.resident_id == resident_id,
            WeeklyReport.week_start == start,
        )
    )
    return result.scalar_one_or_none()


async def save_weekly_report(
    db: AsyncSession,
    resident_id: uuid.UUID,
    week_start,
    week_end,
    body: str,
    generated_by: str = "edited",
) -> WeeklyReport:
    """Insert or replace the report for the resident's week."""
    start = parse_week_bound(week_start, "week_start").isoformat()
    end = parse_week_bound(week_end, "week_end").isoformat()

    resident = await SqlRecordStore(db).get_resident(resident_id)
    if resident is None:
        raise ResidentNotFoundError(f"Resident {resident_id} not found")

    report = await get_weekly_report(db, resident_id, start)
    if report is None:
        report = WeeklyReport(
            resident_id=resident.id,
            house_id=resident.house_id,
            week_start=start,
        )
        db.add(report)
    report.week_end = end
    report.body = body
    report.generated_by = generated_by

    await db.commit()
    await db.refresh(report)
    logger.info("weekly_report_saved", resident_id=str(resident_id), week_start=start, generated_by=generated_by)
    return report
