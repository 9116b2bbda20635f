import uuid
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from houseguide.database import get_db
from houseguide.providers.base import GenerationProvider
from houseguide.providers.registry import get_generation_provider
from houseguide.reports.schemas import (
    WeeklyReportDraftResponse,
    WeeklyReportRequest,
    WeeklyReportResponse,
    WeeklyReportSave,
)
from houseguide.reports.service import (
    ResidentNotFoundError,
    generate_weekly_report,
    get_weekly_report,
    save_weekly_report,
)
from houseguide.residents.store import SqlRecordStore

router = APIRouter(prefix="/reports", tags=["reports"])


@router.post("/weekly", response_model=WeeklyReportDraftResponse)
async def create_weekly_draft(
    data: WeeklyReportRequest,
    db: AsyncSession = Depends(get_db),
    provider: GenerationProvider | None = Depends(get_generation_provider),
):
    try:
        return await generate_weekly_report(
            SqlRecordStore(db), data.resident_id, data.week_start, data.week_end, provider,
        )
    except ResidentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/weekly/save", response_model=WeeklyReportResponse)
async def save_weekly(
    data: WeeklyReportSave,
    db: AsyncSession = Depends(get_db),
):
    try:
        return await save_weekly_report(
            db, data.resident_id, data.week_start, data.week_end, data.body, data.generated_by,
        )
    except ResidentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/weekly/{resident_id}/{week_start}", response_model=WeeklyReportResponse)
async def get_weekly(
    resident_id: uuid.UUID,
    week_start: date,
    db: AsyncSession = Depends(get_db),
):
    report = await get_weekly_report(db, resident_id, week_start)
    if not report:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Weekly report not found")
    return report
