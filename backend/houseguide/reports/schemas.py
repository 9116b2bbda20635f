from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field


class WeeklyReportRequest(BaseModel):
    resident_id: UUID
    week_start: date
    week_end: date


class WeeklyReportDraftResponse(BaseModel):
    resident_id: UUID
    week_start: str
    week_end: str
    body: str
    generated_by: str

    model_config = {"from_attributes": True}


class WeeklyReportSave(WeeklyReportRequest):
    body: str = Field(..., min_length=1)
    generated_by: str = Field("edited", pattern="^(ai|template|edited)$")


class WeeklyReportResponse(BaseModel):
    id: UUID
    resident_id: UUID
    house_id: UUID
    week_start: str
    week_end: str
    body: str
    generated_by: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
