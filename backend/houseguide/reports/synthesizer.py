"""Weekly report synthesis.

Tries the configured generation provider first. When it is missing, raises or
returns nothing, the report is rendered from a fixed six-section template, so
the same aggregate always produces the same text.
"""

import re
from dataclasses import dataclass
from datetime import date
from typing import Any

import structlog

from houseguide.classification.redaction import redact
from houseguide.config import settings
from houseguide.providers.base import GenerationProvider
from houseguide.reports.aggregation import AggregatedWeek, to_calendar_date
from houseguide.residents.store import ActivityKind

logger = structlog.get_logger()

NO_UPDATES = "No updates this week."
ELLIPSIS = "..."
DETAIL_CHARS = 240

SECTION_TITLES = (
    "Sponsor/Mentor",
    "Work/School",
    "Chores/Compliance",
    "Demeanor / Participation",
    "Professional Help / Appointments",
    "Program Fees",
)

REPORT_TEMPLATE = (
    "Resident: {{residentName}}  Week of: {{weekStart}}  House: {{houseName}}\n\n"
    "__Sponsor/Mentor:__ {{sponsorMentor}}\n\n"
    "__Work/School:__ {{workSchool}}\n\n"
    "__Chores/Compliance:__ {{choresCompliance}}\n\n"
    "__Demeanor / Participation:__ {{demeanorParticipation}}\n\n"
    "__Professional Help / Appointments:__ {{professionalHelp}}\n\n"
    "__Program Fees:__ {{programFees}}"
)

PROFESSIONAL_MEETING_TYPES = {"group_therapy", "individual_counseling"}

MEETING_LABELS = {
    "aa": "AA meeting",
    "na": "NA meeting",
    "group_therapy": "Group therapy",
    "individual_counseling": "Individual counseling",
    "house_meeting": "House meeting",
    "other": "Meeting",
}

# Fields sent to the generation provider, per kind. Free text is redacted.
RECORD_FIELDS: dict[ActivityKind, tuple[str, ...]] = {
    ActivityKind.GOALS: ("title", "status", "priority", "target_date", "description"),
    ActivityKind.CHORES: ("chore_name", "status", "assigned_date", "due_date", "notes"),
    ActivityKind.ACCOMPLISHMENTS: ("title", "category", "date_achieved", "description"),
    ActivityKind.INCIDENTS: ("incident_type", "severity", "date_occurred", "description", "action_taken"),
    ActivityKind.MEETINGS: ("meeting_type", "date_attended", "duration", "location", "notes"),
    ActivityKind.PROGRAM_FEES: ("fee_type", "amount", "status", "due_date", "paid_date", "notes"),
    ActivityKind.NOTES: ("category", "source", "text"),
}
FREE_TEXT_FIELDS = {
    "title", "description", "notes", "text", "action_taken", "chore_name", "location",
    "home_group", "step_work", "professional_help", "job",
}
CHECKLIST_FIELDS = ("phase", "home_group", "step_work", "professional_help", "job")

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class WeeklyReportDraft:
    resident_id: Any
    week_start: str
    week_end: str
    body: str
    generated_by: str  # ai, template


def excerpt(text: str | None, limit: int) -> str:
    """Redacted, whitespace-collapsed text cut to ``limit`` characters."""
    cleaned = _WHITESPACE.sub(" ", redact(text or "")).strip()
    if len(cleaned) > limit:
        return cleaned[:limit].rstrip() + ELLIPSIS
    return cleaned


def _label(value) -> str:
    return str(value or "").replace("_", " ")


def _day(value) -> str:
    parsed = to_calendar_date(value)
    return parsed.isoformat() if parsed else str(value or "")


def _field(record, name: str):
    value = getattr(record, name, None)
    if isinstance(value, date):
        return value.isoformat()
    if name in FREE_TEXT_FIELDS and isinstance(value, str):
        return redact(value)
    return getattr(value, "value", value)


def build_structured_input(
    week: AggregatedWeek,
    resident_display_name: str,
    house_name: str,
) -> dict:
    """JSON-ready, redacted view of the aggregate for the generation provider."""
    data: dict[str, Any] = {
        kind.value: [
            {name: _field(record, name) for name in RECORD_FIELDS[kind]}
            for record in week.records(kind)
        ]
        for kind in ActivityKind
    }
    data["checklist"] = (
        {name: _field(week.checklist, name) for name in CHECKLIST_FIELDS}
        if week.checklist is not None else None
    )
    return {
        "resident": {"name": resident_display_name},
        "house": {"name": house_name},
        "period": {
            "week_start": week.week_start.isoformat(),
            "week_end": week.week_end.isoformat(),
        },
        "data": data,
    }


class ReportSynthesizer:
    def __init__(
        self,
        provider: GenerationProvider | None = None,
        note_excerpt_chars: int | None = None,
    ):
        self.provider = provider
        self.note_excerpt_chars = (
            settings.NOTE_EXCERPT_CHARS if note_excerpt_chars is None else note_excerpt_chars
        )

    async def synthesize(
        self,
        week: AggregatedWeek,
        resident_display_name: str,
        house_name: str,
    ) -> str:
        body, _ = await self._synthesize(week, resident_display_name, house_name)
        return body

    async def synthesize_draft(
        self,
        week: AggregatedWeek,
        resident_display_name: str,
        house_name: str,
    ) -> WeeklyReportDraft:
        body, generated_by = await self._synthesize(week, resident_display_name, house_name)
        return WeeklyReportDraft(
            resident_id=week.resident_id,
            week_start=week.week_start.isoformat(),
            week_end=week.week_end.isoformat(),
            body=body,
            generated_by=generated_by,
        )

    async def _synthesize(
        self,
        week: AggregatedWeek,
        resident_display_name: str,
        house_name: str,
    ) -> tuple[str, str]:
        if self.provider is not None:
            try:
                structured = build_structured_input(week, resident_display_name, house_name)
                body = await self.provider.generate(structured, REPORT_TEMPLATE)
                if body and body.strip():
                    logger.info(
                        "weekly_report_generated",
                        resident_id=str(week.resident_id),
                        provider=getattr(self.provider, "name", type(self.provider).__name__),
                        record_count=week.total_records,
                    )
                    return body, "ai"
                logger.warning("weekly_report_generation_empty", resident_id=str(week.resident_id))
            except Exception as e:
                logger.warning(
                    "weekly_report_generation_failed",
                    resident_id=str(week.resident_id),
                    error=str(e),
                )

        logger.info("weekly_report_fallback", resident_id=str(week.resident_id), record_count=week.total_records)
        return self.render_fallback(week, resident_display_name, house_name), "template"

    # ------------------------------------------------------------------
    # Deterministic template
    # ------------------------------------------------------------------

    def render_fallback(
        self,
        week: AggregatedWeek,
        resident_display_name: str,
        house_name: str,
    ) -> str:
        header = (
            f"Resident: {resident_display_name}  "
            f"Week of: {week.week_start.isoformat()}  "
            f"House: {house_name}"
        )
        sections = self._section_lines(week)
        parts = [header]
        for title, lines in zip(SECTION_TITLES, sections):
            content = "\n".join(f"- {line}" for line in lines) if lines else NO_UPDATES
            parts.append(f"__{title}:__\n{content}")
        return "\n\n".join(parts)

    def _section_lines(self, week: AggregatedWeek) -> tuple[list[str], ...]:
        sponsor: list[str] = []
        work: list[str] = []
        chores: list[str] = []
        demeanor: list[str] = []
        professional: list[str] = []
        fees: list[str] = []

        for meeting in week.meetings:
            line = self._meeting_line(meeting)
            if getattr(meeting, "meeting_type", None) in PROFESSIONAL_MEETING_TYPES:
                professional.append(line)
            else:
                sponsor.append(line)

        for goal in week.goals:
            line = f"Goal: {excerpt(goal.title, DETAIL_CHARS)} ({_label(goal.status)})"
            if getattr(goal, "description", None):
                line += f" - {excerpt(goal.description, DETAIL_CHARS)}"
            work.append(line)

        for chore in week.chores:
            line = f"{excerpt(chore.chore_name, DETAIL_CHARS)} ({_label(chore.status)}), assigned {_day(chore.assigned_date)}"
            if getattr(chore, "due_date", None):
                line += f", due {_day(chore.due_date)}"
            if getattr(chore, "notes", None):
                line += f" - {excerpt(chore.notes, DETAIL_CHARS)}"
            chores.append(line)

        for incident in week.incidents:
            line = (
                f"{_label(incident.incident_type).capitalize()} incident "
                f"({incident.severity}) on {_day(incident.date_occurred)}: "
                f"{excerpt(incident.description, DETAIL_CHARS)}"
            )
            if getattr(incident, "action_taken", None):
                line += f" Action taken: {excerpt(incident.action_taken, DETAIL_CHARS)}"
            demeanor.append(line)

        for note in week.notes:
            demeanor.append(f"Note: {excerpt(note.text, self.note_excerpt_chars)}")

        for acc in week.accomplishments:
            line = f"Accomplishment: {excerpt(acc.title, DETAIL_CHARS)} ({_label(acc.category)}) on {_day(acc.date_achieved)}"
            if getattr(acc, "description", None):
                line += f" - {excerpt(acc.description, DETAIL_CHARS)}"
            professional.append(line)

        for fee in week.program_fees:
            line = f"{_label(fee.fee_type).capitalize()} ${fee.amount} ({_label(fee.status)}), due {_day(fee.due_date)}"
            if getattr(fee, "paid_date", None):
                line += f", paid {_day(fee.paid_date)}"
            fees.append(line)

        checklist = week.checklist
        if checklist is not None:
            if getattr(checklist, "home_group", None):
                sponsor.append(f"Home group: {excerpt(checklist.home_group, DETAIL_CHARS)}")
            if getattr(checklist, "step_work", None):
                sponsor.append(f"Step work: {excerpt(checklist.step_work, DETAIL_CHARS)}")
            if getattr(checklist, "job", None):
                work.append(f"Job: {excerpt(checklist.job, DETAIL_CHARS)}")
            if getattr(checklist, "professional_help", None):
                professional.append(f"Professional help: {excerpt(checklist.professional_help, DETAIL_CHARS)}")

        return sponsor, work, chores, demeanor, professional, fees

    @staticmethod
    def _meeting_line(meeting) -> str:
        meeting_type = getattr(meeting, "meeting_type", None)
        line = f"{MEETING_LABELS.get(meeting_type, _label(meeting_type).capitalize() or 'Meeting')} on {_day(meeting.date_attended)}"
        if getattr(meeting, "location", None):
            line += f" at {excerpt(meeting.location, DETAIL_CHARS)}"
        if getattr(meeting, "notes", None):
            line += f" - {excerpt(meeting.notes, DETAIL_CHARS)}"
        return line
