import uuid

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from houseguide.models.base import Base, ResidentRecordMixin, TimestampMixin, generate_uuid


class House(TimestampMixin, Base):
    __tablename__ = "houses"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=generate_uuid)
    name: Mapped[str] = mapped_column(String(80), nullable=False)


class Resident(TimestampMixin, Base):
    __tablename__ = "residents"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=generate_uuid)
    house_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("houses.id"), nullable=False, index=True)
    first_name: Mapped[str] = mapped_column(String(60), nullable=False)
    last_initial: Mapped[str] = mapped_column(String(2), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="active")  # active, inactive, graduated

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_initial}."


# Activity records. Dates are ISO calendar strings (YYYY-MM-DD).


class Goal(ResidentRecordMixin, Base):
    __tablename__ = "goals"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    target_date: Mapped[str | None] = mapped_column(String(10))
    status: Mapped[str] = mapped_column(String(20), default="not_started")  # not_started, in_progress, completed, paused
    priority: Mapped[str] = mapped_column(String(10), default="medium")


class Chore(ResidentRecordMixin, Base):
    __tablename__ = "chores"

    chore_name: Mapped[str] = mapped_column(String(200), nullable=False)
    assigned_date: Mapped[str] = mapped_column(String(10), nullable=False)
    due_date: Mapped[str | None] = mapped_column(String(10))
    status: Mapped[str] = mapped_column(String(20), default="assigned")  # assigned, in_progress, completed, missed
    notes: Mapped[str | None] = mapped_column(Text)


class Accomplishment(ResidentRecordMixin, Base):
    __tablename__ = "accomplishments"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    date_achieved: Mapped[str] = mapped_column(String(10), nullable=False)
    category: Mapped[str] = mapped_column(String(20), default="personal")


class Incident(ResidentRecordMixin, Base):
    __tablename__ = "incidents"

    incident_type: Mapped[str] = mapped_column(String(50), nullable=False)  # behavioral, medical, property, policy_violation, other
    severity: Mapped[str] = mapped_column(String(20), default="low")  # low, medium, high, critical
    description: Mapped[str] = mapped_column(Text, nullable=False)
    date_occurred: Mapped[str] = mapped_column(String(10), nullable=False)
    action_taken: Mapped[str | None] = mapped_column(Text)
    follow_up_required: Mapped[bool] = mapped_column(Boolean, default=False)


class Meeting(ResidentRecordMixin, Base):
    __tablename__ = "meetings"

    meeting_type: Mapped[str] = mapped_column(String(30), nullable=False)  # aa, na, group_therapy, individual_counseling, house_meeting, other
    date_attended: Mapped[str] = mapped_column(String(10), nullable=False)
    duration: Mapped[int | None] = mapped_column(Integer)  # minutes
    location: Mapped[str | None] = mapped_column(String(200))
    notes: Mapped[str | None] = mapped_column(Text)


class ProgramFee(ResidentRecordMixin, Base):
    __tablename__ = "program_fees"

    fee_type: Mapped[str] = mapped_column(String(20), nullable=False)  # rent, program_fee, fine, deposit, other
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    due_date: Mapped[str] = mapped_column(String(10), nullable=False)
    paid_date: Mapped[str | None] = mapped_column(String(10))
    status: Mapped[str] = mapped_column(String(20), default="pending")  # pending, paid, overdue, waived
    notes: Mapped[str | None] = mapped_column(Text)


class Note(ResidentRecordMixin, Base):
    __tablename__ = "notes"

    text: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(20), default="general")
    source: Mapped[str] = mapped_column(String(20), default="manual")  # manual, voice, ocr


class Checklist(ResidentRecordMixin, Base):
    __tablename__ = "checklists"

    phase: Mapped[str | None] = mapped_column(String(100))
    home_group: Mapped[str | None] = mapped_column(String(200))
    step_work: Mapped[str | None] = mapped_column(String(500))
    professional_help: Mapped[str | None] = mapped_column(String(500))
    job: Mapped[str | None] = mapped_column(String(200))


class WeeklyReport(ResidentRecordMixin, Base):
    __tablename__ = "weekly_reports"
    __table_args__ = (UniqueConstraint("resident_id", "week_start"),)

    week_start: Mapped[str] = mapped_column(String(10), nullable=False)
    week_end: Mapped[str] = mapped_column(String(10), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    generated_by: Mapped[str] = mapped_column(String(20), default="template")  # ai, template, edited
