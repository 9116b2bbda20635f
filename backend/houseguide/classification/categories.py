"""Closed category sets used by every classifier in the service."""

import enum


class NoteCategory(str, enum.Enum):
    WORK_SCHOOL = "work_school"
    DEMEANOR = "demeanor"
    SPONSOR = "sponsor"
    MEDICAL = "medical"
    CHORES = "chores"
    GENERAL = "general"


CATEGORY_LABELS: dict[NoteCategory, str] = {
    NoteCategory.WORK_SCHOOL: "Work/School",
    NoteCategory.DEMEANOR: "Demeanor",
    NoteCategory.SPONSOR: "Sponsor/Recovery",
    NoteCategory.MEDICAL: "Medical",
    NoteCategory.CHORES: "Chores",
    NoteCategory.GENERAL: "General",
}


class DocumentCategory(str, enum.Enum):
    """Scanned paperwork: signed commitments vs. disciplinary write-ups."""

    COMMITMENT = "commitment"
    WRITEUP = "writeup"
    GENERAL = "general"


# Prompt vocabulary shared by the model providers
CATEGORY_DESCRIPTIONS: dict[str, str] = {
    "work_school": "Employment, job searches, interviews, workplace issues, education, classes, GED, college",
    "demeanor": "Attitude, behavior, participation in groups, social interactions, mood, cooperation",
    "sponsor": "AA/NA meetings, sponsor relationships, step work, recovery program participation",
    "medical": "Doctor appointments, therapy, medication compliance, mental health, physical health",
    "chores": "House responsibilities, cleaning, compliance with rules, curfew, assignments",
    "commitment": "A signed commitment, pledge, recovery plan, amends or step work",
    "writeup": "A disciplinary write-up, warning, incident report or policy violation",
    "general": "Anything that fits none of the other categories",
}


def describe_categories(categories) -> str:
    return "\n".join(
        f'- "{c}": {CATEGORY_DESCRIPTIONS.get(c, c.replace("_", " "))}' for c in categories
    )
