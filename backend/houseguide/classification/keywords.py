"""Offline keyword classifier, used when no model is configured."""

from dataclasses import dataclass

from houseguide.classification.categories import DocumentCategory, NoteCategory
from houseguide.classification.results import ClassificationResult


@dataclass(frozen=True)
class KeywordTable:
    """Ordered ``(category, keywords)`` pairs. Earlier entries win ties."""

    entries: tuple[tuple[str, tuple[str, ...]], ...]

    @property
    def categories(self) -> tuple[str, ...]:
        return tuple(category for category, _ in self.entries)


DOCUMENT_KEYWORDS = KeywordTable((
    (DocumentCategory.COMMITMENT, (
        "commitment", "goal", "plan", "amends", "step", "sponsor",
        "mentor", "aa", "na", "meeting", "pledge", "promise", "dedication",
    )),
    (DocumentCategory.WRITEUP, (
        "write up", "write-up", "incident", "violation", "warning",
        "policy", "consequence", "disciplinary", "infraction", "offense",
    )),
))

NOTE_KEYWORDS = KeywordTable((
    (NoteCategory.WORK_SCHOOL, (
        "job", "work", "shift", "hired", "resume", "interview", "clocked",
        "school", "class", "credits", "college", "study", "employ",
    )),
    (NoteCategory.DEMEANOR, (
        "attitude", "behavior", "behaviour", "mood", "participat", "cooperat",
        "social", "respectful", "argument", "agitated", "anxious", "conflict",
    )),
    (NoteCategory.SPONSOR, (
        "sponsor", "mentor", "aa meeting", "na meeting", "12 step", "12-step",
        "step work", "home group", "recovery", "spiritual",
    )),
    (NoteCategory.MEDICAL, (
        "doctor", "therap", "medication", "appointment", "mental health",
        "medical", "treatment", "counsel", "clinic", "psychiatr", "prescription",
    )),
    (NoteCategory.CHORES, (
        "chore", "dish", "trash", "laundry", "clean", "inspection",
        "curfew", "kitchen", "vacuum", "sweep",
    )),
))


def classify_by_keywords(
    text: str,
    table: KeywordTable = DOCUMENT_KEYWORDS,
) -> ClassificationResult:
    """Count substring hits per list; the list with the most hits wins.

    Returns ``category=None`` with zero confidence when nothing matches so the
    caller can defer to its next stage.
    """
    normalized = (text or "").lower()

    scores = [
        (category, sum(1 for kw in keywords if kw in normalized))
        for category, keywords in table.entries
    ]
    total = sum(score for _, score in scores)
    if total == 0:
        return ClassificationResult(category=None, confidence=0.0, reason="No keyword matches.")

    # max() keeps the first of equal scores, so table order breaks ties
    category, best = max(scores, key=lambda item: item[1])
    return ClassificationResult(
        category=category,
        confidence=best / total,
        reason=f"Keyword match ({best} of {total} indicator hits).",
    )
