"""PII redaction applied before text leaves the process or lands in a report.

Rules run in a fixed order, role-marker names first. Placeholders hold no
digits, no ``@`` and no capitalised word after a role marker, and every rule
that can match next to a placeholder runs after the rule that produced it, so
a second pass never finds anything new.
"""

import re

_ROLE_MARKERS = r"Sponsor|Therapist|Doctor|Case\s*Manager"

REDACTION_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    # A following role label is not part of the name
    (
        re.compile(
            rf"\b({_ROLE_MARKERS})\s*:\s*[A-Z][a-z]+"
            rf"(?:\s(?!(?:{_ROLE_MARKERS})\b)[A-Z][a-z]+)*"
        ),
        r"\1: [REDACTED_NAME]",
    ),
    (re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.IGNORECASE), "[EMAIL]"),
    (re.compile(r"\b\d{4}-\d{2}-\d{2}(?!\d)"), "[DATE]"),
    (re.compile(r"\b\d{1,2}/\d{1,2}/(?:\d{4}|\d{2})\b"), "[DATE]"),
    (re.compile(r"\b\d{3}[-.\s]?\d{3}[-.\s]?\d{4}\b"), "[PHONE]"),
    (
        re.compile(
            r"\b\d{1,5}\s+[A-Za-z0-9.\-]+\s+"
            r"(?:Street|St|Avenue|Ave|Road|Rd|Lane|Ln|Drive|Dr|Boulevard|Blvd|Court|Ct)\b",
            re.IGNORECASE,
        ),
        "[ADDRESS]",
    ),
)


def redact(text: str | None) -> str:
    if not text:
        return text or ""
    out = text
    for pattern, replacement in REDACTION_RULES:
        out = pattern.sub(replacement, out)
    return out
