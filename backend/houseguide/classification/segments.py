"""Sentence-level segmentation of voice-note transcripts."""

import asyncio
import re
from collections import Counter

import structlog

from houseguide.classification.categories import CATEGORY_LABELS, NoteCategory
from houseguide.classification.classifier import (
    NOTE_SCHEME,
    apply_confidence_gate,
    classify_with_provider,
)
from houseguide.classification.redaction import redact
from houseguide.classification.results import ClassificationResult, TranscriptSegment
from houseguide.config import settings
from houseguide.providers.base import ClassificationProvider

logger = structlog.get_logger()

LOW_CONFIDENCE_REASON = "Low confidence; saved as General."
KEYWORD_MATCH_CONFIDENCE = 0.7
NO_MATCH_CONFIDENCE = 0.3

_SENTENCE_BREAK = re.compile(r"[.!?]+")

# Listed in tie-break priority order
SEGMENT_PATTERNS: tuple[tuple[NoteCategory, re.Pattern[str]], ...] = (
    (NoteCategory.SPONSOR, re.compile(
        r"\b(?:aa|na|sponsors?|mentors?|meetings?|12[-\s]?steps?|step\s*work|home\s*group"
        r"|recovery|program|spiritual)\b",
        re.IGNORECASE,
    )),
    (NoteCategory.MEDICAL, re.compile(
        r"\b(?:doctors?|therapy|therapist|medications?|appointments?|mental|health|medical"
        r"|treatment|counsel(?:ing|or)?|clinic|prescriptions?)\b",
        re.IGNORECASE,
    )),
    (NoteCategory.WORK_SCHOOL, re.compile(
        r"\b(?:jobs?|work(?:s|ed|ing)?|shifts?|hired?|resumes?|interview(?:s|ed)?|clocked"
        r"|school|class(?:es)?|credits|ged|college|stud(?:y|ied|ying)|employ(?:ed|ment)?|workplace)\b",
        re.IGNORECASE,
    )),
    (NoteCategory.CHORES, re.compile(
        r"\b(?:chores?|dish(?:es)?|trash|laundry|clean(?:s|ed|ing)?|kitchen|inspections?"
        r"|curfew|compliance|rules?|assignments?|dut(?:y|ies)|responsibilit(?:y|ies))\b",
        re.IGNORECASE,
    )),
    (NoteCategory.DEMEANOR, re.compile(
        r"\b(?:attitude|behaviou?r|mood|positive|negative|group|participat(?:e|ed|ing|ion)"
        r"|cooperative|social|interactions?|engage(?:d|ment)?)\b",
        re.IGNORECASE,
    )),
)


def split_sentences(transcript: str, min_chars: int) -> list[str]:
    """Split on terminal punctuation, dropping fragments under ``min_chars``."""
    fragments = (part.strip() for part in _SENTENCE_BREAK.split(transcript or ""))
    return [f for f in fragments if len(f) >= min_chars]


def classify_segment_by_keywords(text: str) -> ClassificationResult:
    best_category = NoteCategory.DEMEANOR
    best_count = 0
    for category, pattern in SEGMENT_PATTERNS:
        count = len(pattern.findall(text))
        if count > best_count:
            best_category, best_count = category, count

    if best_count == 0:
        return ClassificationResult(
            category=NoteCategory.DEMEANOR,
            confidence=NO_MATCH_CONFIDENCE,
            reason="Default classification",
        )
    return ClassificationResult(
        category=best_category,
        confidence=KEYWORD_MATCH_CONFIDENCE,
        reason="Keyword-based classification",
    )


async def _classify_fragment(
    fragment: str,
    provider: ClassificationProvider | None,
) -> tuple[ClassificationResult, bool]:
    redacted = redact(fragment)
    if provider is not None:
        try:
            return await classify_with_provider(redacted, NOTE_SCHEME, provider), True
        except Exception as e:
            logger.warning(
                "segment_provider_failed",
                provider=getattr(provider, "name", type(provider).__name__),
                error=str(e),
            )
    return classify_segment_by_keywords(redacted), False


async def _segment(
    transcript: str,
    provider: ClassificationProvider | None,
    min_chars: int | None,
    min_confidence: float | None,
) -> tuple[list[TranscriptSegment], int]:
    if min_chars is None:
        min_chars = settings.MIN_SEGMENT_CHARS
    if min_confidence is None:
        min_confidence = settings.MIN_SEGMENT_CONFIDENCE

    fragments = split_sentences(transcript, min_chars)
    outcomes = await asyncio.gather(*[_classify_fragment(f, provider) for f in fragments])

    segments: list[TranscriptSegment] = []
    model_count = 0
    for fragment, (result, used_model) in zip(fragments, outcomes):
        model_count += used_model
        gated = apply_confidence_gate(result, NOTE_SCHEME, min_confidence, reason=LOW_CONFIDENCE_REASON)
        segments.append(TranscriptSegment(
            text=fragment,
            category=gated.category,
            confidence=gated.confidence,
            reason=gated.reason,
        ))
    return segments, model_count


async def segment(
    transcript: str,
    *,
    provider: ClassificationProvider | None = None,
    min_chars: int | None = None,
    min_confidence: float | None = None,
) -> list[TranscriptSegment]:
    """Classified sentence segments, in transcript order."""
    segments, _ = await _segment(transcript, provider, min_chars, min_confidence)
    return segments


async def categorize_voice_note(
    transcript: str,
    provider: ClassificationProvider | None = None,
) -> dict:
    segments, model_count = await _segment(transcript, provider, None, None)

    counts = Counter(s.category for s in segments)
    breakdown = ", ".join(
        f"{counts[c]} {CATEGORY_LABELS[c]}" for c in NoteCategory if counts[c]
    )
    method = "model" if model_count == len(segments) and segments else (
        "model with keyword fallback" if model_count else "keyword fallback system"
    )
    if segments:
        summary = f"Voice note categorized into {len(segments)} segment(s) using {method}: {breakdown}."
    else:
        summary = "Voice note too short to categorize."

    logger.info(
        "voice_note_categorized",
        segment_count=len(segments),
        model_segments=model_count,
        transcript_length=len(transcript or ""),
    )
    return {
        "segments": segments,
        "full_transcript": transcript,
        "summary": summary,
    }
