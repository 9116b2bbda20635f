import pytest

from houseguide.classification.categories import NoteCategory
from houseguide.classification.segments import (
    LOW_CONFIDENCE_REASON,
    categorize_voice_note,
    classify_segment_by_keywords,
    segment,
    split_sentences,
)
from houseguide.providers.base import ClassificationProvider


class ScriptedProvider(ClassificationProvider):
    """Answers by looking up a keyword in the fragment."""

    name = "scripted"

    def __init__(self, answers: dict[str, dict], fail_on: str | None = None):
        self.answers = answers
        self.fail_on = fail_on

    async def classify(self, text, categories):
        if self.fail_on and self.fail_on in text:
            raise RuntimeError("provider down")
        for needle, answer in self.answers.items():
            if needle in text:
                return answer
        return {"category": "general", "confidence": 0.9, "reason": "none"}


def test_split_sentences_drops_short_fragments():
    assert split_sentences("Hi. Met with sponsor on Tuesday! Ok?", 11) == ["Met with sponsor on Tuesday"]


def test_split_sentences_empty():
    assert split_sentences("", 11) == []
    assert split_sentences(None, 11) == []


def test_keyword_segment_default_is_demeanor():
    result = classify_segment_by_keywords("Nothing much to report today")
    assert result.category == NoteCategory.DEMEANOR
    assert result.confidence == 0.3


@pytest.mark.asyncio
async def test_sponsor_and_chores_transcript():
    segments = await segment("Met with sponsor on Tuesday. Cleaned the kitchen thoroughly.")
    assert [s.text for s in segments] == ["Met with sponsor on Tuesday", "Cleaned the kitchen thoroughly"]
    assert [s.category for s in segments] == [NoteCategory.SPONSOR, NoteCategory.CHORES]
    assert all(s.confidence == 0.7 for s in segments)


@pytest.mark.asyncio
async def test_unmatched_fragment_is_demoted_to_general():
    segments = await segment("Nothing much to report today.")
    assert len(segments) == 1
    assert segments[0].category == NoteCategory.GENERAL
    assert segments[0].reason == LOW_CONFIDENCE_REASON


@pytest.mark.asyncio
async def test_segments_keep_transcript_order_with_provider():
    provider = ScriptedProvider({
        "doctor": {"category": "medical", "confidence": 0.95, "reason": "appointment"},
        "shift": {"category": "work_school", "confidence": 0.4, "reason": "unsure"},
    })
    transcript = "Saw the doctor this morning. Worked a double shift. Helped with the dishes after dinner."
    segments = await segment(transcript, provider=provider)

    assert [s.text for s in segments] == [
        "Saw the doctor this morning",
        "Worked a double shift",
        "Helped with the dishes after dinner",
    ]
    assert segments[0].category == NoteCategory.MEDICAL
    assert segments[1].category == NoteCategory.GENERAL
    assert segments[1].reason == LOW_CONFIDENCE_REASON
    assert segments[2].category == NoteCategory.GENERAL


@pytest.mark.asyncio
async def test_provider_failure_on_one_fragment_uses_keywords():
    provider = ScriptedProvider(
        {"sponsor": {"category": "sponsor", "confidence": 0.9, "reason": "ok"}},
        fail_on="kitchen",
    )
    segments = await segment("Met with sponsor on Tuesday. Cleaned the kitchen thoroughly.", provider=provider)
    assert segments[0].category == NoteCategory.SPONSOR
    assert segments[0].confidence == 0.9
    assert segments[1].category == NoteCategory.CHORES
    assert segments[1].confidence == 0.7


@pytest.mark.asyncio
async def test_categorize_voice_note_summary():
    transcript = "Met with sponsor on Tuesday. Cleaned the kitchen thoroughly."
    outcome = await categorize_voice_note(transcript)
    assert outcome["full_transcript"] == transcript
    assert len(outcome["segments"]) == 2
    assert outcome["summary"].startswith("Voice note categorized into 2 segment(s) using keyword fallback system")


@pytest.mark.asyncio
async def test_categorize_voice_note_too_short():
    outcome = await categorize_voice_note("Ok. Fine.")
    assert outcome["segments"] == []
    assert outcome["summary"] == "Voice note too short to categorize."


@pytest.mark.asyncio
async def test_resident_note_transcript():
    segments = await segment("John met with his sponsor today. He also cleaned the kitchen without being asked.")
    assert [s.text for s in segments] == [
        "John met with his sponsor today",
        "He also cleaned the kitchen without being asked",
    ]
    assert [s.category for s in segments] == [NoteCategory.SPONSOR, NoteCategory.CHORES]
