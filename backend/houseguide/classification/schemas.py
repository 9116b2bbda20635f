from uuid import UUID

from pydantic import BaseModel, Field

from houseguide.classification.results import ClassificationResult, TranscriptSegment


def _value(category) -> str | None:
    return getattr(category, "value", category)


class ClassifyRequest(BaseModel):
    text: str = Field(..., max_length=20000)


class ClassificationResponse(BaseModel):
    category: str | None
    confidence: float
    reason: str
    demoted_from: str | None = None

    @classmethod
    def from_result(cls, result: ClassificationResult) -> "ClassificationResponse":
        return cls(
            category=_value(result.category),
            confidence=result.confidence,
            reason=result.reason,
            demoted_from=result.demoted_from,
        )


class VoiceNoteRequest(BaseModel):
    transcript: str = Field(..., max_length=50000)
    resident_id: UUID


class SegmentResponse(BaseModel):
    text: str
    category: str
    confidence: float
    reason: str

    @classmethod
    def from_segment(cls, segment: TranscriptSegment) -> "SegmentResponse":
        return cls(
            text=segment.text,
            category=_value(segment.category),
            confidence=segment.confidence,
            reason=segment.reason,
        )


class VoiceNoteResponse(BaseModel):
    segments: list[SegmentResponse]
    full_transcript: str
    summary: str
    resident_id: UUID
