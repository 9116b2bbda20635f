from dataclasses import dataclass


@dataclass(frozen=True)
class ClassificationResult:
    category: str | None
    confidence: float
    reason: str
    # Category the confidence gate replaced, if any
    demoted_from: str | None = None


@dataclass(frozen=True)
class TranscriptSegment:
    text: str
    category: str
    confidence: float
    reason: str
