"""Confidence-gated classification.

Text is redacted, then classified by the configured model provider when one
is available, falling back to the keyword tables otherwise. Whatever path
produced the result, anything under the confidence floor is saved under the
scheme's default category.
"""

import enum
import math
from dataclasses import dataclass

import structlog

from houseguide.classification.categories import DocumentCategory, NoteCategory
from houseguide.classification.keywords import (
    DOCUMENT_KEYWORDS,
    NOTE_KEYWORDS,
    KeywordTable,
    classify_by_keywords,
)
from houseguide.classification.redaction import redact
from houseguide.classification.results import ClassificationResult
from houseguide.config import settings
from houseguide.providers.base import ClassificationProvider

logger = structlog.get_logger()


class MalformedResponseError(ValueError):
    pass


@dataclass(frozen=True)
class CategoryScheme:
    name: str
    categories: type[enum.Enum]
    default: enum.Enum
    keywords: KeywordTable

    @property
    def values(self) -> tuple[str, ...]:
        return tuple(member.value for member in self.categories)

    @property
    def default_label(self) -> str:
        return self.default.value.replace("_", " ").title()

    def parse(self, value) -> enum.Enum | None:
        try:
            return self.categories(value)
        except (ValueError, TypeError):
            return None

    def coerce(self, value) -> enum.Enum:
        member = self.parse(value)
        return self.default if member is None else member


NOTE_SCHEME = CategoryScheme(
    name="note",
    categories=NoteCategory,
    default=NoteCategory.GENERAL,
    keywords=NOTE_KEYWORDS,
)

DOCUMENT_SCHEME = CategoryScheme(
    name="document",
    categories=DocumentCategory,
    default=DocumentCategory.GENERAL,
    keywords=DOCUMENT_KEYWORDS,
)


async def classify_with_provider(
    redacted_text: str,
    scheme: CategoryScheme,
    provider: ClassificationProvider,
) -> ClassificationResult:
    """Single model call, validated against the scheme.

    Raises on provider errors and malformed responses. An unknown category is
    not malformed: it is coerced to the default with zero confidence.
    """
    raw = await provider.classify(redacted_text, scheme.values)
    if not isinstance(raw, dict) or "category" not in raw:
        raise MalformedResponseError("response has no category")

    confidence = raw.get("confidence")
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)) or math.isnan(confidence):
        raise MalformedResponseError(f"invalid confidence {confidence!r}")

    category = scheme.parse(raw["category"])
    if category is None:
        logger.warning("classification_unknown_category", scheme=scheme.name, category=str(raw["category"])[:50])
        return ClassificationResult(
            category=scheme.default,
            confidence=0.0,
            reason=f"Model returned unknown category {str(raw['category'])[:50]!r}; saved as {scheme.default_label}.",
        )

    return ClassificationResult(
        category=category,
        confidence=min(1.0, max(0.0, float(confidence))),
        reason=str(raw.get("reason") or "Model classification."),
    )


def apply_confidence_gate(
    result: ClassificationResult,
    scheme: CategoryScheme,
    min_confidence: float,
    reason: str | None = None,
) -> ClassificationResult:
    if result.category is None:
        return ClassificationResult(
            category=scheme.default,
            confidence=0.0,
            reason=f"{result.reason.rstrip('.')}; saved as {scheme.default_label}.",
        )
    if result.category == scheme.default or result.confidence >= min_confidence:
        return result

    demoted = scheme.coerce(result.category)
    return ClassificationResult(
        category=scheme.default,
        confidence=result.confidence,
        reason=reason or (
            f"Low confidence ({result.confidence:.2f}) for {demoted.value}; "
            f"saved as {scheme.default_label}."
        ),
        demoted_from=demoted.value,
    )


async def classify(
    text: str,
    *,
    scheme: CategoryScheme = NOTE_SCHEME,
    provider: ClassificationProvider | None = None,
    min_chars: int | None = None,
    min_confidence: float | None = None,
) -> ClassificationResult:
    """Classify free text into ``scheme``. Never raises on provider failure."""
    if min_chars is None:
        min_chars = settings.MIN_CLASSIFY_CHARS
    if min_confidence is None:
        min_confidence = settings.MIN_CLASSIFY_CONFIDENCE

    redacted = redact(text)
    if len(redacted.strip()) < min_chars:
        return ClassificationResult(category=None, confidence=0.0, reason="Text too short to classify.")

    result: ClassificationResult | None = None
    if provider is not None:
        try:
            result = await classify_with_provider(redacted, scheme, provider)
        except Exception as e:
            logger.warning(
                "classification_provider_failed",
                scheme=scheme.name,
                provider=getattr(provider, "name", type(provider).__name__),
                error=str(e),
            )

    if result is None:
        result = classify_by_keywords(redacted, scheme.keywords)

    gated = apply_confidence_gate(result, scheme, min_confidence)
    logger.info(
        "text_classified",
        scheme=scheme.name,
        category=gated.category.value if gated.category is not None else None,
        confidence=round(gated.confidence, 3),
        demoted_from=gated.demoted_from,
        text_length=len(redacted),
    )
    return gated
