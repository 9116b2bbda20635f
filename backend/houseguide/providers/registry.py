"""Provider selection. ``None`` means the capability is not configured."""

import structlog

from houseguide.config import settings
from houseguide.providers.base import ClassificationProvider, GenerationProvider
from houseguide.providers.claude import AnthropicGenerationProvider, CrewClassificationProvider
from houseguide.providers.ollama import OllamaProvider

logger = structlog.get_logger()


def _provider_name() -> str:
    name = (settings.AI_PROVIDER or "none").strip().lower()
    if name not in ("anthropic", "ollama", "none"):
        logger.warning("unknown_ai_provider", provider=name)
        return "none"
    return name


def get_classification_provider() -> ClassificationProvider | None:
    name = _provider_name()
    if name == "anthropic" and settings.ANTHROPIC_API_KEY:
        return CrewClassificationProvider()
    if name == "ollama":
        return OllamaProvider()
    return None


def get_generation_provider() -> GenerationProvider | None:
    name = _provider_name()
    if name == "anthropic" and settings.ANTHROPIC_API_KEY:
        return AnthropicGenerationProvider()
    if name == "ollama":
        return OllamaProvider()
    return None
