import os

from crewai import LLM

from houseguide.config import settings

# CrewAI's native Anthropic provider reads from the env var directly
if settings.ANTHROPIC_API_KEY:
    os.environ["ANTHROPIC_API_KEY"] = settings.ANTHROPIC_API_KEY


def get_classifier_llm() -> LLM:
    return LLM(
        model=f"anthropic/{settings.ANTHROPIC_MODEL}",
        api_key=settings.ANTHROPIC_API_KEY,
        temperature=0.1,
        max_tokens=512,
        timeout=settings.LLM_TIMEOUT_SECONDS,
    )
