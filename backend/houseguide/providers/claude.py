"""Anthropic-backed providers.

Report generation is a direct async SDK call; note classification runs
through the CrewAI classifier agent.
"""

from collections.abc import Sequence

import structlog
from anthropic import AsyncAnthropic

from houseguide.config import settings
from houseguide.providers.base import ClassificationProvider, GenerationProvider
from houseguide.providers.prompts import REPORT_SYSTEM_PROMPT, build_report_prompt

logger = structlog.get_logger()

_client: AsyncAnthropic | None = None


def _get_client() -> AsyncAnthropic:
    global _client
    if _client is None:
        # Callers fall back to deterministic output on failure; no retries
        _client = AsyncAnthropic(
            api_key=settings.ANTHROPIC_API_KEY,
            timeout=settings.LLM_TIMEOUT_SECONDS,
            max_retries=0,
        )
    return _client


async def complete(
    system_prompt: str,
    user_prompt: str,
    temperature: float = 0.3,
    max_tokens: int = 2000,
) -> str:
    """Single async LLM call returning the concatenated text blocks."""
    client = _get_client()
    response = await client.messages.create(
        model=settings.ANTHROPIC_MODEL,
        max_tokens=max_tokens,
        temperature=temperature,
        system=system_prompt,
        messages=[{"role": "user", "content": user_prompt}],
    )
    return "".join(
        block.text for block in response.content if getattr(block, "type", "") == "text"
    ).strip()


class AnthropicGenerationProvider(GenerationProvider):
    name = "anthropic"

    async def generate(self, structured_input: dict, template: str) -> str:
        return await complete(REPORT_SYSTEM_PROMPT, build_report_prompt(structured_input, template))


class CrewClassificationProvider(ClassificationProvider):
    name = "crewai"

    async def classify(self, text: str, categories: Sequence[str]) -> dict:
        from houseguide.agents.note_classifier.crew import NoteClassifierCrew

        return await NoteClassifierCrew(text, categories).run()
