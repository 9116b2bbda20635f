"""Local model provider over the Ollama HTTP API using httpx."""

from collections.abc import Sequence

import httpx
import structlog

from houseguide.config import settings
from houseguide.providers.base import ClassificationProvider, GenerationProvider, parse_json_object
from houseguide.providers.prompts import (
    REPORT_SYSTEM_PROMPT,
    build_classification_prompt,
    build_report_prompt,
)

logger = structlog.get_logger()


class OllamaProvider(ClassificationProvider, GenerationProvider):
    name = "ollama"

    def __init__(
        self,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
    ):
        self.base_url = (base_url or settings.OLLAMA_BASE_URL).rstrip("/")
        self.model = model or settings.OLLAMA_MODEL
        self.timeout = timeout or settings.LLM_TIMEOUT_SECONDS

    async def _generate(self, prompt: str, *, temperature: float, json_format: bool = False) -> str:
        body: dict = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {"temperature": temperature, "num_predict": 2000},
        }
        if json_format:
            body["format"] = "json"

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.post(f"{self.base_url}/api/generate", json=body)
            resp.raise_for_status()
            data = resp.json()
        return (data.get("response") or "").strip()

    async def classify(self, text: str, categories: Sequence[str]) -> dict:
        raw = await self._generate(
            build_classification_prompt(text, categories),
            temperature=0.1,
            json_format=True,
        )
        return parse_json_object(raw)

    async def generate(self, structured_input: dict, template: str) -> str:
        prompt = (
            f"{REPORT_SYSTEM_PROMPT}\n\n"
            f"{build_report_prompt(structured_input, template)}\n\n"
            "REPORT:"
        )
        return await self._generate(prompt, temperature=0.3)
