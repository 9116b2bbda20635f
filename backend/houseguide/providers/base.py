import json
import re
from abc import ABC, abstractmethod
from collections.abc import Sequence

import structlog

logger = structlog.get_logger()


class ClassificationProvider(ABC):
    name: str

    @abstractmethod
    async def classify(self, text: str, categories: Sequence[str]) -> dict:
        """Return ``{"category": str, "confidence": float, "reason": str}``."""


class GenerationProvider(ABC):
    name: str

    @abstractmethod
    async def generate(self, structured_input: dict, template: str) -> str:
        pass


def parse_json_object(raw: str) -> dict:
    """Extract a JSON object from model output (3-tier parsing).

    Returns ``{}`` when nothing parses.
    """
    # Direct parse
    try:
        parsed = json.loads(raw)
        if isinstance(parsed, dict):
            return parsed
    except (json.JSONDecodeError, TypeError):
        pass

    # Markdown code block
    code_match = re.search(r"```(?:json)?\s*\n?(.*?)```", raw or "", re.DOTALL)
    if code_match:
        try:
            parsed = json.loads(code_match.group(1).strip())
            if isinstance(parsed, dict):
                return parsed
        except json.JSONDecodeError:
            pass

    # Bare JSON object
    obj_match = re.search(r"\{.*\}", raw or "", re.DOTALL)
    if obj_match:
        try:
            parsed = json.loads(obj_match.group())
            if isinstance(parsed, dict):
                return parsed
        except json.JSONDecodeError:
            pass

    logger.warning("provider_parse_failed", raw_length=len(raw or ""))
    return {}
