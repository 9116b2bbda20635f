import httpx
import pytest

from houseguide.config import settings
from houseguide.providers import registry
from houseguide.providers.base import parse_json_object
from houseguide.providers.claude import AnthropicGenerationProvider, CrewClassificationProvider
from houseguide.providers.ollama import OllamaProvider


def test_parse_direct_json():
    assert parse_json_object('{"category": "chores", "confidence": 0.8}') == {"category": "chores", "confidence": 0.8}


def test_parse_markdown_block():
    raw = 'Here you go:\n```json\n{"category": "medical", "confidence": 0.7}\n```'
    assert parse_json_object(raw)["category"] == "medical"


def test_parse_embedded_object():
    raw = 'Sure! {"category": "sponsor", "confidence": 0.9} hope that helps'
    assert parse_json_object(raw)["category"] == "sponsor"


@pytest.mark.parametrize("raw", ["", "not json at all", "[1, 2, 3]", None])
def test_parse_failure_returns_empty(raw):
    assert parse_json_object(raw) == {}


def test_registry_none(monkeypatch):
    monkeypatch.setattr(settings, "AI_PROVIDER", "none")
    assert registry.get_classification_provider() is None
    assert registry.get_generation_provider() is None


def test_registry_anthropic_requires_key(monkeypatch):
    monkeypatch.setattr(settings, "AI_PROVIDER", "anthropic")
    monkeypatch.setattr(settings, "ANTHROPIC_API_KEY", "")
    assert registry.get_classification_provider() is None

    monkeypatch.setattr(settings, "ANTHROPIC_API_KEY", "sk-test")
    assert isinstance(registry.get_classification_provider(), CrewClassificationProvider)
    assert isinstance(registry.get_generation_provider(), AnthropicGenerationProvider)


def test_registry_ollama(monkeypatch):
    monkeypatch.setattr(settings, "AI_PROVIDER", "Ollama")
    assert isinstance(registry.get_classification_provider(), OllamaProvider)
    assert isinstance(registry.get_generation_provider(), OllamaProvider)


def test_registry_unknown_provider(monkeypatch):
    monkeypatch.setattr(settings, "AI_PROVIDER", "skynet")
    assert registry.get_generation_provider() is None


@pytest.mark.asyncio
async def test_ollama_classify_posts_to_generate(monkeypatch):
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        return httpx.Response(200, json={"response": '{"category": "chores", "confidence": 0.8, "reason": "dishes"}'})

    real_client = httpx.AsyncClient

    def client_factory(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(handler)
        return real_client(*args, **kwargs)

    monkeypatch.setattr(httpx, "AsyncClient", client_factory)

    provider = OllamaProvider(base_url="http://ollama.test/", model="m", timeout=5)
    result = await provider.classify("Did the dishes", ["chores", "general"])

    assert captured["url"] == "http://ollama.test/api/generate"
    assert result == {"category": "chores", "confidence": 0.8, "reason": "dishes"}


@pytest.mark.asyncio
async def test_ollama_http_error_raises(monkeypatch):
    real_client = httpx.AsyncClient

    def client_factory(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(lambda request: httpx.Response(500))
        return real_client(*args, **kwargs)

    monkeypatch.setattr(httpx, "AsyncClient", client_factory)

    with pytest.raises(httpx.HTTPStatusError):
        await OllamaProvider(base_url="http://ollama.test").generate({"resident": {"name": "John D."}}, "T")
