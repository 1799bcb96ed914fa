from types import SimpleNamespace

import pytest

from config import settings
from services import gemini_client
from services.errors import ProviderError
from services.gemini_client import GeminiProvider


class _Models:
    def __init__(self, text):
        self.text = text
        self.requests = []

    def generate_content(self, model, contents, config):
        self.requests.append((model, contents, config))
        return SimpleNamespace(text=self.text)


def _client(text):
    return SimpleNamespace(models=_Models(text))


@pytest.mark.asyncio
async def test_returns_generated_text(monkeypatch):
    client = _client('\n{"skills": ["Rust"]}\n')
    monkeypatch.setattr(gemini_client, "get_client", lambda: client)

    provider = GeminiProvider(model="gemini-test", temperature=0.1)
    assert provider.name == "gemini:gemini-test"
    assert await provider.call("Extract", timeout=1.0) == '{"skills": ["Rust"]}'

    model, contents, config = client.models.requests[0]
    assert model == "gemini-test"
    assert contents == "Extract"
    assert config.temperature == 0.1


@pytest.mark.asyncio
@pytest.mark.parametrize("text", [None, "", "short"])
async def test_empty_or_short_response(monkeypatch, text):
    monkeypatch.setattr(gemini_client, "get_client", lambda: _client(text))
    with pytest.raises(ProviderError):
        await GeminiProvider().call("Extract", timeout=1.0)


@pytest.mark.asyncio
async def test_missing_key(monkeypatch):
    monkeypatch.setattr(settings, "gemini_api_key", "")
    with pytest.raises(ProviderError, match="GEMINI_API_KEY"):
        await GeminiProvider().call("Extract", timeout=1.0)


def test_default_model_from_settings():
    assert GeminiProvider().model == settings.gemini_model
