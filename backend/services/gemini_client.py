"""Google Gemini API wrapper exposed as a text provider."""

import logging

from google import genai
from google.genai import types

from config import settings
from services.errors import ProviderError
from services.providers import call_blocking

logger = logging.getLogger(__name__)

_client: genai.Client | None = None


def get_client() -> genai.Client | None:
    global _client
    if not settings.gemini_api_key:
        return None
    if _client is None:
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


class GeminiProvider:
    def __init__(self, model: str | None = None, temperature: float = 0.3) -> None:
        self.model = model or settings.gemini_model
        self.temperature = temperature
        self.name = f"gemini:{self.model}"

    async def call(self, prompt: str, timeout: float | None = None) -> str:
        return await call_blocking(self.name, self._generate, prompt, timeout=timeout)

    def _generate(self, prompt: str) -> str:
        client = get_client()
        if client is None:
            raise ProviderError("No GEMINI_API_KEY set", provider=self.name)

        response = client.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                temperature=self.temperature,
                max_output_tokens=4096,
            ),
        )
        text = (response.text or "").strip()
        if len(text) < settings.min_response_chars:
            raise ProviderError("Empty or truncated response", provider=self.name)
        return text
