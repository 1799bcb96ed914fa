"""OpenRouter chat-completions client exposed as a text provider."""

import logging

import requests

from config import settings
from services.errors import ProviderError
from services.providers import call_blocking

logger = logging.getLogger(__name__)


class OpenRouterProvider:
    def __init__(
        self,
        model: str,
        system_prompt: str | None = None,
        temperature: float = 0.3,
        max_tokens: int = 1500,
    ) -> None:
        self.model = model
        self.system_prompt = system_prompt
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.name = f"openrouter:{model}"

    async def call(self, prompt: str, timeout: float | None = None) -> str:
        return await call_blocking(self.name, self._post, prompt, timeout, timeout=timeout)

    def _post(self, prompt: str, timeout: float | None) -> str:
        if not settings.openrouter_api_key:
            raise ProviderError("No OPENROUTER_API_KEY set", provider=self.name)

        messages = []
        if self.system_prompt:
            messages.append({"role": "system", "content": self.system_prompt})
        messages.append({"role": "user", "content": prompt})

        response = requests.post(
            settings.openrouter_url,
            headers={
                "Authorization": f"Bearer {settings.openrouter_api_key}",
                "Content-Type": "application/json",
                "X-Title": "Candidate Evaluation",
            },
            json={
                "model": self.model,
                "messages": messages,
                "temperature": self.temperature,
                "max_tokens": self.max_tokens,
            },
            timeout=timeout,
        )

        if not response.ok:
            if response.status_code == 401:
                logger.error("OpenRouter rejected the API key (401)")
            raise ProviderError(
                f"HTTP {response.status_code}: {response.text[:200]}", provider=self.name
            )

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ProviderError(f"Unexpected response shape: {e}", provider=self.name) from e

        content = (content or "").strip()
        if len(content) < settings.min_response_chars:
            raise ProviderError("Empty or truncated response", provider=self.name)
        return content
