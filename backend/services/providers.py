"""Language-model provider contract, timeout race, and ordered fallback chain.

A provider is anything with a ``name`` and an async ``call(prompt, timeout)``
returning the response text or raising ProviderError. The chain tries
providers in order and returns the first response its parser accepts.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Protocol, TypeVar

from config import settings
from services.errors import ProviderError, ProvidersExhaustedError, ProviderTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Calls that lost the race keep running; hold a reference until they settle
_abandoned: set[asyncio.Future] = set()


class TextProvider(Protocol):
    name: str

    async def call(self, prompt: str, timeout: float | None = None) -> str:
        ...


def _discard(task: asyncio.Future) -> None:
    _abandoned.discard(task)
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug("Abandoned call finished with error: %s", exc)
    else:
        logger.debug("Abandoned call finished late, result discarded")


def _abandon(task: asyncio.Future) -> None:
    _abandoned.add(task)
    task.add_done_callback(_discard)


async def race(awaitable: Awaitable[T], timeout: float | None, name: str = "provider") -> T:
    """Wait for ``awaitable`` up to ``timeout`` seconds; first to settle wins.

    The losing call is abandoned rather than cancelled: it may still finish,
    but nobody awaits it again and its outcome is dropped.
    """
    task = asyncio.ensure_future(awaitable)
    try:
        done, _ = await asyncio.wait({task}, timeout=timeout)
    except asyncio.CancelledError:
        _abandon(task)
        raise
    if task in done:
        return task.result()
    _abandon(task)
    raise ProviderTimeoutError(f"{name} timed out after {timeout:g}s", provider=name)


async def call_blocking(
    name: str,
    fn: Callable[..., T],
    *args: Any,
    timeout: float | None = None,
) -> T:
    """Run a blocking SDK/HTTP call in a worker thread, raced against ``timeout``."""
    try:
        return await race(asyncio.to_thread(fn, *args), timeout, name)
    except ProviderError:
        raise
    except Exception as e:
        raise ProviderError(f"{name} failed: {e}", provider=name) from e


class ProviderChain:
    """Ordered provider fallback. Short-circuits on the first parseable response."""

    def __init__(self, providers: Sequence[TextProvider], timeout: float | None = None) -> None:
        self.providers = list(providers)
        self.timeout = timeout if timeout is not None else settings.provider_timeout_seconds

    def __len__(self) -> int:
        return len(self.providers)

    async def first_valid(self, prompt: str, parse: Callable[[str], T]) -> T:
        """Return ``parse(response)`` for the first provider that succeeds.

        A ProviderError (network, timeout, empty output) or a ValueError from
        ``parse`` (malformed output) moves on to the next provider.
        """
        failures: dict[str, Exception] = {}
        total = len(self.providers)

        for i, provider in enumerate(self.providers, start=1):
            logger.info("Trying provider %d/%d: %s", i, total, provider.name)
            try:
                text = await provider.call(prompt, self.timeout)
                result = parse(text)
            except ProviderError as e:
                logger.warning("Provider %s failed: %s", provider.name, e)
                failures[provider.name] = e
                continue
            except ValueError as e:
                logger.warning("Provider %s returned malformed output: %s", provider.name, e)
                failures[provider.name] = ProviderError(
                    f"Malformed response: {e}", provider=provider.name
                )
                continue

            logger.info("Success with provider: %s", provider.name)
            return result

        raise ProvidersExhaustedError(failures)


def default_providers() -> list[TextProvider]:
    """Configured providers in fallback order: Gemini, then each OpenRouter model."""
    from services.gemini_client import GeminiProvider
    from services.openrouter_client import OpenRouterProvider

    providers: list[TextProvider] = []
    if settings.gemini_api_key:
        providers.append(GeminiProvider())
    else:
        logger.warning("No GEMINI_API_KEY set - Gemini provider disabled")

    if settings.openrouter_api_key:
        providers.extend(OpenRouterProvider(model) for model in settings.openrouter_models)
    else:
        logger.warning("No OPENROUTER_API_KEY set - OpenRouter providers disabled")
    return providers


def default_chain() -> ProviderChain:
    return ProviderChain(default_providers())
