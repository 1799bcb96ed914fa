"""Speech and media ports used by the voice interview.

Playback, capture and device access are platform concerns; the interview
only depends on these protocols. ElevenLabs synthesis is the one concrete
provider shipped here.
"""

import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Protocol

import requests

from config import settings
from services.errors import ProviderError
from services.providers import call_blocking

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TranscriptEvent:
    """Incremental speech-to-text output. ``is_final`` marks end of utterance."""
    text: str
    is_final: bool = False


class Speaker(Protocol):
    async def speak(self, text: str) -> None:
        """Return once playback has finished (or failed)."""
        ...

    async def stop(self) -> None:
        ...


class SpeechCapture(Protocol):
    def listen(self) -> AsyncIterator[TranscriptEvent]:
        """Start capturing; yields partial and final transcripts until stopped."""
        ...

    async def stop(self) -> None:
        ...


class MediaStream(Protocol):
    def release(self) -> None:
        ...


class MediaDevices(Protocol):
    async def acquire(self) -> MediaStream:
        """Camera + microphone. Raises ResourceError/PermissionError when denied."""
        ...


class AudioPlayer(Protocol):
    async def play(self, audio: bytes) -> None:
        ...

    async def stop(self) -> None:
        ...


class Synthesizer(Protocol):
    async def synthesize(self, text: str) -> bytes:
        ...


class ElevenLabsSynthesizer:
    name = "elevenlabs"

    def __init__(self, voice_id: str | None = None, timeout: float | None = None) -> None:
        self.voice_id = voice_id or settings.elevenlabs_voice_id
        self.timeout = timeout if timeout is not None else settings.provider_timeout_seconds

    async def synthesize(self, text: str) -> bytes:
        return await call_blocking(self.name, self._post, text, timeout=self.timeout)

    def _post(self, text: str) -> bytes:
        if not settings.elevenlabs_api_key:
            raise ProviderError("No ELEVENLABS_API_KEY set", provider=self.name)

        response = requests.post(
            f"{settings.elevenlabs_url}/{self.voice_id}",
            headers={
                "Accept": "audio/mpeg",
                "Content-Type": "application/json",
                "xi-api-key": settings.elevenlabs_api_key,
            },
            json={
                "text": text,
                "model_id": settings.elevenlabs_model,
                "voice_settings": {"stability": 0.5, "similarity_boost": 0.75},
            },
            timeout=self.timeout,
        )
        if not response.ok:
            if response.status_code == 401:
                logger.error("ElevenLabs rejected the API key (401)")
            raise ProviderError(
                f"HTTP {response.status_code}: {response.text[:200]}", provider=self.name
            )
        if not response.content:
            raise ProviderError("Empty audio response", provider=self.name)
        return response.content


class SynthesizedSpeaker:
    """Synthesise then play; hand the text to ``fallback`` if either step fails.

    With no fallback a failed question is simply not voiced and ``speak``
    returns, so the interview never waits on a broken voice.
    """

    def __init__(
        self,
        synthesizer: Synthesizer,
        player: AudioPlayer,
        fallback: Speaker | None = None,
    ) -> None:
        self.synthesizer = synthesizer
        self.player = player
        self.fallback = fallback

    async def speak(self, text: str) -> None:
        try:
            audio = await self.synthesizer.synthesize(text)
            await self.player.play(audio)
            return
        except Exception as e:
            logger.warning("TTS failed (%s), using fallback speech", e)

        if self.fallback is not None:
            try:
                await self.fallback.speak(text)
            except Exception as e:
                logger.warning("Fallback speech failed: %s", e)

    async def stop(self) -> None:
        await self.player.stop()
        if self.fallback is not None:
            await self.fallback.stop()
