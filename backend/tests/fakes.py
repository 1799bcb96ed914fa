"""In-process stand-ins for providers, speech and media devices."""

import asyncio
import json

from services.errors import PersistenceError, ResourceError
from services.providers import race
from services.speech_io import TranscriptEvent


class FakeProvider:
    """Returns ``response`` (or raises ``error``) after ``delay`` seconds."""

    def __init__(self, name="fake", response="", error=None, delay=0.0):
        self.name = name
        self.response = response
        self.error = error
        self.delay = delay
        self.calls = 0
        self.prompts: list[str] = []

    async def call(self, prompt, timeout=None):
        self.calls += 1
        self.prompts.append(prompt)
        return await race(self._respond(), timeout, self.name)

    async def _respond(self):
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.response


def questions_provider(questions):
    return FakeProvider("questions", response=json.dumps(questions))


def scoring_provider(relevance=80, clarity=90, technical_depth=70, communication=100):
    return FakeProvider(
        "scoring",
        response=json.dumps({
            "relevance": relevance,
            "clarity": clarity,
            "technical_depth": technical_depth,
            "communication": communication,
            "feedback": "Clear and specific.",
        }),
    )


class FakeSpeaker:
    def __init__(self, delay=0.0):
        self.delay = delay
        self.spoken: list[str] = []
        self.stop_calls = 0

    async def speak(self, text):
        self.spoken.append(text)
        if self.delay:
            await asyncio.sleep(self.delay)

    async def stop(self):
        self.stop_calls += 1


class FakeCapture:
    """Plays one script per ``listen()`` call.

    Script items are TranscriptEvents (yielded) or floats (slept). After the
    script runs out the stream stays open and silent, like a live microphone.
    """

    def __init__(self, scripts=None):
        self.scripts = list(scripts or [])
        self.listen_calls = 0
        self.stop_calls = 0

    def listen(self):
        self.listen_calls += 1
        script = self.scripts.pop(0) if self.scripts else []
        return self._play(script)

    async def _play(self, script):
        for item in script:
            if isinstance(item, TranscriptEvent):
                yield item
            else:
                await asyncio.sleep(item)
        await asyncio.Event().wait()

    async def stop(self):
        self.stop_calls += 1


def final(text):
    return TranscriptEvent(text, is_final=True)


def partial(text):
    return TranscriptEvent(text)


class FakeStream:
    def __init__(self):
        self.released = False

    def release(self):
        self.released = True


class FakeMedia:
    def __init__(self, deny=False):
        self.deny = deny
        self.stream = FakeStream()

    async def acquire(self):
        if self.deny:
            raise ResourceError("Permission denied")
        return self.stream


class BrokenStore:
    """Reads work, every write fails."""

    def __init__(self):
        self.attempts = 0

    async def update_application(self, application_id, fields):
        self.attempts += 1
        raise PersistenceError("database unavailable")
