"""Voice interview driver.

Owns the only mutable reference to the session state and feeds events
(playback end, transcripts, scores, clock ticks) through the pure
transitions in ``state_machine``. The conversation loop and the wall clock
run as two tasks on one event loop; the clock always wins.

Every async step remembers the state's ``generation`` when it starts and
drops its result if the session has moved on in the meantime.
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from contextlib import AsyncExitStack
from datetime import datetime, timezone

from config import settings
from models.candidate import CandidateProfile
from models.interview import InterviewData, InterviewPhase, InterviewReport, InterviewSessionState
from models.job import JobDescriptor
from services.application_store import ApplicationStore
from services.errors import PersistenceError
from services.interview import state_machine as sm
from services.interview.scoring import build_report
from services.judge import AIJudge
from services.speech_io import MediaDevices, MediaStream, Speaker, SpeechCapture, TranscriptEvent

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


async def _next_event(events: AsyncIterator[TranscriptEvent]) -> TranscriptEvent:
    return await events.__anext__()


class InterviewSession:
    """One screening interview for one application.

    ``clock_interval`` is the real time that elapses per budget second.
    """

    def __init__(
        self,
        application_id: str,
        profile: CandidateProfile,
        job: JobDescriptor,
        *,
        judge: AIJudge,
        speaker: Speaker,
        capture: SpeechCapture,
        media: MediaDevices,
        store: ApplicationStore,
        duration_seconds: int | None = None,
        answer_ceiling: float | None = None,
        silence_timeout: float | None = None,
        clock_interval: float = 1.0,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.application_id = application_id
        self.profile = profile
        self.job = job
        self._judge = judge
        self._speaker = speaker
        self._capture = capture
        self._media = media
        self._store = store
        self._answer_ceiling = (
            answer_ceiling if answer_ceiling is not None else settings.answer_ceiling_seconds
        )
        self._silence_timeout = (
            silence_timeout if silence_timeout is not None else settings.silence_timeout_seconds
        )
        self._clock_interval = clock_interval
        self._now = now

        self._state = InterviewSessionState.create(
            duration_seconds if duration_seconds is not None else settings.interview_duration_seconds
        )
        self._resources = AsyncExitStack()
        self._conversation: asyncio.Task | None = None
        self._clock: asyncio.Task | None = None
        self._done = asyncio.Event()
        self._finalized = False
        self.persistence_error: PersistenceError | None = None

    @property
    def state(self) -> InterviewSessionState:
        return self._state

    def report(self) -> InterviewReport:
        return build_report(self._state)

    async def __aenter__(self) -> "InterviewSession":
        await self.prepare()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._state.interview_status == "in_progress":
            await self.end("session_closed")
        else:
            await self._teardown()

    # ------------------------------------------------------------------
    # State handling
    # ------------------------------------------------------------------

    def _apply(self, new_state: InterviewSessionState) -> None:
        old = self._state
        self._state = new_state
        if old.phase is not new_state.phase:
            logger.info(
                "Interview %s: %s -> %s (question %d/%d)",
                self.application_id,
                old.phase.value,
                new_state.phase.value,
                new_state.current_question_index + 1,
                len(new_state.questions),
            )

    def _is_stale(self, generation: int) -> bool:
        return self._state.generation != generation

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def prepare(self) -> None:
        """Acquire camera/microphone and generate the question set."""
        self._apply(sm.request_media(self._state))

        granted = False
        try:
            stream = await self._media.acquire()
        except Exception as e:
            logger.warning("Camera access denied (%s). Continuing with audio-only interview.", e)
        else:
            granted = True
            self._resources.callback(self._release_media, stream)

        # Unwinds in reverse: stop playback, stop capture, then release media
        self._resources.push_async_callback(self._stop_quietly, self._capture.stop, "capture")
        self._resources.push_async_callback(self._stop_quietly, self._speaker.stop, "playback")
        self._apply(sm.media_resolved(self._state, granted))

        questions = await self._judge.generate_questions(self.profile, self.job)
        self._apply(sm.load_questions(self._state, questions))

    async def run(self) -> InterviewSessionState:
        """Start the interview and wait until it reaches a terminal state.

        Raises PersistenceError, after the session has terminated, if the
        results could not be written back.
        """
        self._apply(sm.start(self._state))
        self._clock = asyncio.create_task(self._run_clock())
        self._conversation = asyncio.create_task(self._converse())
        await self._done.wait()
        if self.persistence_error is not None:
            raise self.persistence_error
        return self._state

    async def end(self, reason: str = sm.END_REQUESTED) -> InterviewSessionState:
        """Terminate now with whatever answers exist. A second call is a no-op."""
        if self._state.is_terminal:
            return self._state
        self._apply(sm.terminate(self._state, reason))
        await self._finalize()
        if self.persistence_error is not None:
            raise self.persistence_error
        return self._state

    async def expire(self) -> InterviewSessionState:
        """Force the wall clock to zero."""
        if self._state.is_terminal:
            return self._state
        self._apply(sm.tick(self._state, self._state.remaining_seconds))
        await self._finalize()
        if self.persistence_error is not None:
            raise self.persistence_error
        return self._state

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    async def _run_clock(self) -> None:
        while not self._state.is_terminal:
            await asyncio.sleep(self._clock_interval)
            if self._state.is_terminal:
                return
            self._apply(sm.tick(self._state))
            if self._state.is_terminal:
                logger.info("Interview %s: time expired", self.application_id)
                await self._finalize()

    async def _converse(self) -> None:
        try:
            while not self._state.is_terminal:
                state = self._state
                generation = state.generation

                if state.phase is InterviewPhase.SPEAKING:
                    await self._speaker.speak(state.current_question)
                    if self._is_stale(generation):
                        return
                    self._apply(sm.playback_finished(self._state))

                elif state.phase is InterviewPhase.RECORDING:
                    answer = await self._capture_answer(generation)
                    if self._is_stale(generation):
                        return
                    self._apply(sm.recording_finished(self._state, answer))

                elif state.phase is InterviewPhase.ANALYZING:
                    analysis = await self._judge.score_answer(
                        state.current_question, state.pending_answer, self.job, self.profile
                    )
                    if self._is_stale(generation):
                        return
                    self._apply(sm.answer_scored(self._state, analysis, self._now()))

                else:
                    return

            await self._finalize()
        except Exception:
            logger.exception("Interview %s: conversation loop failed", self.application_id)
            if not self._state.is_terminal:
                self._apply(sm.terminate(self._state, "error"))
            await self._finalize()

    async def _capture_answer(self, generation: int) -> str:
        """Listen until a final transcript, silence after speech, or the ceiling."""
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self._answer_ceiling
        partial = ""
        final = ""
        events = self._capture.listen()

        try:
            while True:
                remaining = deadline - loop.time()
                if remaining <= 0:
                    logger.info("Answer ceiling reached")
                    break
                wait = min(remaining, self._silence_timeout) if partial.strip() else remaining
                try:
                    event = await asyncio.wait_for(_next_event(events), wait)
                except StopAsyncIteration:
                    break
                except asyncio.TimeoutError:
                    if partial.strip():
                        logger.info("Silence after speech, closing answer")
                    break

                if self._is_stale(generation):
                    break
                if event.is_final:
                    final = event.text
                    break
                partial = event.text
                self._apply(sm.transcript_updated(self._state, partial))
        finally:
            aclose = getattr(events, "aclose", None)
            if aclose is not None:
                await aclose()
            await self._stop_quietly(self._capture.stop, "capture")

        return (final.strip() or partial).strip()

    # ------------------------------------------------------------------
    # Teardown and persistence
    # ------------------------------------------------------------------

    async def _finalize(self) -> None:
        """Runs once per session, from whichever exit path gets here first."""
        if self._finalized:
            return
        self._finalized = True

        current = asyncio.current_task()
        for task in (self._conversation, self._clock):
            if task is not None and task is not current and not task.done():
                task.cancel()

        await self._teardown()
        await self._persist()
        self._done.set()

    async def _teardown(self) -> None:
        await self._resources.aclose()

    @staticmethod
    async def _stop_quietly(stop: Callable, label: str) -> None:
        try:
            await stop()
        except Exception as e:
            logger.warning("Failed to stop %s: %s", label, e)

    @staticmethod
    def _release_media(stream: MediaStream) -> None:
        try:
            stream.release()
        except Exception as e:
            logger.warning("Failed to release media stream: %s", e)

    async def _persist(self) -> None:
        state = self._state
        data = InterviewData(
            questions=list(state.questions),
            answers=list(state.answers),
            completed_at=self._now(),
            duration=state.elapsed_seconds,
        )
        fields = {
            "interviewStatus": "completed",
            "interviewScore": state.final_score,
            "interviewData": data.model_dump(mode="json", by_alias=True),
        }
        try:
            await self._store.update_application(self.application_id, fields)
        except Exception as e:
            logger.error("Failed to save interview results for %s: %s", self.application_id, e)
            if isinstance(e, PersistenceError):
                e.result = state
                self.persistence_error = e
            else:
                self.persistence_error = PersistenceError(
                    f"Failed to save interview results: {e}", result=state
                )
            return

        logger.info(
            "Interview %s saved: score=%s, %d answers, %ds",
            self.application_id,
            state.final_score,
            len(state.answers),
            state.elapsed_seconds,
        )
