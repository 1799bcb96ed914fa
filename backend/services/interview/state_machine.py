"""Pure transition functions for the voice interview.

Each function takes an InterviewSessionState and returns a new one; none
of them perform I/O. The session driver owns the only mutable reference.

    Idle -> AwaitingMedia -> Ready -> Speaking -> Recording -> Analyzing
                                         ^                        |
                                         +------ next question ---+
                                                                  |
                                          Completed <- last answer+

Any non-terminal phase can be terminated (explicit end or clock expiry).
Completed and Cancelled are terminal; ``terminate`` on them is a no-op.
"""

from collections.abc import Sequence
from datetime import datetime

from models.interview import (
    AnswerAnalysis,
    AnswerRecord,
    InterviewPhase,
    InterviewSessionState,
)
from services.errors import InvalidTransitionError
from services.interview.scoring import final_score

Phase = InterviewPhase

END_ALL_ANSWERED = "all_questions_answered"
END_TIME_EXPIRED = "time_expired"
END_REQUESTED = "ended_by_candidate"


def _require(state: InterviewSessionState, event: str, *phases: InterviewPhase) -> None:
    if state.phase not in phases:
        raise InvalidTransitionError(f"'{event}' is not allowed while {state.phase.value}")


def _update(state: InterviewSessionState, **changes) -> InterviewSessionState:
    return state.model_copy(update=changes)


def request_media(state: InterviewSessionState) -> InterviewSessionState:
    _require(state, "request_media", Phase.IDLE)
    return _update(state, phase=Phase.AWAITING_MEDIA)


def media_resolved(state: InterviewSessionState, granted: bool) -> InterviewSessionState:
    """Denied media still leads to Ready; the interview runs degraded."""
    _require(state, "media_resolved", Phase.AWAITING_MEDIA)
    return _update(state, phase=Phase.READY, media_available=granted)


def load_questions(state: InterviewSessionState, questions: Sequence[str]) -> InterviewSessionState:
    _require(state, "load_questions", Phase.IDLE, Phase.AWAITING_MEDIA, Phase.READY)
    if not questions:
        raise InvalidTransitionError("An interview needs at least one question")
    return _update(state, questions=tuple(questions), current_question_index=0)


def start(state: InterviewSessionState) -> InterviewSessionState:
    _require(state, "start", Phase.READY)
    if not state.questions:
        raise InvalidTransitionError("No questions available")
    return _update(state, phase=Phase.SPEAKING, generation=state.generation + 1)


def playback_finished(state: InterviewSessionState) -> InterviewSessionState:
    _require(state, "playback_finished", Phase.SPEAKING)
    return _update(
        state,
        phase=Phase.RECORDING,
        partial_transcript="",
        generation=state.generation + 1,
    )


def transcript_updated(state: InterviewSessionState, text: str) -> InterviewSessionState:
    _require(state, "transcript_updated", Phase.RECORDING)
    return _update(state, partial_transcript=text)


def recording_finished(state: InterviewSessionState, answer_text: str) -> InterviewSessionState:
    """Blank answers are skipped without scoring."""
    _require(state, "recording_finished", Phase.RECORDING)
    answer_text = answer_text.strip()
    if not answer_text:
        skipped = state.skipped + (state.current_question_index,)
        return _advance(_update(state, skipped=skipped))
    return _update(
        state,
        phase=Phase.ANALYZING,
        pending_answer=answer_text,
        generation=state.generation + 1,
    )


def answer_scored(
    state: InterviewSessionState,
    analysis: AnswerAnalysis,
    timestamp: datetime,
) -> InterviewSessionState:
    _require(state, "answer_scored", Phase.ANALYZING)
    record = AnswerRecord(
        question=state.current_question,
        answer_text=state.pending_answer,
        analysis=analysis,
        timestamp=timestamp,
    )
    return _advance(_update(state, answers=state.answers + (record,)))


def _advance(state: InterviewSessionState) -> InterviewSessionState:
    if state.is_last_question:
        return terminate(state, END_ALL_ANSWERED, phase=Phase.COMPLETED)
    return _update(
        state,
        phase=Phase.SPEAKING,
        current_question_index=state.current_question_index + 1,
        pending_answer="",
        partial_transcript="",
        generation=state.generation + 1,
    )


def tick(state: InterviewSessionState, seconds: int = 1) -> InterviewSessionState:
    """Count the wall clock down; reaching zero terminates the session."""
    if state.is_terminal:
        return state
    remaining = max(0, state.remaining_seconds - seconds)
    state = _update(state, remaining_seconds=remaining)
    if remaining == 0:
        return terminate(state, END_TIME_EXPIRED)
    return state


def terminate(
    state: InterviewSessionState,
    reason: str = END_REQUESTED,
    phase: InterviewPhase = Phase.CANCELLED,
) -> InterviewSessionState:
    """Move to a terminal phase and fix the final score from existing answers."""
    if state.is_terminal:
        return state
    if phase not in (Phase.COMPLETED, Phase.CANCELLED):
        raise InvalidTransitionError(f"{phase.value} is not a terminal phase")
    return _update(
        state,
        phase=phase,
        final_score=final_score(state.answers),
        end_reason=reason,
        pending_answer="",
        partial_transcript="",
        generation=state.generation + 1,
    )
