"""Voice interview data: answer analyses, answer records, session state."""

import math
import re
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

METRICS = ("relevance", "clarity", "technical_depth", "communication")

# Used when a provider omits a metric or returns something unreadable
METRIC_DEFAULTS: dict[str, int] = {
    "relevance": 70,
    "clarity": 75,
    "technical_depth": 65,
    "communication": 80,
}
DEFAULT_FEEDBACK = "Good response with room for improvement."

_INT_RE = re.compile(r"-?\d+")


def _read_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value):
            return None
        if not math.isfinite(value):
            return 100 if value > 0 else 0
        return int(value)
    if isinstance(value, str):
        match = _INT_RE.search(value)
        return int(match.group()) if match else None
    return None


class AnswerAnalysis(BaseModel):
    """Per-answer rubric scores. Every metric is clamped to 0-100 on construction."""
    relevance: int = METRIC_DEFAULTS["relevance"]
    clarity: int = METRIC_DEFAULTS["clarity"]
    technical_depth: int = METRIC_DEFAULTS["technical_depth"]
    communication: int = METRIC_DEFAULTS["communication"]
    feedback: str = DEFAULT_FEEDBACK

    @field_validator(*METRICS, mode="before")
    @classmethod
    def _clamp(cls, value: Any, info) -> int:
        number = _read_int(value)
        if number is None:
            number = METRIC_DEFAULTS[info.field_name]
        return min(100, max(0, number))

    @field_validator("feedback", mode="before")
    @classmethod
    def _feedback(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            return DEFAULT_FEEDBACK
        return value.strip()

    @classmethod
    def from_provider(cls, data: Any) -> "AnswerAnalysis":
        if not isinstance(data, dict):
            raise ValueError("Answer analysis must be a JSON object")
        return cls.model_validate(data)

    @property
    def metrics(self) -> dict[str, int]:
        return {m: getattr(self, m) for m in METRICS}


class AnswerRecord(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    question: str
    answer_text: str
    analysis: AnswerAnalysis
    timestamp: datetime


class InterviewPhase(str, Enum):
    IDLE = "idle"
    AWAITING_MEDIA = "awaiting_media"
    READY = "ready"
    SPEAKING = "speaking"
    RECORDING = "recording"
    ANALYZING = "analyzing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


TERMINAL_PHASES = frozenset({InterviewPhase.COMPLETED, InterviewPhase.CANCELLED})
_PRE_START_PHASES = frozenset({
    InterviewPhase.IDLE,
    InterviewPhase.AWAITING_MEDIA,
    InterviewPhase.READY,
})


class InterviewSessionState(BaseModel):
    """Immutable snapshot of one interview. Transitions return new snapshots.

    ``generation`` advances every time the session moves past an async
    operation; a result carrying an older generation is stale.
    """
    model_config = ConfigDict(frozen=True)

    phase: InterviewPhase = InterviewPhase.IDLE
    questions: tuple[str, ...] = ()
    current_question_index: int = 0
    duration_budget: int = 300
    remaining_seconds: int = 300
    answers: tuple[AnswerRecord, ...] = ()
    skipped: tuple[int, ...] = ()
    media_available: bool = False
    generation: int = 0
    partial_transcript: str = ""
    pending_answer: str = ""
    final_score: int | None = None
    end_reason: str = ""

    @classmethod
    def create(cls, duration_seconds: int) -> "InterviewSessionState":
        return cls(duration_budget=duration_seconds, remaining_seconds=duration_seconds)

    @property
    def current_question(self) -> str:
        if 0 <= self.current_question_index < len(self.questions):
            return self.questions[self.current_question_index]
        return ""

    @property
    def is_last_question(self) -> bool:
        return self.current_question_index >= len(self.questions) - 1

    @property
    def is_speaking(self) -> bool:
        return self.phase is InterviewPhase.SPEAKING

    @property
    def is_recording(self) -> bool:
        return self.phase is InterviewPhase.RECORDING

    @property
    def is_analyzing(self) -> bool:
        return self.phase is InterviewPhase.ANALYZING

    @property
    def is_terminal(self) -> bool:
        return self.phase in TERMINAL_PHASES

    @property
    def interview_status(self) -> str:
        if self.is_terminal:
            return "completed"
        if self.phase in _PRE_START_PHASES:
            return "not_started"
        return "in_progress"

    @property
    def elapsed_seconds(self) -> int:
        return self.duration_budget - self.remaining_seconds


class InterviewData(BaseModel):
    """Transcript written back to the application record."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    questions: list[str] = []
    answers: list[AnswerRecord] = []
    completed_at: datetime
    duration: int = 0  # seconds


class InterviewReport(BaseModel):
    """Feedback summary shown to the candidate after the interview."""
    overall_score: int = 0
    metric_averages: dict[str, int] = {}
    rating: str = ""
    answered: int = 0
    skipped: int = 0
