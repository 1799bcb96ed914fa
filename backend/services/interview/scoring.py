"""Final interview score and candidate-facing report."""

from collections.abc import Sequence

from models.interview import METRICS, AnswerRecord, InterviewReport, InterviewSessionState
from services.scoring import round_half_up

EXCELLENT_THRESHOLD = 85
GOOD_THRESHOLD = 70


def metric_averages(answers: Sequence[AnswerRecord]) -> dict[str, float]:
    """Mean of each rubric metric across all answers (0.0 when there are none)."""
    if not answers:
        return {m: 0.0 for m in METRICS}
    return {
        m: sum(getattr(a.analysis, m) for a in answers) / len(answers)
        for m in METRICS
    }


def final_score(answers: Sequence[AnswerRecord]) -> int:
    """Mean of the four per-metric means, so each dimension weighs the same."""
    if not answers:
        return 0
    averages = metric_averages(answers)
    return round_half_up(sum(averages.values()) / len(averages))


def performance_label(score: int) -> str:
    if score >= EXCELLENT_THRESHOLD:
        return "Excellent Performance!"
    if score >= GOOD_THRESHOLD:
        return "Good Performance!"
    return "Room for Improvement"


def build_report(state: InterviewSessionState) -> InterviewReport:
    score = state.final_score if state.final_score is not None else final_score(state.answers)
    return InterviewReport(
        overall_score=score,
        metric_averages={m: round_half_up(v) for m, v in metric_averages(state.answers).items()},
        rating=performance_label(score),
        answered=len(state.answers),
        skipped=len(state.skipped),
    )
