"""Result of evaluating one submitted résumé against one job."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from models.candidate import CandidateProfile


class Analysis(BaseModel):
    strengths: list[str] = []
    weaknesses: list[str] = []
    recommendations: list[str] = []


class EvaluationResult(BaseModel):
    """Created once per application submission, immutable afterwards."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    resume_text: str
    profile: CandidateProfile
    resume_quality_score: int = 0  # 0-100
    job_match_score: int = 0  # 0-100
    analysis: Analysis = Analysis()
    interview_eligible: bool = False
