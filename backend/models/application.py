"""Application record fields read and written by the evaluation core."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from models.candidate import CandidateProfile
from models.evaluation import Analysis
from models.interview import InterviewData


class ApplicationRecord(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = ""
    job_id: str = ""
    resume_text: str = ""
    extracted_data: CandidateProfile = CandidateProfile()
    resume_quality_score: int = 0
    job_match_score: int = 0
    analysis: Analysis = Analysis()
    interview_eligible: bool = False
    interview_status: str = "not_started"  # not_started | completed
    interview_score: int | None = None
    interview_data: InterviewData | None = None
