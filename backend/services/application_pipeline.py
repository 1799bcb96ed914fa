"""Application pipeline: one résumé document against one job.

Pipeline:
1. Text extraction (PDF -> plain text)
2. Structuring (provider chain -> CandidateProfile, manual-parse floor)
3. Scoring (résumé quality + job match, deterministic)
4. Analysis (local strengths/weaknesses/recommendations from thresholds)

Any stage failure is re-raised as StageError tagged with the stage name.
Retries live in the provider chain, never here.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from config import settings
from models.application import ApplicationRecord
from models.candidate import CandidateProfile
from models.evaluation import Analysis, EvaluationResult
from models.job import JobDescriptor
from services import pdf_parser, resume_extractor, scoring
from services.application_store import ApplicationStore
from services.errors import PersistenceError, StageError
from services.providers import ProviderChain

logger = logging.getLogger(__name__)

STRONG_SKILL_COUNT = 5
WEAK_MATCH_THRESHOLD = 50
PARTIAL_MATCH_THRESHOLD = 70

RECOMMENDATIONS = (
    "Highlight specific achievements with quantifiable results",
    "Tailor resume content to match job requirements",
    "Consider adding relevant certifications or training",
)

_RECORD_FIELDS = {
    "resume_text",
    "extracted_data",
    "resume_quality_score",
    "job_match_score",
    "analysis",
    "interview_eligible",
    "interview_status",
}


@contextmanager
def _stage(name: str) -> Iterator[None]:
    try:
        yield
    except StageError:
        raise
    except Exception as e:
        logger.warning("%s failed: %s", name, e)
        raise StageError(name, e) from e


def generate_analysis(profile: CandidateProfile, job_match_score: int) -> Analysis:
    """Simple threshold-based feedback, no language model involved."""
    analysis = Analysis()

    if len(profile.skills) >= STRONG_SKILL_COUNT:
        analysis.strengths.append("Strong technical skill set with diverse technologies")
    if len(profile.experience) > 1:
        analysis.strengths.append("Relevant professional experience across multiple roles")
    if profile.personal_info.email.strip() and profile.personal_info.phone.strip():
        analysis.strengths.append("Complete contact information provided")

    if job_match_score < WEAK_MATCH_THRESHOLD:
        analysis.weaknesses.append("Limited alignment with required job skills")
        analysis.weaknesses.append("May need additional relevant experience")
    elif job_match_score < PARTIAL_MATCH_THRESHOLD:
        analysis.weaknesses.append("Some gaps in required technical skills")

    analysis.recommendations.extend(RECOMMENDATIONS)
    return analysis


async def evaluate(
    document: bytes,
    job: JobDescriptor,
    chain: ProviderChain | None = None,
) -> EvaluationResult:
    """Run the full pipeline and return an immutable EvaluationResult."""
    logger.info("Processing resume for job: %s", job.title or "untitled")

    with _stage("extraction"):
        resume_text = pdf_parser.extract_text(document)

    with _stage("structuring"):
        profile = await resume_extractor.extract_profile(resume_text, chain)

    with _stage("scoring"):
        quality_score = scoring.resume_quality_score(profile)
        match_score = scoring.job_match_score(profile, job)

    with _stage("analysis"):
        analysis = generate_analysis(profile, match_score)

    logger.info("Scores: quality=%d match=%d", quality_score, match_score)
    return EvaluationResult(
        resume_text=resume_text,
        profile=profile,
        resume_quality_score=quality_score,
        job_match_score=match_score,
        analysis=analysis,
        interview_eligible=match_score >= settings.interview_eligibility_threshold,
    )


async def submit_application(
    store: ApplicationStore,
    application_id: str,
    document: bytes,
    job_id: str,
    chain: ProviderChain | None = None,
) -> EvaluationResult:
    """Evaluate a submission and attach the result to its application record.

    A failed write raises PersistenceError with the computed result on
    ``.result``; the evaluation itself is not rolled back.
    """
    job = await store.get_job(job_id)
    result = await evaluate(document, job, chain)

    record = ApplicationRecord(
        resume_text=result.resume_text,
        extracted_data=result.profile,
        resume_quality_score=result.resume_quality_score,
        job_match_score=result.job_match_score,
        analysis=result.analysis,
        interview_eligible=result.interview_eligible,
        interview_status="not_started",
    )
    fields = record.model_dump(mode="json", by_alias=True, include=_RECORD_FIELDS)

    try:
        await store.update_application(application_id, fields)
    except PersistenceError as e:
        logger.error("Failed to save evaluation for %s: %s", application_id, e)
        e.result = result
        raise
    except Exception as e:
        logger.error("Failed to save evaluation for %s: %s", application_id, e)
        raise PersistenceError(f"Failed to save evaluation: {e}", result=result) from e

    return result
