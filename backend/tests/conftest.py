"""Shared test fixtures."""

import pytest

from documents import SAMPLE_PROFILE_JSON, SAMPLE_RESUME, make_pdf
from models.candidate import CandidateProfile
from models.job import JobDescriptor


@pytest.fixture
def sample_profile() -> CandidateProfile:
    return CandidateProfile.model_validate(SAMPLE_PROFILE_JSON)


@pytest.fixture
def sample_job() -> JobDescriptor:
    return JobDescriptor(
        title="Frontend Engineer",
        company="Globex",
        description="Build customer-facing dashboards.",
        skills=["react", "Node", "GraphQL"],
        experience="3+ years",
        location="Remote",
    )


@pytest.fixture
def resume_pdf() -> bytes:
    return make_pdf([line for line in SAMPLE_RESUME.splitlines() if line.strip()])
