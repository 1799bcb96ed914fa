"""Tests for lenient profile parsing and answer-analysis clamping."""

import json

import pytest

from models.candidate import CandidateProfile, ExperienceEntry
from models.interview import METRIC_DEFAULTS, AnswerAnalysis, InterviewPhase, InterviewSessionState
from models.job import JobDescriptor


class TestCandidateProfile:
    def test_empty_payload_has_every_field(self):
        profile = CandidateProfile.model_validate({})
        assert profile.personal_info.name == ""
        assert profile.skills == []
        assert profile.experience == []
        assert profile.education == []
        assert profile.projects == []

    def test_camel_case_personal_info(self, sample_profile):
        assert sample_profile.personal_info.email == "jane.smith@email.com"
        assert len(sample_profile.experience) == 2

    def test_provider_junk_is_coerced(self):
        profile = CandidateProfile.model_validate({
            "personalInfo": None,
            "summary": None,
            "skills": ["Go", None, 42],
            "experience": [{"company": "Acme", "position": None}, "not an entry", None],
            "education": "B.S.",
            "projects": None,
        })
        assert profile.personal_info.name == ""
        assert profile.summary == ""
        assert profile.skills == ["Go", "42"]
        assert len(profile.experience) == 1
        assert profile.experience[0].position == ""
        assert profile.education == []
        assert profile.projects == []

    def test_dump_uses_camel_case(self, sample_profile):
        data = sample_profile.model_dump(by_alias=True)
        assert "personalInfo" in data

    def test_entry_validity(self):
        assert ExperienceEntry(company="Acme", position="Engineer").is_valid
        assert not ExperienceEntry(company="Acme", position="  ").is_valid


class TestJobDescriptor:
    def test_comma_separated_skills(self):
        job = JobDescriptor(skills="React, Node ,, GraphQL")
        assert job.skills == ("React", "Node", "GraphQL")

    def test_none_values(self):
        job = JobDescriptor(title=None, skills=None)
        assert job.title == ""
        assert job.skills == ()


class TestAnswerAnalysis:
    def test_clamps_out_of_range(self):
        analysis = AnswerAnalysis.from_provider({
            "relevance": -20,
            "clarity": 150,
            "technical_depth": 100,
            "communication": 0,
            "feedback": "ok",
        })
        assert analysis.metrics == {
            "relevance": 0,
            "clarity": 100,
            "technical_depth": 100,
            "communication": 0,
        }

    def test_reads_numbers_from_strings_and_floats(self):
        analysis = AnswerAnalysis.from_provider({"relevance": "85/100", "clarity": 72.9})
        assert analysis.relevance == 85
        assert analysis.clarity == 72

    def test_missing_or_unreadable_metrics_use_defaults(self):
        analysis = AnswerAnalysis.from_provider({"relevance": "great", "clarity": True})
        assert analysis.relevance == METRIC_DEFAULTS["relevance"]
        assert analysis.clarity == METRIC_DEFAULTS["clarity"]
        assert analysis.technical_depth == METRIC_DEFAULTS["technical_depth"]
        assert analysis.feedback

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ('{"relevance": Infinity}', 100),
            ('{"relevance": -Infinity}', 0),
            ('{"relevance": 1e999}', 100),
            ('{"relevance": NaN}', METRIC_DEFAULTS["relevance"]),
        ],
        ids=["infinity", "negative-infinity", "overflow", "nan"],
    )
    def test_non_finite_metrics(self, raw, expected):
        analysis = AnswerAnalysis.from_provider(json.loads(raw))
        assert analysis.relevance == expected

    def test_rejects_non_object(self):
        with pytest.raises(ValueError):
            AnswerAnalysis.from_provider(["relevance", 90])


class TestInterviewSessionState:
    def test_create(self):
        state = InterviewSessionState.create(120)
        assert state.phase is InterviewPhase.IDLE
        assert state.remaining_seconds == 120
        assert state.interview_status == "not_started"
        assert state.current_question == ""

    def test_status_follows_phase(self):
        state = InterviewSessionState.create(60)
        assert state.model_copy(update={"phase": InterviewPhase.RECORDING}).interview_status == "in_progress"
        assert state.model_copy(update={"phase": InterviewPhase.CANCELLED}).interview_status == "completed"
