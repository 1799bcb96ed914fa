"""Tests for résumé structuring through the provider chain."""

import json

import pytest

from documents import SAMPLE_PROFILE_JSON, SAMPLE_RESUME
from fakes import FakeProvider
from models.candidate import CandidateProfile
from services.errors import InsufficientTextError, ProviderError
from services.providers import ProviderChain
from services.resume_extractor import extract_profile, parse_profile


def _chain(*providers):
    return ProviderChain(list(providers), timeout=0.2)


class TestParseProfile:
    def test_fenced_response(self):
        text = "```json\n" + json.dumps(SAMPLE_PROFILE_JSON) + "\n```"
        profile = parse_profile(text)
        assert profile.personal_info.name == "Jane Smith"
        assert "React" in profile.skills

    def test_missing_fields_backfilled(self):
        profile = parse_profile('{"skills": ["Go"]}')
        assert profile.skills == ["Go"]
        assert profile.experience == []
        assert profile.personal_info.email == ""

    def test_no_json_raises(self):
        with pytest.raises(ValueError):
            parse_profile("Sorry, I cannot help with that.")


class TestExtractProfile:
    @pytest.mark.asyncio
    async def test_short_text_rejected_before_any_provider(self):
        provider = FakeProvider("a", response=json.dumps(SAMPLE_PROFILE_JSON))
        with pytest.raises(InsufficientTextError):
            await extract_profile("x" * 49, _chain(provider))
        assert provider.calls == 0

    @pytest.mark.asyncio
    async def test_whitespace_does_not_count(self):
        provider = FakeProvider("a", response=json.dumps(SAMPLE_PROFILE_JSON))
        with pytest.raises(InsufficientTextError):
            await extract_profile("   " + "x" * 40 + "   \n\n\n\n\n\n", _chain(provider))
        assert provider.calls == 0

    @pytest.mark.asyncio
    async def test_first_valid_provider_wins(self):
        broken = FakeProvider("broken", error=ProviderError("HTTP 503"))
        good = FakeProvider("good", response="Here you go: " + json.dumps(SAMPLE_PROFILE_JSON))
        profile = await extract_profile(SAMPLE_RESUME, _chain(broken, good))
        assert profile.personal_info.location == "Austin, TX"
        assert len(profile.experience) == 2
        assert broken.calls == 1 and good.calls == 1

    @pytest.mark.asyncio
    async def test_all_providers_fail_falls_back_to_manual_parse(self):
        chain = _chain(
            FakeProvider("down", error=ProviderError("HTTP 500")),
            FakeProvider("slow", response=json.dumps(SAMPLE_PROFILE_JSON), delay=1.0),
            FakeProvider("chatty", response="I am unable to read resumes."),
        )
        profile = await extract_profile(SAMPLE_RESUME, chain)
        assert isinstance(profile, CandidateProfile)
        assert profile.personal_info.email == "jane.smith@email.com"
        assert isinstance(profile.skills, list)
        assert isinstance(profile.experience, list)
        assert isinstance(profile.education, list)
        assert isinstance(profile.projects, list)

    @pytest.mark.asyncio
    async def test_no_providers_configured_still_returns_profile(self):
        profile = await extract_profile(SAMPLE_RESUME, _chain())
        assert profile.personal_info.name == "Jane Smith"

    @pytest.mark.asyncio
    async def test_prompt_truncates_resume_text(self):
        provider = FakeProvider("a", response=json.dumps(SAMPLE_PROFILE_JSON))
        text = "Experienced engineer. " * 100 + "TAIL-MARKER"
        await extract_profile(text, _chain(provider))
        assert "Experienced engineer." in provider.prompts[0]
        assert "TAIL-MARKER" not in provider.prompts[0]
