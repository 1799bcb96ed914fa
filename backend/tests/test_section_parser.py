from documents import SAMPLE_RESUME
from models.candidate import CandidateProfile
from services.section_parser import (
    MAX_EDUCATION_ENTRIES,
    MAX_EXPERIENCE_ENTRIES,
    extract_email,
    extract_known_skills,
    extract_name,
    extract_phone,
    parse_resume_manually,
    split_sections,
)


def test_extract_contact_info():
    assert extract_email(SAMPLE_RESUME) == "jane.smith@email.com"
    assert extract_phone(SAMPLE_RESUME) == "(555) 123-4567"


def test_extract_contact_info_missing():
    assert extract_email("no contact here") == ""
    assert extract_phone("call me maybe") == ""


def test_extract_name_first_plain_line():
    lines = ["jane@example.com", "Jane Smith", "Engineer"]
    assert extract_name(lines) == "Jane Smith"


def test_extract_name_skips_long_and_symbolic_lines():
    lines = ["Curriculum Vitae - 2024", "A" * 60]
    assert extract_name(lines) == ""


def test_extract_known_skills_capitalised_in_vocabulary_order():
    skills = extract_known_skills("Worked with DOCKER, react and Python daily")
    assert skills == ["Python", "React", "Docker"]


def test_split_sections_caps_entries():
    lines = ["Experience"] + [f"Company number {i} Ltd" for i in range(6)]
    lines += ["Education"] + [f"Institute number {i}" for i in range(4)]
    experience, education = split_sections(lines)
    assert len(experience) == MAX_EXPERIENCE_ENTRIES
    assert len(education) == MAX_EDUCATION_ENTRIES
    assert experience[0].company == "Company number 0 Ltd"
    assert experience[0].is_valid


def test_split_sections_ignores_short_lines():
    experience, _ = split_sections(["Experience", "Acme", "Initech Corporation"])
    assert [e.company for e in experience] == ["Initech Corporation"]


def test_parse_resume_manually_sample():
    profile = parse_resume_manually(SAMPLE_RESUME)
    assert isinstance(profile, CandidateProfile)
    assert profile.personal_info.name == "Jane Smith"
    assert profile.personal_info.email == "jane.smith@email.com"
    assert "React" in profile.skills
    assert "Docker" in profile.skills
    assert len(profile.experience) == MAX_EXPERIENCE_ENTRIES


def test_parse_resume_manually_never_fails():
    for text in ("", "   ", "\n\n", "@@@@", None):
        profile = parse_resume_manually(text)
        assert profile.skills == []
        assert profile.experience == []
        assert profile.education == []
        assert profile.projects == []
