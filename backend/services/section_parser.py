"""Heuristic résumé parsing used when every language-model provider fails.

Regex contact extraction, vocabulary skill matching, and keyword-triggered
section switching. Deliberately shallow: it must always return a
well-shaped CandidateProfile, whatever the input.
"""

import logging
import re

from models.candidate import (
    CandidateProfile,
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
)

logger = logging.getLogger(__name__)

# Contact info patterns
EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PHONE_RE = re.compile(r"(\+?1?[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")
NAME_RE = re.compile(r"^[a-zA-Z\s]+$")

# Fixed vocabulary; order is preserved in the output
KNOWN_SKILLS: tuple[str, ...] = (
    "javascript", "python", "java", "react", "node.js", "html", "css", "sql",
    "git", "docker", "aws", "mongodb", "postgresql", "typescript", "angular",
    "vue", "express", "django", "flask", "spring", "bootstrap", "tailwind",
    "firebase", "mysql", "redis", "kubernetes", "jenkins", "azure", "gcp",
)

EXPERIENCE_KEYWORDS = ("experience", "work history", "employment", "professional experience")
EDUCATION_KEYWORDS = ("education", "academic", "university", "college", "degree")

MAX_EXPERIENCE_ENTRIES = 3
MAX_EDUCATION_ENTRIES = 2
MIN_ENTRY_CHARS = 10

NOT_SPECIFIED_POSITION = "Position not specified"
NOT_SPECIFIED_DURATION = "Duration not specified"
NOT_SPECIFIED_DEGREE = "Degree not specified"
NO_DESCRIPTION = "Description not available"


def extract_email(text: str) -> str:
    match = EMAIL_RE.search(text)
    return match.group(0) if match else ""


def extract_phone(text: str) -> str:
    match = PHONE_RE.search(text)
    return match.group(0).strip() if match else ""


def extract_name(lines: list[str]) -> str:
    """First short line made only of letters and spaces."""
    for line in lines:
        if 2 < len(line) < 50 and NAME_RE.match(line) and "@" not in line:
            return line
    return ""


def extract_known_skills(text: str) -> list[str]:
    lower = text.lower()
    return [skill[0].upper() + skill[1:] for skill in KNOWN_SKILLS if skill in lower]


def split_sections(lines: list[str]) -> tuple[list[ExperienceEntry], list[EducationEntry]]:
    """Walk lines, switching section on keyword lines, collecting capped entries."""
    experience: list[ExperienceEntry] = []
    education: list[EducationEntry] = []
    current_section = "general"

    for line in lines:
        lower_line = line.lower()

        if any(keyword in lower_line for keyword in EXPERIENCE_KEYWORDS):
            current_section = "experience"
            continue
        if any(keyword in lower_line for keyword in EDUCATION_KEYWORDS):
            current_section = "education"
            continue

        if len(line) <= MIN_ENTRY_CHARS:
            continue

        if current_section == "experience" and len(experience) < MAX_EXPERIENCE_ENTRIES:
            experience.append(ExperienceEntry(
                company=line,
                position=NOT_SPECIFIED_POSITION,
                duration=NOT_SPECIFIED_DURATION,
                description=NO_DESCRIPTION,
            ))
        elif current_section == "education" and len(education) < MAX_EDUCATION_ENTRIES:
            education.append(EducationEntry(
                institution=line,
                degree=NOT_SPECIFIED_DEGREE,
                duration=NOT_SPECIFIED_DURATION,
            ))

    return experience, education


def parse_resume_manually(resume_text: str) -> CandidateProfile:
    """Build a CandidateProfile without any language model. Never raises."""
    logger.info("Using manual parsing fallback")
    text = resume_text or ""
    lines = [line.strip() for line in text.split("\n") if line.strip()]

    personal_info = PersonalInfo()
    skills: list[str] = []
    experience: list[ExperienceEntry] = []
    education: list[EducationEntry] = []

    try:
        personal_info = PersonalInfo(
            name=extract_name(lines),
            email=extract_email(text),
            phone=extract_phone(text),
        )
        skills = extract_known_skills(text)
        experience, education = split_sections(lines)
    except Exception:
        logger.exception("Manual parsing hit an unexpected error; returning partial profile")

    return CandidateProfile(
        personal_info=personal_info,
        skills=skills,
        experience=experience,
        education=education,
    )
