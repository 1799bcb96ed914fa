"""Deterministic résumé-quality and job-match scores (0-100).

Both functions are pure and total over any well-shaped profile/job,
including fully empty ones.
"""

import math

from models.candidate import CandidateProfile
from models.job import JobDescriptor

# Résumé quality weights
QUALITY_PER_CONTACT_FIELD = 5
QUALITY_PER_SKILL, QUALITY_SKILLS_CAP = 2.5, 25
QUALITY_PER_EXPERIENCE, QUALITY_EXPERIENCE_CAP = 10, 30
QUALITY_PER_EDUCATION, QUALITY_EDUCATION_CAP = 7.5, 15
QUALITY_PER_PROJECT, QUALITY_PROJECTS_CAP = 5, 10

# Job match weights
MATCH_SKILLS_WEIGHT = 40
MATCH_PER_EXPERIENCE, MATCH_EXPERIENCE_CAP = 10, 30
MATCH_EDUCATION_POINTS = 20
MATCH_CONTACT_WEIGHT = 10


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _non_blank(value: str) -> bool:
    return bool(value and value.strip())


def _normalized_unique(values) -> list[str]:
    """Case-fold, trim, drop blanks and case-insensitive duplicates."""
    seen: set[str] = set()
    out: list[str] = []
    for v in values:
        key = v.strip().casefold()
        if key and key not in seen:
            seen.add(key)
            out.append(key)
    return out


def resume_quality_score(profile: CandidateProfile | None) -> int:
    """Weighted completeness of the profile."""
    if profile is None:
        return 0

    info = profile.personal_info
    score = 0.0

    # Personal info completeness (20 points)
    if _non_blank(info.name):
        score += QUALITY_PER_CONTACT_FIELD
    if "@" in info.email:
        score += QUALITY_PER_CONTACT_FIELD
    if _non_blank(info.phone):
        score += QUALITY_PER_CONTACT_FIELD
    if _non_blank(info.location):
        score += QUALITY_PER_CONTACT_FIELD

    # Skills (25 points)
    unique_skills = _normalized_unique(profile.skills)
    score += min(QUALITY_SKILLS_CAP, len(unique_skills) * QUALITY_PER_SKILL)

    # Experience (30 points)
    valid_experience = [e for e in profile.experience if e.is_valid]
    score += min(QUALITY_EXPERIENCE_CAP, len(valid_experience) * QUALITY_PER_EXPERIENCE)

    # Education (15 points)
    valid_education = [e for e in profile.education if e.is_valid]
    score += min(QUALITY_EDUCATION_CAP, len(valid_education) * QUALITY_PER_EDUCATION)

    # Projects (10 points)
    valid_projects = [p for p in profile.projects if p.is_valid]
    score += min(QUALITY_PROJECTS_CAP, len(valid_projects) * QUALITY_PER_PROJECT)

    return min(100, round_half_up(score))


def skills_match_points(candidate_skills, required_skills) -> float:
    """Up to 40 points for the share of required skills the candidate covers.

    A required skill counts as matched when either string contains the
    other after case-folding, so "Node" matches "Node.js".
    """
    candidate = _normalized_unique(candidate_skills)
    required = _normalized_unique(required_skills)
    if not candidate or not required:
        return 0.0

    matched = [req for req in required if any(req in skill or skill in req for skill in candidate)]
    return len(matched) / len(required) * MATCH_SKILLS_WEIGHT


def job_match_score(profile: CandidateProfile | None, job: JobDescriptor | None) -> int:
    """Fit of a profile to a job.

    Experience and education earn fixed points regardless of what the job
    asks for; only skills are compared against the posting.
    """
    if profile is None or job is None:
        return 0

    score = skills_match_points(profile.skills, job.skills)

    # Experience relevance (30 points)
    valid_experience = [e for e in profile.experience if e.is_valid]
    score += min(MATCH_EXPERIENCE_CAP, len(valid_experience) * MATCH_PER_EXPERIENCE)

    # Education (20 points)
    if any(e.is_valid for e in profile.education):
        score += MATCH_EDUCATION_POINTS

    # Contact completeness (10 points)
    info = profile.personal_info
    fields = (info.name, info.email, info.phone)
    completed = sum(1 for f in fields if _non_blank(f))
    score += completed / len(fields) * MATCH_CONTACT_WEIGHT

    return min(100, round_half_up(score))
