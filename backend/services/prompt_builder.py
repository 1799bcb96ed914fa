"""All prompt templates for language-model calls."""

from models.candidate import CandidateProfile
from models.job import JobDescriptor


def build_extraction_prompt(resume_text: str, max_chars: int) -> str:
    """Résumé text -> CandidateProfile JSON. Input is truncated to bound cost."""
    return f"""Extract information from this resume and return only a JSON object with this exact structure:

{{
    "personalInfo": {{
        "name": "full name",
        "email": "email address",
        "phone": "phone number",
        "location": "location"
    }},
    "summary": "professional summary",
    "skills": ["skill1", "skill2", "skill3"],
    "experience": [
        {{
            "company": "company name",
            "position": "job title",
            "duration": "time period",
            "description": "job description",
            "technologies": ["tech1", "tech2"]
        }}
    ],
    "education": [
        {{
            "institution": "school name",
            "degree": "degree type",
            "duration": "time period",
            "details": "additional details"
        }}
    ],
    "projects": [
        {{
            "name": "project name",
            "description": "project description",
            "technologies": ["tech1", "tech2"],
            "url": "project url"
        }}
    ]
}}

Resume text:
{resume_text[:max_chars]}

Return only the JSON object, no other text."""


def _describe_experience(profile: CandidateProfile) -> str:
    roles = []
    for e in profile.experience:
        parts = [e.position.strip(), e.company.strip()]
        if all(parts):
            roles.append(" at ".join(parts))
        elif any(parts):
            roles.append(parts[0] or parts[1])
    return "; ".join(roles[:5]) or "Not specified"


def build_questions_prompt(profile: CandidateProfile, job: JobDescriptor, count: int) -> str:
    """Personalised interview questions from résumé skills/experience and the job."""
    candidate = profile.personal_info.name.strip() or "the candidate"
    job_title = job.title.strip() or "this position"

    return f"""Generate {count} personalized interview questions for {candidate} applying for {job_title}.

Resume Skills: {', '.join(profile.skills) or 'Not specified'}
Job Requirements: {', '.join(job.skills) or 'Not specified'}
Experience Level: {_describe_experience(profile)}

Make questions relevant to their background and the job role. Return ONLY a JSON array of exactly {count} strings with no additional text.

Example format:
["Question 1 here", "Question 2 here", "Question 3 here"]"""


def build_answer_scoring_prompt(
    question: str,
    answer_text: str,
    job: JobDescriptor,
    profile: CandidateProfile,
) -> str:
    """Rubric prompt: four 0-100 metrics plus free-text feedback."""
    return f"""Analyze this interview answer and provide scores (0-100) and feedback:

Question: {question}
Answer: {answer_text}
Job Title: {job.title or 'Unknown'}
Job Skills Required: {', '.join(job.skills) or 'Not specified'}
Candidate Skills: {', '.join(profile.skills) or 'Not specified'}

Evaluate on:
1. Relevance to the question and job role (0-100)
2. Clarity and communication skills (0-100)
3. Technical depth and knowledge (0-100)
4. Overall professionalism (0-100)

Respond with ONLY a JSON object in this exact format:
{{
  "relevance": 85,
  "clarity": 90,
  "technical_depth": 75,
  "communication": 88,
  "feedback": "Strong answer demonstrating good understanding..."
}}"""
