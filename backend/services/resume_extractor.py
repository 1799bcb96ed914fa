"""Résumé text -> CandidateProfile.

Tries each configured language-model provider in order with a bounded
timeout, accepting the first response that parses into a profile. When
every provider fails, falls back to heuristic parsing, which cannot fail.
"""

import logging

from config import settings
from models.candidate import CandidateProfile
from services import prompt_builder
from services.errors import InsufficientTextError, ProvidersExhaustedError
from services.json_extraction import extract_json_object
from services.providers import ProviderChain, default_chain
from services.section_parser import parse_resume_manually

logger = logging.getLogger(__name__)


def parse_profile(response_text: str) -> CandidateProfile:
    """Provider response -> profile; missing fields backfilled with zero values.

    Raises ValueError when no JSON object can be recovered.
    """
    return CandidateProfile.model_validate(extract_json_object(response_text))


async def extract_profile(resume_text: str, chain: ProviderChain | None = None) -> CandidateProfile:
    """Extract structured candidate data from résumé text.

    Raises InsufficientTextError, before touching any provider, when the
    stripped text is shorter than ``settings.min_resume_chars``.
    """
    if not resume_text or len(resume_text.strip()) < settings.min_resume_chars:
        raise InsufficientTextError(
            "Resume text is too short or empty. Please provide a valid resume."
        )

    if chain is None:
        chain = default_chain()

    prompt = prompt_builder.build_extraction_prompt(resume_text, settings.extraction_text_limit)
    try:
        profile = await chain.first_valid(prompt, parse_profile)
    except ProvidersExhaustedError as e:
        logger.warning("AI extraction failed (%s), falling back to manual parsing", e)
        return parse_resume_manually(resume_text)

    logger.info(
        "AI extraction successful: %d skills, %d experience entries",
        len(profile.skills),
        len(profile.experience),
    )
    return profile
