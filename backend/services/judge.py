"""Interview question generation and per-answer scoring.

Each operation makes one raced provider call and falls back to a local
result on any failure (error, timeout, malformed or wrong-length output),
so an outage degrades feedback quality without stalling the interview.
"""

import logging
import random
from itertools import cycle, islice

from config import settings
from models.candidate import CandidateProfile
from models.interview import AnswerAnalysis
from models.job import JobDescriptor
from services import prompt_builder
from services.json_extraction import extract_json_array, extract_json_object
from services.providers import TextProvider

logger = logging.getLogger(__name__)

FALLBACK_QUESTIONS = (
    "Hello! I'm your AI interviewer. Tell me about yourself and your background.",
    "What interests you about this position and our company?",
    "Describe your technical skills and experience.",
    "Tell me about a challenging project you've worked on.",
    "Where do you see yourself in the next few years?",
)

FALLBACK_FEEDBACK = "Your answer shows understanding. Consider providing more specific examples."

# Inclusive lower bound, exclusive upper bound
FALLBACK_BANDS: dict[str, tuple[int, int]] = {
    "relevance": (70, 100),
    "clarity": (75, 100),
    "technical_depth": (65, 100),
    "communication": (80, 100),
}

QUESTION_SYSTEM_PROMPT = (
    "You are an expert AI interviewer. Generate relevant, professional interview "
    "questions. Respond with ONLY a JSON array of strings, no additional text or formatting."
)
SCORING_SYSTEM_PROMPT = (
    "You are an expert interview analyst. Provide fair, constructive evaluation. "
    "Respond with ONLY valid JSON, no additional text."
)


def fallback_questions(count: int) -> list[str]:
    """Fixed, job-agnostic questions, repeated or truncated to ``count``."""
    return list(islice(cycle(FALLBACK_QUESTIONS), max(0, count)))


def parse_questions(response_text: str, count: int) -> list[str]:
    """Exactly ``count`` non-blank strings, or ValueError."""
    items = extract_json_array(response_text)
    if len(items) != count:
        raise ValueError(f"Expected {count} questions, got {len(items)}")
    if not all(isinstance(q, str) and q.strip() for q in items):
        raise ValueError("Questions must be non-empty strings")
    return [q.strip() for q in items]


def parse_answer_analysis(response_text: str) -> AnswerAnalysis:
    return AnswerAnalysis.from_provider(extract_json_object(response_text))


class AIJudge:
    def __init__(
        self,
        question_provider: TextProvider | None = None,
        scoring_provider: TextProvider | None = None,
        timeout: float | None = None,
        question_count: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        if question_provider is None or scoring_provider is None:
            from services.openrouter_client import OpenRouterProvider

            question_provider = question_provider or OpenRouterProvider(
                settings.question_model,
                system_prompt=QUESTION_SYSTEM_PROMPT,
                temperature=0.7,
                max_tokens=1000,
            )
            scoring_provider = scoring_provider or OpenRouterProvider(
                settings.scoring_model,
                system_prompt=SCORING_SYSTEM_PROMPT,
                max_tokens=500,
            )
        self.question_provider = question_provider
        self.scoring_provider = scoring_provider
        self.timeout = timeout if timeout is not None else settings.provider_timeout_seconds
        self.question_count = question_count or settings.interview_question_count
        self._rng = rng or random.Random()

    async def generate_questions(self, profile: CandidateProfile, job: JobDescriptor) -> list[str]:
        count = self.question_count
        prompt = prompt_builder.build_questions_prompt(profile, job, count)
        try:
            text = await self.question_provider.call(prompt, self.timeout)
            questions = parse_questions(text, count)
        except Exception as e:
            logger.warning("Question generation failed (%s), using fallback questions", e)
            return fallback_questions(count)

        logger.info("Generated %d interview questions", len(questions))
        return questions

    async def score_answer(
        self,
        question: str,
        answer_text: str,
        job: JobDescriptor,
        profile: CandidateProfile,
    ) -> AnswerAnalysis:
        prompt = prompt_builder.build_answer_scoring_prompt(question, answer_text, job, profile)
        try:
            text = await self.scoring_provider.call(prompt, self.timeout)
            return parse_answer_analysis(text)
        except Exception as e:
            logger.warning("Answer analysis failed (%s), using fallback analysis", e)
            return self.fallback_analysis()

    def fallback_analysis(self) -> AnswerAnalysis:
        """Plausible scores within realistic bands."""
        scores = {
            metric: self._rng.randrange(low, high)
            for metric, (low, high) in FALLBACK_BANDS.items()
        }
        return AnswerAnalysis(**scores, feedback=FALLBACK_FEEDBACK)
