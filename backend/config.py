import json
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode


class Settings(BaseSettings):
    # Language-model providers, tried in order: Gemini (if keyed), then OpenRouter models
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    openrouter_api_key: str = ""
    openrouter_url: str = "https://openrouter.ai/api/v1/chat/completions"
    openrouter_models: Annotated[list[str], NoDecode] = [
        "openai/gpt-3.5-turbo",
        "anthropic/claude-3-haiku:beta",
        "google/gemma-7b-it:free",
        "mistralai/mistral-7b-instruct:free",
    ]
    question_model: str = "google/gemma-7b-it:free"
    scoring_model: str = "mistralai/mistral-7b-instruct:free"

    # Text-to-speech
    elevenlabs_api_key: str = ""
    elevenlabs_url: str = "https://api.elevenlabs.io/v1/text-to-speech"
    elevenlabs_voice_id: str = "21m00Tcm4TlvDq8ikWAM"
    elevenlabs_model: str = "eleven_monolingual_v1"

    # Extraction
    provider_timeout_seconds: float = 15.0
    extraction_text_limit: int = 1500
    min_resume_chars: int = 50
    min_response_chars: int = 10

    # Interview
    interview_question_count: int = 5
    interview_duration_seconds: int = 300
    answer_ceiling_seconds: float = 45.0
    silence_timeout_seconds: float = 3.0
    interview_eligibility_threshold: int = 60

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @field_validator("openrouter_models", mode="before")
    @classmethod
    def _parse_models(cls, raw):
        """Accept OPENROUTER_MODELS as comma-separated string or JSON list."""
        if not isinstance(raw, str):
            return raw
        if raw.startswith("["):
            return json.loads(raw)
        return [m.strip() for m in raw.split(",") if m.strip()]


settings = Settings()
