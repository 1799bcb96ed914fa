from config import Settings


def test_defaults():
    s = Settings(_env_file=None)
    assert s.min_resume_chars == 50
    assert s.interview_question_count == 5
    assert s.interview_duration_seconds == 300
    assert s.openrouter_models[0] == "openai/gpt-3.5-turbo"


def test_models_from_comma_separated_env(monkeypatch):
    monkeypatch.setenv("OPENROUTER_MODELS", "model-a, model-b ,")
    assert Settings(_env_file=None).openrouter_models == ["model-a", "model-b"]


def test_models_from_json_env(monkeypatch):
    monkeypatch.setenv("OPENROUTER_MODELS", '["model-a", "model-b"]')
    assert Settings(_env_file=None).openrouter_models == ["model-a", "model-b"]


def test_numeric_overrides(monkeypatch):
    monkeypatch.setenv("PROVIDER_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("INTERVIEW_ELIGIBILITY_THRESHOLD", "75")
    s = Settings(_env_file=None)
    assert s.provider_timeout_seconds == 2.5
    assert s.interview_eligibility_threshold == 75
