"""Job posting used as matching input. Read-only for a pipeline run."""

from pydantic import BaseModel, ConfigDict, field_validator


class JobDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = ""
    company: str = ""
    description: str = ""
    skills: tuple[str, ...] = ()  # required skills
    experience: str = ""  # free-text requirement, e.g. "3+ years"
    location: str = ""
    salary: str = ""

    @field_validator("skills", mode="before")
    @classmethod
    def _skills(cls, value):
        if value is None:
            return ()
        if isinstance(value, str):
            return tuple(s.strip() for s in value.split(",") if s.strip())
        return tuple(str(s) for s in value if s is not None)

    @field_validator("title", "company", "description", "experience", "location", "salary", mode="before")
    @classmethod
    def _text(cls, value):
        return "" if value is None else str(value)
