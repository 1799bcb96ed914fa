"""Structured candidate profile extracted from résumé text."""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _as_list(value: Any) -> list:
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


class _Lenient(BaseModel):
    """Coerces provider junk (null, numbers, wrong shapes) to zero values.

    Language-model output is not trusted to match the schema, so every
    string field accepts anything and every list defaults to empty.
    Stored records use camelCase keys (``personalInfo``).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def _coerce(cls, value: Any, info):
        annotation = cls.model_fields[info.field_name].annotation
        if annotation is str:
            return _as_text(value)
        if annotation == list[str]:
            return [_as_text(v) for v in _as_list(value) if v is not None]
        if getattr(annotation, "__origin__", None) is list:
            return [v for v in _as_list(value) if isinstance(v, (dict, BaseModel))]
        if isinstance(annotation, type) and issubclass(annotation, BaseModel):
            return value if isinstance(value, (dict, BaseModel)) else {}
        return value


class PersonalInfo(_Lenient):
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""


class ExperienceEntry(_Lenient):
    company: str = ""
    position: str = ""
    duration: str = ""
    description: str = ""
    technologies: list[str] = []

    @property
    def is_valid(self) -> bool:
        return bool(self.company.strip() and self.position.strip())


class EducationEntry(_Lenient):
    institution: str = ""
    degree: str = ""
    duration: str = ""
    details: str = ""

    @property
    def is_valid(self) -> bool:
        return bool(self.institution.strip() and self.degree.strip())


class ProjectEntry(_Lenient):
    name: str = ""
    description: str = ""
    technologies: list[str] = []
    url: str = ""

    @property
    def is_valid(self) -> bool:
        return bool(self.name.strip() and self.description.strip())


class CandidateProfile(_Lenient):
    """Every list defaults to empty so scoring never branches on absence."""
    personal_info: PersonalInfo = PersonalInfo()
    summary: str = ""
    skills: list[str] = []
    experience: list[ExperienceEntry] = []
    education: list[EducationEntry] = []
    projects: list[ProjectEntry] = []
