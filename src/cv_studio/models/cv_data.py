"""Canonical structured resume content.

These models define the snapshot handed to every template. They accept the
editor's camelCase JSON as well as snake_case names, and every optional
field degrades to an empty value so templates never need to guard against
``None``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator
from pydantic.alias_generators import to_camel

from cv_studio.constants.sections import (
    DEFAULT_PERSONAL_INFO_FIELD_ORDER,
    DEFAULT_SECTION_ORDER,
    Proficiency,
)
from cv_studio.models.style_settings import StyleSettings

__all__ = [
    "Additional",
    "CVData",
    "CertificationEntry",
    "EducationEntry",
    "ExperienceEntry",
    "LanguageEntry",
    "PersonalInfo",
    "ProjectEntry",
    "Skills",
]

_PROFICIENCY_BY_LOWER = {
    "native": "Native",
    "fluent": "Fluent",
    "advanced": "Advanced",
    "intermediate": "Intermediate",
    "basic": "Basic",
}


class _Snapshot(BaseModel):
    """Base for immutable, camelCase-tolerant snapshot models."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    @field_validator("*", mode="before")
    @classmethod
    def _none_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and info.field_name is not None:
            field = cls.model_fields[info.field_name]
            return field.get_default(call_default_factory=True)
        return value


class PersonalInfo(_Snapshot):
    full_name: str = ""
    job_title: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    country: str = ""
    profile_picture: str = ""
    summary: str = ""
    linkedin: str = ""
    github: str = ""

    @property
    def location(self) -> str:
        """``"City, Country"`` or whichever half is present."""
        parts = [p.strip() for p in (self.city, self.country) if p and p.strip()]
        return ", ".join(parts)


class ExperienceEntry(_Snapshot):
    id: str = ""
    job_title: str = ""
    company_name: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    responsibilities: list[str] = Field(default_factory=list)


class EducationEntry(_Snapshot):
    id: str = ""
    degree: str = ""
    institution_name: str = ""
    location: str = ""
    graduation_date: str = ""
    gpa: str = ""
    honors: str = ""
    additional_info: str = ""

    @field_validator("gpa", mode="before")
    @classmethod
    def _gpa_to_text(cls, value: Any) -> Any:
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value


class LanguageEntry(_Snapshot):
    id: str = ""
    name: str = ""
    proficiency: Proficiency = "Intermediate"

    @field_validator("proficiency", mode="before")
    @classmethod
    def _normalize_case(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _PROFICIENCY_BY_LOWER.get(value.strip().lower(), value)
        return value


class CertificationEntry(_Snapshot):
    id: str = ""
    title: str = ""
    issuing_organization: str = ""
    date_obtained: str = ""
    verification_link: str = ""


class ProjectEntry(_Snapshot):
    id: str = ""
    name: str = ""
    role: str = ""
    description: str = ""
    technologies: list[str] = Field(default_factory=list)
    live_demo_link: str = ""
    github_link: str = ""


class Skills(_Snapshot):
    technical: list[str] = Field(default_factory=list)
    soft: list[str] = Field(default_factory=list)


class Additional(_Snapshot):
    interests: list[str] = Field(default_factory=list)


class CVData(_Snapshot):
    """One resume snapshot.

    ``section_order``, ``hidden_sections`` and ``personal_info_field_order``
    are kept verbatim; templates resolve them (dropping unknown ids and
    duplicates) at render time.
    """

    id: str = ""
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    skills: Skills = Field(default_factory=Skills)
    languages: list[LanguageEntry] = Field(default_factory=list)
    certifications: list[CertificationEntry] = Field(default_factory=list)
    projects: list[ProjectEntry] = Field(default_factory=list)
    additional: Additional = Field(default_factory=Additional)
    section_order: list[str] = Field(default_factory=lambda: list(DEFAULT_SECTION_ORDER))
    hidden_sections: list[str] = Field(default_factory=list)
    personal_info_field_order: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PERSONAL_INFO_FIELD_ORDER)
    )
    style_settings: StyleSettings | None = None

    @model_validator(mode="after")
    def _check_unique_ids(self) -> CVData:
        for list_name in ("experience", "education", "languages", "certifications", "projects"):
            seen: set[str] = set()
            for entry in getattr(self, list_name):
                if not entry.id:
                    continue
                if entry.id in seen:
                    msg = f"Duplicate id {entry.id!r} in {list_name}"
                    raise ValueError(msg)
                seen.add(entry.id)
        return self
