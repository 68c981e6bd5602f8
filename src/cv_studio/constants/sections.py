"""Section and personal-info field identifiers."""

from __future__ import annotations

from typing import Literal

SectionId = Literal[
    "personalInfo",
    "skills",
    "experience",
    "projects",
    "education",
    "certifications",
    "languages",
    "interests",
]

PersonalInfoFieldId = Literal[
    "fullName",
    "jobTitle",
    "email",
    "phone",
    "location",
    "address",
    "linkedin",
    "github",
    "summary",
]

Proficiency = Literal["Native", "Fluent", "Advanced", "Intermediate", "Basic"]

DEFAULT_SECTION_ORDER: tuple[str, ...] = (
    "personalInfo",
    "skills",
    "experience",
    "projects",
    "education",
    "certifications",
    "languages",
    "interests",
)
SECTION_IDS = frozenset(DEFAULT_SECTION_ORDER)

DEFAULT_PERSONAL_INFO_FIELD_ORDER: tuple[str, ...] = (
    "fullName",
    "jobTitle",
    "email",
    "phone",
    "location",
    "address",
    "linkedin",
    "github",
    "summary",
)
PERSONAL_INFO_FIELDS = frozenset(DEFAULT_PERSONAL_INFO_FIELD_ORDER)

# Filled marker count (out of 5) for each proficiency level.
PROFICIENCY_LEVELS: dict[str, int] = {
    "Native": 5,
    "Fluent": 4,
    "Advanced": 3,
    "Intermediate": 2,
    "Basic": 1,
}

SECTION_TITLES: dict[str, str] = {
    "summary": "Professional Summary",
    "skills": "Skills",
    "experience": "Professional Experience",
    "projects": "Projects",
    "education": "Education",
    "certifications": "Certifications & Awards",
    "languages": "Languages",
    "interests": "Interests & Hobbies",
}
