"""Shared constants for CV rendering."""

from cv_studio.constants.sections import (
    DEFAULT_PERSONAL_INFO_FIELD_ORDER,
    DEFAULT_SECTION_ORDER,
    PERSONAL_INFO_FIELDS,
    PROFICIENCY_LEVELS,
    SECTION_IDS,
)

__all__ = [
    "DEFAULT_PERSONAL_INFO_FIELD_ORDER",
    "DEFAULT_SECTION_ORDER",
    "PERSONAL_INFO_FIELDS",
    "PROFICIENCY_LEVELS",
    "SECTION_IDS",
]
