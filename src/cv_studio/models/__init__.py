"""Snapshot models consumed by the renderer."""

from cv_studio.models.cv_data import (
    Additional,
    CertificationEntry,
    CVData,
    EducationEntry,
    ExperienceEntry,
    LanguageEntry,
    PersonalInfo,
    ProjectEntry,
    Skills,
)
from cv_studio.models.style_settings import (
    StyleSettings,
    apply_style_changes,
    clamp_number,
    resolve_style,
)

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
    "StyleSettings",
    "apply_style_changes",
    "clamp_number",
    "resolve_style",
]
