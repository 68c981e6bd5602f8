"""Utility helpers: date normalization, colors, filenames."""

from cv_studio.utils.colors import normalize_hex
from cv_studio.utils.dates import format_date, format_date_range
from cv_studio.utils.filenames import derive_filename

__all__ = [
    "derive_filename",
    "format_date",
    "format_date_range",
    "normalize_hex",
]
