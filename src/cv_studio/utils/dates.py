"""Display normalization for free-form CV date strings.

Dates arrive as whatever the user typed or the upstream parser produced.
:func:`format_date` maps the recognized grammars to ``"{Month} {Year}"`` and
passes everything else through untouched, so it never fails and is
idempotent for every grammar it recognizes.
"""

from __future__ import annotations

import re
from typing import Literal

__all__ = ["MonthStyle", "format_date", "format_date_range"]

MonthStyle = Literal["full", "abbreviated"]

_MONTHS_FULL = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
_MONTHS_ABBR = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

# Figure dash, en dash, em dash, horizontal bar, minus sign.
_UNICODE_DASHES = re.compile("[‒–—―−]")

_YEAR_ONLY = re.compile(r"^\d{4}$")
_ISO = re.compile(r"^(\d{4})-(\d{1,2})(?:-(\d{1,2}))?$")
_SLASH = re.compile(r"^(\d{1,2})/(\d{4})$")


def _month_label(month: int, style: MonthStyle) -> str:
    month = max(1, min(12, month))
    names = _MONTHS_ABBR if style == "abbreviated" else _MONTHS_FULL
    return names[month - 1]


def format_date(raw: str | None, month_style: MonthStyle = "full") -> str:
    """Normalize *raw* for display.

    Grammars, in priority order:

    1. ``YYYY`` is returned unchanged.
    2. ``YYYY-M[M][-D[D]]`` becomes ``"{Month} {YYYY}"``.
    3. ``M[M]/YYYY`` becomes ``"{Month} {YYYY}"``.
    4. ``"{Word} YYYY"`` (already formatted) is returned unchanged.

    Months outside 1-12 are clamped. Empty input yields ``""``; anything else
    is returned as-is after dash normalization.
    """
    if not raw:
        return ""
    text = str(raw).strip()
    if not text:
        return ""
    text = _UNICODE_DASHES.sub("-", text)

    if _YEAR_ONLY.match(text):
        return text

    iso = _ISO.match(text)
    if iso:
        return f"{_month_label(int(iso.group(2)), month_style)} {iso.group(1)}"

    slash = _SLASH.match(text)
    if slash:
        return f"{_month_label(int(slash.group(1)), month_style)} {slash.group(2)}"

    return text


def format_date_range(
    start: str | None,
    end: str | None,
    is_current: bool = False,
    month_style: MonthStyle = "full",
    separator: str = " - ",
) -> str:
    """Return ``"{start} - {end}"`` with ``Present`` for current entries.

    Either side may be missing; the separator only appears between two
    non-empty parts.
    """
    start_str = format_date(start, month_style)
    end_str = "Present" if is_current else format_date(end, month_style)

    if start_str and end_str:
        return f"{start_str}{separator}{end_str}"
    return start_str or end_str or ""
