"""Safe, deterministic download filenames."""

from __future__ import annotations

import re

__all__ = ["DEFAULT_BASE_NAME", "derive_filename", "slugify"]

DEFAULT_BASE_NAME = "resume"
FREE_TEXT_PREFIX_CHARS = 30

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Lower-case *text*, collapse non-alphanumeric runs to ``-`` and trim them."""
    return _NON_ALNUM_RUN.sub("-", text.lower()).strip("-")


def derive_filename(
    extension: str,
    *,
    title: str | None = None,
    organization: str | None = None,
    free_text: str | None = None,
    resource_id: int | str | None = None,
    fallback: str = DEFAULT_BASE_NAME,
) -> str:
    """Build ``{base}[-{id}].{extension}`` for a downloaded artifact.

    The base is the first non-blank of *title*, *organization* and the first
    30 characters of *free_text*, else *fallback*.

    Example:
        >>> derive_filename("pdf", title="My Resume!!", resource_id=42)
        'my-resume-42.pdf'
    """
    candidates = (
        title,
        organization,
        (free_text or "")[:FREE_TEXT_PREFIX_CHARS],
    )
    base = ""
    for candidate in candidates:
        if candidate and candidate.strip():
            base = slugify(candidate)
            if base:
                break
    if not base:
        base = slugify(fallback) or DEFAULT_BASE_NAME

    id_part = f"-{resource_id}" if resource_id not in (None, "") else ""
    return f"{base}{id_part}.{extension.lstrip('.').lower()}"
