"""Service layer for stored CVs and their export history.

CVs are saved as JSON snapshots (camelCase, as the editor sends them) next
to the layout they render with. Each CV gets a unique slug for the public,
read-only path. Every export attempt can be recorded as an export event.

All functions open their own session and never raise on database errors:
failures are logged and reported as ``None`` / ``False``.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError
from sqlalchemy.orm import Session

from cv_studio.data.db import get_session
from cv_studio.data.models import CVDocument, ExportEvent
from cv_studio.models.cv_data import CVData
from cv_studio.templates import DEFAULT_TEMPLATE_ID, list_templates
from cv_studio.utils.filenames import DEFAULT_BASE_NAME, slugify

if TYPE_CHECKING:
    from cv_studio.services.export import ExportResult

logger = logging.getLogger(__name__)

__all__ = [
    "delete_cv",
    "get_cv",
    "get_cv_by_slug",
    "list_cvs",
    "list_export_events",
    "load_cv_data",
    "record_export_event",
    "save_cv",
]


def _cv_to_dict(cv: CVDocument) -> dict[str, Any]:
    """Convert a CVDocument model to a dictionary."""
    return {
        "id": cv.id,
        "title": cv.title,
        "slug": cv.slug,
        "layout_id": cv.layout_id,
        "content": json.loads(cv.content),
        "created_at": cv.created_at,
        "updated_at": cv.updated_at,
    }


def _event_to_dict(event: ExportEvent) -> dict[str, Any]:
    return {
        "id": event.id,
        "cv_id": event.cv_id,
        "format": event.format,
        "filename": event.filename,
        "status": event.status,
        "message": event.message,
        "created_at": event.created_at,
    }


def _unique_slug(session: Session, title: str, exclude_id: int | None = None) -> str:
    """Slug for *title*, suffixed with ``-2``, ``-3``... until unused."""
    base = slugify(title) or DEFAULT_BASE_NAME
    candidate = base
    counter = 2
    while True:
        query = session.query(CVDocument.id).filter(CVDocument.slug == candidate)
        if exclude_id is not None:
            query = query.filter(CVDocument.id != exclude_id)
        if query.first() is None:
            return candidate
        candidate = f"{base}-{counter}"
        counter += 1


def _default_title(data: CVData) -> str:
    return data.personal_info.full_name.strip() or "Resume"


def _dump_content(data: CVData) -> dict[str, Any]:
    """Camel-case JSON content for *data*.

    Only the style fields the user actually set are stored, so the layout's
    own default style still applies to the rest when the CV is rendered.
    """
    content = data.model_dump(
        mode="json", by_alias=True, exclude_none=True, exclude={"style_settings"}
    )
    if data.style_settings is not None:
        content["styleSettings"] = data.style_settings.model_dump(
            mode="json", by_alias=True, exclude_unset=True
        )
    return content


def load_cv_data(content: dict[str, Any]) -> CVData | None:
    """Parse stored JSON content back into a :class:`CVData` snapshot."""
    try:
        return CVData.model_validate(content)
    except ValidationError:
        logger.warning("Stored CV content failed validation", exc_info=True)
        return None


def save_cv(
    data: CVData,
    *,
    title: str | None = None,
    layout_id: str = DEFAULT_TEMPLATE_ID,
    cv_id: int | None = None,
) -> dict[str, Any] | None:
    """Create a CV, or replace the stored one when *cv_id* is given.

    Args:
        data: The CV snapshot to store.
        title: Display title; defaults to the person's full name.
        layout_id: Template id the CV renders with.
        cv_id: Existing CV to overwrite.

    Returns:
        Dictionary with the stored CV, or None if the layout is unknown,
        the CV does not exist, or the write failed.
    """
    if layout_id not in list_templates():
        logger.warning("Refusing to save CV with unknown layout %r", layout_id)
        return None

    resolved_title = (title or "").strip() or _default_title(data)
    content = json.dumps(_dump_content(data))

    try:
        with get_session() as session:
            if cv_id is None:
                cv = CVDocument(
                    title=resolved_title,
                    slug=_unique_slug(session, resolved_title),
                    layout_id=layout_id,
                    content=content,
                )
                session.add(cv)
            else:
                cv = session.get(CVDocument, cv_id)
                if cv is None:
                    return None
                if cv.title != resolved_title:
                    cv.slug = _unique_slug(session, resolved_title, exclude_id=cv.id)
                cv.title = resolved_title
                cv.layout_id = layout_id
                cv.content = content
            session.flush()
            return _cv_to_dict(cv)

    except Exception:
        logger.exception("Failed to save CV %r", resolved_title)
        return None


def get_cv(cv_id: int) -> dict[str, Any] | None:
    """Get a stored CV by id, or None if it does not exist."""
    try:
        with get_session() as session:
            cv = session.get(CVDocument, cv_id)
            return _cv_to_dict(cv) if cv else None

    except Exception:
        logger.exception("Failed to get CV %d", cv_id)
        return None


def get_cv_by_slug(slug: str) -> dict[str, Any] | None:
    """Get a stored CV through its public slug."""
    try:
        with get_session() as session:
            cv = session.query(CVDocument).filter(CVDocument.slug == slug).first()
            return _cv_to_dict(cv) if cv else None

    except Exception:
        logger.exception("Failed to get CV by slug %r", slug)
        return None


def list_cvs() -> list[dict[str, Any]] | None:
    """List stored CVs, most recently updated first."""
    try:
        with get_session() as session:
            cvs = (
                session.query(CVDocument)
                .order_by(CVDocument.updated_at.desc(), CVDocument.id.desc())
                .all()
            )
            return [_cv_to_dict(cv) for cv in cvs]

    except Exception:
        logger.exception("Failed to list CVs")
        return None


def delete_cv(cv_id: int) -> bool:
    """Delete a stored CV. Its export events are kept with ``cv_id`` cleared.

    Returns:
        True if the CV was deleted, False if it was missing or deletion failed.
    """
    try:
        with get_session() as session:
            cv = session.get(CVDocument, cv_id)
            if cv is None:
                return False
            session.query(ExportEvent).filter(ExportEvent.cv_id == cv_id).update(
                {ExportEvent.cv_id: None}, synchronize_session=False
            )
            session.delete(cv)
            return True

    except Exception:
        logger.exception("Failed to delete CV %d", cv_id)
        return False


def record_export_event(cv_id: int | None, result: ExportResult) -> dict[str, Any] | None:
    """Store the outcome of one export attempt.

    Recording is best effort: a failure here is logged and never affects
    the export itself.
    """
    try:
        with get_session() as session:
            if cv_id is not None and session.get(CVDocument, cv_id) is None:
                cv_id = None
            event = ExportEvent(
                cv_id=cv_id,
                format=result.format,
                filename=result.filename,
                status="success" if result.ok else (result.error or "failure"),
                message=result.message or None,
            )
            session.add(event)
            session.flush()
            return _event_to_dict(event)

    except Exception:
        logger.exception("Failed to record %s export event for CV %s", result.format, cv_id)
        return None


def list_export_events(cv_id: int) -> list[dict[str, Any]] | None:
    """Export history of a CV, newest first."""
    try:
        with get_session() as session:
            events = (
                session.query(ExportEvent)
                .filter(ExportEvent.cv_id == cv_id)
                .order_by(ExportEvent.created_at.desc(), ExportEvent.id.desc())
                .all()
            )
            return [_event_to_dict(e) for e in events]

    except Exception:
        logger.exception("Failed to list export events for CV %d", cv_id)
        return None
