"""Stored CV routes, including the public slug-keyed read path."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, HTTPException, Path, status

from cv_studio.api.schemas.cvs import CVResponse, CVSaveRequest, ExportEventResponse
from cv_studio.services.cv_store import (
    delete_cv,
    get_cv,
    get_cv_by_slug,
    list_cvs,
    list_export_events,
    save_cv,
)
from cv_studio.templates import list_templates

router = APIRouter(prefix="/cvs", tags=["cvs"])
public_router = APIRouter(prefix="/public/cvs", tags=["cvs"])


def _check_layout(layout_id: str) -> None:
    if layout_id not in list_templates():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown layout {layout_id!r}",
        )


@router.get("", response_model=list[CVResponse])
def list_cvs_endpoint() -> list[CVResponse]:
    """List stored CVs, most recently updated first."""
    results = list_cvs()
    if results is None:
        return []
    return [CVResponse(**r) for r in results]


@router.post("", response_model=CVResponse, status_code=status.HTTP_201_CREATED)
def create_cv_endpoint(data: CVSaveRequest) -> CVResponse:
    """Store a new CV."""
    _check_layout(data.layout_id)
    result = save_cv(data.cv, title=data.title, layout_id=data.layout_id)
    if not result:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save CV",
        )
    return CVResponse(**result)


@router.get("/{cv_id}", response_model=CVResponse)
def get_cv_endpoint(cv_id: Annotated[int, Path(description="CV ID")]) -> CVResponse:
    """Get a stored CV by ID."""
    result = get_cv(cv_id)
    if not result:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"CV {cv_id} not found",
        )
    return CVResponse(**result)


@router.put("/{cv_id}", response_model=CVResponse)
def update_cv_endpoint(
    cv_id: Annotated[int, Path(description="CV ID")],
    data: CVSaveRequest,
) -> CVResponse:
    """Replace the content, title and layout of a stored CV."""
    _check_layout(data.layout_id)
    result = save_cv(data.cv, title=data.title, layout_id=data.layout_id, cv_id=cv_id)
    if not result:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"CV {cv_id} not found",
        )
    return CVResponse(**result)


@router.delete("/{cv_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_cv_endpoint(cv_id: Annotated[int, Path(description="CV ID")]) -> None:
    """Delete a stored CV."""
    if not delete_cv(cv_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"CV {cv_id} not found",
        )


@router.get("/{cv_id}/exports", response_model=list[ExportEventResponse])
def list_cv_exports_endpoint(
    cv_id: Annotated[int, Path(description="CV ID")],
) -> list[ExportEventResponse]:
    """Export history of a stored CV, newest first."""
    if not get_cv(cv_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"CV {cv_id} not found",
        )
    events = list_export_events(cv_id) or []
    return [ExportEventResponse(**e) for e in events]


@public_router.get("/{slug}", response_model=CVResponse)
def get_public_cv_endpoint(slug: Annotated[str, Path(description="Public CV slug")]) -> CVResponse:
    """Read-only access to a stored CV through its slug."""
    result = get_cv_by_slug(slug)
    if not result:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"CV '{slug}' not found",
        )
    return CVResponse(**result)
