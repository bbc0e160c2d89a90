"""Tutorial CRUD endpoints."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional, Union

try:
    from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response
except ImportError:
    raise ImportError("FastAPI is required. Install with: pip install tutorials[server]")

from tutorials.exceptions import TutorialNotFoundError
from tutorials.server.models import ErrorResponse, TutorialRequest, TutorialResponse
from tutorials.server.state import get_store
from tutorials.store.base import Store
from tutorials.types import Tutorial

logger = logging.getLogger(__name__)


def _log_for(tutorial_id: int) -> logging.LoggerAdapter:
    """Logger that tags every record with the tutorial it concerns."""
    return logging.LoggerAdapter(logger, {"tutorial_id": tutorial_id})

router = APIRouter(prefix="/api/tutorials", tags=["tutorials"])

_NO_CONTENT = {204: {"description": "No tutorials matched"}}
_ERRORS = {500: {"model": ErrorResponse}}
_NOT_FOUND = {404: {"model": ErrorResponse}}


def _to_response(tutorials: List[Tutorial]) -> List[TutorialResponse]:
    return [TutorialResponse.from_tutorial(t) for t in tutorials]


# ── List / Search ──────────────────────────────────────────────────


@router.get(
    "",
    response_model=List[TutorialResponse],
    summary="Get all tutorials or by containing request parameter in the title",
    description="Get tutorials in JSON format. Responds 204 when nothing matches.",
    responses={**_NO_CONTENT, **_ERRORS},
)
async def list_tutorials(
    title2: Optional[str] = Query(default=None, description="Title part to search in titles"),
    store: Store = Depends(get_store),
) -> Union[List[TutorialResponse], Response]:
    try:
        if title2 is None:
            tutorials = store.find_all()
        else:
            tutorials = store.find_by_title_contains(title2)
    except Exception:
        logger.exception("Failed to list tutorials")
        raise HTTPException(status_code=500, detail="Failed to list tutorials")

    if not tutorials:
        return Response(status_code=204)
    return _to_response(tutorials)


# ── Published ──────────────────────────────────────────────────────


@router.get(
    "/published",
    response_model=List[TutorialResponse],
    summary="Filter tutorials by published field",
    description="Responds with the list of published tutorials in JSON format, or 204 when there are none.",
    responses=_NO_CONTENT,
)
async def list_published_tutorials(
    store: Store = Depends(get_store),
) -> Union[List[TutorialResponse], Response]:
    try:
        tutorials = store.find_by_published(True)
    except Exception:
        # Failures are reported as "nothing published".
        logger.exception("Failed to filter published tutorials")
        return Response(status_code=204)

    if not tutorials:
        return Response(status_code=204)
    return _to_response(tutorials)


# ── Read ───────────────────────────────────────────────────────────


@router.get(
    "/{tutorial_id}",
    response_model=TutorialResponse,
    summary="Get tutorial by ID",
    description="Get tutorial using ID as part of URI. Response in JSON format.",
    responses=_NOT_FOUND,
)
async def get_tutorial(
    tutorial_id: int = Path(..., description="Tutorial ID"),
    store: Store = Depends(get_store),
) -> TutorialResponse:
    tutorial = store.find_by_id(tutorial_id)
    if tutorial is None:
        raise TutorialNotFoundError(tutorial_id)
    return TutorialResponse.from_tutorial(tutorial)


# ── Create ─────────────────────────────────────────────────────────


@router.post(
    "",
    response_model=TutorialResponse,
    summary="Add tutorial data",
    description="Add tutorial. New tutorials always start unpublished. Response in JSON format.",
    responses=_ERRORS,
)
async def create_tutorial(
    body: Optional[TutorialRequest] = None,
    store: Store = Depends(get_store),
) -> TutorialResponse:
    if body is None:
        raise HTTPException(status_code=500, detail="Request body is required")

    saved = store.save(
        Tutorial(title=body.title, description=body.description, published=False)
    )
    _log_for(saved.id).info("Tutorial created")
    return TutorialResponse.from_tutorial(saved)


# ── Update ─────────────────────────────────────────────────────────


@router.put(
    "/{tutorial_id}",
    response_model=TutorialResponse,
    summary="Change tutorial data using ID",
    description="Replace title, description and published flag of a tutorial. Response in JSON format.",
    responses=_NOT_FOUND,
)
async def update_tutorial(
    body: TutorialRequest,
    tutorial_id: int = Path(..., description="Tutorial ID to insert changes"),
    store: Store = Depends(get_store),
) -> TutorialResponse:
    existing = store.find_by_id(tutorial_id)
    if existing is None:
        raise TutorialNotFoundError(tutorial_id)

    merged = replace(
        existing,
        title=body.title,
        description=body.description,
        published=bool(body.published),
    )
    saved = store.save(merged)
    _log_for(saved.id).info("Tutorial updated")
    return TutorialResponse.from_tutorial(saved)


# ── Delete ─────────────────────────────────────────────────────────


@router.delete(
    "/{tutorial_id}",
    status_code=204,
    response_class=Response,
    summary="Delete tutorial using ID",
    description="Delete tutorial using ID. Deleting an unknown ID is not an error.",
    responses=_ERRORS,
)
async def delete_tutorial(
    tutorial_id: int = Path(..., description="Tutorial ID to delete"),
    store: Store = Depends(get_store),
) -> Response:
    try:
        removed = store.delete_by_id(tutorial_id)
    except Exception:
        _log_for(tutorial_id).exception("Failed to delete tutorial")
        raise HTTPException(status_code=500, detail="Failed to delete tutorial")

    if removed:
        _log_for(tutorial_id).info("Tutorial deleted")
    return Response(status_code=204)


@router.delete(
    "",
    status_code=204,
    response_class=Response,
    summary="Delete all tutorials",
    description="Remove every tutorial. IDs already issued are not reused.",
    responses=_ERRORS,
)
async def delete_all_tutorials(store: Store = Depends(get_store)) -> Response:
    try:
        store.delete_all()
    except Exception:
        logger.exception("Failed to delete all tutorials")
        raise HTTPException(status_code=500, detail="Failed to delete tutorials")

    logger.info("All tutorials deleted")
    return Response(status_code=204)
