"""
EduPro Backend: Notes Route Handlers
=======================================

What:  Handles POST /api/notes (create) and GET /api/notes (list).
Why:   Lets the frontend save generated study notes and show the user's history.
How:   Verifies the caller, delegates to NoteService, returns JSON.

Both routes require a bearer token. The identity dependency is listed before
the database session so unauthenticated requests never reach the database.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from edupro.database import get_db_session
from edupro.dependencies import require_identity
from edupro.schemas.common import ErrorResponse
from edupro.schemas.note import NoteCreate, NoteCreatedResponse, NoteResponse
from edupro.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])


@router.post(
    "/notes",
    response_model=NoteCreatedResponse,
    responses={
        401: {"description": "Authentication failed", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Save a study note",
)
async def create_note(
    payload: NoteCreate,
    identity: str = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> NoteCreatedResponse:
    """Store a note owned by the authenticated user and echo it back."""
    note = await note_service.create_note(db=db, identity=identity, payload=payload)
    return NoteCreatedResponse(success=True, note=note)


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses={
        401: {"description": "Authentication failed", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List the caller's notes, newest first",
)
async def list_notes(
    identity: str = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    return await note_service.list_notes(db=db, identity=identity)
