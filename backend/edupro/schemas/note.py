"""
EduPro Backend: Note Request/Response Schemas
================================================

What:  Pydantic models defining the notes API contract.
Why:   Strict input validation, automatic serialization, and OpenAPI doc generation.
How:   FastAPI validates request bodies against NoteCreate and serializes
       responses from NoteResponse.

Field names match the frontend payload (title, smart_notes, mcq_json, pages)
so existing clients keep working unchanged.
"""

import uuid
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """
    What:  Body of POST /api/notes.

    Only `title` is required. The owner is never taken from the body; it is
    always the identity resolved from the bearer token, so an `email` key
    sent by the client is ignored.
    """
    title: str = Field(min_length=1, max_length=500, description="Note title")
    smart_notes: Optional[str] = Field(default=None, description="Generated study notes body")
    mcq_json: Optional[List[Any]] = Field(
        default=None,
        description="Structured multiple-choice questions (JSON array)",
    )
    pages: Optional[int] = Field(default=None, ge=0, description="Number of source pages")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    What:  Full representation of a stored note.
    Who:   Items of GET /api/notes and the `note` field of POST /api/notes.
    """
    id: uuid.UUID = Field(description="Unique note identifier (UUID)")
    email: str = Field(description="Owner identity")
    title: Optional[str] = None
    smart_notes: Optional[str] = None
    mcq_json: Optional[List[Any]] = None
    pages: Optional[int] = None
    created_at: datetime = Field(description="When the note was created (UTC ISO 8601)")

    model_config = {"from_attributes": True}


class NoteCreatedResponse(BaseModel):
    """Response of POST /api/notes."""
    success: bool = True
    note: NoteResponse
