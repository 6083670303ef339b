"""
EduPro Backend: Note Service
===============================

What:  Create and list study notes for one owner.
Why:   Keeps ownership rules and persistence out of the route handlers.
How:   Inserts/queries Note rows through the request's AsyncSession.
Who:   Called by the /api/notes route handlers after identity verification.

Ownership:
    The `identity` argument is the email returned by the IdentityVerifier.
    It is written to every new note and is the only filter on reads, so a
    caller can never see another owner's notes.

Design Decision:
    NoteService is stateless: it receives the db session for each call.
    Commit happens in get_db_session after the handler returns; here we only
    flush so the row gets its defaults (id, created_at) for the response.
"""

import logging
from typing import List

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from edupro.exceptions import DatabaseError
from edupro.models.note import Note
from edupro.schemas.note import NoteCreate, NoteResponse

logger = logging.getLogger(__name__)


class NoteService:
    """
    Business logic layer for study notes.

    Error Handling Strategy:
        Database errors are wrapped in DatabaseError (hides internal details).
    """

    async def create_note(
        self,
        db: AsyncSession,
        identity: str,
        payload: NoteCreate,
    ) -> NoteResponse:
        """
        Persist a new note owned by `identity`.

        Args:
            db: Async database session (injected by FastAPI)
            identity: Verified owner email
            payload: Validated request body

        Returns:
            NoteResponse for the stored row

        Raises:
            DatabaseError: Insert failed
        """
        try:
            note = Note(
                email=identity,
                title=payload.title,
                smart_notes=payload.smart_notes,
                mcq_json=payload.mcq_json,
                pages=payload.pages,
            )
            db.add(note)
            await db.flush()
            logger.info("Note %s created for %s", note.id, identity)
            return NoteResponse.model_validate(note)

        except Exception as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the note. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def list_notes(self, db: AsyncSession, identity: str) -> List[NoteResponse]:
        """
        All notes owned by `identity`, newest first. Notes sharing a timestamp
        come back in descending id order, so repeated reads agree.

        Query plan:
            SELECT * FROM notes WHERE email = :identity
            ORDER BY created_at DESC, id DESC
            → served by idx_notes_email_created_at
        """
        try:
            result = await db.execute(
                select(Note)
                .where(Note.email == identity)
                .order_by(desc(Note.created_at), desc(Note.id))
            )
            return [NoteResponse.model_validate(note) for note in result.scalars().all()]

        except Exception as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(e).__name__},
            )


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
