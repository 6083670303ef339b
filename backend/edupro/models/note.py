"""
EduPro Backend: Note SQLAlchemy Model
========================================

What:  ORM model representing the `notes` table.
Why:   Maps study notes to database rows for type-safe database operations.
How:   Inherits from SQLAlchemy's DeclarativeBase; Alembic reads this for migrations.
Who:   Used by NoteService for create/list and by Alembic for schema management.

Table Design Rationale:
    - email: The owner identity resolved from the bearer token. It is the only
      authorization filter on reads, so it is NOT NULL and indexed.
    - smart_notes: Generated study notes body (TEXT, no length limit)
    - mcq_json: Structured multiple-choice questions, stored as a JSON array
    - pages: Number of source pages the notes were generated from
    - created_at: UTC timestamp; lists are returned newest first

    Composite index (email, created_at):
        Serves the only read pattern: "this owner's notes, newest first".
        PostgreSQL scans the index backwards for ORDER BY created_at DESC.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, List, Optional

from sqlalchemy import JSON, DateTime, Index, Integer, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from edupro.database import Base


class Note(Base):
    """
    A study note owned by one authenticated user.

    Lifecycle:
        Created once by POST /api/notes, never updated or deleted.
    """

    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier",
    )

    email: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        comment="Owner identity (email resolved from the bearer token)",
    )

    title: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
        comment="Note title",
    )

    smart_notes: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="Generated study notes body",
    )

    mcq_json: Mapped[Optional[List[Any]]] = mapped_column(
        JSON,
        nullable=True,
        comment="Structured multiple-choice questions",
    )

    pages: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        comment="Number of source pages",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this note was created (UTC)",
    )

    __table_args__ = (
        Index("idx_notes_email_created_at", "email", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, email='{self.email}', created_at='{self.created_at}')>"
