"""
EduPro Backend: Career Report SQLAlchemy Model
=================================================

What:  ORM model representing the `career_reports` table.
Who:   Used by CareerReportService for create/list.

Same ownership rules as Note: `email` is the owner identity and the only
read filter; rows are immutable once inserted.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from edupro.database import Base


class CareerReport(Base):
    """A generated career report for one role, owned by one user."""

    __tablename__ = "career_reports"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    email: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        comment="Owner identity (email resolved from the bearer token)",
    )

    role: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Target role the report was generated for",
    )

    # Rendered report markup, stored verbatim
    report_html: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_career_reports_email_created_at", "email", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<CareerReport(id={self.id}, email='{self.email}', "
            f"role='{self.role}')>"
        )
