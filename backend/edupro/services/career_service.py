"""
EduPro Backend: Career Report Service
========================================

What:  Create and list career reports for one owner.
Who:   Called by the /api/career route handlers after identity verification.

Same rules as NoteService: owner comes from the verified identity, reads
filter on it, results are newest first, failures become DatabaseError.
"""

import logging
from typing import List

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from edupro.exceptions import DatabaseError
from edupro.models.career_report import CareerReport
from edupro.schemas.career import CareerReportCreate, CareerReportResponse

logger = logging.getLogger(__name__)


class CareerReportService:
    """Business logic layer for career reports."""

    async def create_report(
        self,
        db: AsyncSession,
        identity: str,
        payload: CareerReportCreate,
    ) -> CareerReportResponse:
        try:
            report = CareerReport(
                email=identity,
                role=payload.role,
                report_html=payload.report_html,
            )
            db.add(report)
            await db.flush()
            logger.info("Career report %s (%s) created for %s", report.id, report.role, identity)
            return CareerReportResponse.model_validate(report)

        except Exception as e:
            logger.error("Database error creating career report: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the career report. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def list_reports(self, db: AsyncSession, identity: str) -> List[CareerReportResponse]:
        """All reports owned by `identity`, newest first (ties broken by id)."""
        try:
            result = await db.execute(
                select(CareerReport)
                .where(CareerReport.email == identity)
                .order_by(desc(CareerReport.created_at), desc(CareerReport.id))
            )
            return [
                CareerReportResponse.model_validate(report)
                for report in result.scalars().all()
            ]

        except Exception as e:
            logger.error("Database error listing career reports: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve career reports. Please try again.",
                context={"error_type": type(e).__name__},
            )


career_service = CareerReportService()
