"""
EduPro Backend: Career Report Route Handlers
===============================================

What:  Handles POST /api/career (create) and GET /api/career (list).
How:   Same shape as the notes routes: identity gate first, then CareerReportService.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from edupro.database import get_db_session
from edupro.dependencies import require_identity
from edupro.schemas.career import (
    CareerReportCreate,
    CareerReportCreatedResponse,
    CareerReportResponse,
)
from edupro.schemas.common import ErrorResponse
from edupro.services.career_service import career_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Career"])


@router.post(
    "/career",
    response_model=CareerReportCreatedResponse,
    responses={
        401: {"description": "Authentication failed", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Save a career report",
)
async def create_career_report(
    payload: CareerReportCreate,
    identity: str = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> CareerReportCreatedResponse:
    await career_service.create_report(db=db, identity=identity, payload=payload)
    return CareerReportCreatedResponse(success=True)


@router.get(
    "/career",
    response_model=List[CareerReportResponse],
    responses={
        401: {"description": "Authentication failed", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List the caller's career reports, newest first",
)
async def list_career_reports(
    identity: str = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> List[CareerReportResponse]:
    return await career_service.list_reports(db=db, identity=identity)
