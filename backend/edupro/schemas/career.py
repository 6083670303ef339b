"""
EduPro Backend: Career Report Schemas
========================================

What:  Pydantic models for POST/GET /api/career.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class CareerReportCreate(BaseModel):
    """Body of POST /api/career. The owner comes from the bearer token."""
    role: str = Field(min_length=1, max_length=255, description="Target role")
    report_html: Optional[str] = Field(default=None, description="Rendered report content")


class CareerReportResponse(BaseModel):
    id: uuid.UUID
    email: str
    role: Optional[str] = None
    report_html: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class CareerReportCreatedResponse(BaseModel):
    """
    Response of POST /api/career.

    The frontend only checks `success`; the report itself is fetched
    through GET /api/career.
    """
    success: bool = True
