"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation and tenant scoping.
"""

from __future__ import annotations

from fastapi import Depends, File, Header, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from app.services.onboarding_service import OnboardingService, build_onboarding_service
from db.session import get_db

CSV_CONTENT_TYPES = {
    "text/csv",
    "application/csv",
    "application/vnd.ms-excel",
}

ORGANIZATION_HEADER = "X-Organization-Id"


def get_organization_id(
    x_organization_id: str | None = Header(default=None, alias=ORGANIZATION_HEADER),
) -> str:
    """
    Resolve the tenant for this request. Authentication happens upstream;
    this only refuses requests that arrive without a tenant.
    """

    organization_id = (x_organization_id or "").strip()
    if not organization_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"{ORGANIZATION_HEADER} header is required.",
        )
    return organization_id


def get_csv_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Validate that the uploaded file is a CSV by extension or MIME type.
    """

    filename = (file.filename or "").strip().lower()
    content_type = (file.content_type or "").strip().lower()

    if not filename.endswith(".csv") and content_type not in CSV_CONTENT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only CSV files are allowed.",
        )

    return file


def get_onboarding_service(db: Session = Depends(get_db)) -> OnboardingService:
    return build_onboarding_service(db)
