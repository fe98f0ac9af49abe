"""
app/api/routers/people.py

People import and export HTTP endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, UploadFile, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.dependencies import get_csv_upload, get_organization_id
from app.repositories.person_repository import PersonRepository
from app.schemas.people import PeopleUploadRequest, PeopleUploadResponse
from app.services.people_export_service import render_people_csv
from app.services.people_import_service import (
    PeopleImportPersistenceError,
    PeopleImportService,
    get_people_import_service,
)
from app.validators.csv_validator import CSVValidator
from db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/people", tags=["people"])

CSV_MEDIA_TYPE = "text/csv"


def _run_import(
    *,
    csv_content: str,
    organization_id: str,
    db: Session,
    import_service: PeopleImportService,
) -> PeopleUploadResponse:
    try:
        result = import_service.import_csv(
            csv_content=csv_content,
            organization_id=organization_id,
            db=db,
        )
    except PeopleImportPersistenceError as exc:
        logger.exception("People import failed organization=%s", organization_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Upload failed: unable to save people.",
        ) from exc
    except SQLAlchemyError as exc:
        logger.exception("Onboarding refresh after import failed organization=%s", organization_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Upload failed.",
        ) from exc

    return PeopleUploadResponse.from_domain(result)


@router.post("/upload", response_model=PeopleUploadResponse)
def upload_people(
    payload: PeopleUploadRequest,
    organization_id: str = Depends(get_organization_id),
    db: Session = Depends(get_db),
    import_service: PeopleImportService = Depends(get_people_import_service),
) -> PeopleUploadResponse:
    """
    Import people from CSV text sent in a JSON body.
    """

    if not payload.csv_content:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="CSV content is required",
        )

    return _run_import(
        csv_content=payload.csv_content,
        organization_id=organization_id,
        db=db,
        import_service=import_service,
    )


@router.post("/upload-csv", response_model=PeopleUploadResponse)
def upload_people_file(
    file: UploadFile = Depends(get_csv_upload),
    organization_id: str = Depends(get_organization_id),
    db: Session = Depends(get_db),
    import_service: PeopleImportService = Depends(get_people_import_service),
) -> PeopleUploadResponse:
    """
    Import people from a multipart CSV file upload.
    """

    try:
        raw = file.file.read()
    finally:
        file.file.close()

    try:
        csv_content = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="CSV must be UTF-8 encoded.",
        ) from exc

    if not csv_content.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="CSV content is required",
        )

    return _run_import(
        csv_content=csv_content,
        organization_id=organization_id,
        db=db,
        import_service=import_service,
    )


@router.get("/sample-csv")
def download_sample_csv() -> Response:
    return Response(
        content=CSVValidator.generate_sample_csv(),
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": "attachment; filename=sample-people.csv"},
    )


@router.get("/export")
def export_people(
    organization_id: str = Depends(get_organization_id),
    db: Session = Depends(get_db),
) -> Response:
    try:
        people = PersonRepository(db).list_people(organization_id)
    except SQLAlchemyError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to export people.",
        ) from exc

    return Response(
        content=render_people_csv(people),
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": "attachment; filename=people.csv"},
    )
