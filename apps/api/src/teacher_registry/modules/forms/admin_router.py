"""
Teacher Forms Admin Router

Token-protected endpoints for reviewing registrations.

Endpoints:
- GET /forms - All submissions, newest first
- GET /export - All submissions as a CSV attachment (teachers_data.csv)

Security:
- All endpoints require the static admin bearer token
  (401 when missing, 403 when wrong)
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from teacher_registry.core.auth import require_admin_token
from teacher_registry.core.database import get_db
from teacher_registry.modules.forms import service
from teacher_registry.modules.forms.schemas import TeacherFormResponse
from teacher_registry.modules.forms.service import FormServiceError

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin_token)])

_AUTH_RESPONSES = {
    401: {
        "description": "No bearer token provided",
        "content": {
            "application/json": {
                "example": {
                    "error": "TOKEN_MISSING",
                    "message": "Access Denied: No Token Provided",
                }
            }
        },
    },
    403: {
        "description": "Invalid bearer token",
        "content": {
            "application/json": {
                "example": {
                    "error": "INVALID_TOKEN",
                    "message": "Access Denied: Invalid Token",
                }
            }
        },
    },
}


@router.get(
    "/forms",
    response_model=list[TeacherFormResponse],
    summary="List Submissions",
    responses=_AUTH_RESPONSES,
)
async def list_forms(
    db: AsyncSession = Depends(get_db),
) -> list[TeacherFormResponse]:
    """Get every submission, newest first."""
    try:
        forms = await service.list_forms(db)
    except Exception as e:
        logger.exception(f"Unexpected error listing forms: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "INTERNAL_ERROR",
                "message": "Error fetching forms.",
            },
        ) from e

    return [TeacherFormResponse.model_validate(form) for form in forms]


@router.get(
    "/export",
    summary="Export Submissions as CSV",
    response_class=Response,
    responses={
        200: {"content": {"text/csv": {}}, "description": "CSV attachment"},
        404: {"description": "No submissions to export"},
        **_AUTH_RESPONSES,
    },
)
async def export_forms(
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Download every submission as ``teachers_data.csv``."""
    try:
        csv_text = await service.export_forms_csv(db)
    except FormServiceError as e:
        logger.info(f"Export refused: {e.message}")
        raise HTTPException(
            status_code=e.status_code,
            detail={
                "error": e.error_code,
                "message": e.message,
            },
        ) from e
    except Exception as e:
        logger.exception(f"Unexpected error exporting forms: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "INTERNAL_ERROR",
                "message": "Error exporting data.",
            },
        ) from e

    return Response(
        content=csv_text,
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{service.EXPORT_FILENAME}"'
        },
    )
