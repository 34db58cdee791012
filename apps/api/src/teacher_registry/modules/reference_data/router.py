"""
Reference Data Router

Public lookup endpoints used to populate the registration form's
cascading selection lists.

Endpoints:
- GET /places - Fixed list of places
- GET /governorates - All governorates
- GET /administrations/{gov} - Administrations of a governorate
- GET /schools/{gov}/{admin} - Schools of an administration

These handlers are plain functions: FastAPI runs them in its threadpool,
so the blocking file reads do not stall the event loop.
"""

import logging

from fastapi import APIRouter, HTTPException

from teacher_registry.core.config import settings
from teacher_registry.modules.reference_data import service
from teacher_registry.modules.reference_data.service import ReferenceDataNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter()

_NOT_FOUND_RESPONSE = {
    404: {
        "description": "Reference data file not found",
        "content": {
            "application/json": {
                "example": {
                    "error": "REFERENCE_DATA_NOT_FOUND",
                    "message": "Administrations data not found for this governorate",
                }
            }
        },
    },
}


def _not_found(e: ReferenceDataNotFoundError) -> HTTPException:
    return HTTPException(
        status_code=e.status_code,
        detail={
            "error": e.error_code,
            "message": e.message,
        },
    )


@router.get("/places", response_model=list[str], summary="List Places")
def list_places() -> list[str]:
    """Get the fixed list of places."""
    return service.list_places()


@router.get(
    "/governorates",
    response_model=list[str],
    summary="List Governorates",
    responses=_NOT_FOUND_RESPONSE,
)
def list_governorates() -> list[str]:
    """Get all governorates."""
    try:
        return service.list_governorates(settings.data_dir)
    except ReferenceDataNotFoundError as e:
        logger.warning(f"Reference data missing: {e.message}")
        raise _not_found(e) from e


@router.get(
    "/administrations/{gov}",
    response_model=list[str],
    summary="List Administrations",
    responses=_NOT_FOUND_RESPONSE,
)
def list_administrations(gov: str) -> list[str]:
    """
    Get the administrations of a governorate.

    Args:
        gov: Governorate name, as listed by /governorates
    """
    try:
        return service.list_administrations(settings.data_dir, gov)
    except ReferenceDataNotFoundError as e:
        logger.info(f"No administrations for governorate={gov!r}")
        raise _not_found(e) from e


@router.get(
    "/schools/{gov}/{admin}",
    response_model=list[str],
    summary="List Schools",
    responses=_NOT_FOUND_RESPONSE,
)
def list_schools(gov: str, admin: str) -> list[str]:
    """
    Get the schools of an administration.

    Args:
        gov: Governorate name
        admin: Administration name within the governorate
    """
    try:
        return service.list_schools(settings.data_dir, gov, admin)
    except ReferenceDataNotFoundError as e:
        logger.info(f"No schools for governorate={gov!r}, administration={admin!r}")
        raise _not_found(e) from e
