"""
Teacher Forms Router

Public submission endpoint for the teacher registration form.

Endpoints:
- POST /submit - Submit a registration (multipart form with an ``idPhoto`` file)

Processing order:
1. Validate text fields (400 on missing/invalid fields)
2. Require the ID photo (400 when absent)
3. Store the photo (415 non-image, 413 too large)
4. Persist the record (201)
"""

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from teacher_registry.core.config import settings
from teacher_registry.core.database import get_db
from teacher_registry.modules.forms import service, uploads
from teacher_registry.modules.forms.schemas import MessageResponse
from teacher_registry.modules.forms.service import FormServiceError, MissingIdPhotoError

logger = logging.getLogger(__name__)

router = APIRouter()


def _handle_service_error(e: FormServiceError) -> HTTPException:
    """Convert service errors to HTTPExceptions."""
    return HTTPException(
        status_code=e.status_code,
        detail={
            "error": e.error_code,
            "message": e.message,
        },
    )


@router.post(
    "/submit",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Teacher Registration",
    description="""
Submit a teacher registration form.

**Fields** (multipart/form-data):
- Required: name, phoneNumber, qualification, place, governorate, administration
- Optional: school, comments
- File: idPhoto (image, max 10MB)

**Qualification** must be one of: ليسانس, بكالريوس, دبلوم, معاش, اخرى
""",
    responses={
        400: {
            "description": "Missing or invalid fields, or no ID photo",
            "content": {
                "application/json": {
                    "example": {
                        "error": "VALIDATION_ERROR",
                        "message": "All fields are required except School and Comments.",
                    }
                }
            },
        },
        413: {"description": "ID photo or request body too large"},
        415: {"description": "ID photo is not an image"},
    },
)
async def submit_form(
    name: str | None = Form(None),
    phone_number: str | None = Form(None, alias="phoneNumber"),
    qualification: str | None = Form(None),
    place: str | None = Form(None),
    governorate: str | None = Form(None),
    administration: str | None = Form(None),
    school: str | None = Form(None),
    comments: str | None = Form(None),
    id_photo: UploadFile | None = File(None, alias=uploads.ID_PHOTO_FIELD),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """
    Validate, store the photo, and persist a registration.

    Fields are accepted as optional here so that missing values produce the
    form's own 400 message rather than a framework validation error.
    """
    fields = {
        "name": name,
        "phoneNumber": phone_number,
        "qualification": qualification,
        "place": place,
        "governorate": governorate,
        "administration": administration,
        "school": school,
        "comments": comments,
    }

    try:
        data = service.validate_submission(fields)

        if id_photo is None or not id_photo.filename:
            raise MissingIdPhotoError()

        id_photo_path = await uploads.save_id_photo(
            id_photo,
            settings.upload_dir,
            settings.max_upload_size_bytes,
        )

        return await service.submit_form(db, data, id_photo_path)

    except FormServiceError as e:
        logger.warning(f"Submission rejected: {e.message}")
        raise _handle_service_error(e) from e
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error during submission: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "INTERNAL_ERROR",
                "message": "Server Error during submission.",
            },
        ) from e
