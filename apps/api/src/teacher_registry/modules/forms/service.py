"""
Teacher Forms Service Layer

Business logic for teacher registration submissions.

This module implements:
1. Submission Flow:
   - Validate the text fields of the form
   - Persist the record together with the stored ID photo path

2. Admin Queries:
   - List every submission, newest first
   - Export every submission as CSV

The ID photo is stored by the upload handler before ``submit_form`` runs.
If the database write then fails the file stays on disk; there is no
compensating delete and the orphan is only reported in the logs.
"""

import csv
import io
import logging
from datetime import datetime

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from teacher_registry.modules.forms import repository
from teacher_registry.modules.forms.models import Qualification, TeacherForm
from teacher_registry.modules.forms.schemas import (
    NAME_MAX_LENGTH,
    OPTIONAL_FORM_FIELDS,
    REQUIRED_FORM_FIELDS,
    MessageResponse,
    TeacherFormCreate,
)

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "teachers_data.csv"

# CSV column order of the admin export
EXPORT_COLUMNS = [
    "name",
    "phoneNumber",
    "qualification",
    "place",
    "governorate",
    "administration",
    "school",
    "idPhotoPath",
    "comments",
    "createdAt",
]


class FormServiceError(Exception):
    """Base exception for teacher form service errors."""

    def __init__(self, message: str, error_code: str, status_code: int = 400):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)


class FormValidationError(FormServiceError):
    """Raised when submitted form fields are missing or invalid."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            status_code=400,
        )


class MissingIdPhotoError(FormServiceError):
    """Raised when a submission arrives without an ID photo."""

    def __init__(self):
        super().__init__(
            message="ID Photo is required.",
            error_code="ID_PHOTO_REQUIRED",
            status_code=400,
        )


class NoFormsToExportError(FormServiceError):
    """Raised when an export is requested but no submissions exist."""

    def __init__(self):
        super().__init__(
            message="No data to export.",
            error_code="NO_DATA",
            status_code=404,
        )


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate_submission(fields: dict[str, str | None]) -> TeacherFormCreate:
    """
    Validate raw form fields.

    Args:
        fields: Form values keyed by wire name (name, phoneNumber, ...).
            Missing keys and None are treated alike.

    Returns:
        Trimmed, validated submission data

    Raises:
        FormValidationError: If a required field is missing or blank, the
            name is too long, or the qualification is not a known value
    """
    if any(_is_blank(fields.get(field)) for field in REQUIRED_FORM_FIELDS):
        raise FormValidationError("All fields are required except School and Comments.")

    payload = {
        field: fields.get(field) for field in REQUIRED_FORM_FIELDS + OPTIONAL_FORM_FIELDS
    }

    try:
        return TeacherFormCreate.model_validate(payload)
    except ValidationError as e:
        failed = {str(error["loc"][0]) for error in e.errors() if error["loc"]}
        logger.info(f"Submission rejected, invalid fields: {sorted(failed)}")

        if "qualification" in failed:
            allowed = ", ".join(q.value for q in Qualification)
            raise FormValidationError(
                f"Invalid qualification. Must be one of: {allowed}"
            ) from e
        if "name" in failed:
            raise FormValidationError(
                f"Name must be at most {NAME_MAX_LENGTH} characters."
            ) from e

        raise FormValidationError(
            f"Invalid value for: {', '.join(sorted(failed))}."
        ) from e


async def submit_form(
    db: AsyncSession,
    data: TeacherFormCreate,
    id_photo_path: str | None,
) -> MessageResponse:
    """
    Persist a validated submission.

    Args:
        db: Database session
        data: Validated form fields
        id_photo_path: Path returned by the upload handler

    Returns:
        Success acknowledgement

    Raises:
        MissingIdPhotoError: If no stored photo path is given
    """
    if not id_photo_path:
        raise MissingIdPhotoError()

    try:
        form = await repository.create(db, data, id_photo_path)
    except Exception:
        logger.error(f"Submission write failed, upload left orphaned: {id_photo_path}")
        raise

    logger.info(f"Teacher form submitted: id={form.id}")

    return MessageResponse(message="Form submitted successfully!")


async def list_forms(db: AsyncSession) -> list[TeacherForm]:
    """Get every submission, newest first."""
    forms = await repository.list_newest_first(db)
    logger.info(f"Admin listed {len(forms)} teacher forms")
    return forms


def _csv_value(value) -> str:
    if value is None:
        return ""
    if isinstance(value, Qualification):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def _form_to_row(form: TeacherForm) -> list[str]:
    return [
        _csv_value(value)
        for value in (
            form.name,
            form.phone_number,
            form.qualification,
            form.place,
            form.governorate,
            form.administration,
            form.school,
            form.id_photo_path,
            form.comments,
            form.created_at,
        )
    ]


def forms_to_csv(forms: list[TeacherForm]) -> str:
    """Serialize submissions as CSV with the export column order."""
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(EXPORT_COLUMNS)
    writer.writerows(_form_to_row(form) for form in forms)
    return buffer.getvalue()


async def export_forms_csv(db: AsyncSession) -> str:
    """
    Export every submission, newest first, as CSV text.

    Raises:
        NoFormsToExportError: If there are no submissions
    """
    forms = await repository.list_newest_first(db)

    if not forms:
        raise NoFormsToExportError()

    logger.info(f"Admin exported {len(forms)} teacher forms")
    return forms_to_csv(forms)
