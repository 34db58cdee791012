"""
Fixtures for teacher forms tests.
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from teacher_registry.modules.forms.models import Qualification, TeacherForm
from teacher_registry.modules.forms.schemas import TeacherFormCreate


def make_form_model(**overrides) -> MagicMock:
    """Build a stored submission stand-in."""
    now = datetime.now(UTC)
    form = MagicMock(spec=TeacherForm)
    form.id = uuid4()
    form.name = "Ali"
    form.phone_number = "0100000000"
    form.qualification = Qualification.DIPLOMA
    form.place = "اسوان"
    form.governorate = "اسوان"
    form.administration = "اسوان"
    form.school = None
    form.id_photo_path = "storage/uploads/1700000000000-abcd1234-photo.jpg"
    form.comments = None
    form.created_at = now
    form.updated_at = now
    for key, value in overrides.items():
        setattr(form, key, value)
    return form


@pytest.fixture
def valid_fields():
    """Raw form fields of a valid submission, keyed by wire name."""
    return {
        "name": "Ali",
        "phoneNumber": "0100000000",
        "qualification": "دبلوم",
        "place": "اسوان",
        "governorate": "اسوان",
        "administration": "اسوان",
    }


@pytest.fixture
def sample_form_create(valid_fields):
    return TeacherFormCreate.model_validate(valid_fields)


@pytest.fixture
def sample_form_model():
    return make_form_model()


@pytest.fixture
def stored_forms_newest_first():
    """Three stored submissions, already ordered newest first."""
    base = datetime(2025, 3, 1, 9, 0, tzinfo=UTC)
    return [
        make_form_model(name="Newest", created_at=base + timedelta(hours=2)),
        make_form_model(name="Middle", created_at=base + timedelta(hours=1)),
        make_form_model(name="Oldest", created_at=base),
    ]
