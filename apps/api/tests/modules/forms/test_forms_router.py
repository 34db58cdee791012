"""
HTTP tests for the public submission endpoint.
"""

from unittest.mock import AsyncMock, patch

import pytest

from teacher_registry.core.config import settings

JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 1024


def photo(content: bytes = JPEG_BYTES, filename: str = "id.jpg", content_type: str = "image/jpeg"):
    return {"idPhoto": (filename, content, content_type)}


def stored_uploads() -> list:
    if not settings.upload_dir.exists():
        return []
    return list(settings.upload_dir.iterdir())


@pytest.fixture
def mock_repo(sample_form_model):
    with patch("teacher_registry.modules.forms.service.repository") as repo:
        repo.create = AsyncMock(return_value=sample_form_model)
        yield repo


class TestSubmitEndpoint:
    def test_valid_submission_returns_201(self, client, mock_repo, valid_fields):
        response = client.post("/api/submit", data=valid_fields, files=photo())

        assert response.status_code == 201
        assert response.json() == {"message": "Form submitted successfully!"}

        mock_repo.create.assert_called_once()
        _, data, id_photo_path = mock_repo.create.call_args[0]
        assert data.name == "Ali"
        assert data.qualification.value == "دبلوم"
        assert id_photo_path

        uploads = stored_uploads()
        assert len(uploads) == 1
        assert id_photo_path == uploads[0].as_posix()

    def test_two_megabyte_jpeg_is_accepted(self, client, mock_repo, valid_fields):
        big_photo = b"\xff\xd8\xff\xe0" + b"\x01" * (2 * 1024 * 1024)

        response = client.post("/api/submit", data=valid_fields, files=photo(big_photo))

        assert response.status_code == 201
        mock_repo.create.assert_called_once()

    def test_optional_fields_are_stored_trimmed(self, client, mock_repo, valid_fields):
        valid_fields.update(school="  مدرسة النيل ", comments=" ok ")

        response = client.post("/api/submit", data=valid_fields, files=photo())

        assert response.status_code == 201
        data = mock_repo.create.call_args[0][1]
        assert data.school == "مدرسة النيل"
        assert data.comments == "ok"

    @pytest.mark.parametrize(
        "missing",
        ["name", "phoneNumber", "qualification", "place", "governorate", "administration"],
    )
    def test_missing_field_returns_400(self, client, mock_repo, valid_fields, missing):
        del valid_fields[missing]

        response = client.post("/api/submit", data=valid_fields, files=photo())

        assert response.status_code == 400
        assert response.json()["message"] == (
            "All fields are required except School and Comments."
        )
        mock_repo.create.assert_not_called()
        assert stored_uploads() == []

    def test_invalid_qualification_returns_400(self, client, mock_repo, valid_fields):
        valid_fields["qualification"] = "ماجستير"

        response = client.post("/api/submit", data=valid_fields, files=photo())

        assert response.status_code == 400
        assert "qualification" in response.json()["message"].lower()
        mock_repo.create.assert_not_called()

    def test_missing_photo_returns_400(self, client, mock_repo, valid_fields):
        response = client.post("/api/submit", data=valid_fields)

        assert response.status_code == 400
        assert response.json()["message"] == "ID Photo is required."
        mock_repo.create.assert_not_called()

    def test_non_image_returns_415(self, client, mock_repo, valid_fields):
        response = client.post(
            "/api/submit",
            data=valid_fields,
            files=photo(b"%PDF-1.4", "cv.pdf", "application/pdf"),
        )

        assert response.status_code == 415
        assert response.json()["message"] == "Only image files are allowed!"
        mock_repo.create.assert_not_called()
        assert stored_uploads() == []

    def test_oversized_photo_returns_413(self, client, mock_repo, valid_fields, monkeypatch):
        monkeypatch.setattr(settings, "max_upload_size_bytes", 512)

        response = client.post("/api/submit", data=valid_fields, files=photo())

        assert response.status_code == 413
        assert "too large" in response.json()["message"].lower()
        mock_repo.create.assert_not_called()
        assert stored_uploads() == []

    def test_photo_of_exactly_the_upload_limit_is_accepted(
        self, client, mock_repo, valid_fields
    ):
        limit = settings.max_upload_size_bytes
        exact_photo = b"\xff\xd8\xff\xe0" + b"\x02" * (limit - 4)

        response = client.post("/api/submit", data=valid_fields, files=photo(exact_photo))

        assert response.status_code == 201
        mock_repo.create.assert_called_once()
        assert stored_uploads()[0].stat().st_size == limit

    def test_photo_one_byte_over_the_upload_limit_is_rejected(
        self, client, mock_repo, valid_fields, monkeypatch
    ):
        monkeypatch.setattr(settings, "max_upload_size_bytes", 4096)

        response = client.post(
            "/api/submit", data=valid_fields, files=photo(b"\xff" * 4097)
        )

        assert response.status_code == 413
        assert response.json()["error"] == "FILE_TOO_LARGE"
        mock_repo.create.assert_not_called()

    def test_oversized_multipart_body_is_rejected_before_parsing(
        self, client, mock_repo, valid_fields, monkeypatch
    ):
        monkeypatch.setattr(settings, "max_upload_size_bytes", 256)
        monkeypatch.setattr(settings, "multipart_overhead_bytes", 128)

        response = client.post("/api/submit", data=valid_fields, files=photo())

        assert response.status_code == 413
        assert response.json()["error"] == "PAYLOAD_TOO_LARGE"
        mock_repo.create.assert_not_called()

    def test_oversized_urlencoded_body_uses_the_body_limit(
        self, client, mock_repo, valid_fields, monkeypatch
    ):
        monkeypatch.setattr(settings, "max_body_size_bytes", 64)
        valid_fields["comments"] = "x" * 200

        response = client.post("/api/submit", data=valid_fields)

        assert response.status_code == 413
        assert response.json()["error"] == "PAYLOAD_TOO_LARGE"
        mock_repo.create.assert_not_called()

    def test_database_failure_returns_generic_500(self, client, mock_repo, valid_fields):
        mock_repo.create = AsyncMock(side_effect=RuntimeError("db password in error text"))

        response = client.post("/api/submit", data=valid_fields, files=photo())

        assert response.status_code == 500
        body = response.json()
        assert body["message"] == "Server Error during submission."
        assert "password" not in response.text
        # The stored photo is not rolled back
        assert len(stored_uploads()) == 1
