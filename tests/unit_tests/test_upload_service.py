import logging
from unittest import mock

import pytest

from images_api.errors import FileTooLargeError, NotAnImageError, PersistenceError
from images_api.services.upload_service import (
    ImageUploadService,
    build_public_id,
    is_image,
)
from tests.consts import TEST_PNG_CONTENT


@pytest.fixture
def upload_service(storage, record_service) -> ImageUploadService:
    return ImageUploadService(storage=storage, records=record_service, max_upload_bytes=1024)


@pytest.mark.parametrize(
    "content_type, expected",
    [
        ("image/png", True),
        ("image/jpeg", True),
        ("image/svg+xml", True),
        ("text/plain", False),
        ("application/octet-stream", False),
        ("", False),
        (None, False),
    ],
)
def test_is_image(content_type, expected):
    assert is_image(content_type) is expected


def test_build_public_id_uses_field_name_and_milliseconds():
    with mock.patch("images_api.services.upload_service.time.time", return_value=1718000000.5):
        assert build_public_id("file") == "file_1718000000500"


def test_upload_returns_created_record(upload_service, storage, db_adapter):
    record = upload_service.upload("file", "image/png", TEST_PNG_CONTENT)

    assert record["public_id"] in storage.assets
    assert db_adapter.query_documents("images") == [record]


def test_upload_rejects_non_image(upload_service, storage):
    with pytest.raises(NotAnImageError):
        upload_service.upload("file", "application/pdf", b"%PDF-1.4")

    assert storage.uploads == []


def test_upload_rejects_oversized(upload_service, storage):
    with pytest.raises(FileTooLargeError):
        upload_service.upload("file", "image/png", b"\x00" * 1025)

    assert storage.uploads == []


def test_failed_cleanup_is_logged(upload_service, storage, db_adapter, caplog):
    db_adapter.fail_writes = True
    storage.fail_delete = True

    with caplog.at_level(logging.ERROR, logger="images_api.services.upload_service"):
        with pytest.raises(PersistenceError):
            upload_service.upload("file", "image/png", TEST_PNG_CONTENT)

    assert "Orphaned asset" in caplog.text


def test_rejected_upload_is_logged_as_error(upload_service, caplog):
    with caplog.at_level(logging.ERROR, logger="images_api.utils.decorators"):
        with pytest.raises(NotAnImageError):
            upload_service.upload("file", "application/pdf", b"%PDF-1.4")

    failures = [record for record in caplog.records if record.name == "images_api.utils.decorators"]
    assert len(failures) == 1
    assert failures[0].levelno == logging.ERROR
    assert "ImageUploadService.upload failed" in failures[0].getMessage()
