from __future__ import annotations

import base64

import pytest

from employee_registry.services.file_intake import FileIntakeError, describe_document, photo_to_data_url

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def test_photo_to_data_url():
    data_url = photo_to_data_url(PNG_BYTES, "image/png", max_bytes=1024)

    prefix, payload = data_url.split(",", 1)
    assert prefix == "data:image/png;base64"
    assert base64.b64decode(payload) == PNG_BYTES


def test_photo_rejects_non_image():
    with pytest.raises(FileIntakeError, match="Unsupported photo type: application/pdf"):
        photo_to_data_url(b"%PDF", "application/pdf", max_bytes=1024)


def test_photo_rejects_missing_content_type():
    with pytest.raises(FileIntakeError, match="unknown"):
        photo_to_data_url(PNG_BYTES, None, max_bytes=1024)


def test_photo_rejects_empty_file():
    with pytest.raises(FileIntakeError, match="Empty photo file"):
        photo_to_data_url(b"", "image/png", max_bytes=1024)


def test_photo_rejects_oversized_file():
    with pytest.raises(FileIntakeError, match="Photo too large"):
        photo_to_data_url(PNG_BYTES, "image/png", max_bytes=4)


def test_photo_limit_zero_means_unlimited():
    assert photo_to_data_url(PNG_BYTES, "image/png", max_bytes=0).startswith("data:image/png")


def test_describe_document():
    doc = describe_document("contract.pdf", 52_000)
    assert doc.name == "contract.pdf"
    assert doc.size == 52_000


@pytest.mark.parametrize(("name", "size"), [("", 10), (None, 10), ("a.pdf", None), ("a.pdf", -1)])
def test_describe_document_rejects_incomplete_metadata(name, size):
    with pytest.raises(FileIntakeError):
        describe_document(name, size)
