from __future__ import annotations

import base64
import logging

from employee_registry.models.employee import DocumentInfo

logger = logging.getLogger(__name__)


class FileIntakeError(Exception):
    pass


def photo_to_data_url(data: bytes, content_type: str | None, max_bytes: int) -> str:
    if not content_type or not content_type.startswith("image/"):
        raise FileIntakeError(f"Unsupported photo type: {content_type or 'unknown'}")

    if not data:
        raise FileIntakeError("Empty photo file")

    if max_bytes > 0 and len(data) > max_bytes:
        raise FileIntakeError(f"Photo too large: {len(data)} bytes (max {max_bytes})")

    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{content_type};base64,{encoded}"


def describe_document(name: str | None, size: int | None) -> DocumentInfo:
    if not name:
        raise FileIntakeError("Document has no file name")
    if size is None or size < 0:
        raise FileIntakeError(f"Document '{name}' has no readable size")
    logger.debug("Staging document %s (%d bytes)", name, size)
    return DocumentInfo(name=name, size=size)
