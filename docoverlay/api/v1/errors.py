"""Translation of domain errors into HTTP responses."""
from __future__ import annotations

import logging

from fastapi import HTTPException

from docoverlay.domain.exceptions import (
    DocumentNotFound,
    ErrorCode,
    InvalidDocument,
    NotConfigured,
    ServiceError,
    user_message,
)

logger = logging.getLogger(__name__)


def to_http_exception(exc: ServiceError) -> HTTPException:
    if isinstance(exc, DocumentNotFound):
        return HTTPException(status_code=404, detail=exc.message)
    if isinstance(exc, InvalidDocument):
        status = 413 if exc.code == ErrorCode.FILE_TOO_LARGE else 400
        return HTTPException(status_code=status, detail=exc.message)
    if isinstance(exc, NotConfigured):
        return HTTPException(status_code=503, detail=user_message(exc))

    logger.warning("Request failed with %s: %s", exc.code.value, exc.message)
    return HTTPException(status_code=502, detail=user_message(exc))
