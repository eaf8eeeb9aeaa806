"""Domain exceptions.

Every failure surfaced by the analysis pipeline is a :class:`ServiceError`
tagged with a closed :class:`ErrorCode`. Errors that do not originate in this
package are wrapped by :func:`to_service_error` instead of being re-typed
dynamically.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

import requests


class ErrorCategory(str, Enum):
    """Broad error families used for retry and presentation decisions."""
    VALIDATION = "validation"
    NETWORK = "network"
    AUTHENTICATION = "authentication"
    PROCESSING = "processing"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


class ErrorCode(str, Enum):
    """Closed set of error kinds."""
    INVALID_GEOMETRY = "INVALID_GEOMETRY"
    SUBMISSION_FAILED = "SUBMISSION_FAILED"
    ANALYSIS_FAILED = "ANALYSIS_FAILED"
    SERVICE_NOT_CONFIGURED = "SERVICE_NOT_CONFIGURED"
    NETWORK_ERROR = "NETWORK_ERROR"
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"
    INVALID_FILE = "INVALID_FILE"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    DOCUMENT_NOT_FOUND = "DOCUMENT_NOT_FOUND"
    UNKNOWN = "UNKNOWN"


class ServiceError(Exception):
    """Base exception for all errors raised by the analysis pipeline."""

    code: ErrorCode = ErrorCode.UNKNOWN
    category: ErrorCategory = ErrorCategory.UNKNOWN

    def __init__(
        self,
        message: str,
        *,
        original_error: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.original_error = original_error
        self.context = dict(context or {})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code.value,
            "category": self.category.value,
            "message": self.message,
            "context": self.context,
        }


class InvalidGeometry(ServiceError):
    """Raised when a polygon is malformed (odd length or fewer than 4 points)."""

    code = ErrorCode.INVALID_GEOMETRY
    category = ErrorCategory.VALIDATION


class SubmissionError(ServiceError):
    """Raised when the remote engine rejects or mis-acknowledges a submission."""

    code = ErrorCode.SUBMISSION_FAILED
    category = ErrorCategory.PROCESSING

    def __init__(self, message: str, *, status_code: Optional[int] = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.status_code = status_code


class AnalysisFailed(ServiceError):
    """Raised when the remote operation fails or its result cannot be read."""

    code = ErrorCode.ANALYSIS_FAILED
    category = ErrorCategory.PROCESSING

    def __init__(self, message: str, *, remote_code: Optional[str] = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.remote_code = remote_code


class NotConfigured(ServiceError):
    """Raised before any submission when no remote endpoint is configured."""

    code = ErrorCode.SERVICE_NOT_CONFIGURED
    category = ErrorCategory.CONFIGURATION


class TransportError(ServiceError):
    """Raised for HTTP-level failures talking to the remote engine."""

    code = ErrorCode.NETWORK_ERROR
    category = ErrorCategory.NETWORK

    def __init__(self, message: str, *, status_code: Optional[int] = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.status_code = status_code
        if status_code == 429:
            self.code = ErrorCode.QUOTA_EXCEEDED
        elif status_code in (401, 403):
            self.category = ErrorCategory.AUTHENTICATION


class InvalidDocument(ServiceError):
    """Raised when an uploaded file is not an acceptable PDF."""

    code = ErrorCode.INVALID_FILE
    category = ErrorCategory.VALIDATION

    def __init__(self, message: str, *, code: ErrorCode = ErrorCode.INVALID_FILE, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.code = code


class DocumentNotFound(ServiceError):
    """Raised when a document id is unknown to the repository."""

    code = ErrorCode.DOCUMENT_NOT_FOUND
    category = ErrorCategory.VALIDATION

    def __init__(self, document_id: str):
        super().__init__(f"Document not found: {document_id}", context={"document_id": document_id})
        self.document_id = document_id


class UnknownServiceError(ServiceError):
    """Wrapper for errors that do not belong to any known kind."""

    code = ErrorCode.UNKNOWN
    category = ErrorCategory.UNKNOWN


_RETRYABLE_STATUSES = {408, 429}

_USER_MESSAGES = {
    ErrorCode.INVALID_GEOMETRY: "Some regions in the analysis result could not be displayed.",
    ErrorCode.SUBMISSION_FAILED: "The document could not be submitted for analysis.",
    ErrorCode.ANALYSIS_FAILED: "Document analysis failed.",
    ErrorCode.SERVICE_NOT_CONFIGURED: "Document analysis service is not properly configured.",
    ErrorCode.NETWORK_ERROR: "Could not reach the document analysis service.",
    ErrorCode.QUOTA_EXCEEDED: "Service quota exceeded. Please try again later.",
    ErrorCode.INVALID_FILE: "Please select a valid PDF file.",
    ErrorCode.FILE_TOO_LARGE: "File size must be less than 50MB.",
    ErrorCode.DOCUMENT_NOT_FOUND: "The requested document could not be found.",
}


def to_service_error(exc: BaseException, context: Optional[Dict[str, Any]] = None) -> ServiceError:
    """Return ``exc`` as a :class:`ServiceError`, wrapping foreign exceptions."""
    if isinstance(exc, ServiceError):
        return exc

    if isinstance(exc, requests.HTTPError):
        status = exc.response.status_code if exc.response is not None else None
        return TransportError(
            str(exc) or "Network request failed",
            status_code=status,
            original_error=exc,
            context=context,
        )

    if isinstance(exc, requests.RequestException):
        return TransportError(
            str(exc) or "Network request failed",
            original_error=exc,
            context=context,
        )

    return UnknownServiceError(
        str(exc) or "An unknown error occurred",
        original_error=exc,
        context=context,
    )


def _status_is_transient(status_code: Optional[int]) -> bool:
    return status_code is None or status_code >= 500 or status_code in _RETRYABLE_STATUSES


def is_retryable(error: ServiceError) -> bool:
    """Check whether a fresh submit-and-poll attempt may succeed."""
    if isinstance(error, (AnalysisFailed, NotConfigured, InvalidDocument, InvalidGeometry)):
        return False
    if error.code == ErrorCode.QUOTA_EXCEEDED:
        return True
    if isinstance(error, (TransportError, SubmissionError)):
        return _status_is_transient(error.status_code)
    return error.code == ErrorCode.UNKNOWN


def user_message(error: ServiceError) -> str:
    """Short human-readable message for ``error``."""
    if isinstance(error, AnalysisFailed) and error.message:
        return f"Document analysis failed: {error.message}"
    return _USER_MESSAGES.get(error.code, "An error occurred while processing your request.")
