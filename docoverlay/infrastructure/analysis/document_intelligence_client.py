"""Azure AI Document Intelligence REST adapter.

Implements the two calls the analysis pipeline needs from the remote engine:
``submit`` (file bytes in, operation handle out) and ``poll`` (handle in,
status snapshot out). Authentication uses the subscription key when one is
configured and Azure AD bearer tokens otherwise.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

import requests
from azure.identity import DefaultAzureCredential, get_bearer_token_provider

from docoverlay.config import Settings, get_settings
from docoverlay.constants import COGNITIVE_SERVICES_SCOPE
from docoverlay.domain.entities.analysis_result import AnalysisResult
from docoverlay.domain.exceptions import (
    AnalysisFailed,
    NotConfigured,
    SubmissionError,
    TransportError,
    to_service_error,
)

logger = logging.getLogger(__name__)

OPERATION_LOCATION_HEADER = "Operation-Location"


@dataclass(frozen=True)
class RemoteOperation:
    """One status response of a long-running analyze operation."""

    status: str
    result: Optional[AnalysisResult] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    percent_completed: Optional[float] = None

    @classmethod
    def from_body(cls, body: Mapping[str, Any]) -> RemoteOperation:
        error = body.get("error") if isinstance(body.get("error"), Mapping) else {}
        status = str(body.get("status") or "")
        percent = body.get("percentCompleted")
        return cls(
            status=status,
            result=_parse_result(body) if status.lower() == "succeeded" else None,
            error_code=error.get("code"),
            error_message=error.get("message"),
            percent_completed=float(percent) if isinstance(percent, (int, float)) else None,
        )


def _parse_result(body: Mapping[str, Any]) -> AnalysisResult:
    # A payload that does not parse will not parse on resubmission either.
    try:
        return AnalysisResult.from_operation(body)
    except (TypeError, ValueError, AttributeError, KeyError) as exc:
        raise AnalysisFailed(
            f"Analysis result could not be read: {exc}",
            original_error=exc,
        ) from exc


class DocumentIntelligenceClient:
    """Thin client over the ``documentModels/{modelId}:analyze`` REST API."""

    def __init__(
        self,
        *,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
        token_provider: Optional[Callable[[], str]] = None,
    ) -> None:
        settings = settings or get_settings()
        self._endpoint = settings.ensure_endpoint()
        self._api_version = settings.document_intelligence_api_version
        self._api_key = settings.document_intelligence_api_key
        self._timeout = settings.request_timeout_seconds
        self._session = session or requests.Session()

        self._token_provider: Optional[Callable[[], str]] = None
        if token_provider is not None:
            self._token_provider = token_provider
        elif self._endpoint and not self._api_key:
            self._token_provider = get_bearer_token_provider(
                DefaultAzureCredential(),
                COGNITIVE_SERVICES_SCOPE,
            )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def is_configured(self) -> bool:
        return bool(self._endpoint)

    def analyze_url(self, model_id: str) -> str:
        return (
            f"{self._endpoint}documentintelligence/documentModels/{model_id}:analyze"
            f"?api-version={self._api_version}"
        )

    def submit(self, file_bytes: bytes, model_id: str) -> str:
        """Send ``file_bytes`` for analysis and return the operation handle.

        Raises:
            NotConfigured: If no endpoint is configured
            SubmissionError: If the engine does not answer ``202 Accepted`` with
                an ``Operation-Location`` header
            TransportError: If the request itself fails
        """
        self._require_endpoint()
        context = {"model_id": model_id, "size": len(file_bytes)}
        try:
            response = self._session.post(
                self.analyze_url(model_id),
                data=file_bytes,
                headers=self._headers("application/pdf"),
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise to_service_error(exc, context) from exc

        if response.status_code != 202:
            raise SubmissionError(
                f"Analyze request was not accepted (HTTP {response.status_code})",
                status_code=response.status_code,
                context={**context, "body": _safe_text(response)},
            )

        handle = response.headers.get(OPERATION_LOCATION_HEADER)
        if not handle:
            raise SubmissionError(
                "Analyze response did not include an Operation-Location header",
                status_code=response.status_code,
                context=context,
            )

        logger.info(
            "Document accepted for analysis",
            extra={"model_id": model_id, "operation_handle": handle},
        )
        return handle

    def poll(self, operation_handle: str) -> RemoteOperation:
        """Fetch the current state of ``operation_handle``."""
        self._require_endpoint()
        context = {"operation_handle": operation_handle}
        try:
            response = self._session.get(
                operation_handle,
                headers=self._headers(),
                timeout=self._timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise to_service_error(exc, context) from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise TransportError(
                "Operation status response was not valid JSON",
                status_code=response.status_code,
                original_error=exc,
                context=context,
            ) from exc

        if not isinstance(body, Mapping):
            raise TransportError(
                "Operation status response was not a JSON object",
                status_code=response.status_code,
                context=context,
            )
        return RemoteOperation.from_body(body)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _require_endpoint(self) -> None:
        if not self._endpoint:
            raise NotConfigured(
                "DOCUMENT_INTELLIGENCE_ENDPOINT must be configured before analysing documents"
            )

    def _headers(self, content_type: Optional[str] = None) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        if content_type:
            headers["Content-Type"] = content_type
        if self._api_key:
            headers["Ocp-Apim-Subscription-Key"] = self._api_key
        else:
            headers["Authorization"] = f"Bearer {self._token_provider()}"
        return headers


def _safe_text(response: requests.Response) -> str:
    try:
        return (response.text or "")[:500]
    except Exception:  # pragma: no cover - body decoding is best effort
        return ""
