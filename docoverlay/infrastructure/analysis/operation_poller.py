"""Submit-and-poll state machine for remote analysis operations."""
from __future__ import annotations

import logging
import threading
from typing import Callable, Optional, Protocol

from docoverlay.domain.entities.analysis_result import AnalysisResult
from docoverlay.domain.exceptions import AnalysisFailed, is_retryable, to_service_error
from docoverlay.domain.value_objects.operation_status import OperationState, OperationStatus

from .document_intelligence_client import RemoteOperation

logger = logging.getLogger(__name__)

StatusCallback = Callable[[OperationStatus], None]


class AnalysisEngine(Protocol):
    def submit(self, file_bytes: bytes, model_id: str) -> str: ...

    def poll(self, operation_handle: str) -> RemoteOperation: ...


class OperationPoller:
    """Runs one document through the remote engine.

    Each attempt submits the file and polls the returned handle at a fixed
    interval until the engine reports a terminal state. Transient failures
    restart the whole attempt, up to ``max_retries`` extra times, waiting
    ``retry_backoff * attempt`` seconds in between. A remote ``failed`` status
    is final and never retried.

    All waits go through ``cancel_event.wait`` so setting the event stops the
    run at the next wait; a cancelled run returns ``None`` and reports no
    further status.
    """

    def __init__(
        self,
        engine: AnalysisEngine,
        *,
        poll_interval: float = 2.0,
        max_retries: int = 2,
        retry_backoff: float = 2.0,
    ) -> None:
        self._engine = engine
        self._poll_interval = poll_interval
        self._max_retries = max(0, max_retries)
        self._retry_backoff = retry_backoff

    def run(
        self,
        file_bytes: bytes,
        model_id: str,
        *,
        on_status: Optional[StatusCallback] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> Optional[AnalysisResult]:
        """Analyse ``file_bytes`` with ``model_id``.

        Returns:
            The analysis result, or ``None`` if the run was cancelled

        Raises:
            AnalysisFailed: If the engine reports a failed operation
            ServiceError: If the last attempt fails for any other reason
        """
        cancel_event = cancel_event or threading.Event()
        attempt = 1

        while True:
            if cancel_event.is_set():
                logger.info("Analysis cancelled before attempt %s", attempt)
                return None

            try:
                return self._attempt(file_bytes, model_id, attempt, on_status, cancel_event)
            except AnalysisFailed:
                raise
            except Exception as exc:
                error = to_service_error(exc, {"model_id": model_id, "attempt": attempt})
                if attempt > self._max_retries or not is_retryable(error):
                    logger.error(
                        "Analysis attempt %s failed: %s",
                        attempt,
                        error.message,
                        extra={"error_code": error.code.value, "attempt": attempt},
                    )
                    if error is exc:
                        raise
                    raise error from exc

                delay = self._retry_backoff * attempt
                logger.warning(
                    "Analysis attempt %s failed (%s); retrying in %.1fs",
                    attempt,
                    error.message,
                    delay,
                    extra={"error_code": error.code.value, "attempt": attempt},
                )
                if cancel_event.wait(delay):
                    logger.info("Analysis cancelled during retry backoff")
                    return None
                attempt += 1

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _attempt(
        self,
        file_bytes: bytes,
        model_id: str,
        attempt: int,
        on_status: Optional[StatusCallback],
        cancel_event: threading.Event,
    ) -> Optional[AnalysisResult]:
        handle = self._engine.submit(file_bytes, model_id)
        status = OperationStatus.submitted(handle, attempt)
        self._emit(on_status, status)

        while True:
            if cancel_event.wait(self._poll_interval):
                logger.info("Analysis cancelled while polling", extra={"operation_handle": handle})
                return None

            remote = self._engine.poll(handle)
            state = OperationState.from_remote(remote.status)
            status = status.advance(
                state,
                percent_completed=remote.percent_completed,
                error_message=remote.error_message if state == OperationState.FAILED else None,
            )
            logger.debug(
                "Polled operation: %s",
                status,
                extra={"operation_handle": handle, "poll_count": status.poll_count},
            )
            if cancel_event.is_set():
                return None
            self._emit(on_status, status)

            if state == OperationState.SUCCEEDED:
                if remote.result is None:
                    raise AnalysisFailed(
                        "Analysis succeeded without a result payload",
                        context={"operation_handle": handle},
                    )
                return remote.result

            if state == OperationState.FAILED:
                raise AnalysisFailed(
                    remote.error_message or "The analysis operation failed",
                    remote_code=remote.error_code,
                    context={"operation_handle": handle},
                )

    @staticmethod
    def _emit(on_status: Optional[StatusCallback], status: OperationStatus) -> None:
        if on_status is None:
            return
        try:
            on_status(status)
        except Exception:
            logger.exception("Status callback failed for %s", status.operation_handle)
