"""Background execution of analysis runs.

Each document gets its own worker task and cancel event; nothing else is
shared between runs.
"""
from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Dict, Optional

from docoverlay.application.commands.analyze_document import AnalyzeDocumentCommand, AnalyzeDocumentHandler
from docoverlay.constants import ANALYSIS_WORKERS
from docoverlay.domain.entities.document import Document
from docoverlay.domain.exceptions import ServiceError

logger = logging.getLogger(__name__)


class AnalysisAlreadyRunning(RuntimeError):
    """Raised when a document already has an active analysis run."""


class AnalysisDispatcher:
    def __init__(self, handler: AnalyzeDocumentHandler, *, max_workers: int = ANALYSIS_WORKERS) -> None:
        self._handler = handler
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="analysis")
        self._events: Dict[str, threading.Event] = {}
        self._lock = threading.Lock()

    def start(self, document_id: str) -> Future:
        """Schedule analysis of ``document_id``."""
        event = threading.Event()
        with self._lock:
            if document_id in self._events:
                raise AnalysisAlreadyRunning(f"Analysis already running for {document_id}")
            self._events[document_id] = event
        return self._executor.submit(self._run, document_id, event)

    def cancel(self, document_id: str) -> bool:
        """Signal the run for ``document_id`` to stop; False if none is active."""
        with self._lock:
            event = self._events.get(document_id)
        if event is None:
            return False
        event.set()
        logger.info("Cancellation requested for %s", document_id)
        return True

    def is_running(self, document_id: str) -> bool:
        with self._lock:
            return document_id in self._events

    def shutdown(self, wait: bool = True) -> None:
        with self._lock:
            events = list(self._events.values())
        for event in events:
            event.set()
        self._executor.shutdown(wait=wait)

    def _run(self, document_id: str, event: threading.Event) -> Optional[Document]:
        try:
            return self._handler.handle(AnalyzeDocumentCommand(document_id=document_id), cancel_event=event)
        except ServiceError as exc:
            # Already recorded on the document by the handler.
            logger.info("Analysis for %s ended with %s", document_id, exc.code.value)
            return None
        except Exception:
            logger.exception("Unexpected failure analysing %s", document_id)
            return None
        finally:
            with self._lock:
                if self._events.get(document_id) is event:
                    del self._events[document_id]
