"""Remote analysis engine adapters."""

from .document_intelligence_client import DocumentIntelligenceClient, RemoteOperation
from .operation_poller import AnalysisEngine, OperationPoller

__all__ = ["DocumentIntelligenceClient", "RemoteOperation", "AnalysisEngine", "OperationPoller"]
