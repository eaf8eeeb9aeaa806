"""Pytest configuration for docoverlay tests.

Ensures the project root is on sys.path so ``docoverlay.*`` imports resolve
without an editable install, and provides a small analysis payload shaped
like the engine's ``analyzeResult`` object.
"""
from __future__ import annotations

import sys
import threading
from pathlib import Path

import pytest

# Add repository root to sys.path for module resolution.
PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

PDF_BYTES = b"%PDF-1.4\n" + b"0" * 2048


def square(x: float, y: float, size: float = 1.0) -> list:
    """Flat clockwise polygon of an axis-aligned square."""
    return [x, y, x + size, y, x + size, y + size, x, y + size]


class RecordingEvent(threading.Event):
    """Event whose waits return immediately and are recorded."""

    def __init__(self, set_after: int | None = None):
        super().__init__()
        self.waits: list = []
        self._set_after = set_after

    def wait(self, timeout=None):
        self.waits.append(timeout)
        if self._set_after is not None and len(self.waits) >= self._set_after:
            self.set()
        return self.is_set()


@pytest.fixture
def recording_event() -> RecordingEvent:
    return RecordingEvent()


@pytest.fixture
def make_event():
    """Factory for events that set themselves on the n-th wait."""
    return RecordingEvent


@pytest.fixture
def analyze_result_payload() -> dict:
    """Two pages, one key-value pair, one 2x2 table and one invoice record."""
    return {
        "apiVersion": "2024-02-29-preview",
        "modelId": "prebuilt-invoice",
        "content": "Invoice ACME\nTotal $10.00\nPage two",
        "pages": [
            {
                "pageNumber": 1,
                "width": 8.5,
                "height": 11,
                "unit": "inch",
                "words": [
                    {"content": "Invoice", "polygon": square(1, 1), "confidence": 0.99, "span": {"offset": 0, "length": 7}},
                    {"content": "ACME", "polygon": square(3, 1), "confidence": 0.65, "span": {"offset": 8, "length": 4}},
                ],
                "lines": [
                    {"content": "Invoice ACME", "polygon": [1, 1, 4, 1, 4, 2, 1, 2], "spans": [{"offset": 0, "length": 12}]},
                    {"content": "Total $10.00", "polygon": [1, 3, 4, 3, 4, 4, 1, 4], "spans": [{"offset": 13, "length": 12}]},
                ],
                "spans": [{"offset": 0, "length": 25}],
            },
            {
                "pageNumber": 2,
                "width": 8.5,
                "height": 11,
                "unit": "inch",
                "words": [
                    {"content": "Page", "polygon": square(1, 1), "confidence": 0.4},
                ],
                "lines": [
                    {"content": "Page two", "polygon": [1, 1, 3, 1, 3, 2, 1, 2], "spans": [{"offset": 26, "length": 8}]},
                ],
            },
        ],
        "keyValuePairs": [
            {
                "key": {
                    "content": "Total",
                    "boundingRegions": [{"pageNumber": 1, "polygon": square(1, 3)}],
                    "spans": [{"offset": 13, "length": 5}],
                },
                "value": {
                    "content": "$10.00",
                    "boundingRegions": [{"pageNumber": 1, "polygon": square(3, 3)}],
                    "spans": [{"offset": 19, "length": 6}],
                },
                "confidence": 0.87,
            }
        ],
        "tables": [
            {
                "rowCount": 2,
                "columnCount": 2,
                "cells": [
                    {"rowIndex": 0, "columnIndex": 0, "content": "Item", "kind": "columnHeader",
                     "boundingRegions": [{"pageNumber": 1, "polygon": square(1, 5)}]},
                    {"rowIndex": 0, "columnIndex": 1, "content": "Price", "kind": "columnHeader",
                     "boundingRegions": [{"pageNumber": 1, "polygon": square(2, 5)}]},
                    {"rowIndex": 1, "columnIndex": 0, "content": "Widget",
                     "boundingRegions": [{"pageNumber": 1, "polygon": square(1, 6)}]},
                    {"rowIndex": 1, "columnIndex": 1, "content": "$10.00",
                     "boundingRegions": [{"pageNumber": 1, "polygon": square(2, 6)}]},
                ],
            }
        ],
        "documents": [
            {
                "docType": "invoice",
                "confidence": 0.95,
                "fields": {
                    "VendorName": {
                        "type": "string",
                        "valueString": "ACME",
                        "content": "ACME",
                        "confidence": 0.93,
                        "boundingRegions": [{"pageNumber": 1, "polygon": square(3, 1)}],
                    },
                    "InvoiceTotal": {
                        "type": "currency",
                        "valueCurrency": {"amount": 10.0, "currencyCode": "USD", "currencySymbol": "$"},
                        "content": "$10.00",
                        "confidence": 0.91,
                        "boundingRegions": [{"pageNumber": 1, "polygon": square(3, 3)}],
                    },
                    "PageNote": {
                        "type": "string",
                        "content": "Page two",
                        "spans": [{"offset": 28, "length": 8}],
                    },
                    "EmptyField": {"type": "string", "content": ""},
                },
            }
        ],
    }
