"""
Unit tests for the Document entity
"""
import pytest

from docoverlay.domain.entities.analysis_result import AnalysisResult
from docoverlay.domain.entities.document import Document, DocumentStatus, DocumentType
from docoverlay.domain.entities.extracted_field import ExtractedField
from docoverlay.domain.value_objects.field_kind import FieldKind
from docoverlay.domain.value_objects.operation_status import OperationStatus


class TestDocumentType:
    @pytest.mark.parametrize(
        "filename,expected",
        [
            ("ACME-Invoice-0042.pdf", DocumentType.INVOICE),
            ("lease_contract.pdf", DocumentType.CONTRACT),
            ("Receipt.PDF", DocumentType.RECEIPT),
            ("scan.pdf", DocumentType.LAYOUT),
        ],
    )
    def test_detect(self, filename, expected):
        assert DocumentType.detect(filename) == expected

    def test_model_ids(self):
        assert DocumentType.INVOICE.model_id == "prebuilt-invoice"
        assert DocumentType.CUSTOM.model_id == "prebuilt-layout"


class TestCreate:
    def test_model_follows_filename(self):
        document = Document.create("invoice.pdf", b"%PDF")
        assert document.document_type == DocumentType.INVOICE
        assert document.model_id == "prebuilt-invoice"
        assert document.status == DocumentStatus.UPLOADED
        assert len(document.document_id) == 32

    def test_explicit_prebuilt_model(self):
        document = Document.create("scan.pdf", b"%PDF", model_id="prebuilt-receipt")
        assert document.document_type == DocumentType.RECEIPT

    def test_custom_model(self):
        document = Document.create("scan.pdf", b"%PDF", model_id="my-trained-model")
        assert document.document_type == DocumentType.CUSTOM
        assert document.model_id == "my-trained-model"


class TestLifecycle:
    def test_snapshots_are_new_objects(self):
        document = Document.create("scan.pdf", b"%PDF", document_id="doc-1")
        processing = document.start_processing()
        assert processing is not document
        assert document.status == DocumentStatus.UPLOADED
        assert processing.status == DocumentStatus.PROCESSING

    def test_with_operation(self):
        status = OperationStatus.submitted("op-1")
        document = Document.create("scan.pdf", b"%PDF").with_operation(status)
        assert document.operation is status
        assert document.status == DocumentStatus.PROCESSING

    def test_with_analysis_swaps_result_and_fields(self, analyze_result_payload):
        result = AnalysisResult.from_dict(analyze_result_payload)
        extracted = ExtractedField(id="word-0", kind=FieldKind.WORD, label="Word", value="x", confidence=0.9)
        document = Document.create("scan.pdf", b"%PDF").with_failure("earlier failure")

        completed = document.with_analysis(result, [extracted])

        assert completed.status == DocumentStatus.COMPLETED
        assert completed.result is result
        assert completed.fields == (extracted,)
        assert completed.error_message is None
        assert completed.find_field("word-0") is extracted
        assert completed.find_field("word-9") is None

    def test_summary(self, analyze_result_payload):
        result = AnalysisResult.from_dict(analyze_result_payload)
        summary = Document.create("scan.pdf", b"%PDF-1.4", document_id="doc-1").with_analysis(result, ()).to_summary()
        assert summary["document_id"] == "doc-1"
        assert summary["page_count"] == 2
        assert summary["field_count"] == 0
        assert summary["size"] == 8
        assert summary["status"] == "completed"


def test_extracted_field_normalizes_inputs():
    extracted = ExtractedField(id="x", kind=FieldKind.LINE, label="Text Line", value="Hello", confidence=None, page_number=0)
    assert extracted.confidence.value == 1.0
    assert extracted.page_number == 1
    assert extracted.matches_text("hell")
    assert extracted.to_dict()["polygon"] is None
    with pytest.raises(ValueError):
        ExtractedField(id="", kind=FieldKind.WORD, label="", value="", confidence=1.0)
