"""
FieldDecomposer domain service.

Flattens a hierarchical :class:`AnalysisResult` into an ordered tuple of
:class:`ExtractedField`. The traversal order fixes the identifiers:

1. pages in order; per page its words then its lines
   (``word-N`` / ``line-N`` use running counters across all pages)
2. key-value pairs in source order, up to two fields each
   (``kvp-key-I`` / ``kvp-value-I``)
3. tables in order, one field per cell (``table-T-cell-C``)
4. semantic document records, one field per bounding region of each field
   (``doc-field-D-<name>-R``)

A field whose polygon is malformed is logged and skipped; counters still
advance so the identifiers of its neighbours do not shift.
"""
from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

from docoverlay.domain.entities.analysis_result import (
    AnalysisPage,
    AnalysisResult,
    BoundingRegion,
    DocumentElement,
    DocumentFieldEntry,
    Span,
)
from docoverlay.domain.entities.extracted_field import ExtractedField
from docoverlay.domain.exceptions import InvalidGeometry
from docoverlay.domain.services.span_locator import page_for_span
from docoverlay.domain.value_objects.confidence import Confidence
from docoverlay.domain.value_objects.field_kind import FieldKind
from docoverlay.domain.value_objects.field_value import AmountValue, DateValue, FieldValue, ListValue
from docoverlay.domain.value_objects.geometry import Polygon

logger = logging.getLogger(__name__)

_UPPERCASE = re.compile(r"([A-Z])")


def format_field_name(field_name: str) -> str:
    """
    Turn a camelCase / PascalCase field name into a label.

    Examples:
        >>> format_field_name("VendorName")
        'Vendor Name'
        >>> format_field_name("invoiceId")
        'Invoice Id'
    """
    spaced = _UPPERCASE.sub(r" \1", field_name or "").strip()
    return spaced[:1].upper() + spaced[1:]


def _span_dicts(spans: Sequence[Span]) -> List[Dict[str, int]]:
    return [span.to_dict() for span in spans]


def _typed_value_metadata(value: FieldValue) -> Dict[str, Any]:
    if isinstance(value, DateValue):
        return {"date": value.value.isoformat()}
    if isinstance(value, AmountValue):
        return {"amount": value.amount, "currency": value.currency_code}
    if isinstance(value, ListValue):
        return {"items": [item.display() for item in value.items]}
    return {}


class FieldDecomposer:
    """
    Domain service producing the flat field list for one analysis result.

    Stateless: :meth:`decompose` keeps its counters locally, so one instance
    can serve concurrent callers.
    """

    def decompose(self, result: Optional[AnalysisResult]) -> Tuple[ExtractedField, ...]:
        """
        Flatten ``result``.

        Returns:
            Fields in traversal order; empty when ``result`` is ``None``
        """
        if result is None:
            return ()

        fields: List[ExtractedField] = []
        fields.extend(self._page_fields(result.pages))
        fields.extend(self._key_value_fields(result))
        fields.extend(self._table_fields(result))
        fields.extend(self._document_fields(result))

        logger.debug("Decomposed analysis result into %s fields", len(fields))
        return tuple(fields)

    # ------------------------------------------------------------------
    # Traversal steps
    # ------------------------------------------------------------------
    def _page_fields(self, pages: Sequence[AnalysisPage]) -> List[ExtractedField]:
        fields: List[ExtractedField] = []
        word_index = 0
        line_index = 0

        for page in pages:
            for word in page.words:
                field_id = f"word-{word_index}"
                word_index += 1
                extracted = self._build(
                    field_id,
                    raw_polygon=word.polygon,
                    kind=FieldKind.WORD,
                    label="Word",
                    value=word.content,
                    confidence=Confidence.from_raw(word.confidence),
                    page_number=page.page_number,
                    metadata={"spans": [word.span.to_dict()] if word.span else []},
                )
                if extracted is not None:
                    fields.append(extracted)

            for line in page.lines or ():
                field_id = f"line-{line_index}"
                line_index += 1
                extracted = self._build(
                    field_id,
                    raw_polygon=line.polygon,
                    kind=FieldKind.LINE,
                    label="Text Line",
                    value=line.content,
                    # The engine reports no per-line confidence.
                    confidence=Confidence(1.0),
                    page_number=page.page_number,
                    metadata={"spans": _span_dicts(line.spans)},
                )
                if extracted is not None:
                    fields.append(extracted)

        return fields

    def _key_value_fields(self, result: AnalysisResult) -> List[ExtractedField]:
        fields: List[ExtractedField] = []
        for index, pair in enumerate(result.key_value_pairs or ()):
            confidence = Confidence.from_raw(pair.confidence)

            if pair.key is not None and pair.key.has_spatial_content():
                extracted = self._element_field(
                    f"kvp-key-{index}",
                    pair.key,
                    result,
                    label="Key",
                    confidence=confidence,
                    metadata={"role": "key", "pair_index": index},
                )
                if extracted is not None:
                    fields.append(extracted)

            if pair.value is not None and pair.value.has_spatial_content():
                label = pair.key.content if pair.key is not None and pair.key.content else "Value"
                extracted = self._element_field(
                    f"kvp-value-{index}",
                    pair.value,
                    result,
                    label=label,
                    confidence=confidence,
                    metadata={"role": "value", "pair_index": index},
                )
                if extracted is not None:
                    fields.append(extracted)

        return fields

    def _table_fields(self, result: AnalysisResult) -> List[ExtractedField]:
        fields: List[ExtractedField] = []
        for table_index, table in enumerate(result.tables or ()):
            for cell_index, cell in enumerate(table.cells):
                raw_polygon, page_number = self._locate(
                    cell.polygon, cell.bounding_regions, cell.spans, result
                )
                extracted = self._build(
                    f"table-{table_index}-cell-{cell_index}",
                    raw_polygon=raw_polygon,
                    kind=FieldKind.TABLE_CELL,
                    label=f"Table {table_index + 1} Cell",
                    value=cell.content,
                    # The engine reports no per-cell confidence.
                    confidence=Confidence(1.0),
                    page_number=page_number,
                    metadata={
                        "table_index": table_index,
                        "cell_index": cell_index,
                        "row": cell.row_index,
                        "col": cell.column_index,
                        "row_span": cell.row_span,
                        "col_span": cell.column_span,
                        "cell_kind": cell.kind,
                        "spans": _span_dicts(cell.spans),
                    },
                )
                if extracted is not None:
                    fields.append(extracted)
        return fields

    def _document_fields(self, result: AnalysisResult) -> List[ExtractedField]:
        fields: List[ExtractedField] = []
        for doc_index, record in enumerate(result.documents or ()):
            for entry in record.fields:
                value = entry.content or entry.value.display()
                if not value:
                    continue
                fields.extend(self._document_field_regions(doc_index, record.doc_type, entry, value, result))
        return fields

    def _document_field_regions(
        self,
        doc_index: int,
        doc_type: str,
        entry: DocumentFieldEntry,
        value: str,
        result: AnalysisResult,
    ) -> List[ExtractedField]:
        label = format_field_name(entry.name)
        confidence = Confidence.from_raw(entry.confidence)
        base_metadata: Dict[str, Any] = {
            "doc_index": doc_index,
            "doc_type": doc_type,
            "field_name": entry.name,
            "value_type": entry.value_type,
            "value_kind": entry.value.kind,
        }
        base_metadata.update(_typed_value_metadata(entry.value))

        if not entry.bounding_regions:
            extracted = self._build(
                f"doc-field-{doc_index}-{entry.name}-0",
                raw_polygon=(),
                kind=FieldKind.DOCUMENT_FIELD,
                label=label,
                value=value,
                confidence=confidence,
                page_number=page_for_span(entry.spans, result.pages),
                metadata={**base_metadata, "region_index": 0, "spans": _span_dicts(entry.spans)},
            )
            return [extracted] if extracted is not None else []

        fields: List[ExtractedField] = []
        for region_index, region in enumerate(entry.bounding_regions):
            extracted = self._build(
                f"doc-field-{doc_index}-{entry.name}-{region_index}",
                raw_polygon=region.polygon,
                kind=FieldKind.DOCUMENT_FIELD,
                label=label,
                value=value,
                confidence=confidence,
                page_number=region.page_number or 1,
                metadata={**base_metadata, "region_index": region_index},
            )
            if extracted is not None:
                fields.append(extracted)
        return fields

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _element_field(
        self,
        field_id: str,
        element: DocumentElement,
        result: AnalysisResult,
        *,
        label: str,
        confidence: Confidence,
        metadata: Dict[str, Any],
    ) -> Optional[ExtractedField]:
        raw_polygon, page_number = self._locate(
            element.polygon, element.bounding_regions, element.spans, result
        )
        return self._build(
            field_id,
            raw_polygon=raw_polygon,
            kind=FieldKind.KEY_VALUE_PAIR,
            label=label,
            value=element.content,
            confidence=confidence,
            page_number=page_number,
            metadata={**metadata, "spans": _span_dicts(element.spans)},
        )

    @staticmethod
    def _locate(
        polygon: Sequence[float],
        regions: Sequence[BoundingRegion],
        spans: Sequence[Span],
        result: AnalysisResult,
    ) -> Tuple[Sequence[float], int]:
        """Pick geometry and page: explicit region first, span heuristic otherwise."""
        if regions:
            region = regions[0]
            return (polygon or region.polygon), (region.page_number or 1)
        return polygon, page_for_span(spans, result.pages)

    @staticmethod
    def _build(
        field_id: str,
        *,
        raw_polygon: Sequence[float],
        kind: FieldKind,
        label: str,
        value: str,
        confidence: Confidence,
        page_number: int,
        metadata: Dict[str, Any],
    ) -> Optional[ExtractedField]:
        try:
            polygon = Polygon.from_raw(raw_polygon)
        except InvalidGeometry as exc:
            logger.warning(
                "Skipping field %s with malformed polygon: %s",
                field_id,
                exc.message,
                extra={"field_id": field_id},
            )
            return None

        return ExtractedField(
            id=field_id,
            kind=kind,
            label=label,
            value=value,
            confidence=confidence,
            page_number=page_number,
            polygon=polygon,
            metadata=metadata,
        )
