"""
AnalysisResult Entity - immutable snapshot of a completed remote analysis.

Domain Rules:
- Pages are 1-based and their numbers strictly increase across the page list
- Polygons are kept exactly as reported; validation happens where geometry is
  consumed so one malformed region never prevents the rest from loading
- Collections are tuples so a result can be shared between threads and views
  without copying
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..value_objects.field_value import FieldValue, StringValue, parse_field_value

logger = logging.getLogger(__name__)

RawPolygon = Tuple[float, ...]


def _polygon(raw: Any) -> RawPolygon:
    if not raw or isinstance(raw, (str, bytes)):
        return ()
    return tuple(raw)


def _float(raw: Any, default: float = 0.0) -> float:
    try:
        return float(raw)
    except (TypeError, ValueError):
        return default


def _optional_float(raw: Any) -> Optional[float]:
    if raw is None:
        return None
    try:
        return float(raw)
    except (TypeError, ValueError):
        return None


def _mappings(raw: Any) -> List[Mapping[str, Any]]:
    if not raw:
        return []
    return [item for item in raw if isinstance(item, Mapping)]


@dataclass(frozen=True)
class Span:
    """Character range into :attr:`AnalysisResult.content`."""
    offset: int
    length: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Span:
        return cls(offset=int(data.get("offset", 0) or 0), length=int(data.get("length", 0) or 0))

    def to_dict(self) -> Dict[str, int]:
        return {"offset": self.offset, "length": self.length}


def _spans(raw: Any) -> Tuple[Span, ...]:
    return tuple(Span.from_dict(item) for item in _mappings(raw))


@dataclass(frozen=True)
class BoundingRegion:
    """Explicit page + polygon attached to an entity."""
    page_number: int
    polygon: RawPolygon = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BoundingRegion:
        return cls(
            page_number=int(data.get("pageNumber") or 0),
            polygon=_polygon(data.get("polygon")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"pageNumber": self.page_number, "polygon": list(self.polygon)}


def _regions(raw: Any) -> Tuple[BoundingRegion, ...]:
    return tuple(BoundingRegion.from_dict(item) for item in _mappings(raw))


@dataclass(frozen=True)
class Word:
    content: str
    polygon: RawPolygon
    confidence: Optional[float]
    span: Optional[Span] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Word:
        span_data = data.get("span")
        return cls(
            content=str(data.get("content") or ""),
            polygon=_polygon(data.get("polygon")),
            confidence=_optional_float(data.get("confidence")),
            span=Span.from_dict(span_data) if isinstance(span_data, Mapping) else None,
        )


@dataclass(frozen=True)
class Line:
    content: str
    polygon: RawPolygon
    spans: Tuple[Span, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Line:
        return cls(
            content=str(data.get("content") or ""),
            polygon=_polygon(data.get("polygon")),
            spans=_spans(data.get("spans")),
        )


@dataclass(frozen=True)
class AnalysisPage:
    """A page of the analysed document in document units."""
    page_number: int
    width: float
    height: float
    unit: str = "inch"
    angle: float = 0.0
    words: Tuple[Word, ...] = ()
    lines: Optional[Tuple[Line, ...]] = None
    spans: Tuple[Span, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], default_number: int = 1) -> AnalysisPage:
        raw_lines = data.get("lines")
        return cls(
            page_number=int(data.get("pageNumber") or default_number),
            width=_float(data.get("width")),
            height=_float(data.get("height")),
            unit=str(data.get("unit") or "inch"),
            angle=_float(data.get("angle")),
            words=tuple(Word.from_dict(item) for item in _mappings(data.get("words"))),
            lines=None if raw_lines is None else tuple(Line.from_dict(item) for item in _mappings(raw_lines)),
            spans=_spans(data.get("spans")),
        )


@dataclass(frozen=True)
class DocumentElement:
    """One side of a key-value pair."""
    content: str
    polygon: RawPolygon = ()
    bounding_regions: Tuple[BoundingRegion, ...] = ()
    spans: Tuple[Span, ...] = ()

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> Optional[DocumentElement]:
        if not isinstance(data, Mapping):
            return None
        return cls(
            content=str(data.get("content") or ""),
            polygon=_polygon(data.get("polygon")),
            bounding_regions=_regions(data.get("boundingRegions")),
            spans=_spans(data.get("spans")),
        )

    def has_spatial_content(self) -> bool:
        return bool(self.content or self.polygon or self.bounding_regions)


@dataclass(frozen=True)
class TableCell:
    row_index: int
    column_index: int
    content: str
    kind: str = "content"
    row_span: int = 1
    column_span: int = 1
    polygon: RawPolygon = ()
    bounding_regions: Tuple[BoundingRegion, ...] = ()
    spans: Tuple[Span, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TableCell:
        return cls(
            row_index=int(data.get("rowIndex") or 0),
            column_index=int(data.get("columnIndex") or 0),
            content=str(data.get("content") or ""),
            kind=str(data.get("kind") or "content"),
            row_span=int(data.get("rowSpan") or 1),
            column_span=int(data.get("columnSpan") or 1),
            polygon=_polygon(data.get("polygon")),
            bounding_regions=_regions(data.get("boundingRegions")),
            spans=_spans(data.get("spans")),
        )


@dataclass(frozen=True)
class Table:
    row_count: int
    column_count: int
    cells: Tuple[TableCell, ...] = ()
    bounding_regions: Tuple[BoundingRegion, ...] = ()
    spans: Tuple[Span, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Table:
        return cls(
            row_count=int(data.get("rowCount") or 0),
            column_count=int(data.get("columnCount") or 0),
            cells=tuple(TableCell.from_dict(item) for item in _mappings(data.get("cells"))),
            bounding_regions=_regions(data.get("boundingRegions")),
            spans=_spans(data.get("spans")),
        )


@dataclass(frozen=True)
class KeyValuePair:
    key: Optional[DocumentElement]
    value: Optional[DocumentElement]
    confidence: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> KeyValuePair:
        return cls(
            key=DocumentElement.from_dict(data.get("key")),
            value=DocumentElement.from_dict(data.get("value")),
            confidence=_optional_float(data.get("confidence")),
        )


@dataclass(frozen=True)
class DocumentFieldEntry:
    """A named semantic field of a :class:`DocumentRecord`."""
    name: str
    value_type: str
    content: str
    value: FieldValue = field(default_factory=lambda: StringValue(""))
    confidence: Optional[float] = None
    bounding_regions: Tuple[BoundingRegion, ...] = ()
    spans: Tuple[Span, ...] = ()

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any]) -> DocumentFieldEntry:
        return cls(
            name=name,
            value_type=str(data.get("type") or "string"),
            content=str(data.get("content") or ""),
            value=parse_field_value(data),
            confidence=_optional_float(data.get("confidence")),
            bounding_regions=_regions(data.get("boundingRegions")),
            spans=_spans(data.get("spans")),
        )


@dataclass(frozen=True)
class DocumentRecord:
    """A semantic document (invoice, receipt ...) recognised by a prebuilt model."""
    doc_type: str
    fields: Tuple[DocumentFieldEntry, ...] = ()
    confidence: Optional[float] = None
    bounding_regions: Tuple[BoundingRegion, ...] = ()
    spans: Tuple[Span, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DocumentRecord:
        raw_fields = data.get("fields") or {}
        entries: List[DocumentFieldEntry] = []
        if isinstance(raw_fields, Mapping):
            for name, value in raw_fields.items():
                if not isinstance(value, Mapping):
                    continue
                try:
                    entries.append(DocumentFieldEntry.from_dict(str(name), value))
                except (TypeError, ValueError, AttributeError) as exc:
                    logger.warning(
                        "Skipping document field %s with malformed payload: %s",
                        name,
                        exc,
                        extra={"field_name": str(name)},
                    )
        return cls(
            doc_type=str(data.get("docType") or ""),
            fields=tuple(entries),
            confidence=_optional_float(data.get("confidence")),
            bounding_regions=_regions(data.get("boundingRegions")),
            spans=_spans(data.get("spans")),
        )


@dataclass(frozen=True)
class AnalysisResult:
    """
    Immutable snapshot of a completed analysis.

    Produced once per successful poll sequence and never mutated afterwards.
    """
    content: str
    pages: Tuple[AnalysisPage, ...]
    tables: Optional[Tuple[Table, ...]] = None
    key_value_pairs: Optional[Tuple[KeyValuePair, ...]] = None
    documents: Optional[Tuple[DocumentRecord, ...]] = None
    model_id: str = ""
    api_version: str = ""

    def __post_init__(self):
        previous = 0
        for page in self.pages:
            if page.page_number <= previous:
                raise ValueError(
                    f"Page numbers must be unique and increasing (got {page.page_number} after {previous})"
                )
            previous = page.page_number

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AnalysisResult:
        """Build from the engine's ``analyzeResult`` object."""
        return cls(
            content=str(data.get("content") or ""),
            pages=tuple(
                AnalysisPage.from_dict(item, default_number=index + 1)
                for index, item in enumerate(_mappings(data.get("pages")))
            ),
            tables=_optional_tuple(Table.from_dict, data.get("tables")),
            key_value_pairs=_optional_tuple(KeyValuePair.from_dict, data.get("keyValuePairs")),
            documents=_optional_tuple(DocumentRecord.from_dict, data.get("documents")),
            model_id=str(data.get("modelId") or ""),
            api_version=str(data.get("apiVersion") or ""),
        )

    @classmethod
    def from_operation(cls, body: Optional[Mapping[str, Any]]) -> Optional[AnalysisResult]:
        """
        Build from a full operation body (``{"status": ..., "analyzeResult": {...}}``).

        Returns ``None`` when the body carries no analysis payload.
        """
        if not body:
            return None
        payload = body.get("analyzeResult")
        if not isinstance(payload, Mapping):
            return None
        return cls.from_dict(payload)

    def find_page(self, page_number: int) -> Optional[AnalysisPage]:
        for page in self.pages:
            if page.page_number == page_number:
                return page
        return None

    @property
    def page_count(self) -> int:
        return len(self.pages)


def _optional_tuple(factory, raw: Any) -> Optional[Tuple[Any, ...]]:
    if raw is None:
        return None
    return tuple(factory(item) for item in _mappings(raw))
