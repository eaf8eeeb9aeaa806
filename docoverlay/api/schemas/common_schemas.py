"""
Common schemas shared across different API endpoints
"""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class PointSchema(BaseModel):
    x: float
    y: float


class BoundingBoxSchema(BaseModel):
    x: float
    y: float
    width: float
    height: float
    points: List[PointSchema] = Field(default_factory=list)


class SelectionSchema(BaseModel):
    documentId: str
    selectedId: str | None = None
    highlightedId: str | None = None
