"""API v1 routers package."""

from . import documents, fields, selection

__all__ = [
    "documents",
    "fields",
    "selection",
]
