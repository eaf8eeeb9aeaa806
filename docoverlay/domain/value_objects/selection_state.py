"""Selection / highlight snapshot shared by the overlay and the results list."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class SelectionState:
    """
    Immutable pair of field ids.

    At most one field is selected and at most one is highlighted; a selection
    always implies no highlight.
    """
    selected_id: Optional[str] = None
    highlighted_id: Optional[str] = None

    def __post_init__(self):
        if self.selected_id is not None and self.highlighted_id is not None:
            raise ValueError("A selected field suppresses any highlight")

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {"selected_id": self.selected_id, "highlighted_id": self.highlighted_id}


EMPTY_SELECTION = SelectionState()
