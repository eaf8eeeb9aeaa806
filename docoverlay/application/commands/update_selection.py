"""UpdateSelection Command - click / hover / click-outside on either view."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from docoverlay.application.dto.field_dto import SelectionDTO
from docoverlay.application.selection_registry import SelectionRegistry
from docoverlay.domain.repositories.document_repository import DocumentRepository


class SelectionAction(str, Enum):
    SELECT = "select"
    HOVER = "hover"
    CLEAR = "clear"


class UnknownField(ValueError):
    """Raised when a field id is not part of the document's current field list."""


@dataclass(frozen=True)
class UpdateSelectionCommand:
    document_id: str
    action: SelectionAction
    field_id: Optional[str] = None


class UpdateSelectionHandler:
    def __init__(self, repository: DocumentRepository, selections: SelectionRegistry):
        self._documents = repository
        self._selections = selections

    def handle(self, command: UpdateSelectionCommand) -> SelectionDTO:
        """
        Apply the action to the document's shared selection.

        ``select`` needs a field id; ``hover`` with no field id clears the
        highlight; ``clear`` drops the selection.

        Raises:
            DocumentNotFound: If the document does not exist
            UnknownField: If the field id is missing or not in the field list
        """
        document = self._documents.get(command.document_id)
        linker = self._selections.linker_for(document.document_id)

        if command.field_id is not None and document.find_field(command.field_id) is None:
            raise UnknownField(f"Unknown field id: {command.field_id}")

        if command.action == SelectionAction.SELECT:
            if command.field_id is None:
                raise UnknownField("A field id is required to select a field")
            state = linker.select(command.field_id)
        elif command.action == SelectionAction.HOVER:
            state = linker.hover(command.field_id)
        else:
            state = linker.clear_selection()

        return SelectionDTO.from_state(document.document_id, state)
