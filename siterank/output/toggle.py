"""Show/hide state for the detail panels of a rendered results table."""

from __future__ import annotations

from dataclasses import dataclass

from .viewmodel import HIDE_LABEL, SHOW_LABEL, ViewModel


@dataclass
class RowState:
    """Expansion state of one row's detail panel."""
    expanded: bool = False


class DetailToggleController:
    """Owns one RowState per rendered row.

    Rows start collapsed. Toggling a row flips only that row. Attaching a new
    view model discards every previous row.
    """

    def __init__(self, view_model: ViewModel | None = None):
        self._view_model: ViewModel | None = None
        self._rows: dict[str, RowState] = {}
        if view_model is not None:
            self.attach(view_model)

    def attach(self, view_model: ViewModel) -> None:
        """Create collapsed state for every row of a freshly rendered table."""
        self._view_model = view_model
        self._rows = {row.row_id: RowState() for row in view_model.rows}

    def detach(self) -> None:
        """Drop all row state; called when the results panel is replaced."""
        self._view_model = None
        self._rows = {}

    @property
    def attached(self) -> bool:
        return self._view_model is not None

    def toggle(self, row_id: str) -> bool:
        """Flip one row between collapsed and expanded.

        Args:
            row_id: Row identifier from the view model

        Returns:
            The row's new expanded state

        Raises:
            KeyError: If the row does not exist in the current table
        """
        state = self._rows[row_id]
        state.expanded = not state.expanded
        return state.expanded

    def toggle_rank(self, rank: int) -> bool:
        """Toggle the row shown at a 1-based rank."""
        if self._view_model is None:
            raise KeyError(rank)
        return self.toggle(self._view_model.row_id_for_rank(rank))

    def is_expanded(self, row_id: str) -> bool:
        return self._rows[row_id].expanded

    def label(self, row_id: str) -> str:
        """Label for the row's toggle control: the next available action."""
        return HIDE_LABEL if self.is_expanded(row_id) else SHOW_LABEL

    def expanded_rows(self) -> list[str]:
        """Row ids currently expanded, in table order."""
        return [row_id for row_id, state in self._rows.items() if state.expanded]

    def expand_all(self) -> None:
        for state in self._rows.values():
            state.expanded = True

    def collapse_all(self) -> None:
        for state in self._rows.values():
            state.expanded = False
