import logging
from typing import Mapping, Optional

from cell_coercion import COLUMN_TYPES, EMAIL, NUMBER, TEXT
from table_errors import DuplicateColumnId, InvalidColumnSet, InvalidColumnSpec
from table_state import Column, derive_column_id

logger = logging.getLogger(__name__)


class ColumnRegistry:
    """Column schema, visibility and display order."""

    _TYPE_MAP = {
        "text": TEXT,
        "str": TEXT,
        "string": TEXT,
        "number": NUMBER,
        "int": NUMBER,
        "integer": NUMBER,
        "float": NUMBER,
        "numeric": NUMBER,
        "email": EMAIL,
        "mail": EMAIL,
    }

    def __init__(self, state, row_store):
        self.state = state
        self.row_store = row_store

    # ---------- lookups ----------
    def get(self, column_id: str) -> Column | None:
        return self.state.get_column(column_id)

    def columns(self) -> list[Column]:
        return list(self.state.columns)

    def visible_columns(self) -> list[Column]:
        by_id = {col.id: col for col in self.state.columns}
        return [by_id[col_id] for col_id in self.state.visible_columns if col_id in by_id]

    def is_visible(self, column_id: str) -> bool:
        return column_id in self.state.visible_columns

    # ---------- schema ----------
    def normalize_type(self, text) -> Optional[str]:
        if text is None:
            return TEXT
        return self._TYPE_MAP.get(str(text).strip().lower())

    def add_column(self, spec: Mapping) -> Column:
        label = str(spec.get("label") or "").strip()
        if not label:
            raise InvalidColumnSpec("Column label is required")

        col_type = self.normalize_type(spec.get("type"))
        if col_type is None:
            raise InvalidColumnSpec("Use one of: " + "/".join(COLUMN_TYPES))

        col_id = str(spec.get("id") or "").strip() or derive_column_id(label)
        if self.get(col_id) is not None:
            raise DuplicateColumnId(col_id)

        column = Column(col_id, label, col_type, bool(spec.get("required", False)))
        self.state.columns.append(column)
        self.state.touch()
        filled = self.row_store.backfill_column(column)
        logger.debug("Added column '%s' (%s), back-filled %d rows", col_id, col_type, filled)
        return column

    # ---------- visibility ----------
    def toggle_visibility(self, column_id: str) -> bool:
        if column_id in self.state.visible_columns:
            self.state.visible_columns.remove(column_id)
            return True
        if self.get(column_id) is None:
            return False
        self.state.visible_columns.append(column_id)
        return True

    def set_visible_order(self, ordered_ids) -> None:
        ordered = list(ordered_ids)
        seen = set()
        dupes = []
        for col_id in ordered:
            if col_id in seen:
                dupes.append(col_id)
            seen.add(col_id)
        if dupes:
            raise InvalidColumnSet("Duplicate column ids in order", dupes)

        unknown = [col_id for col_id in ordered if self.get(col_id) is None]
        if unknown:
            raise InvalidColumnSet("Unknown column ids in order", unknown)

        self.state.visible_columns = ordered

    def move_visible_column(self, from_index: int, to_index: int) -> None:
        order = list(self.state.visible_columns)
        if not 0 <= from_index < len(order):
            raise InvalidColumnSet(f"No visible column at position {from_index}")
        moved = order.pop(from_index)
        to_index = max(0, min(to_index, len(order)))
        order.insert(to_index, moved)
        self.set_visible_order(order)
