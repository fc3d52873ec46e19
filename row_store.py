import logging

from cell_coercion import cell_text, coerce_cell_value
from table_errors import InvalidCellValue
from table_state import Column, Row, derive_column_id

logger = logging.getLogger(__name__)


class RowStore:
    """Row collection operations over a TableState."""

    def __init__(self, state):
        self.state = state

    # ---------- lookups ----------
    def get(self, row_id: int) -> Row | None:
        return self.state.rows.get(row_id)

    def rows(self) -> list[Row]:
        return list(self.state.rows.values())

    def __len__(self):
        return len(self.state.rows)

    def __contains__(self, row_id):
        return row_id in self.state.rows

    # ---------- ids ----------
    def allocate_id(self) -> int:
        highest = max(self.state.rows, default=0)
        row_id = max(self.state.next_row_id, highest + 1)
        self.state.next_row_id = row_id + 1
        return row_id

    # ---------- coercion ----------
    def _coerce_fields(self, fields: dict) -> tuple[dict, dict]:
        values = {}
        extras = {}
        for key, raw in fields.items():
            if key == "id":
                continue
            col = self.state.get_column(key)
            if col is None:
                extras[key] = raw
                continue
            try:
                values[key] = coerce_cell_value(col.type, raw, strict=True)
            except (TypeError, ValueError):
                raise InvalidCellValue(key, raw) from None
        return values, extras

    # ---------- mutations ----------
    def add_row(self, fields: dict | None = None) -> Row:
        values, extras = self._coerce_fields(dict(fields or {}))
        for col in self.state.columns:
            values.setdefault(col.id, col.default)
        row = Row(self.allocate_id(), values, extras)
        self.state.rows[row.id] = row
        self.state.touch()
        logger.debug("Added row %s", row.id)
        return row

    def update_row(self, row_id: int, fields: dict) -> bool:
        row = self.state.rows.get(row_id)
        if row is None:
            return False
        values, extras = self._coerce_fields(dict(fields))
        row.values.update(values)
        row.extras.update(extras)
        self.state.touch()
        return True

    def delete_row(self, row_id: int) -> bool:
        if row_id not in self.state.rows:
            return False
        del self.state.rows[row_id]
        self.state.editing.pop(row_id, None)
        self.state.touch()
        logger.debug("Deleted row %s", row_id)
        return True

    def bulk_replace(self, rows) -> None:
        """Replace every stored row. Open edits are discarded."""
        replacement = {}
        for row in rows:
            replacement[row.id] = row
        self.state.rows = replacement
        self.state.editing = {}
        if replacement:
            self.state.next_row_id = max(self.state.next_row_id, max(replacement) + 1)
        self.state.touch()

    def backfill_column(self, column: Column) -> int:
        filled = 0
        promoted = False
        target = column.id.lower()
        for row in self.state.rows.values():
            if column.id in row.values:
                continue
            # imported extras that name this column become its typed value
            matches = [key for key in row.extras if derive_column_id(str(key)) == target]
            if matches:
                raws = [row.extras.pop(key) for key in matches]
                raw = next((v for v in raws if cell_text(v).strip()), raws[0])
                row.values[column.id] = coerce_cell_value(column.type, raw, strict=False)
                promoted = True
                continue
            row.values[column.id] = column.default
            filled += 1
        if filled or promoted:
            self.state.touch()
        return filled
