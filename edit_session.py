import logging

logger = logging.getLogger(__name__)


class EditSession:
    """Rows open for inline editing and their uncommitted values.

    Pending values live in ``state.editing`` keyed by row id, one dict per
    row, so rows never share pending state. Nothing reaches the row store
    until ``save_edit``.
    """

    def __init__(self, state, row_store):
        self.state = state
        self.row_store = row_store

    # ---------- queries ----------
    def is_editing(self, row_id: int) -> bool:
        return row_id in self.state.editing

    def editing_rows(self) -> list[int]:
        return list(self.state.editing)

    def pending_values(self, row_id: int) -> dict:
        return dict(self.state.editing.get(row_id, {}))

    # ---------- transitions ----------
    def begin_edit(self, row_id: int) -> bool:
        if row_id in self.state.editing:
            return True
        row = self.row_store.get(row_id)
        if row is None:
            return False
        self.state.editing[row_id] = {
            col.id: row.get(col.id, col.default) for col in self.state.columns
        }
        return True

    def set_pending_value(self, row_id: int, column_id: str, value) -> bool:
        pending = self.state.editing.get(row_id)
        if pending is None:
            return False
        if self.state.get_column(column_id) is None:
            return False
        pending[column_id] = value
        return True

    def save_edit(self, row_id: int) -> bool:
        pending = self.state.editing.get(row_id)
        if pending is None:
            return False
        # update_row coerces every field before writing any of them
        self.row_store.update_row(row_id, pending)
        del self.state.editing[row_id]
        logger.debug("Saved %d pending values for row %s", len(pending), row_id)
        return True

    def cancel_edit(self, row_id: int) -> bool:
        return self.state.editing.pop(row_id, None) is not None

    def save_all(self) -> int:
        saved = 0
        first_error = None
        for row_id in self.editing_rows():
            try:
                if self.save_edit(row_id):
                    saved += 1
            except ValueError as exc:
                if first_error is None:
                    first_error = exc
        if first_error is not None:
            raise first_error
        return saved

    def cancel_all(self) -> int:
        count = len(self.state.editing)
        self.state.editing = {}
        return count
