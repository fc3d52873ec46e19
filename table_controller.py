import logging
import os
from typing import Callable

from column_registry import ColumnRegistry
from edit_session import EditSession
from file_type_handler import FileTypeHandler
from import_export import ImportExportAdapter
from row_store import RowStore
from row_validation import validate_row_fields
from table_errors import DuplicateColumnId, TableError
from view_engine import ViewEngine, ViewSnapshot

logger = logging.getLogger(__name__)


class TableController:
    """Routes presentation intents to the table components.

    Failures are reported through ``set_status_cb`` and the intent returns
    False; the table is left as it was so the user can retry.
    """

    def __init__(self, state, set_status_cb: Callable[[str, float], None]):
        self.state = state
        self._set_status = set_status_cb
        self.rows = RowStore(state)
        self.columns = ColumnRegistry(state, self.rows)
        self.view_engine = ViewEngine(state)
        self.edits = EditSession(state, self.rows)
        self.io = ImportExportAdapter(state, self.rows, self.view_engine)

    def view(self) -> ViewSnapshot:
        return self.view_engine.snapshot()

    # ---------- columns ----------
    def add_column(self, label: str, col_type: str = "text", column_id: str | None = None) -> bool:
        try:
            column = self.columns.add_column(
                {"id": column_id, "label": label, "type": col_type}
            )
        except DuplicateColumnId:
            self._set_status("Column with this ID already exists!", 3)
            return False
        except TableError as exc:
            self._set_status(str(exc), 4)
            return False
        self._set_status(f"Added column '{column.label}'", 2)
        return True

    def toggle_column(self, column_id: str) -> bool:
        if not self.columns.toggle_visibility(column_id):
            self._set_status(f"Unknown column '{column_id}'", 3)
            return False
        shown = "shown" if self.columns.is_visible(column_id) else "hidden"
        self._set_status(f"Column '{column_id}' {shown}", 2)
        return True

    def move_column(self, from_index: int, to_index: int) -> bool:
        try:
            self.columns.move_visible_column(from_index, to_index)
        except TableError as exc:
            self._set_status(str(exc), 3)
            return False
        return True

    def set_column_order(self, ordered_ids) -> bool:
        try:
            self.columns.set_visible_order(ordered_ids)
        except TableError as exc:
            self._set_status(str(exc), 3)
            return False
        return True

    # ---------- view params ----------
    def search(self, query: str):
        self.state.view.set_search_query(query)

    def sort_by(self, field: str, direction: str | None = None) -> bool:
        if self.state.get_column(field) is None:
            self._set_status(f"Unknown column '{field}'", 3)
            return False
        if direction is None:
            spec = self.state.view.toggle_sort(field)
        else:
            try:
                self.state.view.set_sort(field, direction)
            except ValueError as exc:
                self._set_status(str(exc), 3)
                return False
            spec = self.state.view.sort
        self._set_status(f"Sorted by '{field}' {spec.direction}", 2)
        return True

    def clear_sort(self):
        self.state.view.clear_sort()

    def set_page(self, page: int):
        self.state.view.set_page(page)

    def next_page(self) -> bool:
        paginator = self.view_engine.paginator()
        if not paginator.next_page():
            return False
        self.state.view.set_page(paginator.page_index)
        return True

    def prev_page(self) -> bool:
        paginator = self.view_engine.paginator()
        if not paginator.prev_page():
            return False
        self.state.view.set_page(paginator.page_index)
        return True

    def set_page_size(self, page_size: int) -> bool:
        try:
            self.state.view.set_page_size(page_size)
        except ValueError as exc:
            self._set_status(str(exc), 3)
            return False
        return True

    # ---------- rows ----------
    def add_row(self, fields: dict) -> int | None:
        issues = validate_row_fields(self.state.columns, fields)
        if issues:
            self._set_status(issues[0].message, 3)
            return None
        try:
            row = self.rows.add_row(fields)
        except TableError as exc:
            self._set_status(str(exc), 3)
            return None
        self._set_status(f"Added row {row.id}", 2)
        return row.id

    def delete_row(self, row_id: int) -> bool:
        if not self.rows.delete_row(row_id):
            return False
        self._set_status(f"Deleted row {row_id}", 2)
        return True

    # ---------- inline editing ----------
    def begin_edit(self, row_id: int) -> bool:
        return self.edits.begin_edit(row_id)

    def set_pending_value(self, row_id: int, column_id: str, value) -> bool:
        return self.edits.set_pending_value(row_id, column_id, value)

    def save_edit(self, row_id: int) -> bool:
        try:
            return self.edits.save_edit(row_id)
        except ValueError as exc:
            self._set_status(str(exc), 3)
            return False

    def cancel_edit(self, row_id: int) -> bool:
        return self.edits.cancel_edit(row_id)

    def save_all(self) -> bool:
        try:
            saved = self.edits.save_all()
        except ValueError as exc:
            self._set_status(str(exc), 3)
            return False
        if saved:
            self._set_status(f"Saved {saved} row{'s' if saved != 1 else ''}", 2)
        return True

    def cancel_all(self):
        self.edits.cancel_all()

    # ---------- files ----------
    def import_file(self, path: str) -> bool:
        if not os.path.exists(path):
            self._set_status(f"File not found: {path}", 4)
            return False
        try:
            handler = FileTypeHandler(path)
            count = self.io.import_from(handler.read_records)
        except TableError as exc:
            logger.warning("Import of %s failed: %s", path, exc)
            self._set_status(str(exc), 4)
            return False
        self._set_status(f"Imported {count} row{'s' if count != 1 else ''}", 2)
        return True

    def export_file(self, path: str) -> bool:
        try:
            handler = FileTypeHandler(path)
            frame = self.io.export_frame()
            handler.write_frame(frame)
        except TableError as exc:
            self._set_status(str(exc), 4)
            return False
        except OSError as exc:
            logger.error("Export to %s failed: %s", path, exc)
            self._set_status(f"Export failed: {exc}", 4)
            return False
        self._set_status(f"Exported {len(frame)} rows to {path}", 2)
        return True
