import logging
from collections.abc import Mapping

import pandas as pd

from cell_coercion import NUMBER, coerce_cell_value, is_missing, parse_number
from table_errors import ImportParseFailure
from table_state import Row, derive_column_id

logger = logging.getLogger(__name__)


class ImportExportAdapter:
    """Maps raw untyped records to typed rows and back.

    Importing replaces every row in the store; it never merges.
    """

    def __init__(self, state, row_store, view_engine):
        self.state = state
        self.row_store = row_store
        self.view_engine = view_engine

    # ---------- import ----------
    def import_from(self, parse) -> int:
        try:
            records = parse()
        except ImportParseFailure:
            raise
        except Exception as exc:
            raise ImportParseFailure(f"Failed to read import data: {exc}") from exc
        return self.import_records(records)

    def import_records(self, records) -> int:
        if records is None:
            raise ImportParseFailure("No records to import")
        records = list(records)
        for idx, record in enumerate(records):
            if not isinstance(record, Mapping):
                raise ImportParseFailure(f"Record {idx + 1} is not a field mapping")

        defaulted = 0
        rows = []
        for record in records:
            row, row_defaulted = self._build_row(record)
            rows.append(row)
            defaulted += row_defaulted

        self.row_store.bulk_replace(rows)
        if defaulted:
            logger.warning("Import defaulted %d unparsable numeric values to 0", defaulted)
        logger.debug("Imported %d rows", len(rows))
        return len(rows)

    def _match_columns(self, record: Mapping) -> tuple[dict, dict]:
        by_key = {col.id.lower(): col for col in self.state.columns}
        matched: dict[str, list] = {}
        extras = {}
        for key, raw in record.items():
            norm = derive_column_id(str(key))
            if norm == "id":
                continue
            col = by_key.get(norm)
            if col is None:
                extras[key] = raw
                continue
            matched.setdefault(col.id, []).append(raw)
        return matched, extras

    def _build_row(self, record: Mapping) -> tuple[Row, int]:
        matched, extras = self._match_columns(record)
        values = {}
        defaulted = 0
        for col in self.state.columns:
            candidates = matched.get(col.id, [])
            raw = next((v for v in candidates if not _is_blank(v)), None)
            if raw is None and candidates:
                raw = candidates[0]
            if col.type == NUMBER and not _is_blank(raw):
                try:
                    parse_number(raw)
                except (TypeError, ValueError):
                    defaulted += 1
            values[col.id] = coerce_cell_value(col.type, raw, strict=False)
        return Row(self.row_store.allocate_id(), values, extras), defaulted

    # ---------- export ----------
    def export_records(self) -> list[dict]:
        visible = list(self.state.visible_columns)
        records = []
        for row in self.view_engine.filtered_rows():
            records.append({col_id: _export_value(row.get(col_id)) for col_id in visible})
        return records

    def export_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.export_records(), columns=list(self.state.visible_columns))


def _is_blank(value) -> bool:
    if is_missing(value):
        return True
    return isinstance(value, str) and value.strip() == ""


def _export_value(value):
    return "" if is_missing(value) else value
