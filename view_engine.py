import numbers
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Any

from cell_coercion import cell_text, is_missing
from pagination import Paginator
from table_state import DESC, Row


@dataclass(frozen=True)
class ViewRow:
    id: int
    values: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ViewSnapshot:
    rows: list[ViewRow]
    total_filtered_count: int
    page: int
    page_size: int
    page_count: int

    @property
    def row_ids(self) -> list[int]:
        return [row.id for row in self.rows]


def _sort_key(value) -> tuple:
    # numbers, then strings, then anything else by its text
    if isinstance(value, numbers.Real):
        return (0, value)
    if isinstance(value, str):
        return (1, value)
    return (2, cell_text(value))


def compare_values(a, b) -> int:
    """Three-way comparison used for sorting. Missing values sort first."""
    a_missing = is_missing(a)
    b_missing = is_missing(b)
    if a_missing or b_missing:
        return (not a_missing) - (not b_missing)

    a, b = _sort_key(a), _sort_key(b)
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def row_matches(row: Row, column_ids, query: str) -> bool:
    needle = query.lower()
    for col_id in column_ids:
        if needle in cell_text(row.get(col_id)).lower():
            return True
    return False


def filter_rows(rows, column_ids, query: str) -> list[Row]:
    if not query or not query.strip():
        return list(rows)
    return [row for row in rows if row_matches(row, column_ids, query)]


def sort_rows(rows, sort) -> list[Row]:
    if sort is None:
        return list(rows)
    sort_field = sort.field
    sign = -1 if sort.direction == DESC else 1

    def cmp(a, b):
        return sign * compare_values(a.get(sort_field), b.get(sort_field))

    return sorted(rows, key=cmp_to_key(cmp))


class ViewEngine:
    """Derives the displayed page from committed table state.

    Results are memoized on (state version, view params, visible columns);
    call ``recompute`` to force a fresh pass.
    """

    def __init__(self, state):
        self.state = state
        self._filtered_key = None
        self._filtered: list[Row] = []
        self._snapshot_key = None
        self._snapshot: ViewSnapshot | None = None

    def _filter_fingerprint(self) -> tuple:
        view = self.state.view
        sort = (view.sort.field, view.sort.direction) if view.sort else None
        return (
            self.state.version,
            view.search_query,
            sort,
            tuple(self.state.visible_columns),
        )

    def _fingerprint(self) -> tuple:
        return (
            self.state.version,
            self.state.view.fingerprint(),
            tuple(self.state.visible_columns),
        )

    def filtered_rows(self) -> list[Row]:
        key = self._filter_fingerprint()
        if key != self._filtered_key:
            view = self.state.view
            rows = filter_rows(
                self.state.rows.values(), self.state.visible_columns, view.search_query
            )
            self._filtered = sort_rows(rows, view.sort)
            self._filtered_key = key
        return list(self._filtered)

    def snapshot(self) -> ViewSnapshot:
        key = self._fingerprint()
        if self._snapshot is None or key != self._snapshot_key:
            self._snapshot = self._build_snapshot()
            self._snapshot_key = key
        return self._snapshot

    def recompute(self) -> ViewSnapshot:
        self._filtered_key = None
        self._snapshot_key = None
        self._snapshot = None
        return self.snapshot()

    def paginator(self) -> Paginator:
        view = self.state.view
        return Paginator(len(self.filtered_rows()), view.page_size, view.page)

    def _build_snapshot(self) -> ViewSnapshot:
        rows = self.filtered_rows()
        view = self.state.view
        paginator = Paginator(len(rows), view.page_size, view.page)
        visible = list(self.state.visible_columns)
        page_rows = [
            ViewRow(row.id, {col_id: row.get(col_id) for col_id in visible})
            for row in paginator.slice(rows)
        ]
        return ViewSnapshot(
            rows=page_rows,
            total_filtered_count=len(rows),
            page=paginator.page_index,
            page_size=paginator.page_size,
            page_count=paginator.page_count,
        )
