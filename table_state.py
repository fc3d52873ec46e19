import re
from dataclasses import dataclass, field
from typing import Any

from cell_coercion import TEXT, default_value

PAGE_SIZE_CHOICES = (5, 10, 25, 50)
DEFAULT_PAGE_SIZE = 10

ASC = "asc"
DESC = "desc"

_WHITESPACE = re.compile(r"\s+")


def derive_column_id(label: str) -> str:
    return _WHITESPACE.sub("_", label.strip().lower())


@dataclass
class Column:
    id: str
    label: str
    type: str = TEXT
    required: bool = False

    @property
    def default(self):
        return default_value(self.type)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "label": self.label,
            "type": self.type,
            "required": self.required,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Column":
        return cls(
            id=str(data["id"]),
            label=str(data.get("label", data["id"])),
            type=data.get("type", TEXT),
            required=bool(data.get("required", False)),
        )


@dataclass
class Row:
    id: int
    values: dict[str, Any] = field(default_factory=dict)
    extras: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default=None):
        if key in self.values:
            return self.values[key]
        return self.extras.get(key, default)

    def has(self, key: str) -> bool:
        return key in self.values or key in self.extras

    def fields(self) -> dict[str, Any]:
        merged = dict(self.extras)
        merged.update(self.values)
        return merged

    def to_dict(self) -> dict:
        return {"id": self.id, "values": dict(self.values), "extras": dict(self.extras)}

    @classmethod
    def from_dict(cls, data: dict) -> "Row":
        return cls(
            id=int(data["id"]),
            values=dict(data.get("values") or {}),
            extras=dict(data.get("extras") or {}),
        )


@dataclass(frozen=True)
class SortSpec:
    field: str
    direction: str = ASC

    def __post_init__(self):
        if self.direction not in (ASC, DESC):
            raise ValueError(f"Sort direction must be '{ASC}' or '{DESC}'")


class ViewParams:
    """Search, sort and pagination inputs for the view engine."""

    def __init__(self, search_query: str = "", sort: SortSpec | None = None, page: int = 0, page_size: int = DEFAULT_PAGE_SIZE):
        if page_size not in PAGE_SIZE_CHOICES:
            raise ValueError(f"Page size must be one of {PAGE_SIZE_CHOICES}")
        self.search_query = search_query
        self.sort = sort
        self.page = max(0, page)
        self.page_size = page_size

    def set_search_query(self, query: str):
        self.search_query = "" if query is None else str(query)
        self.page = 0

    def set_page_size(self, page_size: int):
        if page_size not in PAGE_SIZE_CHOICES:
            raise ValueError(f"Page size must be one of {PAGE_SIZE_CHOICES}")
        self.page_size = page_size
        self.page = 0

    def set_page(self, page: int):
        self.page = max(0, int(page))

    def set_sort(self, field: str, direction: str = ASC):
        self.sort = SortSpec(field, direction)

    def clear_sort(self):
        self.sort = None

    def toggle_sort(self, field: str) -> SortSpec:
        if self.sort is not None and self.sort.field == field and self.sort.direction == ASC:
            self.sort = SortSpec(field, DESC)
        else:
            self.sort = SortSpec(field, ASC)
        return self.sort

    def fingerprint(self) -> tuple:
        sort = (self.sort.field, self.sort.direction) if self.sort else None
        return (self.search_query, sort, self.page, self.page_size)

    def to_dict(self) -> dict:
        return {
            "search_query": self.search_query,
            "sort": (
                {"field": self.sort.field, "direction": self.sort.direction}
                if self.sort
                else None
            ),
            "page": self.page,
            "page_size": self.page_size,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ViewParams":
        sort = data.get("sort")
        return cls(
            search_query=data.get("search_query", ""),
            sort=SortSpec(sort["field"], sort.get("direction", ASC)) if sort else None,
            page=int(data.get("page", 0)),
            page_size=int(data.get("page_size", DEFAULT_PAGE_SIZE)),
        )


class TableState:
    """The single owned handle every table component reads and mutates."""

    def __init__(self, columns=None, visible_columns=None, rows=None, view: ViewParams | None = None):
        self.columns: list[Column] = list(columns or [])
        self.visible_columns: list[str] = list(visible_columns or [])
        self.rows: dict[int, Row] = {}
        self.next_row_id = 1
        self.version = 0
        self.view = view if view is not None else ViewParams()
        self.editing: dict[int, dict[str, Any]] = {}

        for row in rows or []:
            self.rows[row.id] = row
        if self.rows:
            self.next_row_id = max(self.rows) + 1

    def touch(self):
        self.version += 1

    def column_ids(self) -> list[str]:
        return [col.id for col in self.columns]

    def get_column(self, column_id: str) -> Column | None:
        for col in self.columns:
            if col.id == column_id:
                return col
        return None

    # ---------- plain-data conversion ----------
    def to_dict(self) -> dict:
        return {
            "columns": [col.to_dict() for col in self.columns],
            "visible_columns": list(self.visible_columns),
            "rows": [row.to_dict() for row in self.rows.values()],
            "next_row_id": self.next_row_id,
            "view": self.view.to_dict(),
            "editing": {
                str(row_id): dict(pending) for row_id, pending in self.editing.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TableState":
        state = cls(
            columns=[Column.from_dict(c) for c in data.get("columns", [])],
            visible_columns=data.get("visible_columns", []),
            rows=[Row.from_dict(r) for r in data.get("rows", [])],
            view=ViewParams.from_dict(data.get("view") or {}),
        )
        state.next_row_id = max(state.next_row_id, int(data.get("next_row_id", 1)))
        state.editing = {
            int(row_id): dict(pending)
            for row_id, pending in (data.get("editing") or {}).items()
            if int(row_id) in state.rows
        }
        return state
