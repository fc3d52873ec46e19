from cell_coercion import EMAIL, NUMBER, TEXT
from table_state import Column, Row, TableState, ViewParams

DEFAULT_COLUMNS = [
    Column("name", "Name", TEXT, required=True),
    Column("email", "Email", EMAIL, required=True),
    Column("age", "Age", NUMBER, required=True),
    Column("role", "Role", TEXT, required=True),
    Column("department", "Department", TEXT),
    Column("location", "Location", TEXT),
]

STARTER_VISIBLE_COLUMNS = ["name", "email", "age", "role"]

DEMO_ROW_COUNT = 25
DEMO_FIRST_ID = 100

_ROLES = ["Developer", "Designer", "Manager", "Analyst"]
_DEPARTMENTS = ["Engineering", "Design", "QA", "Product"]
_LOCATIONS = ["New York", "San Francisco", "Berlin", "Tokyo"]


class DefaultTableInitializer:
    def __init__(self, page_size: int = 10, visible_columns=None, seed_demo_rows: bool = True):
        self.page_size = page_size
        self.visible_columns = list(visible_columns or STARTER_VISIBLE_COLUMNS)
        self.seed_demo_rows = seed_demo_rows

    def create(self) -> TableState:
        columns = [Column(c.id, c.label, c.type, c.required) for c in DEFAULT_COLUMNS]
        known = {c.id for c in columns}
        visible = []
        for col_id in self.visible_columns:
            if col_id in known and col_id not in visible:
                visible.append(col_id)
        rows = self._demo_rows() if self.seed_demo_rows else []
        return TableState(
            columns=columns,
            visible_columns=visible,
            rows=rows,
            view=ViewParams(page_size=self.page_size),
        )

    def _demo_rows(self) -> list[Row]:
        rows = []
        for i in range(DEMO_ROW_COUNT):
            rows.append(
                Row(
                    DEMO_FIRST_ID + i,
                    {
                        "name": f"User {i + 1}",
                        "email": f"user{i + 1}@example.com",
                        "age": 20 + (i % 30),
                        "role": _ROLES[i % 4],
                        "department": _DEPARTMENTS[i % 4],
                        "location": _LOCATIONS[i % 4],
                    },
                )
            )
        return rows
