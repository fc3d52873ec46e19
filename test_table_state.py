import json
import unittest

from default_table_initializer import DefaultTableInitializer
from table_state import SortSpec, TableState, ViewParams, derive_column_id


class TableStateTests(unittest.TestCase):
    def test_default_state(self):
        state = DefaultTableInitializer().create()
        self.assertEqual(state.visible_columns, ["name", "email", "age", "role"])
        self.assertEqual(len(state.rows), 25)
        self.assertEqual(min(state.rows), 100)
        self.assertEqual(state.next_row_id, 125)
        self.assertEqual(state.view.page_size, 10)
        self.assertEqual(state.rows[101].get("role"), "Designer")

    def test_initializer_drops_unknown_visible_columns(self):
        state = DefaultTableInitializer(
            visible_columns=["ghost", "location", "name", "location"], seed_demo_rows=False
        ).create()
        self.assertEqual(state.visible_columns, ["location", "name"])
        self.assertEqual(state.rows, {})

    def test_round_trip_through_json(self):
        state = DefaultTableInitializer(page_size=25).create()
        state.view.set_sort("age", "desc")
        state.view.set_search_query("user")
        state.editing[100] = {"name": "pending"}
        state.rows[101].extras["Team"] = "Blue"
        state.next_row_id = 300

        data = json.loads(json.dumps(state.to_dict()))
        restored = TableState.from_dict(data)

        self.assertEqual(restored.to_dict(), state.to_dict())
        self.assertEqual(restored.editing, {100: {"name": "pending"}})
        self.assertEqual(restored.view.sort, SortSpec("age", "desc"))
        self.assertEqual(restored.next_row_id, 300)

    def test_derive_column_id(self):
        self.assertEqual(derive_column_id("Team"), "team")
        self.assertEqual(derive_column_id("  Start   Date "), "start_date")

    def test_view_params_validation(self):
        with self.assertRaises(ValueError):
            ViewParams(page_size=3)
        with self.assertRaises(ValueError):
            SortSpec("age", "up")
        params = ViewParams()
        params.set_page(-4)
        self.assertEqual(params.page, 0)


if __name__ == "__main__":
    unittest.main()
