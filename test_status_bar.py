from status_bar import render_status, snapshot_context
from view_engine import ViewSnapshot


def test_page_info_from_snapshot():
    snap = ViewSnapshot(rows=[], total_filtered_count=23, page=1, page_size=10, page_count=3)
    text = render_status(snapshot_context(snap, "/tmp/people.csv", editing=2), 80)
    assert text.strip() == "people.csv | Page 2/3 rows 11-20 of 23 | 2 editing"
    assert len(text) == 80


def test_empty_table():
    snap = ViewSnapshot(rows=[], total_filtered_count=0, page=0, page_size=10, page_count=1)
    assert render_status(snapshot_context(snap), 30).strip() == "Page 1/1 no rows"


def test_page_past_the_end():
    snap = ViewSnapshot(rows=[], total_filtered_count=23, page=10, page_size=5, page_count=5)
    text = render_status(snapshot_context(snap), 60).strip()
    assert text == "Page 11/5 no rows on this page of 23"
