from pagination import Paginator


def test_page_bounds():
    p = Paginator(23, page_size=5)
    assert p.page_count == 5
    assert (p.page_start, p.page_end) == (0, 5)

    p.page_index = 4
    assert (p.page_start, p.page_end) == (20, 23)


def test_empty_table_has_one_page():
    p = Paginator(0, page_size=10)
    assert p.page_count == 1
    assert p.slice([]) == []


def test_next_and_prev_stay_in_range():
    p = Paginator(12, page_size=5)
    assert p.next_page()
    assert p.next_page()
    assert not p.next_page()
    assert p.page_index == 2
    assert p.prev_page()
    assert p.page_index == 1
    p.page_index = 0
    assert not p.prev_page()


def test_out_of_range_slice_is_empty_until_clamped():
    items = list(range(12))
    p = Paginator(12, page_size=5, page_index=7)
    assert p.slice(items) == []
    p.clamp()
    assert p.page_index == 2
    assert p.slice(items) == [10, 11]
