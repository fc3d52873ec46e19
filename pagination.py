class Paginator:
    """Page arithmetic over a row count. Pages past the end are empty, not clamped."""

    def __init__(self, total_rows: int, page_size: int = 10, page_index: int = 0):
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        self.page_size = page_size
        self.page_index = max(0, page_index)
        self.total_rows = max(0, total_rows)

    def clamp(self):
        max_page = self.page_count - 1
        self.page_index = max(0, min(self.page_index, max_page))

    def next_page(self) -> bool:
        if self.page_end < self.total_rows and self.page_index < self.page_count - 1:
            self.page_index += 1
            return True
        return False

    def prev_page(self) -> bool:
        if self.page_index > 0:
            self.page_index -= 1
            self.clamp()
            return True
        return False

    def slice(self, items):
        return items[self.page_start:self.page_start + self.page_size]

    @property
    def page_start(self) -> int:
        return self.page_index * self.page_size

    @property
    def page_end(self) -> int:
        return min(self.total_rows, self.page_start + self.page_size)

    @property
    def page_count(self) -> int:
        if self.total_rows == 0:
            return 1
        return (self.total_rows - 1) // self.page_size + 1
