class TableError(Exception):
    """Base class for failures the table engine reports to its caller."""


class DuplicateColumnId(TableError):
    def __init__(self, column_id: str):
        self.column_id = column_id
        super().__init__(f"Column '{column_id}' already exists")


class InvalidColumnSpec(TableError):
    pass


class InvalidColumnSet(TableError):
    def __init__(self, message: str, column_ids=None):
        self.column_ids = list(column_ids or [])
        super().__init__(message)


class InvalidCellValue(TableError, ValueError):
    def __init__(self, column_id: str, value):
        self.column_id = column_id
        self.value = value
        super().__init__(f"Invalid value for column '{column_id}': {value!r}")


class ImportParseFailure(TableError):
    pass


class UnsupportedFileType(TableError):
    def __init__(self, path: str):
        self.path = path
        super().__init__("Unsupported file type (use .csv or .json)")
