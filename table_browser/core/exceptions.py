class TableBrowserError(Exception):
    """Base exception for all table_browser errors"""
    pass


class InvalidColumnReference(TableBrowserError, KeyError):
    """
    An operation named a column id that is not in the ColumnRegistry
    (or, for reorder, not in the current column order).

    Usually a desynchronised collaborator, e.g. a gesture recogniser or a
    browser-side store reporting a stale id.
    """

    def __init__(self, column_id: object, operation: str = ""):
        self.column_id = column_id
        self.operation = operation
        where = f" in {operation}" if operation else ""
        super().__init__(f"Unknown column id {column_id!r}{where}")

    def __str__(self) -> str:
        # KeyError quotes its message; keep it readable
        return self.args[0]


class ConfigError(TableBrowserError):
    """Invalid or inconsistent global.json"""
    pass


class RowSourceError(TableBrowserError):
    """
    Row data file is missing, unreadable, or doesn't carry
    the fields the configured columns point at
    """
    pass
