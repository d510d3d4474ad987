from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from .exceptions import InvalidColumnReference

Row = Mapping[str, Any]
Accessor = Callable[[Row], Any]


@dataclass(frozen=True)
class ColumnDescriptor:
    """
    Immutable description of one column.

    - id: stable identifier used by order, pin, filter and visibility state
    - label: human-readable header text
    - accessor: pulls this column's value out of a row
    """
    id: str
    label: str
    accessor: Accessor

    @classmethod
    def for_field(cls, column_id: str, label: Optional[str] = None, field: Optional[str] = None) -> ColumnDescriptor:
        """
        Column that reads ``row[field]`` (``field`` defaults to the id).
        Rows missing the field yield None rather than raising.
        """
        key = field or column_id

        def accessor(row: Row) -> Any:
            return row.get(key)

        return cls(id=column_id, label=label or column_id, accessor=accessor)


class ColumnRegistry:
    """
    Static, ordered registry of the columns a table can show.

    Purpose:
    - Gives ColumnOrderStore its natural (initial) order
    - Gives the filter engine its field accessors
    - Gives the UI its header labels

    Design Notes:
    - Registration order is the natural display order
    - Enforces that each column 'id' is unique across the registry
    - Once built it is treated as read-only for the lifetime of the app
    """

    def __init__(self, columns: Iterable[ColumnDescriptor] = ()):
        self._columns: Dict[str, ColumnDescriptor] = {}
        for column in columns:
            self.register(column)

    def register(self, column: ColumnDescriptor) -> None:
        """
        Register a {@link ColumnDescriptor} at the end of the natural order

        :param column: the column to add

        Raises:
            TypeError: if column is not a ColumnDescriptor
            ValueError: if a column with the same 'id' already exists
        """
        if not isinstance(column, ColumnDescriptor):
            raise TypeError(f"Column {column!r} must be a ColumnDescriptor")

        if column.id in self._columns:
            raise ValueError(f"Column '{column.id}' already registered")

        self._columns[column.id] = column

    def get(self, column_id: str) -> ColumnDescriptor:
        """
        :param column_id: the id of the column
        :return: the registered descriptor

        Raises:
            InvalidColumnReference: if no column with the given id exists
        """
        try:
            return self._columns[column_id]
        except KeyError:
            raise InvalidColumnReference(column_id, "registry lookup") from None

    def require(self, column_id: str, operation: str = "") -> None:
        if column_id not in self._columns:
            raise InvalidColumnReference(column_id, operation)

    def ids(self) -> Tuple[str, ...]:
        return tuple(self._columns)

    def labels(self) -> Dict[str, str]:
        return {cid: col.label for cid, col in self._columns.items()}

    def accessors(self) -> Dict[str, Accessor]:
        return {cid: col.accessor for cid, col in self._columns.items()}

    def all_columns(self) -> List[ColumnDescriptor]:
        return list(self._columns.values())

    def __contains__(self, column_id: object) -> bool:
        return column_id in self._columns

    def __iter__(self) -> Iterator[ColumnDescriptor]:
        return iter(self._columns.values())

    def __len__(self) -> int:
        return len(self._columns)

    @classmethod
    def from_fields(cls, fields: Iterable[str]) -> ColumnRegistry:
        """Registry with one column per field name, labelled by the field name."""
        return cls(ColumnDescriptor.for_field(f) for f in fields)
