"""
Core domain layer: column registry, column order/pin engine, filter
predicates, drag-reorder controller, view model and the table state container
"""

from .column_order import ColumnOrderState, ColumnOrderStore
from .column_registry import ColumnDescriptor, ColumnRegistry
from .drag_reorder import DragReorderController
from .exceptions import InvalidColumnReference
from .filter_engine import FilterPolicy
from .filter_state import FilterState, VisibilityState
from .table_state import TableSnapshot, TableStateContainer
from .view_model import TableViewModel

__all__ = [
    "ColumnDescriptor",
    "ColumnRegistry",
    "ColumnOrderState",
    "ColumnOrderStore",
    "DragReorderController",
    "FilterPolicy",
    "FilterState",
    "InvalidColumnReference",
    "TableSnapshot",
    "TableStateContainer",
    "TableViewModel",
    "VisibilityState",
]
