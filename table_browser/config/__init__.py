"""
Config layer: global.json model + loader and the row data source.
"""

from .loader import build_registry, load_table, load_table_config
from .model import ColumnConfig, TableConfig

__all__ = ["ColumnConfig", "TableConfig", "build_registry", "load_table", "load_table_config"]
