from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from table_browser.core.filter_engine import FilterPolicy

DEFAULT_PAGE_SIZE = 10
DEFAULT_PAGE_SIZE_OPTIONS: Tuple[int, ...] = (10, 20, 50)


@dataclass(frozen=True)
class ColumnConfig:
    """
    One configured column.

    - id: stable column identifier
    - label: header text, defaults to the id
    - field: key read from each row, defaults to the id
    """
    id: str
    label: Optional[str] = None
    field: Optional[str] = None

    @property
    def display_label(self) -> str:
        return self.label or self.id

    @property
    def source_field(self) -> str:
        return self.field or self.id


@dataclass
class TableConfig:
    ui_title: str
    subtitle: str = "Interactive Table Explorer"
    page_size: int = DEFAULT_PAGE_SIZE
    page_size_options: Tuple[int, ...] = DEFAULT_PAGE_SIZE_OPTIONS
    data_path: Optional[Path] = None
    row_id_field: Optional[str] = None
    filter_policy: FilterPolicy = field(default_factory=FilterPolicy)
    # Empty means "infer from the data file's header"
    columns: List[ColumnConfig] = field(default_factory=list)
