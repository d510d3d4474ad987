from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional


def _frozen(mapping: Optional[Mapping]) -> Mapping:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class FilterState:
    """
    Represents the current user search input.

    Fields:

    - column_filters: column id -> filter text; a column without an entry has no filter
    - global_filter: search text tested against every scanned column; "" means inactive

    Empty per-column text is never stored, so clearing a filter twice is the
    same as clearing it once.
    """
    column_filters: Mapping[str, str] = field(default_factory=dict)
    global_filter: str = ""

    def __post_init__(self):
        cleaned = {k: str(v) for k, v in dict(self.column_filters).items() if v}
        object.__setattr__(self, "column_filters", _frozen(cleaned))
        object.__setattr__(self, "global_filter", self.global_filter or "")

    def filter_text(self, column_id: str) -> str:
        return self.column_filters.get(column_id, "")

    def with_column_filter(self, column_id: str, text: Optional[str]) -> FilterState:
        filters = dict(self.column_filters)
        if text:
            filters[column_id] = text
        else:
            filters.pop(column_id, None)
        return FilterState(column_filters=filters, global_filter=self.global_filter)

    def with_global_filter(self, text: Optional[str]) -> FilterState:
        return FilterState(column_filters=self.column_filters, global_filter=text or "")

    @property
    def is_active(self) -> bool:
        return bool(self.column_filters) or bool(self.global_filter)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FilterState):
            return NotImplemented
        return (
            dict(self.column_filters) == dict(other.column_filters)
            and self.global_filter == other.global_filter
        )

    def __hash__(self) -> int:
        return hash((frozenset(self.column_filters.items()), self.global_filter))

    def to_dict(self) -> Dict[str, Any]:
        return {"column_filters": dict(self.column_filters), "global_filter": self.global_filter}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> FilterState:
        return cls(
            column_filters=dict(data.get("column_filters") or {}),
            global_filter=str(data.get("global_filter") or ""),
        )


@dataclass(frozen=True)
class VisibilityState:
    """
    Column id -> visible flag. Columns without an entry are visible.

    Hidden columns keep their place in the column order and their pin state;
    visibility only decides what gets rendered.
    """
    flags: Mapping[str, bool] = field(default_factory=dict)

    def __post_init__(self):
        # Only hidden columns need recording
        hidden = {k: False for k, v in dict(self.flags).items() if not v}
        object.__setattr__(self, "flags", _frozen(hidden))

    def is_visible(self, column_id: str) -> bool:
        return self.flags.get(column_id, True)

    def with_visible(self, column_id: str, visible: bool) -> VisibilityState:
        flags = dict(self.flags)
        flags[column_id] = bool(visible)
        return VisibilityState(flags=flags)

    @property
    def hidden(self) -> frozenset:
        return frozenset(self.flags)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VisibilityState):
            return NotImplemented
        return self.hidden == other.hidden

    def __hash__(self) -> int:
        return hash(self.hidden)

    def to_dict(self) -> Dict[str, bool]:
        return dict(self.flags)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> VisibilityState:
        return cls(flags={k: bool(v) for k, v in (data or {}).items()})
