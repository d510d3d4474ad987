from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


def parse_page_size(value: Any, default: int) -> int:
    """Page size from the select (a string in the browser); bad input falls back to the default."""
    try:
        size = int(value)
    except (TypeError, ValueError):
        return default
    return size if size >= 1 else default


def parse_page_index(value: Any) -> int:
    try:
        index = int(value)
    except (TypeError, ValueError):
        return 0
    return max(0, index)
