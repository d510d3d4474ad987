from __future__ import annotations

import logging
from typing import Any, Dict, Iterable

from table_browser.config.model import TableConfig
from table_browser.validation.errors import ValidationIssue, ValidationError

POLICY_KEYS = ("filter_hidden_columns", "search_hidden_columns")


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


def validate_table_config(raw: Dict[str, Any]) -> None:
    """
    Check a parsed global.json before it is turned into a TableConfig.
    Collects every problem and raises them together.

    Raises:
        ValidationError: if anything is wrong
    """
    issues: list[ValidationIssue] = []

    if not isinstance(raw, dict):
        raise ValidationError([ValidationIssue("CONFIG_NOT_OBJECT", "global.json must contain a JSON object.")])

    page_size = raw.get("page_size")
    if page_size is not None and not _is_positive_int(page_size):
        issues.append(ValidationIssue("CONFIG_PAGE_SIZE", f"page_size must be a positive integer, got {page_size!r}."))

    options = raw.get("page_size_options")
    if options is not None:
        if not isinstance(options, list) or not options or not all(_is_positive_int(o) for o in options):
            issues.append(
                ValidationIssue("CONFIG_PAGE_SIZE_OPTIONS", "page_size_options must be a non-empty list of positive integers.")
            )

    data = raw.get("data")
    if data is not None and (not isinstance(data, str) or not data.strip()):
        issues.append(ValidationIssue("CONFIG_DATA_PATH", "data must be a path string."))

    row_id_field = raw.get("row_id_field")
    if row_id_field is not None and not isinstance(row_id_field, str):
        issues.append(ValidationIssue("CONFIG_ROW_ID_FIELD", "row_id_field must be a string."))

    policy = raw.get("filter_policy")
    if policy is not None:
        if not isinstance(policy, dict):
            issues.append(ValidationIssue("CONFIG_FILTER_POLICY", "filter_policy must be an object."))
        else:
            for key, value in policy.items():
                if key not in POLICY_KEYS:
                    issues.append(ValidationIssue("CONFIG_FILTER_POLICY", f"Unknown filter_policy option '{key}'."))
                elif not isinstance(value, bool):
                    issues.append(ValidationIssue("CONFIG_FILTER_POLICY", f"filter_policy.{key} must be true/false."))

    columns = raw.get("columns")
    if columns is not None:
        if not isinstance(columns, list):
            issues.append(ValidationIssue("CONFIG_COLUMNS", "columns must be a list."))
        else:
            seen: set[str] = set()
            for i, col in enumerate(columns):
                col_id = col.get("id") if isinstance(col, dict) else None
                if not isinstance(col_id, str) or not col_id:
                    issues.append(ValidationIssue("CONFIG_COLUMN_ID", f"columns[{i}] needs a non-empty string 'id'."))
                    continue
                if col_id in seen:
                    issues.append(ValidationIssue("CONFIG_DUPLICATE_COLUMN", f"Column id '{col_id}' appears more than once."))
                seen.add(col_id)

    if issues:
        raise ValidationError(issues)


def warn_on_unmatched_fields(config: TableConfig, fields: Iterable[str], logger: logging.Logger) -> None:
    """
    Log a warning for configured columns whose field is not in the row data.

    Warn-only: such columns render as empty cells, the app still runs.
    """
    available = set(fields)
    missing = [c.id for c in config.columns if c.source_field not in available]
    if missing:
        logger.warning(
            "Configured columns have no matching data field",
            extra={"columns": missing, "available_fields": sorted(available)},
        )
