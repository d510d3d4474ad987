from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from table_browser.config.model import TableConfig
from table_browser.core.column_registry import ColumnRegistry


@dataclass
class AppConfig:
    """
    Shared, read-only context for the Dash app: config, column registry and
    rows. Passed into layout + callback registration functions instead of
    using module-level globals. Per-user table state lives in the browser
    store, never here.
    """
    config_root: Path
    table_config: TableConfig
    registry: Optional[ColumnRegistry] = None
    rows: List[Dict[str, Any]] = field(default_factory=list)

    def validate(self) -> None:
        """Ensure the registry is attached before the app starts."""
        if self.registry is None:
            raise RuntimeError("AppConfig.registry must be initialized.")
        if len(self.registry) == 0:
            raise RuntimeError("No columns configured and none could be inferred from the data.")
