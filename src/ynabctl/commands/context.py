"""Per-invocation state shared by command handlers."""
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ..config.manager import Config, ConfigManager
from ..utils.exceptions import UsageError

CURRENT_MONTH = "current"


@dataclass
class CommandContext:
    """Everything a handler needs, built once in main and passed down.

    ``client`` is None for commands that run without a token.
    """
    config: Config
    config_manager: ConfigManager
    client: Optional[Any] = None
    budget_id: Optional[str] = None
    output_format: str = "json"

    def require_budget_id(self) -> str:
        """Return the active budget, failing with a usage hint if none is set."""
        if self.budget_id:
            return self.budget_id
        raise UsageError(
            "no budget specified. Use --budget flag or set a default with "
            "'ynabctl config set-default-budget <id>'"
        )


def today() -> str:
    return date.today().isoformat()


def resolve_month(month: Optional[str], now: Optional[date] = None) -> str:
    """Map "current" (or nothing) to the first day of this month as YYYY-MM-DD."""
    if not month or month == CURRENT_MONTH:
        now = now or date.today()
        return now.replace(day=1).isoformat()
    return month
