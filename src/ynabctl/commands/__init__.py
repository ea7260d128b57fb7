"""Command-line subcommands, one module per resource family."""
from . import (
    accounts,
    budgets,
    categories,
    config_cmd,
    info,
    months,
    payees,
    scheduled,
    transactions,
    user,
)
from .context import CommandContext, resolve_month

COMMAND_MODULES = (
    config_cmd,
    user,
    budgets,
    accounts,
    categories,
    payees,
    transactions,
    scheduled,
    months,
    info,
)


def register_all(subparsers) -> None:
    for module in COMMAND_MODULES:
        module.register(subparsers)


__all__ = ["CommandContext", "resolve_month", "register_all", "COMMAND_MODULES"]
