"""ynabctl command-line entry point."""
import os
import sys
import argparse
from dataclasses import replace
from typing import Callable, List, Optional, TextIO

from . import __version__
from .client import YnabClient
from .commands import CommandContext, register_all
from .config import Config, ConfigManager, DEFAULT_FORMAT, ENV_VARS, OUTPUT_FORMATS
from .output import Formatter, Renderable
from .utils.logger import get_logger, setup_logging, set_budget_context
from .utils.exceptions import ConfigError, YnabctlError

logger = get_logger()

DESCRIPTION = """\
ynabctl is a command-line interface for You Need A Budget (YNAB).

It manages budgets, accounts, transactions, categories and more
directly from your terminal.

To get started, set your YNAB API token:
  ynabctl config set-token <your-token>

You can obtain a token from YNAB: Account Settings > Developer Settings"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ynabctl",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("-b", "--budget", help="Budget ID to use")
    parser.add_argument("-f", "--format", choices=OUTPUT_FORMATS, help="Output format (default: json)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log HTTP requests to stderr")
    parser.add_argument("--version", action="version", version=f"ynabctl {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="<command>", required=True)
    register_all(subparsers)
    return parser


def _build_context(
    args: argparse.Namespace,
    config_manager: ConfigManager,
    client_factory: Callable[[str], object]
) -> CommandContext:
    """Resolve config, budget, format and client for one invocation."""
    if not getattr(args, "needs_client", True):
        return CommandContext(config=Config(), config_manager=config_manager)

    config = config_manager.load_config()

    output_format = args.format or config.format or DEFAULT_FORMAT
    is_valid, message = config_manager.validate_config(replace(config, format=output_format))
    if not is_valid:
        # --format is checked by argparse, so a bad value comes from the environment or the file
        env_var = ENV_VARS["format"]
        if os.getenv(env_var):
            raise ConfigError(f"{message} (from {env_var}). Unset {env_var} or set it to 'json' or 'table'")
        raise ConfigError(f"{message} (from {config_manager.config_file}). Run 'ynabctl config set-format json' to fix it")

    if not config.token:
        raise ConfigError("YNAB API token not configured. Run 'ynabctl config set-token <token>' to set it")

    budget_id = args.budget or config.default_budget
    set_budget_context(budget_id)

    return CommandContext(
        config=config,
        config_manager=config_manager,
        client=client_factory(config.token),
        budget_id=budget_id,
        output_format=output_format
    )


def run(
    argv: Optional[List[str]] = None,
    config_manager: Optional[ConfigManager] = None,
    client_factory: Callable[[str], object] = YnabClient,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None
) -> int:
    """Run one command and return the process exit status."""
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    config_manager = config_manager or ConfigManager()

    args = build_parser().parse_args(argv)
    setup_logging(config_manager.config_dir / "logs", verbose=args.verbose)
    logger.debug(f"Running command: {args.command} {getattr(args, 'action', '') or ''}".rstrip())

    ctx = None
    try:
        ctx = _build_context(args, config_manager, client_factory)
        result = args.handler(ctx, args)

        if isinstance(result, Renderable):
            Formatter(ctx.output_format, stdout).print(result)
        else:
            stdout.write(f"{result}\n")
        return 0
    except YnabctlError as e:
        logger.debug("Command failed", exc_info=True)
        stderr.write(f"Error: {e}\n")
        return 1
    except KeyboardInterrupt:
        stderr.write("Interrupted\n")
        return 130
    finally:
        if ctx is not None and ctx.client is not None:
            ctx.client.close()


def main():
    """Main entry point for ynabctl."""
    sys.exit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()
