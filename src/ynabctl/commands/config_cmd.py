"""Configuration commands; these run without a token or budget."""
from .context import CommandContext
from ..config.manager import OUTPUT_FORMATS, mask_token
from ..utils.logger import get_logger

logger = get_logger()


def _value_or_not_set(value) -> str:
    return value or "(not set)"


def show_config(ctx: CommandContext, args) -> str:
    config = ctx.config_manager.load_config()
    return "\n".join([
        f"Config file: {ctx.config_manager.config_file}",
        "",
        f"Token:          {mask_token(config.token)}",
        f"Default Budget: {_value_or_not_set(config.default_budget)}",
        f"Format:         {_value_or_not_set(config.format)}",
    ])


def set_token(ctx: CommandContext, args) -> str:
    ctx.config_manager.update(token=args.token)
    logger.info(f"Token written to {ctx.config_manager.config_file}")
    return "Token saved successfully."


def set_default_budget(ctx: CommandContext, args) -> str:
    ctx.config_manager.update(default_budget=args.budget_id)
    return f"Default budget set to: {args.budget_id}"


def set_format(ctx: CommandContext, args) -> str:
    ctx.config_manager.update(format=args.format)
    return f"Default format set to: {args.format}"


def register(subparsers) -> None:
    parser = subparsers.add_parser("config", help="View and modify ynabctl configuration")
    actions = parser.add_subparsers(dest="action", metavar="<command>", required=True)

    p = actions.add_parser("show", help="Show current configuration")
    p.set_defaults(handler=show_config, needs_client=False)

    p = actions.add_parser(
        "set-token",
        help="Set the YNAB API token",
        description="Create a Personal Access Token in YNAB under Account Settings > Developer Settings."
    )
    p.add_argument("token")
    p.set_defaults(handler=set_token, needs_client=False)

    p = actions.add_parser("set-default-budget", help="Set the budget used when --budget is omitted")
    p.add_argument("budget_id")
    p.set_defaults(handler=set_default_budget, needs_client=False)

    p = actions.add_parser("set-format", help="Set the default output format")
    p.add_argument("format", choices=OUTPUT_FORMATS)
    p.set_defaults(handler=set_format, needs_client=False)
