"""Budget commands (read-only)."""
from .context import CommandContext
from ..output import Renderable, RenderKind


def _budget_arg(ctx: CommandContext, args) -> str:
    return args.budget_id or ctx.require_budget_id()


def list_budgets(ctx: CommandContext, args) -> Renderable:
    return Renderable(RenderKind.BUDGET_LIST, ctx.client.list_budgets())


def get_budget(ctx: CommandContext, args) -> Renderable:
    return Renderable(RenderKind.BUDGET, ctx.client.get_budget(_budget_arg(ctx, args)))


def get_budget_settings(ctx: CommandContext, args) -> Renderable:
    return Renderable(RenderKind.BUDGET_SETTINGS, ctx.client.get_budget_settings(_budget_arg(ctx, args)))


def register(subparsers) -> None:
    parser = subparsers.add_parser("budgets", help="List and view budgets")
    actions = parser.add_subparsers(dest="action", metavar="<command>", required=True)

    p = actions.add_parser("list", help="List all budgets")
    p.set_defaults(handler=list_budgets)

    p = actions.add_parser("get", help="Get budget details (default budget if no id given)")
    p.add_argument("budget_id", nargs="?", help="Budget ID or 'last-used'")
    p.set_defaults(handler=get_budget)

    p = actions.add_parser("settings", help="Get budget date and currency settings")
    p.add_argument("budget_id", nargs="?", help="Budget ID or 'last-used'")
    p.set_defaults(handler=get_budget_settings)
