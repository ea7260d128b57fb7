"""Budget month commands."""
from .context import CommandContext, CURRENT_MONTH, resolve_month
from ..output import Renderable, RenderKind


def list_months(ctx: CommandContext, args) -> Renderable:
    return Renderable(RenderKind.MONTH_LIST, ctx.client.list_months(ctx.require_budget_id()))


def get_month(ctx: CommandContext, args) -> Renderable:
    budget_id = ctx.require_budget_id()
    month = ctx.client.get_month(budget_id, resolve_month(args.month))
    return Renderable(RenderKind.MONTH, month)


def register(subparsers) -> None:
    parser = subparsers.add_parser("months", help="List and view budget months")
    actions = parser.add_subparsers(dest="action", metavar="<command>", required=True)

    p = actions.add_parser("list", help="List all budget months")
    p.set_defaults(handler=list_months)

    p = actions.add_parser("get", help="Get one month (default: current)")
    p.add_argument("month", nargs="?", default=CURRENT_MONTH, help="YYYY-MM-DD or 'current'")
    p.set_defaults(handler=get_month)
