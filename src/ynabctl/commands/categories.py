"""Category commands."""
from .context import CommandContext, CURRENT_MONTH, resolve_month
from ..client.currency import amount_to_milliunits
from ..output import Renderable, RenderKind
from ..utils.exceptions import UsageError


def list_categories(ctx: CommandContext, args) -> Renderable:
    groups = ctx.client.list_categories(ctx.require_budget_id())
    return Renderable(RenderKind.CATEGORY_GROUPS, groups)


def get_category(ctx: CommandContext, args) -> Renderable:
    category = ctx.client.get_category(ctx.require_budget_id(), args.category_id)
    return Renderable(RenderKind.CATEGORY, category)


def update_category(ctx: CommandContext, args) -> Renderable:
    """Set the budgeted amount; the endpoint takes only the new amount."""
    budget_id = ctx.require_budget_id()
    if args.budgeted is None:
        raise UsageError("budgeted amount is required (--budgeted)")

    category = ctx.client.update_month_category(
        budget_id,
        resolve_month(args.month),
        args.category_id,
        amount_to_milliunits(args.budgeted)
    )
    return Renderable(RenderKind.CATEGORY, category)


def register(subparsers) -> None:
    parser = subparsers.add_parser("categories", help="List, view and budget categories")
    actions = parser.add_subparsers(dest="action", metavar="<command>", required=True)

    p = actions.add_parser("list", help="List category groups and their categories")
    p.set_defaults(handler=list_categories)

    p = actions.add_parser("get", help="Get category details")
    p.add_argument("category_id")
    p.set_defaults(handler=get_category)

    p = actions.add_parser("update", help="Update the budgeted amount for a month")
    p.add_argument("category_id")
    p.add_argument("--budgeted", type=float, help="Budgeted amount (required)")
    p.add_argument(
        "--month",
        default=CURRENT_MONTH,
        help="Budget month, YYYY-MM-DD (first of month) or 'current' (default)"
    )
    p.set_defaults(handler=update_category)
