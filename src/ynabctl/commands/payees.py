"""Payee commands."""
from .context import CommandContext
from ..output import Renderable, RenderKind
from ..utils.exceptions import UsageError


def list_payees(ctx: CommandContext, args) -> Renderable:
    return Renderable(RenderKind.PAYEE_LIST, ctx.client.list_payees(ctx.require_budget_id()))


def get_payee(ctx: CommandContext, args) -> Renderable:
    return Renderable(RenderKind.PAYEE, ctx.client.get_payee(ctx.require_budget_id(), args.payee_id))


def rename_payee(ctx: CommandContext, args) -> Renderable:
    budget_id = ctx.require_budget_id()
    if not args.name:
        raise UsageError("new name is required (--name)")
    return Renderable(RenderKind.PAYEE, ctx.client.update_payee(budget_id, args.payee_id, args.name))


def register(subparsers) -> None:
    parser = subparsers.add_parser("payees", help="List, view and rename payees")
    actions = parser.add_subparsers(dest="action", metavar="<command>", required=True)

    p = actions.add_parser("list", help="List all payees")
    p.set_defaults(handler=list_payees)

    p = actions.add_parser("get", help="Get payee details")
    p.add_argument("payee_id")
    p.set_defaults(handler=get_payee)

    p = actions.add_parser("update", help="Rename a payee")
    p.add_argument("payee_id")
    p.add_argument("--name", help="New payee name (required)")
    p.set_defaults(handler=rename_payee)
