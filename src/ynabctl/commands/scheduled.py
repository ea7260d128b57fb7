"""Scheduled transaction commands."""
import argparse

from .context import CommandContext, today
from .transactions import FLAG_COLORS
from ..client.currency import amount_to_milliunits
from ..client.models import SaveScheduledTransaction, ScheduledTransaction
from ..output import Renderable, RenderKind
from ..utils.exceptions import UsageError

FREQUENCIES = (
    "never", "daily", "weekly", "everyOtherWeek", "twiceAMonth",
    "every4Weeks", "monthly", "everyOtherMonth", "every3Months",
    "every4Months", "twiceAYear", "yearly", "everyOtherYear",
)


def list_scheduled(ctx: CommandContext, args) -> Renderable:
    scheduled = ctx.client.list_scheduled_transactions(ctx.require_budget_id())
    return Renderable(RenderKind.SCHEDULED_LIST, scheduled)


def get_scheduled(ctx: CommandContext, args) -> Renderable:
    scheduled = ctx.client.get_scheduled_transaction(ctx.require_budget_id(), args.scheduled_id)
    return Renderable(RenderKind.SCHEDULED, scheduled)


def create_scheduled(ctx: CommandContext, args) -> Renderable:
    budget_id = ctx.require_budget_id()
    if not args.account:
        raise UsageError("account ID is required (--account)")
    if not args.frequency:
        raise UsageError("frequency is required (--frequency)")
    if args.amount is None:
        raise UsageError("amount is required (--amount)")

    payload = SaveScheduledTransaction(
        account_id=args.account,
        date=args.date or today(),
        frequency=args.frequency,
        amount=amount_to_milliunits(args.amount),
        payee_id=args.payee_id,
        payee_name=args.payee_name,
        category_id=args.category,
        memo=args.memo,
        flag_color=args.flag
    )
    scheduled = ctx.client.create_scheduled_transaction(budget_id, payload)
    return Renderable(RenderKind.SCHEDULED, scheduled)


def merge_scheduled_update(existing: ScheduledTransaction, args) -> SaveScheduledTransaction:
    """Same shape as create; the date carries over from date_first unless --date is given."""
    payload = SaveScheduledTransaction(
        account_id=existing.account_id or "",
        date=existing.date_first,
        frequency=existing.frequency,
        amount=existing.amount,
        payee_id=existing.payee_id,
        category_id=existing.category_id,
        memo=existing.memo,
        flag_color=existing.flag_color
    )

    overrides = {
        "account_id": args.account,
        "date": args.date,
        "frequency": args.frequency,
        "payee_id": args.payee_id,
        "payee_name": args.payee_name,
        "category_id": args.category,
        "memo": args.memo,
        "flag_color": args.flag,
    }
    if args.amount is not None:
        overrides["amount"] = amount_to_milliunits(args.amount)

    return payload.model_copy(update={k: v for k, v in overrides.items() if v is not None})


def update_scheduled(ctx: CommandContext, args) -> Renderable:
    budget_id = ctx.require_budget_id()
    existing = ctx.client.get_scheduled_transaction(budget_id, args.scheduled_id)
    payload = merge_scheduled_update(existing, args)
    scheduled = ctx.client.update_scheduled_transaction(budget_id, args.scheduled_id, payload)
    return Renderable(RenderKind.SCHEDULED, scheduled)


def delete_scheduled(ctx: CommandContext, args) -> Renderable:
    scheduled = ctx.client.delete_scheduled_transaction(ctx.require_budget_id(), args.scheduled_id)
    return Renderable(RenderKind.SCHEDULED, scheduled)


def _add_save_arguments(parser: argparse.ArgumentParser, creating: bool) -> None:
    required = " (required)" if creating else ""
    parser.add_argument("--account", help="Account ID" + required)
    parser.add_argument("--date", help="First occurrence date, YYYY-MM-DD" + (" (default: today)" if creating else ""))
    parser.add_argument("--frequency", choices=FREQUENCIES, help="Recurrence frequency" + required)
    parser.add_argument("--amount", type=float, help="Amount (positive=inflow, negative=outflow)" + required)
    parser.add_argument("--payee-id", dest="payee_id", help="Payee ID")
    parser.add_argument("--payee-name", dest="payee_name", help="Payee name")
    parser.add_argument("--category", help="Category ID")
    parser.add_argument("--memo", help="Memo")
    parser.add_argument("--flag", choices=FLAG_COLORS, help="Flag color")


def register(subparsers) -> None:
    parser = subparsers.add_parser(
        "scheduled",
        aliases=["scheduled-transactions"],
        help="List, view, create, update and delete scheduled transactions"
    )
    actions = parser.add_subparsers(dest="action", metavar="<command>", required=True)

    p = actions.add_parser("list", help="List scheduled transactions")
    p.set_defaults(handler=list_scheduled)

    p = actions.add_parser("get", help="Get scheduled transaction details")
    p.add_argument("scheduled_id")
    p.set_defaults(handler=get_scheduled)

    p = actions.add_parser("create", help="Create a scheduled transaction")
    _add_save_arguments(p, creating=True)
    p.set_defaults(handler=create_scheduled)

    p = actions.add_parser("update", help="Update a scheduled transaction; only given fields change")
    p.add_argument("scheduled_id")
    _add_save_arguments(p, creating=False)
    p.set_defaults(handler=update_scheduled)

    p = actions.add_parser("delete", help="Delete a scheduled transaction")
    p.add_argument("scheduled_id")
    p.set_defaults(handler=delete_scheduled)
