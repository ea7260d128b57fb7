"""Transaction commands."""
import argparse

from .context import CommandContext, today
from ..client.client import TRANSACTION_TYPES
from ..client.currency import amount_to_milliunits
from ..client.models import SaveTransaction, Transaction
from ..output import Renderable, RenderKind
from ..utils.exceptions import UsageError

CLEARED_STATUSES = ("cleared", "uncleared", "reconciled")
FLAG_COLORS = ("red", "orange", "yellow", "green", "blue", "purple")


def list_transactions(ctx: CommandContext, args) -> Renderable:
    """Scoped filters use their own endpoints; --type only applies to the budget-wide list."""
    budget_id = ctx.require_budget_id()
    client = ctx.client

    if args.account:
        transactions = client.list_account_transactions(budget_id, args.account, args.since)
    elif args.category:
        transactions = client.list_category_transactions(budget_id, args.category, args.since)
    elif args.payee:
        transactions = client.list_payee_transactions(budget_id, args.payee, args.since)
    else:
        transactions = client.list_transactions(budget_id, since_date=args.since, type=args.type)

    return Renderable(RenderKind.TRANSACTION_LIST, transactions)


def get_transaction(ctx: CommandContext, args) -> Renderable:
    txn = ctx.client.get_transaction(ctx.require_budget_id(), args.transaction_id)
    return Renderable(RenderKind.TRANSACTION, txn)


def create_transaction(ctx: CommandContext, args) -> Renderable:
    budget_id = ctx.require_budget_id()
    if not args.account:
        raise UsageError("account ID is required (--account)")

    payload = SaveTransaction(
        account_id=args.account,
        date=args.date or today(),
        amount=amount_to_milliunits(args.amount or 0.0),
        payee_id=args.payee_id,
        payee_name=args.payee_name,
        category_id=args.category,
        memo=args.memo,
        cleared=args.cleared,
        approved=args.approved,
        flag_color=args.flag
    )
    return Renderable(RenderKind.TRANSACTION, ctx.client.create_transaction(budget_id, payload))


def merge_transaction_update(existing: Transaction, args) -> SaveTransaction:
    """Start from the stored transaction and overlay only the flags the user gave."""
    payload = SaveTransaction(
        account_id=existing.account_id or "",
        date=existing.date,
        amount=existing.amount,
        payee_id=existing.payee_id,
        category_id=existing.category_id,
        memo=existing.memo,
        cleared=existing.cleared,
        approved=existing.approved,
        flag_color=existing.flag_color
    )

    overrides = {
        "account_id": args.account,
        "date": args.date,
        "payee_id": args.payee_id,
        "payee_name": args.payee_name,
        "category_id": args.category,
        "memo": args.memo,
        "cleared": args.cleared,
        "approved": args.approved,
        "flag_color": args.flag,
    }
    if args.amount is not None:
        overrides["amount"] = amount_to_milliunits(args.amount)

    return payload.model_copy(update={k: v for k, v in overrides.items() if v is not None})


def update_transaction(ctx: CommandContext, args) -> Renderable:
    """Read the transaction, merge the changes, and send a full replacement."""
    budget_id = ctx.require_budget_id()
    existing = ctx.client.get_transaction(budget_id, args.transaction_id)
    payload = merge_transaction_update(existing, args)
    txn = ctx.client.update_transaction(budget_id, args.transaction_id, payload)
    return Renderable(RenderKind.TRANSACTION, txn)


def delete_transaction(ctx: CommandContext, args) -> Renderable:
    txn = ctx.client.delete_transaction(ctx.require_budget_id(), args.transaction_id)
    return Renderable(RenderKind.TRANSACTION, txn)


def _add_save_arguments(parser: argparse.ArgumentParser, creating: bool) -> None:
    parser.add_argument("--account", help="Account ID" + (" (required)" if creating else ""))
    parser.add_argument("--date", help="Transaction date, YYYY-MM-DD" + (" (default: today)" if creating else ""))
    parser.add_argument("--amount", type=float, help="Amount (positive=inflow, negative=outflow)")
    parser.add_argument("--payee-id", dest="payee_id", help="Payee ID")
    parser.add_argument("--payee-name", dest="payee_name", help="Payee name (created if needed)")
    parser.add_argument("--category", help="Category ID")
    parser.add_argument("--memo", help="Memo")
    parser.add_argument("--cleared", choices=CLEARED_STATUSES, help="Cleared status")
    parser.add_argument("--approved", action=argparse.BooleanOptionalAction, default=None, help="Approval state")
    parser.add_argument("--flag", choices=FLAG_COLORS, help="Flag color")


def register(subparsers) -> None:
    parser = subparsers.add_parser("transactions", help="List, view, create, update and delete transactions")
    actions = parser.add_subparsers(dest="action", metavar="<command>", required=True)

    p = actions.add_parser("list", help="List transactions")
    p.add_argument("--since", help="Only transactions on or after this date (YYYY-MM-DD)")
    p.add_argument("--type", choices=TRANSACTION_TYPES, help="Filter by type")
    scope = p.add_mutually_exclusive_group()
    scope.add_argument("--account", help="Only this account's transactions")
    scope.add_argument("--category", help="Only this category's transactions")
    scope.add_argument("--payee", help="Only this payee's transactions")
    p.set_defaults(handler=list_transactions)

    p = actions.add_parser("get", help="Get transaction details")
    p.add_argument("transaction_id")
    p.set_defaults(handler=get_transaction)

    p = actions.add_parser("create", help="Create a transaction")
    _add_save_arguments(p, creating=True)
    p.set_defaults(handler=create_transaction)

    p = actions.add_parser("update", help="Update a transaction; only given fields change")
    p.add_argument("transaction_id")
    _add_save_arguments(p, creating=False)
    p.set_defaults(handler=update_transaction)

    p = actions.add_parser("delete", help="Delete a transaction")
    p.add_argument("transaction_id")
    p.set_defaults(handler=delete_transaction)
