"""Account commands."""
from .context import CommandContext
from ..client.currency import amount_to_milliunits
from ..output import Renderable, RenderKind
from ..utils.exceptions import UsageError

ACCOUNT_TYPES = (
    "checking", "savings", "cash", "creditCard", "lineOfCredit",
    "otherAsset", "otherLiability", "mortgage", "autoLoan", "studentLoan",
    "personalLoan", "medicalDebt", "otherDebt",
)


def list_accounts(ctx: CommandContext, args) -> Renderable:
    accounts = ctx.client.list_accounts(ctx.require_budget_id())
    return Renderable(RenderKind.ACCOUNT_LIST, accounts)


def get_account(ctx: CommandContext, args) -> Renderable:
    account = ctx.client.get_account(ctx.require_budget_id(), args.account_id)
    return Renderable(RenderKind.ACCOUNT, account)


def create_account(ctx: CommandContext, args) -> Renderable:
    budget_id = ctx.require_budget_id()
    if not args.name:
        raise UsageError("account name is required (--name)")
    if not args.type:
        raise UsageError("account type is required (--type)")

    account = ctx.client.create_account(
        budget_id, args.name, args.type, amount_to_milliunits(args.balance)
    )
    return Renderable(RenderKind.ACCOUNT, account)


def register(subparsers) -> None:
    parser = subparsers.add_parser("accounts", help="List, view and create accounts")
    actions = parser.add_subparsers(dest="action", metavar="<command>", required=True)

    p = actions.add_parser("list", help="List all accounts")
    p.set_defaults(handler=list_accounts)

    p = actions.add_parser("get", help="Get account details")
    p.add_argument("account_id")
    p.set_defaults(handler=get_account)

    # Types are passed through unchecked; the API is the authority.
    p = actions.add_parser(
        "create",
        help="Create a new account",
        epilog="Account types: " + ", ".join(ACCOUNT_TYPES)
    )
    p.add_argument("--name", help="Account name (required)")
    p.add_argument("--type", help="Account type (required)")
    p.add_argument("--balance", type=float, default=0.0, help="Starting balance")
    p.set_defaults(handler=create_account)
