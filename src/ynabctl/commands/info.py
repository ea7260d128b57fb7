"""Commands that only print static information."""
from .context import CommandContext
from .. import __version__

AI_CONTEXT = """\
# ynabctl: notes for AI assistants

ynabctl drives the YNAB (You Need A Budget) API from the command line.
Output is JSON by default; add `-f table` for a human-readable view.

## Concepts

- Budget: container for all data. Most commands need one, from `--budget <id>`
  or `ynabctl config set-default-budget <id>`. The id `last-used` also works.
- Accounts: checking, savings, creditCard, mortgage and other holdings.
- Categories: grouped envelopes with budgeted, activity and balance per month.
- Transactions: dated entries. Negative amount = outflow, positive = inflow.
- Milliunits: the API stores money as integers, 1000 = 1.00. ynabctl converts
  amounts given on the command line; JSON output shows raw milliunits.

## Setup

    ynabctl config set-token <token>
    ynabctl budgets list
    ynabctl config set-default-budget <budget-id>
    ynabctl config set-format table
    ynabctl config show

## Commands

    ynabctl user
    ynabctl budgets list | get [id] | settings [id]
    ynabctl accounts list | get <id>
    ynabctl accounts create --name "Checking" --type checking --balance 1000.00
    ynabctl categories list | get <id>
    ynabctl categories update <id> --budgeted 500 [--month 2024-01-01]
    ynabctl payees list | get <id>
    ynabctl payees update <id> --name "New Name"
    ynabctl transactions list [--since 2024-01-01] [--type unapproved|uncategorized]
    ynabctl transactions list --account <id> | --category <id> | --payee <id>
    ynabctl transactions get <id>
    ynabctl transactions create --account <id> --amount -42.50 --payee-name "Store" \\
        [--category <id>] [--memo text] [--date 2024-01-15] [--cleared cleared]
    ynabctl transactions update <id> --amount -55.00 --memo "Updated memo"
    ynabctl transactions delete <id>
    ynabctl scheduled list | get <id> | delete <id>
    ynabctl scheduled create --account <id> --amount -100 --frequency monthly --date 2024-02-01
    ynabctl scheduled update <id> --amount -150.00
    ynabctl months list
    ynabctl months get [current|2024-01-01]

Updates only change the fields you pass; everything else is kept.

Frequencies: never, daily, weekly, everyOtherWeek, twiceAMonth, every4Weeks,
monthly, everyOtherMonth, every3Months, every4Months, twiceAYear, yearly,
everyOtherYear.

## Environment

    YNAB_TOKEN           API token
    YNAB_DEFAULT_BUDGET  default budget id
    YNAB_FORMAT          json or table

## Errors

Errors print one line to stderr and exit with status 1:
401 unauthorized means a bad or expired token, 404 not_found a wrong id,
400 bad_request an invalid date, amount or enum value.

## Scripting

    ynabctl accounts list | jq '.[] | {id, name}'
    ynabctl categories list | jq '.[].categories[] | {id, name}'
    ynabctl transactions list --since $(date +%Y-%m-01) -f table
"""


def show_version(ctx: CommandContext, args) -> str:
    return f"ynabctl {__version__}"


def show_ai_context(ctx: CommandContext, args) -> str:
    return AI_CONTEXT.rstrip("\n")


def register(subparsers) -> None:
    p = subparsers.add_parser("version", help="Print version information")
    p.set_defaults(handler=show_version, needs_client=False)

    p = subparsers.add_parser("ai", help="Print usage notes for AI assistants")
    p.set_defaults(handler=show_ai_context, needs_client=False)
