"""JSON and table rendering of command results."""
import json
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, TextIO

from pydantic import BaseModel

from ..client.currency import milliunits_to_amount


class RenderKind(Enum):
    """Shapes a command result can take."""
    USER = "user"
    BUDGET_LIST = "budget_list"
    BUDGET = "budget"
    BUDGET_SETTINGS = "budget_settings"
    ACCOUNT_LIST = "account_list"
    ACCOUNT = "account"
    CATEGORY_GROUPS = "category_groups"
    CATEGORY = "category"
    TRANSACTION_LIST = "transaction_list"
    TRANSACTION = "transaction"
    PAYEE_LIST = "payee_list"
    PAYEE = "payee"
    SCHEDULED_LIST = "scheduled_list"
    SCHEDULED = "scheduled"
    MONTH_LIST = "month_list"
    MONTH = "month"
    JSON = "json"


@dataclass(frozen=True)
class Renderable:
    """A command result tagged with its kind."""
    kind: RenderKind
    value: Any


Row = Sequence[str]


def _money(milliunits: int) -> str:
    return f"{milliunits_to_amount(milliunits):.2f}"


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _text(value: Optional[str]) -> str:
    return value or ""


def truncate(text: str, length: int) -> str:
    """Shorten text to ``length`` characters, marking the cut with '...'."""
    if len(text) <= length:
        return text
    return text[:length - 3] + "..."


def _user(user) -> List[Row]:
    return [("ID",), (user.id,)]


def _budget_list(budgets) -> List[Row]:
    rows = [("ID", "NAME", "LAST MODIFIED")]
    rows += [(b.id, b.name, _text(b.last_modified_on)) for b in budgets]
    return rows


def _budget(budget) -> List[Row]:
    return [
        ("ID", "NAME", "FIRST MONTH", "LAST MONTH"),
        (budget.id, budget.name, _text(budget.first_month), _text(budget.last_month)),
    ]


def _budget_settings(settings) -> List[Row]:
    currency = settings.currency_format
    return [
        ("SETTING", "VALUE"),
        ("Date Format", _text(settings.date_format.format)),
        ("Currency", _text(currency.iso_code)),
        ("Currency Symbol", _text(currency.currency_symbol)),
        ("Decimal Digits", str(currency.decimal_digits)),
    ]


def _account_list(accounts) -> List[Row]:
    rows = [("ID", "NAME", "TYPE", "BALANCE", "ON BUDGET", "CLOSED")]
    for a in accounts:
        if a.deleted:
            continue
        rows.append((a.id, a.name, a.type, _money(a.balance), _flag(a.on_budget), _flag(a.closed)))
    return rows


def _account(account) -> List[Row]:
    rows = [
        ("FIELD", "VALUE"),
        ("ID", account.id),
        ("Name", account.name),
        ("Type", account.type),
        ("Balance", _money(account.balance)),
        ("Cleared Balance", _money(account.cleared_balance)),
        ("Uncleared Balance", _money(account.uncleared_balance)),
        ("On Budget", _flag(account.on_budget)),
        ("Closed", _flag(account.closed)),
    ]
    if account.note:
        rows.append(("Note", account.note))
    return rows


def _category_groups(groups) -> List[Row]:
    rows = [("GROUP", "CATEGORY", "BUDGETED", "ACTIVITY", "BALANCE")]
    for group in groups:
        if group.deleted or group.hidden:
            continue
        for c in group.categories:
            if c.deleted or c.hidden:
                continue
            rows.append((group.name, c.name, _money(c.budgeted), _money(c.activity), _money(c.balance)))
    return rows


def _category(category) -> List[Row]:
    rows = [
        ("FIELD", "VALUE"),
        ("ID", category.id),
        ("Name", category.name),
        ("Group", _text(category.category_group_name)),
        ("Budgeted", _money(category.budgeted)),
        ("Activity", _money(category.activity)),
        ("Balance", _money(category.balance)),
    ]
    if category.goal_type:
        rows.append(("Goal Type", category.goal_type))
        rows.append(("Goal Target", _money(category.goal_target or 0)))
    if category.note:
        rows.append(("Note", category.note))
    return rows


def _transaction_list(transactions) -> List[Row]:
    rows = [("DATE", "PAYEE", "CATEGORY", "MEMO", "AMOUNT", "CLEARED")]
    for t in transactions:
        if t.deleted:
            continue
        rows.append((
            t.date, _text(t.payee_name), _text(t.category_name),
            truncate(_text(t.memo), 30), _money(t.amount), t.cleared
        ))
    return rows


def _transaction(txn) -> List[Row]:
    rows = [
        ("FIELD", "VALUE"),
        ("ID", txn.id),
        ("Date", txn.date),
        ("Amount", _money(txn.amount)),
        ("Payee", _text(txn.payee_name)),
        ("Category", _text(txn.category_name)),
        ("Account", _text(txn.account_name)),
        ("Cleared", txn.cleared),
        ("Approved", _flag(txn.approved)),
    ]
    if txn.memo:
        rows.append(("Memo", txn.memo))
    if txn.flag_color:
        rows.append(("Flag", txn.flag_color))
    for sub in txn.subtransactions:
        if not sub.deleted:
            rows.append(("Split", f"{_money(sub.amount)} {_text(sub.category_name)}".rstrip()))
    return rows


def _payee_list(payees) -> List[Row]:
    rows = [("ID", "NAME", "TRANSFER ACCOUNT")]
    rows += [(p.id, p.name, _text(p.transfer_account_id)) for p in payees if not p.deleted]
    return rows


def _payee(payee) -> List[Row]:
    rows = [("FIELD", "VALUE"), ("ID", payee.id), ("Name", payee.name)]
    if payee.transfer_account_id:
        rows.append(("Transfer Account ID", payee.transfer_account_id))
    return rows


def _scheduled_list(scheduled) -> List[Row]:
    rows = [("DATE NEXT", "FREQUENCY", "PAYEE", "CATEGORY", "AMOUNT")]
    for st in scheduled:
        if st.deleted:
            continue
        rows.append((
            _text(st.date_next), st.frequency, _text(st.payee_name),
            _text(st.category_name), _money(st.amount)
        ))
    return rows


def _scheduled(st) -> List[Row]:
    rows = [
        ("FIELD", "VALUE"),
        ("ID", st.id),
        ("Date First", st.date_first),
        ("Date Next", _text(st.date_next)),
        ("Frequency", st.frequency),
        ("Amount", _money(st.amount)),
        ("Payee", _text(st.payee_name)),
        ("Category", _text(st.category_name)),
        ("Account", _text(st.account_name)),
    ]
    if st.memo:
        rows.append(("Memo", st.memo))
    return rows


def _month_list(months) -> List[Row]:
    rows = [("MONTH", "INCOME", "BUDGETED", "ACTIVITY", "TO BE BUDGETED")]
    for m in months:
        if m.deleted:
            continue
        rows.append((m.month, _money(m.income), _money(m.budgeted), _money(m.activity), _money(m.to_be_budgeted)))
    return rows


def _month(month) -> List[Row]:
    rows = [
        ("FIELD", "VALUE"),
        ("Month", month.month),
        ("Income", _money(month.income)),
        ("Budgeted", _money(month.budgeted)),
        ("Activity", _money(month.activity)),
        ("To Be Budgeted", _money(month.to_be_budgeted)),
    ]
    if month.age_of_money:
        rows.append(("Age of Money", f"{month.age_of_money} days"))
    if month.note:
        rows.append(("Note", month.note))
    return rows


TABLE_LAYOUTS: Dict[RenderKind, Callable[[Any], List[Row]]] = {
    RenderKind.USER: _user,
    RenderKind.BUDGET_LIST: _budget_list,
    RenderKind.BUDGET: _budget,
    RenderKind.BUDGET_SETTINGS: _budget_settings,
    RenderKind.ACCOUNT_LIST: _account_list,
    RenderKind.ACCOUNT: _account,
    RenderKind.CATEGORY_GROUPS: _category_groups,
    RenderKind.CATEGORY: _category,
    RenderKind.TRANSACTION_LIST: _transaction_list,
    RenderKind.TRANSACTION: _transaction,
    RenderKind.PAYEE_LIST: _payee_list,
    RenderKind.PAYEE: _payee,
    RenderKind.SCHEDULED_LIST: _scheduled_list,
    RenderKind.SCHEDULED: _scheduled,
    RenderKind.MONTH_LIST: _month_list,
    RenderKind.MONTH: _month,
}


def to_jsonable(value: Any) -> Any:
    """Convert models (and lists of them) to plain JSON-compatible data."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    return value


class Formatter:
    """Writes command results as indented JSON or aligned columns."""

    def __init__(self, output_format: str = "json", stream: Optional[TextIO] = None):
        self.output_format = output_format
        self.stream = stream or sys.stdout

    def print(self, renderable: Renderable) -> None:
        layout = TABLE_LAYOUTS.get(renderable.kind)
        if self.output_format == "table" and layout is not None:
            self._print_table(layout(renderable.value))
        else:
            self._print_json(renderable.value)

    def _print_json(self, value: Any) -> None:
        self.stream.write(json.dumps(to_jsonable(value), indent=2, ensure_ascii=False))
        self.stream.write("\n")

    def _print_table(self, rows: List[Row]) -> None:
        """Left-align every column, two spaces apart; the last column is not padded."""
        widths = [0] * max(len(r) for r in rows)
        for row in rows:
            for i, cell in enumerate(row):
                widths[i] = max(widths[i], len(cell))

        for row in rows:
            cells = [cell.ljust(widths[i]) for i, cell in enumerate(row[:-1])]
            cells.append(row[-1])
            self.stream.write("  ".join(cells).rstrip() + "\n")
