"""Pydantic models for YNAB API entities and request payloads.

Monetary fields are integers in milliunits (see ``currency``).
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class YnabModel(BaseModel):
    """Base for response entities; unknown fields from the API are ignored."""
    model_config = ConfigDict(extra="ignore")


class User(YnabModel):
    """Authenticated YNAB user."""
    id: str


class DateFormat(YnabModel):
    format: Optional[str] = None


class CurrencyFormat(YnabModel):
    iso_code: Optional[str] = None
    example_format: Optional[str] = None
    decimal_digits: int = 0
    decimal_separator: Optional[str] = None
    symbol_first: bool = False
    group_separator: Optional[str] = None
    currency_symbol: Optional[str] = None
    display_symbol: bool = False


class Budget(YnabModel):
    """Budget summary or detail."""
    id: str
    name: str = ""
    last_modified_on: Optional[str] = None
    first_month: Optional[str] = None
    last_month: Optional[str] = None
    date_format: Optional[DateFormat] = None
    currency_format: Optional[CurrencyFormat] = None


class BudgetSettings(YnabModel):
    date_format: DateFormat = DateFormat()
    currency_format: CurrencyFormat = CurrencyFormat()


class Account(YnabModel):
    """Bank, credit or loan account. Balances are in milliunits."""
    id: str
    name: str = ""
    type: str = ""
    on_budget: bool = False
    closed: bool = False
    note: Optional[str] = None
    balance: int = 0
    cleared_balance: int = 0
    uncleared_balance: int = 0
    transfer_payee_id: Optional[str] = None
    direct_import_linked: bool = False
    direct_import_in_error: bool = False
    last_reconciled_at: Optional[str] = None
    debt_original_balance: Optional[int] = None
    debt_interest_rates: Optional[Dict[str, int]] = None
    debt_minimum_payments: Optional[Dict[str, int]] = None
    debt_escrow_amounts: Optional[Dict[str, int]] = None
    deleted: bool = False


class Category(YnabModel):
    """Budget category; figures are for the current (or requested) month."""
    id: str
    category_group_id: Optional[str] = None
    category_group_name: Optional[str] = None
    name: str = ""
    hidden: bool = False
    original_category_group_id: Optional[str] = None
    note: Optional[str] = None
    budgeted: int = 0
    activity: int = 0
    balance: int = 0
    goal_type: Optional[str] = None
    goal_day: Optional[int] = None
    goal_cadence: Optional[int] = None
    goal_cadence_frequency: Optional[int] = None
    goal_creation_month: Optional[str] = None
    goal_target: Optional[int] = None
    goal_target_month: Optional[str] = None
    goal_percentage_complete: Optional[int] = None
    goal_months_to_budget: Optional[int] = None
    goal_under_funded: Optional[int] = None
    goal_overall_funded: Optional[int] = None
    goal_overall_left: Optional[int] = None
    deleted: bool = False


class CategoryGroup(YnabModel):
    id: str
    name: str = ""
    hidden: bool = False
    deleted: bool = False
    categories: List[Category] = []


class Payee(YnabModel):
    """Transaction counterparty; transfer payees carry transfer_account_id."""
    id: str
    name: str = ""
    transfer_account_id: Optional[str] = None
    deleted: bool = False


class Subtransaction(YnabModel):
    id: str
    transaction_id: Optional[str] = None
    amount: int = 0
    memo: Optional[str] = None
    payee_id: Optional[str] = None
    payee_name: Optional[str] = None
    category_id: Optional[str] = None
    category_name: Optional[str] = None
    transfer_account_id: Optional[str] = None
    transfer_transaction_id: Optional[str] = None
    deleted: bool = False


class Transaction(YnabModel):
    """Ledger entry. Negative amounts are outflows, positive are inflows."""
    id: str
    date: str = ""
    amount: int = 0
    memo: Optional[str] = None
    cleared: str = "uncleared"
    approved: bool = False
    flag_color: Optional[str] = None
    flag_name: Optional[str] = None
    account_id: Optional[str] = None
    account_name: Optional[str] = None
    payee_id: Optional[str] = None
    payee_name: Optional[str] = None
    category_id: Optional[str] = None
    category_name: Optional[str] = None
    transfer_account_id: Optional[str] = None
    transfer_transaction_id: Optional[str] = None
    matched_transaction_id: Optional[str] = None
    import_id: Optional[str] = None
    import_payee_name: Optional[str] = None
    import_payee_name_original: Optional[str] = None
    debt_transaction_type: Optional[str] = None
    deleted: bool = False
    subtransactions: List[Subtransaction] = []


class ScheduledSubtransaction(YnabModel):
    id: str
    scheduled_transaction_id: Optional[str] = None
    amount: int = 0
    memo: Optional[str] = None
    payee_id: Optional[str] = None
    category_id: Optional[str] = None
    transfer_account_id: Optional[str] = None
    deleted: bool = False


class ScheduledTransaction(YnabModel):
    """Recurring transaction template; date_next is computed by the server."""
    id: str
    date_first: str = ""
    date_next: Optional[str] = None
    frequency: str = ""
    amount: int = 0
    memo: Optional[str] = None
    flag_color: Optional[str] = None
    flag_name: Optional[str] = None
    account_id: Optional[str] = None
    account_name: Optional[str] = None
    payee_id: Optional[str] = None
    payee_name: Optional[str] = None
    category_id: Optional[str] = None
    category_name: Optional[str] = None
    transfer_account_id: Optional[str] = None
    deleted: bool = False
    subtransactions: List[ScheduledSubtransaction] = []


class Month(YnabModel):
    """Aggregated budget figures for one month (first-of-month date)."""
    month: str
    note: Optional[str] = None
    income: int = 0
    budgeted: int = 0
    activity: int = 0
    to_be_budgeted: int = 0
    age_of_money: Optional[int] = None
    deleted: bool = False
    categories: List[Category] = []


# Request payloads. Fields left as None are omitted from the request body.

class SaveAccount(BaseModel):
    name: str
    type: str
    balance: int


class SaveMonthCategory(BaseModel):
    budgeted: int


class SavePayee(BaseModel):
    name: str


class SaveTransaction(BaseModel):
    account_id: str
    date: str
    amount: int
    payee_id: Optional[str] = None
    payee_name: Optional[str] = None
    category_id: Optional[str] = None
    memo: Optional[str] = None
    cleared: Optional[str] = None
    approved: Optional[bool] = None
    flag_color: Optional[str] = None
    import_id: Optional[str] = None


class SaveScheduledTransaction(BaseModel):
    account_id: str
    date: str
    frequency: str
    amount: int
    payee_id: Optional[str] = None
    payee_name: Optional[str] = None
    category_id: Optional[str] = None
    memo: Optional[str] = None
    flag_color: Optional[str] = None
