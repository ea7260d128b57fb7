"""YNAB API client."""
from .client import YnabClient, BASE_URL, TRANSACTION_TYPES
from .currency import amount_to_milliunits, milliunits_to_amount
from .models import (
    Account,
    Budget,
    BudgetSettings,
    Category,
    CategoryGroup,
    Month,
    Payee,
    SaveScheduledTransaction,
    SaveTransaction,
    ScheduledTransaction,
    Transaction,
    User,
)

__all__ = [
    "YnabClient",
    "BASE_URL",
    "TRANSACTION_TYPES",
    "amount_to_milliunits",
    "milliunits_to_amount",
    "Account",
    "Budget",
    "BudgetSettings",
    "Category",
    "CategoryGroup",
    "Month",
    "Payee",
    "SaveScheduledTransaction",
    "SaveTransaction",
    "ScheduledTransaction",
    "Transaction",
    "User",
]
