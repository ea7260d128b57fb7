"""YNAB REST API client."""
import json
from typing import Any, List, Optional
from urllib.parse import quote, urlencode

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from .models import (
    Account,
    Budget,
    BudgetSettings,
    Category,
    CategoryGroup,
    Month,
    Payee,
    SaveAccount,
    SaveMonthCategory,
    SavePayee,
    SaveScheduledTransaction,
    SaveTransaction,
    ScheduledTransaction,
    Transaction,
    User,
)
from ..utils.logger import get_logger
from ..utils.exceptions import (
    APIError,
    DecodeError,
    NetworkError,
    UnexpectedResponseError,
    UsageError,
)

logger = get_logger()

BASE_URL = "https://api.ynab.com/v1"
DEFAULT_TIMEOUT_SECONDS = 30.0

TRANSACTION_TYPES = ("uncategorized", "unapproved")


def _path(*segments: str) -> str:
    """Join path segments, percent-encoding each so ids cannot add segments or a query."""
    return "/" + "/".join(quote(str(segment), safe="") for segment in segments)


class YnabClient:
    """Authenticated client for the YNAB API.

    Holds only the token and an httpx connection pool, so one instance can
    serve any number of sequential calls.
    """

    def __init__(
        self,
        token: str,
        base_url: str = BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.BaseTransport] = None
    ):
        """
        Initialize the client.

        Args:
            token: YNAB personal access token
            base_url: API root, without trailing slash
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.base_url = base_url
        self._http = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"Authorization": f"Bearer {token}"}
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "YnabClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, payload: Optional[BaseModel] = None, wrap_key: Optional[str] = None) -> bytes:
        """
        Execute one API call and return the raw success body.

        Args:
            method: HTTP verb
            path: Path below the base URL, including any query string
            payload: Request model serialized as the JSON body
            wrap_key: Key the payload is nested under in the body

        Returns:
            Response body bytes for a status below 400
        """
        headers = {}
        content = None
        if payload is not None:
            body = payload.model_dump(mode="json", exclude_none=True)
            if wrap_key:
                body = {wrap_key: body}
            content = json.dumps(body).encode("utf-8")
            headers["Content-Type"] = "application/json"

        logger.debug(f"{method} {path}")
        try:
            response = self._http.request(method, path, content=content, headers=headers)
        except httpx.RequestError as e:
            raise NetworkError(f"Request {method} {path} failed: {e}") from e

        logger.debug(f"{method} {path} -> {response.status_code}")

        if response.status_code >= 400:
            raise self._error_from_response(response)

        return response.content

    @staticmethod
    def _error_from_response(response: httpx.Response) -> Exception:
        """Map an error response to APIError, or UnexpectedResponseError if unstructured."""
        try:
            parsed = response.json()
        except ValueError:
            parsed = None

        error = parsed.get("error") if isinstance(parsed, dict) else None
        if isinstance(error, dict):
            return APIError(
                id=str(error.get("id", "")),
                name=str(error.get("name", "")),
                detail=str(error.get("detail", "")),
                status_code=response.status_code
            )
        return UnexpectedResponseError(response.status_code, response.text)

    @staticmethod
    def _unwrap(body: bytes, key: str, model: Any) -> Any:
        """Decode ``{"data": {key: ...}}`` and validate the inner value as ``model``."""
        try:
            parsed = json.loads(body)
        except ValueError as e:
            raise DecodeError(f"Failed to parse response: {e}") from e

        data = parsed.get("data") if isinstance(parsed, dict) else None
        if not isinstance(data, dict) or key not in data:
            raise DecodeError(f"Failed to parse response: missing 'data.{key}'")

        try:
            return TypeAdapter(model).validate_python(data[key])
        except ValidationError as e:
            raise DecodeError(f"Failed to parse response '{key}': {e}") from e

    def _get(self, path: str, key: str, model: Any) -> Any:
        return self._unwrap(self._request("GET", path), key, model)

    # User

    def get_user(self) -> User:
        return self._get("/user", "user", User)

    # Budgets

    def list_budgets(self) -> List[Budget]:
        return self._get("/budgets", "budgets", List[Budget])

    def get_budget(self, budget_id: str) -> Budget:
        return self._get(_path("budgets", budget_id), "budget", Budget)

    def get_budget_settings(self, budget_id: str) -> BudgetSettings:
        return self._get(_path("budgets", budget_id, "settings"), "settings", BudgetSettings)

    # Accounts

    def list_accounts(self, budget_id: str) -> List[Account]:
        return self._get(_path("budgets", budget_id, "accounts"), "accounts", List[Account])

    def get_account(self, budget_id: str, account_id: str) -> Account:
        return self._get(_path("budgets", budget_id, "accounts", account_id), "account", Account)

    def create_account(self, budget_id: str, name: str, account_type: str, balance: int) -> Account:
        """Create an account; ``balance`` is already in milliunits."""
        payload = SaveAccount(name=name, type=account_type, balance=balance)
        body = self._request("POST", _path("budgets", budget_id, "accounts"), payload, "account")
        return self._unwrap(body, "account", Account)

    # Categories

    def list_categories(self, budget_id: str) -> List[CategoryGroup]:
        return self._get(_path("budgets", budget_id, "categories"), "category_groups", List[CategoryGroup])

    def get_category(self, budget_id: str, category_id: str) -> Category:
        return self._get(_path("budgets", budget_id, "categories", category_id), "category", Category)

    def update_month_category(self, budget_id: str, month: str, category_id: str, budgeted: int) -> Category:
        """Set the budgeted milliunits of a category for one month (YYYY-MM-DD)."""
        payload = SaveMonthCategory(budgeted=budgeted)
        path = _path("budgets", budget_id, "months", month, "categories", category_id)
        body = self._request("PATCH", path, payload, "category")
        return self._unwrap(body, "category", Category)

    # Payees

    def list_payees(self, budget_id: str) -> List[Payee]:
        return self._get(_path("budgets", budget_id, "payees"), "payees", List[Payee])

    def get_payee(self, budget_id: str, payee_id: str) -> Payee:
        return self._get(_path("budgets", budget_id, "payees", payee_id), "payee", Payee)

    def update_payee(self, budget_id: str, payee_id: str, name: str) -> Payee:
        payload = SavePayee(name=name)
        body = self._request("PATCH", _path("budgets", budget_id, "payees", payee_id), payload, "payee")
        return self._unwrap(body, "payee", Payee)

    # Transactions

    def list_transactions(self, budget_id: str, since_date: Optional[str] = None, type: Optional[str] = None) -> List[Transaction]:
        """
        List budget transactions.

        Args:
            budget_id: Budget identifier
            since_date: Only transactions on or after this date (YYYY-MM-DD)
            type: "uncategorized" or "unapproved"
        """
        if type and type not in TRANSACTION_TYPES:
            raise UsageError(f"Invalid transaction type: {type} (must be one of {', '.join(TRANSACTION_TYPES)})")

        params = {}
        if since_date:
            params["since_date"] = since_date
        if type:
            params["type"] = type

        path = _path("budgets", budget_id, "transactions")
        if params:
            path += "?" + urlencode(params)
        return self._get(path, "transactions", List[Transaction])

    def _list_scoped_transactions(self, budget_id: str, scope: str, scope_id: str, since_date: Optional[str]) -> List[Transaction]:
        path = _path("budgets", budget_id, scope, scope_id, "transactions")
        if since_date:
            path += "?" + urlencode({"since_date": since_date})
        return self._get(path, "transactions", List[Transaction])

    def list_account_transactions(self, budget_id: str, account_id: str, since_date: Optional[str] = None) -> List[Transaction]:
        return self._list_scoped_transactions(budget_id, "accounts", account_id, since_date)

    def list_category_transactions(self, budget_id: str, category_id: str, since_date: Optional[str] = None) -> List[Transaction]:
        return self._list_scoped_transactions(budget_id, "categories", category_id, since_date)

    def list_payee_transactions(self, budget_id: str, payee_id: str, since_date: Optional[str] = None) -> List[Transaction]:
        return self._list_scoped_transactions(budget_id, "payees", payee_id, since_date)

    def get_transaction(self, budget_id: str, transaction_id: str) -> Transaction:
        return self._get(_path("budgets", budget_id, "transactions", transaction_id), "transaction", Transaction)

    def create_transaction(self, budget_id: str, transaction: SaveTransaction) -> Transaction:
        body = self._request("POST", _path("budgets", budget_id, "transactions"), transaction, "transaction")
        return self._unwrap(body, "transaction", Transaction)

    def update_transaction(self, budget_id: str, transaction_id: str, transaction: SaveTransaction) -> Transaction:
        """Replace all mutable fields of a transaction."""
        path = _path("budgets", budget_id, "transactions", transaction_id)
        body = self._request("PUT", path, transaction, "transaction")
        return self._unwrap(body, "transaction", Transaction)

    def delete_transaction(self, budget_id: str, transaction_id: str) -> Transaction:
        body = self._request("DELETE", _path("budgets", budget_id, "transactions", transaction_id))
        return self._unwrap(body, "transaction", Transaction)

    # Scheduled transactions

    def list_scheduled_transactions(self, budget_id: str) -> List[ScheduledTransaction]:
        return self._get(_path("budgets", budget_id, "scheduled_transactions"), "scheduled_transactions", List[ScheduledTransaction])

    def get_scheduled_transaction(self, budget_id: str, scheduled_transaction_id: str) -> ScheduledTransaction:
        path = _path("budgets", budget_id, "scheduled_transactions", scheduled_transaction_id)
        return self._get(path, "scheduled_transaction", ScheduledTransaction)

    def create_scheduled_transaction(self, budget_id: str, scheduled: SaveScheduledTransaction) -> ScheduledTransaction:
        path = _path("budgets", budget_id, "scheduled_transactions")
        body = self._request("POST", path, scheduled, "scheduled_transaction")
        return self._unwrap(body, "scheduled_transaction", ScheduledTransaction)

    def update_scheduled_transaction(self, budget_id: str, scheduled_transaction_id: str, scheduled: SaveScheduledTransaction) -> ScheduledTransaction:
        path = _path("budgets", budget_id, "scheduled_transactions", scheduled_transaction_id)
        body = self._request("PUT", path, scheduled, "scheduled_transaction")
        return self._unwrap(body, "scheduled_transaction", ScheduledTransaction)

    def delete_scheduled_transaction(self, budget_id: str, scheduled_transaction_id: str) -> ScheduledTransaction:
        path = _path("budgets", budget_id, "scheduled_transactions", scheduled_transaction_id)
        body = self._request("DELETE", path)
        return self._unwrap(body, "scheduled_transaction", ScheduledTransaction)

    # Months

    def list_months(self, budget_id: str) -> List[Month]:
        return self._get(_path("budgets", budget_id, "months"), "months", List[Month])

    def get_month(self, budget_id: str, month: str) -> Month:
        """Fetch one month; ``month`` must already be a YYYY-MM-DD date."""
        return self._get(_path("budgets", budget_id, "months", month), "month", Month)
