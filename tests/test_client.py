"""Tests for the YNAB API client."""
import json
import unittest

import httpx

from ynabctl.client import YnabClient, SaveTransaction, SaveScheduledTransaction
from ynabctl.utils.exceptions import (
    APIError,
    DecodeError,
    NetworkError,
    UnexpectedResponseError,
    UsageError,
)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that answers every request with one canned response and records requests."""

    def __init__(self, status_code=200, body=None, text=None):
        self.requests = []
        self.status_code = status_code
        self.body = body
        self.text = text
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


def make_client(transport) -> YnabClient:
    return YnabClient("secret-token", transport=transport)


class TestRequestExecution(unittest.TestCase):
    """Test auth headers, URLs and payload serialization."""

    def test_bearer_token_and_base_url(self):
        """Test that requests carry the token and hit the API root."""
        transport = RecordingTransport(body={"data": {"user": {"id": "u1"}}})
        user = make_client(transport).get_user()

        self.assertEqual(user.id, "u1")
        self.assertEqual(transport.last.method, "GET")
        self.assertEqual(str(transport.last.url), "https://api.ynab.com/v1/user")
        self.assertEqual(transport.last.headers["Authorization"], "Bearer secret-token")

    def test_get_sends_no_body(self):
        """Test that GET requests have no JSON content type or body."""
        transport = RecordingTransport(body={"data": {"budgets": []}})
        make_client(transport).list_budgets()

        self.assertEqual(transport.last.content, b"")
        self.assertNotIn("Content-Type", transport.last.headers)

    def test_create_account_payload(self):
        """Test that account creation wraps the payload under 'account'."""
        transport = RecordingTransport(
            status_code=201,
            body={"data": {"account": {"id": "a1", "name": "Checking", "type": "checking", "balance": 150000}}}
        )
        account = make_client(transport).create_account("b1", "Checking", "checking", 150000)

        self.assertEqual(account.balance, 150000)
        self.assertEqual(transport.last.method, "POST")
        self.assertEqual(transport.last.url.path, "/v1/budgets/b1/accounts")
        self.assertEqual(transport.last.headers["Content-Type"], "application/json")
        self.assertEqual(
            transport.last_json(),
            {"account": {"name": "Checking", "type": "checking", "balance": 150000}}
        )

    def test_update_month_category_path_and_payload(self):
        """Test that the budget update embeds budget, month and category and sends only the amount."""
        transport = RecordingTransport(body={"data": {"category": {"id": "c1", "budgeted": 500000}}})
        category = make_client(transport).update_month_category("b1", "2024-03-01", "c1", 500000)

        self.assertEqual(category.budgeted, 500000)
        self.assertEqual(transport.last.method, "PATCH")
        self.assertEqual(transport.last.url.path, "/v1/budgets/b1/months/2024-03-01/categories/c1")
        self.assertEqual(transport.last_json(), {"category": {"budgeted": 500000}})

    def test_update_payee_payload(self):
        """Test that renaming a payee sends only the name."""
        transport = RecordingTransport(body={"data": {"payee": {"id": "p1", "name": "Grocer"}}})
        payee = make_client(transport).update_payee("b1", "p1", "Grocer")

        self.assertEqual(payee.name, "Grocer")
        self.assertEqual(transport.last.method, "PATCH")
        self.assertEqual(transport.last_json(), {"payee": {"name": "Grocer"}})

    def test_create_transaction_omits_unset_fields(self):
        """Test that optional transaction fields left as None are not sent."""
        transport = RecordingTransport(
            status_code=201,
            body={"data": {"transaction": {"id": "t1", "date": "2024-01-15", "amount": -42500}}}
        )
        payload = SaveTransaction(account_id="a1", date="2024-01-15", amount=-42500, payee_name="Store")
        txn = make_client(transport).create_transaction("b1", payload)

        self.assertEqual(txn.amount, -42500)
        self.assertEqual(
            transport.last_json(),
            {"transaction": {"account_id": "a1", "date": "2024-01-15", "amount": -42500, "payee_name": "Store"}}
        )

    def test_update_transaction_uses_put(self):
        """Test that transaction updates are full replacements via PUT."""
        transport = RecordingTransport(body={"data": {"transaction": {"id": "t1"}}})
        payload = SaveTransaction(account_id="a1", date="2024-01-15", amount=-1000, memo="", approved=False)
        make_client(transport).update_transaction("b1", "t1", payload)

        self.assertEqual(transport.last.method, "PUT")
        self.assertEqual(transport.last.url.path, "/v1/budgets/b1/transactions/t1")
        body = transport.last_json()["transaction"]
        self.assertEqual(body["memo"], "")
        self.assertIs(body["approved"], False)

    def test_delete_transaction(self):
        """Test that delete returns the deleted transaction."""
        transport = RecordingTransport(body={"data": {"transaction": {"id": "t1", "deleted": True}}})
        txn = make_client(transport).delete_transaction("b1", "t1")

        self.assertTrue(txn.deleted)
        self.assertEqual(transport.last.method, "DELETE")
        self.assertEqual(transport.last.content, b"")

    def test_scheduled_transaction_create_and_update(self):
        """Test scheduled transaction create and update endpoints."""
        body = {"data": {"scheduled_transaction": {"id": "s1", "frequency": "monthly", "date_first": "2024-02-01"}}}
        transport = RecordingTransport(status_code=201, body=body)
        client = make_client(transport)
        payload = SaveScheduledTransaction(account_id="a1", date="2024-02-01", frequency="monthly", amount=-100000)

        created = client.create_scheduled_transaction("b1", payload)
        self.assertEqual(created.frequency, "monthly")
        self.assertEqual(transport.last.method, "POST")
        self.assertEqual(transport.last.url.path, "/v1/budgets/b1/scheduled_transactions")
        self.assertEqual(transport.last_json()["scheduled_transaction"]["frequency"], "monthly")

        client.update_scheduled_transaction("b1", "s1", payload)
        self.assertEqual(transport.last.method, "PUT")
        self.assertEqual(transport.last.url.path, "/v1/budgets/b1/scheduled_transactions/s1")

    def test_ids_are_escaped_in_paths(self):
        """Test that reserved characters in ids stay inside their path segment."""
        transport = RecordingTransport(body={"data": {"account": {"id": "a1"}}})
        make_client(transport).get_account("b/1", "a?x=1#frag")

        self.assertEqual(transport.last.url.raw_path, b"/v1/budgets/b%2F1/accounts/a%3Fx%3D1%23frag")
        self.assertEqual(transport.last.url.query, b"")


class TestTransactionListing(unittest.TestCase):
    """Test transaction filters and scoped endpoints."""

    def setUp(self):
        """Set up test fixtures."""
        self.transport = RecordingTransport(body={"data": {"transactions": [{"id": "t1", "amount": -1000}]}})
        self.client = make_client(self.transport)

    def test_unfiltered_list(self):
        """Test the plain list has no query string."""
        transactions = self.client.list_transactions("b1")

        self.assertEqual(len(transactions), 1)
        self.assertEqual(self.transport.last.url.path, "/v1/budgets/b1/transactions")
        self.assertEqual(self.transport.last.url.query, b"")

    def test_since_and_type_are_query_parameters(self):
        """Test since_date and type filters."""
        self.client.list_transactions("b1", since_date="2024-01-01", type="unapproved")

        params = self.transport.last.url.params
        self.assertEqual(params["since_date"], "2024-01-01")
        self.assertEqual(params["type"], "unapproved")

    def test_invalid_type_rejected_before_request(self):
        """Test that only the server-defined types are accepted."""
        with self.assertRaises(UsageError):
            self.client.list_transactions("b1", type="pending")
        self.assertEqual(self.transport.requests, [])

    def test_scoped_endpoints(self):
        """Test account, category and payee scoped lists use their own paths."""
        self.client.list_account_transactions("b1", "a1")
        self.assertEqual(self.transport.last.url.path, "/v1/budgets/b1/accounts/a1/transactions")

        self.client.list_category_transactions("b1", "c1", since_date="2024-01-01")
        self.assertEqual(self.transport.last.url.path, "/v1/budgets/b1/categories/c1/transactions")
        self.assertEqual(self.transport.last.url.params["since_date"], "2024-01-01")

        self.client.list_payee_transactions("b1", "p1")
        self.assertEqual(self.transport.last.url.path, "/v1/budgets/b1/payees/p1/transactions")


class TestResponseDecoding(unittest.TestCase):
    """Test envelope unwrapping."""

    def test_list_budgets(self):
        """Test a one-budget response decodes to one Budget."""
        transport = RecordingTransport(body={"data": {"budgets": [{"id": "b1", "name": "Test"}]}})
        budgets = make_client(transport).list_budgets()

        self.assertEqual(len(budgets), 1)
        self.assertEqual(budgets[0].id, "b1")
        self.assertEqual(budgets[0].name, "Test")

    def test_missing_nested_key_is_decode_error(self):
        """Test that an envelope without the expected key is not an empty list."""
        transport = RecordingTransport(body={"data": {}})

        with self.assertRaises(DecodeError):
            make_client(transport).list_budgets()

    def test_missing_data_is_decode_error(self):
        """Test a body without the data envelope."""
        transport = RecordingTransport(body={"budgets": []})

        with self.assertRaises(DecodeError):
            make_client(transport).list_budgets()

    def test_non_json_body_is_decode_error(self):
        """Test a success status with a non-JSON body."""
        transport = RecordingTransport(text="<html>maintenance</html>")

        with self.assertRaises(DecodeError):
            make_client(transport).get_user()

    def test_wrong_shape_is_decode_error(self):
        """Test that a value failing validation is a decode error."""
        transport = RecordingTransport(body={"data": {"budgets": {"id": "b1"}}})

        with self.assertRaises(DecodeError):
            make_client(transport).list_budgets()

    def test_category_groups_with_nested_categories(self):
        """Test nested category decoding."""
        body = {"data": {"category_groups": [
            {"id": "g1", "name": "Bills", "hidden": False, "deleted": False, "categories": [
                {"id": "c1", "category_group_id": "g1", "name": "Rent", "budgeted": 1200000, "activity": -1200000, "balance": 0}
            ]}
        ]}}
        groups = make_client(RecordingTransport(body=body)).list_categories("b1")

        self.assertEqual(groups[0].categories[0].name, "Rent")
        self.assertEqual(groups[0].categories[0].budgeted, 1200000)

    def test_unknown_fields_ignored(self):
        """Test that new API fields do not break decoding."""
        body = {"data": {"payee": {"id": "p1", "name": "Shop", "brand_new_field": 1}}}
        payee = make_client(RecordingTransport(body=body)).get_payee("b1", "p1")

        self.assertEqual(payee.name, "Shop")

    def test_month_decoding(self):
        """Test month fetch path and nullable age of money."""
        body = {"data": {"month": {"month": "2024-03-01", "income": 5000000, "age_of_money": None, "categories": []}}}
        transport = RecordingTransport(body=body)
        month = make_client(transport).get_month("b1", "2024-03-01")

        self.assertEqual(month.month, "2024-03-01")
        self.assertIsNone(month.age_of_money)
        self.assertEqual(transport.last.url.path, "/v1/budgets/b1/months/2024-03-01")


class TestErrorMapping(unittest.TestCase):
    """Test translation of failures to ynabctl errors."""

    def test_structured_api_error(self):
        """Test that a YNAB error envelope becomes an APIError."""
        transport = RecordingTransport(
            status_code=401,
            body={"error": {"id": "401", "name": "unauthorized", "detail": "bad token"}}
        )

        with self.assertRaises(APIError) as cm:
            make_client(transport).list_budgets()

        self.assertEqual(cm.exception.name, "unauthorized")
        self.assertEqual(cm.exception.detail, "bad token")
        self.assertEqual(cm.exception.id, "401")
        self.assertEqual(cm.exception.status_code, 401)
        self.assertEqual(str(cm.exception), "unauthorized: bad token")

    def test_api_error_on_any_operation(self):
        """Test that every operation surfaces the same error type."""
        transport = RecordingTransport(
            status_code=404,
            body={"error": {"id": "404.2", "name": "resource_not_found", "detail": "Resource not found"}}
        )
        client = make_client(transport)

        for call in (
            lambda: client.get_account("b1", "missing"),
            lambda: client.delete_transaction("b1", "missing"),
            lambda: client.update_payee("b1", "missing", "x"),
        ):
            with self.assertRaises(APIError):
                call()

    def test_unstructured_error_body(self):
        """Test that an error without the envelope keeps status and body."""
        transport = RecordingTransport(status_code=502, text="Bad Gateway")

        with self.assertRaises(UnexpectedResponseError) as cm:
            make_client(transport).get_user()

        self.assertEqual(cm.exception.status_code, 502)
        self.assertEqual(cm.exception.body, "Bad Gateway")
        self.assertIn("status 502", str(cm.exception))
        self.assertIsInstance(cm.exception, NetworkError)

    def test_error_json_without_error_key(self):
        """Test JSON error bodies that are not YNAB error envelopes."""
        transport = RecordingTransport(status_code=500, body={"message": "boom"})

        with self.assertRaises(UnexpectedResponseError):
            make_client(transport).get_user()

    def test_transport_failure(self):
        """Test that connection problems become NetworkError."""
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(httpx.MockTransport(refuse))

        with self.assertRaises(NetworkError) as cm:
            client.get_user()
        self.assertNotIsInstance(cm.exception, UnexpectedResponseError)

    def test_timeout_is_not_retried(self):
        """Test that a timeout fails after exactly one attempt."""
        attempts = []

        def time_out(request):
            attempts.append(request)
            raise httpx.ReadTimeout("timed out", request=request)

        with self.assertRaises(NetworkError):
            make_client(httpx.MockTransport(time_out)).list_budgets()
        self.assertEqual(len(attempts), 1)

    def test_undecodable_content_encoding(self):
        """Test that a body that cannot be decompressed becomes NetworkError."""
        def corrupt(request):
            return httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=b"notgzip")

        with self.assertRaises(NetworkError) as cm:
            make_client(httpx.MockTransport(corrupt)).get_user()
        self.assertIsInstance(cm.exception.__cause__, httpx.DecodingError)


if __name__ == "__main__":
    unittest.main()
