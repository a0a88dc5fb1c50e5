"""
HTTP API Tests

Validates the FastAPI surface: search, intent, abstracted execution,
category discovery and error mapping.
"""

import pytest
from fastapi.testclient import TestClient

from abstraction import LocalToolExecutor
from api.server import create_app
from core.config import Settings
from operation_search import InMemoryOperationCatalog, operation_from_tool


@pytest.fixture
def executor():
    executor = LocalToolExecutor()
    executor.register_tool(
        "paystack", "verify-transaction",
        lambda payload, metadata: {"status": "success", "reference": payload["reference"]},
    )
    executor.register_tool(
        "paystack", "initialize-transaction",
        lambda payload, metadata: {"amount": payload["amount"], "request_id": metadata.context.request_id},
    )
    return executor


@pytest.fixture
def catalog():
    return InMemoryOperationCatalog([
        operation_from_tool("paystack", "verify-transaction", "Verify a payment", category="payments"),
        operation_from_tool("paystack", "initialize-transaction", "Start a payment", category="payments"),
        operation_from_tool("flutterwave-v3", "verify-payment", "Verify a payment", category="payments"),
    ])


def _client(catalog, executor, **settings):
    return TestClient(create_app(catalog=catalog, executor=executor, settings=Settings(**settings)))


@pytest.fixture
def client(catalog, executor):
    return _client(catalog, executor)


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["categories"] == 3
        assert data["operations"] == 3


class TestSearchEndpoints:
    """Test discovery over HTTP."""

    def test_search(self, client):
        response = client.post("/search", json={"query": "verify transaction paystack"})

        assert response.status_code == 200
        data = response.json()
        assert data["results"][0]["tool_id"] == "paystack:verify-transaction"
        assert data["mode"] == "global"

    def test_search_no_match(self, client):
        data = client.post("/search", json={"query": "zzz_no_match"}).json()
        assert data["results"] == []
        assert data["needs_selection"] is False

    def test_intent_blank_query(self, client):
        assert client.post("/intent", json={"query": "  "}).status_code == 400

    def test_intent(self, client):
        data = client.post("/intent", json={"query": "verify paystack transaction"}).json()
        assert data["matched"] is True
        assert data["recommended"]["adapter"] == "paystack"

    def test_common_operations(self, client):
        data = client.get("/adapters/paystack/common", params={"limit": 1}).json()
        assert data == {"adapter": "paystack", "tool_ids": ["paystack:initialize-transaction"]}


class TestAbstractedEndpoints:
    """Test vendor-neutral execution over HTTP."""

    def test_execute_hides_vendor_by_default(self, client):
        response = client.post(
            "/api/v1/payment/verifyTransaction",
            json={"reference": "ref_1"},
            headers={"X-Request-ID": "req-42"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["category"] == "payment"
        assert data["data"] == {"status": "success", "reference": "ref_1"}
        assert data["metadata"]["request_id"] == "req-42"
        assert data["metadata"]["abstracted"] is True
        assert "vendor" not in data["metadata"]

    def test_execute_exposes_vendor_when_enabled(self, catalog, executor):
        client = _client(catalog, executor, expose_vendor=True)
        data = client.post("/api/v1/payment/verifyTransaction", json={"reference": "r"}).json()

        assert data["metadata"]["vendor"] == "paystack"

    def test_context_from_headers(self, client):
        data = client.post(
            "/api/v1/payment/initializeTransaction",
            json={"amount": 5, "email": "a@b.com"},
            headers={"X-Request-ID": "req-7"},
        ).json()

        assert data["data"] == {"amount": 500, "request_id": "req-7"}

    def test_vendor_key_is_preference_not_input(self, client):
        response = client.post(
            "/api/v1/payment/verifyTransaction",
            json={"reference": "r", "vendor": "flutterwave"},
        )

        # flutterwave's tool is not registered with the local executor
        assert response.status_code == 502
        assert response.json()["code"] == "VENDOR_CALL_FAILED"

    @pytest.mark.parametrize("path,body,status,code", [
        ("/api/v1/nonexistent/x", {}, 404, "UNKNOWN_CATEGORY"),
        ("/api/v1/payment/refund", {}, 404, "UNKNOWN_OPERATION"),
        ("/api/v1/payment/verifyTransaction", {}, 400, "MISSING_REQUIRED_FIELD"),
        ("/api/v1/payment/verifyTransaction", {"reference": 5}, 400, "TYPE_MISMATCH"),
        ("/api/v1/payment/createCustomer", {"email": "a@b.com"}, 501, "OPERATION_NOT_SUPPORTED"),
    ])
    def test_error_mapping(self, client, path, body, status, code):
        response = client.post(path, json=body, headers={"X-Request-ID": "req-err"})

        assert response.status_code == status
        data = response.json()
        assert data["success"] is False
        assert data["code"] == code
        assert data["request_id"] == "req-err"

    def test_error_generates_request_id(self, client):
        data = client.post("/api/v1/nonexistent/x", json={}).json()
        assert data["request_id"].startswith("req_")
        assert data["category"] == "nonexistent"


class TestCategoryDiscovery:
    """Test category discovery endpoints."""

    def test_list_categories(self, client):
        data = client.get("/api/v1/categories").json()

        names = [c["name"] for c in data["categories"]]
        assert names == ["payment", "banking", "infrastructure"]
        assert data["categories"][0]["vendors"] == ["paystack", "flutterwave", "sayswitch"]

    def test_category_info(self, client):
        data = client.get("/api/v1/categories/infrastructure").json()

        assert data["operations"] == ["createTunnel", "listTunnels"]
        assert data["schemas"]["createTunnel"]["region"] == {"type": "string", "default": "us"}
        assert data["schemas"]["listTunnels"] == {}

    def test_unknown_category_info(self, client):
        assert client.get("/api/v1/categories/nope").status_code == 404

    def test_schema(self, client):
        data = client.get("/api/v1/categories/payment/schema/verifyTransaction").json()
        assert data["schema"] == {"reference": {"type": "string", "required": True}}

    def test_unknown_schema(self, client):
        assert client.get("/api/v1/categories/payment/schema/nope").status_code == 404
