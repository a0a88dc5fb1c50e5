"""
Operation Catalog Tests

Validates the in-memory catalog and the helpers that build operations
from adapter tool listings (tag and risk inference).
"""

import pytest

from operation_search import InMemoryOperationCatalog, Operation, operation_from_tool
from operation_search.catalog import infer_risk_level, infer_tags, to_title_case


class TestInMemoryCatalog:
    """Test catalog indexing and lookup."""

    def test_lookups_preserve_insertion_order(self):
        catalog = InMemoryOperationCatalog([
            operation_from_tool("paystack", "verify-transaction"),
            operation_from_tool("flutterwave-v3", "verify-payment"),
            operation_from_tool("paystack", "list-customers"),
        ])

        assert len(catalog) == 3
        assert [op.tool_id for op in catalog.operations_of("paystack")] == [
            "paystack:verify-transaction",
            "paystack:list-customers",
        ]
        assert catalog.adapters() == ["paystack", "flutterwave-v3"]
        assert "paystack:verify-transaction" in catalog

    def test_unknown_adapter_is_empty(self):
        assert InMemoryOperationCatalog().operations_of("nope") == []

    def test_duplicate_tool_id_rejected(self):
        catalog = InMemoryOperationCatalog([operation_from_tool("paystack", "verify-transaction")])

        with pytest.raises(ValueError):
            catalog.add(operation_from_tool("paystack", "verify-transaction"))

    def test_secondary_indexes(self):
        catalog = InMemoryOperationCatalog()
        count = catalog.extend([
            operation_from_tool("paystack", "verify-transaction", category="payments"),
            operation_from_tool("bap", "validate-account-number", category="banking"),
        ])

        assert count == 2
        assert [op.tool_id for op in catalog.by_category("banking")] == ["bap:validate-account-number"]
        assert [op.tool_id for op in catalog.by_tag("verification")] == [
            "paystack:verify-transaction",
            "bap:validate-account-number",
        ]
        assert catalog.get("missing") is None

    def test_operations_are_immutable(self):
        operation = operation_from_tool("paystack", "verify-transaction")

        with pytest.raises(Exception):
            operation.name = "Changed"


class TestOperationFromTool:
    """Test building operations from tool listings."""

    def test_builds_ids_names_and_params(self):
        operation = operation_from_tool(
            "paystack",
            "initialize-transaction",
            "Initialize a payment",
            category="payments",
            input_schema={
                "type": "object",
                "properties": {
                    "email": {"type": "string"},
                    "amount": {"type": "number"},
                    "currency": {"type": "string"},
                },
                "required": ["email", "amount"],
            },
        )

        assert isinstance(operation, Operation)
        assert operation.tool_id == "paystack:initialize-transaction"
        assert operation.tool == "initialize-transaction"
        assert operation.name == "Initialize Transaction"
        assert operation.required_params == ["email", "amount"]
        assert operation.optional_params == ["currency"]
        assert operation.is_mock is False

    def test_no_schema_means_no_params(self):
        operation = operation_from_tool("ngrok-api", "tunnels-list-tunnels")
        assert operation.required_params == []
        assert operation.optional_params == []

    def test_title_case(self):
        assert to_title_case("verify_transaction") == "Verify Transaction"
        assert to_title_case("tunnels-list-tunnels") == "Tunnels List Tunnels"


class TestInference:
    """Test tag and risk inference."""

    def test_infer_tags_appends_adapter(self):
        assert infer_tags("paystack", "verify-transaction") == [
            "payments", "verification", "paystack",
        ]

    def test_infer_country_tags(self):
        tags = infer_tags("flutterwave-v3", "initiate-payment", "Collect naira payments")
        assert "nigeria" in tags
        assert tags[-1] == "flutterwave-v3"

    @pytest.mark.parametrize("tool,expected", [
        ("transfers-create-transfer", "high"),
        ("delete-customer", "high"),
        ("update-customer", "medium"),
        ("verify-transaction", "low"),
        ("list-customers", "low"),
    ])
    def test_infer_risk_level(self, tool, expected):
        assert infer_risk_level(tool) == expected
