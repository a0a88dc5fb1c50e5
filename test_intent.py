"""
Intent Resolution Tests

Validates that intent resolution recommends the top search result, lists
the inputs it still needs and falls back to suggestions when nothing
matches.
"""

import pytest

from operation_search import InMemoryOperationCatalog, IntentResolver, SearchEngine, operation_from_tool
from operation_search.intent import example_value, format_field_name, generate_example


VERIFY_SCHEMA = {
    "type": "object",
    "properties": {
        "reference": {"type": "string", "description": "Transaction reference"},
    },
    "required": ["reference"],
}

TRANSFER_SCHEMA = {
    "type": "object",
    "properties": {
        "amount": {"type": "number"},
        "currency": {"type": "string", "enum": ["NGN", "USD"]},
        "narration": {"type": "string"},
    },
    "required": ["amount"],
}


@pytest.fixture
def resolver():
    catalog = InMemoryOperationCatalog([
        operation_from_tool(
            "paystack", "verify-transaction", "Verify a payment by reference",
            category="payments", input_schema=VERIFY_SCHEMA,
        ),
        operation_from_tool(
            "paystack", "create-transfer", "Send money to a bank account",
            category="payments", input_schema=TRANSFER_SCHEMA,
        ),
        operation_from_tool("ngrok-api", "tunnels-list-tunnels", "List tunnels", category="infrastructure"),
    ])
    return IntentResolver(SearchEngine(catalog))


class TestIntentResolver:
    """Test query-to-recommendation resolution."""

    def test_recommends_top_match(self, resolver):
        resolution = resolver.resolve("verify paystack transaction reference")

        assert resolution.matched is True
        assert resolution.recommended.tool_id == "paystack:verify-transaction"
        assert resolution.ready_to_execute.required_params == ["reference"]
        assert resolution.search_context["mode"] == "global"
        assert "paystack" in resolution.search_context["matched_adapters"]

    def test_missing_inputs_when_decisive(self, resolver):
        resolution = resolver.resolve("verify transaction", adapter="paystack")

        if resolution.needs_selection:
            assert resolution.missing_inputs == []
        else:
            assert [m.field for m in resolution.missing_inputs] == ["reference"]
            assert resolution.missing_inputs[0].question == "What is the reference?"
            assert "paystack:verify-transaction" in resolution.next_step

    def test_no_match_suggests_alternatives(self, resolver):
        resolution = resolver.resolve("zzz_no_match")

        assert resolution.matched is False
        assert resolution.recommended is None
        assert resolution.suggestions
        assert resolution.search_context["matched_adapters"] == []

    @pytest.mark.parametrize("query", ["", "   "])
    def test_blank_query_rejected(self, resolver, query):
        with pytest.raises(ValueError):
            resolver.resolve(query)

    def test_high_risk_constraints(self, resolver):
        resolution = resolver.resolve("create transfer", adapter="paystack")

        ready = resolution.ready_to_execute
        assert ready.tool_id == "paystack:create-transfer"
        assert ready.constraints["risk_level"] == "high"
        assert ready.constraints["requires_idempotency"] is True
        assert ready.constraints["requires_confirmation"] is False
        assert ready.param_schemas["currency"]["enum"] == ["NGN", "USD"]
        assert ready.example["currency"] == "NGN"


class TestExamples:
    """Test example payload generation."""

    def test_example_values_by_name_then_type(self):
        assert example_value("email", {"type": "string"}) == "customer@example.com"
        assert example_value("amount", {"type": "number"}) == 5000
        assert example_value("flag", {"type": "boolean"}) is True
        assert example_value("mode", {"type": "string", "enum": ["a", "b"]}) == "a"

    def test_generate_example_skips_unknown_objects(self):
        example = generate_example({"metadata": {"type": "object"}, "count": {"type": "integer"}})
        assert example == {"metadata": {}, "count": 100}

    def test_format_field_name(self):
        assert format_field_name("accountNumber") == "account number"
        assert format_field_name("bank_code") == "bank code"
