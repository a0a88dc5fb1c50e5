"""
Input Validation Tests

Validates client input checking against operation schemas:
1. Required fields: absent or None fails, first violation wins
2. Runtime type checks, including array items
3. Defaults applied only to absent fields, on a copy
"""

import pytest

from abstraction import (
    FieldRule,
    MissingRequiredFieldError,
    TypeMismatchError,
    validate_input,
)
from abstraction.models import ItemRule


PAYMENT_SCHEMA = {
    "amount": FieldRule(type="number", required=True),
    "currency": FieldRule(type="string", default="NGN"),
    "email": FieldRule(type="string", required=True),
    "reference": FieldRule(type="string"),
    "metadata": FieldRule(type="object"),
}


class TestRequiredFields:
    """Test required-field enforcement."""

    def test_absent_required_field(self):
        with pytest.raises(MissingRequiredFieldError) as exc_info:
            validate_input({"amount": 500}, PAYMENT_SCHEMA)
        assert exc_info.value.field == "email"

    def test_none_counts_as_missing(self):
        with pytest.raises(MissingRequiredFieldError) as exc_info:
            validate_input({"amount": None, "email": "a@b.com"}, PAYMENT_SCHEMA)
        assert exc_info.value.field == "amount"

    def test_first_violation_in_declaration_order(self):
        # amount is declared before email, so it is reported first
        with pytest.raises(MissingRequiredFieldError) as exc_info:
            validate_input({}, PAYMENT_SCHEMA)
        assert exc_info.value.field == "amount"

    def test_type_error_before_later_missing_field(self):
        with pytest.raises(TypeMismatchError) as exc_info:
            validate_input({"amount": "500"}, PAYMENT_SCHEMA)
        assert exc_info.value.field == "amount"

    def test_none_input_treated_as_empty(self):
        assert validate_input(None, {"region": FieldRule(type="string", default="us")}) == {"region": "us"}

    def test_required_rule_with_default_rejected(self):
        with pytest.raises(ValueError):
            FieldRule(type="string", required=True, default="x")


class TestTypeChecks:
    """Test runtime type checks."""

    @pytest.mark.parametrize("rule_type,value", [
        ("string", "abc"),
        ("number", 5),
        ("number", 5.5),
        ("integer", 7),
        ("boolean", False),
        ("object", {"a": 1}),
        ("array", [1, 2]),
    ])
    def test_accepted_values(self, rule_type, value):
        result = validate_input({"field": value}, {"field": FieldRule(type=rule_type)})
        assert result["field"] == value

    @pytest.mark.parametrize("rule_type,value,actual", [
        ("string", 5, "integer"),
        ("number", "5", "string"),
        ("number", True, "boolean"),
        ("integer", 5.5, "number"),
        ("integer", True, "boolean"),
        ("boolean", 1, "integer"),
        ("object", [1], "array"),
        ("array", {"a": 1}, "object"),
        ("string", None, "null"),
    ])
    def test_rejected_values(self, rule_type, value, actual):
        with pytest.raises(TypeMismatchError) as exc_info:
            validate_input({"field": value}, {"field": FieldRule(type=rule_type)})

        error = exc_info.value
        assert error.field == "field"
        assert error.expected == rule_type
        assert error.actual == actual

    def test_untyped_field_accepts_anything(self):
        result = validate_input({"free": object}, {"free": FieldRule()})
        assert result["free"] is object

    def test_array_item_types(self):
        schema = {"tags": FieldRule(type="array", items=ItemRule(type="string"))}

        assert validate_input({"tags": ["a", "b"]}, schema) == {"tags": ["a", "b"]}
        with pytest.raises(TypeMismatchError) as exc_info:
            validate_input({"tags": ["a", 2]}, schema)
        assert exc_info.value.field == "tags[1]"

    def test_array_object_items_required_keys(self):
        schema = {
            "messages": FieldRule(
                type="array",
                required=True,
                items=ItemRule(type="object", required=["role", "content"]),
            ),
        }

        with pytest.raises(MissingRequiredFieldError) as exc_info:
            validate_input({"messages": [{"role": "user", "content": "hi"}, {"role": "user"}]}, schema)
        assert exc_info.value.field == "messages[1].content"

    def test_plain_mapping_rules(self):
        result = validate_input({}, {"region": {"type": "string", "default": "us"}})
        assert result == {"region": "us"}


class TestDefaults:
    """Test default application."""

    def test_default_applied_when_absent(self):
        result = validate_input({"amount": 500, "email": "a@b.com"}, PAYMENT_SCHEMA)
        assert result["currency"] == "NGN"
        assert "reference" not in result

    @pytest.mark.parametrize("value", ["", 0])
    def test_falsy_values_not_overwritten(self, value):
        schema = {"field": FieldRule(default="fallback")}
        assert validate_input({"field": value}, schema)["field"] == value

    def test_explicit_none_default(self):
        schema = {"field": FieldRule(default=None)}
        assert validate_input({}, schema) == {"field": None}

    def test_caller_input_not_mutated(self):
        client_input = {"amount": 500, "email": "a@b.com"}
        result = validate_input(client_input, PAYMENT_SCHEMA)

        assert client_input == {"amount": 500, "email": "a@b.com"}
        assert result is not client_input
        assert result["currency"] == "NGN"

    def test_extra_fields_pass_through(self):
        result = validate_input({"amount": 1, "email": "a@b.com", "extra": True}, PAYMENT_SCHEMA)
        assert result["extra"] is True
