"""Client Input Validation.

Validates a client payload against an operation's schema and returns a
new dict with defaults applied. The caller's object is never modified.

Fields are checked in declaration order and the first violation wins.
"""

from collections.abc import Mapping
from typing import Any, Dict, Optional

from abstraction.errors import MissingRequiredFieldError, TypeMismatchError
from abstraction.models import FieldRule, ItemRule


def type_name(value: Any) -> str:
    """Name a runtime value using the schema's type vocabulary."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def matches_type(value: Any, expected: str) -> bool:
    """Check a value against a schema type.

    Booleans are never numbers, ``integer`` only accepts ints and
    ``number`` accepts ints and floats.
    """
    actual = type_name(value)
    if expected == "number":
        return actual in ("integer", "number")
    return actual == expected


def validate_input(
    client_input: Optional[Mapping],
    schema: Dict[str, FieldRule],
) -> Dict[str, Any]:
    """Validate client input against an operation schema.

    Args:
        client_input: Client payload (None is treated as empty)
        schema: Field rules in declaration order

    Returns:
        A new dict: the input plus defaults for absent fields

    Raises:
        MissingRequiredFieldError: Required field absent or None
        TypeMismatchError: Present field of the wrong type
    """
    validated: Dict[str, Any] = dict(client_input or {})

    for field, rules in schema.items():
        if isinstance(rules, Mapping):
            rules = FieldRule.model_validate(rules)

        present = field in validated
        value = validated.get(field)

        if rules.required and value is None:
            raise MissingRequiredFieldError(field)

        if present and rules.type:
            _check_value(field, value, rules)

        if not present and rules.has_default:
            validated[field] = rules.default

    return validated


def _check_value(field: str, value: Any, rules: FieldRule) -> None:
    if not matches_type(value, rules.type):
        raise TypeMismatchError(field, rules.type, type_name(value))

    if rules.type == "array" and rules.items is not None:
        _check_items(field, value, rules.items)


def _check_items(field: str, items: Any, rules: ItemRule) -> None:
    for index, item in enumerate(items):
        path = f"{field}[{index}]"

        if rules.type and not matches_type(item, rules.type):
            raise TypeMismatchError(path, rules.type, type_name(item))

        if rules.type == "object" and rules.required:
            for key in rules.required:
                if item.get(key) is None:
                    raise MissingRequiredFieldError(f"{path}.{key}")
