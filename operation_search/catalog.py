"""Operation Catalog.

The search engine reads operations through the ``OperationCatalog``
protocol and never mutates it. ``InMemoryOperationCatalog`` is the
default implementation: an in-memory index of operations keyed by
tool_id with secondary indexes by adapter, tag and category.

The helpers at the bottom build ``Operation`` records from raw adapter
tool listings, inferring tags and risk level from names and descriptions.
"""

import re
from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence

from operation_search.models import Operation


class OperationCatalog(Protocol):
    """Protocol for read-only operation lookup.

    The adapter registry (or any other source of operations) should
    implement this to be searchable.
    """

    def all_operations(self) -> Sequence[Operation]:
        """Get every known operation."""
        ...

    def operations_of(self, adapter_id: str) -> Sequence[Operation]:
        """Get the operations owned by one adapter (empty if unknown)."""
        ...


class InMemoryOperationCatalog:
    """Indexed, in-memory operation catalog.

    Insertion order is preserved for every lookup, so search results that
    tie on score come back in catalog order.

    Example:
        catalog = InMemoryOperationCatalog()
        catalog.add(operation_from_tool("paystack", "verify-transaction"))
        catalog.operations_of("paystack")
    """

    def __init__(self, operations: Optional[Iterable[Operation]] = None):
        self._operations: Dict[str, Operation] = {}
        self._by_adapter: Dict[str, List[str]] = {}
        self._by_tag: Dict[str, List[str]] = {}
        self._by_category: Dict[str, List[str]] = {}
        if operations:
            self.extend(operations)

    def add(self, operation: Operation) -> None:
        """Add an operation and index it.

        Raises:
            ValueError: If an operation with the same tool_id already exists
        """
        if operation.tool_id in self._operations:
            raise ValueError(f"Operation '{operation.tool_id}' already in catalog")

        self._operations[operation.tool_id] = operation
        self._by_adapter.setdefault(operation.adapter, []).append(operation.tool_id)
        self._by_category.setdefault(operation.category, []).append(operation.tool_id)
        for tag in operation.tags:
            ids = self._by_tag.setdefault(tag, [])
            if operation.tool_id not in ids:
                ids.append(operation.tool_id)

    def extend(self, operations: Iterable[Operation]) -> int:
        """Add several operations. Returns the number added."""
        count = 0
        for operation in operations:
            self.add(operation)
            count += 1
        return count

    def get(self, tool_id: str) -> Optional[Operation]:
        """Get an operation by tool_id."""
        return self._operations.get(tool_id)

    def all_operations(self) -> List[Operation]:
        return list(self._operations.values())

    def operations_of(self, adapter_id: str) -> List[Operation]:
        return self._resolve(self._by_adapter.get(adapter_id, []))

    def by_tag(self, tag: str) -> List[Operation]:
        """Get all operations carrying a tag."""
        return self._resolve(self._by_tag.get(tag, []))

    def by_category(self, category: str) -> List[Operation]:
        """Get all operations in a category."""
        return self._resolve(self._by_category.get(category, []))

    def adapters(self) -> List[str]:
        return list(self._by_adapter.keys())

    def tags(self) -> List[str]:
        return list(self._by_tag.keys())

    def categories(self) -> List[str]:
        return list(self._by_category.keys())

    def __len__(self) -> int:
        return len(self._operations)

    def __contains__(self, tool_id: object) -> bool:
        return tool_id in self._operations

    def _resolve(self, tool_ids: List[str]) -> List[Operation]:
        return [self._operations[tool_id] for tool_id in tool_ids]


# =============================================================================
# Building operations from adapter tool listings
# =============================================================================

# (pattern, tag) pairs checked against "<adapter> <tool> <description>"
TAG_RULES = (
    (r"payment|charge|pay|transaction", "payments"),
    (r"transfer|send|payout", "transfers"),
    (r"customer|user|account", "customers"),
    (r"subscription|recurring|plan", "subscriptions"),
    (r"refund|reverse|cancel", "refunds"),
    (r"webhook|event|notification", "webhooks"),
    (r"verify|validate|check", "verification"),
    (r"list|get|fetch|retrieve", "read"),
    (r"create|initialize|init|new", "create"),
    (r"update|modify|edit", "update"),
    (r"delete|remove|cancel", "delete"),
    (r"card|credit|debit", "cards"),
    (r"bank|account|iban", "bank"),
    (r"mobile|ussd|momo", "mobile"),
    (r"invoice|bill", "invoices"),
    # Country / region
    (r"nigeria|naira|ngn", "nigeria"),
    (r"ghana|ghs|cedi", "ghana"),
    (r"kenya|kes|shilling", "kenya"),
    (r"south.?africa|zar|rand", "south-africa"),
)

HIGH_RISK_PATTERN = re.compile(r"charge|pay|transfer|payout|send|withdraw|refund|delete|remove|cancel")
MEDIUM_RISK_PATTERN = re.compile(r"create|update|modify|edit|set|enable|disable")


def infer_tags(adapter_id: str, tool_name: str, description: str = "") -> List[str]:
    """Infer tags from an adapter id, tool name and description.

    The adapter id itself is always the last tag.

    Examples:
        >>> infer_tags("paystack", "verify-transaction")
        ['payments', 'verification', 'paystack']
    """
    text = f"{adapter_id} {tool_name} {description or ''}".lower()

    tags: List[str] = []
    for pattern, tag in TAG_RULES:
        if tag not in tags and re.search(pattern, text):
            tags.append(tag)

    if adapter_id not in tags:
        tags.append(adapter_id)
    return tags


def infer_risk_level(tool_name: str, description: str = "") -> str:
    """Infer a risk level: money movement and deletes are high, writes medium."""
    text = f"{tool_name} {description or ''}".lower()

    if HIGH_RISK_PATTERN.search(text):
        return "high"
    if MEDIUM_RISK_PATTERN.search(text):
        return "medium"
    return "low"


def to_title_case(name: str) -> str:
    """Convert ``verify-transaction`` / ``verify_transaction`` to ``Verify Transaction``."""
    return " ".join(word[:1].upper() + word[1:] for word in re.split(r"[-_]", name) if word)


def operation_from_tool(
    adapter_id: str,
    tool_name: str,
    description: str = "",
    category: str = "general",
    input_schema: Optional[Dict[str, Any]] = None,
    is_mock: bool = False,
) -> Operation:
    """Build an ``Operation`` from one entry of an adapter's tool listing.

    Args:
        adapter_id: Owning adapter
        tool_name: Adapter-local tool name (e.g. "verify-transaction")
        description: Tool description
        category: Category to file the operation under
        input_schema: JSON schema for the tool parameters
        is_mock: Whether the adapter is a placeholder

    Returns:
        Operation with tool_id "<adapter>:<tool>"
    """
    required: List[str] = []
    optional: List[str] = []
    if input_schema and isinstance(input_schema.get("properties"), dict):
        required = list(input_schema.get("required") or [])
        optional = [key for key in input_schema["properties"] if key not in required]

    return Operation(
        tool_id=f"{adapter_id}:{tool_name}",
        adapter=adapter_id,
        tool=tool_name,
        name=to_title_case(tool_name),
        description=description or "",
        category=category,
        tags=infer_tags(adapter_id, tool_name, description),
        is_mock=is_mock,
        risk_level=infer_risk_level(tool_name, description),
        input_schema=input_schema,
        required_params=required,
        optional_params=optional,
    )
