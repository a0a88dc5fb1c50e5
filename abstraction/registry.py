"""Category Registry.

Holds the registered categories as an immutable snapshot. Registration
builds a new snapshot and publishes it with a single reference swap, so a
concurrent reader sees either the old or the new category in full.

Registration never rejects a structurally odd config; ``lint_abstraction``
is the separate check that reports mappings which can never be reached.
"""

import copy
import threading
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, List, Optional, Union

from abstraction.models import CategoryAbstraction, CategoryConfig
from core.observability.logging import get_logger

logger = get_logger(__name__)


class AbstractionRegistry:
    """Registry of categories, read through snapshots.

    Example:
        registry = AbstractionRegistry()
        registry.register("payment", payment_config)

        abstraction = registry.get("payment")
        abstraction.vendors  # {"paystack": VendorEntry(...), ...}
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._snapshot: Mapping = MappingProxyType({})

    def register(
        self,
        category: str,
        config: Union[CategoryConfig, Dict[str, Any]],
    ) -> None:
        """Register a category, replacing any existing definition.

        Args:
            category: Category name (e.g. "payment")
            config: CategoryConfig or an equivalent plain mapping
        """
        if isinstance(config, CategoryConfig):
            config = copy.deepcopy(config)
        else:
            config = CategoryConfig.model_validate(copy.deepcopy(dict(config)))

        abstraction = CategoryAbstraction(category=category, config=config)

        with self._lock:
            replaced = category in self._snapshot
            updated = dict(self._snapshot)
            updated[category] = abstraction
            self._snapshot = MappingProxyType(updated)

        logger.info(
            "Registered category %s (%d operations, %d vendors)%s",
            category,
            len(config.client),
            len(config.vendors),
            " replacing previous definition" if replaced else "",
        )

    def get(self, category: str) -> Optional[CategoryAbstraction]:
        """Get a registered category, or None."""
        return self._snapshot.get(category)

    def categories(self) -> List[str]:
        """Registered category names in registration order."""
        return list(self._snapshot.keys())

    def snapshot(self) -> Mapping:
        """The current read-only category mapping."""
        return self._snapshot

    def __contains__(self, category: object) -> bool:
        return category in self._snapshot

    def __len__(self) -> int:
        return len(self._snapshot)


def lint_abstraction(config: Union[CategoryConfig, Dict[str, Any]]) -> List[str]:
    """Report problems in a category config.

    Flags vendor mappings for operations the client side does not define,
    vendors that implement none of the client operations, and deprecated
    vendors that name an unknown ``migrate_to`` target.

    Returns:
        Human-readable problems (empty when the config is clean)
    """
    if not isinstance(config, CategoryConfig):
        config = CategoryConfig.model_validate(config)

    problems = []
    operations = set(config.client)

    for name, vendor in config.vendors.items():
        for operation in vendor.mappings:
            if operation not in operations:
                problems.append(
                    f"Vendor {name} maps unknown operation: {operation}"
                )

        if operations and not operations.intersection(vendor.mappings):
            problems.append(f"Vendor {name} implements none of the client operations")

        if vendor.migrate_to and vendor.migrate_to not in config.vendors:
            problems.append(
                f"Vendor {name} migrates to unregistered vendor: {vendor.migrate_to}"
            )

    return problems
