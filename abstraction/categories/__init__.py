"""Built-in category definitions.

Usage:
    from abstraction.categories import register_default_abstractions

    router = AbstractionRouter(executor=executor)
    register_default_abstractions(router)
"""

from typing import Callable, Dict, List

from abstraction.models import CategoryConfig
from abstraction.registry import AbstractionRegistry
from abstraction.categories.payment import payment_config
from abstraction.categories.banking import banking_config
from abstraction.categories.infrastructure import infrastructure_config


DEFAULT_CATEGORIES: Dict[str, Callable[[], CategoryConfig]] = {
    "payment": payment_config,
    "banking": banking_config,
    "infrastructure": infrastructure_config,
}


def register_default_abstractions(target) -> List[str]:
    """Register the built-in categories.

    Args:
        target: An AbstractionRegistry or an AbstractionRouter

    Returns:
        The registered category names
    """
    registry: AbstractionRegistry = target if isinstance(target, AbstractionRegistry) else target.registry
    for category, build in DEFAULT_CATEGORIES.items():
        registry.register(category, build())
    return list(DEFAULT_CATEGORIES)


__all__ = [
    "DEFAULT_CATEGORIES",
    "register_default_abstractions",
    "payment_config",
    "banking_config",
    "infrastructure_config",
]
