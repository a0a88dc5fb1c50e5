"""Abstraction - Vendor-neutral execution of operations.

Clients call operations by category and operation name (for example
``payment.initializeTransaction``); this package decides which vendor
serves the call and translates the input into that vendor's format.

Key Features:
- Client schemas validated before anything is dispatched
- Static vendor selection: explicit preference, else the primary vendor
- Deprecated vendors skipped by default, still reachable by preference
- Registry published as immutable snapshots swapped atomically
- Pluggable vendor call executors (in-process or HTTP gateway)

Usage:
    from abstraction import AbstractionRouter, LocalToolExecutor
    from abstraction.categories import register_default_abstractions

    router = AbstractionRouter(executor=LocalToolExecutor())
    register_default_abstractions(router)

    result = await router.execute_abstracted_call(
        "payment", "initializeTransaction", {"amount": 500, "email": "a@b.com"}
    )
"""

from abstraction.errors import (
    AbstractionErrorCode,
    AbstractionError,
    UnknownCategoryError,
    UnknownOperationError,
    MissingRequiredFieldError,
    TypeMismatchError,
    NoVendorsAvailableError,
    OperationNotSupportedByVendorError,
    VendorDispatchError,
)
from abstraction.models import (
    FieldRule,
    ItemRule,
    ClientOperation,
    VendorMapping,
    VendorEntry,
    CategoryConfig,
    CategoryAbstraction,
    DispatchContext,
    DispatchMetadata,
    AbstractedResult,
)
from abstraction.validation import validate_input
from abstraction.registry import AbstractionRegistry, lint_abstraction
from abstraction.executors import (
    VendorCallExecutor,
    LocalToolExecutor,
    ToolNotFoundError,
    HttpGatewayExecutor,
    GatewayCallError,
)
from abstraction.router import AbstractionRouter, select_vendor

__all__ = [
    # Errors
    "AbstractionErrorCode",
    "AbstractionError",
    "UnknownCategoryError",
    "UnknownOperationError",
    "MissingRequiredFieldError",
    "TypeMismatchError",
    "NoVendorsAvailableError",
    "OperationNotSupportedByVendorError",
    "VendorDispatchError",
    # Models
    "FieldRule",
    "ItemRule",
    "ClientOperation",
    "VendorMapping",
    "VendorEntry",
    "CategoryConfig",
    "CategoryAbstraction",
    "DispatchContext",
    "DispatchMetadata",
    "AbstractedResult",
    # Validation
    "validate_input",
    # Registry
    "AbstractionRegistry",
    "lint_abstraction",
    # Executors
    "VendorCallExecutor",
    "LocalToolExecutor",
    "ToolNotFoundError",
    "HttpGatewayExecutor",
    "GatewayCallError",
    # Router
    "AbstractionRouter",
    "select_vendor",
]
