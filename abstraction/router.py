"""Abstraction Router.

Executes one vendor-neutral operation per call:
1. Resolves the category and the client operation
2. Validates the input against the client schema
3. Selects a vendor (explicit preference, else the primary vendor)
4. Transforms the input into the vendor payload
5. Dispatches through the vendor call executor and wraps the result

Every lookup and validation step runs before the transform, so a call
that fails early has no side effects.
"""

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from abstraction.errors import (
    NoVendorsAvailableError,
    OperationNotSupportedByVendorError,
    UnknownCategoryError,
    UnknownOperationError,
    VendorDispatchError,
)
from abstraction.executors import LocalToolExecutor, VendorCallExecutor
from abstraction.models import (
    AbstractedResult,
    CategoryConfig,
    DispatchContext,
    DispatchMetadata,
    FieldRule,
    ResultMetadata,
)
from abstraction.registry import AbstractionRegistry
from abstraction.validation import validate_input
from core.observability.logging import get_logger, with_correlation

logger = get_logger(__name__)


def select_vendor(
    vendors: Mapping,
    preference: Optional[str] = None,
    skip_deprecated: bool = True,
) -> Optional[str]:
    """Pick the vendor for a call.

    An explicit preference naming a registered vendor always wins, even a
    deprecated one. Otherwise the first registered vendor is chosen,
    skipping deprecated vendors when ``skip_deprecated`` is set unless all
    of them are deprecated.

    Args:
        vendors: Vendor entries in registration order
        preference: Requested vendor name (ignored when unknown)
        skip_deprecated: Skip deprecated vendors in default selection

    Returns:
        The vendor name, or None when there are no vendors
    """
    names = list(vendors.keys())
    if not names:
        return None

    if preference and preference in vendors:
        return preference

    if skip_deprecated:
        for name in names:
            if not vendors[name].deprecated:
                return name

    return names[0]


class AbstractionRouter:
    """Routes vendor-neutral calls to concrete vendors.

    Example:
        router = AbstractionRouter(executor=LocalToolExecutor())
        router.register_abstraction("payment", payment_config)

        result = await router.execute_abstracted_call(
            "payment", "verifyTransaction", {"reference": "ref_123"}
        )
        result.data  # whatever the executor returned
    """

    def __init__(
        self,
        registry: Optional[AbstractionRegistry] = None,
        executor: Optional[VendorCallExecutor] = None,
        skip_deprecated_default: bool = True,
        callback_url: Optional[str] = None,
    ):
        """Initialize the router.

        Args:
            registry: Category registry (a fresh empty one by default)
            executor: Vendor call executor (an empty LocalToolExecutor by default)
            skip_deprecated_default: Skip deprecated vendors when no preference is given
            callback_url: Fallback callback URL for contexts that carry none
        """
        self.registry = registry if registry is not None else AbstractionRegistry()
        self.executor = executor if executor is not None else LocalToolExecutor()
        self.skip_deprecated_default = skip_deprecated_default
        self.callback_url = callback_url

    def register_abstraction(
        self,
        category: str,
        config: Union[CategoryConfig, Dict[str, Any]],
    ) -> None:
        """Register a category, replacing any existing definition."""
        self.registry.register(category, config)

    async def execute_abstracted_call(
        self,
        category: str,
        operation: str,
        client_input: Optional[Mapping] = None,
        vendor_preference: Optional[str] = None,
        context: Optional[Union[DispatchContext, Dict[str, Any]]] = None,
    ) -> AbstractedResult:
        """Execute one abstracted operation.

        Args:
            category: Category name (e.g. "payment")
            operation: Client operation name (e.g. "initializeTransaction")
            client_input: Vendor-neutral input
            vendor_preference: Preferred vendor name; unknown names fall back
                to the primary vendor
            context: Request-scoped values for transforms and the executor

        Returns:
            AbstractedResult wrapping the executor's result

        Raises:
            UnknownCategoryError: Category not registered
            UnknownOperationError: Operation not defined by the category
            MissingRequiredFieldError: Required input missing
            TypeMismatchError: Input of the wrong type
            NoVendorsAvailableError: Category has no vendors
            OperationNotSupportedByVendorError: Selected vendor lacks the operation
            VendorDispatchError: Executor failed
        """
        context = self._build_context(context)

        # One snapshot read per call
        abstraction = self.registry.get(category)
        if abstraction is None:
            raise UnknownCategoryError(category)

        client_operation = abstraction.client.get(operation)
        if client_operation is None:
            raise UnknownOperationError(category, operation)

        validated = validate_input(client_input, client_operation.fields)

        vendor_name = select_vendor(
            abstraction.vendors,
            vendor_preference,
            skip_deprecated=self.skip_deprecated_default,
        )
        if vendor_name is None:
            raise NoVendorsAvailableError(category)

        vendor = abstraction.vendors[vendor_name]
        mapping = vendor.mappings.get(operation)
        if mapping is None:
            raise OperationNotSupportedByVendorError(category, operation, vendor_name)

        with with_correlation(
            request_id=context.request_id,
            category=category,
            operation=operation,
            vendor=vendor_name,
            adapter=vendor.adapter,
            tool=mapping.tool,
        ):
            if vendor_preference and vendor_preference != vendor_name:
                logger.info(
                    "Preferred vendor %s not registered, using %s",
                    vendor_preference,
                    vendor_name,
                )
            if vendor.deprecated:
                logger.warning(
                    "Routing to deprecated vendor %s",
                    vendor_name,
                    extra_fields={
                        "deprecation_date": vendor.deprecation_date,
                        "migrate_to": vendor.migrate_to,
                    },
                )

            payload = mapping.transform(validated, context)

            metadata = DispatchMetadata(
                category=category,
                operation=operation,
                vendor=vendor_name,
                client_input=validated,
                context=context,
            )

            logger.debug("Dispatching %s:%s", vendor.adapter, mapping.tool)
            try:
                data = await self.executor.execute(vendor.adapter, mapping.tool, payload, metadata)
            except Exception as e:
                logger.error(
                    "Vendor call failed: %s",
                    e,
                    extra_fields={"error_type": type(e).__name__},
                )
                raise VendorDispatchError(
                    e,
                    category=category,
                    operation=operation,
                    vendor=vendor_name,
                    adapter=vendor.adapter,
                    tool=mapping.tool,
                ) from e

            logger.info("Abstracted call completed")

        return AbstractedResult(
            success=True,
            data=data,
            metadata=ResultMetadata(
                vendor=vendor_name,
                category=category,
                operation=operation,
                timestamp=datetime.now(timezone.utc).isoformat(),
            ),
        )

    def _build_context(
        self,
        context: Optional[Union[DispatchContext, Dict[str, Any]]],
    ) -> DispatchContext:
        if context is None:
            context = DispatchContext()
        elif not isinstance(context, DispatchContext):
            context = DispatchContext(**context)

        if context.callback_url is None and self.callback_url:
            context = context.model_copy(update={"callback_url": self.callback_url})
        return context

    # =========================================================================
    # Discovery
    # =========================================================================

    def list_categories(self) -> List[str]:
        """Registered category names."""
        return self.registry.categories()

    def operations_of(self, category: str) -> List[str]:
        """Client operation names of a category ([] when unknown)."""
        abstraction = self.registry.get(category)
        return list(abstraction.client.keys()) if abstraction else []

    def vendors_of(self, category: str) -> List[str]:
        """Vendor names of a category in registration order ([] when unknown)."""
        abstraction = self.registry.get(category)
        return list(abstraction.vendors.keys()) if abstraction else []

    def client_schema_of(self, category: str, operation: str) -> Optional[Dict[str, FieldRule]]:
        """Client schema of an operation (None when unknown)."""
        abstraction = self.registry.get(category)
        if abstraction is None:
            return None
        client_operation = abstraction.client.get(operation)
        return dict(client_operation.fields) if client_operation else None
