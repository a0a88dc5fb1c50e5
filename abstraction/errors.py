"""Abstraction Router Errors.

Every lookup and validation error is raised before any transform or
vendor call runs. ``VendorDispatchError`` is the only error raised after
dispatch; it wraps the executor's exception without reinterpreting it.
"""

from enum import Enum
from typing import Any, Dict, Optional


class AbstractionErrorCode(str, Enum):
    """Standardized abstraction error codes."""
    UNKNOWN_CATEGORY = "UNKNOWN_CATEGORY"
    UNKNOWN_OPERATION = "UNKNOWN_OPERATION"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    TYPE_MISMATCH = "TYPE_MISMATCH"
    NO_VENDORS = "NO_VENDORS"
    OPERATION_NOT_SUPPORTED = "OPERATION_NOT_SUPPORTED"
    VENDOR_CALL_FAILED = "VENDOR_CALL_FAILED"


class AbstractionError(Exception):
    """Base exception for abstraction errors.

    Attributes:
        code: Standardized error code
        message: Human-readable error description
        status_code: HTTP status a request layer should answer with
        details: Structured context (category, operation, field, ...)
    """
    code: AbstractionErrorCode = AbstractionErrorCode.UNKNOWN_OPERATION
    status_code: int = 400

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = {k: v for k, v in details.items() if v is not None}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class UnknownCategoryError(AbstractionError):
    """The requested category is not registered."""
    code = AbstractionErrorCode.UNKNOWN_CATEGORY
    status_code = 404

    def __init__(self, category: str):
        super().__init__(f"Unknown category: {category}", category=category)
        self.category = category


class UnknownOperationError(AbstractionError):
    """The category exists but does not define the operation."""
    code = AbstractionErrorCode.UNKNOWN_OPERATION
    status_code = 404

    def __init__(self, category: str, operation: str):
        super().__init__(
            f"Unknown operation: {operation} in category: {category}",
            category=category,
            operation=operation,
        )
        self.category = category
        self.operation = operation


class MissingRequiredFieldError(AbstractionError):
    """A required input field is absent or null."""
    code = AbstractionErrorCode.MISSING_REQUIRED_FIELD
    status_code = 400

    def __init__(self, field: str):
        super().__init__(f"Required field missing: {field}", field=field)
        self.field = field


class TypeMismatchError(AbstractionError):
    """An input field has the wrong runtime type."""
    code = AbstractionErrorCode.TYPE_MISMATCH
    status_code = 400

    def __init__(self, field: str, expected: str, actual: str):
        super().__init__(
            f"Invalid type for field {field}: expected {expected}, got {actual}",
            field=field,
            expected=expected,
            actual=actual,
        )
        self.field = field
        self.expected = expected
        self.actual = actual


class NoVendorsAvailableError(AbstractionError):
    """The category has no registered vendors."""
    code = AbstractionErrorCode.NO_VENDORS
    status_code = 503

    def __init__(self, category: str):
        super().__init__(f"No vendors available for category: {category}", category=category)
        self.category = category


class OperationNotSupportedByVendorError(AbstractionError):
    """The selected vendor does not implement the operation."""
    code = AbstractionErrorCode.OPERATION_NOT_SUPPORTED
    status_code = 501

    def __init__(self, category: str, operation: str, vendor: str):
        super().__init__(
            f"Operation {operation} not supported by vendor: {vendor}",
            category=category,
            operation=operation,
            vendor=vendor,
        )
        self.category = category
        self.operation = operation
        self.vendor = vendor


class VendorDispatchError(AbstractionError):
    """The vendor call executor failed.

    The original exception is kept as ``cause`` (and chained as
    ``__cause__``); its message is passed through unchanged.
    """
    code = AbstractionErrorCode.VENDOR_CALL_FAILED
    status_code = 502

    def __init__(
        self,
        cause: BaseException,
        category: str,
        operation: str,
        vendor: str,
        adapter: Optional[str] = None,
        tool: Optional[str] = None,
    ):
        super().__init__(
            str(cause) or type(cause).__name__,
            category=category,
            operation=operation,
            vendor=vendor,
            adapter=adapter,
            tool=tool,
            cause_type=type(cause).__name__,
        )
        self.cause = cause
        self.category = category
        self.operation = operation
        self.vendor = vendor
        self.adapter = adapter
        self.tool = tool
