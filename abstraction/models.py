"""Abstraction Data Models.

This module defines the Pydantic models for vendor-neutral execution:
- FieldRule / ClientOperation: The client-facing schema of an operation
- VendorMapping / VendorEntry: How one vendor implements a category
- CategoryConfig / CategoryAbstraction: A registered category
- DispatchContext / DispatchMetadata: Request-scoped values handed to
  transforms and the vendor call executor
- AbstractedResult: The normalized envelope returned to callers

Clients only ever see category and operation names; adapter ids and tool
names stay inside ``VendorEntry``.
"""

from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


FieldType = Literal["string", "number", "integer", "boolean", "object", "array"]


class ItemRule(BaseModel):
    """Constraints on the items of an array field."""
    model_config = ConfigDict(frozen=True)

    type: Optional[FieldType] = None
    required: List[str] = Field(default_factory=list, description="Keys required on object items")
    properties: Optional[Dict[str, Dict[str, Any]]] = None


class FieldRule(BaseModel):
    """Validation rule for one client input field.

    ``enum`` and ``description`` are descriptive only; they are surfaced by
    schema discovery but not enforced.
    """
    model_config = ConfigDict(frozen=True)

    type: Optional[FieldType] = None
    required: bool = False
    default: Any = None
    items: Optional[ItemRule] = None
    enum: Optional[List[Any]] = None
    description: Optional[str] = None

    @model_validator(mode="after")
    def _required_has_no_default(self) -> "FieldRule":
        if self.required and self.has_default:
            raise ValueError("A required field cannot declare a default")
        return self

    @property
    def has_default(self) -> bool:
        """True when a default was declared (even an explicit ``None``)."""
        return "default" in self.model_fields_set


class ClientOperation(BaseModel):
    """A vendor-neutral operation: its input schema in declaration order."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    fields: Dict[str, FieldRule] = Field(default_factory=dict, alias="schema")


class DispatchContext(BaseModel):
    """Request-scoped values passed explicitly to transforms and executors.

    Transforms must read ambient values (callback URL, clock) from here
    rather than from the environment.
    """
    model_config = ConfigDict(frozen=True)

    request_id: Optional[str] = None
    callback_url: Optional[str] = None
    issued_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    authorization: Optional[str] = None
    api_key: Optional[str] = None
    project_scope: Optional[str] = None
    session_id: Optional[str] = None

    def millis(self) -> int:
        """``issued_at`` as epoch milliseconds, for generated references."""
        return int(self.issued_at.timestamp() * 1000)


# (validated client input, dispatch context) -> vendor payload
Transform = Callable[[Dict[str, Any], DispatchContext], Dict[str, Any]]


class VendorMapping(BaseModel):
    """Maps one client operation onto a vendor tool."""
    model_config = ConfigDict(frozen=True)

    tool: str = Field(..., description="Adapter-local tool name")
    transform: Transform


class VendorEntry(BaseModel):
    """One vendor's support for a subset of a category's operations."""
    model_config = ConfigDict(frozen=True)

    adapter: str = Field(..., description="Adapter id the executor dispatches to")
    deprecated: bool = False
    deprecation_date: Optional[date] = None
    migrate_to: Optional[str] = None
    mappings: Dict[str, VendorMapping] = Field(default_factory=dict)


class CategoryConfig(BaseModel):
    """Definition of a category.

    Both maps keep insertion order: ``vendors`` order decides the primary
    vendor.
    """
    model_config = ConfigDict(frozen=True)

    client: Dict[str, ClientOperation] = Field(default_factory=dict)
    vendors: Dict[str, VendorEntry] = Field(default_factory=dict)


class CategoryAbstraction(BaseModel):
    """A registered category as published in a registry snapshot."""
    model_config = ConfigDict(frozen=True)

    category: str
    config: CategoryConfig

    @property
    def client(self) -> Dict[str, ClientOperation]:
        return self.config.client

    @property
    def vendors(self) -> Dict[str, VendorEntry]:
        return self.config.vendors


class DispatchMetadata(BaseModel):
    """Metadata handed to the vendor call executor alongside the payload."""
    model_config = ConfigDict(frozen=True)

    category: str
    operation: str
    vendor: str
    client_input: Dict[str, Any] = Field(default_factory=dict)
    context: DispatchContext = Field(default_factory=DispatchContext)


class ResultMetadata(BaseModel):
    """Metadata attached to every abstracted result."""
    vendor: str
    category: str
    operation: str
    timestamp: str
    abstracted: bool = True


class AbstractedResult(BaseModel):
    """The executor's result wrapped in the vendor-neutral envelope.

    ``data`` is returned exactly as the executor produced it.
    """
    success: bool = True
    data: Any = None
    metadata: ResultMetadata
