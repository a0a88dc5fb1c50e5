"""Abstracted execution endpoints.

Clients call ``/api/v1/{category}/{operation}`` and never see which vendor
served them unless vendor exposure is switched on. Discovery endpoints
describe categories, operations and client schemas.
"""

import time
import uuid
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, HTTPException, Request
from pydantic import BaseModel

from abstraction import DispatchContext


router = APIRouter()


class AbstractedCallResponse(BaseModel):
    """Response of an abstracted call."""
    success: bool = True
    category: str
    operation: str
    data: Any = None
    metadata: Dict[str, Any]


class CategorySummary(BaseModel):
    name: str
    operations: List[str]
    vendors: List[str]


class CategoriesResponse(BaseModel):
    success: bool = True
    categories: List[CategorySummary]


class CategoryInfoResponse(BaseModel):
    success: bool = True
    category: str
    operations: List[str]
    vendors: List[str]
    schemas: Dict[str, Dict[str, Any]]


def request_id_of(request: Request) -> str:
    """The request's X-Request-ID, or a generated id stable for the request."""
    request_id = getattr(request.state, "request_id", None)
    if request_id is None:
        request_id = request.headers.get("x-request-id") or (
            f"req_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"
        )
        request.state.request_id = request_id
    return request_id


def build_context(request: Request) -> DispatchContext:
    """Build the dispatch context from request headers."""
    headers = request.headers
    return DispatchContext(
        request_id=request_id_of(request),
        authorization=headers.get("authorization"),
        api_key=headers.get("x-api-key"),
        project_scope=headers.get("x-project-scope"),
        session_id=headers.get("x-session-id"),
        callback_url=request.app.state.settings.callback_url,
    )


def serialize_schema(fields) -> Dict[str, Any]:
    return {
        name: rule.model_dump(exclude_none=True, exclude_defaults=True)
        for name, rule in fields.items()
    }


@router.get("/categories", response_model=CategoriesResponse)
async def list_categories(request: Request) -> CategoriesResponse:
    """List categories with their operations and vendors."""
    router_ = request.app.state.router
    return CategoriesResponse(
        categories=[
            CategorySummary(
                name=category,
                operations=router_.operations_of(category),
                vendors=router_.vendors_of(category),
            )
            for category in router_.list_categories()
        ]
    )


@router.get("/categories/{category}", response_model=CategoryInfoResponse)
async def get_category(request: Request, category: str) -> CategoryInfoResponse:
    """Describe one category."""
    router_ = request.app.state.router
    if category not in router_.list_categories():
        raise HTTPException(status_code=404, detail=f"Unknown category: {category}")

    operations = router_.operations_of(category)
    return CategoryInfoResponse(
        category=category,
        operations=operations,
        vendors=router_.vendors_of(category),
        schemas={
            operation: serialize_schema(router_.client_schema_of(category, operation))
            for operation in operations
        },
    )


@router.get("/categories/{category}/schema/{operation}")
async def get_schema(request: Request, category: str, operation: str) -> Dict[str, Any]:
    """Get the client schema of one operation."""
    schema = request.app.state.router.client_schema_of(category, operation)
    if schema is None:
        raise HTTPException(
            status_code=404,
            detail=f"Schema not found for {category}/{operation}",
        )

    return {
        "success": True,
        "category": category,
        "operation": operation,
        "schema": serialize_schema(schema),
    }


@router.post("/{category}/{operation}", response_model=AbstractedCallResponse)
async def execute_abstracted(
    request: Request,
    category: str,
    operation: str,
    body: Optional[Dict[str, Any]] = Body(None),
) -> AbstractedCallResponse:
    """Execute a vendor-neutral operation.

    The optional ``vendor`` body key selects a vendor; every other key is
    the operation input.
    """
    client_input = dict(body or {})
    vendor = client_input.pop("vendor", None)
    context = build_context(request)

    result = await request.app.state.router.execute_abstracted_call(
        category,
        operation,
        client_input,
        vendor_preference=vendor,
        context=context,
    )

    metadata = result.metadata.model_dump()
    metadata["request_id"] = context.request_id
    if not request.app.state.settings.expose_vendor:
        metadata.pop("vendor", None)

    return AbstractedCallResponse(
        category=category,
        operation=operation,
        data=result.data,
        metadata=metadata,
    )
