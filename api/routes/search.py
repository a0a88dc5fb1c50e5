"""Operation discovery endpoints.

Search ranks operations against a query; intent builds on search to
recommend an operation and list the inputs it still needs.
"""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel, Field

from operation_search import IntentResolution, SearchContext, SearchResponse


router = APIRouter()


class SearchRequest(BaseModel):
    """Request to search operations."""
    query: str = Field(..., description="Free-text query")
    adapter: Optional[str] = Field(None, description="Restrict the search to one adapter")
    context: Optional[SearchContext] = None
    limit: Optional[int] = Field(None, ge=1, le=50)


class CommonOperationsResponse(BaseModel):
    """Likely first actions for an adapter."""
    adapter: str
    tool_ids: List[str]


@router.post("/search", response_model=SearchResponse)
async def search_operations(request: Request, body: SearchRequest) -> SearchResponse:
    """Rank operations against a query."""
    engine = request.app.state.engine
    return engine.search(body.query, adapter=body.adapter, context=body.context, limit=body.limit)


@router.post("/intent", response_model=IntentResolution)
async def resolve_intent(request: Request, body: SearchRequest) -> IntentResolution:
    """Recommend an operation for a query."""
    resolver = request.app.state.resolver
    try:
        return resolver.resolve(body.query, adapter=body.adapter, context=body.context, limit=body.limit)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/adapters/{adapter_id}/common", response_model=CommonOperationsResponse)
async def common_operations(
    request: Request,
    adapter_id: str,
    limit: int = Query(5, ge=1, le=50),
) -> CommonOperationsResponse:
    """List an adapter's most likely first actions."""
    engine = request.app.state.engine
    return CommonOperationsResponse(
        adapter=adapter_id,
        tool_ids=engine.common_operations(adapter_id, limit=limit),
    )
