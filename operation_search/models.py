"""Operation Search Data Models.

This module defines the Pydantic models for operation discovery:
- Operation: A callable operation exposed by one integration (adapter)
- SearchContext: Optional hints that nudge ranking (country, use case)
- RankedOperation: An operation with its confidence and justification
- SearchResponse: The result of a search, including the disambiguation flag
- ScoringWeights / SearchConfig: Tunable ranking configuration
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class Operation(BaseModel):
    """A callable operation known to the catalog.

    Operations are owned by the catalog and are read-only to the search
    engine. ``tool_id`` is unique across the catalog and is conventionally
    ``"<adapter>:<tool>"``.

    Attributes:
        tool_id: Globally unique operation identifier
        adapter: Integration that owns this operation
        tool: Adapter-local tool name
        name: Display name used for keyword matching
        description: Free-text description used for keyword matching
        category: Coarse grouping (payments, banking, ...)
        tags: Ordered tag list used for tag overlap scoring
        is_mock: True for placeholder operations without a live backend
        risk_level: low / medium / high, inferred from the tool name
        input_schema: JSON schema of the operation's parameters, if known
        required_params: Required parameter names
        optional_params: Optional parameter names
    """
    model_config = ConfigDict(frozen=True)

    tool_id: str = Field(..., description="Globally unique operation id")
    adapter: str = Field(..., description="Owning integration id")
    tool: Optional[str] = Field(default=None, description="Adapter-local tool name")
    name: str = Field(..., description="Display name")
    description: str = Field(default="")
    category: str = Field(default="general")
    tags: List[str] = Field(default_factory=list)
    is_mock: bool = Field(default=False)

    risk_level: Literal["low", "medium", "high"] = Field(default="medium")
    input_schema: Optional[Dict[str, Any]] = None
    required_params: List[str] = Field(default_factory=list)
    optional_params: List[str] = Field(default_factory=list)


class SearchContext(BaseModel):
    """Contextual hints supplied alongside a query."""
    country: Optional[str] = None
    currency: Optional[str] = None
    use_case: Optional[str] = None


class RankedOperation(Operation):
    """An operation scored against a query."""
    confidence: float = Field(..., ge=0.0, le=1.0, description="Match confidence (0-1)")
    justification: str = Field(default="", description="Why this operation matched")


class SearchResponse(BaseModel):
    """Result of a search.

    When ``needs_selection`` is True the caller must present ``results`` as
    options instead of auto-executing the top match.
    """
    results: List[RankedOperation] = Field(default_factory=list)
    needs_selection: bool = Field(default=False)
    mode: Literal["scoped", "global"] = Field(default="global")
    query_interpreted: str = Field(default="")


# =============================================================================
# Scoring Configuration
# =============================================================================

class ScoringWeights(BaseModel):
    """Weights for operation scoring.

    The weighted sum is multiplied by ``live_boost`` for non-mock operations
    and capped at 1.0.
    """
    exact_tool_match: float = Field(default=0.5, description="Query equals the tool_id")
    adapter_match: float = Field(default=0.3, description="Query mentions the adapter")
    tag_overlap: float = Field(default=0.25, description="Multiplier for tag overlap ratio")
    partial_tag_match: float = Field(default=0.5, description="Credit for a substring tag match")
    name_match: float = Field(default=0.2, description="Multiplier for name token overlap")
    description_match: float = Field(default=0.15, description="Multiplier for description token overlap")
    category_match: float = Field(default=0.1, description="A query token appears in the category")
    context_match: float = Field(default=0.1, description="Per context hint found in the tags")
    live_boost: float = Field(default=1.2, description="Multiplier for non-mock operations")


class SearchConfig(BaseModel):
    """Configuration for the search engine.

    Controls the confidence floor, result count and disambiguation thresholds.
    """
    weights: ScoringWeights = Field(default_factory=ScoringWeights)

    min_confidence: float = Field(default=0.3, ge=0.0, le=1.0, description="Min score to be returned")
    default_limit: int = Field(default=3, ge=1, description="Results returned when no limit is given")

    # Disambiguation
    auto_select_threshold: float = Field(default=0.7, description="Top score needed to auto-select")
    margin_threshold: float = Field(default=0.15, description="Min margin of top over 2nd place")

    @classmethod
    def from_settings(cls, settings) -> "SearchConfig":
        """Build a config from ``core.config.Settings``."""
        return cls(
            min_confidence=settings.search_min_confidence,
            default_limit=settings.search_default_limit,
        )


# Default search config
DEFAULT_SEARCH_CONFIG = SearchConfig()
