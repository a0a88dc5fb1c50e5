"""Operation Search - Deterministic discovery of operations across integrations.

This package ranks catalog operations against a free-text query based on:
- Exact tool id and adapter name matches
- Tag, name and description token overlap
- Category and context hints (country, use case)
- A boost for live (non-mock) operations

Key Features:
- Bounded [0, 1] confidence with a configurable floor
- Disambiguation flag when the top match is not decisive
- Short justification for every result

Usage:
    from operation_search import InMemoryOperationCatalog, SearchEngine

    engine = SearchEngine(catalog)
    response = engine.search("verify transaction paystack")

    if response.needs_selection:
        # Show response.results to the user
        for result in response.results:
            print(f"{result.tool_id}: {result.confidence:.2f}")
"""

from operation_search.models import (
    Operation,
    SearchContext,
    RankedOperation,
    SearchResponse,
    ScoringWeights,
    SearchConfig,
    DEFAULT_SEARCH_CONFIG,
)
from operation_search.tokenize import tokenize, STOP_WORDS
from operation_search.catalog import (
    OperationCatalog,
    InMemoryOperationCatalog,
    infer_tags,
    infer_risk_level,
    operation_from_tool,
)
from operation_search.engine import SearchEngine
from operation_search.intent import IntentResolver, IntentResolution

__all__ = [
    # Models
    "Operation",
    "SearchContext",
    "RankedOperation",
    "SearchResponse",
    "ScoringWeights",
    "SearchConfig",
    "DEFAULT_SEARCH_CONFIG",
    # Tokenization
    "tokenize",
    "STOP_WORDS",
    # Catalog
    "OperationCatalog",
    "InMemoryOperationCatalog",
    "infer_tags",
    "infer_risk_level",
    "operation_from_tool",
    # Engine
    "SearchEngine",
    "IntentResolver",
    "IntentResolution",
]
