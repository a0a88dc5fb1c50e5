"""Operation Search Algorithm.

This module implements deterministic ranking of catalog operations against
a free-text query:
1. Tokenizes the query (lowercase, punctuation stripped, stop words dropped)
2. Scores every candidate with a capped weighted sum of match signals
3. Drops candidates below the confidence floor and keeps the top N
4. Flags ambiguous results so the caller asks instead of auto-executing

The engine never learns, never calls out and never mutates the catalog:
the same query against the same catalog always ranks the same way.
"""

from typing import List, Optional, Sequence, Tuple, Union

from core.observability.logging import get_logger, with_correlation
from operation_search.catalog import OperationCatalog
from operation_search.models import (
    DEFAULT_SEARCH_CONFIG,
    Operation,
    RankedOperation,
    SearchConfig,
    SearchContext,
    SearchResponse,
)
from operation_search.tokenize import tokenize

logger = get_logger(__name__)


# (substrings, points) for the query-independent "likely first actions" ranking
COMMON_OPERATION_PATTERNS = (
    (("list", "get"), 2),
    (("create", "initialize"), 3),
    (("verify", "validate"), 2),
    (("transaction",), 2),
    (("customer",), 1),
)
LIVE_OPERATION_POINTS = 1


class SearchEngine:
    """Ranks catalog operations against a query.

    Example:
        engine = SearchEngine(catalog)
        response = engine.search("verify transaction paystack")

        if response.needs_selection:
            # Present response.results as options
            ...
        elif response.results:
            execute(response.results[0].tool_id)
    """

    def __init__(
        self,
        catalog: OperationCatalog,
        config: SearchConfig = DEFAULT_SEARCH_CONFIG,
    ):
        """Initialize the engine.

        Args:
            catalog: Read-only source of operations
            config: Weights, confidence floor and disambiguation thresholds
        """
        self.catalog = catalog
        self.config = config

    def search(
        self,
        query: str,
        adapter: Optional[str] = None,
        context: Optional[Union[SearchContext, dict]] = None,
        limit: Optional[int] = None,
    ) -> SearchResponse:
        """Search for operations matching a query.

        Args:
            query: Free-text query
            adapter: Restrict the search to one adapter's operations
            context: Optional hints (country, currency, use_case)
            limit: Max results (defaults to config.default_limit)

        Returns:
            SearchResponse ordered by non-increasing confidence
        """
        if isinstance(context, dict):
            context = SearchContext(**context)
        if limit is None:
            limit = self.config.default_limit

        query = query or ""
        query_tokens = tokenize(query)
        query_lower = query.lower()
        mode = "scoped" if adapter else "global"

        if adapter:
            candidates = self.catalog.operations_of(adapter)
        else:
            candidates = self.catalog.all_operations()

        scored: List[Tuple[Operation, float]] = [
            (op, self.score_operation(op, query_tokens, query_lower, context))
            for op in candidates
        ]

        # Stable sort keeps catalog order between equal scores
        scored.sort(key=lambda item: item[1], reverse=True)

        scored = [item for item in scored if item[1] >= self.config.min_confidence]
        scored = scored[:max(limit, 0)]

        needs_selection = self.needs_selection([score for _, score in scored])

        results = [
            RankedOperation(
                **op.model_dump(),
                confidence=score,
                justification=self.explain_match(op, query_tokens),
            )
            for op, score in scored
        ]

        with with_correlation(search_mode=mode, adapter=adapter):
            logger.debug(
                "Search ranked %d of %d candidates",
                len(results),
                len(candidates),
                extra_fields={
                    "query_tokens": query_tokens,
                    "needs_selection": needs_selection,
                    "top_confidence": results[0].confidence if results else None,
                },
            )

        return SearchResponse(
            results=results,
            needs_selection=needs_selection,
            mode=mode,
            query_interpreted=self.interpret_query(query_tokens, context),
        )

    def needs_selection(self, scores: Sequence[float]) -> bool:
        """Decide whether the caller must disambiguate.

        Needs selection when more than one result remains and either:
        1. Top score < auto_select_threshold (0.7)
        2. Margin of top over 2nd place < margin_threshold (0.15)

        Args:
            scores: Result scores in descending order
        """
        if len(scores) <= 1:
            return False

        top, second = scores[0], scores[1]
        return (
            top < self.config.auto_select_threshold or
            top - second < self.config.margin_threshold
        )

    def score_operation(
        self,
        operation: Operation,
        query_tokens: List[str],
        query_lower: str,
        context: Optional[SearchContext] = None,
    ) -> float:
        """Score an operation against the query.

        Args:
            operation: Candidate operation
            query_tokens: Tokenized query
            query_lower: Lowercased raw query (for id/adapter matching)
            context: Optional search hints

        Returns:
            Score from 0.0 to 1.0
        """
        weights = self.config.weights
        score = 0.0

        # Exact tool_id match
        if query_lower == operation.tool_id.lower():
            score += weights.exact_tool_match

        # Adapter named in the query
        if operation.adapter and operation.adapter.lower() in query_lower:
            score += weights.adapter_match

        score += self.tag_overlap(query_tokens, operation.tags) * weights.tag_overlap

        name_tokens = tokenize(operation.name)
        score += token_overlap(query_tokens, name_tokens) * weights.name_match

        if operation.description:
            description_tokens = tokenize(operation.description)
            score += token_overlap(query_tokens, description_tokens) * weights.description_match

        category = (operation.category or "").lower()
        if any(token in category for token in query_tokens):
            score += weights.category_match

        if context and operation.tags:
            lowered_tags = [tag.lower() for tag in operation.tags]
            if context.country:
                country = context.country.lower()
                if any(country in tag for tag in lowered_tags):
                    score += weights.context_match
            if context.use_case:
                use_case = context.use_case.lower()
                if any(use_case in tag for tag in lowered_tags):
                    score += weights.context_match

        if not operation.is_mock:
            score *= weights.live_boost

        return min(score, 1.0)

    def tag_overlap(self, query_tokens: List[str], tags: Sequence[str]) -> float:
        """Calculate the tag overlap ratio.

        Each query token earns 1 for an exact tag hit, plus
        ``partial_tag_match`` for every tag it is a substring of (or that is
        a substring of it). The total is divided by the query token count.
        """
        if not tags:
            return 0.0

        tag_set = list(dict.fromkeys(tag.lower() for tag in tags))
        partial = self.config.weights.partial_tag_match
        matches = 0.0

        for token in query_tokens:
            if token in tag_set:
                matches += 1
            for tag in tag_set:
                if token in tag or tag in token:
                    matches += partial

        return matches / max(len(query_tokens), 1)

    def explain_match(self, operation: Operation, query_tokens: List[str]) -> str:
        """Generate a short reason why this operation matched."""
        reasons = []

        name_lower = operation.name.lower()
        matched_tokens = [token for token in query_tokens if token in name_lower]
        if matched_tokens:
            reasons.append(f"Name matches: {', '.join(matched_tokens)}")

        if operation.tags:
            matched_tags = [
                tag for tag in operation.tags
                if any(token in tag.lower() for token in query_tokens)
            ]
            if matched_tags:
                reasons.append(f"Relevant tags: {', '.join(matched_tags[:3])}")

        if not operation.is_mock:
            reasons.append("Live adapter with real execution")
        else:
            reasons.append("Placeholder operation (mock adapter)")

        return ". ".join(reasons)

    def interpret_query(
        self,
        query_tokens: List[str],
        context: Optional[SearchContext] = None,
    ) -> str:
        """Render the interpreted query for display."""
        parts = list(query_tokens)

        if context:
            if context.country:
                parts.append(f"country:{context.country}")
            if context.currency:
                parts.append(f"currency:{context.currency}")
            if context.use_case:
                parts.append(f"use_case:{context.use_case}")

        return ", ".join(parts)

    def common_operations(self, adapter_id: str, limit: int = 5) -> List[str]:
        """Get the operations most likely to be an adapter's first actions.

        Coarse, query-independent heuristic: rewards list/get, create/initialize,
        verify/validate, transaction and customer operations, and live ones.

        Args:
            adapter_id: Adapter to rank
            limit: Max tool ids to return

        Returns:
            tool_ids, best first (catalog order on ties)
        """
        ranked = []
        for op in self.catalog.operations_of(adapter_id):
            name_lower = op.name.lower()
            score = 0
            for needles, points in COMMON_OPERATION_PATTERNS:
                if any(needle in name_lower for needle in needles):
                    score += points
            if not op.is_mock:
                score += LIVE_OPERATION_POINTS
            ranked.append((op.tool_id, score))

        ranked.sort(key=lambda item: item[1], reverse=True)
        return [tool_id for tool_id, _ in ranked[:max(limit, 0)]]


def token_overlap(tokens_a: List[str], tokens_b: List[str]) -> float:
    """Fraction of ``tokens_a`` that also occur in ``tokens_b``."""
    if not tokens_a or not tokens_b:
        return 0.0

    set_b = set(tokens_b)
    matches = sum(1 for token in tokens_a if token in set_b)
    return matches / max(len(tokens_a), 1)
