"""Intent Resolution.

Turns a query into an actionable answer on top of the search engine:
a recommended operation, alternatives, a ready-to-execute payload
skeleton and the inputs still missing. Nothing here interprets language;
the ranking is entirely the search engine's.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from operation_search.engine import SearchEngine
from operation_search.models import RankedOperation, SearchContext


NO_MATCH_SUGGESTIONS = [
    "Try different keywords",
    "List the available adapters and browse their operations",
    "Scope the search to a specific adapter",
]


class OperationChoice(BaseModel):
    """A ranked operation reduced to what a caller needs to pick it."""
    tool_id: str
    adapter: str
    tool: Optional[str] = None
    confidence: float
    justification: str = ""


class MissingInput(BaseModel):
    """A required parameter the caller still has to supply."""
    field: str
    question: str


class ReadyToExecute(BaseModel):
    """Everything needed to execute the recommended operation."""
    tool_id: str
    required_params: List[str] = Field(default_factory=list)
    optional_params: List[str] = Field(default_factory=list)
    param_schemas: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    example: Dict[str, Any] = Field(default_factory=dict)
    constraints: Dict[str, Any] = Field(default_factory=dict)


class IntentResolution(BaseModel):
    """Result of intent resolution.

    If matched is False, suggestions explains what to try instead and
    search_context still carries the interpreted query.
    """
    matched: bool = Field(default=False)
    recommended: Optional[OperationChoice] = None
    ready_to_execute: Optional[ReadyToExecute] = None
    missing_inputs: List[MissingInput] = Field(default_factory=list)
    alternatives: List[OperationChoice] = Field(default_factory=list)
    next_step: str = Field(default="")
    needs_selection: bool = Field(default=False)
    suggestions: List[str] = Field(default_factory=list)
    search_context: Dict[str, Any] = Field(default_factory=dict)


class IntentResolver:
    """Resolves a query to a recommended operation plus alternatives.

    Example:
        resolver = IntentResolver(engine)
        resolution = resolver.resolve("verify a paystack payment")

        if resolution.matched and not resolution.needs_selection:
            call(resolution.recommended.tool_id)
    """

    def __init__(self, engine: SearchEngine):
        self.engine = engine

    def resolve(
        self,
        query: str,
        adapter: Optional[str] = None,
        context: Optional[Union[SearchContext, dict]] = None,
        limit: Optional[int] = None,
    ) -> IntentResolution:
        """Resolve a query.

        Raises:
            ValueError: If the query is empty or blank
        """
        if not query or not query.strip():
            raise ValueError("Query string is required")

        response = self.engine.search(query, adapter=adapter, context=context, limit=limit)

        search_context = {
            "mode": response.mode,
            "matched_adapters": list(dict.fromkeys(r.adapter for r in response.results)),
            "query_interpreted": response.query_interpreted,
        }

        if not response.results:
            return IntentResolution(
                matched=False,
                suggestions=list(NO_MATCH_SUGGESTIONS),
                next_step="No operations match the query. Refine it and search again.",
                search_context=search_context,
            )

        top = response.results[0]

        missing_inputs = [
            MissingInput(field=param, question=f"What is the {format_field_name(param)}?")
            for param in top.required_params
        ]

        if response.needs_selection:
            next_step = (
                "Multiple good matches found. Review the alternatives and select "
                "the best fit before executing."
            )
        elif missing_inputs:
            next_step = (
                f"Gather required params ({', '.join(top.required_params)}), "
                f"then execute {top.tool_id}."
            )
        else:
            next_step = f"Execute {top.tool_id}."

        return IntentResolution(
            matched=True,
            recommended=_choice(top),
            ready_to_execute=build_ready_to_execute(top),
            missing_inputs=[] if response.needs_selection else missing_inputs,
            alternatives=[_choice(r) for r in response.results[1:]],
            next_step=next_step,
            needs_selection=response.needs_selection,
            search_context=search_context,
        )


def _choice(result: RankedOperation) -> OperationChoice:
    return OperationChoice(
        tool_id=result.tool_id,
        adapter=result.adapter,
        tool=result.tool,
        confidence=result.confidence,
        justification=result.justification,
    )


def build_ready_to_execute(operation: RankedOperation) -> ReadyToExecute:
    """Build the execution skeleton for an operation."""
    param_schemas: Dict[str, Dict[str, Any]] = {}
    properties = (operation.input_schema or {}).get("properties") or {}
    for key, schema in properties.items():
        entry = {
            "type": schema.get("type"),
            "description": schema.get("description") or f"The {format_field_name(key)}",
        }
        if schema.get("enum"):
            entry["enum"] = schema["enum"]
        if schema.get("format"):
            entry["format"] = schema["format"]
        param_schemas[key] = entry

    name_lower = operation.name.lower()
    high_risk = operation.risk_level == "high"

    return ReadyToExecute(
        tool_id=operation.tool_id,
        required_params=list(operation.required_params),
        optional_params=list(operation.optional_params),
        param_schemas=param_schemas,
        example=generate_example(properties),
        constraints={
            "risk_level": operation.risk_level,
            "requires_idempotency": high_risk,
            "requires_confirmation": high_risk and ("delete" in name_lower or "cancel" in name_lower),
        },
    )


def generate_example(properties: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    """Generate an example request body from JSON schema properties."""
    example: Dict[str, Any] = {}
    for key, schema in properties.items():
        if schema.get("type") == "object" and not schema.get("properties"):
            example[key] = {}
            continue
        example[key] = example_value(key, schema)
    return example


def example_value(field_name: str, schema: Dict[str, Any]) -> Any:
    """Pick a plausible example value from the field name, then its type."""
    name = field_name.lower()

    if schema.get("enum"):
        return schema["enum"][0]

    if "email" in name:
        return "customer@example.com"
    if "amount" in name:
        return 5000
    if "currency" in name:
        return "NGN"
    if "reference" in name:
        return "ref_example"
    if "phone" in name:
        return "+2348012345678"
    if "url" in name:
        return "https://example.com/callback"
    if "description" in name or "name" in name:
        return "Example value"
    if "id" in name:
        return "id_123456"

    return {
        "string": "example_value",
        "number": 100,
        "integer": 100,
        "boolean": True,
        "array": [],
        "object": {},
    }.get(schema.get("type"))


def format_field_name(field_name: str) -> str:
    """``account_number`` / ``accountNumber`` → ``account number``."""
    spaced = "".join(f" {c.lower()}" if c.isupper() else c for c in field_name)
    return spaced.replace("_", " ").replace("-", " ").strip()
