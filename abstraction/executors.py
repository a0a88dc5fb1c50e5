"""Vendor Call Executors.

The router hands every vendor call to a ``VendorCallExecutor``. Two
implementations ship here:
- LocalToolExecutor: in-process dispatch table of tool handlers
- HttpGatewayExecutor: posts the call to a tool gateway over HTTP

Executors own timeouts and transport errors. Neither retries; failures
propagate to the router, which wraps them in ``VendorDispatchError``.
"""

import inspect
import json
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Protocol, Union

from abstraction.models import DispatchMetadata

logger = logging.getLogger(__name__)


class VendorCallExecutor(Protocol):
    """Protocol for executing one vendor tool call."""

    async def execute(
        self,
        adapter_id: str,
        tool: str,
        payload: Dict[str, Any],
        metadata: DispatchMetadata,
    ) -> Any:
        """Execute ``adapter_id:tool`` with the vendor payload."""
        ...


# =============================================================================
# In-process execution
# =============================================================================

ToolHandler = Callable[[Dict[str, Any], DispatchMetadata], Union[Any, Awaitable[Any]]]


class ToolNotFoundError(LookupError):
    """No handler is registered for the requested tool."""
    def __init__(self, tool_id: str):
        super().__init__(f"Tool not found: {tool_id}")
        self.tool_id = tool_id


class LocalToolExecutor:
    """Dispatches vendor calls to in-process handlers.

    Handlers may be plain functions or coroutines.

    Example:
        executor = LocalToolExecutor()
        executor.register_tool("paystack", "verify-transaction", verify_handler)
        router = AbstractionRouter(executor=executor)
    """

    def __init__(self):
        self._handlers: Dict[str, ToolHandler] = {}

    def register_tool(self, adapter_id: str, tool: str, handler: ToolHandler) -> None:
        """Register (or replace) the handler for ``adapter_id:tool``."""
        self._handlers[f"{adapter_id}:{tool}"] = handler

    def has_tool(self, adapter_id: str, tool: str) -> bool:
        return f"{adapter_id}:{tool}" in self._handlers

    async def execute(
        self,
        adapter_id: str,
        tool: str,
        payload: Dict[str, Any],
        metadata: DispatchMetadata,
    ) -> Any:
        tool_id = f"{adapter_id}:{tool}"
        handler = self._handlers.get(tool_id)
        if handler is None:
            raise ToolNotFoundError(tool_id)

        result = handler(payload, metadata)
        if inspect.isawaitable(result):
            result = await result
        return result


# =============================================================================
# HTTP gateway execution
# =============================================================================

class GatewayCallError(Exception):
    """The tool gateway answered with a non-2xx status."""
    def __init__(self, message: str, status_code: int = 0, response_body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class HttpGatewayExecutor:
    """Executes vendor calls through a remote tool gateway.

    Each call is ``POST {base_url}/tools/{adapter}:{tool}`` with the body
    ``{"params": payload, "metadata": {...}}``. Authorization and API key
    headers are forwarded from the dispatch context.

    Usage:
        executor = HttpGatewayExecutor("https://gateway.internal", timeout_seconds=10)
        await executor.connect()
        ...
        await executor.close()

    Without ``connect()`` every call opens its own short-lived session.
    """

    def __init__(self, base_url: str, timeout_seconds: float = 30, session=None):
        """Initialize the executor.

        Args:
            base_url: Gateway root URL
            timeout_seconds: Total client-side timeout per call
            session: Optional pre-built aiohttp.ClientSession
        """
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._session = session
        self._owns_session = False

    async def connect(self) -> None:
        """Open a shared HTTP session."""
        if self._session is None:
            import aiohttp
            self._session = aiohttp.ClientSession()
            self._owns_session = True

    async def close(self) -> None:
        """Close the shared HTTP session if this executor opened it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
        if self._owns_session:
            self._session = None
            self._owns_session = False

    def tool_url(self, adapter_id: str, tool: str) -> str:
        return f"{self.base_url}/tools/{adapter_id}:{tool}"

    def build_headers(self, metadata: DispatchMetadata) -> Dict[str, str]:
        context = metadata.context
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if context.authorization:
            headers["Authorization"] = context.authorization
        if context.api_key:
            headers["X-API-Key"] = context.api_key
        if context.project_scope:
            headers["X-Project-Scope"] = context.project_scope
        if context.request_id:
            headers["X-Request-ID"] = context.request_id
        if context.session_id:
            headers["X-Session-ID"] = context.session_id
        return headers

    def build_body(self, payload: Dict[str, Any], metadata: DispatchMetadata) -> Dict[str, Any]:
        return {
            "params": payload,
            "metadata": {
                "category": metadata.category,
                "operation": metadata.operation,
                "vendor": metadata.vendor,
                "request_id": metadata.context.request_id,
            },
        }

    async def execute(
        self,
        adapter_id: str,
        tool: str,
        payload: Dict[str, Any],
        metadata: DispatchMetadata,
    ) -> Any:
        """Post one tool call to the gateway.

        Returns:
            Decoded JSON response ({} for an empty body)

        Raises:
            GatewayCallError: Gateway answered with a non-2xx status
        """
        if self._session is not None:
            return await self._post(self._session, adapter_id, tool, payload, metadata)

        import aiohttp
        async with aiohttp.ClientSession() as session:
            return await self._post(session, adapter_id, tool, payload, metadata)

    async def _post(
        self,
        session,
        adapter_id: str,
        tool: str,
        payload: Dict[str, Any],
        metadata: DispatchMetadata,
    ) -> Any:
        import aiohttp
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        url = self.tool_url(adapter_id, tool)

        async with session.request(
            "POST",
            url,
            headers=self.build_headers(metadata),
            json=self.build_body(payload, metadata),
            timeout=timeout,
        ) as response:
            response_text = await response.text()

            if response.status < 200 or response.status >= 300:
                logger.warning(
                    "Gateway call %s:%s failed with %d", adapter_id, tool, response.status
                )
                raise GatewayCallError(
                    f"Gateway error {response.status}: {response_text}",
                    response.status,
                    response_text,
                )

            return json.loads(response_text) if response_text else {}
