"""
Observability Module for the discovery and abstraction engine

Provides:
- Structured logging with correlation IDs (request, category, vendor)
"""

from core.observability.logging import (
    get_logger,
    configure_logging,
    CorrelationContext,
    with_correlation,
)

__all__ = [
    "get_logger",
    "configure_logging",
    "CorrelationContext",
    "with_correlation",
]
