"""Core module - vendor-neutral configuration and observability.

Shared by the search engine, the abstraction router and the HTTP layer.
Nothing here knows about individual vendors.
"""

__version__ = "1.0.0"
