"""ERP Connectors - remote system integrations.

This package holds the HTTP clients that talk to the remote ERP.
Tool handlers and reporting code depend only on the client's six
primitives (list, get, create, update, delete, call) plus the
submit/cancel lifecycle helpers built on them.
"""

from connectors.frappe import (
    FrappeClient,
    FrappeClientConfig,
    FrappeFilter,
    ListOptions,
    FrappeApiError,
    FrappeNetworkError,
    FrappeTimeoutError,
    FrappeClientError,
    FrappeServerError,
)

__all__ = [
    "FrappeClient",
    "FrappeClientConfig",
    "FrappeFilter",
    "ListOptions",
    "FrappeApiError",
    "FrappeNetworkError",
    "FrappeTimeoutError",
    "FrappeClientError",
    "FrappeServerError",
]
