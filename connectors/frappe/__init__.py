"""Frappe / ERPNext connector.

REST client for the Frappe framework API used by ERPNext.
"""

from connectors.frappe.frappe_client import (
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
    # Errors
    "FrappeApiError",
    "FrappeNetworkError",
    "FrappeTimeoutError",
    "FrappeClientError",
    "FrappeServerError",
]
