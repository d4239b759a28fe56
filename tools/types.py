"""Tool abstraction.

A tool is one named operation exposed to callers: a JSON input schema, a set
of required-field rules checked before the handler runs, an async handler
that talks to ERPNext through the shared client, and an optional UI hint.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple

from connectors.frappe import FrappeClient
from tools.errors import MissingFieldError


class ToolCategory(str, Enum):
    """Closed set of tool categories."""
    SALES = "sales"
    INVENTORY = "inventory"
    ACCOUNTING = "accounting"
    HR = "hr"
    PROJECT = "project"
    OPERATIONS = "operations"
    PURCHASING = "purchasing"
    DELIVERY = "delivery"
    MANUFACTURING = "manufacturing"
    CRM = "crm"
    ASSETS = "assets"
    SETUP = "setup"
    ANALYTICS = "analytics"


# =============================================================================
# UI hints
# =============================================================================

UI_SCHEME = "ui://mcp-erpnext"


def ui_meta(viewer: str) -> Dict[str, Dict[str, str]]:
    return {"ui": {"resourceUri": f"{UI_SCHEME}/{viewer}"}}


DOCLIST_UI = ui_meta("doclist-viewer")
INVOICE_UI = ui_meta("invoice-viewer")
STOCK_UI = ui_meta("stock-viewer")
PIPELINE_UI = ui_meta("order-pipeline-viewer")
CHART_UI = ui_meta("chart-viewer")
KPI_UI = ui_meta("kpi-viewer")
FUNNEL_UI = ui_meta("funnel-viewer")


# =============================================================================
# Handler context
# =============================================================================

def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(moment: datetime) -> str:
    """``2026-01-09T12:00:00.000Z`` style UTC timestamp."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


@dataclass
class ToolContext:
    """Shared collaborators handed to every handler."""
    client: FrappeClient
    clock: Callable[[], datetime] = utc_now


Handler = Callable[[Dict[str, Any], ToolContext], Awaitable[Any]]


# =============================================================================
# Required fields
# =============================================================================

class RequiredKind(str, Enum):
    """How a required field is checked."""
    PRESENT = "present"                # truthy
    NOT_NULL = "not_null"              # anything but None (0 is fine)
    NON_EMPTY_LIST = "non_empty_list"  # list with at least one entry
    OBJECT = "object"                  # dict
    ONE_OF = "one_of"                  # optional, but one of ``choices`` when given


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


@dataclass(frozen=True)
class RequiredField:
    """A declarative required-argument rule with its exact error text."""
    field: str
    kind: RequiredKind = RequiredKind.PRESENT
    message: Optional[str] = None
    item_keys: Tuple[str, ...] = ()
    item_message: Optional[str] = None
    choices: Tuple[str, ...] = ()

    def error_message(self) -> str:
        if self.message:
            return self.message
        if self.kind == RequiredKind.NON_EMPTY_LIST:
            return f"'{self.field}' must be a non-empty array"
        if self.kind == RequiredKind.ONE_OF:
            return f"'{self.field}' must be one of: {', '.join(self.choices)}"
        return f"'{self.field}' is required"

    def item_error_message(self) -> str:
        return self.item_message or "Each item must have item_code, qty, and rate"

    def check(self, args: Dict[str, Any]) -> Optional[str]:
        """Return the error text when ``args`` break the rule, else None."""
        value = args.get(self.field)

        if self.kind == RequiredKind.PRESENT:
            return None if value else self.error_message()
        if self.kind == RequiredKind.NOT_NULL:
            return None if value is not None else self.error_message()
        if self.kind == RequiredKind.OBJECT:
            return None if isinstance(value, dict) else self.error_message()
        if self.kind == RequiredKind.ONE_OF:
            return None if value is None or value in self.choices else self.error_message()

        if not isinstance(value, list) or not value:
            return self.error_message()
        for item in value:
            if not isinstance(item, dict) or any(_is_blank(item.get(k)) for k in self.item_keys):
                return self.item_error_message()
        return None


# =============================================================================
# Tool definition
# =============================================================================

@dataclass(frozen=True)
class ToolDefinition:
    """One named operation exposed to callers."""
    name: str
    description: str
    category: ToolCategory
    input_schema: Dict[str, Any]
    handler: Handler = field(repr=False, compare=False)
    meta: Optional[Dict[str, Any]] = None
    required: Tuple[RequiredField, ...] = ()

    def validate(self, args: Dict[str, Any]) -> None:
        """Check every required-field rule, raising on the first failure."""
        for rule in self.required:
            message = rule.check(args)
            if message:
                raise MissingFieldError(self.name, rule.field, message)

    def to_wire_format(self) -> Dict[str, Any]:
        """Protocol listing entry: name, description, input schema and UI hint."""
        wire = {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }
        if self.meta:
            wire["_meta"] = self.meta
        return wire
