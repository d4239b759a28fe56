"""Builders for the typed CRUD tools.

Most ERPNext tools are one of a handful of shapes (list, get, create, update,
submit, cancel) over a fixed doctype. The builders below produce complete
ToolDefinitions from a short declaration.

List filters are declared with small specs:
    eq("customer", "Filter by customer")  -> ["customer", "=", value] when set
    *date_range("posting_date")           -> date_from (>=) and date_to (<=)
    *since("posting_date")                -> date_from (>=) only
    flag("is_group", "...")               -> [field, "=", 1|0] when given
    exclude_disabled("customers")         -> ["disabled", "=", 0] unless include_disabled
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from connectors.frappe import FrappeFilter
from reporting.numbers import to_number
from tools.errors import MissingFieldError
from tools.types import (
    DOCLIST_UI,
    RequiredField,
    RequiredKind,
    ToolCategory,
    ToolContext,
    ToolDefinition,
)

Schema = Dict[str, Any]
Builder = Callable[[Dict[str, Any]], Dict[str, Any]]

NAME_REQUIRED = (RequiredField("name"),)


def arg_or(args: Dict[str, Any], key: str, default: Any) -> Any:
    """Argument value, or ``default`` when absent or None."""
    value = args.get(key)
    return default if value is None else value


def int_arg(args: Dict[str, Any], key: str, default: int) -> int:
    """Whole-number argument; JSON numbers like 3.0 and numeric strings are truncated."""
    value = args.get(key)
    return default if value is None else int(to_number(value))


def is_present(value: Any) -> bool:
    return value is not None and value != ""


def pick(args: Dict[str, Any], keys: Iterable[str]) -> Dict[str, Any]:
    """Copy the keys whose values are present."""
    return {key: args[key] for key in keys if is_present(args.get(key))}


# =============================================================================
# Schema helpers
# =============================================================================

def string(description: str, **extra) -> Schema:
    return {"type": "string", "description": description, **extra}


def number(description: str) -> Schema:
    return {"type": "number", "description": description}


def boolean(description: str) -> Schema:
    return {"type": "boolean", "description": description}


def object_schema(properties: Schema, required: Sequence[str] = ()) -> Schema:
    schema: Schema = {"type": "object", "properties": properties}
    if required:
        schema["required"] = list(required)
    return schema


def line_items_schema(description: str, keys: Dict[str, str], required: Sequence[str] = ()) -> Schema:
    """Array of line-item objects; ``keys`` maps item field -> JSON type."""
    item: Schema = {
        "type": "object",
        "properties": {key: {"type": kind} for key, kind in keys.items()},
    }
    if required:
        item["required"] = list(required)
    return {"type": "array", "description": description, "items": item}


def line_items(items: List[Dict[str, Any]], keys: Sequence[str], **extra: Any) -> List[Dict[str, Any]]:
    """Project each item onto ``keys`` (absent keys skipped) plus present ``extra`` values."""
    shaped = []
    for item in items:
        row = {key: item[key] for key in keys if key in item}
        row.update({key: value for key, value in extra.items() if is_present(value)})
        shaped.append(row)
    return shaped


# =============================================================================
# List filter specs
# =============================================================================

@dataclass(frozen=True)
class FilterSpec:
    """Maps one optional list argument to a Frappe filter."""
    arg: str
    field: str
    operator: str = "="
    description: str = ""
    as_flag: bool = False
    choices: Tuple[str, ...] = ()

    def properties(self) -> Schema:
        kind = "boolean" if self.as_flag else "string"
        schema: Schema = {"type": kind, "description": self.description}
        if self.choices:
            schema["enum"] = list(self.choices)
        return {self.arg: schema}

    def apply(self, args: Dict[str, Any]) -> Optional[FrappeFilter]:
        value = args.get(self.arg)
        if self.as_flag:
            if value is None:
                return None
            return [self.field, self.operator, 1 if value else 0]
        if not value:
            return None
        return [self.field, self.operator, value]


@dataclass(frozen=True)
class ExcludeDisabled:
    """``disabled = 0`` unless the caller asks for disabled records too."""
    noun: str

    def properties(self) -> Schema:
        return {"include_disabled": boolean(f"Include disabled {self.noun} (default false)")}

    def apply(self, args: Dict[str, Any]) -> Optional[FrappeFilter]:
        if args.get("include_disabled"):
            return None
        return ["disabled", "=", 0]


def eq(
    arg: str,
    description: str,
    field: Optional[str] = None,
    choices: Sequence[str] = (),
) -> FilterSpec:
    return FilterSpec(arg, field or arg, "=", description, choices=tuple(choices))


def flag(arg: str, description: str, field: Optional[str] = None) -> FilterSpec:
    return FilterSpec(arg, field or arg, "=", description, as_flag=True)


def date_range(field: str) -> Tuple[FilterSpec, FilterSpec]:
    return (
        FilterSpec("date_from", field, ">=", "Start date filter YYYY-MM-DD"),
        FilterSpec("date_to", field, "<=", "End date filter YYYY-MM-DD"),
    )


def since(field: str) -> Tuple[FilterSpec]:
    return (FilterSpec("date_from", field, ">=", "Start date filter YYYY-MM-DD"),)


def exclude_disabled(noun: str) -> ExcludeDisabled:
    return ExcludeDisabled(noun)


def build_filters(specs: Sequence[Any], args: Dict[str, Any]) -> List[FrappeFilter]:
    filters = []
    for spec in specs:
        clause = spec.apply(args)
        if clause is not None:
            filters.append(clause)
    return filters


# =============================================================================
# Tool builders
# =============================================================================

def list_tool(
    name: str,
    doctype: str,
    fields: Sequence[str],
    *,
    category: ToolCategory,
    description: str,
    filters: Sequence[Any] = (),
    limit: int = 20,
    order_by: str = "modified desc",
    meta: Optional[Dict[str, Any]] = DOCLIST_UI,
) -> ToolDefinition:
    """List documents with optional equality, flag and date filters."""
    properties: Schema = {"limit": number(f"Max results (default {limit})")}
    for spec in filters:
        properties.update(spec.properties())

    async def handler(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
        docs = await ctx.client.list(
            doctype,
            fields=list(fields),
            filters=build_filters(filters, args),
            limit=int_arg(args, "limit", limit),
            order_by=order_by,
        )
        return {"doctype": doctype, "count": len(docs), "data": docs, "_meta": meta}

    return ToolDefinition(
        name=name,
        description=description,
        category=category,
        input_schema=object_schema(properties),
        handler=handler,
        meta=meta,
    )


def get_tool(
    name: str,
    doctype: str,
    *,
    category: ToolCategory,
    description: str,
    example: Optional[str] = None,
    meta: Optional[Dict[str, Any]] = None,
) -> ToolDefinition:
    """Fetch one document by name."""
    hint = f"{doctype} name (e.g. {example})" if example else f"{doctype} name (ID)"

    async def handler(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
        doc = await ctx.client.get(doctype, args["name"])
        result: Dict[str, Any] = {"data": doc}
        if meta:
            result["_meta"] = meta
        return result

    return ToolDefinition(
        name=name,
        description=description,
        category=category,
        input_schema=object_schema({"name": string(hint)}, ["name"]),
        handler=handler,
        meta=meta,
        required=NAME_REQUIRED,
    )


def create_tool(
    name: str,
    doctype: str,
    *,
    category: ToolCategory,
    description: str,
    properties: Schema,
    required: Sequence[RequiredField] = (),
    optional: Sequence[str] = (),
    build: Optional[Builder] = None,
) -> ToolDefinition:
    """Create a document.

    Without ``build`` the payload is the required fields plus whichever
    ``optional`` fields are present.
    """
    required = tuple(required)
    required_names = [rule.field for rule in required]

    async def handler(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
        if build is not None:
            data = build(args)
        else:
            data = {key: args[key] for key in required_names}
            data.update(pick(args, optional))
        doc = await ctx.client.create(doctype, data)
        return {
            "data": doc,
            "message": f"{doctype} {(doc or {}).get('name')} created successfully",
        }

    return ToolDefinition(
        name=name,
        description=description,
        category=category,
        input_schema=object_schema(properties, required_names),
        handler=handler,
        required=required,
    )


def update_tool(
    name: str,
    doctype: str,
    *,
    category: ToolCategory,
    description: str,
    properties: Schema,
    fields: Optional[Sequence[str]] = None,
    example: Optional[str] = None,
) -> ToolDefinition:
    """Partially update a document.

    The patch is every non-None argument except ``name``, or only ``fields``
    when given.
    """
    hint = f"{doctype} name (e.g. {example})" if example else f"{doctype} name (ID)"

    async def handler(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
        if fields is None:
            data = {k: v for k, v in args.items() if k != "name" and v is not None}
        else:
            data = pick(args, fields)
        if not data:
            raise MissingFieldError(name, None, "At least one field to update is required")

        doc = await ctx.client.update(doctype, args["name"], data)
        return {"data": doc, "message": f"{doctype} {args['name']} updated successfully"}

    return ToolDefinition(
        name=name,
        description=description,
        category=category,
        input_schema=object_schema({"name": string(hint), **properties}, ["name"]),
        handler=handler,
        required=NAME_REQUIRED,
    )


def submit_tool(
    name: str,
    doctype: str,
    *,
    category: ToolCategory,
    description: str,
    example: Optional[str] = None,
) -> ToolDefinition:
    """Submit a Draft document. The client fetches it first for the timestamp check."""
    hint = f"{doctype} name (e.g. {example})" if example else f"{doctype} name (ID)"

    async def handler(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
        result = await ctx.client.submit(doctype, args["name"])
        return {"data": result, "message": f"{doctype} {args['name']} submitted successfully"}

    return ToolDefinition(
        name=name,
        description=description,
        category=category,
        input_schema=object_schema({"name": string(hint)}, ["name"]),
        handler=handler,
        required=NAME_REQUIRED,
    )


def cancel_tool(
    name: str,
    doctype: str,
    *,
    category: ToolCategory,
    description: str,
    example: Optional[str] = None,
) -> ToolDefinition:
    """Cancel a submitted document."""
    hint = f"{doctype} name (e.g. {example})" if example else f"{doctype} name (ID)"

    async def handler(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
        result = await ctx.client.cancel(doctype, args["name"])
        return {"data": result, "message": f"{doctype} {args['name']} cancelled successfully"}

    return ToolDefinition(
        name=name,
        description=description,
        category=category,
        input_schema=object_schema({"name": string(hint)}, ["name"]),
        handler=handler,
        required=NAME_REQUIRED,
    )


__all__ = [
    "RequiredField",
    "RequiredKind",
    "arg_or",
    "is_present",
    "pick",
    "string",
    "number",
    "boolean",
    "object_schema",
    "line_items_schema",
    "line_items",
    "FilterSpec",
    "ExcludeDisabled",
    "eq",
    "flag",
    "date_range",
    "since",
    "exclude_disabled",
    "build_filters",
    "list_tool",
    "get_tool",
    "create_tool",
    "update_tool",
    "submit_tool",
    "cancel_tool",
]
