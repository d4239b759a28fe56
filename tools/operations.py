"""Generic document operations.

These tools take the doctype per call, so they cover master data and any
doctype without a dedicated tool. Submit goes through the same
fetch-then-submit path as the typed submit tools.
"""

from typing import Any, Dict

from tools.builders import RequiredField, RequiredKind, arg_or, int_arg, number, object_schema, string
from tools.types import DOCLIST_UI, ToolCategory, ToolContext, ToolDefinition

CATEGORY = ToolCategory.OPERATIONS

DEFAULT_LIST_FIELDS = ["name", "modified"]

DOCTYPE_REQUIRED = RequiredField("doctype")
NAME_REQUIRED = RequiredField("name")


def _doctype(example: str) -> Dict[str, Any]:
    return string(f"ERPNext DocType name (e.g. {example})")


async def doc_create(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    doctype = args["doctype"]
    doc = await ctx.client.create(doctype, args["data"])
    return {"data": doc, "message": f"{doctype} {(doc or {}).get('name')} created successfully"}


async def doc_update(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    doctype, name = args["doctype"], args["name"]
    doc = await ctx.client.update(doctype, name, args["data"])
    return {"data": doc, "message": f"{doctype} {name} updated successfully"}


async def doc_delete(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    doctype, name = args["doctype"], args["name"]
    await ctx.client.delete(doctype, name)
    return {
        "message": f"{doctype} {name} deleted successfully",
        "deleted": True,
        "doctype": doctype,
        "name": name,
    }


async def doc_submit(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    doctype, name = args["doctype"], args["name"]
    result = await ctx.client.submit(doctype, name)
    return {
        "data": result,
        "message": f"{doctype} {name} submitted successfully",
        "doctype": doctype,
        "name": name,
    }


async def doc_cancel(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    doctype, name = args["doctype"], args["name"]
    result = await ctx.client.cancel(doctype, name)
    return {
        "data": result,
        "message": f"{doctype} {name} cancelled successfully",
        "doctype": doctype,
        "name": name,
    }


async def doc_get(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    doc = await ctx.client.get(args["doctype"], args["name"])
    return {"data": doc}


async def doc_list(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    doctype = args["doctype"]
    docs = await ctx.client.list(
        doctype,
        fields=arg_or(args, "fields", DEFAULT_LIST_FIELDS),
        filters=arg_or(args, "filters", []),
        limit=int_arg(args, "limit", 20),
        order_by=arg_or(args, "order_by", "modified desc"),
    )
    return {"doctype": doctype, "count": len(docs), "data": docs, "_meta": DOCLIST_UI}


operations_tools = [
    ToolDefinition(
        name="erpnext_doc_create",
        description=(
            "Create a document of any DocType, including master data (Item Group, UOM, Territory, "
            "Warehouse Type, etc.). Include 'name' in data for DocTypes with Prompt naming."
        ),
        category=CATEGORY,
        input_schema=object_schema(
            {
                "doctype": _doctype("'Company', 'Item Group', 'Warehouse Type'"),
                "data": {
                    "type": "object",
                    "description": "Document fields as key-value pairs",
                    "additionalProperties": True,
                },
            },
            ["doctype", "data"],
        ),
        handler=doc_create,
        required=(
            DOCTYPE_REQUIRED,
            RequiredField("data", RequiredKind.OBJECT, message="'data' must be an object with document fields"),
        ),
    ),
    ToolDefinition(
        name="erpnext_doc_update",
        description="Partially update a document of any DocType. Only the fields in data change.",
        category=CATEGORY,
        input_schema=object_schema(
            {
                "doctype": _doctype("'Customer', 'Sales Order', 'Item'"),
                "name": string("Document name/ID (e.g. 'CUST-00001', 'SO-00001')"),
                "data": {
                    "type": "object",
                    "description": "Fields to update as key-value pairs",
                    "additionalProperties": True,
                },
            },
            ["doctype", "name", "data"],
        ),
        handler=doc_update,
        required=(
            DOCTYPE_REQUIRED,
            NAME_REQUIRED,
            RequiredField("data", RequiredKind.OBJECT, message="'data' must be an object with fields to update"),
        ),
    ),
    ToolDefinition(
        name="erpnext_doc_delete",
        description="Delete a document of any DocType. Submitted documents must be cancelled first.",
        category=CATEGORY,
        input_schema=object_schema(
            {
                "doctype": _doctype("'Customer', 'Sales Order'"),
                "name": string("Document name/ID to delete"),
            },
            ["doctype", "name"],
        ),
        handler=doc_delete,
        required=(DOCTYPE_REQUIRED, NAME_REQUIRED),
    ),
    ToolDefinition(
        name="erpnext_doc_submit",
        description="Submit a Draft document of any submittable DocType via frappe.client.submit.",
        category=CATEGORY,
        input_schema=object_schema(
            {
                "doctype": _doctype("'Sales Order', 'Purchase Invoice', 'Timesheet'"),
                "name": string("Document name/ID to submit (e.g. 'SO-00001')"),
            },
            ["doctype", "name"],
        ),
        handler=doc_submit,
        required=(DOCTYPE_REQUIRED, NAME_REQUIRED),
    ),
    ToolDefinition(
        name="erpnext_doc_cancel",
        description="Cancel a submitted document of any DocType via frappe.client.cancel.",
        category=CATEGORY,
        input_schema=object_schema(
            {
                "doctype": _doctype("'Sales Order', 'Purchase Invoice', 'Timesheet'"),
                "name": string("Document name/ID to cancel (e.g. 'SO-00001')"),
            },
            ["doctype", "name"],
        ),
        handler=doc_cancel,
        required=(DOCTYPE_REQUIRED, NAME_REQUIRED),
    ),
    ToolDefinition(
        name="erpnext_doc_get",
        description="Get a document of any DocType by name, with all fields.",
        category=CATEGORY,
        input_schema=object_schema(
            {
                "doctype": _doctype("'Lead', 'Asset', 'BOM'"),
                "name": string("Document name/ID"),
            },
            ["doctype", "name"],
        ),
        handler=doc_get,
        required=(DOCTYPE_REQUIRED, NAME_REQUIRED),
    ),
    ToolDefinition(
        name="erpnext_doc_list",
        description=(
            "List documents of any DocType with field selection, Frappe filters, limit and ordering."
        ),
        category=CATEGORY,
        input_schema=object_schema(
            {
                "doctype": _doctype("'Lead', 'Asset', 'BOM', 'Cost Center'"),
                "fields": {
                    "type": "array",
                    "description": "Fields to fetch (default: ['name', 'modified']). Use ['*'] for all fields.",
                    "items": {"type": "string"},
                },
                "filters": {
                    "type": "array",
                    "description": (
                        "Frappe filters as [fieldname, operator, value] triples, "
                        'e.g. [["status","=","Open"],["company","=","Acme"]]'
                    ),
                    "items": {"type": "array"},
                },
                "limit": number("Max results (default 20)"),
                "order_by": string("Order by clause (e.g. 'modified desc', 'name asc')"),
            },
            ["doctype"],
        ),
        handler=doc_list,
        meta=DOCLIST_UI,
        required=(DOCTYPE_REQUIRED,),
    ),
]
