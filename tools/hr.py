"""HR tools: employees, attendance, leave, payroll, expense claims."""

from typing import Any, Dict

from tools.builders import (
    RequiredField,
    RequiredKind,
    create_tool,
    date_range,
    eq,
    get_tool,
    list_tool,
    object_schema,
    pick,
    string,
)
from tools.types import DOCLIST_UI, ToolCategory, ToolContext, ToolDefinition

CATEGORY = ToolCategory.HR

SUBMITTABLE_STATUSES = ["Draft", "Submitted", "Cancelled"]


def _expense_claim_payload(args: Dict[str, Any]) -> Dict[str, Any]:
    expenses = [
        {
            "expense_type": expense.get("expense_type"),
            "amount": expense.get("amount"),
            "description": expense.get("description") or "",
        }
        for expense in args["expenses"]
    ]
    data = {"employee": args["employee"], "expenses": expenses}
    data.update(pick(args, ("posting_date",)))
    return data


async def leave_balance(args: Dict[str, Any], ctx: ToolContext) -> Dict[str, Any]:
    """Submitted Leave Allocations of one employee, ordered by leave type."""
    employee = args["employee"]
    docs = await ctx.client.list(
        "Leave Allocation",
        fields=["name", "leave_type", "total_leaves_allocated", "new_leaves_allocated", "from_date", "to_date"],
        filters=[["employee", "=", employee], ["docstatus", "=", 1]],
        limit=50,
        order_by="leave_type asc",
    )
    return {
        "doctype": "Leave Allocation",
        "employee": employee,
        "count": len(docs),
        "data": docs,
        "_meta": DOCLIST_UI,
    }


hr_tools = [
    list_tool(
        "erpnext_employee_list",
        "Employee",
        ["name", "employee_name", "designation", "department", "company", "status", "date_of_joining"],
        category=CATEGORY,
        description=(
            "List Employees by department, status or company. "
            "Fields: name, employee_name, designation, department, company, status, date_of_joining."
        ),
        filters=[
            eq("department", "Filter by department"),
            eq("status", "Filter by status", choices=["Active", "Inactive", "Suspended", "Left"]),
            eq("company", "Filter by company"),
        ],
    ),
    get_tool(
        "erpnext_employee_get",
        "Employee",
        category=CATEGORY,
        description="Get one Employee by ID.",
        example="HR-EMP-00001",
    ),
    list_tool(
        "erpnext_attendance_list",
        "Attendance",
        ["name", "employee", "employee_name", "attendance_date", "status"],
        category=CATEGORY,
        description=(
            "List Attendance records by employee, status or date range, newest first. "
            "Fields: name, employee, employee_name, attendance_date, status."
        ),
        filters=[
            eq("employee", "Filter by employee ID"),
            eq("status", "Filter by status", choices=["Present", "Absent", "Half Day", "On Leave"]),
            *date_range("attendance_date"),
        ],
        order_by="attendance_date desc",
    ),
    list_tool(
        "erpnext_leave_application_list",
        "Leave Application",
        ["name", "employee", "employee_name", "leave_type", "from_date", "to_date", "status"],
        category=CATEGORY,
        description=(
            "List Leave Applications by employee, status or leave_type. "
            "Fields: name, employee, employee_name, leave_type, from_date, to_date, status."
        ),
        filters=[
            eq("employee", "Filter by employee ID"),
            eq("status", "Filter by status", choices=["Open", "Approved", "Rejected", "Cancelled"]),
            eq("leave_type", "Filter by leave type (e.g. Sick Leave)"),
        ],
    ),
    get_tool(
        "erpnext_leave_application_get",
        "Leave Application",
        category=CATEGORY,
        description="Get one Leave Application.",
    ),
    create_tool(
        "erpnext_leave_application_create",
        "Leave Application",
        category=CATEGORY,
        description="Create a Leave Application. Requires employee, leave_type, from_date and to_date (YYYY-MM-DD).",
        properties={
            "employee": string("Employee ID (e.g. HR-EMP-00001)"),
            "leave_type": string("Leave type (e.g. Sick Leave, Casual Leave)"),
            "from_date": string("Start date YYYY-MM-DD"),
            "to_date": string("End date YYYY-MM-DD"),
            "reason": string("Reason for leave (optional)"),
        },
        required=[
            RequiredField("employee"),
            RequiredField("leave_type"),
            RequiredField("from_date"),
            RequiredField("to_date"),
        ],
        optional=["reason"],
    ),
    list_tool(
        "erpnext_salary_slip_list",
        "Salary Slip",
        [
            "name",
            "employee",
            "employee_name",
            "posting_date",
            "start_date",
            "end_date",
            "gross_pay",
            "net_pay",
            "status",
        ],
        category=CATEGORY,
        description=(
            "List Salary Slips by employee, status or posting date range, newest first. "
            "Fields: name, employee, employee_name, posting_date, start_date, end_date, gross_pay, net_pay, status."
        ),
        filters=[
            eq("employee", "Filter by employee ID"),
            eq("status", "Filter by status", choices=SUBMITTABLE_STATUSES),
            *date_range("posting_date"),
        ],
        order_by="posting_date desc",
    ),
    get_tool(
        "erpnext_salary_slip_get",
        "Salary Slip",
        category=CATEGORY,
        description="Get one Salary Slip including earnings and deductions.",
    ),
    list_tool(
        "erpnext_payroll_entry_list",
        "Payroll Entry",
        ["name", "company", "posting_date", "payroll_frequency", "status"],
        category=CATEGORY,
        description="List Payroll Entries by company or status. Fields: name, company, posting_date, payroll_frequency, status.",
        filters=[
            eq("company", "Filter by company"),
            eq("status", "Filter by status", choices=SUBMITTABLE_STATUSES),
        ],
        order_by="posting_date desc",
    ),
    list_tool(
        "erpnext_expense_claim_list",
        "Expense Claim",
        [
            "name",
            "employee",
            "employee_name",
            "posting_date",
            "total_claimed_amount",
            "status",
            "approval_status",
        ],
        category=CATEGORY,
        description=(
            "List Expense Claims by employee, status or approval_status. "
            "Fields: name, employee, employee_name, posting_date, total_claimed_amount, status, approval_status."
        ),
        filters=[
            eq("employee", "Filter by employee ID"),
            eq("status", "Filter by status", choices=SUBMITTABLE_STATUSES),
            eq("approval_status", "Filter by approval status", choices=["Pending", "Approved", "Rejected"]),
        ],
    ),
    create_tool(
        "erpnext_expense_claim_create",
        "Expense Claim",
        category=CATEGORY,
        description="Create an Expense Claim for an employee from expense lines (expense_type, amount, description).",
        properties={
            "employee": string("Employee ID (e.g. HR-EMP-00001)"),
            "expenses": {
                "type": "array",
                "description": "List of expense line items",
                "items": {
                    "type": "object",
                    "properties": {
                        "expense_type": {"type": "string", "description": "Expense type (e.g. Travel, Food)"},
                        "amount": {"type": "number", "description": "Claimed amount"},
                        "description": {"type": "string", "description": "Description of the expense (optional)"},
                    },
                    "required": ["expense_type", "amount"],
                },
            },
            "posting_date": string("Posting date YYYY-MM-DD (optional, defaults to today)"),
        },
        required=[
            RequiredField("employee"),
            RequiredField(
                "expenses",
                RequiredKind.NON_EMPTY_LIST,
                message="'expenses' is required and must be a non-empty array",
            ),
        ],
        build=_expense_claim_payload,
    ),
    ToolDefinition(
        name="erpnext_leave_balance",
        description=(
            "Leave balance (submitted allocations) for an employee: "
            "leave_type, total_leaves_allocated, new_leaves_allocated, from_date, to_date."
        ),
        category=CATEGORY,
        input_schema=object_schema({"employee": string("Employee ID (e.g. HR-EMP-00001)")}, ["employee"]),
        handler=leave_balance,
        meta=DOCLIST_UI,
        required=(RequiredField("employee"),),
    ),
]
