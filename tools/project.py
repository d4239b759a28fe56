"""Project tools: projects, tasks, timesheets."""

from tools.builders import (
    RequiredField,
    create_tool,
    eq,
    get_tool,
    list_tool,
    number,
    string,
    update_tool,
)
from tools.types import ToolCategory

CATEGORY = ToolCategory.PROJECT

TASK_STATUSES = ["Open", "Working", "Pending Review", "Overdue", "Completed", "Cancelled"]
TASK_PRIORITIES = ["Low", "Medium", "High", "Urgent"]


project_tools = [
    list_tool(
        "erpnext_project_list",
        "Project",
        [
            "name",
            "project_name",
            "status",
            "percent_complete",
            "expected_start_date",
            "expected_end_date",
            "estimated_costing",
        ],
        category=CATEGORY,
        description=(
            "List Projects by status or company. Fields: name, project_name, status, percent_complete, "
            "expected_start_date, expected_end_date, estimated_costing."
        ),
        filters=[
            eq("status", "Filter by status", choices=["Open", "Completed", "Cancelled"]),
            eq("company", "Filter by company"),
        ],
    ),
    get_tool(
        "erpnext_project_get",
        "Project",
        category=CATEGORY,
        description="Get one Project with its progress and costing.",
    ),
    list_tool(
        "erpnext_task_list",
        "Task",
        ["name", "subject", "project", "status", "priority", "exp_start_date", "exp_end_date", "progress"],
        category=CATEGORY,
        description=(
            "List Tasks by project, status or priority. "
            "Fields: name, subject, project, status, priority, exp_start_date, exp_end_date, progress."
        ),
        filters=[
            eq("project", "Filter by project name"),
            eq("status", "Filter by status", choices=TASK_STATUSES),
            eq("priority", "Filter by priority", choices=TASK_PRIORITIES),
        ],
    ),
    create_tool(
        "erpnext_task_create",
        "Task",
        category=CATEGORY,
        description="Create a Task in a project. Requires project and subject.",
        properties={
            "project": string("Project name"),
            "subject": string("Task subject/title"),
            "status": string("Task status (default: Open)", enum=TASK_STATUSES),
            "priority": string("Task priority (default: Medium)", enum=TASK_PRIORITIES),
            "exp_start_date": string("Expected start date YYYY-MM-DD"),
            "exp_end_date": string("Expected end date YYYY-MM-DD"),
        },
        required=[RequiredField("project"), RequiredField("subject")],
        optional=["status", "priority", "exp_start_date", "exp_end_date"],
    ),
    get_tool(
        "erpnext_task_get",
        "Task",
        category=CATEGORY,
        description="Get one Task.",
        example="TASK-00001",
    ),
    update_tool(
        "erpnext_task_update",
        "Task",
        category=CATEGORY,
        description="Update a Task's status, priority, progress, end date or description.",
        properties={
            "status": string("New status", enum=TASK_STATUSES),
            "priority": string("New priority", enum=TASK_PRIORITIES),
            "progress": number("Completion percentage (0-100)"),
            "exp_end_date": string("New expected end date YYYY-MM-DD"),
            "description": string("New task description"),
        },
        example="TASK-00001",
    ),
    list_tool(
        "erpnext_timesheet_list",
        "Timesheet",
        ["name", "employee", "start_date", "end_date", "status", "total_hours"],
        category=CATEGORY,
        description=(
            "List Timesheets by employee, project or status. "
            "Fields: name, employee, start_date, end_date, status, total_hours."
        ),
        filters=[
            eq("employee", "Filter by employee ID"),
            eq("project", "Filter by project name"),
            eq("status", "Filter by status", choices=["Draft", "Submitted", "Cancelled"]),
        ],
    ),
    get_tool(
        "erpnext_timesheet_get",
        "Timesheet",
        category=CATEGORY,
        description="Get one Timesheet with its time logs.",
    ),
    create_tool(
        "erpnext_project_create",
        "Project",
        category=CATEGORY,
        description="Create a Project. Requires project_name; dates, costing and company are optional.",
        properties={
            "project_name": string("Project name"),
            "status": string("Initial status (default: Open)", enum=["Open", "Completed", "Cancelled"]),
            "expected_start_date": string("Expected start date YYYY-MM-DD"),
            "expected_end_date": string("Expected end date YYYY-MM-DD"),
            "estimated_costing": number("Budget estimate"),
            "company": string("Company name"),
        },
        required=[RequiredField("project_name")],
        optional=["status", "expected_start_date", "expected_end_date", "estimated_costing", "company"],
    ),
]
