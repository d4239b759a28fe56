"""CRM tools: leads, opportunities, contacts, campaigns."""

from tools.builders import RequiredField, create_tool, eq, get_tool, list_tool, string
from tools.types import ToolCategory

CATEGORY = ToolCategory.CRM


crm_tools = [
    list_tool(
        "erpnext_lead_list",
        "Lead",
        ["name", "lead_name", "company_name", "status", "lead_owner", "source", "email_id", "mobile_no"],
        category=CATEGORY,
        description=(
            "List CRM Leads by status, owner or source. "
            "Fields: name, lead_name, company_name, status, lead_owner, source, email_id, mobile_no."
        ),
        filters=[
            eq("status", "Filter by status (Lead, Open, Replied, Opportunity, Quotation, Converted, Do Not Contact)"),
            eq("lead_owner", "Filter by assigned sales rep (user)"),
            eq("source", "Filter by lead source (Cold Calling, Website, etc.)"),
        ],
    ),
    get_tool(
        "erpnext_lead_get",
        "Lead",
        category=CATEGORY,
        description="Get one CRM Lead with its contact info.",
    ),
    create_tool(
        "erpnext_lead_create",
        "Lead",
        category=CATEGORY,
        description="Create a CRM Lead. Requires lead_name; company, email, mobile, source and owner are optional.",
        properties={
            "lead_name": string("Full name of the lead contact"),
            "company_name": string("Company name"),
            "email_id": string("Email address"),
            "mobile_no": string("Mobile number"),
            "source": string("Lead source (Cold Calling, Website, Advertisement, etc.)"),
            "lead_owner": string("Assigned sales rep (ERPNext user)"),
        },
        required=[RequiredField("lead_name")],
        optional=["company_name", "email_id", "mobile_no", "source", "lead_owner"],
    ),
    list_tool(
        "erpnext_opportunity_list",
        "Opportunity",
        [
            "name",
            "opportunity_from",
            "party_name",
            "status",
            "opportunity_amount",
            "currency",
            "probability",
            "opportunity_owner",
        ],
        category=CATEGORY,
        description=(
            "List CRM Opportunities by status, owner or party. Fields: name, opportunity_from, party_name, "
            "status, opportunity_amount, currency, probability, opportunity_owner."
        ),
        filters=[
            eq("status", "Filter by status (Open, Quotation, Converted, Lost, Closed)"),
            eq("opportunity_owner", "Filter by assigned sales rep (user)"),
            eq("party_name", "Filter by customer or lead name"),
        ],
    ),
    get_tool(
        "erpnext_opportunity_get",
        "Opportunity",
        category=CATEGORY,
        description="Get one CRM Opportunity including items and competitors.",
    ),
    list_tool(
        "erpnext_contact_list",
        "Contact",
        ["name", "first_name", "last_name", "company_name", "email_id", "mobile_no", "status"],
        category=CATEGORY,
        description=(
            "List Contacts by company_name or status. "
            "Fields: name, first_name, last_name, company_name, email_id, mobile_no, status."
        ),
        filters=[
            eq("company_name", "Filter by company name"),
            eq("status", "Filter by status (Passive, Open, Replied)"),
        ],
    ),
    get_tool(
        "erpnext_contact_get",
        "Contact",
        category=CATEGORY,
        description="Get one Contact.",
    ),
    list_tool(
        "erpnext_campaign_list",
        "Campaign",
        ["name", "campaign_name", "campaign_type", "start_date", "end_date", "description"],
        category=CATEGORY,
        description="List CRM Campaigns. Fields: name, campaign_name, campaign_type, start_date, end_date, description.",
        filters=[eq("campaign_type", "Filter by campaign type")],
    ),
]
