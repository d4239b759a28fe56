"""Setup tools: companies."""

from tools.builders import RequiredField, create_tool, list_tool, string
from tools.types import ToolCategory

CATEGORY = ToolCategory.SETUP


setup_tools = [
    list_tool(
        "erpnext_company_list",
        "Company",
        ["name", "abbr", "default_currency", "country", "domain"],
        category=CATEGORY,
        description="List companies. Fields: name, abbr, default_currency, country, domain.",
    ),
    create_tool(
        "erpnext_company_create",
        "Company",
        category=CATEGORY,
        description=(
            "Create a Company from company_name, abbr, default_currency and country. "
            "Warehouse Types 'Transit' and 'Default' must already exist; "
            "erpnext_doc_create can create them."
        ),
        properties={
            "company_name": string("Company name"),
            "abbr": string("Abbreviation (e.g. CI for Casys Industries)"),
            "default_currency": string("Currency code (e.g. EUR, USD)"),
            "country": string("Country name (e.g. France, United States)"),
            "domain": string("Business domain (Manufacturing, Services, Retail, Distribution, Education, etc.)"),
        },
        required=[
            RequiredField("company_name"),
            RequiredField("abbr"),
            RequiredField("default_currency"),
            RequiredField("country"),
        ],
        optional=["domain"],
    ),
]
