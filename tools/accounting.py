"""Accounting tools: chart of accounts, journal entries, payment entries."""

from tools.builders import (
    RequiredField,
    RequiredKind,
    create_tool,
    date_range,
    eq,
    flag,
    get_tool,
    list_tool,
    since,
    string,
)
from tools.types import ToolCategory

CATEGORY = ToolCategory.ACCOUNTING

ROOT_TYPES = ["Asset", "Liability", "Income", "Expense", "Equity"]
PAYMENT_TYPES = ["Receive", "Pay", "Internal Transfer"]

JOURNAL_ACCOUNTS = {
    "type": "array",
    "description": "Account entries: [{account, debit_in_account_currency, credit_in_account_currency}]",
    "items": {
        "type": "object",
        "properties": {
            "account": {"type": "string", "description": "Account name"},
            "debit_in_account_currency": {"type": "number", "description": "Debit amount (0 if credit)"},
            "credit_in_account_currency": {"type": "number", "description": "Credit amount (0 if debit)"},
        },
        "required": ["account"],
    },
}


accounting_tools = [
    list_tool(
        "erpnext_account_list",
        "Account",
        ["name", "account_name", "account_type", "root_type", "parent_account", "is_group"],
        category=CATEGORY,
        description=(
            "List the Chart of Accounts by root_type, group flag or company. "
            "Fields: name, account_name, account_type, root_type, parent_account, is_group."
        ),
        filters=[
            eq("root_type", "Filter by root type: Asset, Liability, Income, Expense, Equity", choices=ROOT_TYPES),
            flag("is_group", "Filter by group accounts only"),
            eq("company", "Filter by company"),
        ],
        limit=50,
        order_by="name asc",
    ),
    list_tool(
        "erpnext_journal_entry_list",
        "Journal Entry",
        ["name", "voucher_type", "posting_date", "total_debit", "total_credit", "remark"],
        category=CATEGORY,
        description=(
            "List Journal Entries by voucher_type or posting date range. "
            "Fields: name, voucher_type, posting_date, total_debit, total_credit, remark."
        ),
        filters=[
            eq("voucher_type", "Filter by voucher type (Journal Entry, Bank Entry, Cash Entry, etc.)"),
            *date_range("posting_date"),
        ],
    ),
    get_tool(
        "erpnext_journal_entry_get",
        "Journal Entry",
        category=CATEGORY,
        description="Get one Journal Entry with its account lines.",
        example="JV-00001",
    ),
    list_tool(
        "erpnext_payment_entry_list",
        "Payment Entry",
        ["name", "payment_type", "party_type", "party", "posting_date", "paid_amount", "currency"],
        category=CATEGORY,
        description=(
            "List Payment Entries by payment_type, party or start date. "
            "Fields: name, payment_type, party_type, party, posting_date, paid_amount, currency."
        ),
        filters=[
            eq("payment_type", "Filter by payment type: Receive, Pay, Internal Transfer", choices=PAYMENT_TYPES),
            eq("party_type", "Filter by party type (Customer, Supplier, Employee)"),
            eq("party", "Filter by party name"),
            *since("posting_date"),
        ],
    ),
    get_tool(
        "erpnext_payment_entry_get",
        "Payment Entry",
        category=CATEGORY,
        description="Get one Payment Entry including its references.",
        example="PE-00001",
    ),
    create_tool(
        "erpnext_journal_entry_create",
        "Journal Entry",
        category=CATEGORY,
        description=(
            "Create a Journal Entry from voucher_type and debit/credit account lines. "
            "Total debits must equal total credits."
        ),
        properties={
            "voucher_type": string("Journal entry type (Journal Entry, Bank Entry, Cash Entry, Credit Card Entry, etc.)"),
            "accounts": JOURNAL_ACCOUNTS,
            "posting_date": string("Posting date YYYY-MM-DD (default: today)"),
            "remark": string("Narration / remark"),
        },
        required=[
            RequiredField("voucher_type"),
            RequiredField("accounts", RequiredKind.NON_EMPTY_LIST),
        ],
        optional=["posting_date", "remark"],
    ),
]
