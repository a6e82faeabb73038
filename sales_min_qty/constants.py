from enum import StrEnum


# ──────────────────────────── General ────────────────────────────
APP_NAME = "sales_min_qty"
SETTINGS_DOCTYPE = "Sales Min Qty Settings"
DEFAULT_EPSILON = 1e-6
MAX_EPSILON = 0.5
DEFAULT_LOCALE_NUMBER_FORMAT = "#.###,##"


# ──────────────────────────── Fields ────────────────────────────
MIN_SALE_QTY_FIELD = "custom_min_sale_qty"
MIN_SALE_QTY_ALIAS = "min_qty"
ITEMS_CHILD_FIELD = "items"
LINE_QTY_FIELD = "qty"


# ──────────────────────────── Hooks ────────────────────────────
ITEM_IDENTIFIED_HOOK = "item_identified_handlers"
SALES_DOCTYPES = ("Quotation", "Sales Order", "Delivery Note", "Sales Invoice")

# Child row links set when a line is mapped from another document
SOURCE_LINK_FIELDS = (
	"prevdoc_docname",
	"quotation_item",
	"against_sales_order",
	"so_detail",
	"sales_order_item",
	"against_sales_invoice",
	"against_delivery_note",
	"dn_detail",
	"delivery_note_item",
	"si_detail",
)


# ──────────────────────────── Policy Enums ────────────────────────────
class OverridePolicy(StrEnum):
	ALWAYS = "Always"
	ONLY_EMPTY_OR_ONE = "Only Empty or One"
