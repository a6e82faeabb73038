app_name = "sales_min_qty"
app_title = "Sales Min Qty"
app_publisher = "Sales Min Qty"
app_description = "Minimum sale quantity rule for sales document lines"
app_email = "support@sales-min-qty.local"
app_license = "MIT"
required_apps = ["frappe", "erpnext"]

fixtures = [
    {
        "doctype": "Custom Field",
        "filters": [
            [
                "name",
                "in",
                [
                    "Item-custom_min_sale_qty",
                ],
            ]
        ],
    },
]

# --------------------------------------------------------------------------
# Doc Events -- item identification on sales document lines
# --------------------------------------------------------------------------
doc_events = {
    "Quotation": {
        "before_validate": "sales_min_qty.services.item_identification.on_sales_document_before_validate",
    },
    "Sales Order": {
        "before_validate": "sales_min_qty.services.item_identification.on_sales_document_before_validate",
    },
    "Delivery Note": {
        "before_validate": "sales_min_qty.services.item_identification.on_sales_document_before_validate",
    },
    "Sales Invoice": {
        "before_validate": "sales_min_qty.services.item_identification.on_sales_document_before_validate",
    },
}

# Handlers called as handler(item_code, row_index, cancel, event) for each
# identified line. Other apps may append their own.
item_identified_handlers = [
    "sales_min_qty.services.min_qty_service.min_qty_handler",
]
