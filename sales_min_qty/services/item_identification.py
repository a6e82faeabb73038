# Copyright (c) 2026, Sales Min Qty and contributors
# For license information, please see license.txt

"""Item Identification -- dispatches line identification events on sales documents.

A line counts as identified when its item_code is set and differs from the
same row in the document as last saved (new rows and new documents
included, except new amendments and rows mapped from another document).
Each identified line is passed to every handler registered under the
``item_identified_handlers`` hook, in hook order, until one of them sets the
cancel flag.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import frappe
from frappe.model.document import Document

from sales_min_qty.constants import ITEM_IDENTIFIED_HOOK, ITEMS_CHILD_FIELD, SOURCE_LINK_FIELDS
from sales_min_qty.interfaces import CancelFlag, ItemIdentifiedEvent

ItemIdentifiedHandler = Callable[[str, int, CancelFlag, ItemIdentifiedEvent], None]

LOG_TITLE_HANDLER_FAILED = "Item identification handler failed: {handler} on {doctype} {docname}"


def on_sales_document_before_validate(doc: Document, method: str | None = None) -> None:
	"""doc_events hook for sales documents. Never raises into the save."""
	handler_paths = frappe.get_hooks(ITEM_IDENTIFIED_HOOK) or []
	if not handler_paths:
		return

	for row_index, row in identified_rows(doc):
		cancel = CancelFlag()
		event = ItemIdentifiedEvent(doc=doc, method=method, row_name=row.name)
		for path in handler_paths:
			_run_handler(path, row.item_code, row_index, cancel, event)
			if cancel.cancel:
				break


def identified_rows(doc: Document, child_field: str = ITEMS_CHILD_FIELD) -> Iterator[tuple[int, Any]]:
	"""Yield (zero-based index, row) for rows whose item was just identified.

	New amendments and rows arriving mapped from another document (Quotation to
	Sales Order, Sales Order to Delivery Note, ...) carry their quantity over
	and are not identified. A mapped row whose item is changed later is.
	"""
	before = doc.get_doc_before_save()
	if not before and doc.get("amended_from"):
		return
	previous = _previous_item_codes(before, child_field)
	for index, row in enumerate(doc.get(child_field) or []):
		item_code = row.get("item_code")
		if not item_code:
			continue
		if row.name and previous.get(row.name) == item_code:
			continue
		if row.name not in previous and _is_mapped(row):
			continue
		yield index, row


def _is_mapped(row: Any) -> bool:
	return any(row.get(fieldname) for fieldname in SOURCE_LINK_FIELDS)


def _previous_item_codes(before: Document | None, child_field: str) -> dict[str, str]:
	if not before:
		return {}
	return {
		row.name: row.get("item_code")
		for row in before.get(child_field) or []
		if row.name
	}


def _run_handler(
	path: str,
	item_code: str,
	row_index: int,
	cancel: CancelFlag,
	event: ItemIdentifiedEvent,
) -> None:
	try:
		handler: ItemIdentifiedHandler = frappe.get_attr(path)
		handler(item_code, row_index, cancel, event)
	except Exception:
		frappe.log_error(
			message=frappe.get_traceback(),
			title=LOG_TITLE_HANDLER_FAILED.format(
				handler=path,
				doctype=event.doctype,
				docname=event.docname,
			),
		)
