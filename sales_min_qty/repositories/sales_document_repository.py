# Copyright (c) 2026, Sales Min Qty and contributors
# For license information, please see license.txt

"""Sales Document Repository -- line access for sales documents (Quotation, Sales Order, ...)."""

from __future__ import annotations

from typing import Any

from frappe.model.document import Document

from sales_min_qty.constants import ITEMS_CHILD_FIELD, LINE_QTY_FIELD


class DocumentLine:
	"""Editable quantity view over one child row."""

	def __init__(self, row: Any, qty_field: str = LINE_QTY_FIELD) -> None:
		self.row = row
		self.qty_field = qty_field

	@property
	def quantity(self) -> Any:
		return self.row.get(self.qty_field)

	@quantity.setter
	def quantity(self, value: float) -> None:
		setattr(self.row, self.qty_field, value)


class DocumentLines:
	"""Lines of a document child table, addressed by zero-based index."""

	def __init__(
		self,
		doc: Document,
		child_field: str = ITEMS_CHILD_FIELD,
		qty_field: str = LINE_QTY_FIELD,
	) -> None:
		self.doc = doc
		self.child_field = child_field
		self.qty_field = qty_field

	def get_editable(self, index: int) -> DocumentLine:
		"""Return the line at ``index``.

		Raises:
			IndexError: If ``index`` is negative or past the last row.
		"""
		rows = self.doc.get(self.child_field) or []
		if index < 0 or index >= len(rows):
			raise IndexError(f"{self.child_field} has no row at index {index}")
		return DocumentLine(rows[index], self.qty_field)
