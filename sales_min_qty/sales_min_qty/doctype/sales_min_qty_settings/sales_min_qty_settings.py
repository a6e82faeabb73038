# Copyright (c) 2026, Sales Min Qty and contributors
# For license information, please see license.txt

from __future__ import annotations

import frappe
from frappe.model.document import Document
from frappe.utils import flt

from sales_min_qty.constants import MAX_EPSILON


class SalesMinQtySettings(Document):
	def validate(self) -> None:
		if flt(self.epsilon) <= 0:
			frappe.throw("Epsilon must be greater than 0")
		if flt(self.epsilon) >= MAX_EPSILON:
			frappe.throw(f"Epsilon must be less than {MAX_EPSILON}")
