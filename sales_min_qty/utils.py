# Copyright (c) 2026, Sales Min Qty and contributors
# For license information, please see license.txt

from __future__ import annotations

import frappe
from frappe import _

from sales_min_qty.constants import APP_NAME


def get_logger():
	return frappe.logger(APP_NAME)


class FrappeDiagnostics:
	"""Diagnostics sink writing to the app log.

	With ``show_messages`` set, each message is also shown to the user via
	``frappe.msgprint``.
	"""

	def __init__(self, show_messages: bool = False) -> None:
		self.show_messages = show_messages

	def debug(self, message: str) -> None:
		get_logger().debug(message)
		if self.show_messages:
			frappe.msgprint(message, title=_("Sales Min Qty Debug"), indicator="blue")
