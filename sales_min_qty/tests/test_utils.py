# Copyright (c) 2026, Sales Min Qty and contributors
# For license information, please see license.txt

from __future__ import annotations

import unittest
from unittest.mock import MagicMock, patch

from sales_min_qty.utils import FrappeDiagnostics


_UTILS = "sales_min_qty.utils"


class TestFrappeDiagnostics(unittest.TestCase):
	@patch(f"{_UTILS}.frappe")
	def test_debug_logs_only_by_default(self, mock_frappe: MagicMock) -> None:
		FrappeDiagnostics().debug("Quantity changed")

		mock_frappe.logger.assert_called_once_with("sales_min_qty")
		mock_frappe.logger.return_value.debug.assert_called_once_with("Quantity changed")
		mock_frappe.msgprint.assert_not_called()

	@patch(f"{_UTILS}._", side_effect=lambda text: text)
	@patch(f"{_UTILS}.frappe")
	def test_debug_shows_message_when_enabled(self, mock_frappe: MagicMock, mock_translate: MagicMock) -> None:
		FrappeDiagnostics(show_messages=True).debug("Quantity changed")

		mock_frappe.msgprint.assert_called_once_with(
			"Quantity changed",
			title="Sales Min Qty Debug",
			indicator="blue",
		)
