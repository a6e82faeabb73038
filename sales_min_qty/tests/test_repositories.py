# Copyright (c) 2026, Sales Min Qty and contributors
# For license information, please see license.txt

from __future__ import annotations

import unittest
from unittest.mock import MagicMock, patch

from frappe import _dict

from sales_min_qty.constants import OverridePolicy
from sales_min_qty.repositories import item_repository, settings_repository
from sales_min_qty.repositories.item_repository import MinQtySource, SqlResultSet
from sales_min_qty.repositories.sales_document_repository import DocumentLine, DocumentLines


_ITEM_REPO = "sales_min_qty.repositories.item_repository"
_SETTINGS_REPO = "sales_min_qty.repositories.settings_repository"


class TestBuildMinQtyQuery(unittest.TestCase):
	def test_item_table_query(self) -> None:
		self.assertEqual(
			item_repository.build_min_qty_query("A100"),
			"SELECT custom_min_sale_qty AS min_qty FROM `tabItem` WHERE name = 'A100'",
		)

	def test_single_quotes_doubled(self) -> None:
		sql = item_repository.build_min_qty_query("12' PIPE'")

		self.assertTrue(sql.endswith("WHERE name = '12'' PIPE'''"))

	def test_legacy_store_query_is_verbatim(self) -> None:
		"""Threshold column of the legacy article table reproduces its exact query text."""
		source = MinQtySource(
			table="Artigo",
			key_column="Artigo",
			field="CDU_MinMetrosSugestaoVenda",
			alias="MinMetros",
		)

		self.assertEqual(
			item_repository.build_min_qty_query("A'1", source),
			"SELECT CDU_MinMetrosSugestaoVenda AS MinMetros FROM Artigo WHERE Artigo = 'A''1'",
		)


class TestSqlResultSet(unittest.TestCase):
	def test_empty(self) -> None:
		self.assertTrue(SqlResultSet([]).is_empty())
		self.assertTrue(SqlResultSet(None).is_empty())

	def test_value_reads_first_row(self) -> None:
		result = SqlResultSet([{"min_qty": 2.5}, {"min_qty": 9.0}])

		self.assertFalse(result.is_empty())
		self.assertEqual(result.value("min_qty"), 2.5)
		self.assertIsNone(result.value("other"))

	def test_value_on_empty_raises(self) -> None:
		with self.assertRaises(LookupError):
			SqlResultSet([]).value("min_qty")

	@patch(f"{_ITEM_REPO}.frappe")
	def test_frappe_query_uses_dict_rows(self, mock_frappe: MagicMock) -> None:
		mock_frappe.db.sql.return_value = [{"min_qty": 4.0}]

		result = item_repository.FrappeQuery().query("SELECT 1")

		mock_frappe.db.sql.assert_called_once_with("SELECT 1", as_dict=True)
		self.assertEqual(result.value("min_qty"), 4.0)


class TestDocumentLines(unittest.TestCase):
	def _doc(self, rows: list[_dict]) -> MagicMock:
		doc = MagicMock()
		doc.get.side_effect = lambda field: rows if field == "items" else None
		return doc

	def test_get_editable_reads_and_writes_qty(self) -> None:
		row = _dict(item_code="A100", qty=1.0)
		lines = DocumentLines(self._doc([_dict(item_code="Z", qty=3.0), row]))

		line = lines.get_editable(1)
		self.assertEqual(line.quantity, 1.0)
		line.quantity = 2.5

		self.assertEqual(row.qty, 2.5)

	def test_out_of_range_raises(self) -> None:
		lines = DocumentLines(self._doc([_dict(item_code="A100", qty=1.0)]))

		with self.assertRaises(IndexError):
			lines.get_editable(1)
		with self.assertRaises(IndexError):
			lines.get_editable(-1)

	def test_missing_child_table_raises(self) -> None:
		with self.assertRaises(IndexError):
			DocumentLines(self._doc([])).get_editable(0)

	def test_custom_qty_field(self) -> None:
		row = _dict(stock_qty=None)

		DocumentLine(row, qty_field="stock_qty").quantity = 6.0

		self.assertEqual(row.stock_qty, 6.0)


class TestGetSettings(unittest.TestCase):
	@patch(f"{_SETTINGS_REPO}.frappe")
	def test_reads_single(self, mock_frappe: MagicMock) -> None:
		mock_frappe.get_cached_doc.return_value = _dict(
			enabled=1,
			override_policy="Always",
			epsilon=0.001,
			show_debug_messages=1,
		)
		mock_frappe.db.get_default.return_value = "#.###,##"

		settings = settings_repository.get_settings()

		mock_frappe.get_cached_doc.assert_called_once_with("Sales Min Qty Settings")
		self.assertTrue(settings.enabled)
		self.assertEqual(settings.override_policy, OverridePolicy.ALWAYS)
		self.assertTrue(settings.force_always)
		self.assertEqual(settings.epsilon, 0.001)
		self.assertTrue(settings.show_debug_messages)
		self.assertEqual(settings.number_format, "#.###,##")

	@patch(f"{_SETTINGS_REPO}.frappe")
	def test_defaults_when_unset(self, mock_frappe: MagicMock) -> None:
		mock_frappe.get_cached_doc.return_value = _dict(enabled=0, override_policy="", epsilon=0)
		mock_frappe.db.get_default.return_value = None

		settings = settings_repository.get_settings()

		self.assertFalse(settings.enabled)
		self.assertIsNone(settings.override_policy)
		self.assertIsNone(settings.force_always)
		self.assertEqual(settings.epsilon, 1e-6)
		self.assertIsNone(settings.number_format)

	@patch(f"{_SETTINGS_REPO}.frappe")
	def test_only_empty_or_one_policy(self, mock_frappe: MagicMock) -> None:
		mock_frappe.get_cached_doc.return_value = _dict(enabled=1, override_policy="Only Empty or One")

		settings = settings_repository.get_settings()

		self.assertIs(settings.force_always, False)

	@patch(f"{_SETTINGS_REPO}.frappe")
	def test_unknown_policy_treated_as_unset(self, mock_frappe: MagicMock) -> None:
		mock_frappe.get_cached_doc.return_value = _dict(enabled=1, override_policy="Sometimes")

		self.assertIsNone(settings_repository.get_settings().override_policy)
