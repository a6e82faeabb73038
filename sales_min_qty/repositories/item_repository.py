# Copyright (c) 2026, Sales Min Qty and contributors
# For license information, please see license.txt

"""
Item Repository -- minimum sale quantity lookup against the Item table.

The query text concatenates the item code into a single-quoted literal
(quotes doubled), so the same statement can be replayed verbatim against
any store that carries the threshold column.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import frappe

from sales_min_qty.constants import MIN_SALE_QTY_ALIAS, MIN_SALE_QTY_FIELD

_MIN_QTY_SQL = "SELECT {field} AS {alias} FROM {table} WHERE {key_column} = '{item_code}'"


@dataclass(frozen=True)
class MinQtySource:
	"""Where the per-item threshold is stored."""

	table: str = "`tabItem`"
	key_column: str = "name"
	field: str = MIN_SALE_QTY_FIELD
	alias: str = MIN_SALE_QTY_ALIAS


ITEM_MIN_QTY_SOURCE = MinQtySource()


def build_min_qty_query(item_code: str, source: MinQtySource = ITEM_MIN_QTY_SOURCE) -> str:
	"""Build the threshold query for ``item_code``."""
	return _MIN_QTY_SQL.format(
		field=source.field,
		alias=source.alias,
		table=source.table,
		key_column=source.key_column,
		item_code=item_code.replace("'", "''"),
	)


class SqlResultSet:
	"""Result set over the first row of a ``frappe.db.sql(..., as_dict=True)`` result."""

	def __init__(self, rows: list[dict[str, Any]] | None) -> None:
		self._rows = list(rows or [])

	def is_empty(self) -> bool:
		return not self._rows

	def value(self, column: str) -> Any:
		if not self._rows:
			raise LookupError(f"No row to read column {column!r} from")
		return self._rows[0].get(column)


class FrappeQuery:
	"""Runs raw SQL on the current site database."""

	def query(self, sql: str) -> SqlResultSet:
		return SqlResultSet(frappe.db.sql(sql, as_dict=True))
