# Copyright (c) 2026, Sales Min Qty and contributors
# For license information, please see license.txt

"""Min Qty Service -- minimum sale quantity rule for identified sales lines.

When an item is identified on a sales document line, the item's minimum
sale quantity is looked up and written into the line's quantity. A failure
at any host boundary (query, line access, assignment) ends the invocation
quietly. Nothing is raised back into the host.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any

import frappe
from frappe.utils import get_number_format_info

from sales_min_qty.constants import DEFAULT_EPSILON, DEFAULT_LOCALE_NUMBER_FORMAT
from sales_min_qty.interfaces import (
	CancelFlag,
	Diagnostics,
	ItemIdentifiedEvent,
	Line,
	LineCollection,
	NullDiagnostics,
	QueryCapability,
)
from sales_min_qty.repositories.item_repository import (
	ITEM_MIN_QTY_SOURCE,
	FrappeQuery,
	MinQtySource,
	build_min_qty_query,
)
from sales_min_qty.repositories.sales_document_repository import DocumentLines
from sales_min_qty.repositories.settings_repository import get_settings
from sales_min_qty.utils import FrappeDiagnostics

_FIXED_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_GROUPED_NUMBER_RE = re.compile(r"[+-]?\d{1,3}(?:,\d{3})+(?:\.\d+)?")
_INDIAN_NUMBER_FORMAT = "#,##,###.##"


def apply_min_qty(
	item_code: str,
	row_index: int,
	cancel: CancelFlag,
	*,
	query: QueryCapability,
	lines: LineCollection,
	force_always: bool,
	epsilon: float = DEFAULT_EPSILON,
	diagnostics: Diagnostics | None = None,
	source: MinQtySource = ITEM_MIN_QTY_SOURCE,
	number_format: str | None = None,
) -> float | None:
	"""Overwrite the quantity of line ``row_index`` with the item's minimum sale quantity.

	With ``force_always`` the quantity is always overwritten. Otherwise only
	quantities within ``epsilon`` of 0 (or below) or of 1 are replaced.
	``cancel`` is left untouched.

	Returns:
		The quantity written, or None when the line was left alone.
	"""
	diagnostics = diagnostics or NullDiagnostics()

	if not item_code or not item_code.strip():
		return None
	if row_index < 0:
		return None

	min_qty = resolve_min_qty(
		item_code,
		query,
		source=source,
		number_format=number_format,
		diagnostics=diagnostics,
	)
	if min_qty is None or min_qty <= 0.0:
		return None

	line = get_line(lines, row_index, diagnostics)
	if line is None:
		return None

	current = read_quantity(line)
	if not should_override(current, force_always=force_always, epsilon=epsilon):
		diagnostics.debug(f"Kept existing quantity {current} for {item_code}")
		return None

	try:
		line.quantity = min_qty
	except Exception as exc:
		diagnostics.debug(f"Failed to set quantity for {item_code}: {exc}")
		return None

	diagnostics.debug(f"Quantity changed for {item_code}: {current} -> {min_qty}")
	return min_qty


def resolve_min_qty(
	item_code: str,
	query: QueryCapability,
	*,
	source: MinQtySource = ITEM_MIN_QTY_SOURCE,
	number_format: str | None = None,
	diagnostics: Diagnostics | None = None,
) -> float | None:
	"""Look up the minimum sale quantity of ``item_code``.

	Returns None when the query fails, finds no row, or the stored value is
	null or not a number. The sign is not checked here.
	"""
	diagnostics = diagnostics or NullDiagnostics()
	sql = build_min_qty_query(item_code, source)

	try:
		result = query.query(sql)
	except Exception as exc:
		diagnostics.debug(f"Min qty query failed for {item_code}: {exc}")
		return None

	if result is None:
		return None

	try:
		if result.is_empty():
			return None
		raw = result.value(source.alias)
	except Exception as exc:
		diagnostics.debug(f"Could not read min qty for {item_code}: {exc}")
		return None

	value = parse_quantity(raw, number_format=number_format)
	if value is None and raw is not None:
		diagnostics.debug(f"Min qty for {item_code} is not a number: {raw!r}")
	return value


def parse_quantity(raw: Any, number_format: str | None = None) -> float | None:
	"""Convert a stored threshold to float.

	Strings are read with a decimal point first (comma thousands groups
	allowed), then with the separators of ``number_format`` (a Frappe number
	format such as ``#.###,##``). Text that fits neither, such as separators
	in the wrong order, is unparseable.
	Non-finite results count as unparseable.
	"""
	if raw is None or isinstance(raw, bool):
		return None

	if isinstance(raw, str):
		value = _parse_fixed(raw)
		if value is None:
			value = _parse_grouped(raw)
		if value is None:
			value = _parse_localized(raw, number_format or DEFAULT_LOCALE_NUMBER_FORMAT)
	elif isinstance(raw, (int, float, Decimal)):
		try:
			value = float(raw)
		except (ValueError, OverflowError):
			return None
	else:
		return None

	if value is None or not math.isfinite(value):
		return None
	return value


def _parse_fixed(text: str) -> float | None:
	match = _FIXED_NUMBER_RE.fullmatch(text.strip())
	if not match:
		return None
	return float(match.group())


def _parse_grouped(text: str) -> float | None:
	candidate = text.strip()
	if not _GROUPED_NUMBER_RE.fullmatch(candidate):
		return None
	return float(candidate.replace(",", ""))


def _parse_localized(text: str, number_format: str) -> float | None:
	decimal_str, comma_str, _precision = get_number_format_info(number_format)
	candidate = text.strip()
	if not _localized_number_re(number_format, decimal_str, comma_str).fullmatch(candidate):
		return None
	if comma_str and comma_str != decimal_str:
		candidate = candidate.replace(comma_str, "")
	if decimal_str and decimal_str != ".":
		candidate = candidate.replace(decimal_str, ".")
	return float(candidate)


def _localized_number_re(number_format: str, decimal_str: str, comma_str: str) -> re.Pattern:
	"""Digits grouped as ``number_format`` groups them, with an optional fraction."""
	integer = r"\d+"
	if comma_str and comma_str != decimal_str:
		group = re.escape(comma_str)
		if number_format == _INDIAN_NUMBER_FORMAT:
			grouped = rf"\d{{1,2}}(?:{group}\d{{2}})*{group}\d{{3}}"
		else:
			grouped = rf"\d{{1,3}}(?:{group}\d{{3}})+"
		integer = rf"(?:{grouped}|\d+)"
	fraction = rf"(?:{re.escape(decimal_str)}\d+)?" if decimal_str else ""
	return re.compile(rf"[+-]?{integer}{fraction}")


def get_line(
	lines: LineCollection,
	index: int,
	diagnostics: Diagnostics | None = None,
) -> Line | None:
	"""Fetch an editable line, mapping any failure to None."""
	try:
		return lines.get_editable(index)
	except Exception as exc:
		(diagnostics or NullDiagnostics()).debug(f"Could not get line {index}: {exc}")
		return None


def read_quantity(line: Line) -> float:
	try:
		return float(line.quantity)
	except Exception:
		return 0.0


def should_override(current: float, *, force_always: bool, epsilon: float = DEFAULT_EPSILON) -> bool:
	return force_always or current <= 0.0 + epsilon or abs(current - 1.0) < epsilon


def min_qty_handler(
	item_code: str,
	row_index: int,
	cancel: CancelFlag,
	event: ItemIdentifiedEvent,
) -> None:
	"""Item identification hook: applies the rule with the configured settings."""
	settings = get_settings()
	if not settings.enabled:
		return

	diagnostics = FrappeDiagnostics(show_messages=settings.show_debug_messages)
	if settings.force_always is None:
		diagnostics.debug("Sales Min Qty Settings has no override policy; skipping")
		return

	apply_min_qty(
		item_code,
		row_index,
		cancel,
		query=FrappeQuery(),
		lines=DocumentLines(event.doc),
		force_always=settings.force_always,
		epsilon=settings.epsilon,
		diagnostics=diagnostics,
		number_format=settings.number_format,
	)


@frappe.whitelist()
def get_min_sale_qty(item_code: str) -> float | None:
	"""Return the positive minimum sale quantity of ``item_code``, or None.

	Always None while the app is disabled in Sales Min Qty Settings.
	"""
	frappe.has_permission("Item", "read", throw=True)

	if not item_code or not item_code.strip():
		return None

	settings = get_settings()
	if not settings.enabled:
		return None

	value = resolve_min_qty(
		item_code,
		FrappeQuery(),
		number_format=settings.number_format,
		diagnostics=FrappeDiagnostics(show_messages=settings.show_debug_messages),
	)
	if value is None or value <= 0.0:
		return None
	return value
