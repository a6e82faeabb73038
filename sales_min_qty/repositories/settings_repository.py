# Copyright (c) 2026, Sales Min Qty and contributors
# For license information, please see license.txt

"""Settings Repository -- typed view over the Sales Min Qty Settings single."""

from __future__ import annotations

from dataclasses import dataclass

import frappe
from frappe.utils import cint, flt

from sales_min_qty.constants import DEFAULT_EPSILON, SETTINGS_DOCTYPE, OverridePolicy


@dataclass(frozen=True)
class MinQtySettings:
	enabled: bool
	override_policy: OverridePolicy | None
	epsilon: float = DEFAULT_EPSILON
	show_debug_messages: bool = False
	number_format: str | None = None

	@property
	def force_always(self) -> bool | None:
		"""``None`` while no override policy has been chosen."""
		if self.override_policy is None:
			return None
		return self.override_policy == OverridePolicy.ALWAYS


def _parse_policy(value: str | None) -> OverridePolicy | None:
	if not value:
		return None
	try:
		return OverridePolicy(value)
	except ValueError:
		return None


def get_settings() -> MinQtySettings:
	"""Load the current settings. Missing values fall back to defaults, except the policy."""
	settings = frappe.get_cached_doc(SETTINGS_DOCTYPE)
	return MinQtySettings(
		enabled=bool(cint(settings.get("enabled"))),
		override_policy=_parse_policy(settings.get("override_policy")),
		epsilon=flt(settings.get("epsilon")) or DEFAULT_EPSILON,
		show_debug_messages=bool(cint(settings.get("show_debug_messages"))),
		number_format=frappe.db.get_default("number_format") or None,
	)
