# Copyright (c) 2026, Sales Min Qty and contributors
# For license information, please see license.txt

"""Capability contracts consumed from the host document runtime.

The minimum-quantity rule depends only on these protocols. Frappe-backed
implementations live in ``sales_min_qty.repositories``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ResultSet(Protocol):
	"""Rows returned by a host query, read one column at a time."""

	def is_empty(self) -> bool:
		...

	def value(self, column: str) -> Any:
		"""Return the value of ``column`` on the current row (``None`` when null)."""
		...


@runtime_checkable
class QueryCapability(Protocol):
	"""Runs a raw query string against the host data store. May raise."""

	def query(self, sql: str) -> ResultSet | None:
		...


@runtime_checkable
class Line(Protocol):
	"""An editable sales document line."""

	quantity: Any


@runtime_checkable
class LineCollection(Protocol):
	"""Ordered lines of a sales document."""

	def get_editable(self, index: int) -> Line | None:
		"""Return the line at zero-based ``index``. May raise or return ``None``."""
		...


@runtime_checkable
class Diagnostics(Protocol):
	"""Observational diagnostic sink. Never used for control flow."""

	def debug(self, message: str) -> None:
		...


class NullDiagnostics:
	def debug(self, message: str) -> None:
		pass


@dataclass
class CancelFlag:
	"""Mutable cancellation flag handed to identification handlers.

	A handler sets ``cancel`` to stop later handlers for the same line.
	"""

	cancel: bool = False


@dataclass
class ItemIdentifiedEvent:
	"""Metadata about the document and row where an item was identified."""

	doc: Any
	method: str | None = None
	row_name: str | None = None

	@property
	def doctype(self) -> str | None:
		return getattr(self.doc, "doctype", None)

	@property
	def docname(self) -> str | None:
		return getattr(self.doc, "name", None)
