"""Paginated, searchable table controller for one entity.

Holds the state a dashboard table page needs: the current slice of rows,
the total count, the page number, the debounced search term, the add/edit
form target and the pending delete confirmation.
"""

from __future__ import annotations

import asyncio
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

import structlog
from pydantic import ValidationError

from app.client.api import ApiError, FarmHubClient
from app.client.forms import ENTITY_FORMS

logger = structlog.get_logger("farmhub.client")

SEARCH_DEBOUNCE_SECONDS = 0.5


@dataclass(frozen=True)
class Notice:
	level: Literal["success", "error"]
	message: str


def _first_error(exc: ValidationError) -> str:
	error = exc.errors()[0]
	field = ".".join(str(part) for part in error.get("loc", ()))
	return f"{field}: {error['msg']}" if field else str(error["msg"])


class TablePage:
	def __init__(
		self,
		client: FarmHubClient,
		entity: str,
		*,
		limit: int = 10,
		debounce_seconds: float = SEARCH_DEBOUNCE_SECONDS,
	):
		self.client = client
		self.entity = entity
		self.form_class = ENTITY_FORMS[entity]
		self.limit = limit
		self.debounce_seconds = debounce_seconds

		self.items: list[dict[str, Any]] = []
		self.total_count = 0
		self.page = 1
		self.search = ""
		self.loading = False
		self.notices: list[Notice] = []
		self.editing: dict[str, Any] | None = None
		self.pending_delete: str | None = None

		self._issued = 0
		self._pending_search: asyncio.Task[None] | None = None
		self._search_tasks: set[asyncio.Task[None]] = set()

	@property
	def total_pages(self) -> int:
		return max(1, math.ceil(self.total_count / self.limit))

	def _notify(self, level: Literal["success", "error"], message: str) -> None:
		self.notices.append(Notice(level, message))

	# ── Fetching ────────────────────────────────────────────────────────────
	async def load(self) -> None:
		"""Fetch the current page; responses to superseded requests are dropped."""
		self._issued += 1
		ticket = self._issued
		self.loading = True
		try:
			body = await self.client.list_rows(self.entity, page=self.page, limit=self.limit, search=self.search)
		except ApiError as exc:
			if ticket == self._issued:
				self.loading = False
				self._notify("error", f"Failed to fetch {self.entity}: {exc.message}")
			logger.warning("table_fetch_failed", entity=self.entity, status_code=exc.status_code)
			return
		if ticket != self._issued:
			logger.debug("table_stale_response", entity=self.entity, ticket=ticket, latest=self._issued)
			return
		self.loading = False
		self.items = body["items"]
		self.total_count = body["totalCount"]

	async def set_page(self, page: int) -> None:
		if page < 1 or page > self.total_pages or page == self.page:
			return
		self.page = page
		await self.load()

	def set_search(self, term: str) -> None:
		"""Schedule a search; only the last term typed within the debounce window runs."""
		if self._pending_search is not None:
			self._pending_search.cancel()
		task = asyncio.get_running_loop().create_task(self._debounced_search(term))
		self._pending_search = task
		self._search_tasks.add(task)
		task.add_done_callback(self._search_tasks.discard)

	async def _debounced_search(self, term: str) -> None:
		await asyncio.sleep(self.debounce_seconds)
		if self._pending_search is asyncio.current_task():
			self._pending_search = None
		self.search = term
		self.page = 1
		await self.load()

	async def settle(self) -> None:
		"""Wait for scheduled searches and the fetches they started."""
		while self._search_tasks:
			await asyncio.gather(*list(self._search_tasks), return_exceptions=True)

	# ── Add / edit ──────────────────────────────────────────────────────────
	def open_add(self) -> dict[str, Any]:
		self.editing = None
		return self.form_class.defaults()

	def open_edit(self, row: dict[str, Any]) -> dict[str, Any]:
		self.editing = row
		return self.form_class.values_from_row(row)

	def close_form(self) -> None:
		self.editing = None

	async def submit(self, values: Mapping[str, Any]) -> bool:
		try:
			form = self.form_class.model_validate(dict(values))
		except ValidationError as exc:
			self._notify("error", _first_error(exc))
			return False

		payload = form.to_payload()
		action = "update" if self.editing is not None else "add"
		try:
			if self.editing is not None:
				await self.client.update_row(self.entity, str(self.editing["id"]), payload)
			else:
				await self.client.create_row(self.entity, payload)
		except ApiError as exc:
			self._notify("error", f"Failed to {action} record: {exc.message}")
			logger.warning("table_submit_failed", entity=self.entity, action=action, status_code=exc.status_code)
			return False

		self._notify("success", "Record updated successfully." if action == "update" else "Record added successfully.")
		self.editing = None
		await self.load()
		return True

	# ── Delete ──────────────────────────────────────────────────────────────
	def request_delete(self, row_id: str) -> None:
		self.pending_delete = str(row_id)

	def cancel_delete(self) -> None:
		self.pending_delete = None

	async def confirm_delete(self) -> bool:
		if self.pending_delete is None:
			return False
		row_id, self.pending_delete = self.pending_delete, None
		try:
			await self.client.delete_row(self.entity, row_id)
		except ApiError as exc:
			self._notify("error", f"Failed to delete record: {exc.message}")
			logger.warning("table_delete_failed", entity=self.entity, status_code=exc.status_code)
			return False
		self._notify("success", "Record deleted successfully.")
		await self.load()
		return True
