"""Async REST client for the FarmHub API."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from app.client.forms import LoginForm, PasswordChangeForm, SignupForm

ENTITIES = ("farmers", "farms", "crops", "equipment", "sales", "fertilization")

# (filename, content, content_type), as httpx expects for multipart files.
ImageFile = tuple[str, bytes, str]


class ApiError(Exception):
	"""Non-2xx response from the API."""

	def __init__(self, status_code: int, message: str):
		super().__init__(f"{status_code}: {message}")
		self.status_code = status_code
		self.message = message


def _error_message(response: httpx.Response) -> str:
	try:
		body = response.json()
	except ValueError:
		return response.text or response.reason_phrase
	detail = body.get("detail", body) if isinstance(body, dict) else body
	if isinstance(detail, dict):
		return str(detail.get("message") or detail.get("error") or detail)
	return str(detail)


def _entity_path(entity: str) -> str:
	if entity not in ENTITIES:
		raise ValueError(f"Unknown entity: {entity}")
	return f"/{entity}"


class FarmHubClient:
	"""Thin wrapper over ``httpx.AsyncClient`` that keeps the bearer token.

	``login`` stores the returned token and every later call sends it.  Auth
	inputs are checked against the dashboard form rules before any request
	goes out; a failed check raises ``pydantic.ValidationError``.
	"""

	def __init__(
		self,
		base_url: str = "http://localhost:5000",
		*,
		token: str | None = None,
		transport: httpx.AsyncBaseTransport | None = None,
	):
		self._http = httpx.AsyncClient(base_url=base_url, transport=transport)
		self.token = token

	async def __aenter__(self) -> FarmHubClient:
		return self

	async def __aexit__(self, *_exc: object) -> None:
		await self.aclose()

	async def aclose(self) -> None:
		await self._http.aclose()

	async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
		headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
		response = await self._http.request(method, path, headers=headers, **kwargs)
		if response.is_error:
			raise ApiError(response.status_code, _error_message(response))
		if not response.content:
			return None
		return response.json()

	# ── Auth ────────────────────────────────────────────────────────────────
	async def signup(
		self,
		*,
		fullname: str,
		username: str,
		email: str,
		password: str,
		image: ImageFile,
		phone: str | None = None,
		address: str | None = None,
	) -> dict[str, Any]:
		form = SignupForm(
			fullname=fullname,
			username=username,
			email=email,
			password=password,
			phone=phone,
			address=address,
		)
		fields = form.model_dump()
		fields["phone"] = form.phone or ""
		fields["address"] = form.address or ""
		return await self._request("POST", "/api/auth/signup", data=fields, files={"imagePhoto": image})

	async def login(self, email: str, password: str) -> dict[str, Any]:
		form = LoginForm(email=email, password=password)
		body = await self._request("POST", "/api/auth/login", json=form.model_dump())
		self.token = body["token"]
		return body

	def logout(self) -> None:
		self.token = None

	async def me(self) -> dict[str, Any]:
		return await self._request("GET", "/api/auth/me")

	async def update_profile(
		self,
		user_id: str,
		fields: Mapping[str, str | None],
		image: ImageFile | None = None,
	) -> dict[str, Any]:
		data = {key: value for key, value in fields.items() if value is not None}
		files = {"imagePhoto": image} if image is not None else None
		return await self._request("PUT", f"/api/auth/update-profile/{user_id}", data=data, files=files)

	async def change_password(
		self,
		user_id: str,
		current_password: str,
		new_password: str,
		confirm_new_password: str,
	) -> dict[str, Any]:
		form = PasswordChangeForm(
			current_password=current_password,
			new_password=new_password,
			confirm_new_password=confirm_new_password,
		)
		return await self._request(
			"PUT",
			f"/api/auth/change-password/{user_id}",
			json={"currentPassword": form.current_password, "newPassword": form.new_password},
		)

	async def list_users(self) -> list[dict[str, Any]]:
		return await self._request("GET", "/api/users")

	# ── Entities ────────────────────────────────────────────────────────────
	async def list_rows(self, entity: str, *, page: int = 1, limit: int = 10, search: str = "") -> dict[str, Any]:
		params = {"page": page, "limit": limit, "search": search}
		return await self._request("GET", _entity_path(entity), params=params)

	async def get_row(self, entity: str, row_id: str) -> dict[str, Any]:
		return await self._request("GET", f"{_entity_path(entity)}/{row_id}")

	async def create_row(self, entity: str, values: Mapping[str, Any]) -> dict[str, Any]:
		return await self._request("POST", _entity_path(entity), json=dict(values))

	async def update_row(self, entity: str, row_id: str, values: Mapping[str, Any]) -> dict[str, Any]:
		return await self._request("PUT", f"{_entity_path(entity)}/{row_id}", json=dict(values))

	async def delete_row(self, entity: str, row_id: str) -> dict[str, Any] | None:
		return await self._request("DELETE", f"{_entity_path(entity)}/{row_id}")
