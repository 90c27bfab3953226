from __future__ import annotations

import asyncio
import json
from typing import Any

import httpx
import pytest
from pydantic import ValidationError

from app.client.api import ApiError, FarmHubClient
from app.client.forms import CropForm, EquipmentForm, FarmerForm, FarmForm, PasswordChangeForm, SaleForm
from app.client.table import TablePage

CROP_ROW = {
	"id": "10",
	"farm_id": "1",
	"name": "Maize",
	"variety": None,
	"planting_date": "2025-03-01T00:00:00.000Z",
	"expected_harvest_date": "2025-08-15",
	"status": "growing",
}


class FakeApi:
	"""Records requests and answers list calls with a fixed page."""

	def __init__(self, total_count: int = 1, items: list[dict[str, Any]] | None = None) -> None:
		self.requests: list[httpx.Request] = []
		self.total_count = total_count
		self.items = items if items is not None else [CROP_ROW]
		self.fail_with: tuple[int, Any] | None = None

	def lists(self) -> list[httpx.Request]:
		return [request for request in self.requests if request.method == "GET"]

	async def __call__(self, request: httpx.Request) -> httpx.Response:
		self.requests.append(request)
		if self.fail_with is not None and request.method != "GET":
			status, detail = self.fail_with
			return httpx.Response(status, json={"detail": detail})
		if request.method == "GET":
			params = request.url.params
			return httpx.Response(
				200,
				json={
					"items": self.items,
					"totalCount": self.total_count,
					"page": int(params["page"]),
					"limit": int(params["limit"]),
				},
			)
		if request.method == "DELETE":
			return httpx.Response(200, json={"message": "Crop deleted successfully."})
		return httpx.Response(201 if request.method == "POST" else 200, json=json.loads(request.content))


def _page(api: FakeApi, **kwargs: Any) -> TablePage:
	client = FarmHubClient("http://test", transport=httpx.MockTransport(api))
	return TablePage(client, "crops", **kwargs)


# ── Client ──────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_login_stores_token_for_later_requests() -> None:
	seen: list[httpx.Request] = []

	def handler(request: httpx.Request) -> httpx.Response:
		seen.append(request)
		if request.url.path == "/api/auth/login":
			return httpx.Response(200, json={"token": "abc.def.ghi", "userId": "5"})
		return httpx.Response(200, json={"id": "5", "fullname": "Amina"})

	async with FarmHubClient("http://test", transport=httpx.MockTransport(handler)) as client:
		body = await client.login("amina@example.com", "s3cret")
		await client.me()

	assert body["userId"] == "5"
	assert "authorization" not in seen[0].headers
	assert seen[1].headers["authorization"] == "Bearer abc.def.ghi"


@pytest.mark.asyncio
async def test_api_error_carries_server_message() -> None:
	def handler(request: httpx.Request) -> httpx.Response:
		if request.url.path == "/api/auth/me":
			return httpx.Response(401, json={"detail": {"error": "auth_required", "message": "No token or invalid format."}})
		return httpx.Response(409, json={"detail": "Username or Email already exists."})

	async with FarmHubClient("http://test", transport=httpx.MockTransport(handler)) as client:
		with pytest.raises(ApiError) as conflict:
			await client.create_row("farmers", {"full_name": "x"})
		with pytest.raises(ApiError) as unauthorized:
			await client.me()

	assert conflict.value.status_code == 409
	assert conflict.value.message == "Username or Email already exists."
	assert unauthorized.value.message == "No token or invalid format."


@pytest.mark.asyncio
async def test_invalid_auth_input_never_reaches_the_api() -> None:
	api = FakeApi()
	image = ("me.png", b"\x89PNG", "image/png")

	async with FarmHubClient("http://test", transport=httpx.MockTransport(api)) as client:
		with pytest.raises(ValidationError):
			await client.login("not-an-email", "s3cret")
		with pytest.raises(ValidationError):
			await client.login("amina@example.com", "")
		with pytest.raises(ValidationError):
			await client.signup(fullname="Am", username="amina", email="amina@example.com", password="s3cret", image=image)
		with pytest.raises(ValidationError):
			await client.signup(fullname="Amina", username="amina", email="amina", password="s3cret", image=image)
		with pytest.raises(ValidationError):
			await client.change_password("5", "old", "new1", "new2")

	assert api.requests == []
	assert client.token is None


@pytest.mark.asyncio
async def test_valid_auth_forms_are_sent() -> None:
	seen: list[httpx.Request] = []
	image = ("me.png", b"\x89PNG", "image/png")

	def handler(request: httpx.Request) -> httpx.Response:
		seen.append(request)
		return httpx.Response(200, json={"message": "ok"})

	async with FarmHubClient("http://test", transport=httpx.MockTransport(handler)) as client:
		await client.signup(fullname="Amina", username="amina", email="amina@example.com", password="s3cret", image=image)
		await client.change_password("5", "old", "new", "new")

	signup, change = seen
	assert signup.url.path == "/api/auth/signup"
	assert b'name="fullname"' in signup.content
	assert b'name="phone"' in signup.content
	assert change.method == "PUT"
	assert json.loads(change.content) == {"currentPassword": "old", "newPassword": "new"}


@pytest.mark.asyncio
async def test_unknown_entity_is_rejected() -> None:
	async with FarmHubClient("http://test", transport=httpx.MockTransport(FakeApi())) as client:
		with pytest.raises(ValueError):
			await client.list_rows("tractors")


# ── Table page ──────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_load_fills_items_and_total() -> None:
	api = FakeApi(total_count=25)
	page = _page(api)

	await page.load()

	assert page.items == [CROP_ROW]
	assert page.total_count == 25
	assert page.total_pages == 3
	assert page.loading is False
	assert dict(api.requests[0].url.params) == {"page": "1", "limit": "10", "search": ""}


@pytest.mark.asyncio
async def test_set_page_stays_within_bounds() -> None:
	api = FakeApi(total_count=25)
	page = _page(api)
	await page.load()

	await page.set_page(4)
	await page.set_page(0)
	await page.set_page(2)

	assert page.page == 2
	assert [request.url.params["page"] for request in api.lists()] == ["1", "2"]


@pytest.mark.asyncio
async def test_search_is_debounced_and_resets_page() -> None:
	api = FakeApi(total_count=40)
	page = _page(api, debounce_seconds=0.01)
	await page.load()
	await page.set_page(3)

	page.set_search("m")
	page.set_search("ma")
	page.set_search("mai")
	await page.settle()

	searches = api.lists()[2:]
	assert len(searches) == 1
	assert searches[0].url.params["search"] == "mai"
	assert searches[0].url.params["page"] == "1"
	assert page.page == 1


@pytest.mark.asyncio
async def test_stale_response_is_discarded() -> None:
	release = asyncio.Event()

	async def handler(request: httpx.Request) -> httpx.Response:
		search = request.url.params["search"]
		if search == "":
			await release.wait()
			items = [{**CROP_ROW, "name": "Stale"}]
		else:
			items = [{**CROP_ROW, "name": "Fresh"}]
		return httpx.Response(200, json={"items": items, "totalCount": 1, "page": 1, "limit": 10})

	client = FarmHubClient("http://test", transport=httpx.MockTransport(handler))
	page = TablePage(client, "crops")

	slow = asyncio.create_task(page.load())
	await asyncio.sleep(0)
	page.search = "fresh"
	await page.load()
	release.set()
	await slow

	assert [row["name"] for row in page.items] == ["Fresh"]
	assert page.loading is False


@pytest.mark.asyncio
async def test_open_edit_converts_dates_and_ids() -> None:
	page = _page(FakeApi())

	values = page.open_edit(CROP_ROW)

	assert values == {
		"farm_id": "1",
		"name": "Maize",
		"variety": "",
		"planting_date": "2025-03-01",
		"expected_harvest_date": "2025-08-15",
		"status": "growing",
	}
	assert page.editing is CROP_ROW


@pytest.mark.asyncio
async def test_open_add_yields_defaults() -> None:
	page = _page(FakeApi())
	values = page.open_add()
	assert values["status"] == "planted"
	assert values["farm_id"] == ""
	assert page.editing is None


@pytest.mark.asyncio
async def test_submit_invalid_form_records_error_without_request() -> None:
	api = FakeApi()
	page = _page(api)
	values = page.open_add()
	values.update(farm_id="1", name="Ma")

	assert await page.submit(values) is False

	assert api.requests == []
	assert page.notices[-1].level == "error"
	assert "name" in page.notices[-1].message


@pytest.mark.asyncio
async def test_submit_new_row_posts_and_refetches() -> None:
	api = FakeApi()
	page = _page(api)
	values = page.open_add()
	values.update(farm_id="1", name="Maize", planting_date="2025-03-01")

	assert await page.submit(values) is True

	post, refetch = api.requests
	assert post.method == "POST"
	assert post.url.path == "/crops"
	assert json.loads(post.content)["planting_date"] == "2025-03-01"
	assert refetch.method == "GET"
	assert page.notices[-1].message == "Record added successfully."


@pytest.mark.asyncio
async def test_submit_edit_puts_to_row() -> None:
	api = FakeApi()
	page = _page(api)
	values = page.open_edit(CROP_ROW)
	values["status"] = "harvested"

	assert await page.submit(values) is True

	assert api.requests[0].method == "PUT"
	assert api.requests[0].url.path == "/crops/10"
	assert page.editing is None
	assert page.notices[-1].message == "Record updated successfully."


@pytest.mark.asyncio
async def test_submit_failure_keeps_form_open() -> None:
	api = FakeApi()
	api.fail_with = (400, "Invalid Farm ID provided. No farm found with ID 99.")
	page = _page(api)
	values = page.open_edit(CROP_ROW)

	assert await page.submit(values) is False

	assert page.editing is CROP_ROW
	assert page.notices[-1].level == "error"
	assert "No farm found with ID 99" in page.notices[-1].message
	assert api.lists() == []


@pytest.mark.asyncio
async def test_delete_needs_confirmation() -> None:
	api = FakeApi()
	page = _page(api)

	page.request_delete("10")
	page.cancel_delete()
	assert await page.confirm_delete() is False
	assert api.requests == []

	page.request_delete("10")
	assert await page.confirm_delete() is True

	assert api.requests[0].method == "DELETE"
	assert api.requests[0].url.path == "/crops/10"
	assert api.requests[1].method == "GET"
	assert page.pending_delete is None


# ── Forms ───────────────────────────────────────────────────────────────────


def test_farmer_form_rules() -> None:
	valid = {"full_name": "Amina", "user_id": "3", "gender": "female", "address": "12 Market Road"}
	assert FarmerForm.model_validate(valid).email == ""

	for override in ({"phone": "123"}, {"email": "not-an-email"}, {"gender": "other"}, {"address": "abc"}, {"user_id": ""}):
		with pytest.raises(ValidationError):
			FarmerForm.model_validate({**valid, **override})


def test_farm_form_requires_positive_size() -> None:
	with pytest.raises(ValidationError):
		FarmForm.model_validate({"farmer_id": "1", "name": "Farm", "location": "Nakuru", "size_acres": 0})


def test_crop_form_rejects_bad_date() -> None:
	with pytest.raises(ValidationError):
		CropForm.model_validate({"farm_id": "1", "name": "Maize", "planting_date": "03/01/2025"})


def test_equipment_form_allows_blank_condition() -> None:
	form = EquipmentForm.model_validate({"farm_id": "1", "name": "Tractor", "condition": ""})
	assert form.to_payload()["condition"] == ""
	assert form.is_operational is True


def test_sale_form_blank_numbers_become_null() -> None:
	form = SaleForm.model_validate({"farm_id": "1", "product_type": "Grain", "quantity": "", "price_per_unit": "12.5"})
	assert form.quantity is None
	assert form.price_per_unit == 12.5
	with pytest.raises(ValidationError):
		SaleForm.model_validate({"farm_id": "1", "product_type": "Grain", "quantity": -1})


def test_password_change_form_requires_matching_confirmation() -> None:
	with pytest.raises(ValidationError):
		PasswordChangeForm(current_password="old", new_password="new1", confirm_new_password="new2")
	assert PasswordChangeForm(current_password="old", new_password="new", confirm_new_password="new")
