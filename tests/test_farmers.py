from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest
from httpx import AsyncClient

from app.models.enums import GenderEnum
from app.schemas.common import MAX_IDENTIFIER
from app.schemas.farm import FarmerCreate, FarmerUpdate
from app.services.errors import ConflictError, MissingReferenceError
from app.services.farm_service import FarmerService


def _farmer_obj(**overrides: Any) -> SimpleNamespace:
	values = {
		"id": 1,
		"user_id": 3,
		"full_name": "Amina Yusuf",
		"gender": GenderEnum.female,
		"phone": "0712345678",
		"email": "amina@example.com",
		"address": "12 Market Road",
	}
	values.update(overrides)
	return SimpleNamespace(**values)


@pytest.mark.asyncio
async def test_create_farmer_returns_201_with_string_ids(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
	captured: dict[str, Any] = {}

	async def fake_create(self: FarmerService, payload: FarmerCreate) -> object:
		captured["payload"] = payload
		return _farmer_obj()

	monkeypatch.setattr(FarmerService, "create", fake_create)

	response = await client.post(
		"/farmers",
		json={
			"user_id": "3",
			"full_name": "Amina Yusuf",
			"gender": "female",
			"phone": "0712345678",
			"email": "amina@example.com",
			"address": "12 Market Road",
		},
	)

	assert response.status_code == 201
	body = response.json()
	assert body["id"] == "1"
	assert body["user_id"] == "3"
	assert body["gender"] == "female"
	assert captured["payload"].user_id == 3


@pytest.mark.asyncio
async def test_create_farmer_missing_name_is_400_without_service_call(
	client: AsyncClient, monkeypatch: pytest.MonkeyPatch
) -> None:
	called = False

	async def fake_create(self: FarmerService, payload: FarmerCreate) -> object:
		nonlocal called
		called = True
		return _farmer_obj()

	monkeypatch.setattr(FarmerService, "create", fake_create)

	response = await client.post("/farmers", json={"user_id": "3", "gender": "male"})

	assert response.status_code == 400
	assert "full_name is required" in response.json()["detail"]
	assert called is False


@pytest.mark.asyncio
async def test_create_farmer_blank_optional_fields_become_null(
	client: AsyncClient, monkeypatch: pytest.MonkeyPatch
) -> None:
	captured: dict[str, Any] = {}

	async def fake_create(self: FarmerService, payload: FarmerCreate) -> object:
		captured["payload"] = payload
		return _farmer_obj(phone=None, email=None)

	monkeypatch.setattr(FarmerService, "create", fake_create)

	response = await client.post(
		"/farmers",
		json={"user_id": 3, "full_name": "Amina Yusuf", "gender": "female", "phone": "", "email": " "},
	)

	assert response.status_code == 201
	assert captured["payload"].phone is None
	assert captured["payload"].email is None
	assert response.json()["email"] is None


@pytest.mark.asyncio
async def test_create_farmer_duplicate_email_is_409(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
	async def fake_create(self: FarmerService, payload: FarmerCreate) -> object:
		raise ConflictError("This email is already registered to another farmer.")

	monkeypatch.setattr(FarmerService, "create", fake_create)

	response = await client.post(
		"/farmers",
		json={"user_id": "3", "full_name": "Amina Yusuf", "gender": "female", "email": "amina@example.com"},
	)

	assert response.status_code == 409
	assert response.json()["detail"] == "This email is already registered to another farmer."


@pytest.mark.asyncio
async def test_create_farmer_unknown_user_is_400(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
	async def fake_create(self: FarmerService, payload: FarmerCreate) -> object:
		raise MissingReferenceError("Invalid User ID provided. No user found with ID 99.")

	monkeypatch.setattr(FarmerService, "create", fake_create)

	response = await client.post("/farmers", json={"user_id": "99", "full_name": "Amina Yusuf", "gender": "female"})

	assert response.status_code == 400
	assert "No user found with ID 99" in response.json()["detail"]


@pytest.mark.asyncio
async def test_list_farmers_passes_paging_and_search(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
	captured: dict[str, Any] = {}

	async def fake_list(self: FarmerService, *, page: int, limit: int, search: str) -> tuple[list[object], int]:
		captured.update(page=page, limit=limit, search=search)
		return [_farmer_obj(id=11), _farmer_obj(id=12)], 12

	monkeypatch.setattr(FarmerService, "list_page", fake_list)

	response = await client.get("/farmers", params={"page": 2, "limit": 10, "search": "amina"})

	assert response.status_code == 200
	body = response.json()
	assert captured == {"page": 2, "limit": 10, "search": "amina"}
	assert body["totalCount"] == 12
	assert body["page"] == 2
	assert body["limit"] == 10
	assert [item["id"] for item in body["items"]] == ["11", "12"]


@pytest.mark.asyncio
async def test_list_farmers_defaults(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
	captured: dict[str, Any] = {}

	async def fake_list(self: FarmerService, *, page: int, limit: int, search: str) -> tuple[list[object], int]:
		captured.update(page=page, limit=limit, search=search)
		return [], 0

	monkeypatch.setattr(FarmerService, "list_page", fake_list)

	response = await client.get("/farmers")

	assert response.status_code == 200
	assert captured == {"page": 1, "limit": 10, "search": ""}
	assert response.json() == {"items": [], "totalCount": 0, "page": 1, "limit": 10}


@pytest.mark.asyncio
@pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"limit": 101}, {"page": "two"}, {"page": 10**18, "limit": 100}])
async def test_list_farmers_rejects_out_of_range_paging(client: AsyncClient, params: dict[str, Any]) -> None:
	response = await client.get("/farmers", params=params)
	assert response.status_code == 400


@pytest.mark.asyncio
async def test_list_farmers_accepts_last_addressable_page(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
	captured: dict[str, Any] = {}

	async def fake_list(self: FarmerService, *, page: int, limit: int, search: str) -> tuple[list[object], int]:
		captured.update(page=page, limit=limit)
		return [], 0

	monkeypatch.setattr(FarmerService, "list_page", fake_list)

	response = await client.get("/farmers", params={"page": MAX_IDENTIFIER // 100, "limit": 100})

	assert response.status_code == 200
	assert (captured["page"] - 1) * captured["limit"] <= MAX_IDENTIFIER


@pytest.mark.asyncio
async def test_get_farmer_not_found(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
	async def fake_get(self: FarmerService, farmer_id: int) -> object:
		raise LookupError("Farmer not found.")

	monkeypatch.setattr(FarmerService, "get", fake_get)

	response = await client.get("/farmers/42")

	assert response.status_code == 404
	assert response.json()["detail"] == "Farmer not found."


@pytest.mark.asyncio
@pytest.mark.parametrize("bad_id", ["abc", "0", "-1", "9223372036854775808"])
async def test_get_farmer_rejects_malformed_id(client: AsyncClient, bad_id: str) -> None:
	response = await client.get(f"/farmers/{bad_id}")
	assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_farmer_applies_only_provided_fields(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
	captured: dict[str, Any] = {}

	async def fake_update(self: FarmerService, farmer_id: int, payload: FarmerUpdate) -> object:
		captured["id"] = farmer_id
		captured["changes"] = payload.model_dump(exclude_unset=True)
		return _farmer_obj(id=farmer_id, phone="0799999999")

	monkeypatch.setattr(FarmerService, "update", fake_update)

	response = await client.put("/farmers/5", json={"phone": "0799999999"})

	assert response.status_code == 200
	assert captured == {"id": 5, "changes": {"phone": "0799999999"}}
	assert response.json()["phone"] == "0799999999"


@pytest.mark.asyncio
async def test_update_farmer_null_mandatory_field_is_400(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
	async def fake_update(self: FarmerService, farmer_id: int, payload: FarmerUpdate) -> object:
		raise ValueError("full_name cannot be null.")

	monkeypatch.setattr(FarmerService, "update", fake_update)

	response = await client.put("/farmers/5", json={"full_name": None})

	assert response.status_code == 400
	assert response.json()["detail"] == "full_name cannot be null."


@pytest.mark.asyncio
async def test_delete_farmer(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
	deleted: list[int] = []

	async def fake_delete(self: FarmerService, farmer_id: int) -> None:
		deleted.append(farmer_id)

	monkeypatch.setattr(FarmerService, "delete", fake_delete)

	response = await client.delete("/farmers/8")

	assert response.status_code == 200
	assert response.json() == {"message": "Farmer deleted successfully."}
	assert deleted == [8]


@pytest.mark.asyncio
async def test_delete_farmer_with_farms_is_409(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
	async def fake_delete(self: FarmerService, farmer_id: int) -> None:
		raise ConflictError("Farmer is still referenced by other records and cannot be deleted.")

	monkeypatch.setattr(FarmerService, "delete", fake_delete)

	response = await client.delete("/farmers/8")

	assert response.status_code == 409


@pytest.mark.asyncio
async def test_unexpected_failure_returns_route_message(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
	async def fake_list(self: FarmerService, *, page: int, limit: int, search: str) -> tuple[list[object], int]:
		raise RuntimeError("connection reset by peer")

	monkeypatch.setattr(FarmerService, "list_page", fake_list)

	response = await client.get("/farmers")

	assert response.status_code == 500
	assert response.json()["detail"] == "Failed to retrieve farmers."


@pytest.mark.asyncio
@pytest.mark.usefixtures("entity_auth_required")
async def test_entity_routes_require_token_when_enabled(client: AsyncClient) -> None:
	response = await client.get("/farmers")
	assert response.status_code == 401
	assert response.json()["detail"]["error"] == "auth_required"


@pytest.mark.asyncio
@pytest.mark.usefixtures("entity_auth_required")
async def test_entity_routes_accept_token_when_enabled(
	client: AsyncClient, auth_headers: dict[str, str], monkeypatch: pytest.MonkeyPatch
) -> None:
	async def fake_list(self: FarmerService, *, page: int, limit: int, search: str) -> tuple[list[object], int]:
		return [], 0

	monkeypatch.setattr(FarmerService, "list_page", fake_list)

	response = await client.get("/farmers", headers=auth_headers)
	assert response.status_code == 200
