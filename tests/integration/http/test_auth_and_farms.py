from __future__ import annotations

from uuid import uuid4


async def test_health_is_public(client):
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_requests_need_a_valid_token(client, app):
    missing = await client.get("/api/v1/farms/me")
    assert missing.status_code == 401
    assert missing.json()["code"] == "auth_error"

    garbage = await client.get("/api/v1/farms/me", headers={"Authorization": "Bearer nope"})
    assert garbage.status_code == 401

    token = app.state.jwt_service.create_access_token(subject=uuid4())
    no_farm = await client.get("/api/v1/farms/me", headers={"Authorization": f"Bearer {token}"})
    assert no_farm.status_code == 404


async def test_farm_header_is_checked_against_owner(client, app, farm_headers):
    no_header = {"Authorization": farm_headers["Authorization"]}
    response = await client.get("/api/v1/animals", headers=no_header)
    assert response.status_code == 403

    bad = await client.get("/api/v1/animals", headers={**no_header, "X-Farm-ID": "not-a-uuid"})
    assert bad.status_code == 403

    unknown = await client.get("/api/v1/animals", headers={**no_header, "X-Farm-ID": str(uuid4())})
    assert unknown.status_code == 404

    stranger = app.state.jwt_service.create_access_token(subject=uuid4())
    response = await client.get(
        "/api/v1/animals",
        headers={"Authorization": f"Bearer {stranger}", "X-Farm-ID": farm_headers["X-Farm-ID"]},
    )
    assert response.status_code == 403
    assert response.json()["code"] == "forbidden"


async def test_farm_settings_round_trip(client, auth_headers, farm_headers):
    me = await client.get("/api/v1/farms/me", headers=auth_headers)
    assert me.status_code == 200
    body = me.json()
    assert body["tag_prefix"] == "SN"
    assert body["gestation_days"] == 31
    assert body["breeds"] == [{"name": "Rex", "code": "REX"}]

    updated = await client.put(
        "/api/v1/farms/me/settings",
        json={"currency": "ngn", "capacity_policy": "hard"},
        headers=auth_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["currency"] == "NGN"
    assert updated.json()["capacity_policy"] == "hard"

    invalid = await client.put(
        "/api/v1/farms/me/settings", json={"gestation_days": 50}, headers=auth_headers
    )
    assert invalid.status_code == 422
    assert invalid.json()["code"] == "validation_error"

    duplicate = await client.post("/api/v1/farms", json={"name": "Again"}, headers=auth_headers)
    assert duplicate.status_code == 409

    removed = await client.delete("/api/v1/farms/me/breeds/REX", headers=auth_headers)
    assert removed.status_code == 200
    assert removed.json()["breeds"] == []
