from __future__ import annotations

from datetime import datetime
from uuid import uuid4


async def _hutch(client, headers, number: int, capacity: int) -> dict:
    response = await client.post(
        "/api/v1/hutches", json={"number": number, "capacity": capacity}, headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()


async def _animal(client, headers, **payload) -> dict:
    response = await client.post(
        "/api/v1/animals", json={"breed": "REX", **payload}, headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()["items"][0]


async def test_housing_moves_and_capacity(client, farm_headers):
    h1 = await _hutch(client, farm_headers, 1, 4)
    h2 = await _hutch(client, farm_headers, 2, 1)
    assert h1["code"] == "H01"

    tag = await client.get("/api/v1/animals/next-tag?breed_code=REX", headers=farm_headers)
    assert tag.status_code == 200
    assert tag.json() == {"next_tag": "SN-REX-0001"}

    doe = await _animal(client, farm_headers, sex="Female", hutch_id=h1["id"])
    assert doe["tag"] == "SN-REX-0001"
    assert doe["current_hutch_id"] == h1["id"]

    moved = await client.post(
        f"/api/v1/animals/{doe['id']}/move", json={"hutch_id": h2["id"]}, headers=farm_headers
    )
    assert moved.status_code == 200, moved.text
    body = moved.json()
    assert body["changed"] is True
    assert body["source_hutch_id"] == h1["id"]
    assert body["capacity_warning"] is None

    same = await client.post(
        f"/api/v1/animals/{doe['id']}/move", json={"hutch_id": h2["id"]}, headers=farm_headers
    )
    assert same.json()["changed"] is False

    missing = await client.post(
        f"/api/v1/animals/{doe['id']}/move", json={"hutch_id": str(uuid4())}, headers=farm_headers
    )
    assert missing.status_code == 404
    assert missing.json()["code"] == "housing_not_found"

    listed = await client.get("/api/v1/hutches", headers=farm_headers)
    hutches = {h["id"]: h for h in listed.json()}
    assert hutches[h1["id"]]["current_occupancy"] == 0
    assert hutches[h2["id"]]["current_occupancy"] == 1

    buck = await _animal(client, farm_headers, sex="Male", hutch_id=h1["id"])
    mating = await client.post(
        "/api/v1/breeding/matings",
        json={
            "doe_tag": doe["tag"],
            "sire_tag": buck["tag"],
            "mating_date": "2024-01-01",
            "move": {"mode": "sire_visits_doe"},
        },
        headers=farm_headers,
    )
    assert mating.status_code == 201, mating.text
    created = mating.json()
    assert created["mating"]["expected_palpation_date"] == "2024-01-15"
    assert created["mating"]["expected_delivery_date"] == "2024-02-01"
    assert created["inbreeding"] == "NoRelationFound"
    assert created["moved_animal_ids"] == [buck["id"]]
    assert created["capacity_warnings"][0]["hutch_id"] == h2["id"]

    history = await client.get(f"/api/v1/hutches/{h2['id']}/history", headers=farm_headers)
    assert {s["purpose"] for s in history.json()} == {"Housing", "Mating"}

    await client.put(
        "/api/v1/farms/me/settings",
        json={"capacity_policy": "hard"},
        headers={"Authorization": farm_headers["Authorization"]},
    )
    third = await _animal(client, farm_headers, sex="Female")
    rejected = await client.post(
        f"/api/v1/animals/{third['id']}/move", json={"hutch_id": h2["id"]}, headers=farm_headers
    )
    assert rejected.status_code == 409
    assert rejected.json()["code"] == "capacity_exceeded"
    assert rejected.json()["details"]["capacity"] == 1

    occupied = await client.delete(f"/api/v1/hutches/{h2['id']}", headers=farm_headers)
    assert occupied.status_code == 409


async def test_breeding_sale_and_finance(client, farm_headers):
    doe = await _animal(client, farm_headers, sex="Female", tag="D1")
    buck = await _animal(client, farm_headers, sex="Male", tag="B1")
    mating = (
        await client.post(
            "/api/v1/breeding/matings",
            json={"doe_tag": "D1", "sire_tag": "B1", "mating_date": "2024-01-01"},
            headers=farm_headers,
        )
    ).json()["mating"]

    palpation = await client.post(
        f"/api/v1/breeding/matings/{mating['id']}/palpation",
        json={"result": "Positive", "checked_on": "2024-01-15"},
        headers=farm_headers,
    )
    assert palpation.status_code == 200
    assert palpation.json()["status"] == "Pregnant"
    pregnant = await client.get(f"/api/v1/animals/{doe['id']}", headers=farm_headers)
    assert pregnant.json()["status"] == "Pregnant"

    delivery = await client.post(
        f"/api/v1/breeding/matings/{mating['id']}/delivery",
        json={"delivery_date": "2024-02-01", "kits_born": 5, "kits_live": 4},
        headers=farm_headers,
    )
    assert delivery.status_code == 201, delivery.text
    delivery_id = delivery.json()["delivery"]["id"]

    kits = await client.post(
        "/api/v1/animals",
        json={"breed": "REX", "sex": "Female", "tag": "R", "count": 2, "delivery_id": delivery_id},
        headers=farm_headers,
    )
    assert kits.status_code == 201, kits.text
    kit_items = kits.json()["items"]
    assert [k["tag"] for k in kit_items] == ["R-1", "R-2"]
    assert {k["doe_tag"] for k in kit_items} == {"D1"}

    related = await client.post(
        "/api/v1/animals/inbreeding-check",
        json={"first_tag": "R-1", "second_tag": "R-2"},
        headers=farm_headers,
    )
    assert related.json() == {"relation": "FullSiblings", "related": True}

    detail = await client.get(f"/api/v1/breeding/matings/{mating['id']}", headers=farm_headers)
    assert detail.json()["mating"]["status"] == "Delivered"
    assert sorted(detail.json()["delivery"]["kit_ids"]) == sorted(k["id"] for k in kit_items)

    sale = await client.post(
        "/api/v1/finance/sales",
        json={
            "animal_ids": [k["id"] for k in kit_items],
            "amount": "50.00",
            "date": "2024-04-01",
            "buyer_name": "Acme",
        },
        headers=farm_headers,
    )
    assert sale.status_code == 201, sale.text
    assert {a["status"] for a in sale.json()["animals"]} == {"Sold"}

    txns = (await client.get("/api/v1/finance/transactions", headers=farm_headers)).json()
    assert len(txns) == 1
    assert txns[0]["category"] == "Sale"
    assert sorted(txns[0]["related_tags"]) == ["R-1", "R-2"]

    medical = await client.post(
        "/api/v1/medical",
        json={
            "animal_id": buck["id"],
            "date": "2024-04-02",
            "type": "Deworming",
            "medication_name": "Ivermectin",
            "cost": "5.00",
        },
        headers=farm_headers,
    )
    assert medical.status_code == 201, medical.text
    assert medical.json()["expense_transaction_id"] is not None

    summary = (await client.get("/api/v1/finance/summary", headers=farm_headers)).json()
    assert float(summary["income"]) == 50.0
    assert float(summary["expense"]) == 5.0
    assert float(summary["net"]) == 45.0

    mortality = await client.post(
        f"/api/v1/animals/{buck['id']}/mortality",
        json={"status": "Deceased-Natural", "date": "2024-05-01", "notes": "Old age"},
        headers=farm_headers,
    )
    assert mortality.status_code == 200
    assert mortality.json()["animal"]["status"] == "Deceased-Natural"

    resold = await client.post(
        "/api/v1/finance/sales",
        json={"animal_ids": [buck["id"]], "amount": "10", "date": "2024-05-02", "buyer_name": "X"},
        headers=farm_headers,
    )
    assert resold.status_code == 422

    export = await client.get(
        "/api/v1/farms/me/export", headers={"Authorization": farm_headers["Authorization"]}
    )
    assert export.status_code == 200
    document = export.json()
    assert len(document["animals"]) == 4
    assert len(document["sales"]) == 1
    assert len(document["medical_records"]) == 1


async def test_animal_update_uses_optimistic_version(client, farm_headers):
    doe = await _animal(client, farm_headers, sex="Female", tag="V1")

    first = await client.put(
        f"/api/v1/animals/{doe['id']}",
        json={"version": doe["version"], "name": "Clover"},
        headers=farm_headers,
    )
    assert first.status_code == 200
    assert first.json()["version"] == doe["version"] + 1

    stale = await client.put(
        f"/api/v1/animals/{doe['id']}",
        json={"version": doe["version"], "name": "Late"},
        headers=farm_headers,
    )
    assert stale.status_code == 409

    listing = await client.get("/api/v1/animals?q=clov", headers=farm_headers)
    assert listing.json()["total"] == 1
    assert listing.json()["items"][0]["name"] == "Clover"


async def test_generated_tags_step_over_hand_entered_tags(client, farm_headers):
    await _animal(client, farm_headers, sex="Female", tag="SN-REX-0001")

    preview = await client.get("/api/v1/animals/next-tag?breed_code=REX", headers=farm_headers)
    assert preview.json() == {"next_tag": "SN-REX-0002"}

    generated = [await _animal(client, farm_headers, sex="Male") for _ in range(3)]
    assert [a["tag"] for a in generated] == ["SN-REX-0002", "SN-REX-0003", "SN-REX-0004"]


async def test_housing_history_survives_hutch_delete_and_back_dated_death(
    client, farm_headers
):
    h1 = await _hutch(client, farm_headers, 1, 2)
    h2 = await _hutch(client, farm_headers, 2, 2)
    doe = await _animal(client, farm_headers, sex="Female", tag="HX", hutch_id=h1["id"])
    moved = await client.post(
        f"/api/v1/animals/{doe['id']}/move", json={"hutch_id": h2["id"]}, headers=farm_headers
    )
    assert moved.status_code == 200

    deleted = await client.delete(f"/api/v1/hutches/{h1['id']}", headers=farm_headers)
    assert deleted.status_code == 204

    mortality = await client.post(
        f"/api/v1/animals/{doe['id']}/mortality",
        json={"status": "Deceased-Natural", "date": "2020-01-01"},
        headers=farm_headers,
    )
    assert mortality.status_code == 200

    details = await client.get(f"/api/v1/animals/{doe['id']}/details", headers=farm_headers)
    history = details.json()["housing_history"]
    assert {stay["hutch_label"] for stay in history} == {"H01", "H02"}
    for stay in history:
        assert stay["end_at"] is not None
        assert datetime.fromisoformat(stay["end_at"]) >= datetime.fromisoformat(stay["start_at"])
