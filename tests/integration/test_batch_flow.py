"""
End-to-end: goods in, batch manufacture, sale and the ledger they leave.

Runs the real routes, use cases and SQLite stores; nothing is mocked
except the database location.
"""

from httpx import AsyncClient


async def _setup_tea(client: AsyncClient) -> tuple[int, int]:
    """Create the leaf material with 1000 g received and a product made from it."""
    response = await client.post(
        "/api/raw-materials", json={"name": "Assam Leaf", "unit": "g", "unit_cost": 0.002}
    )
    assert response.status_code == 201
    material_id = response.json()["id"]

    response = await client.post(
        "/api/inventory/receipts",
        json={
            "stock_type": "tea",
            "product_name": "Assam Leaf",
            "raw_material_id": material_id,
            "quantity": 1000,
            "price_per_unit": 0.003,
            "batch_number": "LOT-A",
        },
    )
    assert response.status_code == 201
    assert response.json()["inventory_item"]["stock_level"] == 1000

    response = await client.post(
        "/api/products",
        json={"name": "Breakfast Tea", "sku": "TEA-0000001", "unit_selling_price": 3.0},
    )
    assert response.status_code == 201
    return material_id, response.json()["id"]


def _batch_body(material_id: int, product_id: int, **overrides) -> dict:
    body = {
        "product_id": product_id,
        "product_batch_number": "BT-0315",
        "product_best_before_date": "2025-03-15",
        "bags_count": 50,
        "bag_size": 10,
        "batch_started": "2024-03-15T09:00:00",
        "scale_target_weight": 500,
        "scale_actual_reading": 500,
        "ingredients": [{"raw_material_id": material_id, "batch_number": "LOT-A", "quantity": 500}],
    }
    body.update(overrides)
    return body


async def _stock_of(client: AsyncClient, name: str, is_final_product: bool) -> float:
    response = await client.get(
        "/api/inventory", params={"is_final_product": str(is_final_product).lower()}
    )
    items = [i for i in response.json()["items"] if i["product_name"] == name]
    assert len(items) == 1
    return items[0]["stock_level"]


class TestBatchLifecycle:
    async def test_receipt_updates_material_cost(self, live_client: AsyncClient):
        material_id, _ = await _setup_tea(live_client)

        response = await live_client.get(f"/api/raw-materials/{material_id}")
        assert response.json()["unit_cost"] == 0.003

    async def test_create_finish_and_edit_batch(self, live_client: AsyncClient):
        material_id, product_id = await _setup_tea(live_client)

        response = await live_client.post("/api/batches", json=_batch_body(material_id, product_id))
        assert response.status_code == 201
        saved = response.json()
        batch_id = saved["batch"]["id"]
        assert saved["batch"]["status"] == "in_progress"
        assert [(m["movement_type"], m["quantity"]) for m in saved["movements"]] == [
            ("manufacturing_consume", -500)
        ]
        assert await _stock_of(live_client, "Assam Leaf", False) == 500

        response = await live_client.put(
            f"/api/batches/{batch_id}",
            json=_batch_body(
                material_id,
                product_id,
                batch_finished="2024-03-15T15:00:00",
                version=saved["batch"]["version"],
            ),
        )
        assert response.status_code == 200
        finished = response.json()
        assert finished["batch"]["status"] == "completed"
        assert [(m["movement_type"], m["quantity"]) for m in finished["movements"]] == [
            ("manufacturing_produce", 50)
        ]
        assert await _stock_of(live_client, "Breakfast Tea", True) == 50

        response = await live_client.put(
            f"/api/batches/{batch_id}",
            json=_batch_body(
                material_id,
                product_id,
                bags_count=70,
                batch_finished="2024-03-15T15:00:00",
                version=finished["batch"]["version"],
            ),
        )
        assert response.status_code == 200
        assert [m["quantity"] for m in response.json()["movements"]] == [20]
        assert await _stock_of(live_client, "Breakfast Tea", True) == 70
        assert await _stock_of(live_client, "Assam Leaf", False) == 500

        response = await live_client.get(f"/api/batches/{batch_id}/traceability")
        trace = response.json()
        assert [m["quantity"] for m in trace["consumed"]] == [-500]
        assert sorted(m["quantity"] for m in trace["produced"]) == [20, 50]

    async def test_stale_edit_is_rejected(self, live_client: AsyncClient):
        material_id, product_id = await _setup_tea(live_client)
        response = await live_client.post("/api/batches", json=_batch_body(material_id, product_id))
        batch = response.json()["batch"]

        first = await live_client.put(
            f"/api/batches/{batch['id']}",
            json=_batch_body(material_id, product_id, bags_count=60, version=batch["version"]),
        )
        assert first.status_code == 200

        second = await live_client.put(
            f"/api/batches/{batch['id']}",
            json=_batch_body(material_id, product_id, bags_count=40, version=batch["version"]),
        )
        assert second.status_code == 409
        assert await _stock_of(live_client, "Assam Leaf", False) == 500

    async def test_movement_log_lists_every_change(self, live_client: AsyncClient):
        material_id, product_id = await _setup_tea(live_client)
        await live_client.post("/api/batches", json=_batch_body(material_id, product_id))

        response = await live_client.get("/api/inventory/movements")
        assert response.status_code == 200
        types = [m["movement_type"] for m in response.json()]
        assert sorted(types) == ["manufacturing_consume", "receive"]


class TestReferentialErrors:
    async def test_unknown_ingredient_is_404_and_moves_nothing(self, live_client: AsyncClient):
        material_id, product_id = await _setup_tea(live_client)
        body = _batch_body(material_id, product_id)
        body["ingredients"].append({"raw_material_id": 999, "quantity": 10})

        response = await live_client.post("/api/batches", json=body)
        assert response.status_code == 404
        assert response.json()["error_code"] == "RAW_MATERIAL_NOT_FOUND"

        assert (await live_client.get("/api/batches")).json()["batches"] == []
        assert await _stock_of(live_client, "Assam Leaf", False) == 1000

    async def test_deleting_referenced_records_is_409(self, live_client: AsyncClient):
        material_id, product_id = await _setup_tea(live_client)
        await live_client.post("/api/batches", json=_batch_body(material_id, product_id))

        for path in (f"/api/raw-materials/{material_id}", f"/api/products/{product_id}"):
            response = await live_client.delete(path)
            assert response.status_code == 409
            assert response.json()["error_code"] == "RECORD_IN_USE"

    async def test_material_rename_follows_stock(self, live_client: AsyncClient):
        material_id, product_id = await _setup_tea(live_client)
        response = await live_client.post("/api/batches", json=_batch_body(material_id, product_id))
        batch = response.json()["batch"]

        response = await live_client.put(
            f"/api/raw-materials/{material_id}",
            json={"name": "Assam Leaf TGFOP", "unit": "g", "unit_cost": 0.003},
        )
        assert response.status_code == 200

        body = _batch_body(material_id, product_id, version=batch["version"])
        body["ingredients"][0]["quantity"] = 400
        assert (await live_client.put(f"/api/batches/{batch['id']}", json=body)).status_code == 200

        assert await _stock_of(live_client, "Assam Leaf TGFOP", False) == 600
