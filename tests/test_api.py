import pytest

API = "/api/v1"


def _make_low(client, ingredient_id, stock):
    current = client.get(f"{API}/ingredients/{ingredient_id}").json()
    payload = {key: current[key] for key in ("name", "unit", "cost_per_unit", "min_stock", "supplier_id")}
    response = client.put(f"{API}/ingredients/{ingredient_id}", json={**payload, "current_stock": stock})
    assert response.status_code == 200
    return response.json()


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").json()["status"] == "running"


# Ingredients and suppliers

def test_list_ingredients(client):
    response = client.get(f"{API}/ingredients/")

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 8
    salt = next(i for i in data if i["id"] == "8")
    assert salt["supplier_name"] == "unassigned"
    assert salt["stock_value"] == pytest.approx(20.0)


def test_search_ingredients_by_supplier_name(client):
    data = client.get(f"{API}/ingredients/", params={"search": "hortifruti"}).json()

    assert sorted(i["id"] for i in data) == ["4", "5", "7"]


def test_ingredient_crud(client):
    created = client.post(f"{API}/ingredients/", json={
        "name": "Manteiga", "unit": "kg", "cost_per_unit": 40.0, "current_stock": 1, "min_stock": 2,
        "supplier_id": "1",
    })
    assert created.status_code == 201
    butter = created.json()
    assert butter["is_low_stock"] is True
    assert butter["supplier_name"] == "Cerealista Bom Grão"

    low = client.get(f"{API}/ingredients/", params={"low_stock_only": True}).json()
    assert [i["id"] for i in low] == [butter["id"]]

    assert client.delete(f"{API}/ingredients/{butter['id']}").status_code == 204
    assert client.get(f"{API}/ingredients/{butter['id']}").status_code == 404


def test_ingredient_errors(client):
    assert client.get(f"{API}/ingredients/404").status_code == 404

    response = client.post(f"{API}/ingredients/", json={
        "name": "Manteiga", "unit": "kg", "cost_per_unit": 40.0, "supplier_id": "404",
    })
    assert response.status_code == 404

    response = client.post(f"{API}/ingredients/", json={"name": "Manteiga", "unit": "kg", "cost_per_unit": -1})
    assert response.status_code == 422


def test_suppliers(client):
    data = client.get(f"{API}/suppliers/").json()

    assert [s["name"] for s in data] == ["Casa de Carnes Premium", "Cerealista Bom Grão", "Hortifruti Fresco"]
    produce = next(s for s in data if s["id"] == "3")
    assert produce["ingredient_count"] == 3

    ingredients = client.get(f"{API}/suppliers/2/ingredients").json()
    assert [i["name"] for i in ingredients] == ["Filé Mignon"]
    assert client.get(f"{API}/suppliers/404").status_code == 404


# Recipes

def test_recipe_cost_endpoint(client):
    cost = client.get(f"{API}/recipes/1/cost").json()

    assert cost["total_cost"] == pytest.approx(15.14)
    assert cost["cmv_status"] == "good"
    assert len(cost["lines"]) == 5


def test_recipe_follows_ingredient_cost(client):
    current = client.get(f"{API}/ingredients/3").json()
    payload = {key: current[key] for key in ("name", "unit", "current_stock", "min_stock", "supplier_id")}
    client.put(f"{API}/ingredients/3", json={**payload, "cost_per_unit": 80.0})

    cost = client.get(f"{API}/recipes/1").json()["cost"]

    assert cost["total_cost"] == pytest.approx(15.14 + 0.2 * (80.0 - 69.90))
    assert cost["cmv_status"] == "watch"


def test_recipe_with_removed_ingredient(client):
    client.delete(f"{API}/ingredients/6")

    cost = client.get(f"{API}/recipes/1/cost").json()

    assert cost["missing_ingredient_ids"] == ["6"]
    removed = next(line for line in cost["lines"] if line["ingredient_id"] == "6")
    assert removed["removed"] is True
    assert removed["subtotal"] == 0


def test_recipe_editing(client):
    created = client.post(f"{API}/recipes/", json={
        "name": "Purê", "category": "Guarnição", "sale_price": 15.0, "yield_servings": 2,
        "ingredients": [{"ingredient_id": "7", "quantity": 0.4}],
    })
    assert created.status_code == 201
    recipe_id = created.json()["id"]

    added = client.post(f"{API}/recipes/{recipe_id}/ingredients", json={"ingredient_id": "8", "quantity": 0.01})
    assert len(added.json()["ingredients"]) == 2

    patched = client.patch(f"{API}/recipes/{recipe_id}/ingredients/7", json={"quantity": 0.5})
    assert patched.json()["cost"]["total_cost"] == pytest.approx(0.5 * 3.90 + 0.01 * 2.00)

    removed = client.delete(f"{API}/recipes/{recipe_id}/ingredients/8")
    assert [line["ingredient_id"] for line in removed.json()["ingredients"]] == ["7"]

    categories = client.get(f"{API}/recipes/categories").json()["categories"]
    assert categories == ["Guarnição", "Prato Principal"]


def test_recipe_errors(client):
    assert client.get(f"{API}/recipes/404").status_code == 404
    response = client.post(f"{API}/recipes/1/ingredients", json={"ingredient_id": "404", "quantity": 1})
    assert response.status_code == 404
    response = client.post(f"{API}/recipes/", json={
        "name": "Ghost", "ingredients": [{"ingredient_id": "404", "quantity": 1}],
    })
    assert response.status_code == 404


def test_recipe_advisory(client, fake_model):
    response = client.post(f"{API}/recipes/1/advisory")

    assert response.status_code == 200
    assert response.json() == {"text": fake_model.text, "available": True}
    assert "Picadinho de Mignon" in fake_model.prompts[0]


# Movements and price history

def test_record_purchase(client):
    response = client.post(f"{API}/inventory/movements", json={
        "ingredient_id": "3", "type": "IN", "quantity": 5, "unit_price": 72.0,
    })

    assert response.status_code == 201
    movement = response.json()
    assert movement["value"] == pytest.approx(360.0)
    assert movement["ingredient_name"] == "Filé Mignon"

    mignon = client.get(f"{API}/ingredients/3").json()
    assert mignon["current_stock"] == pytest.approx(17)
    assert mignon["cost_per_unit"] == pytest.approx(72.0)

    history = client.get(f"{API}/inventory/price-history/3").json()
    assert [p["price"] for p in history] == pytest.approx([72.0])


@pytest.mark.parametrize("quantity", [0, -3])
def test_invalid_movement_quantity(client, quantity):
    response = client.post(f"{API}/inventory/movements", json={
        "ingredient_id": "1", "type": "OUT", "quantity": quantity,
    })

    assert response.status_code == 400
    assert client.get(f"{API}/inventory/movements").json() == []


def test_movement_for_unknown_ingredient(client):
    response = client.post(f"{API}/inventory/movements", json={"ingredient_id": "404", "type": "IN", "quantity": 1})
    assert response.status_code == 404
    assert client.get(f"{API}/inventory/price-history/404").status_code == 404


def test_movements_newest_first_and_removed_items(client):
    client.post(f"{API}/inventory/movements", json={
        "ingredient_id": "1", "type": "IN", "quantity": 1, "date": "2024-06-01T10:00:00",
    })
    client.post(f"{API}/inventory/movements", json={
        "ingredient_id": "2", "type": "OUT", "quantity": 1, "date": "2024-06-10T10:00:00",
    })
    client.delete(f"{API}/ingredients/2")

    movements = client.get(f"{API}/inventory/movements").json()

    assert [m["ingredient_id"] for m in movements] == ["2", "1"]
    assert movements[0]["ingredient_name"] == "removed item"
    assert movements[0]["ingredient_removed"] is True

    only_in = client.get(f"{API}/inventory/movements", params={"type": "IN"}).json()
    assert [m["ingredient_id"] for m in only_in] == ["1"]


# Audit and CMV

def test_audit_state_conflicts(client):
    assert client.get(f"{API}/inventory/audit").json() == {"state": "IDLE", "counts": {}}
    assert client.post(f"{API}/inventory/audit/finalize").status_code == 409
    assert client.put(f"{API}/inventory/audit/counts", json={"ingredient_id": "1", "quantity": 3}).status_code == 409

    started = client.post(f"{API}/inventory/audit/start")
    assert started.json()["state"] == "COUNTING"
    assert started.json()["counts"]["1"] == 50
    assert client.post(f"{API}/inventory/audit/start").status_code == 409

    assert client.post(f"{API}/inventory/audit/cancel").json()["state"] == "IDLE"
    assert client.post(f"{API}/inventory/audit/cancel").status_code == 409


def test_audit_counts_and_variances(client):
    client.post(f"{API}/inventory/audit/start")

    assert client.put(f"{API}/inventory/audit/counts", json={"ingredient_id": "1", "quantity": -1}).status_code == 400
    assert client.put(f"{API}/inventory/audit/counts", json={"ingredient_id": "404", "quantity": 1}).status_code == 404
    assert client.put(f"{API}/inventory/audit/counts", json={"ingredient_id": "5", "quantity": 0}).status_code == 200

    variances = {v["ingredient_id"]: v for v in client.get(f"{API}/inventory/audit/variances").json()}
    assert variances["5"]["diff"] == pytest.approx(-2)
    assert variances["5"]["status"] == "shortage"
    assert variances["1"]["status"] == "match"


def test_cmv_flow(client, clock):
    response = client.get(f"{API}/cmv/")
    assert response.status_code == 422
    assert response.json()["message"] == "InsufficientPeriodData"
    assert response.json()["success"] is False

    client.post(f"{API}/inventory/audit/start")
    first = client.post(f"{API}/inventory/audit/finalize")
    assert first.status_code == 201
    assert first.json()["total_value"] == pytest.approx(1899.30)
    assert first.json()["items_counted"] == 8

    clock.advance(days=10)
    client.post(f"{API}/inventory/movements", json={
        "ingredient_id": "1", "type": "IN", "quantity": 10, "unit_price": 6.0, "date": "2024-06-20T09:00:00",
    })

    client.post(f"{API}/inventory/audit/start")
    client.put(f"{API}/inventory/audit/counts", json={"ingredient_id": "1", "quantity": 55})
    second = client.post(f"{API}/inventory/audit/finalize").json()
    assert second["total_value"] == pytest.approx(1899.30 - 50 * 5.50 + 55 * 6.0)
    assert client.get(f"{API}/ingredients/1").json()["current_stock"] == 55

    report = client.get(f"{API}/cmv/").json()
    assert report["initial_inventory"] == pytest.approx(1899.30)
    assert report["purchases"] == pytest.approx(60.0)
    assert report["purchases_count"] == 1
    assert report["final_inventory"] == pytest.approx(second["total_value"])
    assert report["cmv"] == pytest.approx(5.0)

    reversed_period = client.get(f"{API}/cmv/", params={
        "start_record_id": second["id"], "end_record_id": first.json()["id"],
    })
    assert reversed_period.status_code == 422

    records = client.get(f"{API}/inventory/records").json()
    assert [r["id"] for r in records] == [second["id"], first.json()["id"]]
    assert client.get(f"{API}/inventory/records/{second['id']}").json()["items_counted"] == 8
    assert client.get(f"{API}/inventory/records/404").status_code == 404


# Waste, shopping list and dashboard

def test_waste_logging(client):
    assert "Expiration" in client.get(f"{API}/waste/reasons").json()["reasons"]

    created = client.post(f"{API}/waste/", json={
        "ingredient_id": "4", "quantity": 2, "reason": "Improper Storage", "responsible": "Ana",
    })
    assert created.status_code == 201
    assert created.json()["cost"] == pytest.approx(9.0)
    assert client.get(f"{API}/ingredients/4").json()["current_stock"] == pytest.approx(13)

    bad = client.post(f"{API}/waste/", json={"ingredient_id": "4", "quantity": 0, "reason": "Expiration"})
    assert bad.status_code == 400

    summary = client.get(f"{API}/waste/").json()
    assert summary["total_logs"] == 1
    assert summary["total_cost"] == pytest.approx(9.0)
    assert summary["logs"][0]["ingredient_name"] == "Cebola"


def test_shopping_list(client):
    _make_low(client, "3", 4)
    _make_low(client, "6", 3)

    added = client.post(f"{API}/shopping/populate").json()
    assert {item["ingredient_id"]: item["quantity"] for item in added} == {"3": 16, "6": 3}
    assert client.post(f"{API}/shopping/populate").json() == []

    manual = client.post(f"{API}/shopping/", json={"ingredient_id": "7", "quantity": 5})
    assert manual.status_code == 201
    item_id = manual.json()["id"]

    assert client.post(f"{API}/shopping/{item_id}/toggle").json()["checked"] is True
    view = client.get(f"{API}/shopping/by-status").json()
    assert [i["id"] for i in view["bought"]] == [item_id]
    assert len(view["to_buy"]) == 2

    groups = client.get(f"{API}/shopping/by-supplier").json()
    assert [g["supplier_name"] for g in groups] == ["Casa de Carnes Premium", "Hortifruti Fresco", "unassigned"]

    assert client.delete(f"{API}/shopping/{item_id}").status_code == 204
    assert client.post(f"{API}/shopping/{item_id}/toggle").status_code == 404
    assert len(client.get(f"{API}/shopping/").json()) == 2


def test_shopping_insights(client, fake_model):
    nothing_low = client.post(f"{API}/shopping/insights").json()
    assert nothing_low["available"] is True
    assert fake_model.prompts == []

    _make_low(client, "3", 4)
    insights = client.post(f"{API}/shopping/insights").json()
    assert insights["text"] == fake_model.text
    assert "Filé Mignon" in fake_model.prompts[0]


def test_dashboard_summary(client):
    _make_low(client, "5", 1)
    client.post(f"{API}/waste/", json={"ingredient_id": "8", "quantity": 1, "reason": "Expiration"})

    summary = client.get(f"{API}/dashboard/summary").json()

    assert summary["ingredient_count"] == 8
    assert summary["low_stock_count"] == 1
    assert summary["low_stock_items"][0]["name"] == "Alho"
    assert summary["inventory_value"] == pytest.approx(1899.30 - 25.0 - 2.0)
    assert summary["recipe_count"] == 2
    assert summary["average_recipe_cmv"] == pytest.approx((15.14 / 59.90 * 100 + 2.085 / 12.00 * 100) / 2)
    assert summary["total_waste_cost"] == pytest.approx(2.0)
    assert summary["latest_inventory_record"] is None
