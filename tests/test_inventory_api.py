FLOUR = {"name": "Flour", "unit": "kg", "quantity": 10}


def test_create_and_adjust_flour(client):
    response = client.post("/inventory", json=FLOUR)
    assert response.status_code == 201
    assert response.json() == {"id": 1, "name": "Flour", "unit": "kg", "quantity": 10}

    response = client.patch("/inventory/1/adjust", json={"delta": -3})
    assert response.status_code == 200
    assert response.json() == {"id": 1, "name": "Flour", "unit": "kg", "quantity": 7}


def test_missing_name_or_unit_rejected(client):
    assert client.post("/inventory", json={"unit": "kg", "quantity": 1}).status_code == 400
    assert client.post("/inventory", json={"name": "Flour", "quantity": 1}).status_code == 400
    assert client.post("/inventory", json=FLOUR).json()["id"] == 1


def test_quantity_coerced(client):
    assert client.post("/inventory", json={**FLOUR, "quantity": "4.5"}).json()["quantity"] == 4.5
    assert client.post("/inventory", json={**FLOUR, "quantity": "lots"}).json()["quantity"] == 0
    assert client.post("/inventory", json={"name": "Salt", "unit": "kg"}).json()["quantity"] == 0


def test_adjust_round_trip(client):
    client.post("/inventory", json=FLOUR)

    client.patch("/inventory/1/adjust", json={"delta": -5})
    response = client.patch("/inventory/1/adjust", json={"delta": 5})

    assert response.json()["quantity"] == 10


def test_adjust_with_non_numeric_delta(client):
    client.post("/inventory", json=FLOUR)

    assert client.patch("/inventory/1/adjust", json={"delta": "x"}).json()["quantity"] == 10
    assert client.patch("/inventory/1/adjust", json={}).json()["quantity"] == 10


def test_adjust_can_go_negative(client):
    client.post("/inventory", json=FLOUR)

    assert client.patch("/inventory/1/adjust", json={"delta": -15}).json()["quantity"] == -5


def test_adjust_unknown_item(client):
    response = client.patch("/inventory/3/adjust", json={"delta": 1})

    assert response.status_code == 404
    assert response.json()["success"] is False


def test_list_and_get_inventory(client):
    client.post("/inventory", json=FLOUR)
    client.post("/inventory", json={"name": "Salt", "unit": "kg", "quantity": 2})

    assert [i["name"] for i in client.get("/inventory").json()] == ["Flour", "Salt"]
    assert client.get("/inventory/2").json()["name"] == "Salt"
    assert client.get("/inventory/9").status_code == 404


def test_inventory_survives_restart(make_client, settings):
    first = make_client()
    first.post("/inventory", json=FLOUR)
    first.patch("/inventory/1/adjust", json={"delta": -2.5})

    second = make_client()

    assert second.get("/inventory").json() == [
        {"id": 1, "name": "Flour", "unit": "kg", "quantity": 7.5}
    ]
    assert settings.inventory_path.exists()


def test_non_object_body(client):
    assert client.post("/inventory", json=["Flour", "kg"]).status_code == 400

    client.post("/inventory", json=FLOUR)
    response = client.patch("/inventory/1/adjust", json=[-3])
    assert response.status_code == 200
    assert response.json()["quantity"] == 10
