from tests.conftest import auth_headers

MEDICINE = {
    "name": "  Metformin ",
    "dosage": "500mg",
    "frequency": "twice-daily",
    "times": ["08:00", "20:00"],
    "after_meal": True,
}


def test_add_and_list_medicines(client):
    headers = auth_headers(client)

    response = client.post("/api/v1/medicines", json=MEDICINE, headers=headers)

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Medicine added successfully"
    assert body["data"]["name"] == "Metformin"
    assert body["data"]["is_active"] is True
    assert body["data"]["reminder_enabled"] is True

    listed = client.get("/api/v1/medicines", headers=headers).json()
    assert [m["name"] for m in listed] == ["Metformin"]


def test_invalid_medicine_is_rejected(client):
    headers = auth_headers(client)

    assert client.post("/api/v1/medicines", json=dict(MEDICINE, times=["8am"]), headers=headers).status_code == 422
    assert client.post("/api/v1/medicines", json=dict(MEDICINE, frequency="hourly"), headers=headers).status_code == 422
    assert client.post("/api/v1/medicines", json=dict(MEDICINE, times=[]), headers=headers).status_code == 422


def test_update_medicine(client):
    headers = auth_headers(client)
    medicine_id = client.post("/api/v1/medicines", json=MEDICINE, headers=headers).json()["data"]["id"]

    response = client.put(f"/api/v1/medicines/{medicine_id}", json={"dosage": "850mg"}, headers=headers)

    assert response.status_code == 200
    assert response.json()["message"] == "Medicine updated successfully"
    assert response.json()["data"]["dosage"] == "850mg"
    assert response.json()["data"]["times"] == ["08:00", "20:00"]


def test_update_unknown_medicine(client):
    headers = auth_headers(client)

    response = client.put("/api/v1/medicines/999", json={"dosage": "1g"}, headers=headers)

    assert response.status_code == 404
    assert response.json()["message"] == "Medicine not found"


def test_delete_is_soft(client):
    headers = auth_headers(client)
    medicine_id = client.post("/api/v1/medicines", json=MEDICINE, headers=headers).json()["data"]["id"]

    response = client.delete(f"/api/v1/medicines/{medicine_id}", headers=headers)

    assert response.status_code == 200
    assert client.get("/api/v1/medicines", headers=headers).json() == []
    # Deleted medicines can no longer be edited or deleted again
    assert client.delete(f"/api/v1/medicines/{medicine_id}", headers=headers).status_code == 404


def test_medicines_are_private(client):
    owner = auth_headers(client)
    other = auth_headers(client, email="other@example.com")
    medicine_id = client.post("/api/v1/medicines", json=MEDICINE, headers=owner).json()["data"]["id"]

    assert client.get("/api/v1/medicines", headers=other).json() == []
    assert client.put(f"/api/v1/medicines/{medicine_id}", json={"dosage": "1g"}, headers=other).status_code == 404
