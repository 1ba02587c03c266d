from tests.conftest import auth_headers

DETAILS = {
    "full_name": "Pat Doe",
    "date_of_birth": "1990-04-12",
    "gender": "Female",
    "blood_group": "O+",
    "address": {"city": "Pune", "country": "India"},
    "allergies": ["Penicillin"],
    "surgeries": [{"name": "Appendectomy", "date": "2015-06-01"}],
    "emergency_contact": {"name": "Sam Doe", "relation": "Sibling", "phone": "555-0100"},
}


def test_user_details_create_then_update(client):
    headers = auth_headers(client)

    assert client.get("/api/v1/user-details", headers=headers).status_code == 404

    response = client.post("/api/v1/user-details", json=DETAILS, headers=headers)
    assert response.status_code == 201
    assert response.json()["allergies"] == ["Penicillin"]
    assert response.json()["surgeries"][0]["date"] == "2015-06-01"
    assert client.get("/api/v1/auth/me", headers=headers).json()["profile_completed"] is True

    response = client.post("/api/v1/user-details", json=dict(DETAILS, blood_group="A+"), headers=headers)
    assert response.status_code == 200
    assert response.json()["blood_group"] == "A+"

    fetched = client.get("/api/v1/user-details", headers=headers).json()
    assert fetched["date_of_birth"] == "1990-04-12"
    assert fetched["address"]["city"] == "Pune"


def test_user_details_validates_gender(client):
    headers = auth_headers(client)

    response = client.post("/api/v1/user-details", json=dict(DETAILS, gender="Unknown"), headers=headers)

    assert response.status_code == 422


def test_health_records(client):
    headers = auth_headers(client)

    response = client.post(
        "/api/v1/health-records",
        json={"title": "Blood test", "description": "HbA1c 6.1", "date": "2024-11-02T08:30:00Z"},
        headers=headers,
    )
    assert response.status_code == 201
    client.post("/api/v1/health-records", json={"title": "X-ray"}, headers=headers)

    records = client.get("/api/v1/health-records", headers=headers).json()
    # Undated record defaults to now, so it sorts first
    assert [r["title"] for r in records] == ["X-ray", "Blood test"]


def test_record_summary_aggregates_everything(client):
    headers = auth_headers(client)
    client.post("/api/v1/user-details", json=DETAILS, headers=headers)
    client.post(
        "/api/v1/appointments",
        json={"doctor_name": "Dr. Smith", "appointment_date": "2030-01-10T10:00:00Z"},
        headers=headers,
    )
    kept = client.post(
        "/api/v1/medicines",
        json={"name": "Metformin", "dosage": "500mg", "frequency": "once-daily", "times": ["08:00"]},
        headers=headers,
    ).json()["data"]["id"]
    dropped = client.post(
        "/api/v1/medicines",
        json={"name": "Ibuprofen", "dosage": "200mg", "frequency": "custom", "times": ["12:00"]},
        headers=headers,
    ).json()["data"]["id"]
    client.delete(f"/api/v1/medicines/{dropped}", headers=headers)
    client.post("/api/v1/health-records", json={"title": "Blood test"}, headers=headers)

    response = client.get("/api/v1/records/summary", headers=headers)

    assert response.status_code == 200
    summary = response.json()
    assert summary["user"]["email"] == "patient@example.com"
    assert summary["details"]["full_name"] == "Pat Doe"
    assert [a["doctor_name"] for a in summary["appointments"]] == ["Dr. Smith"]
    assert [m["id"] for m in summary["medicines"]] == [kept]
    assert [r["title"] for r in summary["health_records"]] == ["Blood test"]
    assert summary["generated_at"]
