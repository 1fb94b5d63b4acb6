PATIENT = {
    "HospNo": "H-1001",
    "name": "Asha Rao",
    "date": "2024-05-02",
    "age": 52,
    "gender": "Female",
    "blood_group": "B+",
    "height": 158,
    "weight": 64.5,
    "department": "Endocrinology",
    "phone": "9876543210",
    "address": "12 Lake Road",
}


def test_register_and_get_patient(client):
    r = client.post("/api/op-patients/patient-registration", json=PATIENT)
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["success"] is True
    assert body["message"] == "Patient saved successfully"
    assert isinstance(body["patientId"], int)

    r = client.get("/api/op-patients/H-1001")
    assert r.status_code == 200
    patient = r.json()["patient"]
    assert patient["HospNo"] == "H-1001"
    assert patient["name"] == "Asha Rao"
    assert patient["weight"] == 64.5


def test_lookup_trims_hospital_number(client):
    client.post("/api/op-patients/patient-registration", json=PATIENT)
    r = client.get("/api/op-patients/%20H-1001%20")
    assert r.status_code == 200
    assert r.json()["patient"]["HospNo"] == "H-1001"


def test_duplicate_hospital_number_conflicts(client):
    assert client.post("/api/op-patients/patient-registration", json=PATIENT).status_code == 201

    r = client.post(
        "/api/op-patients/patient-registration", json={**PATIENT, "name": "Someone Else"}
    )
    assert r.status_code == 409
    assert r.json()["error"] == "Hospital Number already exists."

    patients = client.get("/api/op-patients/").json()["data"]
    assert [p["name"] for p in patients] == ["Asha Rao"]


def test_missing_required_fields(client):
    payload = {k: v for k, v in PATIENT.items() if k not in ("age", "gender")}
    r = client.post("/api/op-patients/patient-registration", json=payload)
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["error"].startswith("Missing required fields")
    assert "age" in body["error"]


def test_blank_optional_fields_are_stored_as_null(client):
    payload = {**PATIENT, "phone": "", "blood_group": "", "height": ""}
    assert client.post("/api/op-patients/patient-registration", json=payload).status_code == 201
    patient = client.get("/api/op-patients/H-1001").json()["patient"]
    assert patient["phone"] is None
    assert patient["blood_group"] is None
    assert patient["height"] is None


def test_unknown_patient_not_found(client):
    r = client.get("/api/op-patients/NOPE")
    assert r.status_code == 404
    assert r.json()["error"] == "Patient not found"
