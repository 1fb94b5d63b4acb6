import json

from conftest import stored_files
from services.file_storage import OP_REPORTS

URL = "/api/op-screening"


def screening_form(**overrides):
    form = {
        "HospNo": "H-2002",
        "name": "Lata Shah",
        "date": "2024-07-01",
        "age": "45",
        "gender": "Female",
        "bmi": "31.2",
        "dietary_advice": "Low glycaemic index diet",
        "customFields": json.dumps(
            [
                {"fieldName": "HbA1c", "fieldValue": "7.9"},
                {"fieldName": "  ", "fieldValue": "dropped"},
            ]
        ),
    }
    form.update(overrides)
    return form


def test_create_and_fetch_latest(client):
    r = client.post(
        f"{URL}/nutritional-screening",
        data=screening_form(),
        files={"report": ("labs.png", b"\x89PNG", "image/png")},
    )
    assert r.status_code == 201, r.text
    assert r.json()["message"] == "Screening and custom fields saved"

    r = client.get(f"{URL}/H-2002")
    assert r.status_code == 200
    body = r.json()
    screening = body["screening"]
    assert screening["bmi"] == 31.2

    files = stored_files(OP_REPORTS)
    assert screening["report_filename"] == files[0]
    assert screening["report_path"].endswith(f"{OP_REPORTS}/{files[0]}")
    assert body["customFields"] == [{"field_name": "HbA1c", "field_value": "7.9"}]

    r = client.get(f"{URL}/attachment/{files[0]}")
    assert r.status_code == 200
    assert r.content == b"\x89PNG"


def test_latest_screening_wins(client):
    client.post(f"{URL}/nutritional-screening", data=screening_form(bmi="33"))
    client.post(f"{URL}/nutritional-screening", data=screening_form(bmi="30.5"))

    assert client.get(f"{URL}/H-2002").json()["screening"]["bmi"] == 30.5


def test_reserved_names_kept_by_default(client):
    form = screening_form(
        customFields=json.dumps([{"fieldName": "diagnosis", "fieldValue": "note"}])
    )
    client.post(f"{URL}/nutritional-screening", data=form)
    assert client.get(f"{URL}/H-2002").json()["customFields"] == [
        {"field_name": "diagnosis", "field_value": "note"}
    ]


def test_unknown_hospital_number_not_found(client):
    r = client.get(f"{URL}/H-0000")
    assert r.status_code == 404
    assert r.json()["error"] == "No screening record found"


def test_required_fields(client):
    form = screening_form()
    del form["HospNo"]
    r = client.post(f"{URL}/nutritional-screening", data=form)
    assert r.status_code == 400
    assert client.get(f"{URL}/").json()["data"] == []


def test_invalid_numeric_value(client):
    r = client.post(f"{URL}/nutritional-screening", data=screening_form(age="forty"))
    assert r.status_code == 400
    assert "age" in r.json()["error"]
