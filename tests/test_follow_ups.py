from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from conftest import stored_files
from services.file_storage import FOLLOW_UPS

URL = "/api/follow-ups"


def follow_up_form(**overrides):
    form = {
        "IPNo": "IP-501",
        "name": "Ravi Kumar",
        "date": "2024-06-12",
        "diagnosis": "CKD stage 3",
        "notes": "Tolerating renal diet",
        "actions": "Reduce potassium",
        "comments": "Review in a week",
    }
    form.update(overrides)
    return form


def create(client, **overrides):
    r = client.post(f"{URL}/", data=follow_up_form(**overrides))
    assert r.status_code == 201, r.text
    return r.json()["data"]


def test_create_and_get(client):
    data = create(client)
    assert data["IPNo"] == "IP-501"
    assert data["date"] == "2024-06-12"
    assert data["attachment"] is None

    r = client.get(f"{URL}/{data['id']}")
    assert r.status_code == 200
    assert r.json()["data"]["notes"] == "Tolerating renal diet"


def test_required_fields(client):
    r = client.post(f"{URL}/", data=follow_up_form(date=""))
    assert r.status_code == 400
    assert r.json()["error"] == "IPNo, name, and date are required fields"


def test_disallowed_attachment_rejected_before_write(client):
    r = client.post(
        f"{URL}/",
        data=follow_up_form(),
        files={"attachment": ("tool.exe", b"MZ", "application/octet-stream")},
    )
    assert r.status_code == 400
    assert r.json()["error"] == "Only PDF, Word, JPG, and PNG files are allowed"
    assert client.get(f"{URL}/").json()["data"] == []
    assert stored_files(FOLLOW_UPS) == []


def test_extension_check_is_case_insensitive(client):
    r = client.post(
        f"{URL}/",
        data=follow_up_form(),
        files={"attachment": ("SCAN.JPG", b"jpeg", "image/jpeg")},
    )
    assert r.status_code == 201, r.text
    name = r.json()["data"]["attachment"]
    assert stored_files(FOLLOW_UPS) == [name]

    r = client.get(f"{URL}/attachment/{name}")
    assert r.status_code == 200
    assert r.content == b"jpeg"


def test_patient_follow_ups_newest_first(client):
    create(client, date="2024-06-01")
    create(client, date="2024-06-20")
    create(client, date="2024-06-10")
    create(client, IPNo="IP-777", date="2024-06-30")

    r = client.get(f"{URL}/patient/IP-501")
    assert r.status_code == 200
    assert [f["date"] for f in r.json()["data"]] == [
        "2024-06-20",
        "2024-06-10",
        "2024-06-01",
    ]
    assert len(client.get(f"{URL}/").json()["data"]) == 4


def test_update_keeps_values_for_empty_input(client):
    data = create(client)

    r = client.put(
        f"{URL}/{data['id']}",
        data={"notes": "", "comments": "Discharged", "date": ""},
    )
    assert r.status_code == 200, r.text
    updated = r.json()["data"]
    assert updated["notes"] == "Tolerating renal diet"
    assert updated["comments"] == "Discharged"
    assert updated["date"] == "2024-06-12"
    assert updated["name"] == "Ravi Kumar"


def test_update_replaces_attachment_only_on_upload(client):
    r = client.post(
        f"{URL}/",
        data=follow_up_form(),
        files={"attachment": ("first.pdf", b"one", "application/pdf")},
    )
    data = r.json()["data"]
    first = data["attachment"]

    r = client.put(f"{URL}/{data['id']}", data={"actions": "Add supplements"})
    assert r.json()["data"]["attachment"] == first

    r = client.put(
        f"{URL}/{data['id']}",
        data={},
        files={"attachment": ("second.docx", b"two", "application/octet-stream")},
    )
    second = r.json()["data"]["attachment"]
    assert second != first
    # The replaced file stays on disk
    assert stored_files(FOLLOW_UPS) == sorted([first, second])


def test_update_unknown_record(client):
    r = client.put(f"{URL}/999", data={"notes": "x"})
    assert r.status_code == 404
    assert r.json()["error"] == "Follow-up record not found"


def test_missing_attachment_download(client):
    assert client.get(f"{URL}/attachment/none.pdf").status_code == 404


def test_failed_create_keeps_other_record_attachment(client, mocker):
    clock = mocker.patch("services.file_storage.time")
    clock.time.return_value = 1718000000.0

    r = client.post(
        f"{URL}/",
        data=follow_up_form(),
        files={"attachment": ("scan.pdf", b"one", "application/pdf")},
    )
    first = r.json()["data"]["attachment"]

    mocker.patch.object(
        AsyncSession, "commit", side_effect=SQLAlchemyError("commit failed")
    )
    r = client.post(
        f"{URL}/",
        data=follow_up_form(IPNo="IP-777"),
        files={"attachment": ("scan.pdf", b"two", "application/pdf")},
    )
    assert r.status_code == 500
    mocker.stopall()

    assert stored_files(FOLLOW_UPS) == [first]
    r = client.get(f"{URL}/attachment/{first}")
    assert r.status_code == 200
    assert r.content == b"one"
