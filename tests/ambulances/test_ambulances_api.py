"""
Tests for the ambulance endpoints and the guarded ambulance deletion.
"""
from datetime import datetime, timedelta, timezone

from clinic.config import settings

API = settings.api_prefix


def _iso(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")


def test_create_ambulance_defaults_to_available(make_ambulance):
    ambulance = make_ambulance(name="Rescue 1")

    assert ambulance["status"] == "AVAILABLE"
    assert ambulance["name"] == "Rescue 1"
    assert ambulance["latitude"] == 52.52


def test_list_is_paginated(client, make_ambulance):
    for number in range(3):
        make_ambulance(name=f"Unit {number}")

    response = client.get(f"{API}/ambulances", params={"page": 2, "limit": 2})

    assert response.status_code == 200
    data = response.json()
    assert data["pagination"] == {"page": 2, "limit": 2, "total": 3, "totalPages": 2}
    assert [a["name"] for a in data["items"]] == ["Unit 2"]


def test_list_filters_by_status_and_search(client, make_ambulance):
    make_ambulance(name="North Unit")
    busy = make_ambulance(name="South Unit", status="ON_DUTY")

    on_duty = client.get(f"{API}/ambulances", params={"status": "ON_DUTY"}).json()
    assert [a["id"] for a in on_duty["items"]] == [busy["id"]]

    found = client.get(f"{API}/ambulances", params={"search": "south"}).json()
    assert [a["id"] for a in found["items"]] == [busy["id"]]


def test_limit_above_maximum_is_rejected(client):
    response = client.get(f"{API}/ambulances", params={"limit": settings.max_page_size + 1})

    assert response.status_code == 400
    assert response.json()["details"][0]["path"] == "limit"


def test_update_ambulance(client, make_ambulance):
    ambulance = make_ambulance()

    response = client.put(f"{API}/ambulances/{ambulance['id']}", json={
        "status": "ON_DUTY",
        "latitude": 48.85,
        "longitude": 2.35,
    })

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ON_DUTY"
    assert data["latitude"] == 48.85
    assert data["name"] == ambulance["name"]


def test_delete_blocked_by_future_appointment(client, make_patient, make_ambulance, make_appointment):
    patient = make_patient()
    ambulance = make_ambulance()
    tomorrow = datetime.now(timezone.utc) + timedelta(days=1)
    appointment = make_appointment(patient["id"], ambulanceId=ambulance["id"], dateTime=_iso(tomorrow))

    response = client.delete(f"{API}/ambulances/{ambulance['id']}")

    assert response.status_code == 400
    assert response.json() == {
        "error": "Cannot delete ambulance with future appointments",
        "details": "1 future appointment exists",
    }
    # Nothing changed
    assert client.get(f"{API}/ambulances/{ambulance['id']}").status_code == 200
    kept = client.get(f"{API}/appointments/{appointment['id']}").json()
    assert kept["ambulanceId"] == ambulance["id"]
    assert kept["status"] == "NEW"


def test_delete_message_pluralises(client, make_patient, make_ambulance, make_appointment):
    patient = make_patient()
    ambulance = make_ambulance()
    soon = datetime.now(timezone.utc) + timedelta(days=2)
    make_appointment(patient["id"], ambulanceId=ambulance["id"], dateTime=_iso(soon))
    make_appointment(patient["id"], ambulanceId=ambulance["id"], dateTime=_iso(soon + timedelta(hours=1)))

    response = client.delete(f"{API}/ambulances/{ambulance['id']}")

    assert response.json()["details"] == "2 future appointments exist"


def test_canceled_future_appointment_does_not_block(client, make_patient, make_ambulance, make_appointment):
    patient = make_patient()
    ambulance = make_ambulance()
    tomorrow = datetime.now(timezone.utc) + timedelta(days=1)
    make_appointment(patient["id"], ambulanceId=ambulance["id"], dateTime=_iso(tomorrow), status="CANCELED")

    response = client.delete(f"{API}/ambulances/{ambulance['id']}")

    assert response.status_code == 200


def test_delete_cancels_and_detaches_past_appointments(client, make_patient, make_ambulance, make_appointment):
    patient = make_patient()
    ambulance = make_ambulance()
    last_week = datetime.now(timezone.utc) - timedelta(days=7)
    past = make_appointment(patient["id"], ambulanceId=ambulance["id"], dateTime=_iso(last_week))
    unscheduled = make_appointment(patient["id"], ambulanceId=ambulance["id"])
    client.post(f"{API}/ratings", json={"ambulanceId": ambulance["id"], "stars": 4})

    response = client.delete(f"{API}/ambulances/{ambulance['id']}")

    assert response.status_code == 200
    assert response.json()["message"] == "Ambulance deleted successfully"
    assert client.get(f"{API}/ambulances/{ambulance['id']}").status_code == 404
    for kept_id in (past["id"], unscheduled["id"]):
        kept = client.get(f"{API}/appointments/{kept_id}").json()
        assert kept["status"] == "CANCELED"
        assert kept["ambulanceId"] is None
    assert client.get(f"{API}/ratings", params={"ambulanceId": ambulance["id"]}).json() == []


def test_delete_unknown_ambulance(client):
    response = client.delete(f"{API}/ambulances/31")

    assert response.status_code == 404
    assert response.json()["error"] == "Ambulance not found"


def test_failed_ambulance_delete_rolls_back(client, make_patient, make_ambulance, make_appointment, fail_account_delete):
    patient = make_patient()
    ambulance = make_ambulance()
    last_week = datetime.now(timezone.utc) - timedelta(days=7)
    past = make_appointment(patient["id"], ambulanceId=ambulance["id"], dateTime=_iso(last_week))
    client.post(f"{API}/ratings", json={"ambulanceId": ambulance["id"], "stars": 4})

    response = client.delete(f"{API}/ambulances/{ambulance['id']}")

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to delete ambulance", "details": "boom"}
    # The cancellation of its appointments was undone with the rest
    assert client.get(f"{API}/ambulances/{ambulance['id']}").status_code == 200
    kept = client.get(f"{API}/appointments/{past['id']}").json()
    assert kept["ambulanceId"] == ambulance["id"]
    assert kept["status"] == "NEW"
    assert len(client.get(f"{API}/ratings", params={"ambulanceId": ambulance["id"]}).json()) == 1
