"""
Tests for the standalone prescription and medical test endpoints.
"""
from clinic.config import settings

API = settings.api_prefix


def test_create_prescription_for_appointment(client, make_patient, make_appointment):
    patient = make_patient()
    appointment = make_appointment(patient["id"])

    response = client.post(f"{API}/prescriptions", json={
        "appointmentId": appointment["id"],
        "medication": "Metformin",
        "dosage": "500mg",
        "instructions": "With meals",
    })

    assert response.status_code == 201
    assert response.json()["appointmentId"] == appointment["id"]
    shown = client.get(f"{API}/appointments/{appointment['id']}").json()
    assert [p["medication"] for p in shown["prescriptions"]] == ["Metformin"]


def test_prescription_for_missing_appointment(client):
    response = client.post(f"{API}/prescriptions", json={
        "appointmentId": 99,
        "medication": "Metformin",
        "dosage": "500mg",
    })

    assert response.status_code == 404
    assert response.json()["error"] == "Appointment not found"
    assert "appointmentId" in response.json()["details"]


def test_prescription_update_and_delete(client, make_patient, make_appointment):
    patient = make_patient()
    appointment = make_appointment(patient["id"], prescriptions=[{"medication": "Old", "dosage": "1"}])
    prescription_id = appointment["prescriptions"][0]["id"]

    updated = client.put(f"{API}/prescriptions/{prescription_id}", json={"dosage": "2"})
    assert updated.status_code == 200
    assert updated.json()["dosage"] == "2"
    assert updated.json()["medication"] == "Old"

    moved = client.put(f"{API}/prescriptions/{prescription_id}", json={"appointmentId": 1234})
    assert moved.status_code == 404

    deleted = client.delete(f"{API}/prescriptions/{prescription_id}")
    assert deleted.status_code == 200
    assert client.get(f"{API}/prescriptions/{prescription_id}").status_code == 404


def test_prescriptions_are_paginated_and_filtered(client, make_patient, make_appointment):
    patient = make_patient()
    first = make_appointment(patient["id"], prescriptions=[
        {"medication": "Ibuprofen", "dosage": "200mg"},
        {"medication": "Omeprazole", "dosage": "20mg"},
    ])
    make_appointment(patient["id"], prescriptions=[{"medication": "Ibuprofen", "dosage": "400mg"}])

    by_appointment = client.get(f"{API}/prescriptions", params={"appointmentId": first["id"]}).json()
    assert by_appointment["pagination"]["total"] == 2

    by_medication = client.get(f"{API}/prescriptions", params={"medication": "ibu", "limit": 1}).json()
    assert by_medication["pagination"] == {"page": 1, "limit": 1, "total": 2, "totalPages": 2}
    assert by_medication["items"][0]["dosage"] == "400mg"


def test_medical_tests_crud(client, make_patient, make_appointment):
    patient = make_patient()
    appointment = make_appointment(patient["id"])

    created = client.post(f"{API}/tests", json={
        "appointmentId": appointment["id"],
        "testType": "X-Ray",
        "datePerformed": "2030-03-01T08:00:00Z",
    })
    assert created.status_code == 201
    test_id = created.json()["id"]

    updated = client.put(f"{API}/tests/{test_id}", json={"results": "Clear"})
    assert updated.json()["results"] == "Clear"
    assert updated.json()["testType"] == "X-Ray"

    march = client.get(f"{API}/tests", params={
        "startDate": "2030-03-01T00:00:00Z",
        "endDate": "2030-03-31T00:00:00Z",
        "testType": "x-ray",
    }).json()
    assert [t["id"] for t in march["items"]] == [test_id]

    april = client.get(f"{API}/tests", params={"startDate": "2030-04-01T00:00:00Z"}).json()
    assert april["items"] == []

    assert client.delete(f"{API}/tests/{test_id}").status_code == 200
    assert client.get(f"{API}/tests/{test_id}").json() == {"error": "Medical test not found"}


def test_medical_test_requires_date(client, make_patient, make_appointment):
    patient = make_patient()
    appointment = make_appointment(patient["id"])

    response = client.post(f"{API}/tests", json={"appointmentId": appointment["id"], "testType": "MRI"})

    assert response.status_code == 400
    assert response.json()["details"][0]["path"] == "datePerformed"
