"""
Tests for the patient endpoints.
"""
from clinic.config import settings
from clinic.core.security import verify_password
from clinic.users.models import User

API = settings.api_prefix


def test_register_patient(client):
    response = client.post(f"{API}/patients", json={
        "email": "jane@clinic.example.com",
        "password": "secret123",
        "name": "Jane",
        "age": 29,
        "gender": "female",
    })

    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "jane@clinic.example.com"
    assert data["age"] == 29
    assert "password" not in data


def test_register_rejects_bad_payload(client):
    response = client.post(f"{API}/patients", json={"email": "not-an-email", "password": "123"})

    assert response.status_code == 400
    paths = {item["path"] for item in response.json()["details"]}
    assert paths == {"email", "password"}


def test_duplicate_email_conflicts(client, make_patient):
    patient = make_patient()

    response = client.post(f"{API}/patients", json={"email": patient["email"], "password": "secret123"})

    assert response.status_code == 409


def test_update_patient(client, make_patient):
    patient = make_patient(age=30)
    other = make_patient()

    response = client.put(f"{API}/patients/{patient['id']}", json={"age": 31, "name": "New Name"})
    assert response.status_code == 200
    assert response.json()["age"] == 31
    assert response.json()["name"] == "New Name"
    assert response.json()["gender"] == patient["gender"]

    clash = client.put(f"{API}/patients/{patient['id']}", json={"email": other["email"]})
    assert clash.status_code == 409
    assert client.get(f"{API}/patients/{patient['id']}").json()["email"] == patient["email"]


def test_list_and_search_patients(client, make_patient):
    make_patient(name="Alice Smith")
    bob = make_patient(name="Bob Jones")

    assert len(client.get(f"{API}/patients").json()) == 2
    found = client.get(f"{API}/patients", params={"search": "jones"}).json()
    assert [p["id"] for p in found] == [bob["id"]]


def test_patient_appointments_newest_first(client, make_patient, make_appointment):
    patient = make_patient()
    older = make_appointment(patient["id"], dateTime="2030-01-01T10:00:00Z")
    newer = make_appointment(patient["id"], dateTime="2030-06-01T10:00:00Z")

    listed = client.get(f"{API}/patients/{patient['id']}/appointments").json()
    assert [a["id"] for a in listed] == [newer["id"], older["id"]]

    detail = client.get(f"{API}/patients/{patient['id']}").json()
    assert [a["id"] for a in detail["appointments"]] == [newer["id"], older["id"]]


def test_delete_patient_cascades(client, make_patient, make_doctor, make_appointment):
    patient = make_patient()
    other = make_patient()
    doctor = make_doctor()
    visit = make_appointment(
        patient["id"],
        doctorId=doctor["id"],
        prescriptions=[{"medication": "Amoxicillin", "dosage": "250mg"}],
    )
    other_visit = make_appointment(other["id"], relatedAppointmentId=visit["id"])

    response = client.delete(f"{API}/patients/{patient['id']}")

    assert response.status_code == 200
    assert response.json()["message"] == "Patient and associated records deleted successfully"
    assert client.get(f"{API}/patients/{patient['id']}").status_code == 404
    assert client.get(f"{API}/appointments/{visit['id']}").status_code == 404
    assert client.get(f"{API}/prescriptions").json()["items"] == []
    assert client.get(f"{API}/doctors/{doctor['id']}").status_code == 200
    assert client.get(f"{API}/appointments/{other_visit['id']}").json()["relatedToIds"] == []


def test_unknown_patient(client):
    assert client.get(f"{API}/patients/9").json() == {"error": "Patient not found"}
    assert client.get(f"{API}/patients/9/appointments").status_code == 404


def test_password_is_stored_hashed(client, db):
    client.post(f"{API}/patients", json={"email": "hash@clinic.example.com", "password": "secret123"})

    user = db.query(User).filter(User.email == "hash@clinic.example.com").one()
    assert user.password != "secret123"
    assert verify_password("secret123", user.password)
