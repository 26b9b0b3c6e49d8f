"""
Tests for the doctor endpoints, the doctor cascade and the weekly schedule view.
"""
from clinic.config import settings

API = settings.api_prefix


def test_create_and_get_doctor(client, make_doctor):
    doctor = make_doctor(name="Dr. House", specialization="Diagnostics")

    assert doctor["name"] == "Dr. House"
    assert doctor["verified"] is False
    assert "password" not in doctor

    fetched = client.get(f"{API}/doctors/{doctor['id']}").json()
    assert fetched["specialization"] == "Diagnostics"
    assert fetched["appointments"] == []
    assert fetched["ratings"] == []
    assert fetched["averageRating"] is None


def test_duplicate_email_conflicts(client, make_doctor):
    doctor = make_doctor()

    response = client.post(f"{API}/doctors", json={
        "email": doctor["email"],
        "password": "secret123",
        "specialization": "Dermatology",
    })

    assert response.status_code == 409
    assert response.json()["error"] == "Email already in use"


def test_list_doctors_filters(client, make_doctor):
    make_doctor(name="Anna Heart", specialization="Cardiology")
    skin = make_doctor(name="Ben Skin", specialization="Dermatology")

    by_specialization = client.get(f"{API}/doctors", params={"specialization": "derma"}).json()
    assert [d["id"] for d in by_specialization] == [skin["id"]]

    by_name = client.get(f"{API}/doctors", params={"search": "ben"}).json()
    assert [d["id"] for d in by_name] == [skin["id"]]


def test_patch_doctor(client, make_doctor):
    doctor = make_doctor()
    other = make_doctor()

    response = client.patch(f"{API}/doctors/{doctor['id']}", json={"verified": True, "name": "Dr. Renamed"})
    assert response.status_code == 200
    assert response.json()["verified"] is True
    assert response.json()["name"] == "Dr. Renamed"
    assert response.json()["specialization"] == doctor["specialization"]

    clash = client.patch(f"{API}/doctors/{doctor['id']}", json={"email": other["email"]})
    assert clash.status_code == 409


def test_unknown_doctor(client):
    assert client.get(f"{API}/doctors/77").status_code == 404
    assert client.delete(f"{API}/doctors/77").json() == {"error": "Doctor not found"}


def test_delete_doctor_cascades(client, make_patient, make_doctor, make_appointment):
    patient = make_patient()
    doctor = make_doctor()
    colleague = make_doctor()
    visit = make_appointment(
        patient["id"],
        doctorId=doctor["id"],
        dateTime="2099-01-01T10:00:00Z",
        prescriptions=[{"medication": "Aspirin", "dosage": "100mg"}],
        tests=[{"testType": "ECG", "datePerformed": "2030-01-01T09:00:00Z"}],
    )
    follow_up = make_appointment(patient["id"], doctorId=colleague["id"], relatedAppointmentId=visit["id"])
    rating = client.post(f"{API}/ratings", json={"doctorId": doctor["id"], "stars": 5})
    assert rating.status_code == 201

    response = client.delete(f"{API}/doctors/{doctor['id']}")

    assert response.status_code == 200
    assert response.json()["message"] == "Doctor and associated records deleted successfully"
    assert client.get(f"{API}/doctors/{doctor['id']}").status_code == 404
    assert client.get(f"{API}/appointments/{visit['id']}").status_code == 404
    assert client.get(f"{API}/prescriptions").json()["pagination"]["total"] == 0
    assert client.get(f"{API}/tests").json()["pagination"]["total"] == 0
    assert client.get(f"{API}/ratings", params={"doctorId": doctor["id"]}).json() == []

    # Unrelated records survive
    assert client.get(f"{API}/patients/{patient['id']}").status_code == 200
    survivor = client.get(f"{API}/appointments/{follow_up['id']}").json()
    assert survivor["relatedToIds"] == []

    # The account is gone too, so the email is free again
    reused = client.post(f"{API}/doctors", json={
        "email": doctor["email"],
        "password": "secret123",
        "specialization": "Cardiology",
    })
    assert reused.status_code == 201


def test_doctor_appointments_filters_and_order(client, make_patient, make_doctor, make_appointment):
    patient = make_patient()
    doctor = make_doctor()
    early = make_appointment(patient["id"], doctorId=doctor["id"], dateTime="2030-01-05T10:00:00Z")
    late = make_appointment(patient["id"], doctorId=doctor["id"], dateTime="2030-02-05T10:00:00Z", status="PENDING")

    ascending = client.get(f"{API}/doctors/{doctor['id']}/appointments").json()
    assert [a["id"] for a in ascending] == [early["id"], late["id"]]

    descending = client.get(f"{API}/doctors/{doctor['id']}/appointments", params={"order": "desc"}).json()
    assert [a["id"] for a in descending] == [late["id"], early["id"]]

    pending = client.get(f"{API}/doctors/{doctor['id']}/appointments", params={"status": "PENDING"}).json()
    assert [a["id"] for a in pending] == [late["id"]]

    january = client.get(f"{API}/doctors/{doctor['id']}/appointments", params={
        "startDate": "2030-01-01T00:00:00Z",
        "endDate": "2030-01-31T00:00:00Z",
    }).json()
    assert [a["id"] for a in january] == [early["id"]]


def test_weekly_schedule(client, make_patient, make_doctor, make_appointment):
    patient = make_patient(name="Sam Lee", age=40, gender="male")
    doctor = make_doctor()
    # 2030-01-07 is a Monday
    monday = make_appointment(
        patient["id"],
        doctorId=doctor["id"],
        dateTime="2030-01-07T14:30:00Z",
        prescriptions=[{"medication": "Vitamin D", "dosage": "1000IU"}],
    )
    make_appointment(patient["id"], doctorId=doctor["id"], dateTime="2030-01-14T14:30:00Z")
    make_appointment(patient["id"], doctorId=doctor["id"], dateTime="2030-01-12T10:00:00Z")
    make_appointment(patient["id"], doctorId=doctor["id"])

    response = client.get(f"{API}/doctors/{doctor['id']}/schedule", params={"start": "2030-01-07"})

    assert response.status_code == 200
    data = response.json()
    assert data["startDate"] == "2030-01-07"
    assert data["endDate"] == "2030-01-13"
    assert list(data["days"]) == [
        "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
    ]

    monday_bucket = data["days"]["Monday"]
    assert monday_bucket["workingHours"] == "2:00 PM - 4:00 PM"
    assert monday_bucket["newCount"] == 1
    assert len(monday_bucket["appointments"]) == 1
    visit = monday_bucket["appointments"][0]
    assert visit["id"] == monday["id"]
    assert visit["appointmentTime"] == "2:30 PM"
    assert visit["patientName"] == "Sam Lee"
    assert visit["condition"] == "General Checkup"
    assert visit["prescriptions"] == ["Vitamin D"]
    assert visit["isNew"] is True

    assert data["days"]["Saturday"]["workingHours"] == "Day off"
    assert data["days"]["Saturday"]["appointments"] == []


def test_weekly_schedule_unknown_doctor(client):
    assert client.get(f"{API}/doctors/5/schedule").status_code == 404


def test_failed_doctor_delete_rolls_back(client, make_patient, make_doctor, make_appointment, fail_account_delete):
    patient = make_patient()
    doctor = make_doctor()
    visit = make_appointment(
        patient["id"],
        doctorId=doctor["id"],
        prescriptions=[{"medication": "Aspirin", "dosage": "100mg"}],
    )
    client.post(f"{API}/ratings", json={"doctorId": doctor["id"], "stars": 5})

    response = client.delete(f"{API}/doctors/{doctor['id']}")

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to delete doctor", "details": "boom"}
    # Nothing from the earlier cascade steps was kept
    assert client.get(f"{API}/doctors/{doctor['id']}").status_code == 200
    kept = client.get(f"{API}/appointments/{visit['id']}").json()
    assert kept["doctorId"] == doctor["id"]
    assert client.get(f"{API}/prescriptions").json()["pagination"]["total"] == 1
    assert len(client.get(f"{API}/ratings", params={"doctorId": doctor["id"]}).json()) == 1
