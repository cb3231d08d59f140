from database import get_patient


def test_beds_sorted_by_room_then_number(client):
    beds = client.get("/beds").json()["data"]
    keys = [(bed["roomNumber"], bed["bedNumber"]) for bed in beds]

    assert keys == sorted(keys)
    assert keys[0] == ("10", 1)
    assert keys[9] == ("10", 10)
    assert keys[10] == ("209", 1)
    assert keys[-1] == ("304", 10)


def test_discharge_frees_bed_and_patient(client):
    patient_id = client.post("/patients", json={"name": "Sam", "bedId": "R10-B4"}).json()["data"]["id"]

    response = client.post("/beds/discharge", json={"bedId": "R10-B4"})
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Patient discharged"}

    patient = client.get(f"/patients/{patient_id}").json()["data"]
    assert patient["status"] == "Discharged"
    assert patient["assignedBedId"] is None

    bed = next(b for b in client.get("/beds").json()["data"] if b["bedId"] == "R10-B4")
    assert bed["isOccupied"] is False
    assert bed["currentPatientId"] is None


def test_discharge_empty_bed(client):
    other_id = client.post("/patients", json={"name": "Kim", "bedId": "R10-B5"}).json()["data"]["id"]

    response = client.post("/beds/discharge", json={"bedId": "R10-B6"})
    assert response.json()["success"] is True

    assert get_patient(other_id).status.value == "Stable"
    bed = next(b for b in client.get("/beds").json()["data"] if b["bedId"] == "R10-B6")
    assert bed["isOccupied"] is False


def test_discharge_unknown_bed_succeeds(client):
    response = client.post("/beds/discharge", json={"bedId": "R1-B99"})
    assert response.status_code == 200
    assert response.json()["success"] is True


def test_discharge_without_bed_id_changes_nothing(client):
    patient_id = client.post("/patients", json={"name": "Ana", "bedId": "R209-B1"}).json()["data"]["id"]

    response = client.post("/beds/discharge", json={})
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Patient discharged"}

    assert get_patient(patient_id).status.value == "Stable"
    bed = next(b for b in client.get("/beds").json()["data"] if b["bedId"] == "R209-B1")
    assert bed["isOccupied"] is True
