"""Patient endpoints: CRUD, search and the demographic/medical split."""

import pytest

from tests.conftest import API


def test_create_patient(client, receptionist_headers):
    response = client.post(
        f"{API}/patients",
        json={"name": "A", "age": 30, "address": "X"},
        headers=receptionist_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert isinstance(body["id"], int)
    assert body["name"] == "A"
    assert body["phone_number"] is None
    assert body["diagnosis"] is None
    assert body["notes"] is None


def test_create_patient_validation(client, receptionist_headers):
    for body in (
        {"name": "A", "age": 0, "address": "X"},
        {"name": "", "age": 30, "address": "X"},
        {"name": "A", "age": 30},
        {"age": 30, "address": "X"},
    ):
        response = client.post(f"{API}/patients", json=body, headers=receptionist_headers)
        assert response.status_code == 400


def test_create_patient_ignores_medical_fields(client, receptionist_headers):
    response = client.post(
        f"{API}/patients",
        json={"name": "A", "age": 30, "address": "X", "diagnosis": "Fake", "notes": "n"},
        headers=receptionist_headers,
    )

    assert response.status_code == 201
    assert response.json()["diagnosis"] is None
    assert response.json()["notes"] is None


def test_receptionist_then_doctor_scenario(client, receptionist_headers, doctor_headers):
    created = client.post(
        f"{API}/patients",
        json={"name": "A", "age": 30, "address": "X"},
        headers=receptionist_headers,
    )
    assert created.status_code == 201
    patient_id = created.json()["id"]

    medical = client.patch(
        f"{API}/patients/{patient_id}/medical",
        json={"diagnosis": "Flu"},
        headers=doctor_headers,
    )
    assert medical.status_code == 200
    assert medical.json()["diagnosis"] == "Flu"

    fetched = client.get(f"{API}/patients/{patient_id}", headers=receptionist_headers)
    assert fetched.status_code == 200
    assert fetched.json()["diagnosis"] == "Flu"
    assert fetched.json()["name"] == "A"


def test_doctor_cannot_create_patient(client, doctor_headers):
    response = client.post(
        f"{API}/patients",
        json={"name": "A", "age": 30, "address": "X"},
        headers=doctor_headers,
    )

    assert response.status_code == 403


def test_get_missing_patient_is_404(client, doctor_headers):
    response = client.get(f"{API}/patients/999", headers=doctor_headers)

    assert response.status_code == 404
    assert response.json() == {"error": "Patient not found"}


def test_non_integer_patient_id_is_400(client, doctor_headers):
    response = client.get(f"{API}/patients/abc", headers=doctor_headers)

    assert response.status_code == 400


@pytest.mark.parametrize("bad_id", ["0", "-1", "2147483648", "99999999999999999999"])
@pytest.mark.parametrize(
    "path",
    ["/patients/{id}", "/patients/{id}/prescriptions", "/patients/{id}/documents"],
)
def test_out_of_range_ids_are_400(client, doctor_headers, path, bad_id):
    response = client.get(API + path.format(id=bad_id), headers=doctor_headers)

    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid request body:")


def test_out_of_range_document_id_is_400(client, receptionist_headers):
    response = client.delete(f"{API}/documents/99999999999999999999", headers=receptionist_headers)

    assert response.status_code == 400


def test_list_patients_newest_first(client, receptionist_headers, doctor_headers):
    for name in ("First", "Second", "Third"):
        client.post(f"{API}/patients", json={"name": name, "age": 20, "address": "X"}, headers=receptionist_headers)

    response = client.get(f"{API}/patients", headers=doctor_headers)

    assert response.status_code == 200
    assert [p["name"] for p in response.json()] == ["Third", "Second", "First"]


def test_demographic_update_keeps_medical_fields(client, patient_id, receptionist_headers, doctor_headers):
    client.patch(
        f"{API}/patients/{patient_id}/medical",
        json={"diagnosis": "Asthma", "notes": "Inhaler"},
        headers=doctor_headers,
    )

    response = client.put(
        f"{API}/patients/{patient_id}",
        json={
            "name": "Alice Jones",
            "age": 31,
            "address": "2 High St",
            "phone_number": "555-0199",
            "diagnosis": "Overwritten?",
            "notes": "Overwritten?",
        },
        headers=receptionist_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Alice Jones"
    assert body["age"] == 31
    assert body["address"] == "2 High St"
    assert body["phone_number"] == "555-0199"
    assert body["diagnosis"] == "Asthma"
    assert body["notes"] == "Inhaler"


def test_medical_update_keeps_demographic_fields(client, patient_id, doctor_headers):
    response = client.patch(
        f"{API}/patients/{patient_id}/medical",
        json={"diagnosis": "Flu", "notes": "Rest", "name": "Hacked", "age": 99, "address": "Nowhere"},
        headers=doctor_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["diagnosis"] == "Flu"
    assert body["notes"] == "Rest"
    assert body["name"] == "Alice Smith"
    assert body["age"] == 30
    assert body["address"] == "1 Main St"
    assert body["phone_number"] == "555-0100"


def test_medical_update_requires_diagnosis(client, patient_id, doctor_headers):
    response = client.patch(
        f"{API}/patients/{patient_id}/medical",
        json={"notes": "only notes"},
        headers=doctor_headers,
    )

    assert response.status_code == 400


def test_update_missing_patient_is_404(client, receptionist_headers, doctor_headers):
    put = client.put(
        f"{API}/patients/42",
        json={"name": "A", "age": 30, "address": "X"},
        headers=receptionist_headers,
    )
    patch = client.patch(f"{API}/patients/42/medical", json={"diagnosis": "Flu"}, headers=doctor_headers)

    assert put.status_code == 404
    assert patch.status_code == 404


def test_delete_patient(client, patient_id, receptionist_headers):
    response = client.delete(f"{API}/patients/{patient_id}", headers=receptionist_headers)

    assert response.status_code == 204
    assert response.content == b""
    assert client.get(f"{API}/patients/{patient_id}", headers=receptionist_headers).status_code == 404
    assert client.delete(f"{API}/patients/{patient_id}", headers=receptionist_headers).status_code == 404


def test_search_is_case_insensitive_substring_sorted(client, receptionist_headers, doctor_headers):
    for name in ("Zoe Carter", "adam carson", "Bob Smith", "Carla Brown"):
        client.post(f"{API}/patients", json={"name": name, "age": 20, "address": "X"}, headers=receptionist_headers)

    response = client.get(f"{API}/patients/search", params={"q": "CAR"}, headers=doctor_headers)

    assert response.status_code == 200
    assert [p["name"] for p in response.json()] == ["adam carson", "Carla Brown", "Zoe Carter"]


def test_search_without_query_is_400(client, receptionist_headers):
    for params in ({}, {"q": ""}, {"q": "   "}):
        response = client.get(f"{API}/patients/search", params=params, headers=receptionist_headers)

        assert response.status_code == 400
        assert response.json() == {"error": "Query parameter 'q' is required"}
