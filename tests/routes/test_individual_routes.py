"""Tests for the individual donor routes."""

from datetime import date

from inkind_app.models import Donation, Individual


def test_create_individual(client):
    response = client.post(
        "/individual",
        json={
            "individual_first_name": " Grace ",
            "individual_last_name": "Hopper",
            "state": "va",
            "zip": "22201",
            "email": "Grace@Example.com",
        },
    )

    assert response.status_code == 201
    data = response.get_json()
    assert data["individual_first_name"] == "Grace"
    assert data["state"] == "VA"
    assert data["email"] == "grace@example.com"
    assert data["address"] is None


def test_create_requires_names(client):
    response = client.post("/individual", json={"individual_last_name": "Hopper"})

    assert response.status_code == 400
    assert response.get_json() == {"error": "individual_first_name is required."}


def test_create_validates_contact_fields(client):
    response = client.post(
        "/individual",
        json={"individual_first_name": "Grace", "individual_last_name": "Hopper", "zip": "2220"},
    )
    assert response.status_code == 400
    assert response.get_json() == {"error": "zip must be exactly 5 digits."}


def test_list_ordered_by_last_then_first_name(client):
    for first, last in (("Grace", "Hopper"), ("Ada", "Lovelace"), ("Alan", "Hopper")):
        client.post("/individual", json={"individual_first_name": first, "individual_last_name": last})

    names = [(i["individual_last_name"], i["individual_first_name"]) for i in client.get("/individual").get_json()]
    assert names == [("Hopper", "Alan"), ("Hopper", "Grace"), ("Lovelace", "Ada")]


def test_get_individual(client, test_individual):
    response = client.get(f"/individual/{test_individual.individual_id}")
    assert response.status_code == 200
    assert response.get_json()["email"] == "ada@example.com"

    assert client.get("/individual/999").status_code == 404
    assert client.get("/individual/-1").status_code == 400


def test_patch_individual(client, test_individual):
    response = client.patch(f"/individual/{test_individual.individual_id}", json={"city": "Chicago", "state": "il"})

    assert response.status_code == 200
    data = response.get_json()
    assert data["city"] == "Chicago"
    assert data["individual_last_name"] == "Lovelace"


def test_patch_cannot_blank_required_name(client, test_individual):
    response = client.patch(f"/individual/{test_individual.individual_id}", json={"individual_first_name": ""})
    assert response.status_code == 400
    assert response.get_json() == {"error": "individual_first_name is required."}


def test_delete_individual(client, test_individual):
    response = client.delete(f"/individual/{test_individual.individual_id}")

    assert response.status_code == 204
    assert Individual.query.count() == 0


def test_delete_referenced_individual_is_refused(client, test_individual):
    Donation.insert(
        date_received=date(2024, 1, 15),
        gl_acct="7601",
        quantity=1,
        amount=0,
        individual_id=test_individual.individual_id,
    )

    response = client.delete(f"/individual/{test_individual.individual_id}")

    assert response.status_code == 400
    assert response.get_json() == {"error": "Individual is still referenced by donations."}
    assert Individual.query.count() == 1
