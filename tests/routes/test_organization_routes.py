"""Tests for the organization routes."""

from datetime import date

from inkind_app.models import Donation, Organization


def test_create_organization(client):
    response = client.post(
        "/organization",
        json={
            "organization_code": "river-church",
            "organization_name": "River Church",
            "contact_email": "Office@River.org",
            "zip": "62701",
        },
    )

    assert response.status_code == 201
    data = response.get_json()
    assert data["organization_code"] == "RIVER-CHURCH"
    assert data["contact_email"] == "office@river.org"


def test_duplicate_code_conflicts(client, test_organization):
    response = client.post(
        "/organization",
        json={"organization_code": "acme_food_bank", "organization_name": "Another Acme"},
    )

    assert response.status_code == 409
    assert response.get_json() == {"error": "An organization with that code already exists."}
    assert Organization.query.count() == 1


def test_create_validation(client):
    response = client.post("/organization", json={"organization_code": "X", "organization_name": "X"})
    assert response.status_code == 400

    response = client.post("/organization", json={"organization_code": "RIVER"})
    assert response.status_code == 400
    assert response.get_json() == {"error": "organization_name is required."}


def test_list_ordered_by_name(client, test_organization):
    client.post("/organization", json={"organization_code": "ZION", "organization_name": "Zion Pantry"})
    client.post("/organization", json={"organization_code": "BETA", "organization_name": "Beta Bakery"})

    names = [o["organization_name"] for o in client.get("/organization").get_json()]
    assert names == ["Acme Food Bank", "Beta Bakery", "Zion Pantry"]


def test_get_organization(client, test_organization):
    response = client.get("/organization/acme_food_bank")
    assert response.status_code == 200
    assert response.get_json()["contact_last_name"] == "Coyote"

    assert client.get("/organization/NOPE").status_code == 404


def test_patch_organization(client, test_organization):
    response = client.patch("/organization/ACME_FOOD_BANK", json={"organization_name": "Acme Foods"})

    assert response.status_code == 200
    assert response.get_json()["organization_name"] == "Acme Foods"
    assert client.patch("/organization/ACME_FOOD_BANK", json={}).status_code == 400


def test_delete_organization(client, test_organization):
    assert client.delete("/organization/ACME_FOOD_BANK").status_code == 204
    assert client.delete("/organization/ACME_FOOD_BANK").status_code == 404


def test_delete_referenced_organization_is_refused(client, test_organization):
    Donation.insert(
        date_received=date(2024, 1, 15),
        gl_acct="7601",
        quantity=1,
        amount=0,
        organization_code="ACME_FOOD_BANK",
    )

    response = client.delete("/organization/ACME_FOOD_BANK")

    assert response.status_code == 400
    assert response.get_json() == {"error": "Organization is still referenced by donations."}
