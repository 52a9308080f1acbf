# lp_core/clients/tests/test_client_api.py
import uuid

import pytest

from lp_core.conftest import error_of

pytestmark = pytest.mark.django_db


def test_client_create_list_retrieve(api_client):
    res = api_client.post(
        "/api/v1/clients/",
        {"name": "Naledi Dlamini", "email": "naledi@example.com", "phone": "0820000001"},
        format="json",
    )
    assert res.status_code == 201, res.data
    client_id = res.data["id"]

    res = api_client.get("/api/v1/clients/?q=naledi")
    assert res.status_code == 200, res.data
    assert res.data["count"] == 1
    assert res.data["results"][0]["id"] == client_id

    res = api_client.get(f"/api/v1/clients/{client_id}/")
    assert res.status_code == 200, res.data
    assert res.data["email"] == "naledi@example.com"


def test_client_partial_update(api_client, client_record):
    res = api_client.patch(f"/api/v1/clients/{client_record.id}/", {"address": "1 Main Rd"}, format="json")
    assert res.status_code == 200, res.data
    assert res.data["address"] == "1 Main Rd"


def test_client_partial_update_requires_a_field(api_client, client_record):
    res = api_client.patch(f"/api/v1/clients/{client_record.id}/", {}, format="json")
    assert res.status_code == 400, res.data
    assert error_of(res)["code"] == "validation_error"


def test_client_duplicate_email(api_client, client_record):
    res = api_client.post(
        "/api/v1/clients/",
        {"name": "Copy", "email": client_record.email},
        format="json",
    )
    assert res.status_code == 400, res.data

    err = error_of(res)
    assert err["code"] == "validation_error"
    assert "email" in err["details"]


def test_client_not_found(api_client):
    res = api_client.get(f"/api/v1/clients/{uuid.uuid4()}/")
    assert res.status_code == 404, res.data
    assert error_of(res)["code"] == "not_found"
