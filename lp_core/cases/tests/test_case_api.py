# lp_core/cases/tests/test_case_api.py
import pytest

from lp_core.cases.models import CaseStatus
from lp_core.conftest import error_of

pytestmark = pytest.mark.django_db


def test_case_create_and_retrieve(api_client, client_record):
    res = api_client.post(
        "/api/v1/cases/",
        {
            "client": str(client_record.id),
            "case_number": "HC-2024-777",
            "title": "Estate late J Smith",
            "court": "high",
            "scale": "General",
            "file_pages": 12,
        },
        format="json",
    )
    assert res.status_code == 201, res.data
    assert res.data["scale"] == "GENERAL"
    assert res.data["client_name"] == "Thandi Mokoena"
    assert res.data["status"] == CaseStatus.ACTIVE

    res = api_client.get(f"/api/v1/cases/{res.data['id']}/")
    assert res.status_code == 200, res.data
    assert res.data["file_pages"] == 12


def test_case_create_invalid_scale(api_client, client_record):
    res = api_client.post(
        "/api/v1/cases/",
        {
            "client": str(client_record.id),
            "case_number": "MC-BAD",
            "title": "Bad",
            "court": "magistrate",
            "scale": "General",
        },
        format="json",
    )
    assert res.status_code == 400, res.data
    assert error_of(res)["code"] == "invalid_scale"


def test_case_list_filters(api_client, case, high_court_case):
    res = api_client.get(f"/api/v1/cases/?client={case.client_id}")
    assert res.status_code == 200, res.data
    assert res.data["count"] == 2

    res = api_client.get("/api/v1/cases/?q=mega")
    assert [c["case_number"] for c in res.data["results"]] == ["HC-2024-001"]

    res = api_client.get("/api/v1/cases/?client=not-a-uuid")
    assert res.status_code == 400, res.data
    assert error_of(res)["code"] == "validation_error"


def test_case_patch_status(api_client, case):
    res = api_client.patch(f"/api/v1/cases/{case.id}/", {"status": CaseStatus.CLOSED}, format="json")
    assert res.status_code == 200, res.data
    assert res.data["status"] == CaseStatus.CLOSED


def test_case_tariff_catalog(api_client, case):
    res = api_client.get(f"/api/v1/cases/{case.id}/tariff-catalog/")
    assert res.status_code == 200, res.data
    assert res.data["context"] == {"court_type": "magistrate", "scale": "B", "file_pages": 10}

    copies = next(i for i in res.data["items"] if i["id"] == "Part I - 11(b)")
    assert copies["total_amount"] == "40.00"

    res = api_client.get(f"/api/v1/cases/{case.id}/tariff-catalog/?q=summons")
    assert [i["id"] for i in res.data["items"]] == ["Part II - 02"]


def test_high_court_case_catalog(api_client, high_court_case):
    res = api_client.get(f"/api/v1/cases/{high_court_case.id}/tariff-catalog/")
    assert res.status_code == 200, res.data

    items = {i["id"]: i for i in res.data["items"]}
    assert items["D - 01"]["quantity"] == 0
    assert items["D - 01"]["total_amount"] == "0.00"
    assert items["A - 01"]["total_amount"] == "482.00"
