# lp_core/conftest.py
import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from lp_core.cases.services import CaseService
from lp_core.clients.services import ClientService


@pytest.fixture
def user(db):
    User = get_user_model()
    return User.objects.create_user(
        username="testuser",
        password="testpass",
        is_active=True,
    )


@pytest.fixture
def api_client(user):
    c = APIClient()
    c.force_authenticate(user=user)
    return c


@pytest.fixture
def anon_client():
    return APIClient()


@pytest.fixture
def client_record(db):
    return ClientService.create_client(
        name="Thandi Mokoena",
        email="thandi@example.com",
        phone="+27 82 000 0000",
        address="12 Long Street, Cape Town",
    )


@pytest.fixture
def case(client_record):
    """
    Magistrate court, scale B, 10 file pages.
    """
    return CaseService.create_case(
        client_id=client_record.id,
        case_number="MC-2024-001",
        title="Mokoena v Acme Traders",
        court="magistrate",
        scale="b",
        file_pages=10,
    )


@pytest.fixture
def high_court_case(client_record):
    return CaseService.create_case(
        client_id=client_record.id,
        case_number="HC-2024-001",
        title="Mokoena v Mega Corp",
        court="High Court",
        scale="attorney",
        file_pages=0,
    )


def error_of(res):
    """
    Unwrap the standard error envelope:
      {"error": {"code": "...", "message": "...", "details": ..., "request_id": "..."}}
    """
    assert isinstance(res.data, dict) and "error" in res.data, res.data
    return res.data["error"]
