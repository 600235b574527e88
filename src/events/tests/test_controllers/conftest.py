from unittest.mock import patch

import pytest
from django.contrib.auth.models import User
from django.test.client import Client
from ninja_jwt.tokens import RefreshToken

from events.service import claim_verifier


def _client_for(user: User) -> Client:
    refresh = RefreshToken.for_user(user)
    return Client(HTTP_AUTHORIZATION=f"Bearer {str(refresh.access_token)}")  # type: ignore[attr-defined]


@pytest.fixture
def organizer_client(organizer: User) -> Client:
    """API client for the organizer of the test events."""
    return _client_for(organizer)


@pytest.fixture
def other_organizer_client(other_organizer: User) -> Client:
    """API client for a user who organizes nothing in these tests."""
    return _client_for(other_organizer)


@pytest.fixture
def staff_client(staff_user: User) -> Client:
    """API client for a Django staff member."""
    return _client_for(staff_user)


@pytest.fixture
def verified_email() -> str:
    """An email address that has just passed the claim challenge."""
    email = "asha@example.com"
    with patch.object(claim_verifier, "generate_code", return_value="123456"):
        claim_verifier.request_challenge(email)
    assert claim_verifier.verify_challenge(email, "123456")
    return email
