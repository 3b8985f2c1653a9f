"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timezone

import pytest

from licenses.domain.license import LicenseTerms
from licenses.domain.services import LicenseSigner
from licenses.domain.signing_key import KeyPairStore
from licenses.infrastructure.repositories.file_license_repository import FileLicenseRepository
from OfflineLicensing.settings.logging import configure_logging


@pytest.fixture(scope="session", autouse=True)
def test_logging():
    """Configure logging with the test settings."""
    configure_logging(environment="test")


@pytest.fixture(scope="session")
def key_pair():
    """Fixture for a signing key pair shared by the session."""
    return KeyPairStore.generate()


@pytest.fixture
def private_key(key_pair):
    """Fixture for the private half of the key pair."""
    return key_pair[0]


@pytest.fixture
def public_key(key_pair):
    """Fixture for the public half of the key pair."""
    return key_pair[1]


@pytest.fixture
def sample_terms():
    """Fixture for sample LicenseTerms covering 2024."""
    return LicenseTerms(
        start_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
        end_date=datetime(2024, 12, 31, tzinfo=timezone.utc),
        product_name="Acme",
        user_name="alice",
    )


@pytest.fixture
def sample_license(sample_terms, private_key):
    """Fixture for a License signed over sample_terms."""
    return LicenseSigner.create_license(sample_terms, private_key)


@pytest.fixture
def license_repository():
    """Fixture for FileLicenseRepository."""
    return FileLicenseRepository()


@pytest.fixture
def mid_2024():
    """Fixture for a moment inside sample_terms."""
    return datetime(2024, 6, 1, tzinfo=timezone.utc)
