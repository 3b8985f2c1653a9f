"""
Integration tests for the issuer and consumer application handlers.
"""

from datetime import datetime, timezone

import pytest

from core.domain.exceptions import (
    KeyResourceNotFoundError,
    LicenseExpiredError,
    ProductMismatchError,
)
from licenses.application.commands.generate_key_resources import GenerateKeyResourcesCommand
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.handlers.check_license_handler import CheckLicenseHandler
from licenses.application.handlers.generate_key_resources_handler import (
    GenerateKeyResourcesHandler,
)
from licenses.application.handlers.issue_license_handler import (
    IssueLicenseHandler,
    license_filename,
)
from licenses.application.queries.check_license import CheckLicenseQuery
from licenses.domain.license import LicenseTerms
from licenses.domain.services import LicenseSigner, LicenseValidator
from licenses.domain.signing_key import KeyPairStore
from licenses.infrastructure.repositories.file_key_repository import FileKeyRepository

START = datetime(2024, 1, 1, tzinfo=timezone.utc)
END = datetime(2024, 12, 31, tzinfo=timezone.utc)
MID = datetime(2024, 6, 1, tzinfo=timezone.utc)


@pytest.fixture
def issue_handler(license_repository):
    """Fixture for IssueLicenseHandler."""
    return IssueLicenseHandler(license_repository)


@pytest.fixture
def check_handler(license_repository):
    """Fixture for CheckLicenseHandler."""
    return CheckLicenseHandler(license_repository)


@pytest.fixture
def issued(tmp_path, issue_handler):
    """Fixture issuing a license for alice into a fresh resource folder."""
    folder = tmp_path / "issuer"
    result = issue_handler.handle(
        IssueLicenseCommand(
            resource_folder=folder,
            product_name="Acme",
            user_name="alice",
            start_date=START,
            end_date=END,
        )
    )
    public_key = (folder / "publicKey.json").read_text(encoding="utf-8")
    return result, public_key


class TestGenerateKeyResourcesHandler:
    """Tests for GenerateKeyResourcesHandler."""

    def test_creates_resources(self, tmp_path):
        """Test key files are created in a new folder."""
        folder = tmp_path / "new" / "folder"

        result = GenerateKeyResourcesHandler().handle(GenerateKeyResourcesCommand(folder))

        assert result.created is True
        assert result.private_key_path.is_file()
        assert result.public_key == result.public_key_path.read_text(encoding="utf-8")

    def test_keeps_existing_resources(self, tmp_path):
        """Test an existing private key is not replaced."""
        handler = GenerateKeyResourcesHandler()
        first = handler.handle(GenerateKeyResourcesCommand(tmp_path))

        second = handler.handle(GenerateKeyResourcesCommand(tmp_path))

        assert second.created is False
        assert second.public_key == first.public_key

    def test_regenerates_on_request(self, tmp_path):
        """Test resources are replaced when only_if_absent is off."""
        handler = GenerateKeyResourcesHandler()
        first = handler.handle(GenerateKeyResourcesCommand(tmp_path))

        second = handler.handle(GenerateKeyResourcesCommand(tmp_path, only_if_absent=False))

        assert second.created is True
        assert second.public_key != first.public_key


class TestIssueLicenseHandler:
    """Tests for IssueLicenseHandler."""

    def test_issue_license(self, tmp_path, issued, license_repository):
        """Test a license file is written next to the keys."""
        result, public_key = issued

        assert result.license_path == tmp_path / "issuer" / "alice.lic"
        assert result.terms.user_name == "alice"
        license = license_repository.read(result.license_path)
        terms = LicenseValidator.validate(license, public_key, "Acme", now=MID)
        assert terms.end_date == END

    def test_issue_reuses_existing_key(self, tmp_path, issue_handler, issued):
        """Test a second license is signed with the same key."""
        _, public_key = issued

        issue_handler.handle(
            IssueLicenseCommand(tmp_path / "issuer", "Acme", "bob", START, END)
        )

        assert (tmp_path / "issuer" / "publicKey.json").read_text(encoding="utf-8") == public_key

    def test_issue_requires_names(self, tmp_path, issue_handler):
        """Test product and user names are required."""
        with pytest.raises(ValueError, match="required"):
            issue_handler.handle(IssueLicenseCommand(tmp_path, "", "alice", START, END))

    def test_issue_missing_private_key(self, tmp_path, license_repository):
        """Test a key repository without a private key."""

        class PublicOnlyRepository(FileKeyRepository):
            def has_private_key(self):
                return True

        handler = IssueLicenseHandler(license_repository, PublicOnlyRepository)

        with pytest.raises(KeyResourceNotFoundError):
            handler.handle(IssueLicenseCommand(tmp_path, "Acme", "alice", START, END))

    @pytest.mark.parametrize("user_name", ["", " ", ".", "..", "a/b", "a\\b"])
    def test_license_filename_rejects_paths(self, user_name):
        """Test user names that are not plain file names."""
        with pytest.raises(ValueError):
            license_filename(user_name)

    def test_license_filename(self):
        """Test the license file name uses the configured suffix."""
        assert license_filename("alice") == "alice.lic"
        assert license_filename("alice", suffix=".license") == "alice.license"


class TestCheckLicenseHandler:
    """Tests for CheckLicenseHandler."""

    def test_valid_license(self, issued, check_handler):
        """Test an installed valid license."""
        result, public_key = issued

        check = check_handler.handle(
            CheckLicenseQuery(result.license_path, public_key, "Acme", now=MID)
        )

        assert check.is_valid is True
        assert check.code is None
        assert check.terms.user_name == "alice"

    def test_license_not_supplied(self, tmp_path, check_handler, issued):
        """Test no installed license and nothing to import."""
        _, public_key = issued

        check = check_handler.handle(
            CheckLicenseQuery(tmp_path / "app" / "license.lic", public_key, "Acme", now=MID)
        )

        assert check.is_valid is False
        assert check.code == "LICENSE_NOT_SUPPLIED"

    def test_import_license(self, tmp_path, issued, check_handler):
        """Test a supplied license is copied into place and validated."""
        result, public_key = issued
        installed = tmp_path / "appdata" / "license.lic"

        check = check_handler.handle(
            CheckLicenseQuery(
                installed, public_key, "Acme", import_from=result.license_path, now=MID
            )
        )

        assert check.is_valid is True
        assert installed.read_bytes() == result.license_path.read_bytes()

    def test_import_falls_back_to_original(self, tmp_path, issued, check_handler):
        """Test the original file is read when it cannot be installed."""
        result, public_key = issued
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")

        check = check_handler.handle(
            CheckLicenseQuery(
                blocker / "license.lic",
                public_key,
                "Acme",
                import_from=result.license_path,
                now=MID,
            )
        )

        assert check.is_valid is True

    def test_reports_failure_code(self, issued, check_handler):
        """Test a validation failure is reported with its code and message."""
        result, public_key = issued

        check = check_handler.handle(
            CheckLicenseQuery(result.license_path, public_key, "Other", now=MID)
        )

        assert check.is_valid is False
        assert check.code == "PRODUCT_MISMATCH"
        assert check.message == "Invalid product name: Acme"

    def test_reports_malformed_file(self, tmp_path, issued, check_handler):
        """Test an unreadable license file is reported as invalid."""
        _, public_key = issued
        path = tmp_path / "license.lic"
        path.write_text("garbage", encoding="utf-8")

        check = check_handler.handle(CheckLicenseQuery(path, public_key, "Acme", now=MID))

        assert check.is_valid is False
        assert check.code == "PERSISTENCE_ERROR"


class TestEndToEnd:
    """End-to-end issuance and validation scenario."""

    def test_scenario(self, tmp_path, license_repository):
        """Test issue, store, load and validate at several moments."""
        private_key, public_key = KeyPairStore.generate()
        terms = LicenseTerms(START, END, "Acme", "alice")
        path = tmp_path / "alice.lic"
        license_repository.write(LicenseSigner.create_license(terms, private_key), path)
        license = license_repository.read(path)

        assert LicenseValidator.validate(license, public_key, "Acme", now=MID) == terms
        with pytest.raises(ProductMismatchError) as mismatch:
            LicenseValidator.validate(license, public_key, "Other", now=MID)
        assert mismatch.value.product_name == "Acme"
        with pytest.raises(LicenseExpiredError) as expired:
            LicenseValidator.validate(
                license, public_key, "Acme", now=datetime(2025, 1, 1, tzinfo=timezone.utc)
            )
        assert expired.value.end_date == END
