"""
CheckLicenseHandler.

Handler for the startup license check of a consuming application.
"""

import logging
import shutil
from pathlib import Path

from core.domain.exceptions import LicensingException
from licenses.application.dto.license_dto import LicenseCheckDTO, LicenseTermsDTO
from licenses.application.queries.check_license import CheckLicenseQuery
from licenses.domain.services import LicenseValidator
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class CheckLicenseHandler:
    """Handler for CheckLicenseQuery."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    def _locate(self, query: CheckLicenseQuery):
        """
        Return the path to read the license from, importing it if needed.

        Returns None when no license is installed and none was supplied.
        """
        license_path = Path(query.license_path)
        if license_path.is_file():
            return license_path
        if query.import_from is None:
            return None

        try:
            license_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(query.import_from, license_path)
            logger.info(f"License installed to {license_path}")
            return license_path
        except OSError as e:
            # Can't copy the file, read the original instead
            logger.warning(f"Could not install license to {license_path}: {e}")
            return Path(query.import_from)

    def handle(self, query: CheckLicenseQuery) -> LicenseCheckDTO:
        """
        Handle check license query.

        Args:
            query: CheckLicenseQuery

        Returns:
            LicenseCheckDTO; is_valid is False with a code and message
            on any failure
        """
        source = self._locate(query)
        if source is None:
            logger.info("License file not supplied")
            return LicenseCheckDTO(
                is_valid=False,
                code="LICENSE_NOT_SUPPLIED",
                message="License file not supplied",
            )

        try:
            license = self.license_repository.read(source)
            terms = LicenseValidator.validate(
                license, query.public_key, query.product_name, now=query.now
            )
        except LicensingException as e:
            return LicenseCheckDTO(is_valid=False, code=e.code, message=e.message)

        return LicenseCheckDTO(
            is_valid=True,
            terms=LicenseTermsDTO(
                product_name=terms.product_name,
                user_name=terms.user_name,
                start_date=terms.start_date,
                end_date=terms.end_date,
            ),
        )
