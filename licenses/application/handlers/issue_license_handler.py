"""
IssueLicenseHandler.

Handles the issue license command: ensure key resources, sign the
terms and write ``<user><suffix>`` into the resource folder.
"""

import logging
from pathlib import Path
from typing import Callable

from licenses.application.commands.generate_key_resources import GenerateKeyResourcesCommand
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.dto.license_dto import IssuedLicenseDTO, LicenseTermsDTO
from licenses.application.handlers.generate_key_resources_handler import (
    GenerateKeyResourcesHandler,
)
from licenses.domain.license import LicenseTerms
from licenses.domain.services import LicenseSigner
from licenses.infrastructure.repositories.file_key_repository import FileKeyRepository
from licenses.ports.key_repository import KeyRepository
from licenses.ports.license_repository import LicenseRepository
from OfflineLicensing.settings import base as settings

logger = logging.getLogger(__name__)


def license_filename(user_name: str, suffix: str = None) -> str:
    """
    Build the license file name for a licensee.

    Args:
        user_name: Licensee name
        suffix: File suffix (defaults to settings.LICENSE_SUFFIX)

    Returns:
        File name

    Raises:
        ValueError: If user_name cannot be used as a single file name
    """
    name = user_name.strip() if user_name else ""
    if not name or name in (".", "..") or "/" in name or "\\" in name or "\x00" in name:
        raise ValueError(f"User name cannot be used as a file name: {user_name!r}")
    return name + (suffix if suffix is not None else settings.LICENSE_SUFFIX)


class IssueLicenseHandler:
    """Handler for IssueLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        key_repository_factory: Callable[..., KeyRepository] = FileKeyRepository,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.key_repository_factory = key_repository_factory

    def handle(self, command: IssueLicenseCommand) -> IssuedLicenseDTO:
        """
        Handle issue license command.

        Args:
            command: IssueLicenseCommand

        Returns:
            IssuedLicenseDTO with the written license path

        Raises:
            ValueError: If product or user name is missing
            KeyFormatError: If the stored private key is malformed
            PersistenceError: If key or license files cannot be written
        """
        if not command.product_name or not command.user_name:
            raise ValueError("Product name and user name are required")
        filename = license_filename(command.user_name)

        # Create key resources on first use
        GenerateKeyResourcesHandler(self.key_repository_factory).handle(
            GenerateKeyResourcesCommand(resource_folder=command.resource_folder)
        )
        private_key = self.key_repository_factory(command.resource_folder).load_private_key()

        terms = LicenseTerms(
            start_date=command.start_date,
            end_date=command.end_date,
            product_name=command.product_name,
            user_name=command.user_name,
        )
        license = LicenseSigner.create_license(terms, private_key)

        license_path = Path(command.resource_folder) / filename
        self.license_repository.write(license, license_path)
        logger.info(f"License file for {command.user_name} created in {command.resource_folder}")

        return IssuedLicenseDTO(
            license_path=license_path,
            terms=LicenseTermsDTO(
                product_name=terms.product_name,
                user_name=terms.user_name,
                start_date=terms.start_date,
                end_date=terms.end_date,
            ),
        )
