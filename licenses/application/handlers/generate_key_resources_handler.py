"""
GenerateKeyResourcesHandler.

Handles the generate key resources command.
"""

import logging
from typing import Callable

from licenses.application.commands.generate_key_resources import GenerateKeyResourcesCommand
from licenses.application.dto.license_dto import KeyResourcesDTO
from licenses.domain.signing_key import KeyPairStore
from licenses.infrastructure.repositories.file_key_repository import FileKeyRepository
from licenses.ports.key_repository import KeyRepository

logger = logging.getLogger(__name__)


class GenerateKeyResourcesHandler:
    """Handler for GenerateKeyResourcesCommand."""

    def __init__(self, key_repository_factory: Callable[..., KeyRepository] = FileKeyRepository):
        """Initialize handler with a factory building a key repository for a folder."""
        self.key_repository_factory = key_repository_factory

    def handle(self, command: GenerateKeyResourcesCommand) -> KeyResourcesDTO:
        """
        Handle generate key resources command.

        Args:
            command: GenerateKeyResourcesCommand

        Returns:
            KeyResourcesDTO describing the key files

        Raises:
            PersistenceError: If the key files cannot be written
            KeyFormatError: If an existing key file is malformed
        """
        repository = self.key_repository_factory(command.resource_folder)

        if command.only_if_absent and repository.has_private_key():
            logger.info(f"Key resources already present in {command.resource_folder}")
            public_key = KeyPairStore.derive_public_key(repository.load_private_key())
            created = False
        else:
            private_key, public_key = KeyPairStore.generate()
            repository.save_key_pair(private_key, public_key)
            created = True

        return KeyResourcesDTO(
            private_key_path=getattr(repository, "private_key_path", None),
            public_key_path=getattr(repository, "public_key_path", None),
            public_key=KeyPairStore.save_to_text(public_key),
            created=created,
        )
