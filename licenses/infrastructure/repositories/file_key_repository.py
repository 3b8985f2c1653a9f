"""
File implementation of KeyRepository port.

Stores the issuer's key pair as two JSON Web Key files inside a resource
folder. The private key file must never be shipped to licensees.
"""
import logging
from os import PathLike
from pathlib import Path
from typing import Union

from core.domain.exceptions import KeyFormatError, KeyResourceNotFoundError, PersistenceError
from core.domain.value_objects import KeyKind
from licenses.domain.signing_key import KeyMaterial, KeyPairStore
from licenses.ports.key_repository import KeyRepository
from OfflineLicensing.settings import base as settings

logger = logging.getLogger(__name__)


class FileKeyRepository(KeyRepository):
    """Folder-backed implementation of KeyRepository."""

    def __init__(
        self,
        folder: Union[str, PathLike],
        private_key_filename: str = None,
        public_key_filename: str = None,
    ):
        """
        Initialize repository for a resource folder.

        Args:
            folder: Folder holding the key files
            private_key_filename: Private key file name (defaults to settings)
            public_key_filename: Public key file name (defaults to settings)
        """
        self.folder = Path(folder)
        self.private_key_path = self.folder / (
            private_key_filename or settings.PRIVATE_KEY_FILENAME
        )
        self.public_key_path = self.folder / (public_key_filename or settings.PUBLIC_KEY_FILENAME)

    def has_private_key(self) -> bool:
        """Check whether the private key file exists."""
        return self.private_key_path.is_file()

    def save_key_pair(self, private_key: KeyMaterial, public_key: KeyMaterial) -> None:
        """
        Write both key files, creating the folder if needed.

        Args:
            private_key: Private key material
            public_key: Public key material
        """
        if not private_key.is_private or public_key.is_private:
            raise KeyFormatError("Expected a private and a public key")
        try:
            self.folder.mkdir(parents=True, exist_ok=True)
            self.public_key_path.write_text(KeyPairStore.save_to_text(public_key), encoding="utf-8")
            self.private_key_path.write_text(
                KeyPairStore.save_to_text(private_key), encoding="utf-8"
            )
            self.private_key_path.chmod(0o600)
        except OSError as exc:
            raise PersistenceError(f"Unable to write key resources: {exc}") from exc
        logger.info(f"Key resources written to {self.folder}")

    def _load(self, path: Path, kind: KeyKind) -> KeyMaterial:
        if not path.is_file():
            raise KeyResourceNotFoundError(f"Can't find {kind.value}-key file: {path}")
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Unable to read key file {path}: {exc}") from exc

        material = KeyPairStore.load_from_text(text)
        if material.kind != kind:
            raise KeyFormatError(f"Key file {path} does not hold a {kind.value} key")
        return material

    def load_private_key(self) -> KeyMaterial:
        """Load the private key file."""
        return self._load(self.private_key_path, KeyKind.PRIVATE)

    def load_public_key(self) -> KeyMaterial:
        """Load the public key file."""
        return self._load(self.public_key_path, KeyKind.PUBLIC)
