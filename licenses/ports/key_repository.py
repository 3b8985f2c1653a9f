"""
Key repository port (interface).

This defines the contract for storing an issuer's key pair.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod

from licenses.domain.signing_key import KeyMaterial


class KeyRepository(ABC):
    """
    Abstract repository for signing key pairs.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    def has_private_key(self) -> bool:
        """
        Check whether a private key is stored.

        Returns:
            True if a private key exists
        """
        pass

    @abstractmethod
    def save_key_pair(self, private_key: KeyMaterial, public_key: KeyMaterial) -> None:
        """
        Store both halves of a key pair.

        Args:
            private_key: Private key material
            public_key: Public key material
        """
        pass

    @abstractmethod
    def load_private_key(self) -> KeyMaterial:
        """
        Load the private key.

        Returns:
            Private key material

        Raises:
            KeyResourceNotFoundError: If no private key is stored
            KeyFormatError: If the stored key is malformed
        """
        pass

    @abstractmethod
    def load_public_key(self) -> KeyMaterial:
        """
        Load the public key.

        Returns:
            Public key material

        Raises:
            KeyResourceNotFoundError: If no public key is stored
            KeyFormatError: If the stored key is malformed
        """
        pass
