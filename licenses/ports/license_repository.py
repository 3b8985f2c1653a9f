"""
License repository port (interface).

This defines the contract for license artifact persistence.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from os import PathLike
from typing import IO, Union

from licenses.domain.license import License

LicenseDestination = Union[str, PathLike, IO]


class LicenseRepository(ABC):
    """
    Abstract repository for License artifacts.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    def write(self, license: License, destination: LicenseDestination) -> None:
        """
        Write a license, replacing any existing content at destination.

        Args:
            license: License artifact to store
            destination: File path or writable stream

        Raises:
            PersistenceError: If the destination cannot be written
        """
        pass

    @abstractmethod
    def read(self, source: LicenseDestination) -> License:
        """
        Read a license.

        Args:
            source: File path or readable stream

        Returns:
            License artifact

        Raises:
            PersistenceError: If the source is absent, unreadable or malformed
        """
        pass
