"""
File implementation of LicenseRepository port.

A license file is a small JSON document with exactly two string members:

    {
      "signature": "<base64>",
      "termsEncoded": "<base64>"
    }

Nothing is repaired on read: any hand edit either fails here or fails
signature verification later.
"""
import io
import json
import logging
from pathlib import Path

from core.domain.exceptions import PersistenceError
from licenses.domain.license import License
from licenses.ports.license_repository import LicenseDestination, LicenseRepository
from OfflineLicensing.settings import base as settings

logger = logging.getLogger(__name__)

TERMS_FIELD = "termsEncoded"
SIGNATURE_FIELD = "signature"
FIELDS = {TERMS_FIELD, SIGNATURE_FIELD}


def _is_text_stream(stream) -> bool:
    """Streams without a mode, such as BytesIO, are treated as binary."""
    if isinstance(stream, io.TextIOBase):
        return True
    return "b" not in getattr(stream, "mode", "b")


class FileLicenseRepository(LicenseRepository):
    """
    JSON file implementation of LicenseRepository.

    This adapter:
    1. Converts License artifacts to JSON documents
    2. Parses JSON documents back into License artifacts
    3. Accepts file paths as well as text or binary streams
    """

    def __init__(self, encoding: str = None):
        """Initialize repository with the text encoding for license files."""
        self.encoding = encoding or settings.LICENSE_ENCODING

    def _to_document(self, license: License) -> str:
        """
        Convert License artifact to its JSON document.

        Args:
            license: License artifact

        Returns:
            JSON text ending in a newline
        """
        document = {TERMS_FIELD: license.terms_encoded, SIGNATURE_FIELD: license.signature}
        return json.dumps(document, indent=2, sort_keys=True) + "\n"

    def _to_domain(self, text: str) -> License:
        """
        Convert JSON document to License artifact.

        Args:
            text: License file contents

        Returns:
            License artifact

        Raises:
            PersistenceError: If the document is malformed
        """
        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise PersistenceError(f"License file is not well-formed: {exc.msg}") from exc
        if not isinstance(document, dict):
            raise PersistenceError("License file must contain a JSON object")

        missing = FIELDS - document.keys()
        if missing:
            raise PersistenceError(f"License file is missing: {', '.join(sorted(missing))}")
        unexpected = document.keys() - FIELDS
        if unexpected:
            raise PersistenceError(
                f"License file has unexpected fields: {', '.join(sorted(unexpected))}"
            )
        for field in sorted(FIELDS):
            if not isinstance(document[field], str):
                raise PersistenceError(f"License field '{field}' must be a string")

        return License(terms_encoded=document[TERMS_FIELD], signature=document[SIGNATURE_FIELD])

    def write(self, license: License, destination: LicenseDestination) -> None:
        """
        Write a license, replacing any existing content at destination.

        Args:
            license: License artifact to store
            destination: File path or writable stream

        Raises:
            PersistenceError: If the destination cannot be written
        """
        text = self._to_document(license)
        try:
            if hasattr(destination, "write"):
                if _is_text_stream(destination):
                    destination.write(text)
                else:
                    destination.write(text.encode(self.encoding))
            else:
                Path(destination).write_text(text, encoding=self.encoding)
        except (OSError, ValueError, TypeError) as exc:
            raise PersistenceError(f"Unable to write license: {exc}") from exc
        logger.debug(f"License written to {getattr(destination, 'name', destination)}")

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
        try:
            if hasattr(source, "read"):
                data = source.read()
            else:
                data = Path(source).read_bytes()
        except FileNotFoundError as exc:
            raise PersistenceError(
                f"License file not found: {source}", code="LICENSE_FILE_NOT_FOUND"
            ) from exc
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Unable to read license: {exc}") from exc

        if isinstance(data, (bytes, bytearray)):
            try:
                data = bytes(data).decode(self.encoding)
            except UnicodeDecodeError as exc:
                raise PersistenceError("License file is not valid text") from exc

        return self._to_domain(data)
