"""
Signing key domain objects.

Keys are Ed25519 and travel as JSON Web Key documents (RFC 8037):

    public:  {"crv": "Ed25519", "kty": "OKP", "x": "<b64url>"}
    private: {"crv": "Ed25519", "d": "<b64url>", "kty": "OKP", "x": "<b64url>"}

The private half stays with the issuer; the public half is shipped with
the consuming application.
"""
import base64
import binascii
import json
import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from core.domain.exceptions import KeyFormatError
from core.domain.value_objects import KeyKind, ValueObject
from core.metrics import license_keys_generated_total

logger = logging.getLogger(__name__)

KEY_TYPE = "OKP"
CURVE = "Ed25519"
KEY_SIZE = 32


def _b64url_encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64url_decode(value, field: str) -> bytes:
    if not isinstance(value, str):
        raise KeyFormatError(f"Key parameter '{field}' must be a string")
    try:
        raw = base64.urlsafe_b64decode(value + "=" * (-len(value) % 4))
    except (binascii.Error, ValueError) as exc:
        raise KeyFormatError(f"Key parameter '{field}' is not base64url") from exc
    if len(raw) != KEY_SIZE:
        raise KeyFormatError(f"Key parameter '{field}' must be {KEY_SIZE} bytes")
    return raw


def _raw_public(key: Ed25519PublicKey) -> bytes:
    return key.public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )


def _raw_private(key: Ed25519PrivateKey) -> bytes:
    return key.private_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PrivateFormat.Raw,
        encryption_algorithm=serialization.NoEncryption(),
    )


@dataclass(frozen=True)
class KeyMaterial(ValueObject):
    """
    One half (or both halves) of an Ed25519 key pair as raw bytes.

    A private key material always carries its public half too.
    """

    kind: KeyKind
    public_bytes: bytes
    private_bytes: Optional[bytes] = None

    def __post_init__(self):
        """Validate key material."""
        if len(self.public_bytes) != KEY_SIZE:
            raise KeyFormatError("Public key must be 32 bytes")
        if self.kind == KeyKind.PRIVATE:
            if self.private_bytes is None or len(self.private_bytes) != KEY_SIZE:
                raise KeyFormatError("Private key must be 32 bytes")
        elif self.private_bytes is not None:
            raise KeyFormatError("Public key material cannot carry a private key")

    @property
    def is_private(self) -> bool:
        """True if this material can sign."""
        return self.kind == KeyKind.PRIVATE

    def public(self) -> "KeyMaterial":
        """Return the public half of this key material."""
        return KeyMaterial(kind=KeyKind.PUBLIC, public_bytes=self.public_bytes)

    def signing_key(self) -> Ed25519PrivateKey:
        """Return a cryptography signing key."""
        if not self.is_private:
            raise KeyFormatError("Public key material cannot sign")
        try:
            return Ed25519PrivateKey.from_private_bytes(self.private_bytes)
        except ValueError as exc:
            raise KeyFormatError("Private key bytes are not an Ed25519 key") from exc

    def verifying_key(self) -> Ed25519PublicKey:
        """Return a cryptography verification key."""
        try:
            return Ed25519PublicKey.from_public_bytes(self.public_bytes)
        except ValueError as exc:
            raise KeyFormatError("Public key bytes are not an Ed25519 key") from exc

    def __repr__(self) -> str:
        return f"KeyMaterial(kind={self.kind.value}, x={_b64url_encode(self.public_bytes)})"


class KeyPairStore:
    """Generates key pairs and converts them to and from their text form."""

    @staticmethod
    def generate() -> Tuple[KeyMaterial, KeyMaterial]:
        """
        Generate a fresh key pair from the OS CSPRNG.

        Returns:
            Tuple of (private key material, public key material)
        """
        private_key = Ed25519PrivateKey.generate()
        private = KeyMaterial(
            kind=KeyKind.PRIVATE,
            public_bytes=_raw_public(private_key.public_key()),
            private_bytes=_raw_private(private_key),
        )
        license_keys_generated_total.inc()
        logger.info(f"Generated signing key pair {_b64url_encode(private.public_bytes)[:8]}")
        return private, private.public()

    @staticmethod
    def derive_public_key(private_key: Union[KeyMaterial, str]) -> Union[KeyMaterial, str]:
        """
        Extract the public half of a private key.

        Args:
            private_key: Private key material or its text document

        Returns:
            Public key in the same form as the argument (material or text)

        Raises:
            KeyFormatError: If the argument is not a valid private key
        """
        material = KeyPairStore.coerce(private_key)
        if not material.is_private:
            raise KeyFormatError("Expected a private key")
        if isinstance(private_key, KeyMaterial):
            return material.public()
        return KeyPairStore.save_to_text(material.public())

    @staticmethod
    def coerce(key: Union[KeyMaterial, str]) -> KeyMaterial:
        """
        Accept key material or key text and return key material.

        Raises:
            KeyFormatError: If key text cannot be parsed
        """
        if isinstance(key, KeyMaterial):
            return key
        return KeyPairStore.load_from_text(key)

    @staticmethod
    def save_to_text(material: KeyMaterial) -> str:
        """
        Serialize key material to its JSON Web Key text.

        Args:
            material: Key material to serialize

        Returns:
            Stable JSON document ending in a newline
        """
        document = {"kty": KEY_TYPE, "crv": CURVE, "x": _b64url_encode(material.public_bytes)}
        if material.is_private:
            document["d"] = _b64url_encode(material.private_bytes)
        return json.dumps(document, indent=2, sort_keys=True) + "\n"

    @staticmethod
    def load_from_text(text: str) -> KeyMaterial:
        """
        Parse key material from JSON Web Key text.

        Args:
            text: Public or private key document

        Returns:
            KeyMaterial of the matching kind

        Raises:
            KeyFormatError: If the text is not an Ed25519 key document
        """
        if isinstance(text, bytes):
            try:
                text = text.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise KeyFormatError("Key text is not UTF-8") from exc
        if not isinstance(text, str):
            raise KeyFormatError("Key text must be a string")
        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise KeyFormatError("Key text is not a JSON document") from exc
        if not isinstance(document, dict):
            raise KeyFormatError("Key document must be a JSON object")
        if document.get("kty") != KEY_TYPE or document.get("crv") != CURVE:
            raise KeyFormatError("Key document is not an Ed25519 key")
        if "x" not in document:
            raise KeyFormatError("Key document is missing 'x'")

        public_bytes = _b64url_decode(document["x"], "x")
        if "d" not in document:
            return KeyMaterial(kind=KeyKind.PUBLIC, public_bytes=public_bytes)

        private_bytes = _b64url_decode(document["d"], "d")
        derived = _raw_public(Ed25519PrivateKey.from_private_bytes(private_bytes).public_key())
        if derived != public_bytes:
            raise KeyFormatError("Private key does not match its public key")
        return KeyMaterial(
            kind=KeyKind.PRIVATE,
            public_bytes=public_bytes,
            private_bytes=private_bytes,
        )
