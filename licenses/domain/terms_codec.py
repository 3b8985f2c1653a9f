"""
Canonical binary encoding of license terms.

Layout (version 1, all integers big-endian):

    magic       4 bytes   b"LICT"
    version     1 byte    0x01
    start_date  int64     microseconds since the Unix epoch, UTC
    end_date    int64     microseconds since the Unix epoch, UTC
    product     uint32 length + UTF-8 bytes
    user        uint32 length + UTF-8 bytes

The signature is computed over exactly these bytes, so the encoding must
never depend on platform, locale or dictionary ordering.
"""
import struct
from datetime import datetime, timedelta, timezone

from core.domain.exceptions import DecodeError
from licenses.domain.license import LicenseTerms

MAGIC = b"LICT"
VERSION = 1

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_HEADER = struct.Struct(">4sB")
_TIMESTAMP = struct.Struct(">q")
_LENGTH = struct.Struct(">I")


def _to_micros(value: datetime) -> int:
    delta = value - _EPOCH
    return (delta.days * 86400 + delta.seconds) * 1_000_000 + delta.microseconds


def _from_micros(micros: int) -> datetime:
    try:
        return _EPOCH + timedelta(microseconds=micros)
    except OverflowError as exc:
        raise DecodeError(f"Timestamp out of range: {micros}") from exc


class _Reader:
    """Cursor over an encoded payload that fails with DecodeError."""

    def __init__(self, data: bytes):
        self.data = data
        self.offset = 0

    def unpack(self, fmt: struct.Struct) -> tuple:
        end = self.offset + fmt.size
        if end > len(self.data):
            raise DecodeError("Truncated license terms")
        values = fmt.unpack_from(self.data, self.offset)
        self.offset = end
        return values

    def text(self, field: str) -> str:
        (length,) = self.unpack(_LENGTH)
        end = self.offset + length
        if end > len(self.data):
            raise DecodeError(f"Truncated license terms in {field}")
        raw = self.data[self.offset:end]
        self.offset = end
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"Invalid UTF-8 in {field}") from exc


class TermsCodec:
    """Encodes LicenseTerms to canonical bytes and back."""

    @staticmethod
    def encode(terms: LicenseTerms) -> bytes:
        """
        Encode license terms into their canonical byte form.

        Args:
            terms: License terms to encode

        Returns:
            Canonical, deterministic bytes
        """
        product = terms.product_name.encode("utf-8")
        user = terms.user_name.encode("utf-8")
        return b"".join(
            [
                _HEADER.pack(MAGIC, VERSION),
                _TIMESTAMP.pack(_to_micros(terms.start_date)),
                _TIMESTAMP.pack(_to_micros(terms.end_date)),
                _LENGTH.pack(len(product)),
                product,
                _LENGTH.pack(len(user)),
                user,
            ]
        )

    @staticmethod
    def decode(data: bytes) -> LicenseTerms:
        """
        Decode canonical bytes back into license terms.

        Args:
            data: Bytes produced by encode()

        Returns:
            Decoded LicenseTerms

        Raises:
            DecodeError: If data is malformed, truncated, has trailing bytes,
                or does not carry the license terms type tag
        """
        if not isinstance(data, (bytes, bytearray)):
            raise DecodeError("License terms must be bytes")
        reader = _Reader(bytes(data))
        magic, version = reader.unpack(_HEADER)
        if magic != MAGIC:
            raise DecodeError("Payload is not a license terms record")
        if version != VERSION:
            raise DecodeError(f"Unsupported license terms version: {version}")

        (start_micros,) = reader.unpack(_TIMESTAMP)
        (end_micros,) = reader.unpack(_TIMESTAMP)
        product_name = reader.text("product name")
        user_name = reader.text("user name")

        if reader.offset != len(reader.data):
            raise DecodeError("Trailing bytes after license terms")

        return LicenseTerms(
            start_date=_from_micros(start_micros),
            end_date=_from_micros(end_micros),
            product_name=product_name,
            user_name=user_name,
        )
