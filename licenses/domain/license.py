"""
License domain entities.

LicenseTerms is the plaintext the issuer signs; License is the portable
artifact (encoded terms plus signature) handed to the licensee.
Both are immutable and independent of infrastructure.
"""
from dataclasses import dataclass
from datetime import datetime, timezone


def as_utc(value: datetime) -> datetime:
    """
    Return value as a timezone-aware UTC datetime.

    Naive datetimes are taken to be in UTC already.

    Args:
        value: Datetime to normalise

    Returns:
        Aware datetime in UTC

    Raises:
        ValueError: If value is not a datetime or falls outside the UTC range
    """
    if not isinstance(value, datetime):
        raise ValueError(f"Expected a datetime, got {type(value).__name__}")
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    try:
        return value.astimezone(timezone.utc)
    except OverflowError as exc:
        raise ValueError(f"Datetime out of range in UTC: {value.isoformat()}") from exc


def _check_name(label: str, value: str) -> None:
    if not isinstance(value, str):
        raise ValueError(f"{label} must be a string")
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ValueError(f"{label} is not encodable as UTF-8") from exc


@dataclass(frozen=True)
class LicenseTerms:
    """
    Terms of a license agreement.

    The terms are obscured once encoded but never encrypted; integrity
    comes only from the signature over their canonical encoding.
    end_date >= start_date is not enforced here.
    """

    start_date: datetime
    end_date: datetime
    product_name: str
    user_name: str

    def __post_init__(self):
        """Normalise dates to UTC and validate the names."""
        object.__setattr__(self, "start_date", as_utc(self.start_date))
        object.__setattr__(self, "end_date", as_utc(self.end_date))
        _check_name("Product name", self.product_name)
        _check_name("User name", self.user_name)


@dataclass(frozen=True)
class License:
    """
    Signed license artifact.

    Carries no key material and no fields outside the encoded terms.
    """

    terms_encoded: str
    signature: str

    def __post_init__(self):
        """Validate license artifact fields."""
        if not isinstance(self.terms_encoded, str):
            raise ValueError("Encoded terms must be a string")
        if not isinstance(self.signature, str):
            raise ValueError("Signature must be a string")
