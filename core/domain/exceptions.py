"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""
from datetime import datetime


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class LicensingException(DomainException):
    """Base exception for licensing errors."""

    pass


class KeyFormatError(LicensingException):
    """Raised when key text is not a valid encoding of the expected key type."""

    def __init__(self, message: str = "Invalid key format"):
        super().__init__(message, code="KEY_FORMAT_ERROR")


class DecodeError(LicensingException):
    """Raised when encoded license terms are malformed or truncated."""

    def __init__(self, message: str = "Malformed license terms encoding"):
        super().__init__(message, code="DECODE_ERROR")


class SigningError(LicensingException):
    """Raised when a license cannot be signed with the given key."""

    def __init__(self, message: str = "Unable to sign license terms"):
        super().__init__(message, code="SIGNING_ERROR")


class PersistenceError(LicensingException):
    """Raised when a license or key cannot be read or written."""

    def __init__(self, message: str = "License storage error", code: str = None):
        super().__init__(message, code=code or "PERSISTENCE_ERROR")


class KeyResourceNotFoundError(PersistenceError):
    """Raised when a key file is missing from a resource folder."""

    def __init__(self, message: str = "Key resource not found"):
        super().__init__(message, code="KEY_RESOURCE_NOT_FOUND")


class ValidationError(LicensingException):
    """
    Base exception for license validation failures.

    Every validation failure is terminal for the current run.
    """

    pass


class SignatureMismatchError(ValidationError):
    """Raised when the license signature does not verify."""

    def __init__(self, message: str = "Signature not verified"):
        super().__init__(message, code="SIGNATURE_MISMATCH")


class MalformedTermsError(ValidationError):
    """Raised when signed license terms cannot be decoded."""

    def __init__(self, message: str = "License terms are malformed"):
        super().__init__(message, code="MALFORMED_TERMS")


class LicenseExpiredError(ValidationError):
    """Raised when the license end date has passed."""

    def __init__(self, end_date: datetime, message: str = None):
        self.end_date = end_date
        super().__init__(
            message or f"License terms expired on {end_date.date().isoformat()}",
            code="LICENSE_EXPIRED",
        )


class LicenseNotYetValidError(ValidationError):
    """Raised when the license start date has not been reached."""

    def __init__(self, start_date: datetime, message: str = None):
        self.start_date = start_date
        super().__init__(
            message or f"License terms not valid until {start_date.date().isoformat()}",
            code="LICENSE_NOT_YET_VALID",
        )


class ProductMismatchError(ValidationError):
    """Raised when the license was issued for another product."""

    def __init__(self, product_name: str, message: str = None):
        self.product_name = product_name
        super().__init__(
            message or f"Invalid product name: {product_name}",
            code="PRODUCT_MISMATCH",
        )
