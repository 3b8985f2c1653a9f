"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from abc import ABC
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


class KeyKind(Enum):
    """Which half of a signing key pair a key material holds."""

    PRIVATE = "private"
    PUBLIC = "public"

    def __str__(self) -> str:
        """Return kind as string."""
        return self.value


class ValidationOutcome(Enum):
    """Outcome label for a license validation, used for metrics and DTOs."""

    VALID = "valid"
    SIGNATURE_MISMATCH = "signature_mismatch"
    MALFORMED_TERMS = "malformed_terms"
    EXPIRED = "expired"
    NOT_YET_VALID = "not_yet_valid"
    PRODUCT_MISMATCH = "product_mismatch"

    def __str__(self) -> str:
        """Return outcome as string."""
        return self.value
