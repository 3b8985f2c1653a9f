"""
License DTOs for application responses.
"""
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional


@dataclass
class KeyResourcesDTO:
    """DTO for generated or existing key resources."""

    private_key_path: Optional[Path]
    public_key_path: Optional[Path]
    public_key: str
    created: bool


@dataclass
class LicenseTermsDTO:
    """DTO for display of verified license terms."""

    product_name: str
    user_name: str
    start_date: datetime
    end_date: datetime


@dataclass
class IssuedLicenseDTO:
    """DTO for an issued license file."""

    license_path: Path
    terms: LicenseTermsDTO


@dataclass
class LicenseCheckDTO:
    """
    DTO for the result of a startup license check.

    code and message identify the failure precisely so the caller
    can render it; both are None when the license is valid.
    """

    is_valid: bool
    code: Optional[str] = None
    message: Optional[str] = None
    terms: Optional[LicenseTermsDTO] = None
