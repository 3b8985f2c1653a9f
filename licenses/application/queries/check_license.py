"""
CheckLicenseQuery.

Query run by a consuming application at startup.
"""
from dataclasses import dataclass
from datetime import datetime
from os import PathLike
from typing import Optional, Union


@dataclass
class CheckLicenseQuery:
    """
    Query to load and validate the installed license.

    If no license exists at license_path and import_from is given,
    that file is copied into place first.
    """

    license_path: Union[str, PathLike]
    public_key: str
    product_name: str
    import_from: Optional[Union[str, PathLike]] = None
    now: Optional[datetime] = None
