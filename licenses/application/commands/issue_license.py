"""
IssueLicenseCommand.

Command to sign a license for one licensee and write it as a file.
"""
from dataclasses import dataclass
from datetime import datetime
from os import PathLike
from typing import Union


@dataclass
class IssueLicenseCommand:
    """
    Command to issue a user license file.

    The license is written to ``<resource_folder>/<user_name><suffix>``,
    next to the private key used to sign it.
    """

    resource_folder: Union[str, PathLike]
    product_name: str
    user_name: str
    start_date: datetime
    end_date: datetime
