"""
GenerateKeyResourcesCommand.

Command to create an issuer key pair in a resource folder.
"""
from dataclasses import dataclass
from os import PathLike
from typing import Union


@dataclass
class GenerateKeyResourcesCommand:
    """
    Command to generate key resources.

    When only_if_absent is set, an existing private key is kept.
    """

    resource_folder: Union[str, PathLike]
    only_if_absent: bool = True
