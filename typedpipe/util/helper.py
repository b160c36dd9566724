"""This module contains helper functions that are shared by different modules."""

import re
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import TYPE_CHECKING

from colorama import Style
from colorama.ansi import AnsiFore

if TYPE_CHECKING:  # pragma: no cover
    from typedpipe.util.configuration import Configuration


def print_fcolor(fore: AnsiFore, message: str):
    """Print string with colored font and reset the color afterwards."""
    print(f"{fore}{message}{Style.RESET_ALL}")


def camel_to_snake(camel: str) -> str:
    """ensures that the input string is snake_case"""

    _underscorer1 = re.compile(r"(.)([A-Z][a-z]+)")
    _underscorer2 = re.compile("([a-z0-9])([A-Z])")

    subbed = _underscorer1.sub(r"\1_\2", camel)
    return _underscorer2.sub(r"\1_\2", subbed).lower()


def get_package_version() -> str:
    """returns the installed typedpipe version or 'unknown' if it is not installed"""
    try:
        return version("typedpipe")
    except PackageNotFoundError:
        return "unknown"


def get_versions_string(config: "Configuration" = None) -> str:
    """
    Returns the python and typedpipe versions. If a configuration was given then its
    version is added as well.
    """
    padding = 25
    version_string = f"{'python version:'.ljust(padding)}{sys.version.split()[0]}"
    version_string += f"\n{'typedpipe version:'.ljust(padding)}{get_package_version()}"
    if config:
        config_version = (
            f"{config.version}, {', '.join(config.config_paths) if config.config_paths else 'None'}"
        )
    else:
        config_version = "no configuration given"
    version_string += f"\n{'configuration version:'.ljust(padding)}{config_version}"
    return version_string
