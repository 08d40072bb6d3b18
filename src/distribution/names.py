"""Project name validation and normalization.

https://packaging.python.org/en/latest/specifications/name-normalization/
"""
from __future__ import annotations

import re
from typing import NewType

from .errors import InvalidName

PackageName = NewType("PackageName", str)

_VALID_NAME = re.compile(r"[A-Za-z0-9]|[A-Za-z0-9][A-Za-z0-9._-]*[A-Za-z0-9]")
_SEPARATORS = re.compile(r"[-_.]+")


def normalize_package_name(name: str) -> PackageName:
    """Return the normalized form of a project name.

    Args:
        name: Raw project name as typed by a user or found in an index.

    Returns:
        PackageName: Lowercase name with separator runs collapsed to "-".

    Raises:
        InvalidName: If the name is not valid to begin with.
    """
    if not isinstance(name, str) or not _VALID_NAME.fullmatch(name):
        raise InvalidName(f"invalid project name: {name!r}")
    # the grammar admits ASCII only, so lower() is an ASCII fold here
    return PackageName(_SEPARATORS.sub("-", name).lower())


def is_normalized(name: str) -> bool:
    """True when the name is valid and already in normalized form."""
    try:
        return normalize_package_name(name) == name
    except InvalidName:
        return False
