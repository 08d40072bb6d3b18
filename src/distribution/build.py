"""Wheel build tags.

A build tag breaks ties between wheels built from the same source with the
same compatibility tag. It starts with digits, compared numerically, and may
carry a trailing string compared lexically.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar, Optional

_BUILD_TAG = re.compile(r"([0-9]+)(.*)", re.DOTALL)


@dataclass(frozen=True, order=True)
class BuildMarker:
    """Parsed build tag, ordered by ``(ordinal, suffix)``."""

    ordinal: int
    suffix: str = ""

    MINIMUM: ClassVar["BuildMarker"]

    @classmethod
    def parse(cls, raw: str) -> Optional["BuildMarker"]:
        """Parse a build tag, or return None if it does not start with a digit."""
        match = _BUILD_TAG.fullmatch(raw)
        if match is None:
            return None
        return cls(int(match.group(1)), match.group(2))

    def __str__(self) -> str:
        return f"{self.ordinal}{self.suffix}"


# stands in for wheels that carry no build tag
BuildMarker.MINIMUM = BuildMarker(0, "")
