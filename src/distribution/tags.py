"""PEP 425 compatibility tags.

A tag has three parts, each a dot-separated sequence of tokens:
``<python>-<abi>-<platform>``. The ABI part may be the wildcard ``none`` and
the platform part the wildcard ``any``. A concrete ABI on any platform is
meaningless and is refused at construction time.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Tuple, Union

from packaging.tags import Tag

from .errors import InvalidCompatibilityTag

ANY_ABI = "none"
ANY_PLATFORM = "any"
UNIVERSAL_PYTHON = ("py2", "py3")

# not explicit in PEP 425 but implied by its FAQ on normalising to underscores
_ABI_OR_PLATFORM = re.compile(r"[\w.]+")


@dataclass(frozen=True)
class Wildcard:
    """Matches any value along one axis of a tag."""

    def __repr__(self) -> str:
        return "WILDCARD"


WILDCARD = Wildcard()


@dataclass(frozen=True)
class Concrete:
    """A non-empty, ordered sequence of tag tokens."""

    tokens: Tuple[str, ...]


TagSet = Union[Wildcard, Concrete]


def _tag_set(part: str, wildcard_token: str) -> TagSet:
    if part == wildcard_token:
        return WILDCARD
    return Concrete(tuple(part.split(".")))


def _render(tag_set: TagSet, wildcard_token: str) -> List[str]:
    if isinstance(tag_set, Concrete):
        return list(tag_set.tokens)
    return [wildcard_token]


@dataclass(frozen=True)
class CompatibilityTag:
    """A validated PEP 425 compatibility tag.

    Use :meth:`parse_parts` or :meth:`parse_tag` to build one from text.
    Constructing directly with a concrete ABI and a wildcard platform raises
    :class:`InvalidCompatibilityTag`.
    """

    runtime: Tuple[str, ...]
    abi: TagSet = WILDCARD
    platform: TagSet = WILDCARD

    def __post_init__(self) -> None:
        if not self.runtime:
            raise InvalidCompatibilityTag("a compatibility tag needs a python tag")
        if isinstance(self.abi, Concrete) and isinstance(self.platform, Wildcard):
            raise InvalidCompatibilityTag(
                f"abi {'.'.join(self.abi.tokens)!r} cannot be used with platform 'any'"
            )

    @classmethod
    def parse_parts(
        cls, python_part: str, abi_part: str, platform_part: str
    ) -> Optional["CompatibilityTag"]:
        """Build a tag from its three textual parts.

        Valid values for each part are defined by the Python implementation
        they describe and there is no definitive list, so only the shape is
        checked.

        Returns:
            The tag, or None if any part is empty, the ABI or platform part
            holds characters other than alphanumerics, "_" and ".", or a
            concrete ABI is paired with the "any" platform.
        """
        if not python_part or not abi_part or not platform_part:
            return None
        if not _ABI_OR_PLATFORM.fullmatch(abi_part):
            return None
        if not _ABI_OR_PLATFORM.fullmatch(platform_part):
            return None

        abi = _tag_set(abi_part, ANY_ABI)
        platform = _tag_set(platform_part, ANY_PLATFORM)
        if isinstance(abi, Concrete) and isinstance(platform, Wildcard):
            return None
        return cls(tuple(python_part.split(".")), abi, platform)

    @classmethod
    def parse_tag(cls, tag: str) -> Optional["CompatibilityTag"]:
        """Parse ``<python>-<abi>-<platform>``, splitting at the first two dashes."""
        parts = tag.split("-", 2)
        if len(parts) != 3:
            return None
        return cls.parse_parts(*parts)

    @classmethod
    def from_string(cls, tag: str) -> "CompatibilityTag":
        """Like :meth:`parse_tag` but raise on failure; for user-supplied selectors."""
        parsed = cls.parse_tag(tag)
        if parsed is None:
            raise InvalidCompatibilityTag(f"invalid compatibility tag: {tag!r}")
        return parsed

    def runtime_tags(self) -> List[str]:
        return list(self.runtime)

    def abi_tags(self) -> List[str]:
        return _render(self.abi, ANY_ABI)

    def platform_tags(self) -> List[str]:
        return _render(self.platform, ANY_PLATFORM)

    def is_universal(self) -> bool:
        """Pure and built for both Python 2 and Python 3."""
        return self.is_pure() and self.runtime == UNIVERSAL_PYTHON

    def is_pure(self) -> bool:
        return self.is_wildcard_platform() and self.is_wildcard_abi()

    def is_wildcard_platform(self) -> bool:
        return isinstance(self.platform, Wildcard)

    def is_wildcard_abi(self) -> bool:
        return isinstance(self.abi, Wildcard)

    def expand(self) -> FrozenSet[Tag]:
        """Every (python, abi, platform) triple this compressed tag set stands for."""
        return frozenset(
            Tag(python, abi, platform)
            for python in self.runtime_tags()
            for abi in self.abi_tags()
            for platform in self.platform_tags()
        )

    def __str__(self) -> str:
        return "-".join(
            ".".join(tokens)
            for tokens in (self.runtime_tags(), self.abi_tags(), self.platform_tags())
        )


def split_runtime_tag(python_tag: str) -> Tuple[str, str]:
    """Split a python tag such as ``cp311`` into ``("cp", "311")``.

    The implementation is everything before the first ASCII digit; the
    version is the rest.
    """
    for index, char in enumerate(python_tag):
        if char in "0123456789":
            return python_tag[:index], python_tag[index:]
    return python_tag, ""
