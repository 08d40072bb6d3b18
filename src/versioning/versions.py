"""PEP 440 version helpers built on ``packaging.version``."""
from __future__ import annotations

from typing import Collection, Iterable, List, Optional

from packaging.version import InvalidVersion, Version


def parse_version(raw: str) -> Optional[Version]:
    """Parse a version string, returning None if it is not PEP 440."""
    try:
        return Version(raw)
    except InvalidVersion:
        return None


def ordered_versions(candidates: Iterable[str]) -> List[Version]:
    """Return the valid versions among ``candidates`` in ascending order.

    Invalid version strings are dropped. The order is comparison order, which
    is neither upload order nor lexical order.
    """
    parsed = (parse_version(v) for v in candidates)
    return sorted(v for v in parsed if v is not None)


def pick_latest(
    candidates: Iterable[str],
    yanked: Collection[str] = (),
    include_prereleases: bool = False,
) -> Optional[Version]:
    """Pick the greatest version that is not yanked.

    Args:
        candidates: Version strings as listed by an index.
        yanked: Version strings that were yanked.
        include_prereleases: Consider pre- and dev-releases too. When no final
            release exists, pre-releases are considered regardless.

    Returns:
        The chosen version, or None when nothing qualifies.
    """
    yanked_versions = {v for v in (parse_version(y) for y in yanked) if v is not None}
    available = [v for v in ordered_versions(candidates) if v not in yanked_versions]
    if not include_prereleases:
        final = [v for v in available if not v.is_prerelease]
        if final:
            available = final
    return available[-1] if available else None
