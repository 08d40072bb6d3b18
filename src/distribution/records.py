"""Artifact records as handed over by a package index client."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ArtifactKind(Enum):
    """Kinds of distribution artifact an index may list for a version.

    Values are the index ``packagetype`` strings.
    """

    SOURCE_ARCHIVE = "sdist"
    BUILT_ARTIFACT = "bdist_wheel"
    OTHER = "other"

    @classmethod
    def from_packagetype(cls, packagetype: str) -> "ArtifactKind":
        """Map an index ``packagetype`` to a kind; unknown types become OTHER."""
        for kind in (cls.SOURCE_ARCHIVE, cls.BUILT_ARTIFACT):
            if packagetype == kind.value:
                return kind
        return cls.OTHER


@dataclass(frozen=True)
class ArtifactRecord:
    """One downloadable file of a project version."""

    filename: str
    kind: ArtifactKind
    download_locator: str = ""
    upload_timestamp: str = ""
