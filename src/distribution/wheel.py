"""PEP 427 wheel filenames.

``{name}-{version}(-{build})?-{python}-{abi}-{platform}.whl``
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from packaging.version import InvalidVersion, Version

from .build import BuildMarker
from .errors import InvalidArtifactName
from .tags import CompatibilityTag

WHEEL_SUFFIX = ".whl"


@dataclass(frozen=True)
class ArtifactName:
    """The parts of a wheel filename.

    ``package`` is kept exactly as it appears in the filename; compare it
    through :func:`distribution.names.normalize_package_name` if needed.
    """

    package: str
    version: Version
    build_marker: Optional[BuildMarker]
    compatibility_tag: CompatibilityTag
    # filename spellings, so rendering gives back the parsed filename
    version_text: str = field(default="", compare=False, repr=False)
    build_text: str = field(default="", compare=False, repr=False)

    @classmethod
    def parse(cls, filename: str) -> "ArtifactName":
        """Parse a PEP 427 compliant wheel filename.

        Args:
            filename: Bare filename, without any directory or URL prefix.

        Returns:
            ArtifactName: The parsed filename.

        Raises:
            InvalidArtifactName: If any part of the filename is malformed.
        """
        if not filename.endswith(WHEEL_SUFFIX):
            raise InvalidArtifactName(f"not a wheel filename: {filename!r}")
        stem = filename[: -len(WHEEL_SUFFIX)]

        segments = stem.rsplit("-", 3)
        if len(segments) != 4:
            raise InvalidArtifactName(f"missing compatibility tag: {filename!r}")
        head, python_part, abi_part, platform_part = segments

        compatibility_tag = CompatibilityTag.parse_parts(python_part, abi_part, platform_part)
        if compatibility_tag is None:
            raise InvalidArtifactName(f"invalid compatibility tag: {filename!r}")

        tokens = head.split("-")
        if len(tokens) not in (2, 3):
            raise InvalidArtifactName(f"invalid name, version or build tag: {filename!r}")
        package, version_text = tokens[0], tokens[1]
        build_text = tokens[2] if len(tokens) == 3 else ""
        if not package:
            raise InvalidArtifactName(f"missing project name: {filename!r}")

        try:
            version = Version(version_text)
        except InvalidVersion as exc:
            raise InvalidArtifactName(f"invalid version {version_text!r}: {filename!r}") from exc

        build_marker = None
        if len(tokens) == 3:
            build_marker = BuildMarker.parse(build_text)
            if build_marker is None:
                raise InvalidArtifactName(f"invalid build tag {build_text!r}: {filename!r}")

        return cls(
            package=package,
            version=version,
            build_marker=build_marker,
            compatibility_tag=compatibility_tag,
            version_text=version_text,
            build_text=build_text,
        )

    @property
    def build_key(self) -> BuildMarker:
        """The build marker, or the minimum marker when the wheel has none."""
        return self.build_marker if self.build_marker is not None else BuildMarker.MINIMUM

    def __str__(self) -> str:
        version = self.version_text or str(self.version)
        build = ""
        if self.build_marker is not None:
            build = f"-{self.build_text or self.build_marker}"
        return f"{self.package}-{version}{build}-{self.compatibility_tag}{WHEEL_SUFFIX}"
