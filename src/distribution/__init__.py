"""Parsing and selection of Python distribution artifacts.

Everything in this package is pure: no I/O, no logging, no shared state.
"""
from .build import BuildMarker
from .errors import (
    DistributionError,
    InvalidArtifactName,
    InvalidCompatibilityTag,
    InvalidName,
    NotFound,
)
from .names import PackageName, normalize_package_name
from .records import ArtifactKind, ArtifactRecord
from .selector import SDIST_SELECTOR, DistributionSelector, require
from .tags import WILDCARD, CompatibilityTag, Concrete, Wildcard, split_runtime_tag
from .wheel import WHEEL_SUFFIX, ArtifactName

__all__ = [
    "ArtifactKind",
    "ArtifactName",
    "ArtifactRecord",
    "BuildMarker",
    "CompatibilityTag",
    "Concrete",
    "DistributionError",
    "DistributionSelector",
    "InvalidArtifactName",
    "InvalidCompatibilityTag",
    "InvalidName",
    "NotFound",
    "PackageName",
    "SDIST_SELECTOR",
    "WHEEL_SUFFIX",
    "WILDCARD",
    "Wildcard",
    "normalize_package_name",
    "require",
    "split_runtime_tag",
]
