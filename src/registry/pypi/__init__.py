"""PyPI registry package.

This package provides package index support:
- models.py: dataclasses for project, release and file records of the JSON API
- client.py: HTTP interactions with the JSON API and the PEP 691 simple API

Public API is preserved at registry.pypi without shims.
"""

# Public API re-exports
from .client import (  # noqa: F401
    RegistryError,
    fetch_index_version,
    fetch_package,
    fetch_package_version,
    fetch_projects,
    index_is_supported,
)
from .models import (  # noqa: F401
    DistributionUrl,
    Package,
    PackageVersion,
    ProjectInfo,
    Vulnerability,
)

__all__ = [
    # Client
    "RegistryError",
    "fetch_index_version",
    "fetch_package",
    "fetch_package_version",
    "fetch_projects",
    "index_is_supported",
    # Records
    "DistributionUrl",
    "Package",
    "PackageVersion",
    "ProjectInfo",
    "Vulnerability",
]
