"""Package index client: fetch project, release and index metadata.

Talks to the pypi.org JSON API (``/pypi/{project}/json`` and
``/pypi/{project}/{version}/json``) and to the PEP 691 JSON form of the
simple API for index-level metadata.
"""
from __future__ import annotations

import logging
import urllib.parse
from typing import Any, Dict, Optional, Set

from packaging.version import Version

from constants import Constants, SupportLevel
from common.http_client import ConnectionFailure, get_json
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer
from distribution import NotFound, normalize_package_name

from .models import Package, PackageVersion

logger = logging.getLogger(__name__)

HEADERS_SIMPLE = {"Accept": Constants.SIMPLE_API_ACCEPT}


class RegistryError(Exception):
    """The index could not be reached or answered with something unusable."""


def _base_url(index: Optional[str]) -> str:
    base = (index or Constants.INDEX_URL).rstrip("/")
    parts = urllib.parse.urlsplit(base)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise RegistryError(f"invalid index url: {base!r}")
    return base


def _fetch(url: str, what: str, headers: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """GET a JSON document, mapping failures onto NotFound and RegistryError."""
    with Timer() as timer:
        try:
            status_code, _, data = get_json(url, context="index", headers=headers)
        except ConnectionFailure as exc:
            raise RegistryError(str(exc)) from exc

    if status_code == 404:
        logger.warning(
            "%s not found on index",
            what,
            extra=extra_context(
                event="http_response",
                outcome="not_found",
                status_code=404,
                target=safe_url(url),
            ),
        )
        raise NotFound(f"{what} not found")
    if status_code != 200:
        logger.error("Index error for %s, status code: %s", what, status_code)
        raise RegistryError(f"{what}: unexpected status code {status_code}")
    if not isinstance(data, dict):
        raise RegistryError(f"{what}: response is not a JSON object")

    if is_debug_enabled(logger):
        logger.debug(
            "Index response ok",
            extra=extra_context(
                event="http_response",
                component="client",
                outcome="success",
                duration_ms=timer.duration_ms(),
                target=safe_url(url),
            ),
        )
    return data


def fetch_package(name: str, index: Optional[str] = None) -> Package:
    """Retrieve project metadata from the package index.

    Args:
        name: Project name; normalized before building the URL.
        index: Index base URL. Defaults to Constants.INDEX_URL.

    Returns:
        Package: The project and its releases.

    Raises:
        InvalidName: If the name is not a valid project name.
        NotFound: If the index does not know the project.
        RegistryError: If the index cannot be reached or the answer is unusable.
    """
    project = normalize_package_name(name)
    url = f"{_base_url(index)}/pypi/{project}/json"
    logger.info("Fetching project %s", project)
    data = _fetch(url, f"project {project}")
    try:
        return Package.from_json(data)
    except (KeyError, TypeError, ValueError) as exc:
        raise RegistryError(f"project {project}: malformed response ({exc})") from exc


def fetch_package_version(name: str, version: str, index: Optional[str] = None) -> PackageVersion:
    """Retrieve the metadata of one release from the package index.

    Raises:
        InvalidName: If the name is not a valid project name.
        InvalidVersion: If the version is not a PEP 440 version.
        NotFound: If the index does not know the release.
        RegistryError: If the index cannot be reached or the answer is unusable.
    """
    project = normalize_package_name(name)
    parsed = Version(version)
    url = f"{_base_url(index)}/pypi/{project}/{parsed}/json"
    logger.info("Fetching release %s %s", project, parsed)
    data = _fetch(url, f"release {project} {parsed}")
    try:
        return PackageVersion.from_json(data)
    except (KeyError, TypeError, ValueError) as exc:
        raise RegistryError(f"release {project} {parsed}: malformed response ({exc})") from exc


def _fetch_simple_root(index: Optional[str]) -> Dict[str, Any]:
    url = f"{_base_url(index)}/simple/"
    return _fetch(url, "index root", headers=HEADERS_SIMPLE)


def fetch_index_version(index: Optional[str] = None) -> str:
    """The PEP 691 ``meta.api_version`` an index reports."""
    data = _fetch_simple_root(index)
    try:
        return str(data["meta"]["api_version"])
    except (KeyError, TypeError) as exc:
        raise RegistryError("index root: missing meta.api_version") from exc


def index_is_supported(index: Optional[str] = None) -> SupportLevel:
    """Compare the index API version against the one this client speaks.

    Raises:
        RegistryError: If the reported version is not ``<major>.<minor>``.
    """
    api_version = fetch_index_version(index)
    parts = api_version.split(".")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise RegistryError(f"index root: invalid api version {api_version!r}")
    major, minor = int(parts[0]), int(parts[1])
    if major > Constants.API_MAJOR_VERSION:
        return SupportLevel.UNSUPPORTED
    if minor > Constants.API_MINOR_VERSION:
        return SupportLevel.SOMEWHAT_SUPPORTED
    return SupportLevel.SUPPORTED


def fetch_projects(index: Optional[str] = None) -> Set[str]:
    """Names of all projects hosted on an index; they may not be normalized."""
    data = _fetch_simple_root(index)
    projects = data.get("projects") or []
    return {p["name"] for p in projects if isinstance(p, dict) and p.get("name")}
