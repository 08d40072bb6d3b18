"""Lazy access to a project, one of its releases and one of its artifacts.

Each piece is fetched on first use and then reused for the rest of the run,
so rendering only costs the requests it actually needs.
"""
import logging
from typing import Optional

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled
from distribution import (
    SDIST_SELECTOR,
    ArtifactKind,
    DistributionSelector,
    NotFound,
    require,
)
from package_inspect import InspectedPackage, fetch as fetch_wheel
from registry.pypi import (
    DistributionUrl,
    Package,
    PackageVersion,
    fetch_package,
    fetch_package_version,
)
from versioning import pick_latest

logger = logging.getLogger(__name__)


class Project:
    """A project name plus the user's optional version and artifact selectors.

    Args:
        package_selector: Project name as typed by the user.
        version_selector: Exact version; the latest release when omitted.
        distribution_selector: "sdist" or a compatibility tag; the most widely
            installable wheel when omitted.
        index: Index base URL; Constants.INDEX_URL when omitted.
        compatible: Without a distribution selector, pick the wheel this
            interpreter would install instead of the most widely installable.
    """

    def __init__(
        self,
        package_selector: str,
        version_selector: Optional[str] = None,
        distribution_selector: Optional[str] = None,
        index: Optional[str] = None,
        compatible: bool = False,
    ):
        self.package_selector = package_selector
        self.version_selector = version_selector
        self.distribution_selector = distribution_selector
        self.index = index
        self.compatible = compatible
        self._package: Optional[Package] = None
        self._version: Optional[PackageVersion] = None
        self._distribution: Optional[DistributionUrl] = None
        self._import_package: Optional[InspectedPackage] = None

    def version_was_selected(self) -> bool:
        return self.version_selector is not None

    def distribution_was_selected(self) -> bool:
        return self.distribution_selector is not None

    def package(self) -> Package:
        if self._package is None:
            self._package = fetch_package(self.package_selector, self.index)
        return self._package

    def version(self) -> PackageVersion:
        """The selected release, or the latest release that was not yanked."""
        if self._version is None:
            if self.version_selector is not None:
                version = self.version_selector
            else:
                package = self.package()
                latest = pick_latest(
                    package.versions,
                    yanked=package.yanked_versions(),
                    include_prereleases=Constants.INCLUDE_PRERELEASES,
                )
                if latest is None:
                    raise NotFound(f"no usable release of {self.package_selector}")
                version = str(latest)
                logger.info("Latest release of %s is %s", self.package_selector, version)
            self._version = fetch_package_version(self.package_selector, version, self.index)
        return self._version

    def selector(self) -> DistributionSelector:
        return DistributionSelector(self.version().artifact_records())

    def distribution(self) -> DistributionUrl:
        """The artifact chosen by the distribution selector.

        Raises:
            NotFound: If no artifact of the release matches.
            InvalidCompatibilityTag: If the selector is not "sdist" or a tag.
        """
        if self._distribution is None:
            selector = self.selector()
            if self.distribution_selector is None and self.compatible:
                record = require(selector.select_compatible(), "this interpreter")
            else:
                record = require(
                    selector.select(self.distribution_selector),
                    self.distribution_selector or "any wheel",
                )
            url = self.version().find_url(record)
            if url is None:
                raise NotFound(f"{record.filename} is not listed for this release")
            if is_debug_enabled(logger):
                logger.debug(
                    "Distribution selected",
                    extra=extra_context(
                        event="decision",
                        component="project",
                        action="select_distribution",
                        outcome=url.filename,
                        selector=self.distribution_selector,
                    ),
                )
            self._distribution = url
        return self._distribution

    def import_package(self) -> InspectedPackage:
        """Inspect the selected wheel.

        Raises:
            NotFound: If the selection is a source archive, which cannot be inspected.
            InspectionError: If the wheel cannot be downloaded or read.
        """
        if self._import_package is None:
            if self.distribution_selector == SDIST_SELECTOR:
                raise NotFound("a source distribution cannot be inspected")
            distribution = self.distribution()
            if distribution.kind is not ArtifactKind.BUILT_ARTIFACT:
                raise NotFound(f"{distribution.filename} is not a wheel")
            self._import_package = fetch_wheel(distribution.url)
        return self._import_package
