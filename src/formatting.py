"""Plain-text rendering of project details.

Which sections are rendered depends on a detail level (raised with -v,
lowered with -q) and on flags that force a section regardless of the level.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from distribution import ArtifactKind, DistributionSelector, InvalidArtifactName, NotFound
from package_inspect import InspectionError
from project import Project
from registry.pypi import DistributionUrl, PackageVersion

logger = logging.getLogger(__name__)

INDENT = "  "


@dataclass
class DisplayFields:
    """Sections to render. ``artifacts`` is a level from 0 (hidden) to 4."""

    name: bool = True
    time: bool = True
    summary: bool = True
    license: bool = False
    urls: bool = False
    keywords: bool = False
    classifiers: bool = False
    artifacts: int = 0
    dependencies: bool = False
    readme: bool = False
    packages: bool = False
    executables: bool = False

    @classmethod
    def from_args(cls, args) -> "DisplayFields":
        """Combine the detail level with the explicit section flags."""
        if args.QUIET >= 2:
            details = 0
        elif args.QUIET == 1:
            details = 1
        else:
            details = args.VERBOSE + 2
        return cls(
            name=details >= 1,
            time=details >= 2,
            summary=args.SUMMARY or details >= 2,
            license=args.LICENSE or details >= 3,
            urls=args.URLS or details >= 3,
            keywords=args.KEYWORDS or details >= 4,
            classifiers=args.CLASSIFIERS or details >= 4,
            artifacts=args.ARTIFACTS or (1 if details >= 5 else 0),
            dependencies=args.DEPENDENCIES or details >= 6,
            readme=args.README or details >= 7,
            packages=args.PACKAGES,
            executables=args.EXECUTABLES,
        )


def _parse_time(raw: str) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None


def _wheel_tag(dist: DistributionUrl) -> str:
    try:
        return str(dist.wheel_name().compatibility_tag)
    except InvalidArtifactName:
        return dist.filename


def format_name_version(version: PackageVersion) -> str:
    text = f"{version.name}@{version.version}"
    if version.yanked:
        text += " [YANKED]"
    return text


def format_dist(dist: DistributionUrl, details: int) -> str:
    """One artifact line: its kind or tag, then URL (level 3) and upload time (level 4)."""
    if dist.kind is ArtifactKind.SOURCE_ARCHIVE:
        label = "sdist"
    elif dist.kind is ArtifactKind.BUILT_ARTIFACT:
        label = _wheel_tag(dist)
    else:
        return ""
    parts = [label]
    if details > 3:
        parts.append(dist.upload_time)
    if details >= 3:
        parts.append(dist.url)
    return INDENT + " ".join(p for p in parts if p)


def format_dist_time(version: PackageVersion, dist: Optional[DistributionUrl] = None) -> str:
    """Upload time of the selected artifact, or of the release's earliest file."""
    if dist is not None:
        return f"{format_dist(dist, 0)}@{dist.upload_time}"
    times = [t for t in (_parse_time(u.upload_time_iso_8601) for u in version.urls) if t]
    if not times:
        return ""
    return INDENT + min(times).strftime("%Y-%m-%dT%H:%M:%S")


def format_summary(version: PackageVersion) -> str:
    return INDENT + (version.info.summary or "")


def format_license_copyright(version: PackageVersion) -> str:
    info = version.info
    author = (info.author_email or "").replace('"', "")
    if info.license and author:
        return f"{INDENT}{info.license} © {author}"
    if info.license:
        return INDENT + info.license
    if author:
        return f"{INDENT}© {author}"
    return ""


def format_urls(version: PackageVersion) -> List[str]:
    lines = ["Links"]
    if version.info.project_url:
        lines.append(f"{INDENT}Package Index: {version.info.project_url}")
    for label, url in version.info.project_urls.items():
        lines.append(f"{INDENT}{label}: {url}")
    return lines


def format_keywords(version: PackageVersion) -> List[str]:
    keywords = version.info.keyword_list()
    if not keywords:
        return []
    return ["Keywords", INDENT + ", ".join(keywords)]


def format_classifiers(version: PackageVersion) -> List[str]:
    if not version.info.classifiers:
        return []
    return ["Classifiers"] + [INDENT + c for c in version.info.classifiers]


def format_distributions(distributions: List[DistributionUrl], details: int) -> List[str]:
    """Level 1 summarizes the artifact kinds; higher levels list every artifact."""
    known = [d for d in distributions if d.kind is not ArtifactKind.OTHER]
    if not known:
        return []
    header = "Distribution Types"
    if details == 1:
        summary = DistributionSelector([d.to_record() for d in known]).summarize()
        return [header, INDENT + summary]
    return [header] + [format_dist(d, details) for d in known]


def format_dependencies(version: PackageVersion) -> List[str]:
    lines = []
    if version.info.requires_python:
        lines.append(f"{INDENT}python{version.info.requires_python}")
    lines.extend(INDENT + d for d in version.info.requires_dist)
    if not lines:
        return []
    return ["Dependencies"] + lines


def format_readme(version: PackageVersion) -> str:
    return version.info.description or ""


def _inspect(project: Project):
    try:
        return project.import_package()
    except (NotFound, InspectionError) as exc:
        logger.warning("Cannot inspect distribution: %s", exc)
        return None


def format_packages(project: Project) -> List[str]:
    inspected = _inspect(project)
    if inspected is None:
        return []
    return ["Importable Packages"] + [INDENT + p for p in sorted(inspected.provides_packages())]


def format_executables(project: Project) -> List[str]:
    inspected = _inspect(project)
    if inspected is None:
        return []
    names = sorted(inspected.provides_executables()) + inspected.console_scripts()
    return ["Executable Commands"] + [INDENT + n for n in names]


def format_package_version_details(project: Project, fields: DisplayFields) -> str:
    """Render the selected release section by section."""
    version = project.version()
    display: List[str] = []

    if fields.name:
        display.append(format_name_version(version))
    if fields.time or project.distribution_was_selected():
        dist = project.distribution() if project.distribution_was_selected() else None
        display.append(format_dist_time(version, dist))
    if fields.license:
        display.append(format_license_copyright(version))
    if fields.summary:
        display.append(format_summary(version))
    if fields.urls:
        display.extend(format_urls(version))
    if fields.keywords:
        display.extend(format_keywords(version))
    if fields.classifiers:
        display.extend(format_classifiers(version))
    if fields.artifacts >= 1:
        if project.distribution_was_selected():
            distributions = [project.distribution()]
        else:
            distributions = version.urls
        display.extend(format_distributions(distributions, fields.artifacts))
    if fields.dependencies:
        display.extend(format_dependencies(version))
    if fields.packages:
        display.extend(format_packages(project))
    if fields.executables:
        display.extend(format_executables(project))
    if fields.readme:
        display.append(format_readme(version))

    return "\n".join(line for line in display if line)


def format_package_versions(project: Project, fields: DisplayFields) -> str:
    """All valid versions, newest first."""
    package = project.package()
    versions = ", ".join(str(v) for v in reversed(package.ordered_versions()))
    if fields.name:
        return f"{package.name}\n{versions}"
    return versions
