"""Records returned by the index JSON API.

Only the fields this tool uses are kept; everything else in a response is
ignored. See warehouse's ``_json_data`` for the shape pypi.org produces.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from packaging.version import Version

from distribution import ArtifactKind, ArtifactName, ArtifactRecord
from versioning import ordered_versions, parse_version


def _str_list(value: Any) -> List[str]:
    if not value:
        return []
    return [str(v) for v in value]


@dataclass
class DistributionUrl:
    """One file of a release, as listed under ``urls`` or ``releases``."""

    filename: str
    packagetype: str
    url: str
    upload_time: str = ""
    upload_time_iso_8601: str = ""
    size: int = 0
    requires_python: Optional[str] = None
    yanked: bool = False
    yanked_reason: Optional[str] = None
    digests: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "DistributionUrl":
        return cls(
            filename=data["filename"],
            packagetype=data.get("packagetype") or "",
            url=data.get("url") or "",
            upload_time=data.get("upload_time") or "",
            upload_time_iso_8601=data.get("upload_time_iso_8601") or "",
            size=int(data.get("size") or 0),
            requires_python=data.get("requires_python"),
            yanked=bool(data.get("yanked", False)),
            yanked_reason=data.get("yanked_reason"),
            digests=dict(data.get("digests") or {}),
        )

    @property
    def kind(self) -> ArtifactKind:
        return ArtifactKind.from_packagetype(self.packagetype)

    def to_record(self) -> ArtifactRecord:
        """The view of this file that artifact selection works on."""
        return ArtifactRecord(
            filename=self.filename,
            kind=self.kind,
            download_locator=self.url,
            upload_timestamp=self.upload_time_iso_8601 or self.upload_time,
        )

    def wheel_name(self) -> ArtifactName:
        """Parse the filename as a wheel name.

        Raises:
            InvalidArtifactName: If this file is not a valid wheel.
        """
        return ArtifactName.parse(self.filename)


@dataclass
class Vulnerability:
    """A known vulnerability reported against a release."""

    id: str
    source: str = ""
    link: str = ""
    summary: Optional[str] = None
    details: str = ""
    aliases: List[str] = field(default_factory=list)
    fixed_in: List[str] = field(default_factory=list)
    withdrawn: Optional[str] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Vulnerability":
        return cls(
            id=data["id"],
            source=data.get("source") or "",
            link=data.get("link") or "",
            summary=data.get("summary"),
            details=data.get("details") or "",
            aliases=_str_list(data.get("aliases")),
            fixed_in=_str_list(data.get("fixed_in")),
            withdrawn=data.get("withdrawn"),
        )


@dataclass
class ProjectInfo:
    """The ``info`` block shared by project and release responses."""

    name: str
    version: str = ""
    summary: Optional[str] = None
    license: Optional[str] = None
    author_email: Optional[str] = None
    keywords: Optional[str] = None
    classifiers: List[str] = field(default_factory=list)
    project_url: str = ""
    project_urls: Dict[str, str] = field(default_factory=dict)
    requires_dist: List[str] = field(default_factory=list)
    requires_python: Optional[str] = None
    description: Optional[str] = None
    description_content_type: Optional[str] = None
    yanked: bool = False
    yanked_reason: Optional[str] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "ProjectInfo":
        return cls(
            name=data["name"],
            version=data.get("version") or "",
            summary=data.get("summary"),
            license=data.get("license"),
            author_email=data.get("author_email"),
            keywords=data.get("keywords"),
            classifiers=_str_list(data.get("classifiers")),
            project_url=data.get("project_url") or data.get("package_url") or "",
            project_urls=dict(data.get("project_urls") or {}),
            requires_dist=_str_list(data.get("requires_dist")),
            requires_python=data.get("requires_python"),
            description=data.get("description"),
            description_content_type=data.get("description_content_type"),
            yanked=bool(data.get("yanked", False)),
            yanked_reason=data.get("yanked_reason"),
        )

    def keyword_list(self) -> List[str]:
        """Keywords split on commas, or on whitespace when there are none."""
        if not self.keywords:
            return []
        separator = "," if "," in self.keywords else None
        return [k.strip() for k in self.keywords.split(separator) if k.strip()]


@dataclass
class Package:
    """A project as returned by ``/pypi/{project}/json``."""

    info: ProjectInfo
    releases: Dict[str, List[DistributionUrl]] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Package":
        releases = {
            str(version): [DistributionUrl.from_json(f) for f in (files or [])]
            for version, files in (data.get("releases") or {}).items()
        }
        return cls(info=ProjectInfo.from_json(data["info"]), releases=releases)

    @property
    def name(self) -> str:
        return self.info.name

    @property
    def versions(self) -> List[str]:
        return list(self.releases)

    def ordered_versions(self) -> List[Version]:
        """Valid versions in ascending comparison order."""
        return ordered_versions(self.releases)

    def yanked_versions(self) -> List[str]:
        """Versions whose every file has been yanked."""
        return [v for v, files in self.releases.items() if files and all(f.yanked for f in files)]


@dataclass
class PackageVersion:
    """A single release as returned by ``/pypi/{project}/{version}/json``."""

    info: ProjectInfo
    urls: List[DistributionUrl] = field(default_factory=list)
    vulnerabilities: List[Vulnerability] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "PackageVersion":
        return cls(
            info=ProjectInfo.from_json(data["info"]),
            urls=[DistributionUrl.from_json(u) for u in (data.get("urls") or [])],
            vulnerabilities=[
                Vulnerability.from_json(v) for v in (data.get("vulnerabilities") or [])
            ],
        )

    @property
    def name(self) -> str:
        return self.info.name

    @property
    def version(self) -> str:
        return self.info.version

    @property
    def yanked(self) -> bool:
        return self.info.yanked

    def parsed_version(self) -> Optional[Version]:
        return parse_version(self.info.version)

    def artifact_records(self) -> List[ArtifactRecord]:
        return [u.to_record() for u in self.urls]

    def find_url(self, record: ArtifactRecord) -> Optional[DistributionUrl]:
        """The listed file an artifact record was built from."""
        for url in self.urls:
            if url.filename == record.filename:
                return url
        return None
