"""Read what a wheel provides: importable names and executables.

Only the ``.dist-info`` files are consulted:

- ``RECORD`` (PEP 376 CSV) lists every installed path,
- ``METADATA`` (core metadata, RFC 822 headers) names the distribution,
- ``entry_points.txt`` (INI) declares console scripts.
"""
from __future__ import annotations

import configparser
import csv
import io
import logging
import zipfile
from dataclasses import dataclass, field
from email.parser import HeaderParser
from typing import IO, Dict, List, Optional, Set, Tuple, Union

from common.http_client import ConnectionFailure, safe_get
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)

_EXTENSION_SUFFIXES = (".so", ".pyd")


class InspectionError(Exception):
    """A wheel could not be downloaded or lacks required metadata."""


def _split_top(entry: str) -> Tuple[str, Optional[str]]:
    top, sep, rest = entry.partition("/")
    return top, (rest if sep else None)


def _dist_filename(entry: str) -> Optional[str]:
    top, rest = _split_top(entry)
    if rest is not None and top.endswith(".dist-info"):
        return rest
    return None


def _data_filename(entry: str) -> Optional[str]:
    top, rest = _split_top(entry)
    if rest is not None and top.endswith(".data"):
        return rest
    return None


@dataclass
class RecordEntry:
    """One row of a RECORD file; hash and size are absent for some files."""

    path: str
    algorithm: Optional[str] = None
    digest: Optional[str] = None
    size: Optional[int] = None


def parse_record(text: str) -> List[RecordEntry]:
    """Parse RECORD rows, skipping rows without exactly three fields."""
    entries = []
    for row in csv.reader(io.StringIO(text), delimiter=",", quotechar='"'):
        if len(row) != 3:
            continue
        path, hash_field, size_field = row
        algorithm, _, digest = hash_field.partition("=")
        try:
            size = int(size_field) if size_field else None
        except ValueError:
            size = None
        entries.append(
            RecordEntry(path, algorithm or None, digest or None, size)
        )
    return entries


@dataclass
class Metadata:
    """The required core metadata fields."""

    metadata_version: str
    name: str
    version: str


def parse_metadata(text: str) -> Metadata:
    """Parse the headers of a METADATA file.

    Raises:
        InspectionError: If Metadata-Version, Name or Version is missing.
    """
    headers = HeaderParser().parsestr(text)
    values = {}
    for key in ("Metadata-Version", "Name", "Version"):
        value = headers.get(key)
        if not value:
            raise InspectionError(f"METADATA file missing required {key} key")
        values[key] = str(value).strip()
    return Metadata(values["Metadata-Version"], values["Name"], values["Version"])


@dataclass
class ObjectReference:
    """``module:object [extras]`` as written in entry_points.txt."""

    module: str
    object: Optional[str] = None
    extras: Optional[str] = None

    @classmethod
    def parse(cls, raw: str) -> "ObjectReference":
        extras = None
        reference = raw.strip()
        if "[" in reference:
            reference, _, extras_part = reference.rpartition("[")
            reference = reference.rstrip()
            extras = extras_part.rstrip("]").strip()
        module, sep, obj = reference.partition(":")
        return cls(module.strip(), obj.strip() if sep else None, extras)


def parse_entry_points(text: str) -> Dict[str, Dict[str, ObjectReference]]:
    """Parse entry_points.txt into ``{group: {name: reference}}``."""
    parser = configparser.ConfigParser(delimiters=("=",), interpolation=None)
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    try:
        parser.read_string(text)
    except configparser.Error as exc:
        raise InspectionError(f"invalid entry_points.txt: {exc}") from exc
    return {
        group: {name: ObjectReference.parse(value) for name, value in parser.items(group)}
        for group in parser.sections()
    }


@dataclass
class InspectedPackage:
    """What a wheel installs."""

    metadata: Metadata
    record: List[RecordEntry]
    entry_points: Dict[str, Dict[str, ObjectReference]] = field(default_factory=dict)

    def provides_packages(self) -> Set[str]:
        """All top-level import names: package roots, modules and namespace packages."""
        names = set()
        for entry in self.record:
            if _dist_filename(entry.path) is not None or _data_filename(entry.path) is not None:
                continue
            top, _ = _split_top(entry.path)
            if top.endswith(".py"):
                top = top[: -len(".py")]
            elif top.endswith(_EXTENSION_SUFFIXES):
                top = top.split(".", 1)[0]
            names.add(top)
        return names

    def provides_executables(self) -> Set[str]:
        """Scripts installed from the ``.data/scripts`` directory."""
        names = set()
        for entry in self.record:
            data_path = _data_filename(entry.path)
            if data_path is None:
                continue
            directory, _, filename = data_path.partition("/")
            if directory == "scripts" and filename:
                names.add(filename)
        return names

    def console_scripts(self) -> List[str]:
        """Names from the special ``console_scripts`` entry point group."""
        return sorted(self.entry_points.get("console_scripts", {}))


def read_wheel(source: Union[str, IO[bytes]]) -> InspectedPackage:
    """Inspect a wheel from a path or a binary file object.

    Raises:
        InspectionError: If the archive is unreadable or RECORD/METADATA is missing.
    """
    record: Optional[List[RecordEntry]] = None
    metadata: Optional[Metadata] = None
    entry_points: Dict[str, Dict[str, ObjectReference]] = {}
    try:
        with zipfile.ZipFile(source) as archive:
            for info in archive.infolist():
                name = _dist_filename(info.filename)
                if name not in ("RECORD", "METADATA", "entry_points.txt"):
                    continue
                text = archive.read(info).decode("utf-8")
                if name == "RECORD":
                    record = parse_record(text)
                elif name == "METADATA":
                    metadata = parse_metadata(text)
                else:
                    entry_points = parse_entry_points(text)
    except (zipfile.BadZipFile, UnicodeDecodeError) as exc:
        raise InspectionError(f"unreadable wheel: {exc}") from exc

    if record is None:
        raise InspectionError("no RECORD file found in distribution")
    if metadata is None:
        raise InspectionError("no METADATA file found in distribution")
    return InspectedPackage(metadata=metadata, record=record, entry_points=entry_points)


def fetch(wheel_url: str) -> InspectedPackage:
    """Download a wheel and inspect it.

    Raises:
        InspectionError: If the download fails or the wheel cannot be read.
    """
    with Timer() as timer:
        try:
            res = safe_get(wheel_url, context="inspect")
        except ConnectionFailure as exc:
            raise InspectionError(str(exc)) from exc
    if res.status_code != 200:
        raise InspectionError(f"{safe_url(wheel_url)}: status code {res.status_code}")

    if is_debug_enabled(logger):
        logger.debug(
            "Wheel downloaded",
            extra=extra_context(
                event="download",
                component="inspect",
                action="fetch",
                outcome="success",
                size=len(res.content),
                duration_ms=timer.duration_ms(),
                target=safe_url(wheel_url),
            ),
        )
    return read_wheel(io.BytesIO(res.content))
