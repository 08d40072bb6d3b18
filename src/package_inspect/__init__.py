"""Wheel inspection: what a built artifact installs.

- inspector.py: download a wheel and read its RECORD, METADATA and entry points
"""

from .inspector import (  # noqa: F401
    InspectedPackage,
    InspectionError,
    Metadata,
    ObjectReference,
    RecordEntry,
    fetch,
    parse_entry_points,
    parse_metadata,
    parse_record,
    read_wheel,
)

__all__ = [
    "InspectedPackage",
    "InspectionError",
    "Metadata",
    "ObjectReference",
    "RecordEntry",
    "fetch",
    "parse_entry_points",
    "parse_metadata",
    "parse_record",
    "read_wheel",
]
