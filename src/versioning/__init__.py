"""Version parsing and ordering."""

from .versions import ordered_versions, parse_version, pick_latest

__all__ = ["ordered_versions", "parse_version", "pick_latest"]
