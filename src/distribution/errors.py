"""Exceptions raised by the distribution parsing and selection helpers."""


class DistributionError(Exception):
    """Base class for all distribution errors."""


class InvalidName(DistributionError):
    """A project name does not follow the name grammar."""


class InvalidCompatibilityTag(DistributionError):
    """A compatibility tag is malformed or names a concrete ABI for any platform."""


class InvalidArtifactName(DistributionError):
    """A filename does not follow the wheel filename grammar."""


class NotFound(DistributionError):
    """No artifact qualified for the requested selection."""
