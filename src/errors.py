"""Exception types raised while loading lockfiles and building universes."""

from __future__ import annotations

from typing import Optional, Sequence


class LockdiffError(Exception):
    """Base class for all fatal comparison errors."""


class SourceUnavailableError(LockdiffError):
    """Raised when a lockfile cannot be read, fetched, or parsed."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to load lockfile {source}: {reason}")


class SourceConnectionError(SourceUnavailableError):
    """Raised when an HTTP transport failure prevents fetching a lockfile."""


class ConfigError(LockdiffError):
    """Raised when the configuration file or merged settings are unusable."""


class RootNotFoundError(LockdiffError):
    """Raised when no package matches the requested root name/hash."""

    def __init__(self, name: Optional[str], pkg_hash: Optional[str], source: str):
        self.name = name
        self.hash = pkg_hash
        self.source = source
        super().__init__(
            f"No package named {name!r} with hash {pkg_hash!r} found in lockfile {source}"
        )


class VersionConflictError(LockdiffError):
    """Raised when one universe reaches two versions of the same package."""

    def __init__(
        self,
        name: str,
        existing_version: str,
        new_version: str,
        path: Sequence[str],
        source: str,
    ):
        self.name = name
        self.existing_version = existing_version
        self.new_version = new_version
        self.path = list(path)
        self.source = source
        super().__init__(
            f"Package {name} has multiple versions in lockfile {source}: "
            f"{existing_version} and {new_version}, path: {' -> '.join(self.path)}"
        )


class ExportError(LockdiffError):
    """Raised when the report cannot be written to disk."""
