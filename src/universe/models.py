"""Data models for package universes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Iterator, Optional, Set, Tuple

from constants import Constants
from errors import VersionConflictError
from lockfile.models import Package


class Phase(Enum):
    """Insertion policy for a universe.

    NAME: a repeated name is ignored, first occurrence wins.
    NAME_AND_VERSION: a repeated name with a different version is an error.
    """
    NAME = "name"
    NAME_AND_VERSION = "name_and_version"


@dataclass
class Spec:
    """Per-side selection: where the lockfile lives and which part of it to use."""
    src: str
    pkg_name: Optional[str] = None
    pkg_hash: Optional[str] = None
    exclude_pkgs: Set[str] = field(default_factory=set)

    @property
    def has_root(self) -> bool:
        return self.pkg_name is not None or self.pkg_hash is not None

    def is_excluded(self, name: str) -> bool:
        return name in self.exclude_pkgs

    def exclude(self, names: Iterable[str]) -> int:
        """Add names to the exclusion set and return how many were new."""
        before = len(self.exclude_pkgs)
        self.exclude_pkgs.update(names)
        return len(self.exclude_pkgs) - before


def format_path(path: Iterable[Package]) -> str:
    """Render a dependency path as ``a@1.0 -> b@2.0``."""
    return Constants.PATH_SEPARATOR.join(p.label() for p in path)


@dataclass(frozen=True)
class UniverseEntry:
    """A selected package and the path from the traversal root down to it."""
    package: Package
    path: Tuple[Package, ...]

    @property
    def version(self) -> str:
        return self.package.version


class Universe:
    """Mapping from package name to the single package selected for it.

    Args:
        source: Lockfile location, used in error messages.
        phase: Insertion policy applied by ``insert``.
    """

    def __init__(self, source: str, phase: Phase):
        self.source = source
        self.phase = phase
        self._entries: Dict[str, UniverseEntry] = {}

    def insert(self, package: Package, path: Iterable[Package]) -> bool:
        """Bind package under its name.

        Returns:
            True if the name was newly bound, False if it was already present.

        Raises:
            VersionConflictError: In the NAME_AND_VERSION phase, when the name is
                already bound to a different version.
        """
        existing = self._entries.get(package.name)
        if existing is not None:
            if self.phase is Phase.NAME_AND_VERSION and existing.version != package.version:
                raise VersionConflictError(
                    package.name,
                    existing.version,
                    package.version,
                    [p.label() for p in path],
                    self.source,
                )
            return False
        self._entries[package.name] = UniverseEntry(package, tuple(path))
        return True

    def names(self) -> Set[str]:
        return set(self._entries)

    def get(self, name: str) -> Optional[UniverseEntry]:
        return self._entries.get(name)

    def __getitem__(self, name: str) -> UniverseEntry:
        return self._entries[name]

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def versions(self) -> Dict[str, str]:
        """Name to version mapping, mostly useful for comparisons in tests."""
        return {name: entry.version for name, entry in self._entries.items()}
