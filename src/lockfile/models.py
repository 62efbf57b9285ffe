"""Data models for parsed Cargo lockfiles."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


def strip_precise(source: Optional[str]) -> Optional[str]:
    """Return a source string without its ``#precise`` fragment."""
    if source is None:
        return None
    return source.split("#", 1)[0]


@dataclass(frozen=True)
class Dependency:
    """Reference from one package to another, resolved by matching."""
    name: str
    version: Optional[str] = None
    source: Optional[str] = None

    def matches(self, package: "Package") -> bool:
        """Return True if package satisfies this reference."""
        if self.name != package.name:
            return False
        if self.version is not None and self.version != package.version:
            return False
        if self.source is not None and strip_precise(self.source) != strip_precise(package.source):
            return False
        return True

    def __str__(self) -> str:
        text = self.name
        if self.version is not None:
            text += f" {self.version}"
        if self.source is not None:
            text += f" ({self.source})"
        return text


@dataclass(frozen=True)
class Package:
    """A resolved package entry. Matching identity is (name, version)."""
    name: str
    version: str
    source: Optional[str] = None
    checksum: Optional[str] = None
    dependencies: Tuple[Dependency, ...] = ()

    @property
    def source_precise(self) -> Optional[str]:
        """Precise source revision (e.g. git commit) if the source carries one."""
        if self.source and "#" in self.source:
            precise = self.source.split("#", 1)[1]
            return precise or None
        return None

    def matches_hash(self, pkg_hash: str) -> bool:
        """Return True if pkg_hash equals the checksum or the precise source."""
        if self.checksum is not None and self.checksum == pkg_hash:
            return True
        return self.source_precise is not None and self.source_precise == pkg_hash

    def label(self) -> str:
        return f"{self.name}@{self.version}"


@dataclass
class Lockfile:
    """A parsed lockfile: packages in stored order plus their location."""
    source: str
    version: Optional[int] = None
    packages: Tuple[Package, ...] = field(default_factory=tuple)

    def names(self):
        """Set of all package names in the lockfile."""
        return {p.name for p in self.packages}
