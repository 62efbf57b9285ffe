"""Universe construction: dependency-tree walks over a parsed lockfile."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from common.logging_utils import extra_context, is_debug_enabled
from errors import RootNotFoundError
from lockfile.models import Dependency, Lockfile, Package
from .models import Phase, Spec, Universe

logger = logging.getLogger(__name__)

InsertHook = Callable[[Universe, Package], None]


class LockfileIndex:
    """Packages of one lockfile with every dependency edge resolved once.

    An edge resolves to the first package, in stored order, that the
    dependency reference matches. Edges with no match are dropped.
    """

    def __init__(self, lockfile: Lockfile):
        self.lockfile = lockfile
        self.packages: Tuple[Package, ...] = lockfile.packages
        by_name: Dict[str, List[int]] = {}
        for i, pkg in enumerate(self.packages):
            by_name.setdefault(pkg.name, []).append(i)
        self._by_name = by_name
        self.edges: List[List[int]] = [
            [t for t in (self._resolve(dep) for dep in pkg.dependencies) if t is not None]
            for pkg in self.packages
        ]

    def _resolve(self, dep: Dependency) -> Optional[int]:
        for i in self._by_name.get(dep.name, ()):
            if dep.matches(self.packages[i]):
                return i
        logger.debug("Dependency %s has no match in %s, skipping", dep, self.lockfile.source)
        return None

    def find_root(self, spec: Spec) -> Optional[int]:
        """Index of the first non-excluded package matching the spec's root filters."""
        for i, pkg in enumerate(self.packages):
            if spec.is_excluded(pkg.name):
                continue
            if spec.pkg_name is not None and pkg.name != spec.pkg_name:
                continue
            if spec.pkg_hash is not None and not pkg.matches_hash(spec.pkg_hash):
                continue
            return i
        return None


class UniverseBuilder:
    """Builds universes for one lockfile.

    The resolved index is computed on first use and shared by every build,
    so rebuilding with a narrowed spec does not re-resolve edges.

    Args:
        lockfile: Parsed lockfile to walk.
        on_insert: Optional hook called for every newly bound package.
    """

    def __init__(self, lockfile: Lockfile, on_insert: Optional[InsertHook] = None):
        self.lockfile = lockfile
        self.on_insert = on_insert
        self._index: Optional[LockfileIndex] = None

    @property
    def index(self) -> LockfileIndex:
        if self._index is None:
            self._index = LockfileIndex(self.lockfile)
        return self._index

    def build(self, spec: Spec, phase: Phase) -> Universe:
        """Build a fresh universe for spec under the given phase.

        Raises:
            RootNotFoundError: If a root name/hash is set and nothing matches.
            VersionConflictError: On a version conflict in the NAME_AND_VERSION phase.
        """
        universe = Universe(spec.src, phase)
        if spec.has_root:
            self._add_dependency_tree(universe, spec)
        else:
            self._add_all_packages(universe, spec)
        if is_debug_enabled(logger):
            logger.debug(
                "Universe built",
                extra=extra_context(
                    event="function_exit",
                    component="universe_builder",
                    action="build",
                    target=spec.src,
                    phase=phase.value,
                    count=len(universe),
                ),
            )
        return universe

    def _insert(self, universe: Universe, package: Package, path: List[Package]) -> bool:
        inserted = universe.insert(package, path)
        if inserted and self.on_insert is not None:
            self.on_insert(universe, package)
        return inserted

    def _add_all_packages(self, universe: Universe, spec: Spec) -> None:
        for pkg in self.index.packages:
            if spec.is_excluded(pkg.name):
                continue
            self._insert(universe, pkg, [pkg])

    def _add_dependency_tree(self, universe: Universe, spec: Spec) -> None:
        index = self.index
        root = index.find_root(spec)
        if root is None:
            raise RootNotFoundError(spec.pkg_name, spec.pkg_hash, spec.src)

        root_pkg = index.packages[root]
        path: List[Package] = [root_pkg]
        self._insert(universe, root_pkg, path)

        # Depth-first over resolved edges; a package is only expanded when it
        # was newly bound, so each name is explored at most once.
        stack: List[Iterator[int]] = [iter(index.edges[root])]
        while stack:
            child = next(stack[-1], None)
            if child is None:
                stack.pop()
                path.pop()
                continue
            pkg = index.packages[child]
            if spec.is_excluded(pkg.name):
                continue
            path.append(pkg)
            if self._insert(universe, pkg, path):
                stack.append(iter(index.edges[child]))
            else:
                path.pop()


def build_universe(lockfile: Lockfile, spec: Spec, phase: Phase) -> Universe:
    """Build a single universe without keeping the builder around."""
    return UniverseBuilder(lockfile).build(spec, phase)
