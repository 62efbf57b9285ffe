"""Two-pass reconciliation of the universes of two lockfiles.

The discovery pass builds both universes leniently and intersects their
names. Every name outside that intersection is then excluded on its own
side, and both universes are rebuilt from the full lockfile graphs under the
strict same-name-same-version policy. The rebuild must start from scratch:
pruning changes which branches are reachable, and therefore which version
conflicts are visible.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Set, Tuple

from lockfile.models import Lockfile
from .builder import InsertHook, UniverseBuilder
from .models import Phase, Spec, Universe

logger = logging.getLogger(__name__)

Echo = Callable[[str], None]


class Side:
    """One lockfile being compared: its spec, parsed graph and builder."""

    def __init__(self, label: str, spec: Spec, lockfile: Lockfile,
                 on_insert: Optional[InsertHook] = None):
        self.label = label
        self.spec = spec
        self.lockfile = lockfile
        self.builder = UniverseBuilder(lockfile, on_insert=on_insert)

    def build(self, phase: Phase) -> Universe:
        return self.builder.build(self.spec, phase)


@dataclass(frozen=True)
class PassSummary:
    """Sizes observed during one pass."""
    phase: Phase
    size_a: int
    size_b: int
    common: int


@dataclass
class ReconcileResult:
    """Rebuilt universes and the final set of names present in both."""
    universe_a: Universe
    universe_b: Universe
    names: Set[str]
    discovery: PassSummary
    verification: PassSummary
    excluded_a: int = 0
    excluded_b: int = 0


def _silent(_: str) -> None:
    return None


def intersect(universe_a: Universe, universe_b: Universe) -> Set[str]:
    return universe_a.names() & universe_b.names()


def _run_pass(side_a: Side, side_b: Side, phase: Phase,
              echo: Echo) -> Tuple[Universe, Universe, Set[str], PassSummary]:
    universe_a = side_a.build(phase)
    universe_b = side_b.build(phase)
    common = intersect(universe_a, universe_b)
    summary = PassSummary(phase, len(universe_a), len(universe_b), len(common))
    echo(f"{summary.size_a} packages in lockfile {side_a.label}")
    echo(f"{summary.size_b} packages in lockfile {side_b.label}")
    echo(f"{summary.common} packages in common")
    logger.debug("Pass %s: %s", phase.value, summary)
    return universe_a, universe_b, common, summary


def narrow(side: Side, universe: Universe, common: Set[str]) -> int:
    """Exclude every name of universe outside common on side's spec."""
    return side.spec.exclude(name for name in universe if name not in common)


def reconcile(side_a: Side, side_b: Side, echo: Optional[Echo] = None) -> ReconcileResult:
    """Build, narrow and rebuild both sides.

    Args:
        side_a: First lockfile side; its spec gains exclusions.
        side_b: Second lockfile side; its spec gains exclusions.
        echo: Receives progress lines (sizes per pass, exclusion counts).

    Raises:
        RootNotFoundError: If either root cannot be found.
        VersionConflictError: If a narrowed universe still holds two versions
            of one name.
    """
    echo = echo or _silent

    universe_a, universe_b, first_common, discovery = _run_pass(side_a, side_b, Phase.NAME, echo)

    echo("excluding packages outside intersection and recalculating")
    excluded_a = narrow(side_a, universe_a, first_common)
    excluded_b = narrow(side_b, universe_b, first_common)
    echo(f"excluded {excluded_a} more packages from lockfile {side_a.label}")
    echo(f"excluded {excluded_b} more packages from lockfile {side_b.label}")

    universe_a, universe_b, names, verification = _run_pass(
        side_a, side_b, Phase.NAME_AND_VERSION, echo
    )
    if names != first_common:
        logger.info(
            "%d names common after discovery are no longer reachable on both sides",
            len(first_common - names),
        )
    return ReconcileResult(
        universe_a=universe_a,
        universe_b=universe_b,
        names=names,
        discovery=discovery,
        verification=verification,
        excluded_a=excluded_a,
        excluded_b=excluded_b,
    )
