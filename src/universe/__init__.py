"""Package universe construction and cross-lockfile reconciliation.

- models.py: Spec, Phase and Universe
- builder.py: dependency-tree walks producing a Universe
- reconciler.py: two-pass discovery/verification over two lockfiles
"""

from .models import Phase, Spec, Universe, UniverseEntry, format_path  # noqa: F401
from .builder import LockfileIndex, UniverseBuilder, build_universe  # noqa: F401
from .reconciler import PassSummary, ReconcileResult, Side, reconcile  # noqa: F401

__all__ = [
    "Phase",
    "Spec",
    "Universe",
    "UniverseEntry",
    "format_path",
    "LockfileIndex",
    "UniverseBuilder",
    "build_universe",
    "PassSummary",
    "ReconcileResult",
    "Side",
    "reconcile",
]
