"""Tests for the two-pass reconciliation of two lockfiles."""

import pytest

from conftest import p
from errors import RootNotFoundError, VersionConflictError
from universe.models import Phase, Spec
from universe.reconciler import Side, reconcile


def _sides(lock_a, lock_b, spec_a=None, spec_b=None):
    spec_a = spec_a or Spec(lock_a.source)
    spec_b = spec_b or Spec(lock_b.source)
    return Side("A", spec_a, lock_a), Side("B", spec_b, lock_b)


class TestScenarios:
    """End-to-end reconciliation outcomes."""

    def test_version_difference_scenario(self, make_lockfile):
        lock_a = make_lockfile(p("a", "1.0", "b"), p("b", "1.0"), source="A.lock")
        lock_b = make_lockfile(p("a", "1.0", "b"), p("b", "2.0"), p("c", "1.0"), source="B.lock")
        side_a, side_b = _sides(lock_a, lock_b)
        lines = []

        result = reconcile(side_a, side_b, echo=lines.append)

        assert result.discovery.common == 2
        assert result.names == {"a", "b"}
        assert result.universe_a.versions() == {"a": "1.0", "b": "1.0"}
        assert result.universe_b.versions() == {"a": "1.0", "b": "2.0"}
        assert side_b.spec.exclude_pkgs == {"c"}
        assert side_a.spec.exclude_pkgs == set()
        assert lines == [
            "2 packages in lockfile A",
            "3 packages in lockfile B",
            "2 packages in common",
            "excluding packages outside intersection and recalculating",
            "excluded 0 more packages from lockfile A",
            "excluded 1 more packages from lockfile B",
            "2 packages in lockfile A",
            "2 packages in lockfile B",
            "2 packages in common",
        ]

    def test_identical_lockfiles(self, make_lockfile):
        lock = make_lockfile(p("x", "1.0"))
        result = reconcile(*_sides(lock, lock))
        assert result.names == {"x"}
        assert result.excluded_a == result.excluded_b == 0
        assert result.verification.phase is Phase.NAME_AND_VERSION

    def test_intersection_matches_plain_set_intersection(self, make_lockfile):
        lock_a = make_lockfile(p("a", "1"), p("b", "1"), p("c", "1"), p("d", "1"))
        lock_b = make_lockfile(p("b", "2"), p("d", "1"), p("e", "1"))
        result = reconcile(*_sides(lock_a, lock_b))
        assert result.discovery.common == len(lock_a.names() & lock_b.names())
        assert result.names == {"b", "d"}

    def test_root_scoped_sides(self, make_lockfile):
        lock_a = make_lockfile(
            p("app", "0.1.0", "log"), p("log", "0.4.19"), p("other", "1.0.0")
        )
        lock_b = make_lockfile(
            p("app", "0.2.0", "log", "other"), p("log", "0.4.20"), p("other", "1.0.0")
        )
        side_a, side_b = _sides(
            lock_a, lock_b, Spec("A", pkg_name="app"), Spec("B", pkg_name="app")
        )
        result = reconcile(side_a, side_b)
        assert result.names == {"app", "log"}
        assert side_b.spec.exclude_pkgs == {"other"}


class TestNarrowing:
    """The second pass is a full rebuild with the narrowed specs."""

    def test_pruned_branch_changes_reachable_version(self, make_lockfile):
        # In A, foo 1.0.0 is first reached through x, which B does not have.
        lock_a = make_lockfile(
            p("app", "0.1.0", "x", "y"),
            p("x", "1.0.0", "foo 1.0.0"),
            p("y", "1.0.0", "foo 2.0.0"),
            p("foo", "1.0.0"),
            p("foo", "2.0.0"),
        )
        lock_b = make_lockfile(
            p("app", "0.1.0", "y"),
            p("y", "1.0.0", "foo"),
            p("foo", "1.0.0"),
        )
        side_a, side_b = _sides(
            lock_a, lock_b, Spec("A", pkg_name="app"), Spec("B", pkg_name="app")
        )
        result = reconcile(side_a, side_b)
        assert side_a.spec.exclude_pkgs == {"x"}
        assert result.universe_a["foo"].version == "2.0.0"
        assert result.universe_b["foo"].version == "1.0.0"
        assert result.names == {"app", "y", "foo"}

    def test_conflict_surfaces_in_verification(self, make_lockfile):
        lock_a = make_lockfile(
            p("app", "0.1.0", "x", "y"),
            p("x", "1.0.0", "foo 1.0.0"),
            p("y", "1.0.0", "foo 2.0.0"),
            p("foo", "1.0.0"),
            p("foo", "2.0.0"),
            source="A.lock",
        )
        lock_b = make_lockfile(
            p("app", "0.1.0", "x", "y", "foo"),
            p("x", "1.0.0"),
            p("y", "1.0.0"),
            p("foo", "1.0.0"),
        )
        side_a, side_b = _sides(
            lock_a, lock_b, Spec("A.lock", pkg_name="app"), Spec("B", pkg_name="app")
        )
        with pytest.raises(VersionConflictError) as exc_info:
            reconcile(side_a, side_b)
        err = exc_info.value
        assert err.source == "A.lock"
        assert (err.existing_version, err.new_version) == ("1.0.0", "2.0.0")
        assert err.path == ["app@0.1.0", "y@1.0.0", "foo@2.0.0"]

    def test_name_can_drop_out_after_narrowing(self, make_lockfile):
        # shared is common in pass one, but in B it is only reachable via
        # only_b, which A does not have.
        lock_a = make_lockfile(p("app", "1", "shared"), p("shared", "1"))
        lock_b = make_lockfile(p("app", "1", "only_b"), p("only_b", "1", "shared"), p("shared", "1"))
        side_a, side_b = _sides(
            lock_a, lock_b, Spec("A", pkg_name="app"), Spec("B", pkg_name="app")
        )
        result = reconcile(side_a, side_b)
        assert result.discovery.common == 2
        assert result.names == {"app"}

    def test_root_not_found_is_fatal(self, make_lockfile):
        lock = make_lockfile(p("x", "1.0", checksum="aaaa"))
        side_a, side_b = _sides(lock, lock, Spec("A", pkg_hash="nope"), Spec("B"))
        with pytest.raises(RootNotFoundError):
            reconcile(side_a, side_b)
