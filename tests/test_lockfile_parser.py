"""Tests for the Cargo.lock parser."""

import pytest

from errors import SourceUnavailableError
from lockfile.models import Dependency, Package
from lockfile.parser import parse_dependency, parse_lockfile

CRATES_IO = "registry+https://github.com/rust-lang/crates.io-index"


class TestParseDependency:
    """Dependency reference parsing."""

    def test_name_only(self):
        assert parse_dependency("serde") == Dependency("serde")

    def test_name_and_version(self):
        assert parse_dependency("serde 1.0.188") == Dependency("serde", "1.0.188")

    def test_name_version_and_source(self):
        dep = parse_dependency(f"serde 1.0.188 ({CRATES_IO})")
        assert dep == Dependency("serde", "1.0.188", CRATES_IO)

    def test_invalid_reference(self):
        with pytest.raises(ValueError):
            parse_dependency("serde 1.0 extra junk")


class TestDependencyMatching:
    """Dependency.matches semantics."""

    def test_source_compared_without_precise(self):
        pkg = Package("foo", "0.1.0", source="git+https://github.com/x/foo#abc123")
        assert Dependency("foo", "0.1.0", "git+https://github.com/x/foo").matches(pkg)
        assert Dependency("foo", "0.1.0", "git+https://github.com/x/foo#abc123").matches(pkg)

    def test_version_mismatch(self):
        pkg = Package("foo", "0.1.0")
        assert not Dependency("foo", "0.2.0").matches(pkg)
        assert Dependency("foo").matches(pkg)

    def test_source_mismatch(self):
        pkg = Package("foo", "0.1.0", source=CRATES_IO)
        assert not Dependency("foo", None, "git+https://github.com/x/foo").matches(pkg)


class TestParseLockfile:
    """Whole-file parsing."""

    def test_v3_lockfile(self):
        text = f"""# This file is automatically @generated by Cargo.
version = 3

[[package]]
name = "app"
version = "0.1.0"
dependencies = [
 "serde",
 "log 0.4.20",
]

[[package]]
name = "log"
version = "0.4.20"
source = "{CRATES_IO}"
checksum = "b5e6163cb8c49088c2c36f57875e58ccd8c87c7427f7fbd50ea6710b2f3f2e8f"

[[package]]
name = "serde"
version = "1.0.188"
source = "{CRATES_IO}"
checksum = "cf9e0fcba69a370eed61bcf2b728575f726b50b55cba78064753d708ddc7549e"
"""
        lock = parse_lockfile(text, source="Cargo.lock")
        assert lock.version == 3
        assert lock.source == "Cargo.lock"
        assert [pkg.name for pkg in lock.packages] == ["app", "log", "serde"]
        app = lock.packages[0]
        assert app.source is None
        assert app.checksum is None
        assert app.dependencies == (Dependency("serde"), Dependency("log", "0.4.20"))
        assert lock.packages[1].checksum.startswith("b5e6163c")

    def test_v1_metadata_checksums(self):
        text = f"""[[package]]
name = "app"
version = "0.1.0"
dependencies = [
 "libc 0.2.148 ({CRATES_IO})",
]

[[package]]
name = "libc"
version = "0.2.148"
source = "{CRATES_IO}"

[metadata]
"checksum libc 0.2.148 ({CRATES_IO})" = "9cdc71e17332e86d2e1d38c1f99edcb6288ee11b815fb1a4b049eaa2114d369b"
"""
        lock = parse_lockfile(text)
        assert lock.version is None
        libc = lock.packages[1]
        assert libc.checksum == "9cdc71e17332e86d2e1d38c1f99edcb6288ee11b815fb1a4b049eaa2114d369b"
        assert lock.packages[0].dependencies[0] == Dependency("libc", "0.2.148", CRATES_IO)

    def test_v1_metadata_none_checksum(self):
        text = """[[package]]
name = "gitdep"
version = "0.1.0"
source = "git+https://github.com/x/gitdep#0123abcd"

[metadata]
"checksum gitdep 0.1.0 (git+https://github.com/x/gitdep#0123abcd)" = "<none>"
"""
        pkg = parse_lockfile(text).packages[0]
        assert pkg.checksum is None
        assert pkg.source_precise == "0123abcd"

    def test_duplicate_names_keep_stored_order(self):
        text = """version = 3

[[package]]
name = "syn"
version = "1.0.109"

[[package]]
name = "syn"
version = "2.0.37"
"""
        lock = parse_lockfile(text)
        assert [pkg.version for pkg in lock.packages] == ["1.0.109", "2.0.37"]
        assert lock.names() == {"syn"}

    def test_empty_lockfile(self):
        lock = parse_lockfile("version = 3\n")
        assert lock.packages == ()

    def test_invalid_toml(self):
        with pytest.raises(SourceUnavailableError) as exc_info:
            parse_lockfile("invalid toml {", source="bad.lock")
        assert "bad.lock" in str(exc_info.value)

    def test_package_without_version(self):
        text = """[[package]]
name = "broken"
"""
        with pytest.raises(SourceUnavailableError) as exc_info:
            parse_lockfile(text, source="broken.lock")
        assert "missing a name or version" in str(exc_info.value)

    def test_package_must_be_array(self):
        with pytest.raises(SourceUnavailableError):
            parse_lockfile('package = "nope"\n')


class TestPackageHash:
    """Content hash matching used for root selection."""

    def test_matches_checksum(self):
        pkg = Package("foo", "1.0.0", checksum="deadbeef")
        assert pkg.matches_hash("deadbeef")
        assert not pkg.matches_hash("cafebabe")

    def test_matches_precise_source(self):
        pkg = Package("foo", "1.0.0", source="git+https://github.com/x/foo?branch=main#cafebabe")
        assert pkg.source_precise == "cafebabe"
        assert pkg.matches_hash("cafebabe")

    def test_registry_source_has_no_precise(self):
        assert Package("foo", "1.0.0", source=CRATES_IO).source_precise is None
