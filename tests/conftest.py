"""Shared fixtures for lockdiff tests."""

import logging

import pytest

from lockfile.parser import parse_lockfile


def render_lock(packages, version=3):
    """Render Cargo.lock text from package dicts.

    Each dict takes ``name``, ``version`` and optionally ``deps``,
    ``source`` and ``checksum``.
    """
    lines = ["# This file is automatically @generated by Cargo.", f"version = {version}", ""]
    for pkg in packages:
        lines.append("[[package]]")
        lines.append(f'name = "{pkg["name"]}"')
        lines.append(f'version = "{pkg["version"]}"')
        if pkg.get("source"):
            lines.append(f'source = "{pkg["source"]}"')
        if pkg.get("checksum"):
            lines.append(f'checksum = "{pkg["checksum"]}"')
        if pkg.get("deps"):
            lines.append("dependencies = [")
            for dep in pkg["deps"]:
                lines.append(f' "{dep}",')
            lines.append("]")
        lines.append("")
    return "\n".join(lines)


def p(name, version, *deps, **extra):
    """Shorthand for a package dict."""
    return dict(name=name, version=version, deps=list(deps), **extra)


@pytest.fixture
def make_lockfile():
    """Build a parsed Lockfile from package dicts."""
    def _make(*packages, source="mem://lock"):
        return parse_lockfile(render_lock(packages), source=source)
    return _make


@pytest.fixture
def write_lock(tmp_path):
    """Write package dicts as Cargo.lock text and return the path."""
    def _write(filename, *packages):
        path = tmp_path / filename
        path.write_text(render_lock(packages), encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture(autouse=True)
def _reset_lockdiff_logging():
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)
    for handler in list(root.handlers):
        if getattr(handler, "_lockdiff_handler", False):
            root.removeHandler(handler)
            handler.close()
