"""Cargo lockfile package.

- models.py: Package, Dependency and Lockfile records
- parser.py: Cargo.lock TOML parsing (format v1 through v4)
- loader.py: reading lockfiles from paths, file:// and http(s):// URLs
"""

from .models import Dependency, Lockfile, Package  # noqa: F401
from .parser import parse_dependency, parse_lockfile  # noqa: F401
from .loader import fetch_lockfile_text, load_lockfile  # noqa: F401

__all__ = [
    "Dependency",
    "Lockfile",
    "Package",
    "parse_dependency",
    "parse_lockfile",
    "fetch_lockfile_text",
    "load_lockfile",
]
