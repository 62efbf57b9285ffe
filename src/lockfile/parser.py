"""Parser for Cargo lockfiles (Cargo.lock).

Supports lockfile format v1 (checksums in the ``[metadata]`` table) as well
as v2, v3 and v4 (inline ``checksum`` fields). Packages are returned in the
order they are stored in the file.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional

try:
    import tomllib as toml  # type: ignore
except ImportError:  # Python < 3.11
    import tomli as toml  # type: ignore

from errors import SourceUnavailableError
from .models import Dependency, Lockfile, Package

logger = logging.getLogger(__name__)

_DEPENDENCY_RE = re.compile(r"^(?P<name>\S+)(?: (?P<version>[^\s(]+))?(?: \((?P<source>[^)]+)\))?$")
_METADATA_CHECKSUM_PREFIX = "checksum "
_NO_CHECKSUM = "<none>"


def parse_dependency(raw: str) -> Dependency:
    """Parse a dependency reference of the form ``name [version] [(source)]``.

    Args:
        raw: Entry from a package's ``dependencies`` array.

    Returns:
        Dependency matcher.

    Raises:
        ValueError: If raw is not a valid reference.
    """
    match = _DEPENDENCY_RE.match(raw.strip())
    if not match:
        raise ValueError(f"invalid dependency reference: {raw!r}")
    return Dependency(
        name=match.group("name"),
        version=match.group("version"),
        source=match.group("source"),
    )


def _metadata_checksums(data: Dict[str, Any]) -> Dict[str, str]:
    """Collect v1 ``[metadata]`` checksums keyed by ``name version (source)``."""
    checksums: Dict[str, str] = {}
    metadata = data.get("metadata")
    if not isinstance(metadata, dict):
        return checksums
    for key, value in metadata.items():
        if not key.startswith(_METADATA_CHECKSUM_PREFIX) or not isinstance(value, str):
            continue
        if value == _NO_CHECKSUM:
            continue
        checksums[key[len(_METADATA_CHECKSUM_PREFIX):]] = value
    return checksums


def _parse_package(entry: Any, index: int, checksums: Dict[str, str]) -> Package:
    if not isinstance(entry, dict):
        raise ValueError(f"package #{index} is not a table")
    name = entry.get("name")
    version = entry.get("version")
    if not isinstance(name, str) or not isinstance(version, str):
        raise ValueError(f"package #{index} is missing a name or version")
    source: Optional[str] = entry.get("source")
    checksum: Optional[str] = entry.get("checksum")
    if checksum is None and source is not None:
        checksum = checksums.get(f"{name} {version} ({source})")
    deps: List[Dependency] = []
    for raw in entry.get("dependencies", []) or []:
        if not isinstance(raw, str):
            raise ValueError(f"package {name} has a non-string dependency entry")
        deps.append(parse_dependency(raw))
    return Package(
        name=name,
        version=version,
        source=source,
        checksum=checksum,
        dependencies=tuple(deps),
    )


def parse_lockfile(text: str, source: str = "<string>") -> Lockfile:
    """Parse Cargo.lock text into a Lockfile.

    Args:
        text: Lockfile TOML content.
        source: Location the text came from, used in error messages.

    Returns:
        Lockfile with packages in stored order.

    Raises:
        SourceUnavailableError: If the text is not a valid Cargo lockfile.
    """
    try:
        data = toml.loads(text)
    except toml.TOMLDecodeError as e:
        raise SourceUnavailableError(source, f"invalid TOML: {e}") from e

    version = data.get("version")
    if version is not None and not isinstance(version, int):
        raise SourceUnavailableError(source, f"unsupported lockfile version {version!r}")

    package_list = data.get("package", [])
    if not isinstance(package_list, list):
        raise SourceUnavailableError(source, "'package' must be an array of tables")

    checksums = _metadata_checksums(data)
    try:
        packages = tuple(
            _parse_package(entry, i, checksums) for i, entry in enumerate(package_list)
        )
    except ValueError as e:
        raise SourceUnavailableError(source, str(e)) from e

    logger.debug("Parsed %d packages from %s (format v%s)", len(packages), source, version or 1)
    return Lockfile(source=source, version=version, packages=packages)
