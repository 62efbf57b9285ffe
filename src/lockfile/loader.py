"""Load lockfiles from filesystem paths, file:// URLs, or http(s):// URLs."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlsplit
from urllib.request import url2pathname

from common.http_client import get_text
from common.logging_utils import extra_context, is_debug_enabled, safe_url
from errors import SourceUnavailableError
from .models import Lockfile
from .parser import parse_lockfile

logger = logging.getLogger(__name__)


def _read_file(path: str, source: str) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError as e:
        raise SourceUnavailableError(source, f"file not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnavailableError(source, f"could not read {path}: {e}") from e


def _file_url_to_path(location: str) -> str:
    parts = urlsplit(location)
    if parts.netloc not in ("", "localhost"):
        raise SourceUnavailableError(location, "file URL error: remote hosts are not supported")
    return url2pathname(parts.path)


def fetch_lockfile_text(location: str, timeout: Optional[float] = None) -> str:
    """Return the raw lockfile text at location.

    Args:
        location: Filesystem path, ``file://`` URL, or ``http(s)://`` URL.
        timeout: HTTP timeout in seconds for remote locations.

    Raises:
        SourceUnavailableError: If the location cannot be read or fetched.
    """
    scheme = urlsplit(location).scheme.lower()
    # A single-letter scheme is a Windows drive letter, not a URL.
    if not scheme or len(scheme) == 1:
        return _read_file(location, location)
    if scheme == "file":
        return _read_file(_file_url_to_path(location), location)
    if scheme in ("http", "https"):
        return get_text(location, context=safe_url(location), timeout=timeout)
    raise SourceUnavailableError(location, f"Unsupported URL scheme: {scheme}")


def load_lockfile(location: str, timeout: Optional[float] = None) -> Lockfile:
    """Fetch and parse the lockfile at location."""
    if is_debug_enabled(logger):
        logger.debug(
            "Loading lockfile",
            extra=extra_context(
                event="function_entry",
                component="loader",
                action="load_lockfile",
                target=safe_url(location),
            ),
        )
    lockfile = parse_lockfile(fetch_lockfile_text(location, timeout=timeout), source=location)
    logger.info("Loaded %d packages from %s", len(lockfile.packages), safe_url(location))
    return lockfile
