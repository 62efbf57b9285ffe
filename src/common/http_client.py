"""Shared HTTP helpers used to fetch remote lockfiles.

Encapsulates request/timeout error handling so the loader does not
duplicate try/except blocks.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from constants import Constants
from errors import SourceConnectionError, SourceUnavailableError
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


def safe_get(url: str, *, context: str, timeout: Optional[float] = None, **kwargs: Any) -> requests.Response:
    """Perform a GET request with consistent error handling and DEBUG traces.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs and errors.
        timeout: Seconds before giving up; defaults to Constants.REQUEST_TIMEOUT.
        **kwargs: Passed through to requests.get.

    Returns:
        requests.Response: The HTTP response object.

    Raises:
        SourceConnectionError: On timeouts and connection failures.
    """
    safe_target = safe_url(url)
    timeout = Constants.REQUEST_TIMEOUT if timeout is None else timeout
    headers = dict(kwargs.pop("headers", None) or {})
    headers.setdefault("User-Agent", Constants.USER_AGENT)
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_target,
                    context=context,
                ),
            )
        try:
            res = requests.get(url, timeout=timeout, headers=headers, **kwargs)
        except requests.Timeout as exc:
            logger.error("%s request timed out after %s seconds", context, timeout)
            raise SourceConnectionError(context, f"request timed out after {timeout} seconds") from exc
        except requests.RequestException as exc:  # includes ConnectionError
            logger.error("%s connection error: %s", context, exc)
            raise SourceConnectionError(context, str(exc)) from exc
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action="GET",
                    outcome="success" if res.ok else "error",
                    status_code=res.status_code,
                    duration_ms=t.duration_ms(),
                    target=safe_target,
                    context=context,
                ),
            )
        return res


def get_text(url: str, *, context: str, timeout: Optional[float] = None) -> str:
    """Fetch a URL and return its body text, failing on non-2xx responses."""
    res = safe_get(url, context=context, timeout=timeout)
    if not res.ok:
        raise SourceUnavailableError(
            context,
            f"HTTP {res.status_code} fetching {safe_url(url)}: {res.text.strip()[:200]}",
        )
    return res.text
