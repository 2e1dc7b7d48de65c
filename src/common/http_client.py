"""Shared HTTP helpers used by registry clients.

Encapsulates common request/timeout error handling so modules avoid
duplicating try/except blocks. No retries are attempted: a failed request is
reported once and the caller decides what that means.
"""
from __future__ import annotations

import logging
import sys
from typing import Any, Optional

import requests

from constants import Constants, ExitCodes
from common.errors import RegistryError
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


def safe_get(
    url: str,
    *,
    context: str,
    fatal: bool = True,
    timeout: Optional[float] = None,
    session: Optional[requests.Session] = None,
    **kwargs: Any,
) -> requests.Response:
    """Perform a GET request with consistent error handling and DEBUG traces.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs (e.g., "maven").
        fatal: Exit the process on transport errors; otherwise raise RegistryError.
        timeout: Seconds before giving up; defaults to Constants.REQUEST_TIMEOUT.
        session: Optional requests.Session to issue the request through.
        **kwargs: Passed through to requests.get.

    Returns:
        requests.Response: The HTTP response object.
    """
    safe_target = safe_url(url)
    effective_timeout = Constants.REQUEST_TIMEOUT if timeout is None else timeout
    getter = session.get if session is not None else requests.get
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_target,
                    context=context
                )
            )
        try:
            res = getter(url, timeout=effective_timeout, **kwargs)
        except requests.Timeout as exc:
            logger.error(
                "%s request timed out after %s seconds",
                context,
                effective_timeout,
            )
            if fatal:
                sys.exit(ExitCodes.CONNECTION_ERROR.value)
            raise RegistryError(f"{context} request timed out") from exc
        except requests.RequestException as exc:  # includes ConnectionError
            logger.error("%s connection error: %s", context, exc)
            if fatal:
                sys.exit(ExitCodes.CONNECTION_ERROR.value)
            raise RegistryError(f"{context} connection error: {exc}") from exc

        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action="GET",
                    status_code=res.status_code,
                    duration_ms=t.duration_ms(),
                    target=safe_target,
                    context=context
                )
            )
        return res
