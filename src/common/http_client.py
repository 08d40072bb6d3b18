"""Shared HTTP helpers used by the index client and the artifact inspector.

Encapsulates common request/timeout error handling so modules avoid
duplicating try/except blocks. Every request is attempted exactly once and
nothing is cached.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Tuple

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, redact, safe_url, Timer

logger = logging.getLogger(__name__)

USER_AGENT = "distscout"


class ConnectionFailure(Exception):
    """The request never produced an HTTP response (timeout, DNS, refused...)."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"{safe_url(url)}: {reason}")
        self.url = url
        self.reason = reason


def safe_get(url: str, *, context: str, **kwargs: Any) -> requests.Response:
    """Perform a GET request with consistent error handling and DEBUG traces.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs (e.g., "index", "inspect").
        **kwargs: Passed through to requests.get.

    Returns:
        requests.Response: The HTTP response object, whatever its status.

    Raises:
        ConnectionFailure: On timeouts and connection errors.
    """
    safe_target = safe_url(url)
    headers = {"User-Agent": USER_AGENT, **(kwargs.pop("headers", None) or {})}
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
            res = requests.get(url, timeout=Constants.REQUEST_TIMEOUT, headers=headers, **kwargs)
        except requests.Timeout as exc:
            logger.error(
                "%s request timed out after %s seconds",
                context,
                Constants.REQUEST_TIMEOUT,
            )
            raise ConnectionFailure(url, "timed out") from exc
        except requests.RequestException as exc:  # includes ConnectionError
            logger.error("%s connection error: %s", context, redact(str(exc)))
            raise ConnectionFailure(url, "connection error") from exc

        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action="GET",
                    outcome="success" if res.status_code == 200 else "non_200",
                    status_code=res.status_code,
                    duration_ms=t.duration_ms(),
                    target=safe_target,
                    context=context
                )
            )
        return res


def get_json(
    url: str,
    *,
    context: str,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[int, Dict[str, str], Optional[Any]]:
    """Perform a GET request and parse a JSON response body.

    Args:
        url: Target URL
        context: Human-readable source tag for logs
        headers: Optional request headers
        **kwargs: Additional requests.get parameters

    Returns:
        Tuple of (status_code, headers_dict, parsed_json_or_none). The body is
        only parsed for 200 responses; a body that is not JSON gives None.

    Raises:
        ConnectionFailure: On timeouts and connection errors.
    """
    request_headers = {"Accept": "application/json", **(headers or {})}
    res = safe_get(url, context=context, headers=request_headers, **kwargs)
    response_headers = dict(res.headers)

    if res.status_code != 200:
        return res.status_code, response_headers, None
    try:
        return res.status_code, response_headers, json.loads(res.text)
    except json.JSONDecodeError:
        logger.warning("Couldn't decode JSON from %s", safe_url(url))
        if is_debug_enabled(logger):
            logger.debug(
                "JSON decode error",
                extra=extra_context(
                    event="parse",
                    component="http_client",
                    action="get_json",
                    outcome="json_decode_error",
                    status_code=res.status_code,
                    target=safe_url(url)
                )
            )
        return res.status_code, response_headers, None
