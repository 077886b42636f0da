"""HTTP reachability checks for environment base URLs."""

from __future__ import annotations

import logging

import requests

from .constants import URL_PROBE_TIMEOUT_S

logger = logging.getLogger(__name__)


def probe_url(url: str, *, timeout_s: int = URL_PROBE_TIMEOUT_S) -> tuple[bool, str]:
    """Check that url answers with a non-error HTTP status.

    Args:
        url: Base URL of the site
        timeout_s: Request timeout in seconds

    Returns:
        Tuple of (ok, detail) where detail is the status code or the error
    """
    headers = {"User-Agent": "project-tools"}
    try:
        response = requests.head(url, headers=headers, timeout=timeout_s, allow_redirects=True)
        # Some sites refuse HEAD outright
        if response.status_code == 405:
            response = requests.get(url, headers=headers, timeout=timeout_s, stream=True)
            response.close()
    except requests.RequestException as e:
        logger.debug("HTTP probe of %s failed: %s", url, e)
        return (False, str(e))

    return (response.status_code < 400, f"HTTP {response.status_code}")
