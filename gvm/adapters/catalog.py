"""
Release catalog client — the list of Go versions published on go.dev.

The endpoint returns a JSON array of release records; only ``version``
and ``stable`` are used. Failures raise ``CatalogError`` with the cause;
there is no retry, the user re-runs the command.
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from typing import Any

from pydantic import ValidationError

from gvm import __version__
from gvm.core.errors import CatalogError
from gvm.core.models.installation import CatalogRelease

logger = logging.getLogger(__name__)

USER_AGENT = f"gvm/{__version__}"


def parse_releases(payload: Any) -> list[CatalogRelease]:
    """Validate decoded catalog JSON into CatalogRelease records."""
    if not isinstance(payload, list):
        raise CatalogError(f"Expected a JSON array of releases, got {type(payload).__name__}")

    try:
        return [CatalogRelease.model_validate(item) for item in payload]
    except ValidationError as e:
        raise CatalogError(f"Failed to parse response: {e}") from e


class CatalogClient:
    """Fetch the release catalog over HTTP."""

    def __init__(self, url: str, timeout: int = 15):
        self.url = url
        self.timeout = timeout

    def fetch(self) -> list[CatalogRelease]:
        logger.info("Fetching release catalog from %s", self.url)
        req = urllib.request.Request(
            self.url,
            headers={"Accept": "application/json", "User-Agent": USER_AGENT},
        )

        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                raw = resp.read()
        except urllib.error.HTTPError as e:
            raise CatalogError(f"Failed to fetch versions: HTTP {e.code}") from e
        except (urllib.error.URLError, OSError) as e:
            raise CatalogError(f"Failed to fetch versions: {e}") from e

        try:
            payload = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise CatalogError(f"Failed to parse response: {e}") from e

        releases = parse_releases(payload)
        logger.debug("Catalog returned %d releases", len(releases))
        return releases
