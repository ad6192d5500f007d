"""
Catalog use case — published Go versions, newest first.

Releases are deduplicated by version number, sorted descending by
VersionId and marked as stable and/or installed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from gvm.adapters.catalog import CatalogClient
from gvm.core.config.loader import load_config
from gvm.core.engine.activation import build_engine
from gvm.core.errors import CatalogError, ConfigError
from gvm.core.models.installation import CatalogRelease
from gvm.core.models.version import VersionId

logger = logging.getLogger(__name__)


@dataclass
class CatalogEntry:
    version: VersionId
    stable: bool = False
    installed: bool = False


@dataclass
class CatalogResult:
    """Published versions, trimmed to ``shown``."""

    versions: list[CatalogEntry] = field(default_factory=list)
    total: int = 0
    error: str | None = None

    @property
    def shown(self) -> int:
        return len(self.versions)

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "total": self.total,
            "shown": self.shown,
            "versions": [
                {
                    "version": e.version.number,
                    "stable": e.stable,
                    "installed": e.installed,
                }
                for e in self.versions
            ],
        }


def order_releases(
    releases: list[CatalogRelease],
    prefix: str = "go",
    installed_numbers: set[str] | None = None,
) -> list[CatalogEntry]:
    """Deduplicate by number and sort newest first.

    Ties on the numeric triple (``1.22rc1`` vs ``1.22rc2``) keep catalog
    order.
    """
    installed_numbers = installed_numbers or set()
    seen: set[str] = set()
    entries: list[CatalogEntry] = []

    for release in releases:
        version = VersionId.parse(release.version, prefix)
        if version.number in seen:
            continue
        seen.add(version.number)
        entries.append(
            CatalogEntry(
                version=version,
                stable=release.stable,
                installed=version.number in installed_numbers,
            )
        )

    entries.sort(key=lambda e: e.version, reverse=True)
    return entries


def list_available(
    config_path: Path | None = None,
    *,
    limit: int | None = None,
    stable_only: bool = False,
    fetch: Callable[[], list[CatalogRelease]] | None = None,
) -> CatalogResult:
    """Fetch the catalog and merge in local install state.

    Args:
        config_path: Optional explicit config file.
        limit: Rows to keep; None uses ``catalog_limit``, 0 keeps all.
        stable_only: Drop unstable releases before limiting.
        fetch: Override for the HTTP fetch.
    """
    result = CatalogResult()
    try:
        config = load_config(config_path)
    except ConfigError as e:
        result.error = str(e)
        return result

    if fetch is None:
        fetch = CatalogClient(config.catalog_url, timeout=config.catalog_timeout).fetch

    try:
        releases = fetch()
    except CatalogError as e:
        logger.debug("Catalog fetch failed: %s", e)
        result.error = str(e)
        return result

    engine = build_engine(config)
    installed_numbers = {iv.version.number for iv in engine.installed()}

    entries = order_releases(releases, config.prefix, installed_numbers)
    if stable_only:
        entries = [e for e in entries if e.stable]

    result.total = len(entries)
    if limit is None:
        limit = config.catalog_limit
    result.versions = entries[:limit] if limit else entries
    return result
