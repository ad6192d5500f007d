"""
Install registry — which Go versions are installed under ``<root>/bin``.

``go install golang.org/dl/goX.Y.Z@latest`` drops one wrapper
executable per version into the bin directory. The registry treats
every entry named ``<prefix><major>.<minor>…`` as an installed version.
The bare ``<prefix>`` entry is the activation pointer and is never listed.

Enumeration never fails: a missing or unreadable directory yields an
empty list.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from gvm.core.errors import VersionParseError
from gvm.core.models.installation import InstalledVersion
from gvm.core.models.version import DEFAULT_PREFIX, VersionId

logger = logging.getLogger(__name__)


def entry_pattern(prefix: str) -> re.Pattern[str]:
    """Names accepted as installed entries: prefix, major, dot, minor digit.

    ``go1.22.11`` and ``go1.22rc1`` qualify; ``go``, ``go1.`` and
    ``gofmt`` do not.
    """
    return re.compile(rf"{re.escape(prefix)}[0-9]+\.[0-9]")


class InstallRegistry:
    """Enumerate and look up installed versions in a bin directory."""

    def __init__(
        self,
        bin_dir: Path,
        prefix: str = DEFAULT_PREFIX,
        strict: bool = False,
    ):
        self.bin_dir = bin_dir
        self.prefix = prefix
        self.strict = strict
        self._pattern = entry_pattern(prefix)

    def is_entry_name(self, name: str) -> bool:
        return bool(self._pattern.match(name))

    def entry_path(self, version: VersionId) -> Path:
        return self.bin_dir / version.canonical

    def list_installed(self) -> list[InstalledVersion]:
        """All installed versions, ascending by version."""
        if not self.bin_dir.is_dir():
            logger.debug("Bin directory %s does not exist", self.bin_dir)
            return []

        try:
            entries = list(os.scandir(self.bin_dir))
        except OSError as e:
            logger.warning("Cannot read %s: %s", self.bin_dir, e)
            return []

        installed: list[InstalledVersion] = []
        for entry in entries:
            if not self.is_entry_name(entry.name):
                continue
            if entry.is_dir(follow_symlinks=False):
                continue
            try:
                version = VersionId.parse(entry.name, self.prefix, strict=self.strict)
            except VersionParseError as e:
                logger.debug("Skipping %s: %s", entry.name, e)
                continue
            installed.append(InstalledVersion(version=version, path=Path(entry.path)))

        installed.sort(key=lambda iv: (iv.version, iv.name))
        logger.debug("Found %d installed versions in %s", len(installed), self.bin_dir)
        return installed

    def is_installed(self, version: VersionId) -> bool:
        """Whether ``<bin>/<canonical>`` exists right now (best-effort).

        A direct lookup, not an enumeration. The entry can still be
        removed by someone else immediately afterwards. Names that are not
        versioned entries (the pointer itself, ``gopls``) are never installed.
        """
        if not self.is_entry_name(version.canonical):
            return False
        return self.entry_path(version).exists()

    def get(self, version: VersionId) -> InstalledVersion | None:
        if not self.is_installed(version):
            return None
        return InstalledVersion(version=version, path=self.entry_path(version))
