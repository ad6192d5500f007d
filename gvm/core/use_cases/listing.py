"""
Listing use cases — installed versions and the active one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from gvm.core.config.loader import load_config
from gvm.core.engine.activation import build_engine
from gvm.core.errors import ConfigError
from gvm.core.models.installation import InstalledVersion
from gvm.core.models.version import VersionId


@dataclass
class ListResult:
    """Installed versions plus the current pointer target."""

    installed: list[InstalledVersion] = field(default_factory=list)
    current: VersionId | None = None
    current_entry: str | None = None
    bin_dir: Path | None = None
    error: str | None = None

    def is_current(self, iv: InstalledVersion) -> bool:
        return self.current_entry is not None and iv.name == self.current_entry

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "bin_dir": str(self.bin_dir) if self.bin_dir else None,
            "current": self.current.number if self.current else None,
            "installed": [
                {
                    "version": iv.version.number,
                    "path": str(iv.path),
                    "current": self.is_current(iv),
                }
                for iv in self.installed
            ],
        }


def list_installed_versions(config_path: Path | None = None) -> ListResult:
    """Enumerate installed versions, ascending, and the active one."""
    result = ListResult()
    try:
        config = load_config(config_path)
    except ConfigError as e:
        result.error = str(e)
        return result

    engine = build_engine(config)
    result.bin_dir = config.bin_dir
    result.installed = engine.installed()
    result.current = engine.current()
    if result.current is not None:
        target = engine.pointer.resolve()
        result.current_entry = target.name if target else None
    return result


@dataclass
class CurrentResult:
    current: VersionId | None = None
    pointer: Path | None = None
    target: Path | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "current": self.current.number if self.current else None,
            "pointer": str(self.pointer) if self.pointer else None,
            "target": str(self.target) if self.target else None,
        }


def get_current_version(config_path: Path | None = None) -> CurrentResult:
    """Report what the activation pointer designates, if anything."""
    result = CurrentResult()
    try:
        config = load_config(config_path)
    except ConfigError as e:
        result.error = str(e)
        return result

    engine = build_engine(config)
    result.pointer = engine.pointer.path
    result.current = engine.current()
    if result.current is not None:
        result.target = engine.pointer.resolve()
    return result
