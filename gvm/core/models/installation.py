"""
Installation models — installed entries, catalog releases, outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from gvm.core.models.version import VersionId


@dataclass(frozen=True)
class InstalledVersion:
    """A version together with its on-disk entry point.

    The entry can be removed externally at any time after enumeration.
    """

    version: VersionId
    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    def exists(self) -> bool:
        return self.path.exists()


class CatalogRelease(BaseModel):
    """One record of the go.dev release catalog."""

    model_config = ConfigDict(extra="ignore")

    version: str
    stable: bool = False


class VersionState(str, Enum):
    """Where a requested version stands relative to the pointer."""

    NOT_INSTALLED = "not_installed"
    INSTALLED_INACTIVE = "installed_inactive"
    INSTALLED_ACTIVE = "installed_active"


class InstallStatus(str, Enum):
    ALREADY_INSTALLED = "already_installed"
    INSTALLER_FAILED = "installer_failed"
    DOWNLOAD_FAILED = "download_failed"
    INSTALLED = "installed"


class UseStatus(str, Enum):
    NOT_INSTALLED = "not_installed"
    ACTIVATION_FAILED = "activation_failed"
    ACTIVATED = "activated"
    ALREADY_ACTIVE = "already_active"
