"""
Activation engine — install guard and version switching.

For a requested version the engine works out one of three states:

    NOT_INSTALLED       → use refuses with NotInstalledError
    INSTALLED_INACTIVE  → use rewrites the pointer
    INSTALLED_ACTIVE    → use is a no-op success

and orchestrates the two-step install (wrapper, then SDK download)
behind an "already installed" check. The engine raises
``NotInstalledError`` and ``ActivationError``; toolchain failures come
back as receipts in the InstallReport.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from gvm.adapters.base import Toolchain
from gvm.core.config.loader import GvmConfig
from gvm.core.errors import NotInstalledError
from gvm.core.models.installation import InstalledVersion, InstallStatus, VersionState
from gvm.core.models.receipt import Receipt
from gvm.core.models.version import VersionId
from gvm.core.services.pointer import ActivationPointer, make_pointer
from gvm.core.services.registry import InstallRegistry

logger = logging.getLogger(__name__)


@dataclass
class Activation:
    """Outcome of a successful ``use``."""

    version: VersionId
    previous: VersionId | None = None
    changed: bool = True


@dataclass
class InstallReport:
    """Outcome of an ``install`` run."""

    version: VersionId
    status: InstallStatus
    error: str | None = None
    receipts: list[Receipt] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status in (InstallStatus.INSTALLED, InstallStatus.ALREADY_INSTALLED)


class ActivationEngine:
    """Compose the registry and the pointer into install/use operations."""

    def __init__(
        self,
        registry: InstallRegistry,
        pointer: ActivationPointer,
        strict: bool = False,
    ):
        self.registry = registry
        self.pointer = pointer
        self.strict = strict

    @property
    def prefix(self) -> str:
        return self.registry.prefix

    def parse(self, text: str) -> VersionId:
        """Parse user input with this engine's prefix and strictness."""
        return VersionId.parse(text, self.prefix, strict=self.strict)

    def state_of(self, version: VersionId) -> VersionState:
        if not self.registry.is_installed(version):
            return VersionState.NOT_INSTALLED
        if self._points_at(self.registry.entry_path(version).name):
            return VersionState.INSTALLED_ACTIVE
        return VersionState.INSTALLED_INACTIVE

    def use(self, version: VersionId) -> Activation:
        """Make ``version`` the active one.

        Raises:
            NotInstalledError: No entry exists for the version.
            ActivationError: The pointer could not be rewritten.
        """
        previous = self.pointer.current()
        state = self.state_of(version)
        if state is VersionState.NOT_INSTALLED:
            raise NotInstalledError(version.number)
        if state is VersionState.INSTALLED_ACTIVE:
            logger.info("%s is already active", version)
            return Activation(version=version, previous=previous, changed=False)

        target = InstalledVersion(version=version, path=self.registry.entry_path(version))
        self.pointer.activate(target)
        logger.info("Switched %s → %s", previous or "none", version)
        return Activation(version=version, previous=previous)

    def install(self, version: VersionId, toolchain: Toolchain) -> InstallReport:
        """Install ``version`` unless its entry is already present."""
        if self.registry.is_installed(version):
            logger.info("%s already installed, skipping installer", version)
            return InstallReport(version=version, status=InstallStatus.ALREADY_INSTALLED)

        report = InstallReport(version=version, status=InstallStatus.INSTALLER_FAILED)

        if not toolchain.is_available():
            receipt = Receipt.failure(
                adapter=toolchain.name,
                operation="install",
                error=f"Installer for {toolchain.name} not found",
                metadata={"hint": "Make sure Go is installed and available in your PATH."},
            )
            report.receipts.append(receipt)
            report.error = receipt.error
            return report

        receipt = toolchain.install_wrapper(version)
        report.receipts.append(receipt)
        if receipt.failed:
            report.error = receipt.error
            return report

        # Trust the filesystem, not the exit status
        installed = self.registry.get(version)
        if installed is None:
            report.error = f"Go wrapper not found at {self.registry.entry_path(version)}"
            return report

        receipt = toolchain.download(installed.path)
        report.receipts.append(receipt)
        if receipt.failed:
            report.status = InstallStatus.DOWNLOAD_FAILED
            report.error = receipt.error
            return report

        report.status = InstallStatus.INSTALLED
        logger.info("Installed %s", version)
        return report

    def _points_at(self, entry_name: str) -> bool:
        # Compare entry names: go1.21 and go1.21.0 share a triple but are
        # distinct entries
        target = self.pointer.resolve()
        return target is not None and target.name == entry_name

    def installed(self) -> list[InstalledVersion]:
        return self.registry.list_installed()

    def current(self) -> VersionId | None:
        return self.pointer.current()


def build_engine(config: GvmConfig) -> ActivationEngine:
    """Wire registry and pointer from configuration."""
    strict = config.strict_version_parsing
    registry = InstallRegistry(config.bin_dir, prefix=config.prefix, strict=strict)
    pointer = make_pointer(
        config.pointer,
        config.pointer_path,
        prefix=config.prefix,
        strict=strict,
    )
    return ActivationEngine(registry, pointer, strict=strict)
