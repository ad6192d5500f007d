"""
Install use case — fetch a Go version wrapper and its SDK.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from gvm.adapters.base import Toolchain
from gvm.adapters.toolchain import GoToolchain
from gvm.core.config.loader import load_config
from gvm.core.engine.activation import build_engine
from gvm.core.errors import ConfigError, VersionParseError
from gvm.core.models.installation import InstallStatus
from gvm.core.models.receipt import Receipt
from gvm.core.models.version import VersionId


@dataclass
class InstallResult:
    requested: str = ""
    version: VersionId | None = None
    status: InstallStatus | None = None
    error: str | None = None
    hint: str | None = None
    receipts: list[Receipt] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status in (InstallStatus.INSTALLED, InstallStatus.ALREADY_INSTALLED)

    def to_dict(self) -> dict:
        result: dict = {
            "requested": self.requested,
            "version": self.version.number if self.version else None,
            "status": self.status.value if self.status else None,
        }
        if self.error:
            result["error"] = self.error
        if self.hint:
            result["hint"] = self.hint
        if self.receipts:
            result["receipts"] = [r.model_dump(mode="json") for r in self.receipts]
        return result


def install_version(
    version: str,
    config_path: Path | None = None,
    toolchain: Toolchain | None = None,
) -> InstallResult:
    """Install ``version`` unless it is already present.

    Args:
        version: ``1.22.11`` or ``go1.22.11``.
        config_path: Optional explicit config file.
        toolchain: Override for the subprocess adapter.
    """
    result = InstallResult(requested=version)
    try:
        config = load_config(config_path)
    except ConfigError as e:
        result.error = str(e)
        return result

    engine = build_engine(config)
    try:
        result.version = engine.parse(version)
    except VersionParseError as e:
        result.error = str(e)
        return result
    if not engine.registry.is_entry_name(result.version.canonical):
        result.error = f"'{version}' is not a Go version"
        return result

    if toolchain is None:
        toolchain = GoToolchain.from_config(config)

    report = engine.install(result.version, toolchain)
    result.status = report.status
    result.error = report.error
    result.receipts = report.receipts
    for receipt in report.receipts:
        if "hint" in receipt.metadata:
            result.hint = receipt.metadata["hint"]
    return result
