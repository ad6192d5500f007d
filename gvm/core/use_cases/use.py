"""
Use case: switch the active Go version.

Outcomes map onto UseStatus:
    not_installed       — nothing to point at; install first
    activation_failed   — the pointer rewrite failed (``reason`` says how)
    activated           — pointer now designates the version
    already_active      — no-op
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from gvm.adapters.base import Toolchain
from gvm.adapters.toolchain import GoToolchain
from gvm.core.config.loader import load_config
from gvm.core.engine.activation import build_engine
from gvm.core.errors import (
    ActivationError,
    ConfigError,
    NotInstalledError,
    VersionParseError,
)
from gvm.core.models.installation import UseStatus
from gvm.core.models.version import VersionId

logger = logging.getLogger(__name__)


@dataclass
class UseResult:
    requested: str = ""
    version: VersionId | None = None
    status: UseStatus | None = None
    previous: VersionId | None = None
    reason: str | None = None
    error: str | None = None
    go_version: str | None = None   # `go version` output after switching

    @property
    def ok(self) -> bool:
        return self.status in (UseStatus.ACTIVATED, UseStatus.ALREADY_ACTIVE)

    def to_dict(self) -> dict:
        result: dict = {
            "requested": self.requested,
            "version": self.version.number if self.version else None,
            "status": self.status.value if self.status else None,
            "previous": self.previous.number if self.previous else None,
        }
        if self.reason:
            result["reason"] = self.reason
        if self.error:
            result["error"] = self.error
        if self.go_version:
            result["go_version"] = self.go_version
        return result


def use_version(
    version: str,
    config_path: Path | None = None,
    toolchain: Toolchain | None = None,
    verify: bool = True,
) -> UseResult:
    """Activate ``version`` and optionally confirm with ``go version``.

    Args:
        version: ``1.22.11`` or ``go1.22.11``.
        config_path: Optional explicit config file.
        toolchain: Override for the subprocess adapter.
        verify: Run the new entry point's ``version`` subcommand.
    """
    result = UseResult(requested=version)
    try:
        config = load_config(config_path)
    except ConfigError as e:
        result.error = str(e)
        return result

    engine = build_engine(config)
    try:
        result.version = engine.parse(version)
        activation = engine.use(result.version)
    except VersionParseError as e:
        result.error = str(e)
        return result
    except NotInstalledError as e:
        result.status = UseStatus.NOT_INSTALLED
        result.error = str(e)
        return result
    except ActivationError as e:
        logger.debug("Activation of %s failed: %s", version, e)
        result.status = UseStatus.ACTIVATION_FAILED
        result.reason = e.reason
        result.error = str(e)
        return result

    result.previous = activation.previous
    result.status = UseStatus.ACTIVATED if activation.changed else UseStatus.ALREADY_ACTIVE

    if verify:
        if toolchain is None:
            toolchain = GoToolchain.from_config(config)
        receipt = toolchain.report_version(engine.pointer.path)
        if receipt.ok:
            result.go_version = receipt.output
        else:
            logger.info("Version check failed: %s", receipt.error)

    return result
