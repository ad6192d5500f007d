"""
Go toolchain adapter — the installer and downloader subprocesses.

Installing ``go1.22.11`` is two external steps:

    go install golang.org/dl/go1.22.11@latest   # wrapper → <root>/bin
    go1.22.11 download                          # fetch the SDK itself

Both stream their output to the terminal (the download prints
progress). ``report_version`` captures output instead.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from pathlib import Path

from gvm.adapters.base import Toolchain
from gvm.core.config.loader import GvmConfig
from gvm.core.models.receipt import Receipt
from gvm.core.models.version import VersionId

logger = logging.getLogger(__name__)


class GoToolchain(Toolchain):
    """Run the Go installer and version wrappers."""

    def __init__(
        self,
        bin_dir: Path,
        installer_command: str = "go",
        installer_module: str = "golang.org/dl",
        download_subcommand: str = "download",
        timeout: int | None = None,
    ):
        self.bin_dir = bin_dir
        self.installer_command = installer_command
        self.installer_module = installer_module.rstrip("/")
        self.download_subcommand = download_subcommand
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: GvmConfig) -> GoToolchain:
        return cls(
            bin_dir=config.bin_dir,
            installer_command=config.installer_command,
            installer_module=config.installer_module,
            download_subcommand=config.download_subcommand,
            timeout=config.installer_timeout,
        )

    @property
    def name(self) -> str:
        return "go"

    def is_available(self) -> bool:
        return shutil.which(self.installer_command) is not None

    def install_wrapper(self, version: VersionId) -> Receipt:
        package = f"{self.installer_module}/{version.canonical}@latest"
        receipt = self._run(
            "install",
            [self.installer_command, "install", package],
            env_overrides={"GOBIN": str(self.bin_dir)},
        )
        if receipt.failed and receipt.return_code is None:
            receipt.metadata["hint"] = (
                f"Make sure '{self.installer_command}' is installed and available in your PATH."
            )
        return receipt

    def download(self, entry: Path) -> Receipt:
        return self._run("download", [str(entry), self.download_subcommand])

    def report_version(self, entry: Path) -> Receipt:
        return self._run("version", [str(entry), "version"], capture=True)

    def _run(
        self,
        operation: str,
        cmd: list[str],
        *,
        capture: bool = False,
        env_overrides: dict[str, str] | None = None,
    ) -> Receipt:
        env = None
        if env_overrides:
            env = os.environ.copy()
            env.update(env_overrides)

        logger.debug("Executing: %s", " ".join(cmd))
        start = time.monotonic()

        try:
            result = subprocess.run(
                cmd,
                capture_output=capture,
                text=True,
                timeout=self.timeout,
                env=env,
            )
        except subprocess.TimeoutExpired:
            return Receipt.failure(
                adapter=self.name,
                operation=operation,
                error=f"Command timed out after {self.timeout}s",
                metadata={"command": cmd},
            )
        except OSError as e:
            logger.debug("Failed to spawn %s: %s", cmd[0], e)
            return Receipt.failure(
                adapter=self.name,
                operation=operation,
                error=f"Failed to run {cmd[0]}: {e}",
                metadata={"command": cmd},
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        output = (result.stdout or "").strip()

        if result.returncode == 0:
            return Receipt.success(
                adapter=self.name,
                operation=operation,
                output=output,
                return_code=0,
                duration_ms=elapsed_ms,
                metadata={"command": cmd},
            )

        stderr = (result.stderr or "").strip()
        return Receipt.failure(
            adapter=self.name,
            operation=operation,
            error=stderr or f"{operation} failed with exit code: {result.returncode}",
            return_code=result.returncode,
            duration_ms=elapsed_ms,
            metadata={"command": cmd},
        )
