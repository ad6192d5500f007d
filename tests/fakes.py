"""
Test doubles shared across test modules.
"""

from __future__ import annotations

from pathlib import Path

from gvm.adapters.base import Toolchain
from gvm.core.models.receipt import Receipt
from gvm.core.models.version import VersionId


class FakeToolchain(Toolchain):
    """Toolchain double: records calls, optionally creates the wrapper entry."""

    def __init__(
        self,
        bin_dir: Path,
        *,
        create_entry: bool = True,
        available: bool = True,
        install_ok: bool = True,
        download_ok: bool = True,
        version_output: str = "go version go1.21.5 linux/amd64",
    ):
        self.bin_dir = bin_dir
        self.create_entry = create_entry
        self.available = available
        self.install_ok = install_ok
        self.download_ok = download_ok
        self.version_output = version_output
        self.calls: list[tuple[str, str]] = []

    @property
    def name(self) -> str:
        return "fake"

    def is_available(self) -> bool:
        return self.available

    def install_wrapper(self, version: VersionId) -> Receipt:
        self.calls.append(("install", version.canonical))
        if not self.install_ok:
            return Receipt.failure(
                adapter=self.name, operation="install",
                error="install failed with exit code: 1", return_code=1,
            )
        if self.create_entry:
            make_entry(self.bin_dir, version.canonical)
        return Receipt.success(adapter=self.name, operation="install", return_code=0)

    def download(self, entry: Path) -> Receipt:
        self.calls.append(("download", entry.name))
        if not self.download_ok:
            return Receipt.failure(
                adapter=self.name, operation="download",
                error="download failed with exit code: 2", return_code=2,
            )
        return Receipt.success(adapter=self.name, operation="download", return_code=0)

    def report_version(self, entry: Path) -> Receipt:
        self.calls.append(("version", entry.name))
        return Receipt.success(
            adapter=self.name, operation="version", output=self.version_output,
        )


def make_entry(bin_dir: Path, name: str) -> Path:
    """Create an executable stand-in for a version wrapper."""
    bin_dir.mkdir(parents=True, exist_ok=True)
    entry = bin_dir / name
    entry.write_text(f"#!/bin/sh\necho {name}\n")
    entry.chmod(0o755)
    return entry
