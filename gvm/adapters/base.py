"""
Toolchain adapter base — the contract between the engine and the Go tools.

The engine never runs subprocesses itself. It asks a Toolchain to
install a version wrapper, download its SDK or report its version, and
receives a Receipt back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from gvm.core.models.receipt import Receipt
from gvm.core.models.version import VersionId


class Toolchain(ABC):
    """Abstract base class for toolchain adapters.

    Implementations NEVER raise. A non-zero exit or a spawn failure is a
    failed Receipt.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g. ``go``)."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check that the installer command can be found. Never raises."""

    @abstractmethod
    def install_wrapper(self, version: VersionId) -> Receipt:
        """Place the ``goX.Y.Z`` wrapper entry into the bin directory."""

    @abstractmethod
    def download(self, entry: Path) -> Receipt:
        """Run the wrapper's download subcommand to fetch the SDK."""

    @abstractmethod
    def report_version(self, entry: Path) -> Receipt:
        """Run ``<entry> version`` and capture its output."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
