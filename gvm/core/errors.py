"""
Error taxonomy — every failure the core can raise.

Pure logic never raises in lenient mode; only strict version parsing,
activation-pointer mutation and config loading do. Adapters never raise
at all: their failures travel in a ``Receipt``.
"""

from __future__ import annotations


class GvmError(Exception):
    """Base class for all expected gvm failures."""


class VersionParseError(GvmError, ValueError):
    """A version component could not be parsed (strict mode only)."""


class NotInstalledError(GvmError):
    """The requested version has no installed entry."""

    def __init__(self, version: str):
        self.version = version
        super().__init__(
            f"Go {version} is not installed. "
            f"Run 'gvm install {version}' to install it first."
        )


class ActivationError(GvmError):
    """The activation pointer could not be rewritten.

    ``cause`` holds the underlying ``OSError`` (or ``None`` when the
    failure was detected before touching the filesystem).
    """

    reason = "activation failed"

    def __init__(self, message: str, cause: OSError | None = None):
        self.cause = cause
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class RemovalFailed(ActivationError):
    """The existing pointer entry could not be displaced."""

    reason = "removal_failed"


class LinkCreationFailed(ActivationError):
    """The new indirection could not be created."""

    reason = "link_creation_failed"


class CatalogError(GvmError):
    """The release catalog could not be fetched or parsed."""


class ConfigError(GvmError):
    """Raised when gvm configuration is invalid or missing."""
