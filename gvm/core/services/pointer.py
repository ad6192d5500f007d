"""
Activation pointer — the single ``<root>/bin/go`` indirection.

The pointer is either absent (no active version) or designates exactly
one installed entry. Rewrites are atomic: the new indirection is built
under a hidden temporary name in the same directory and then
``os.replace``d over the pointer. Readers see the old target or the new
one, never a missing pointer.

Two kinds of indirection are supported:

    SymlinkPointer   — a relative symlink (default)
    LauncherPointer  — a tiny ``/bin/sh`` script that ``exec``s the target,
                       for filesystems without symlinks
"""

from __future__ import annotations

import logging
import os
import secrets
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from gvm.core.errors import LinkCreationFailed, RemovalFailed, VersionParseError
from gvm.core.models.installation import InstalledVersion
from gvm.core.models.version import DEFAULT_PREFIX, VersionId
from gvm.core.services.registry import entry_pattern

logger = logging.getLogger(__name__)


def _discard(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Could not remove temporary pointer %s: %s", path, e)


class ActivationPointer(ABC):
    """Read and atomically rewrite the activation pointer.

    Subclasses provide the two primitives, ``resolve`` and ``point_to``;
    ``current`` and ``activate`` are built on top of them.
    """

    def __init__(
        self,
        path: Path,
        prefix: str = DEFAULT_PREFIX,
        strict: bool = False,
    ):
        self.path = path
        self.prefix = prefix
        self.strict = strict

    @property
    @abstractmethod
    def kind(self) -> str:
        """Short identifier (``symlink``, ``launcher``)."""

    @abstractmethod
    def resolve(self) -> Path | None:
        """The immediate target, or None if absent or not our indirection."""

    @abstractmethod
    def point_to(self, target: Path) -> None:
        """Atomically make the pointer designate ``target``.

        Raises:
            LinkCreationFailed: The new indirection could not be created.
            RemovalFailed: The existing entry could not be displaced.
        """

    def current(self) -> VersionId | None:
        """The active version, or None when nothing is active."""
        target = self.resolve()
        if target is None:
            return None

        name = target.name
        if not entry_pattern(self.prefix).match(name):
            logger.debug("Pointer %s targets %s, not a versioned entry", self.path, target)
            return None

        try:
            return VersionId.parse(name, self.prefix, strict=self.strict)
        except VersionParseError as e:
            logger.debug("Pointer target %s: %s", name, e)
            return None

    def activate(self, target: InstalledVersion) -> None:
        """Point at ``target``'s entry.

        The target is re-checked first: it may have been removed since it
        was enumerated.
        """
        if target.path == self.path:
            raise LinkCreationFailed(f"Refusing to point {self.path} at itself")
        if not target.exists():
            raise LinkCreationFailed(f"Entry {target.path} no longer exists")

        self.point_to(target.path)
        logger.info("Pointer %s → %s", self.path, target.path)

    def _temp_path(self) -> Path:
        token = secrets.token_hex(4)
        return self.path.with_name(f".{self.path.name}.{token}.tmp")

    def _replace(self, tmp: Path) -> None:
        try:
            os.replace(tmp, self.path)
        except OSError as e:
            _discard(tmp)
            raise RemovalFailed(f"Cannot replace existing '{self.path}'", cause=e) from e

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} path={str(self.path)!r}>"


class SymlinkPointer(ActivationPointer):
    """Pointer implemented as a symbolic link."""

    @property
    def kind(self) -> str:
        return "symlink"

    def resolve(self) -> Path | None:
        if not self.path.is_symlink():
            return None
        try:
            return Path(os.readlink(self.path))
        except OSError as e:
            logger.debug("Cannot read link %s: %s", self.path, e)
            return None

    def point_to(self, target: Path) -> None:
        # Same directory: store a relative link so the root can be moved
        link_value = target.name if target.parent == self.path.parent else str(target)

        tmp = self._temp_path()
        try:
            os.symlink(link_value, tmp)
        except OSError as e:
            raise LinkCreationFailed(f"Cannot create link to '{target}'", cause=e) from e

        self._replace(tmp)


LAUNCHER_MARKER = "# gvm-target: "

_LAUNCHER_TEMPLATE = """\
#!/bin/sh
{marker}{target}
exec "{target}" "$@"
"""


class LauncherPointer(ActivationPointer):
    """Pointer implemented as a small redirecting shell script."""

    @property
    def kind(self) -> str:
        return "launcher"

    def resolve(self) -> Path | None:
        if self.path.is_symlink() or not self.path.is_file():
            return None
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Cannot read launcher %s: %s", self.path, e)
            return None

        for line in text.splitlines()[:5]:
            if line.startswith(LAUNCHER_MARKER):
                return Path(line[len(LAUNCHER_MARKER):].strip())
        return None

    def point_to(self, target: Path) -> None:
        script = _LAUNCHER_TEMPLATE.format(marker=LAUNCHER_MARKER, target=target)

        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
            )
        except OSError as e:
            raise LinkCreationFailed(f"Cannot create launcher for '{target}'", cause=e) from e

        tmp = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(script)
            tmp.chmod(0o755)
        except OSError as e:
            _discard(tmp)
            raise LinkCreationFailed(f"Cannot write launcher for '{target}'", cause=e) from e

        self._replace(tmp)


_POINTERS: dict[str, type[ActivationPointer]] = {
    "symlink": SymlinkPointer,
    "launcher": LauncherPointer,
}


def make_pointer(
    kind: str,
    path: Path,
    prefix: str = DEFAULT_PREFIX,
    strict: bool = False,
) -> ActivationPointer:
    """Build the pointer implementation named by ``kind``."""
    try:
        cls = _POINTERS[kind]
    except KeyError:
        raise ValueError(
            f"Unknown pointer kind '{kind}'. Valid: {', '.join(sorted(_POINTERS))}"
        ) from None
    return cls(path, prefix=prefix, strict=strict)
