"""
VersionId — normalized, totally ordered toolchain versions.

Version strings arrive from three places: the user (``1.22.11`` or
``go1.22.11``), directory entries (``go1.22.11``) and the release
catalog (``go1.22rc1``). All of them are folded into the same
``(major, minor, patch)`` triple so that ordering is numeric, never
lexicographic on the raw string.

Parsing is lenient by default: a missing or unparsable component
becomes 0. Installed-version directories may contain non-standard
names and must keep listing. Strict mode raises ``VersionParseError``
instead.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from gvm.core.errors import VersionParseError

DEFAULT_PREFIX = "go"

# Components are u32 on the wire; anything larger does not parse.
_MAX_COMPONENT = 2**32 - 1
_COMPONENT_RE = re.compile(r"[0-9]+")


def normalize(version: str, prefix: str = DEFAULT_PREFIX) -> str:
    """Return the canonical prefixed form (``1.22`` → ``go1.22``).

    Never fails. Input that already carries the prefix is returned
    as-is.
    """
    text = version.strip()
    if text.startswith(prefix):
        return text
    return f"{prefix}{text}"


def bare_number(canonical: str, prefix: str = DEFAULT_PREFIX) -> str:
    """Strip the prefix (``go1.22`` → ``1.22``); unprefixed input is unchanged."""
    if canonical.startswith(prefix):
        return canonical[len(prefix):]
    return canonical


def _parse_component(part: str | None, *, strict: bool, source: str) -> int:
    if part is None:
        return 0
    if _COMPONENT_RE.fullmatch(part):
        value = int(part)
        if value <= _MAX_COMPONENT:
            return value
    if strict:
        raise VersionParseError(f"Invalid version component {part!r} in {source!r}")
    return 0


def parse_triple(bare: str, strict: bool = False) -> tuple[int, int, int]:
    """Parse ``major.minor.patch`` into integers.

    Missing components default to 0. Unparsable ones also default to 0
    unless ``strict`` is set::

        parse_triple("1.22")     -> (1, 22, 0)
        parse_triple("1.22rc1")  -> (1, 0, 0)
    """
    parts = bare.split(".")
    padded = (parts + [None, None, None])[:3]
    major, minor, patch = (
        _parse_component(p, strict=strict, source=bare) for p in padded
    )
    return major, minor, patch


def compare(a: str, b: str) -> int:
    """Compare two bare version strings numerically: -1, 0 or 1."""
    ta, tb = parse_triple(a), parse_triple(b)
    return (ta > tb) - (ta < tb)


@dataclass(frozen=True, order=True)
class VersionId:
    """An immutable, comparable version identifier.

    Equality, hashing and ordering use only the numeric triple, so
    ``VersionId.parse("1.22")`` equals ``VersionId.parse("go1.22.0")``.
    """

    major: int
    minor: int
    patch: int
    canonical: str = field(compare=False)
    prefix: str = field(default=DEFAULT_PREFIX, compare=False, repr=False)

    @classmethod
    def parse(
        cls,
        text: str,
        prefix: str = DEFAULT_PREFIX,
        strict: bool = False,
    ) -> VersionId:
        canonical = normalize(text, prefix)
        major, minor, patch = parse_triple(bare_number(canonical, prefix), strict=strict)
        return cls(major, minor, patch, canonical=canonical, prefix=prefix)

    @property
    def number(self) -> str:
        """The bare version text, e.g. ``1.22.11``."""
        return bare_number(self.canonical, self.prefix)

    @property
    def triple(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def __str__(self) -> str:
        return self.canonical
