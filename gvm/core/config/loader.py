"""
Configuration loader — reads config.yml + GVM_* env vars into GvmConfig.

Sources, highest precedence first:
    GVM_* environment variables  >  YAML file  >  built-in defaults

The YAML file is the explicit ``--config`` path, else ``$GVM_CONFIG``,
else ``$XDG_CONFIG_HOME/gvm/config.yml`` (``~/.config/gvm/config.yml``).
A missing default file is not an error; everything has a default.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from gvm.core.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE = "config.yml"
ENV_PREFIX = "GVM_"
DEFAULT_CATALOG_URL = "https://go.dev/dl/?mode=json&include=all"


def _default_root() -> Path:
    """``$GOPATH`` (first entry) or ``~/go``, where ``go install`` puts binaries."""
    gopath = os.environ.get("GOPATH", "")
    first = gopath.split(os.pathsep)[0] if gopath else ""
    if first:
        return Path(first).expanduser()
    return Path.home() / "go"


class GvmConfig(BaseModel):
    """Resolved gvm configuration."""

    model_config = ConfigDict(extra="forbid")

    root: Path = Field(default_factory=_default_root)
    prefix: str = Field(default="go", min_length=1)
    strict_version_parsing: bool = False
    pointer: Literal["symlink", "launcher"] = "symlink"

    # Installer / downloader
    installer_command: str = Field(default="go", min_length=1)
    installer_module: str = "golang.org/dl"
    download_subcommand: str = "download"
    installer_timeout: int | None = Field(default=None, gt=0)

    # Release catalog
    catalog_url: str = DEFAULT_CATALOG_URL
    catalog_timeout: int = Field(default=15, gt=0)
    catalog_limit: int = Field(default=30, ge=1)

    @field_validator("root")
    @classmethod
    def _expand_root(cls, value: Path) -> Path:
        return value.expanduser()

    @property
    def bin_dir(self) -> Path:
        """Directory holding versioned entries and the activation pointer."""
        return self.root / "bin"

    @property
    def pointer_path(self) -> Path:
        return self.bin_dir / self.prefix


def default_config_path() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "gvm" / CONFIG_FILE


def resolve_config_path(explicit: Path | None = None) -> Path:
    """Pick the config file location (it may not exist)."""
    if explicit is not None:
        return explicit
    env_path = os.environ.get(f"{ENV_PREFIX}CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return default_config_path()


def _env_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for name in GvmConfig.model_fields:
        raw = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
        if raw is not None and raw != "":
            overrides[name] = raw
    return overrides


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Allow everything to sit under a top-level "gvm" key
    if isinstance(data.get("gvm"), dict):
        data = data["gvm"]
    return data


def load_config(path: Path | None = None) -> GvmConfig:
    """Load and validate gvm configuration.

    Args:
        path: Explicit config file. Unlike the default location, an
            explicit path must exist.

    Raises:
        ConfigError: If the file is unreadable or the values are invalid.
    """
    config_path = resolve_config_path(path)
    data: dict[str, Any] = {}

    if config_path.is_file():
        logger.debug("Loading config from %s", config_path)
        data = _read_yaml(config_path)
    elif path is not None or os.environ.get(f"{ENV_PREFIX}CONFIG"):
        raise ConfigError(f"Config file not found: {config_path}")
    else:
        logger.debug("No config file at %s, using defaults", config_path)

    data.update(_env_overrides())

    try:
        config = GvmConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid gvm configuration: {e}") from e

    logger.info("Using install root %s (pointer: %s)", config.root, config.pointer)
    return config
