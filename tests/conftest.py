"""
Shared test fixtures and configuration.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest


@pytest.fixture
def go_root(tmp_path: Path) -> Path:
    """Installation root; ``bin/`` is not created."""
    return tmp_path / "go"


@pytest.fixture
def bin_dir(go_root: Path) -> Path:
    return go_root / "bin"


@pytest.fixture
def gvm_env(tmp_path: Path, go_root: Path, monkeypatch) -> Path:
    """Isolate config resolution and point GVM_ROOT at ``go_root``."""
    for key in list(os.environ):
        if key.startswith("GVM_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setenv("GVM_ROOT", str(go_root))
    return go_root
