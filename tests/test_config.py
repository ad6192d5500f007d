"""
Tests for configuration loading — defaults, YAML file, GVM_* overrides.
"""

import textwrap
from pathlib import Path

import pytest

from gvm.core.config.loader import (
    DEFAULT_CATALOG_URL,
    GvmConfig,
    load_config,
    resolve_config_path,
)
from gvm.core.errors import ConfigError


@pytest.fixture
def clean_env(tmp_path: Path, monkeypatch) -> Path:
    for key in ("GVM_CONFIG", "GVM_ROOT", "GVM_PREFIX", "GVM_POINTER",
                "GVM_STRICT_VERSION_PARSING", "GVM_CATALOG_LIMIT", "GOPATH"):
        monkeypatch.delenv(key, raising=False)
    xdg = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))
    return xdg


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content))
    return path


class TestDefaults:
    def test_no_file_uses_defaults(self, clean_env: Path, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("HOME", str(tmp_path / "home"))
        config = load_config()
        assert config.prefix == "go"
        assert config.pointer == "symlink"
        assert config.strict_version_parsing is False
        assert config.catalog_url == DEFAULT_CATALOG_URL
        assert config.catalog_limit == 30
        assert config.installer_timeout is None
        assert config.root == tmp_path / "home" / "go"

    def test_gopath_first_entry(self, clean_env: Path, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("GOPATH", f"{tmp_path / 'a'}:{tmp_path / 'b'}")
        assert load_config().root == tmp_path / "a"

    def test_derived_paths(self, tmp_path: Path):
        config = GvmConfig(root=tmp_path)
        assert config.bin_dir == tmp_path / "bin"
        assert config.pointer_path == tmp_path / "bin" / "go"


class TestYamlFile:
    def test_default_location(self, clean_env: Path, tmp_path: Path):
        _write(clean_env / "gvm" / "config.yml", f"""\
            root: {tmp_path / 'sdk'}
            pointer: launcher
            catalog_limit: 10
        """)
        config = load_config()
        assert config.root == tmp_path / "sdk"
        assert config.pointer == "launcher"
        assert config.catalog_limit == 10

    def test_nested_under_gvm_key(self, clean_env: Path, tmp_path: Path):
        path = _write(tmp_path / "custom.yml", """\
            gvm:
              strict_version_parsing: true
        """)
        assert load_config(path).strict_version_parsing is True

    def test_empty_file(self, clean_env: Path, tmp_path: Path):
        path = _write(tmp_path / "empty.yml", "")
        assert load_config(path).prefix == "go"

    def test_gvm_config_env(self, clean_env: Path, tmp_path: Path, monkeypatch):
        path = _write(tmp_path / "elsewhere.yml", "prefix: tool\n")
        monkeypatch.setenv("GVM_CONFIG", str(path))
        assert resolve_config_path() == path
        assert load_config().prefix == "tool"

    def test_explicit_missing_file(self, clean_env: Path, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "missing.yml")

    def test_invalid_yaml(self, clean_env: Path, tmp_path: Path):
        path = _write(tmp_path / "bad.yml", "root: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_not_a_mapping(self, clean_env: Path, tmp_path: Path):
        path = _write(tmp_path / "list.yml", "- a\n- b\n")
        with pytest.raises(ConfigError, match="Expected a YAML mapping"):
            load_config(path)

    def test_invalid_value(self, clean_env: Path, tmp_path: Path):
        path = _write(tmp_path / "bad.yml", "pointer: hardlink\n")
        with pytest.raises(ConfigError, match="Invalid gvm configuration"):
            load_config(path)

    def test_unknown_key(self, clean_env: Path, tmp_path: Path):
        path = _write(tmp_path / "typo.yml", "roots: /tmp\n")
        with pytest.raises(ConfigError):
            load_config(path)


class TestEnvOverrides:
    def test_env_beats_file(self, clean_env: Path, tmp_path: Path, monkeypatch):
        _write(clean_env / "gvm" / "config.yml", "pointer: launcher\ncatalog_limit: 10\n")
        monkeypatch.setenv("GVM_POINTER", "symlink")
        monkeypatch.setenv("GVM_CATALOG_LIMIT", "5")
        config = load_config()
        assert config.pointer == "symlink"
        assert config.catalog_limit == 5

    def test_bool_and_path(self, clean_env: Path, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("GVM_STRICT_VERSION_PARSING", "true")
        monkeypatch.setenv("GVM_ROOT", str(tmp_path / "r"))
        config = load_config()
        assert config.strict_version_parsing is True
        assert config.root == tmp_path / "r"

    def test_invalid_env_value(self, clean_env: Path, monkeypatch):
        monkeypatch.setenv("GVM_CATALOG_LIMIT", "zero")
        with pytest.raises(ConfigError):
            load_config()
