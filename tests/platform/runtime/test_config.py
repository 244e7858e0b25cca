"""Tests for base-directory resolution in stol_platform.runtime.config."""

from pathlib import Path

from stol_platform.runtime import config
from stol_platform.runtime.config import (
    BASE_DIR_ENV_VAR,
    DB_FILE,
    FAVORITES_DIRNAME,
    default_base_dir,
    resolve_base_dir,
)


def test_storage_names():
    assert FAVORITES_DIRNAME == "Favorites"
    assert DB_FILE == "favorites.sqlite"


def test_explicit_value_wins(monkeypatch, tmp_path):
    monkeypatch.setenv(BASE_DIR_ENV_VAR, str(tmp_path / "from-env"))
    assert resolve_base_dir(str(tmp_path / "explicit")) == tmp_path / "explicit"


def test_env_var_used_when_no_explicit_value(monkeypatch, tmp_path):
    monkeypatch.setenv(BASE_DIR_ENV_VAR, str(tmp_path / "from-env"))
    assert resolve_base_dir(None) == tmp_path / "from-env"
    assert resolve_base_dir("   ") == tmp_path / "from-env"


def test_falls_back_to_platform_default(monkeypatch):
    monkeypatch.delenv(BASE_DIR_ENV_VAR, raising=False)
    assert resolve_base_dir() == default_base_dir()


def test_default_honours_xdg_data_home(monkeypatch, tmp_path):
    monkeypatch.setattr(config.os, "name", "posix")
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
    assert default_base_dir() == tmp_path / "stol"


def test_default_without_xdg(monkeypatch):
    monkeypatch.setattr(config.os, "name", "posix")
    monkeypatch.delenv("XDG_DATA_HOME", raising=False)
    assert default_base_dir() == Path.home() / ".local" / "share" / "stol"
