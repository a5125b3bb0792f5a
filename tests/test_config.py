"""Tests for finvue.config."""

import os
import stat
from pathlib import Path

import pytest

from finvue.config import (
    create_default_config,
    get_config_path,
    get_currency_symbol,
    load_config,
    resolve_db_path,
    resolve_export_dir,
    save_config,
)


class TestLoadConfig:
    """Tests for load_config and save_config."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        """Should fall back to defaults when there is no file."""
        config = load_config(tmp_path / "missing.toml")

        assert config == {"currency_symbol": "$"}

    def test_round_trip(self, tmp_path: Path) -> None:
        """Saved values load back over the defaults."""
        path = tmp_path / "finvue" / "config.toml"
        save_config({"currency_symbol": "£", "export_dir": "~/exports"}, path)

        config = load_config(path)

        assert config["currency_symbol"] == "£"
        assert config["export_dir"] == "~/exports"

    def test_secure_permissions(self, tmp_path: Path) -> None:
        """Config files are only readable by the owner."""
        path = tmp_path / "config.toml"
        create_default_config(path)

        assert stat.S_IMODE(os.stat(path).st_mode) == 0o600

    def test_invalid_toml_raises_valueerror(self, tmp_path: Path) -> None:
        """Malformed files surface as ValueError."""
        path = tmp_path / "config.toml"
        path.write_text("currency_symbol = ")

        with pytest.raises(ValueError):
            load_config(path)


class TestResolvers:
    """Tests for config value resolution."""

    def test_db_path_override(self, tmp_path: Path) -> None:
        """An explicit database path wins."""
        assert resolve_db_path({"database": str(tmp_path / "x.db")}) == tmp_path / "x.db"

    def test_db_path_default_follows_xdg(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without an override the XDG data directory is used."""
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

        assert resolve_db_path({}) == tmp_path / "finvue" / "finvue.db"

    def test_config_path_follows_xdg(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """The config file lives under XDG_CONFIG_HOME."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert get_config_path() == tmp_path / "finvue" / "config.toml"

    def test_export_dir_default_is_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Exports default to the working directory."""
        monkeypatch.chdir(tmp_path)

        assert resolve_export_dir({}) == tmp_path

    def test_currency_symbol_fallback(self) -> None:
        """Blank symbols fall back to the default."""
        assert get_currency_symbol({"currency_symbol": ""}) == "$"
        assert get_currency_symbol({"currency_symbol": "€"}) == "€"
