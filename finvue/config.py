"""Configuration file management for finvue."""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from finvue.store.schema import get_db_path

DEFAULT_CURRENCY_SYMBOL = "$"


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "finvue" / "config.toml"


def default_config() -> dict[str, Any]:
    return {"currency_symbol": DEFAULT_CURRENCY_SYMBOL}


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    save_config(default_config(), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary, with defaults filled in for missing keys.
        A missing file yields the defaults.

    Raises:
        ValueError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    config = default_config()
    if not config_path.exists():
        return config

    with open(config_path, "rb") as f:
        try:
            config.update(tomllib.load(f))
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid config file {config_path}: {e}") from e

    return config


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def resolve_db_path(config: dict[str, Any]) -> Path:
    """Database path from config, falling back to the XDG default."""
    database = config.get("database")
    if database:
        return Path(str(database)).expanduser()
    return get_db_path()


def resolve_export_dir(config: dict[str, Any]) -> Path:
    """Export directory from config, falling back to the working directory."""
    export_dir = config.get("export_dir")
    if export_dir:
        return Path(str(export_dir)).expanduser()
    return Path.cwd()


def get_currency_symbol(config: dict[str, Any]) -> str:
    return str(config.get("currency_symbol") or DEFAULT_CURRENCY_SYMBOL)
