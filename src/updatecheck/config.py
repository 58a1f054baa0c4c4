"""
Configuration management for updatecheck.

Uses XDG base directories:
- Config: ~/.config/updatecheck/config.toml
- Ledger: ~/.config/updatecheck/<application>-update
"""

from pathlib import Path
from typing import Any
import logging
import os

from updatecheck.errors import ConfigDirUnavailable

# Environment overrides
DISABLE_ENV = "UPDATECHECK_DISABLE_UPDATE_CHECK"
URL_ENV = "UPDATECHECK_URL"

logger = logging.getLogger(__name__)


def get_config_dir() -> Path:
    """Get the config directory (XDG_CONFIG_HOME/updatecheck)."""
    if env_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(env_home) / "updatecheck"
    try:
        home = Path.home()
    except RuntimeError as e:
        raise ConfigDirUnavailable(f"cannot resolve home directory: {e}") from e
    return home / ".config" / "updatecheck"


def get_config_path() -> Path:
    """Get the path to config.toml."""
    return get_config_dir() / "config.toml"


def ensure_config_dir() -> Path:
    """Ensure the config directory exists and return it."""
    config_dir = get_config_dir()
    try:
        config_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigDirUnavailable(f"cannot create {config_dir}: {e}") from e
    return config_dir


def is_disabled() -> bool:
    """True when the kill switch env var is the literal string "true"."""
    return os.environ.get(DISABLE_ENV) == "true"


def load_config() -> dict[str, Any]:
    """
    Load configuration from config.toml.

    Returns default config if the file doesn't exist or can't be parsed.
    Values found in the file are layered over the defaults; UPDATECHECK_URL
    wins over both.
    """
    config = get_default_config()
    config_path = get_config_path()

    if config_path.exists():
        # Lazy import tomli only when needed
        import tomli

        try:
            with open(config_path, "rb") as f:
                data = tomli.load(f)
        except (OSError, tomli.TOMLDecodeError) as e:
            logger.debug(f"ignoring unreadable {config_path}: {e}")
            data = {}
        config["updatecheck"].update(data.get("updatecheck", {}))

    if env_url := os.environ.get(URL_ENV):
        config["updatecheck"]["url"] = env_url

    return config


def get_default_config() -> dict[str, Any]:
    """Return default configuration."""
    return {
        "updatecheck": {
            "url": None,  # None selects the dev/prod endpoint
            "timeout": 5.0,
        },
    }
