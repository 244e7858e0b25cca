"""
Configuration constants for the favourites store.
"""

import os
from pathlib import Path

# Subdirectory created under the caller-supplied base directory
FAVORITES_DIRNAME = "Favorites"

# Database file inside FAVORITES_DIRNAME
DB_FILE = "favorites.sqlite"

# Environment variable naming the base directory (used by the CLI only;
# the service always receives its base directory from the caller)
BASE_DIR_ENV_VAR = "STOL_FAVORITES_BASE_DIR"

_APP_DIRNAME = "stol"


def default_base_dir() -> Path:
    """Return the platform-appropriate application data directory."""
    if os.name == "nt":
        base = Path(os.environ.get("APPDATA", str(Path.home() / "AppData" / "Roaming")))
        return base / _APP_DIRNAME

    xdg = os.environ.get("XDG_DATA_HOME", "").strip()
    if xdg:
        return Path(xdg) / _APP_DIRNAME
    return Path.home() / ".local" / "share" / _APP_DIRNAME


def resolve_base_dir(explicit: str | None = None) -> Path:
    """Resolve the base directory: explicit value, then env var, then default."""
    if explicit and explicit.strip():
        return Path(explicit.strip()).expanduser()

    env_value = os.environ.get(BASE_DIR_ENV_VAR, "").strip()
    if env_value:
        return Path(env_value).expanduser()

    return default_base_dir()
