# config_manager.py - JSON config manager

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

ENV_VAR = "HISTORY_HEATMAP_CONFIG"
DEFAULT_PATH = Path("~/.config/history-heatmap/config.json")

DEFAULTS = {
    "count": 10,          # rows in the report
    "mode": "fuzzy",      # fuzzy | exact | heat
    "bar_width": 8,       # heat bar cells
    "flavor": None,       # zsh | bash | fish, None = detect from $SHELL
    "history_file": None,
}


class ConfigError(ValueError):
    """Raised for unreadable config files and bad option values."""


def default_path():
    return Path(os.environ.get(ENV_VAR) or DEFAULT_PATH).expanduser()


class Config:
    def __init__(self, path=None):
        self.path = Path(path).expanduser() if path else default_path()
        self.data = dict(DEFAULTS)
        self._load()

    def _load(self):
        # a missing file just means defaults
        if not self.path.exists():
            return
        try:
            with open(self.path, "r", encoding="utf8") as f:
                loaded = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Unable to read config {self.path}: {e}") from e
        if not isinstance(loaded, dict):
            raise ConfigError(f"Config {self.path} must contain a JSON object")
        for k, v in loaded.items():
            if k not in DEFAULTS:
                logger.warning("ignoring unknown config key %r in %s", k, self.path)
                continue
            self.set(k, v, save=False)

    def save(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2)

    def get(self, key):
        return self.data[key]

    def set(self, key, val, save=True):
        if key not in DEFAULTS:
            raise ConfigError(f"No such option: {key}")
        default = DEFAULTS[key]
        if isinstance(default, int):
            # json true / 3.7 would silently become 1 / 3
            if val is None or isinstance(val, (bool, float)):
                raise ConfigError(f"{key} must be a non-negative integer, got {val!r}")
            try:
                val = int(val)
            except (TypeError, ValueError):
                raise ConfigError(f"Bad value for {key}: {val!r}") from None
            if val < 0:
                raise ConfigError(f"{key} must be a non-negative integer")
        elif default is None:
            if val is not None and not isinstance(val, str):
                raise ConfigError(f"{key} must be a string or null, got {val!r}")
        elif not isinstance(val, str):
            raise ConfigError(f"{key} must be a string, got {val!r}")
        self.data[key] = val
        if save:
            self.save()

    def __getitem__(self, key):
        return self.data[key]
