"""
Configuration — loads settings from .flagshell.yaml, environment variables,
and built-in defaults (in that priority order: CLI args > env > YAML > defaults).
"""

import os

import yaml

from .errors import ConfigError


_DEFAULTS = {
    "editor": "vi",
    "api_base_url": "https://app.launchdarkly.com/api/v2",
    "api_token": "",
    "api_timeout": 30.0,
    "json_output": False,
    "temp_dir": None,
    "log_dir": ".flagshell/logs",
}

# Config file search locations
_CONFIG_FILENAMES = [".flagshell.yaml", ".flagshell.yml"]


def _find_config_file(explicit_path: str | None = None) -> str | None:
    """Find the config file. Checks explicit path, CWD, then user home."""
    if explicit_path:
        if os.path.isfile(explicit_path):
            return explicit_path
        return None

    # Search CWD first, then home directory
    search_dirs = [os.getcwd(), os.path.expanduser("~")]
    for d in search_dirs:
        for name in _CONFIG_FILENAMES:
            path = os.path.join(d, name)
            if os.path.isfile(path):
                return path
    return None


def _load_yaml(path: str) -> dict:
    """Load YAML file.  A file that does not parse raises ConfigError."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid config file {path}: {exc}") from exc
    return data if isinstance(data, dict) else {}


def _default_editor() -> str:
    return os.getenv("VISUAL") or os.getenv("EDITOR") or _DEFAULTS["editor"]


class Config:
    """Application configuration.

    Settings are resolved in priority order:
    1. CLI arguments (handled by caller)
    2. Environment variables
    3. .flagshell.yaml config file
    4. Built-in defaults
    """

    def __init__(self, yaml_data: dict | None = None):
        yd = yaml_data or {}

        # Helper: env var > yaml > default
        def _get(env_key: str, yaml_key: str, default, cast=str):
            env_val = os.getenv(env_key)
            if env_val is not None:
                return cast(env_val)
            yaml_val = yd.get(yaml_key)
            if yaml_val is not None:
                return cast(yaml_val)
            return default

        def _get_bool(env_key: str, yaml_key: str, default: bool) -> bool:
            env_val = os.getenv(env_key)
            if env_val is not None:
                return env_val.lower() == "true"
            yaml_val = yd.get(yaml_key)
            if yaml_val is not None:
                return bool(yaml_val)
            return default

        # $VISUAL / $EDITOR only apply when nothing more specific is set
        self.EDITOR = _get("FLAGSHELL_EDITOR", "editor", _default_editor())

        # REST collaborator: flat api_* keys, or an older nested api: section
        api_section = yd.get("api") if isinstance(yd.get("api"), dict) else {}

        def _get_api(name: str):
            env_val = os.getenv(f"FLAGSHELL_API_{name.upper()}")
            if env_val:
                return env_val
            if yd.get(f"api_{name}") is not None:
                return yd[f"api_{name}"]
            if api_section.get(name) is not None:
                return api_section[name]
            return _DEFAULTS[f"api_{name}"]

        self.API_BASE_URL = _get_api("base_url")
        self.API_TOKEN = _get_api("token")
        timeout = _get_api("timeout")
        try:
            self.API_TIMEOUT = float(timeout)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid api timeout: {timeout!r}") from exc

        # Replaces the old process-wide JSON mode toggle
        self.JSON_OUTPUT = _get_bool("FLAGSHELL_JSON", "json_output",
                                     _DEFAULTS["json_output"])

        self.TEMP_DIR: str | None = _get("FLAGSHELL_TEMP_DIR", "temp_dir",
                                         _DEFAULTS["temp_dir"])
        self.LOG_DIR = _get("FLAGSHELL_LOG_DIR", "log_dir",
                            _DEFAULTS["log_dir"])

    @classmethod
    def load(cls, config_path: str | None = None) -> "Config":
        """Load config from YAML file (if found) + env vars + defaults."""
        path = _find_config_file(config_path)
        yaml_data = _load_yaml(path) if path else {}
        return cls(yaml_data)
