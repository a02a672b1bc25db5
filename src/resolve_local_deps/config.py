"""Settings for locating the manifest, the store and the installer.

Resolution order (highest priority first):
1. ``RESOLVE_LOCAL_DEPS_INSTALLER`` environment variable (installer only)
2. ``.local-deps.yaml`` in the project root
3. Built-in defaults (``package.json``, ``node_modules``, ``npm``)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

import yaml

from resolve_local_deps.errors import ConfigError

MANIFEST_NAME = "package.json"
STORE_DIR_NAME = "node_modules"
FILE_PREFIX = "file:"
DEFAULT_INSTALLER = "npm"

CONFIG_FILE_NAME = ".local-deps.yaml"
INSTALLER_ENV_VAR = "RESOLVE_LOCAL_DEPS_INSTALLER"

# Keys accepted in .local-deps.yaml, mapped to Settings field names.
_CONFIG_KEYS: dict[str, str] = {
    "installer": "installer",
    "store_dir": "store_dir_name",
    "manifest": "manifest_name",
}


@dataclass(frozen=True)
class Settings:
    manifest_name: str = MANIFEST_NAME
    store_dir_name: str = STORE_DIR_NAME
    installer: str = DEFAULT_INSTALLER


def _read_config_file(path: Path) -> dict[str, str]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(path, f"cannot be read ({exc})") from exc

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(path, f"not valid YAML ({exc})") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(path, "top-level document must be a mapping")

    overrides: dict[str, str] = {}
    for key, field_name in _CONFIG_KEYS.items():
        if key not in data:
            continue
        value = data[key]
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(path, f"'{key}' must be a non-empty string")
        overrides[field_name] = value.strip()
    return overrides


def load_settings(project_root: Path | None = None) -> Settings:
    """Return the effective settings for *project_root*.

    Args:
        project_root: Directory that may contain ``.local-deps.yaml``.
            When None, only the environment and defaults are consulted.

    Raises:
        ConfigError: If the configuration file exists but is malformed.
    """
    settings = Settings()

    if project_root is not None:
        config_path = project_root / CONFIG_FILE_NAME
        if config_path.is_file():
            settings = replace(settings, **_read_config_file(config_path))

    if env_installer := os.environ.get(INSTALLER_ENV_VAR, "").strip():
        settings = replace(settings, installer=env_installer)

    return settings
