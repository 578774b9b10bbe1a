# ==========================================
# CONFIGURATION
# ==========================================
"""
Bundle options and project config loading.

A project may keep its options in a luapack.json next to the entry file:

    {
      "search_roots": [".", "vendor"],
      "module_extension": ".lua",
      "max_modules": 500,
      "externals": ["json", ".process"]
    }
"""
import json
import os
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigError
from .resolver import DEFAULT_EXTENSION

CONFIG_FILE = "luapack.json"
USER_CONFIG = os.path.join("~", ".luapack", "config.json")


class BundleOptions(BaseModel):
    """Options for one bundle() call."""
    search_roots: List[str] = Field(default_factory=list)
    module_extension: str = DEFAULT_EXTENSION
    max_modules: Optional[int] = Field(default=None, ge=1)
    externals: List[str] = Field(default_factory=list)

    @field_validator('module_extension')
    @classmethod
    def _dotted_extension(cls, value):
        value = value.strip()
        if not value or value == '.':
            raise ValueError("module_extension cannot be empty")
        return value if value.startswith('.') else '.' + value

    def roots_for(self, entrypoint):
        """Configured search roots, or the entry file's directory by default."""
        if self.search_roots:
            return [os.path.abspath(root) for root in self.search_roots]
        return [os.path.dirname(os.path.abspath(entrypoint))]


def config_paths(entrypoint):
    """Places a project config is looked up, first found wins."""
    entry_dir = os.path.dirname(os.path.abspath(entrypoint))
    return [os.path.join(entry_dir, CONFIG_FILE), os.path.expanduser(USER_CONFIG)]


def read_config_file(path):
    """Load one luapack.json, resolving relative search roots against its directory."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot load config: {e}", path=path) from e

    if not isinstance(data, dict):
        raise ConfigError("Config must be a JSON object", path=path)

    base_dir = os.path.dirname(os.path.abspath(path))
    roots = data.get("search_roots")
    if isinstance(roots, list):
        data["search_roots"] = [
            os.path.normpath(os.path.join(base_dir, os.path.expanduser(root)))
            if isinstance(root, str) else root
            for root in roots
        ]
    return data


def load_options(entrypoint, overrides=None):
    """
    Build BundleOptions for an entry file.

    Values from the first config file found are applied first, then any
    non-empty overrides (typically CLI flags).

    Raises:
        ConfigError: If the config file or an override is invalid
    """
    values = {}
    source = None
    for path in config_paths(entrypoint):
        if os.path.isfile(path):
            values = read_config_file(path)
            source = path
            break

    for key, value in (overrides or {}).items():
        if value is None or value == []:
            continue
        values[key] = value

    try:
        return BundleOptions(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid bundle options: {e}", path=source) from e
