#!/usr/bin/env python3
"""
Tool configuration.

Settings live in an optional YAML file:

```yaml
log_level: warning
resx_import_state: initial
xliff_default_state: initial
include_comments: true
```

Lookup order: explicit path, MUIDB_CONFIG environment variable, muidb.yaml in
the working directory. A missing file means defaults.
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from .errors import ConfigError
from .logger import LEVELS, get_logger

logger = get_logger(__name__)

CONFIG_ENV_VAR = "MUIDB_CONFIG"
DEFAULT_CONFIG_FILE = "muidb.yaml"


@dataclass
class MuiDBConfig:
    """Resolved configuration values."""
    log_level: str = "warning"
    resx_import_state: str = "initial"
    xliff_default_state: str = "initial"
    include_comments: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MuiDBConfig":
        """Create from a parsed YAML mapping, validating value types."""
        known = {f.name: f for f in fields(cls)}
        values = {}
        for key, value in data.items():
            if key not in known:
                logger.debug("ignoring unknown config key '%s'", key)
                continue
            expected = bool if known[key].type in (bool, "bool") else str
            if not isinstance(value, expected):
                raise ConfigError(
                    f"config key '{key}' must be a {expected.__name__}, got {type(value).__name__}",
                    details={"key": key},
                )
            values[key] = value

        config = cls(**values)
        if config.log_level.lower() not in LEVELS:
            raise ConfigError(
                f"config key 'log_level' must be one of {', '.join(LEVELS)}",
                details={"key": "log_level"},
            )
        return config


def find_config_file(path: Optional[str] = None) -> Optional[Path]:
    """Resolve which config file applies, or None when there is none."""
    if path:
        return Path(path)

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    local = Path.cwd() / DEFAULT_CONFIG_FILE
    if local.exists():
        return local
    return None


def load_config(path: Optional[str] = None) -> MuiDBConfig:
    """
    Load configuration.

    Args:
        path: Explicit config file; must exist when given

    Returns:
        MuiDBConfig with defaults for every key the file does not set
    """
    config_path = find_config_file(path)
    if config_path is None:
        return MuiDBConfig()

    with config_path.open(encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid config file {config_path}: {e}") from e

    if data is None:
        return MuiDBConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"config file {config_path} must contain a mapping")

    logger.debug("loaded config from %s", config_path)
    return MuiDBConfig.from_dict(data)
