"""
YAML overrides for GameConfig (see configs/).
"""

import dataclasses
import yaml
from pathlib import Path
from typing import Optional

from .game_config import GameConfig, default_config


def load_config_from_yaml(config_path: str) -> GameConfig:
    """
    Build a GameConfig from the keys present in a YAML file; absent keys keep
    their defaults and unknown keys are reported and skipped.

    Raises:
        FileNotFoundError: no file at ``config_path``
        yaml.YAMLError: malformed YAML
        ValueError: a timer that is not a positive integer, or a bad cupid pair
    """
    path = Path(config_path)
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    overrides = yaml.safe_load(path.read_text()) or {}

    fields = {f.name for f in dataclasses.fields(GameConfig)}
    for key in sorted(set(overrides) - fields):
        print(f"Warning: ignoring unknown config key '{key}' in {path.name}")

    # Validation lives in GameConfig.__post_init__
    return GameConfig(**{k: v for k, v in overrides.items() if k in fields})


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """The YAML config at ``config_path``, or the defaults when no path is given."""
    if config_path is None:
        return default_config
    return load_config_from_yaml(config_path)
