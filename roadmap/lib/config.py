"""
Validation configuration.

Loads roadmap.yaml from a config directory. If no config file exists, returns
defaults: item types are free text and level conventions only produce warnings.

Example roadmap.yaml:

    strict_levels: true
    strict_types: true
    item_types:
      - Objective
      - Key Result
      - Initiative
      - Feature
      - Sub Feature
      - Epic
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from roadmap.lib.constants import ITEM_TYPES

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "roadmap.yaml"


@dataclass
class RoadmapConfig:
    """Validation settings from roadmap.yaml."""
    strict_levels: bool = False     # Level-convention mismatches raise instead of warn
    strict_types: bool = False      # Reject item types outside item_types
    item_types: list[str] = field(default_factory=lambda: list(ITEM_TYPES))


def load_config(config_dir: Optional[Path]) -> RoadmapConfig:
    """Load roadmap.yaml and return RoadmapConfig.

    If config_dir is None or the file doesn't exist, returns defaults.
    """
    if config_dir is None:
        return RoadmapConfig()

    config_path = config_dir / CONFIG_FILENAME
    if not config_path.exists():
        return RoadmapConfig()

    try:
        data = yaml.safe_load(config_path.read_text()) or {}
        if not isinstance(data, dict):
            raise ValueError(f"expected a mapping, got {type(data).__name__}")
        config = RoadmapConfig(
            strict_levels=bool(data.get("strict_levels", False)),
            strict_types=bool(data.get("strict_types", False)),
        )
        if "item_types" in data:
            config.item_types = [str(t) for t in data["item_types"]]
        return config
    except (yaml.YAMLError, ValueError, TypeError) as e:
        logger.warning(f"Failed to parse {config_path}: {e}")
        return RoadmapConfig()
