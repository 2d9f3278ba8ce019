"""Set up the data."""

import logging
from pathlib import Path

from pydantic_yaml import parse_yaml_file_as

from .models import GameRules

__all__ = ["data_path", "base_rules", "load_rules", "load_all_rules"]

logger = logging.getLogger(__name__)

data_path = Path(__file__).parent


def load_rules(path: Path | str) -> GameRules:
    """Load game rules from a YAML file."""
    return parse_yaml_file_as(GameRules, Path(path))


def load_all_rules(folder: Path | str) -> list[GameRules]:
    """Load all rule files in a folder, skipping ones that fail to parse."""
    res: list[GameRules] = []
    for yml_path in sorted(Path(folder).rglob("*.yaml")):
        try:
            res.append(load_rules(yml_path))
        except Exception:
            logger.warning(f"Failed to load file as rules: {yml_path!s}")
    return res


base_rules = load_rules(data_path / "base_game.yaml")
