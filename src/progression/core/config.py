"""Core configuration loading and merging"""

import hashlib
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigLoadError
from ..host.services import ModHelper
from ..overrides.schema import ACTIVE_CHANCE_FIELDS, FactionPolicy, ModConfig

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent.parent
PRESETS_DIR = PACKAGE_DIR / "presets"
DEFAULTS_PATH = PRESETS_DIR / "defaults.yaml"
CONFIG_FILE_NAME = "config.json"

SECTIONS = {
    "pmcEquipment": "pmc_equipment",
    "pmcAmmo": "pmc_ammo",
    "settings": "settings",
}


def load_config(config_path: Path) -> Dict[str, Any]:
    """Load YAML configuration from file"""
    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge override config into base config"""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value
    return result


def validate_config(settings: Dict[str, Any]) -> None:
    """Validate merged settings, raising ConfigLoadError on bad values"""
    policy = settings.get("ammoFactions")
    try:
        FactionPolicy(policy)
    except ValueError:
        choices = ", ".join(p.value for p in FactionPolicy)
        raise ConfigLoadError(f"settings.ammoFactions must be one of {choices}, got {policy!r}")

    if not isinstance(settings.get("armorPreset"), str):
        raise ConfigLoadError("settings.armorPreset must be a string")

    if not isinstance(settings.get("attachLoyaltyProfile"), bool):
        raise ConfigLoadError("settings.attachLoyaltyProfile must be true or false")

    delta = settings.get("levelDelta")
    if not isinstance(delta, dict):
        raise ConfigLoadError("settings.levelDelta must be an object")
    for bound in ("min", "max"):
        value = delta.get(bound)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigLoadError(f"settings.levelDelta.{bound} must be an integer")

    chances = settings.get("activeChances")
    if not isinstance(chances, dict):
        raise ConfigLoadError("settings.activeChances must be an object")
    for name, value in chances.items():
        if name not in ACTIVE_CHANCE_FIELDS:
            known = ", ".join(ACTIVE_CHANCE_FIELDS)
            raise ConfigLoadError(f"settings.activeChances.{name} is not one of {known}")
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0 <= value <= 100:
            raise ConfigLoadError(f"settings.activeChances.{name} must be a percentage")


def config_fingerprint(data: Dict[str, Any]) -> str:
    """Short stable hash of a loaded document"""
    s = json.dumps(data, sort_keys=True)
    return hashlib.sha256(s.encode()).hexdigest()[:8]


def parse_mod_config(
    data: Any, defaults: Optional[Dict[str, Any]] = None
) -> ModConfig:
    """Build a ModConfig from a deserialized config.json document"""
    if not isinstance(data, dict):
        raise ConfigLoadError(f"{CONFIG_FILE_NAME} must contain a JSON object")

    sections = {}
    for json_key, attr in SECTIONS.items():
        value = data.get(json_key)
        if value is None:
            value = {}
        if not isinstance(value, dict):
            raise ConfigLoadError(f"{json_key} must be an object, got {type(value).__name__}")
        sections[attr] = value

    unknown = sorted(set(data) - set(SECTIONS))
    if unknown:
        logger.warning(f"Ignoring unknown config keys: {unknown}")

    if defaults is None:
        defaults = load_config(DEFAULTS_PATH)
    sections["settings"] = merge_configs(defaults, sections["settings"])
    validate_config(sections["settings"])

    return ModConfig(**sections)


def load_mod_config(
    mod_helper: ModHelper, base_dir: Path, file_name: str = CONFIG_FILE_NAME
) -> ModConfig:
    """Load and parse config.json through the host's JSON helper"""
    try:
        data = mod_helper.get_json_data_from_file(base_dir, file_name)
    except (OSError, ValueError) as e:
        raise ConfigLoadError(f"Could not read {Path(base_dir) / file_name}: {e}") from e

    config = parse_mod_config(data)
    logger.info(
        f"Loaded {file_name} (fingerprint {config_fingerprint(data)}): "
        f"{len(config.pmc_equipment)} equipment slots, {len(config.pmc_ammo)} calibers"
    )
    return config
