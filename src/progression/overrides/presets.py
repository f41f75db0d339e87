"""Armor and loyalty preset loading from YAML files"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..core.config import PRESETS_DIR
from ..core.errors import PresetError
from ..host.models import GenerationData, MinMax, NighttimeChanges, RandomisationDetails

logger = logging.getLogger(__name__)

PLATE_POSITIONS = ("front_plate", "back_plate", "left_side_plate", "right_side_plate")
BRACKET_COUNT = 6


@dataclass
class ArmorBracket:
    """Level range and optional plate weights for one weighting slot"""

    level_range: MinMax
    plates: Optional[Dict[str, Dict[str, float]]] = None


@dataclass
class ArmorPreset:
    name: str
    description: str
    brackets: List[ArmorBracket]


def _mapping(raw: Any, where: str) -> Dict[Any, Any]:
    """Return raw as a dict, treating None as empty"""
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise PresetError(f"{where}: expected a mapping, got {type(raw).__name__}")
    return raw


def _weights(raw: Any, where: str, key=str) -> Dict[Any, float]:
    try:
        return {key(k): float(v) for k, v in _mapping(raw, where).items()}
    except (TypeError, ValueError) as e:
        raise PresetError(f"{where}: weights must be numbers ({e})") from e


def _level_range(raw: Any, where: str) -> MinMax:
    if not isinstance(raw, list) or len(raw) != 2 or not all(isinstance(v, int) for v in raw):
        raise PresetError(f"{where}: level_range must be [min, max]")
    low, high = raw
    if low > high:
        raise PresetError(f"{where}: level_range min {low} is above max {high}")
    return MinMax(low, high)


def _plates(raw: Any, where: str) -> Optional[Dict[str, Dict[str, float]]]:
    if raw is None:
        return None
    if not isinstance(raw, dict) or set(raw) != set(PLATE_POSITIONS):
        raise PresetError(f"{where}: plates must define {', '.join(PLATE_POSITIONS)}")
    # YAML may alias one mapping into several brackets, copy each one
    return {
        position: _weights(weights, f"{where}.{position}")
        for position, weights in raw.items()
    }


def check_brackets(brackets: List[ArmorBracket], where: str) -> None:
    """Brackets must be six ascending, contiguous, non-overlapping ranges"""
    if len(brackets) != BRACKET_COUNT:
        raise PresetError(f"{where}: expected {BRACKET_COUNT} brackets, got {len(brackets)}")
    for previous, current in zip(brackets, brackets[1:]):
        if current.level_range.min != previous.level_range.max + 1:
            raise PresetError(
                f"{where}: bracket starting at {current.level_range.min} does not "
                f"follow bracket ending at {previous.level_range.max}"
            )


def load_armor_preset(preset_path: Path) -> ArmorPreset:
    """Load one armor preset file"""
    with open(preset_path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    where = preset_path.name
    raw = _mapping(raw, where)
    entries = raw.get("brackets") or []
    if not isinstance(entries, list):
        raise PresetError(f"{where}: brackets must be a list")

    brackets = []
    for i, entry in enumerate(entries):
        entry = _mapping(entry, f"{where}[{i}]")
        brackets.append(ArmorBracket(
            level_range=_level_range(entry.get("level_range"), f"{where}[{i}]"),
            plates=_plates(entry.get("plates"), f"{where}[{i}]"),
        ))
    check_brackets(brackets, where)
    return ArmorPreset(
        name=preset_path.stem,
        description=raw.get("description", ""),
        brackets=brackets,
    )


def load_armor_presets(presets_dir: Path = PRESETS_DIR / "armor") -> Dict[str, ArmorPreset]:
    """Load all armor presets from a directory"""
    presets_path = Path(presets_dir)
    presets = {}

    if not presets_path.exists():
        logger.warning(f"Armor preset directory not found: {presets_path}")
        return presets

    for yaml_file in sorted(presets_path.glob("*.yaml")):
        preset = load_armor_preset(yaml_file)
        presets[preset.name] = preset
        logger.debug(f"Loaded armor preset: {preset.name}")

    return presets


def _generation(raw: Any, where: str) -> Dict[str, GenerationData]:
    generation = {}
    for category, data in _mapping(raw, where).items():
        data = _mapping(data, f"{where}.{category}")
        generation[category] = GenerationData(
            weights=_weights(data.get("weights"), f"{where}.{category}.weights", float),
            whitelist=_weights(data.get("whitelist"), f"{where}.{category}.whitelist"),
        )
    return generation


def load_loyalty_profile(profile_path: Path = PRESETS_DIR / "loyalty" / "ll1.yaml") -> RandomisationDetails:
    """Build a RandomisationDetails record from a loyalty profile file"""
    if not Path(profile_path).is_file():
        raise PresetError(f"Loyalty profile not found: {profile_path}")
    with open(profile_path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    where = Path(profile_path).name
    raw = _mapping(raw, where)
    night = _mapping(raw.get("nighttime_changes"), f"{where}.nighttime_changes")
    slots = raw.get("randomised_weapon_mod_slots") or []
    if not isinstance(slots, list):
        raise PresetError(f"{where}: randomised_weapon_mod_slots must be a list")

    return RandomisationDetails(
        level_range=_level_range(raw.get("level_range"), where),
        generation=_generation(raw.get("generation"), f"{where}.generation"),
        equipment=_weights(raw.get("equipment"), f"{where}.equipment"),
        weapon_mods=_weights(raw.get("weapon_mods"), f"{where}.weapon_mods"),
        equipment_mods=_weights(raw.get("equipment_mods"), f"{where}.equipment_mods"),
        randomised_weapon_mod_slots=list(slots),
        nighttime_changes=NighttimeChanges(
            equipment_mods_modifiers=_weights(
                night.get("equipment_mods_modifiers"),
                f"{where}.nighttime_changes.equipment_mods_modifiers",
            )
        ) if night else None,
        minimum_magazine_size=raw.get("minimum_magazine_size"),
    )
