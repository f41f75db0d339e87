"""Parsed config.json shapes and the weight-map parse step"""

import math
import re
from dataclasses import dataclass, field
from enum import Enum
from numbers import Real
from typing import Any, Dict, List, Union

ITEM_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")

# settings.activeChances key -> EquipmentFilters attribute
ACTIVE_CHANCE_FIELDS = {
    "faceShieldIsActiveChancePercent": "face_shield_is_active_chance_percent",
    "laserIsActiveChancePercent": "laser_is_active_chance_percent",
    "lightIsActiveDayChancePercent": "light_is_active_day_chance_percent",
    "lightIsActiveNightChancePercent": "light_is_active_night_chance_percent",
    "nvgIsActiveChanceDayPercent": "nvg_is_active_chance_day_percent",
    "nvgIsActiveChanceNightPercent": "nvg_is_active_chance_night_percent",
}


class FactionPolicy(str, Enum):
    """Which PMC factions receive ammo overrides"""

    USEC = "usec"
    BEAR = "bear"
    BOTH = "both"

    def targets(self) -> List[str]:
        if self is FactionPolicy.BOTH:
            return ["usec", "bear"]
        return [self.value]


@dataclass(frozen=True)
class WeightMap:
    """A validated item id -> weight map"""

    key: str
    weights: Dict[str, float]


@dataclass(frozen=True)
class ShapeMismatch:
    """A config entry that is not an item id -> weight map"""

    key: str
    reason: str


WeightMapParse = Union[WeightMap, ShapeMismatch]


def parse_weight_map(key: str, value: Any) -> WeightMapParse:
    """Parse a raw config value into a WeightMap or describe why it is not one"""
    if not isinstance(value, dict):
        return ShapeMismatch(key, f"expected an object, got {type(value).__name__}")

    weights = {}
    for item_id, weight in value.items():
        if not isinstance(item_id, str) or not ITEM_ID_PATTERN.match(item_id):
            return ShapeMismatch(key, f"invalid item id {item_id!r}")
        # bool is a subclass of int
        if isinstance(weight, bool) or not isinstance(weight, Real):
            return ShapeMismatch(key, f"weight for {item_id} is not a number")
        if not math.isfinite(weight):
            return ShapeMismatch(key, f"weight for {item_id} is not finite")
        if weight < 0:
            return ShapeMismatch(key, f"weight for {item_id} is negative")
        weights[item_id] = weight
    return WeightMap(key, weights)


@dataclass
class ModConfig:
    """config.json after structural validation

    Slot and caliber values stay raw until the appliers parse them, so one
    malformed entry never blocks the others.
    """

    pmc_equipment: Dict[str, Any] = field(default_factory=dict)
    pmc_ammo: Dict[str, Any] = field(default_factory=dict)
    settings: Dict[str, Any] = field(default_factory=dict)

    @property
    def ammo_policy(self) -> FactionPolicy:
        return FactionPolicy(self.settings.get("ammoFactions", "usec"))

    @property
    def armor_preset(self) -> str:
        return self.settings.get("armorPreset", "standard")

    @property
    def attach_loyalty_profile(self) -> bool:
        return bool(self.settings.get("attachLoyaltyProfile", False))

    @property
    def level_delta(self) -> Dict[str, int]:
        return self.settings.get("levelDelta", {})

    @property
    def active_chances(self) -> Dict[str, float]:
        return self.settings.get("activeChances", {})
