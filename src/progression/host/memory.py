"""In-memory host services and JSON snapshots of host tables

Used to run the plugin outside a server: the developer CLI builds a host
from a snapshot file and tests build one from fixtures.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .models import (
    ArmorPlateWeights,
    BotConfig,
    BotInventory,
    Bots,
    BotType,
    EquipmentFilters,
    EquipmentSlot,
    GenerationData,
    MinMax,
    NighttimeChanges,
    PmcConfig,
    RandomisationDetails,
)
from .services import ConfigServer, DatabaseService, ModHelper

logger = logging.getLogger(__name__)

# EquipmentFilters attribute -> host JSON key
CHANCE_KEYS = {
    "face_shield_is_active_chance_percent": "faceShieldIsActiveChancePercent",
    "laser_is_active_chance_percent": "laserIsActiveChancePercent",
    "light_is_active_day_chance_percent": "lightIsActiveDayChancePercent",
    "light_is_active_night_chance_percent": "lightIsActiveNightChancePercent",
    "nvg_is_active_chance_day_percent": "nvgIsActiveChanceDayPercent",
    "nvg_is_active_chance_night_percent": "nvgIsActiveChanceNightPercent",
}


class InMemoryDatabaseService(DatabaseService):
    def __init__(self, bots: Bots):
        self.bots = bots

    def get_bots(self) -> Bots:
        return self.bots


class InMemoryConfigServer(ConfigServer):
    def __init__(self, configs: Dict[str, Any]):
        self.configs = configs

    def get_config(self, name: str) -> Any:
        if name not in self.configs:
            raise KeyError(f"No config registered as {name!r}")
        return self.configs[name]


class FileModHelper(ModHelper):
    """Resolves the mod folder to a fixed directory and reads JSON from disk"""

    def __init__(self, mod_root: Path):
        self.mod_root = Path(mod_root).resolve()

    def get_absolute_path_to_mod_folder(self) -> Path:
        return self.mod_root

    def get_json_data_from_file(self, base_dir: Path, file_name: str) -> Dict[str, Any]:
        with open(Path(base_dir) / file_name, "r", encoding="utf-8") as f:
            return json.load(f)


@dataclass
class HostSnapshot:
    """The host tables the plugin touches"""

    bots: Bots = field(default_factory=Bots)
    bot_config: BotConfig = field(default_factory=BotConfig)
    pmc_config: PmcConfig = field(default_factory=PmcConfig)

    def database(self) -> InMemoryDatabaseService:
        return InMemoryDatabaseService(self.bots)

    def config_server(self) -> InMemoryConfigServer:
        return InMemoryConfigServer({"bot": self.bot_config, "pmc": self.pmc_config})


def _min_max(raw: Dict[str, Any]) -> MinMax:
    return MinMax(int(raw["min"]), int(raw["max"]))


def _weights(raw: Optional[Dict[str, Any]]) -> Dict[str, float]:
    return {str(k): v for k, v in (raw or {}).items()}


def bot_type_from_dict(raw: Dict[str, Any]) -> BotType:
    inventory = raw.get("inventory") or {}
    equipment = {}
    for slot_name, pool in (inventory.get("equipment") or {}).items():
        try:
            equipment[EquipmentSlot(slot_name)] = _weights(pool)
        except ValueError:
            logger.warning(f"Ignoring unknown equipment slot in snapshot: {slot_name}")
    ammo = {caliber: _weights(pool) for caliber, pool in (inventory.get("Ammo") or {}).items()}
    return BotType(bot_inventory=BotInventory(equipment=equipment, ammo=ammo))


def randomisation_from_dict(raw: Dict[str, Any]) -> RandomisationDetails:
    night = raw.get("nighttimeChanges")
    return RandomisationDetails(
        level_range=_min_max(raw["levelRange"]),
        generation={
            category: GenerationData(
                weights={float(k): v for k, v in (data.get("weights") or {}).items()},
                whitelist=_weights(data.get("whitelist")),
            )
            for category, data in (raw.get("generation") or {}).items()
        },
        equipment=dict(raw.get("equipment") or {}),
        weapon_mods=dict(raw.get("weaponMods") or {}),
        equipment_mods=dict(raw.get("equipmentMods") or {}),
        randomised_weapon_mod_slots=list(raw.get("randomisedWeaponModSlots") or []),
        nighttime_changes=NighttimeChanges(
            equipment_mods_modifiers=dict(night.get("equipmentModsModifiers") or {})
        ) if night else None,
        minimum_magazine_size=raw.get("minimumMagazineSize"),
    )


def equipment_filters_from_dict(raw: Dict[str, Any]) -> EquipmentFilters:
    filters = EquipmentFilters()
    if raw.get("armorPlateWeighting") is not None:
        filters.armor_plate_weighting = [
            ArmorPlateWeights(
                level_range=_min_max(entry["levelRange"]),
                values={position: _weights(w) for position, w in (entry.get("values") or {}).items()},
            )
            for entry in raw["armorPlateWeighting"]
        ]
    if raw.get("randomisation") is not None:
        filters.randomisation = [randomisation_from_dict(r) for r in raw["randomisation"]]
    for attr, key in CHANCE_KEYS.items():
        setattr(filters, attr, raw.get(key))
    return filters


def snapshot_from_dict(data: Dict[str, Any]) -> HostSnapshot:
    """Build host tables from a snapshot document"""
    bots = Bots(types={name: bot_type_from_dict(raw) for name, raw in (data.get("bots") or {}).items()})

    configs = data.get("configs") or {}
    bot_raw = configs.get("bot") or {}
    bot_config = BotConfig(
        equipment={
            role: equipment_filters_from_dict(raw) if raw is not None else None
            for role, raw in (bot_raw.get("equipment") or {}).items()
        }
    )
    pmc_raw = configs.get("pmc") or {}
    pmc_config = PmcConfig(
        bot_relative_level_delta_min=pmc_raw.get("botRelativeLevelDeltaMin", 0),
        bot_relative_level_delta_max=pmc_raw.get("botRelativeLevelDeltaMax", 0),
    )
    return HostSnapshot(bots=bots, bot_config=bot_config, pmc_config=pmc_config)


def load_snapshot(snapshot_path: Path) -> HostSnapshot:
    with open(snapshot_path, "r", encoding="utf-8") as f:
        return snapshot_from_dict(json.load(f))


def _randomisation_to_dict(details: RandomisationDetails) -> Dict[str, Any]:
    result = {
        "levelRange": {"min": details.level_range.min, "max": details.level_range.max},
        "generation": {
            category: {
                "weights": {_number_key(k): v for k, v in data.weights.items()},
                "whitelist": dict(data.whitelist),
            }
            for category, data in details.generation.items()
        },
        "equipment": dict(details.equipment),
        "weaponMods": dict(details.weapon_mods),
        "equipmentMods": dict(details.equipment_mods),
        "randomisedWeaponModSlots": list(details.randomised_weapon_mod_slots),
        "minimumMagazineSize": details.minimum_magazine_size,
    }
    if details.nighttime_changes is not None:
        result["nighttimeChanges"] = {
            "equipmentModsModifiers": dict(details.nighttime_changes.equipment_mods_modifiers)
        }
    return result


def _number_key(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def _filters_to_dict(filters: EquipmentFilters) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    if filters.armor_plate_weighting is not None:
        result["armorPlateWeighting"] = [
            {
                "levelRange": {"min": w.level_range.min, "max": w.level_range.max},
                "values": {position: dict(v) for position, v in w.values.items()},
            }
            for w in filters.armor_plate_weighting
        ]
    if filters.randomisation is not None:
        result["randomisation"] = [_randomisation_to_dict(r) for r in filters.randomisation]
    for attr, key in CHANCE_KEYS.items():
        value = getattr(filters, attr)
        if value is not None:
            result[key] = value
    return result


def snapshot_to_dict(snapshot: HostSnapshot) -> Dict[str, Any]:
    """Serialize host tables back into the snapshot document layout"""
    bots: Dict[str, Any] = {}
    for name, bot in snapshot.bots.types.items():
        bots[name] = {
            "inventory": {
                "equipment": {slot.value: dict(pool) for slot, pool in bot.bot_inventory.equipment.items()},
                "Ammo": {caliber: dict(pool) for caliber, pool in bot.bot_inventory.ammo.items()},
            }
        }
    equipment: Dict[str, Optional[Dict[str, Any]]] = {
        role: _filters_to_dict(filters) if filters is not None else None
        for role, filters in snapshot.bot_config.equipment.items()
    }
    return {
        "bots": bots,
        "configs": {
            "bot": {"equipment": equipment},
            "pmc": {
                "botRelativeLevelDeltaMin": snapshot.pmc_config.bot_relative_level_delta_min,
                "botRelativeLevelDeltaMax": snapshot.pmc_config.bot_relative_level_delta_max,
            },
        },
    }


def write_snapshot(snapshot: HostSnapshot, output_path: Path) -> None:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(snapshot_to_dict(snapshot), f, indent=2)


def empty_armor_weighting(count: int = 6) -> List[ArmorPlateWeights]:
    """Placeholder brackets shaped like the host default table"""
    return [ArmorPlateWeights(level_range=MinMax(0, 0)) for _ in range(count)]
