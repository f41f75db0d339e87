"""Host data shapes touched by the plugin

Only the fields the plugin reads or writes are mirrored here. The host owns
and allocates every instance; the plugin mutates them in place.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class EquipmentSlot(str, Enum):
    """Gear slots on a bot loadout"""

    HEADWEAR = "Headwear"
    EARPIECE = "Earpiece"
    FACE_COVER = "FaceCover"
    ARMOR_VEST = "ArmorVest"
    EYEWEAR = "Eyewear"
    ARM_BAND = "ArmBand"
    TACTICAL_VEST = "TacticalVest"
    POCKETS = "Pockets"
    BACKPACK = "Backpack"
    SECURED_CONTAINER = "SecuredContainer"
    FIRST_PRIMARY_WEAPON = "FirstPrimaryWeapon"
    SECOND_PRIMARY_WEAPON = "SecondPrimaryWeapon"
    HOLSTER = "Holster"
    SCABBARD = "Scabbard"


class AmmoCaliber(str, Enum):
    """Caliber buckets keying a bot's ammo table"""

    CALIBER_40X46 = "Caliber40x46"
    CALIBER_127X55 = "Caliber127x55"
    CALIBER_86X70 = "Caliber86x70"
    CALIBER_762X54R = "Caliber762x54R"
    CALIBER_762X51 = "Caliber762x51"
    CALIBER_762X39 = "Caliber762x39"
    CALIBER_762X35 = "Caliber762x35"
    CALIBER_762X25TT = "Caliber762x25TT"
    CALIBER_68X51 = "Caliber68x51"
    CALIBER_366TKM = "Caliber366TKM"
    CALIBER_556X45NATO = "Caliber556x45NATO"
    CALIBER_545X39 = "Caliber545x39"
    CALIBER_57X28 = "Caliber57x28"
    CALIBER_46X30 = "Caliber46x30"
    CALIBER_9X18PM = "Caliber9x18PM"
    CALIBER_9X19PARA = "Caliber9x19PARA"
    CALIBER_9X21 = "Caliber9x21"
    CALIBER_9X39 = "Caliber9x39"
    CALIBER_9X33R = "Caliber9x33R"
    CALIBER_1143X23ACP = "Caliber1143x23ACP"
    CALIBER_12G = "Caliber12g"
    CALIBER_23X75 = "Caliber23x75"


# item id -> selection weight
WeightMap = Dict[str, float]


@dataclass
class BotInventory:
    equipment: Dict[EquipmentSlot, WeightMap] = field(default_factory=dict)
    ammo: Dict[str, WeightMap] = field(default_factory=dict)


@dataclass
class BotType:
    bot_inventory: BotInventory = field(default_factory=BotInventory)


@dataclass
class Bots:
    """Faction-keyed bot table"""

    types: Dict[str, BotType] = field(default_factory=dict)


@dataclass
class MinMax:
    min: int
    max: int


@dataclass
class ArmorPlateWeights:
    """Plate class weights for one level range"""

    level_range: MinMax
    values: Dict[str, Dict[str, float]] = field(default_factory=dict)


@dataclass
class GenerationData:
    weights: Dict[float, float] = field(default_factory=dict)
    whitelist: Dict[str, float] = field(default_factory=dict)


@dataclass
class NighttimeChanges:
    equipment_mods_modifiers: Dict[str, float] = field(default_factory=dict)


@dataclass
class RandomisationDetails:
    """Generation weights and roll chances for one level range"""

    level_range: MinMax
    generation: Dict[str, GenerationData] = field(default_factory=dict)
    equipment: Dict[str, float] = field(default_factory=dict)
    weapon_mods: Dict[str, float] = field(default_factory=dict)
    equipment_mods: Dict[str, float] = field(default_factory=dict)
    randomised_weapon_mod_slots: List[str] = field(default_factory=list)
    nighttime_changes: Optional[NighttimeChanges] = None
    minimum_magazine_size: Optional[Dict[str, int]] = None


@dataclass
class EquipmentFilters:
    """Per-role equipment settings from the host bot config"""

    armor_plate_weighting: Optional[List[ArmorPlateWeights]] = None
    randomisation: Optional[List[RandomisationDetails]] = None
    face_shield_is_active_chance_percent: Optional[float] = None
    laser_is_active_chance_percent: Optional[float] = None
    light_is_active_day_chance_percent: Optional[float] = None
    light_is_active_night_chance_percent: Optional[float] = None
    nvg_is_active_chance_day_percent: Optional[float] = None
    nvg_is_active_chance_night_percent: Optional[float] = None


@dataclass
class BotConfig:
    equipment: Dict[str, Optional[EquipmentFilters]] = field(default_factory=dict)


@dataclass
class PmcConfig:
    bot_relative_level_delta_min: int = 0
    bot_relative_level_delta_max: int = 0
