"""Armor plate weighting by level range"""

from typing import Dict, Optional

from .presets import BRACKET_COUNT, ArmorPreset
from ..host.models import BotConfig, EquipmentFilters
from ..host.services import HostLogger

PMC_ROLE = "pmc"


def pmc_equipment_filters(bot_config: Optional[BotConfig]) -> Optional[EquipmentFilters]:
    if bot_config is None:
        return None
    return bot_config.equipment.get(PMC_ROLE)


def apply_armor_plate_weighting(
    bot_config: BotConfig,
    presets: Dict[str, ArmorPreset],
    preset_name: str,
    logger: HostLogger,
) -> bool:
    """Rewrite the six PMC armor plate brackets from a named preset

    Returns True when the preset was applied. Missing host tables are logged
    and left alone.
    """
    pmc = pmc_equipment_filters(bot_config)
    if pmc is None:
        logger.warning("pmc is null check botconfig")
        return False

    weighting = pmc.armor_plate_weighting
    if weighting is None:
        logger.warning("ArmorPlateWeighting is missing. Check botconfig")
        return False

    preset = presets.get(preset_name)
    if preset is None:
        logger.error(f"Unknown armor preset {preset_name}, available: {', '.join(sorted(presets))}")
        return False

    if len(weighting) < BRACKET_COUNT:
        logger.error(
            f"ArmorPlateWeighting has {len(weighting)} level ranges, expected {BRACKET_COUNT}"
        )
        return False

    for slot, bracket in zip(weighting, preset.brackets):
        slot.level_range.min = bracket.level_range.min
        slot.level_range.max = bracket.level_range.max
        if bracket.plates is not None:
            for position, weights in bracket.plates.items():
                slot.values[position] = dict(weights)

    logger.info(f"Applied armor preset {preset.name}")
    return True
