"""Loyalty level loot and equipment roll profiles"""

from typing import Dict, Optional

from .armor import pmc_equipment_filters
from .schema import ACTIVE_CHANCE_FIELDS
from ..host.models import BotConfig, RandomisationDetails
from ..host.services import HostLogger


def apply_loyalty_profile(
    bot_config: BotConfig,
    profile: RandomisationDetails,
    active_chances: Dict[str, float],
    logger: HostLogger,
    attach: bool = False,
) -> Optional[RandomisationDetails]:
    """Reset PMC randomisation and active chances, then stage the loyalty profile

    The profile is only appended to the host's randomisation list when
    attach is set. Returns the profile, or None if there is no PMC bucket.
    """
    pmc = pmc_equipment_filters(bot_config)
    if pmc is None:
        logger.warning("pmc is null check botconfig")
        return None

    if pmc.randomisation is not None:
        pmc.randomisation.clear()

    for key, attr in ACTIVE_CHANCE_FIELDS.items():
        if key in active_chances:
            setattr(pmc, attr, active_chances[key])

    level_range = f"{profile.level_range.min}-{profile.level_range.max}"
    if attach:
        if pmc.randomisation is None:
            pmc.randomisation = []
        pmc.randomisation.append(profile)
        logger.info(f"Attached loyalty profile for levels {level_range}")
    else:
        logger.info(f"Built loyalty profile for levels {level_range} (not attached)")
    return profile
