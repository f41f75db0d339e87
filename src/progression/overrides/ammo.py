"""PMC ammo pool overrides"""

from typing import Any, Dict

from .factions import Factions
from .schema import FactionPolicy, ShapeMismatch, parse_weight_map
from ..host.models import AmmoCaliber
from ..host.services import HostLogger


def apply_ammo_overrides(
    ammo: Dict[str, Any],
    factions: Factions,
    logger: HostLogger,
    policy: FactionPolicy = FactionPolicy.USEC,
) -> Dict[str, bool]:
    """Replace each configured caliber's weights on the factions the policy selects"""
    results = {}
    for caliber_name, raw in ammo.items():
        try:
            AmmoCaliber(caliber_name)
        except ValueError:
            logger.error(f"Unknown ammo caliber {caliber_name}, skipping")
            results[caliber_name] = False
            continue

        parsed = parse_weight_map(caliber_name, raw)
        if isinstance(parsed, ShapeMismatch):
            logger.error(f"couldn't parse ammo details for {caliber_name}: {parsed.reason}")
            results[caliber_name] = False
            continue

        targets = {
            name: factions.get(name).bot_inventory.ammo.get(caliber_name)
            for name in policy.targets()
        }
        missing = [name for name, pool in targets.items() if pool is None]
        if missing:
            logger.error(f"Bot types {', '.join(missing)} are missing ammo type {caliber_name}")
            results[caliber_name] = False
            continue

        for pool in targets.values():
            pool.clear()
            pool.update(parsed.weights)
        results[caliber_name] = True
    return results
