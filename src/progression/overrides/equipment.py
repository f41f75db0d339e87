"""PMC equipment pool overrides"""

from typing import Any, Dict

from .factions import Factions
from .schema import ShapeMismatch, parse_weight_map
from ..host.models import EquipmentSlot
from ..host.services import HostLogger


def apply_equipment_overrides(
    equipment: Dict[str, Any], factions: Factions, logger: HostLogger
) -> Dict[str, bool]:
    """Replace each configured slot's weights on both factions

    Returns slot name -> whether it was applied. A bad entry is logged and
    skipped; the remaining slots are still applied.
    """
    results = {}
    for slot_name, raw in equipment.items():
        try:
            slot = EquipmentSlot(slot_name)
        except ValueError:
            logger.error(f"Unknown equipment slot {slot_name}, skipping")
            results[slot_name] = False
            continue

        parsed = parse_weight_map(slot_name, raw)
        if isinstance(parsed, ShapeMismatch):
            logger.error(f"couldn't parse equipment details for {slot_name}: {parsed.reason}")
            results[slot_name] = False
            continue

        targets = {name: bot.bot_inventory.equipment.get(slot) for name, bot in factions.items()}
        missing = [name for name, pool in targets.items() if pool is None]
        if missing:
            logger.error(f"Bot types {', '.join(missing)} have no {slot_name} equipment pool, skipping")
            results[slot_name] = False
            continue

        for pool in targets.values():
            pool.clear()
            pool.update(parsed.weights)

        logger.warning(f"Adjusted {slot_name} values")
        results[slot_name] = True
    return results
