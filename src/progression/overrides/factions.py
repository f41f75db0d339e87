"""PMC faction lookup in the host bot table"""

from dataclasses import dataclass
from typing import Dict, Iterator, Tuple

from ..core.errors import FactionLookupError
from ..host.models import Bots, BotType

USEC = "usec"
BEAR = "bear"


@dataclass
class Factions:
    usec: BotType
    bear: BotType

    def get(self, name: str) -> BotType:
        return {USEC: self.usec, BEAR: self.bear}[name]

    def items(self) -> Iterator[Tuple[str, BotType]]:
        yield USEC, self.usec
        yield BEAR, self.bear


def resolve_factions(bots: Bots) -> Factions:
    """Return both PMC bot types or raise FactionLookupError"""
    types: Dict[str, BotType] = bots.types if bots is not None else {}
    found = {name: types.get(name) for name in (USEC, BEAR)}
    missing = [name for name, bot in found.items() if bot is None]
    if missing:
        raise FactionLookupError(missing)
    return Factions(usec=found[USEC], bear=found[BEAR])
