"""Host load-order phases and on_load hook execution"""

from enum import IntEnum
from typing import Callable, List, Tuple
import logging

logger = logging.getLogger(__name__)


class LoadOrder(IntEnum):
    """Priorities of the host's startup phases (lower runs first)"""

    WATERMARK = 0
    PRE_SPT_MOD_LOADER = 100
    DATABASE = 200
    POST_DB_MOD_LOADER = 300
    GAME_CALLBACKS = 400
    POST_SPT_MOD_LOADER = 500
    POST_SPT_LOAD = 600


class HookManager:
    """Manages on_load callback registration and execution"""

    def __init__(self):
        self.hooks: List[Tuple[int, str, Callable[[], None]]] = []

    def register(self, name: str, callback: Callable[[], None], priority: int) -> None:
        """Register callback to run at the given load-order priority"""
        self.hooks.append((int(priority), name, callback))
        logger.debug(f"Registered hook: {name} (priority {priority})")

    def ordered(self) -> List[Tuple[int, str, Callable[[], None]]]:
        """Hooks in execution order; registration order breaks ties"""
        return sorted(self.hooks, key=lambda hook: hook[0])

    def run_on_load(self) -> List[str]:
        """Execute all callbacks in priority order, return names that failed"""
        failed = []
        for priority, name, callback in self.ordered():
            logger.debug(f"Executing hook: {name} (priority {priority})")
            try:
                callback()
            except Exception as e:
                logger.error(f"Hook execution failed: {name}: {e}")
                failed.append(name)
        return failed
