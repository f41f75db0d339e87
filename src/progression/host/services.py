"""Host service interfaces consumed by the plugin"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict

from .models import Bots


class HostLogger(ABC):
    """Leveled logger provided by the host"""

    @abstractmethod
    def info(self, message: str) -> None:
        pass

    @abstractmethod
    def warning(self, message: str) -> None:
        pass

    @abstractmethod
    def error(self, message: str) -> None:
        pass

    @abstractmethod
    def success(self, message: str) -> None:
        pass


class DatabaseService(ABC):
    """Access to the host's loaded database"""

    @abstractmethod
    def get_bots(self) -> Bots:
        """Return the faction-keyed bot table"""
        pass


class ConfigServer(ABC):
    """Typed access to host configuration objects"""

    @abstractmethod
    def get_config(self, name: str) -> Any:
        """Return the config object registered under name (e.g. "bot", "pmc"); KeyError if absent"""
        pass


class ModHelper(ABC):
    """Path resolution and JSON loading for mod folders"""

    @abstractmethod
    def get_absolute_path_to_mod_folder(self) -> Path:
        pass

    @abstractmethod
    def get_json_data_from_file(self, base_dir: Path, file_name: str) -> Dict[str, Any]:
        """Deserialize base_dir/file_name; raise OSError or ValueError on failure"""
        pass
