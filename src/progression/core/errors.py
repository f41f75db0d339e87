"""Exceptions raised by the progression plugin"""


class ProgressionError(Exception):
    """Base class for plugin errors"""


class ConfigLoadError(ProgressionError):
    """config.json is missing, unreadable or structurally invalid"""


class FactionLookupError(ProgressionError):
    """One or both PMC factions are absent from the host bot table"""

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(f"Missing bot types: {', '.join(self.missing)}")


class PresetError(ProgressionError):
    """A bundled preset file is missing or malformed"""
