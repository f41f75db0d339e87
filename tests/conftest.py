"""Shared fixtures: an in-memory host and a recording logger"""

import json

import pytest

from progression.host.memory import HostSnapshot, empty_armor_weighting
from progression.host.models import (
    BotConfig,
    BotInventory,
    Bots,
    BotType,
    EquipmentFilters,
    EquipmentSlot,
    MinMax,
    PmcConfig,
    RandomisationDetails,
)
from progression.host.services import HostLogger

OLD_ID = "000000000000000000000001"


class RecordingLogger(HostLogger):
    """HostLogger that keeps (level, message) pairs"""

    def __init__(self):
        self.records = []

    def info(self, message):
        self.records.append(("info", message))

    def warning(self, message):
        self.records.append(("warning", message))

    def error(self, message):
        self.records.append(("error", message))

    def success(self, message):
        self.records.append(("success", message))

    def messages(self, level):
        return [m for lvl, m in self.records if lvl == level]


def make_bot() -> BotType:
    return BotType(
        bot_inventory=BotInventory(
            equipment={
                slot: {OLD_ID: 1.0}
                for slot in (
                    EquipmentSlot.FIRST_PRIMARY_WEAPON,
                    EquipmentSlot.HOLSTER,
                    EquipmentSlot.BACKPACK,
                    EquipmentSlot.TACTICAL_VEST,
                    EquipmentSlot.EARPIECE,
                )
            },
            ammo={
                "Caliber556x45NATO": {OLD_ID: 3.0},
                "Caliber9x19PARA": {OLD_ID: 4.0},
            },
        )
    )


@pytest.fixture
def host():
    pmc = EquipmentFilters(
        armor_plate_weighting=empty_armor_weighting(),
        randomisation=[RandomisationDetails(level_range=MinMax(1, 100))],
        face_shield_is_active_chance_percent=50,
        nvg_is_active_chance_night_percent=10,
    )
    return HostSnapshot(
        bots=Bots(types={"usec": make_bot(), "bear": make_bot(), "assault": make_bot()}),
        bot_config=BotConfig(equipment={"pmc": pmc}),
        pmc_config=PmcConfig(bot_relative_level_delta_min=10, bot_relative_level_delta_max=10),
    )


@pytest.fixture
def logger():
    return RecordingLogger()


@pytest.fixture
def write_config(tmp_path):
    """Write a config.json into a fresh mod folder and return the folder"""

    def _write(data, name="config.json"):
        mod_dir = tmp_path / "mod"
        mod_dir.mkdir(exist_ok=True)
        path = mod_dir / name
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_text(json.dumps(data), encoding="utf-8")
        return mod_dir

    return _write
