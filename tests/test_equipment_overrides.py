"""Tests for equipment and ammo pool overrides"""

import copy

import pytest

from progression.overrides.ammo import apply_ammo_overrides
from progression.overrides.equipment import apply_equipment_overrides
from progression.overrides.factions import resolve_factions
from progression.overrides.schema import FactionPolicy
from progression.core.errors import FactionLookupError
from progression.host.models import Bots, EquipmentSlot

NEW_ID = "aaaaaaaaaaaaaaaaaaaaaaaa"
OTHER_ID = "bbbbbbbbbbbbbbbbbbbbbbbb"
OLD_ID = "000000000000000000000001"


def pool(host, faction, slot):
    return host.bots.types[faction].bot_inventory.equipment[slot]


def ammo_pool(host, faction, caliber):
    return host.bots.types[faction].bot_inventory.ammo[caliber]


def test_resolve_factions(host):
    """Both PMC records are returned"""
    factions = resolve_factions(host.bots)
    assert factions.usec is host.bots.types["usec"]
    assert factions.bear is host.bots.types["bear"]


def test_resolve_factions_missing():
    """Missing keys are named in the error"""
    with pytest.raises(FactionLookupError) as excinfo:
        resolve_factions(Bots(types={"usec": object()}))
    assert excinfo.value.missing == ["bear"]


def test_equipment_full_replace(host, logger):
    """Both factions get exactly the configured map"""
    results = apply_equipment_overrides(
        {"Holster": {NEW_ID: 5}}, resolve_factions(host.bots), logger
    )

    assert results == {"Holster": True}
    assert pool(host, "usec", EquipmentSlot.HOLSTER) == {NEW_ID: 5}
    assert pool(host, "bear", EquipmentSlot.HOLSTER) == {NEW_ID: 5}
    assert "Adjusted Holster values" in logger.messages("warning")


def test_equipment_factions_do_not_share_map(host, logger):
    """Each faction keeps its own pool object"""
    apply_equipment_overrides({"Holster": {NEW_ID: 5}}, resolve_factions(host.bots), logger)
    pool(host, "usec", EquipmentSlot.HOLSTER)[OTHER_ID] = 1
    assert OTHER_ID not in pool(host, "bear", EquipmentSlot.HOLSTER)


def test_equipment_omitted_slot_untouched(host, logger):
    """Slots absent from the config keep their prior weights"""
    before = copy.deepcopy(pool(host, "usec", EquipmentSlot.BACKPACK))
    apply_equipment_overrides({"Holster": {NEW_ID: 5}}, resolve_factions(host.bots), logger)
    assert pool(host, "usec", EquipmentSlot.BACKPACK) == before


def test_equipment_unknown_slot_skipped(host, logger):
    """An unknown slot is logged and the other slots still apply"""
    results = apply_equipment_overrides(
        {"FooSlot": {NEW_ID: 1}, "Backpack": {OTHER_ID: 2}},
        resolve_factions(host.bots),
        logger,
    )

    assert results == {"FooSlot": False, "Backpack": True}
    assert pool(host, "bear", EquipmentSlot.BACKPACK) == {OTHER_ID: 2}
    assert any("FooSlot" in m for m in logger.messages("error"))


def test_equipment_shape_mismatch_skipped(host, logger):
    """A malformed map leaves that slot untouched"""
    before = copy.deepcopy(pool(host, "usec", EquipmentSlot.HOLSTER))
    results = apply_equipment_overrides(
        {"Holster": [NEW_ID], "Earpiece": {NEW_ID: 1}},
        resolve_factions(host.bots),
        logger,
    )

    assert results == {"Holster": False, "Earpiece": True}
    assert pool(host, "usec", EquipmentSlot.HOLSTER) == before
    assert len(logger.messages("error")) == 1


def test_equipment_missing_pool_not_half_applied(host, logger):
    """If one faction lacks the slot neither faction changes"""
    del host.bots.types["bear"].bot_inventory.equipment[EquipmentSlot.HOLSTER]
    before = copy.deepcopy(pool(host, "usec", EquipmentSlot.HOLSTER))

    results = apply_equipment_overrides(
        {"Holster": {NEW_ID: 5}}, resolve_factions(host.bots), logger
    )

    assert results == {"Holster": False}
    assert pool(host, "usec", EquipmentSlot.HOLSTER) == before


def test_ammo_reference_faction_only(host, logger):
    """By default only the usec ammo table changes"""
    bear_before = copy.deepcopy(ammo_pool(host, "bear", "Caliber556x45NATO"))
    results = apply_ammo_overrides(
        {"Caliber556x45NATO": {NEW_ID: 40}}, resolve_factions(host.bots), logger
    )

    assert results == {"Caliber556x45NATO": True}
    assert ammo_pool(host, "usec", "Caliber556x45NATO") == {NEW_ID: 40}
    assert ammo_pool(host, "bear", "Caliber556x45NATO") == bear_before


def test_ammo_omitted_caliber_untouched(host, logger):
    """Calibers absent from the config keep their prior weights"""
    before = {
        faction: copy.deepcopy(ammo_pool(host, faction, "Caliber9x19PARA"))
        for faction in ("usec", "bear")
    }
    apply_ammo_overrides(
        {"Caliber556x45NATO": {NEW_ID: 40}},
        resolve_factions(host.bots),
        logger,
        FactionPolicy.BOTH,
    )
    for faction, pool_before in before.items():
        assert ammo_pool(host, faction, "Caliber9x19PARA") == pool_before
    assert ammo_pool(host, "usec", "Caliber9x19PARA") == {OLD_ID: 4.0}


@pytest.mark.parametrize(
    "policy,changed,unchanged",
    [
        (FactionPolicy.BOTH, ["usec", "bear"], []),
        (FactionPolicy.BEAR, ["bear"], ["usec"]),
    ],
)
def test_ammo_policy(host, logger, policy, changed, unchanged):
    """The policy picks which factions receive ammo overrides"""
    apply_ammo_overrides(
        {"Caliber9x19PARA": {NEW_ID: 1}}, resolve_factions(host.bots), logger, policy
    )
    for faction in changed:
        assert ammo_pool(host, faction, "Caliber9x19PARA") == {NEW_ID: 1}
    for faction in unchanged:
        assert NEW_ID not in ammo_pool(host, faction, "Caliber9x19PARA")


def test_ammo_unknown_and_missing_calibers(host, logger):
    """Unknown calibers and calibers the host lacks are skipped per entry"""
    malformed_before = copy.deepcopy(ammo_pool(host, "usec", "Caliber9x19PARA"))
    results = apply_ammo_overrides(
        {
            "Caliber50BMG": {NEW_ID: 1},
            "Caliber12g": {NEW_ID: 1},
            "Caliber9x19PARA": {NEW_ID: "heavy"},
            "Caliber556x45NATO": {OTHER_ID: 7},
        },
        resolve_factions(host.bots),
        logger,
    )

    assert results == {
        "Caliber50BMG": False,
        "Caliber12g": False,
        "Caliber9x19PARA": False,
        "Caliber556x45NATO": True,
    }
    assert "Caliber12g" not in host.bots.types["usec"].bot_inventory.ammo
    assert ammo_pool(host, "usec", "Caliber556x45NATO") == {OTHER_ID: 7}
    assert ammo_pool(host, "usec", "Caliber9x19PARA") == malformed_before
    assert len(logger.messages("error")) == 3


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
