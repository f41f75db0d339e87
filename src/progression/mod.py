"""Startup hook that applies Valens Progression to the host's PMC tables"""

import logging
from typing import Dict, Optional

from .core.config import CONFIG_FILE_NAME, load_mod_config
from .core.errors import ConfigLoadError, FactionLookupError, PresetError
from .host.lifecycle import HookManager, LoadOrder
from .host.models import BotConfig, PmcConfig, RandomisationDetails
from .host.services import ConfigServer, DatabaseService, HostLogger, ModHelper
from .metadata import METADATA
from .overrides.ammo import apply_ammo_overrides
from .overrides.armor import apply_armor_plate_weighting
from .overrides.equipment import apply_equipment_overrides
from .overrides.factions import Factions, resolve_factions
from .overrides.loyalty import apply_loyalty_profile
from .overrides.presets import ArmorPreset, load_armor_presets, load_loyalty_profile
from .overrides.schema import ModConfig

logger = logging.getLogger(__name__)

# Run right after the host finishes loading its database
LOAD_PRIORITY = LoadOrder.POST_DB_MOD_LOADER + 1


class ProgressionMod:
    """Applies config.json and the bundled presets during host startup"""

    def __init__(
        self,
        logger: HostLogger,
        database_service: DatabaseService,
        config_server: ConfigServer,
        mod_helper: ModHelper,
        armor_presets: Optional[Dict[str, ArmorPreset]] = None,
        loyalty_profile: Optional[RandomisationDetails] = None,
        config_file_name: str = CONFIG_FILE_NAME,
    ):
        self.logger = logger
        self.database_service = database_service
        self.config_server = config_server
        self.mod_helper = mod_helper
        self.config_file_name = config_file_name
        self.armor_presets = armor_presets
        self.loyalty_profile = loyalty_profile

        self.config: Optional[ModConfig] = None
        self.factions: Optional[Factions] = None
        self.results: Dict[str, Dict[str, bool]] = {}

    def on_load(self) -> None:
        """Host startup callback; never raises"""
        try:
            self._on_load()
        except Exception as e:
            logger.exception("Unhandled error while applying Valens Progression")
            self.logger.error(f"Failed to load {METADATA.name}: {e}")

    def _on_load(self) -> None:
        path_to_mod = self.mod_helper.get_absolute_path_to_mod_folder()

        try:
            self.config = load_mod_config(self.mod_helper, path_to_mod, self.config_file_name)
        except ConfigLoadError as e:
            self.logger.error(f"Failed to load {METADATA.name}: {e}. Stopped any further code changes")
            return

        try:
            self.factions = resolve_factions(self.database_service.get_bots())
        except FactionLookupError as e:
            self.logger.error(
                f"failed to retrieve usec or bear from bot types ({e}). "
                f"Stopped any further code changes"
            )
            return

        self.generate_pmcs()
        self.logger.success(f"Finished Loading {METADATA.name}!")

    def generate_pmcs(self) -> None:
        """Apply every PMC change in order; later steps run even if earlier ones skip entries"""
        config = self.config

        pmc_config: Optional[PmcConfig] = self._host_config("pmc")
        if pmc_config is not None:
            pmc_config.bot_relative_level_delta_min = config.level_delta["min"]
            pmc_config.bot_relative_level_delta_max = config.level_delta["max"]

        self.results["equipment"] = apply_equipment_overrides(
            config.pmc_equipment, self.factions, self.logger
        )
        self.results["ammo"] = apply_ammo_overrides(
            config.pmc_ammo, self.factions, self.logger, config.ammo_policy
        )

        bot_config: Optional[BotConfig] = self._host_config("bot")
        if bot_config is None:
            return
        self.pmc_config_changes(bot_config)
        self.loyalty_level_changes(bot_config)

    def _host_config(self, name: str):
        """Fetch a host config object, logging instead of raising when it is absent"""
        try:
            return self.config_server.get_config(name)
        except KeyError as e:
            self.logger.error(f"Host has no {name} config, skipping changes that need it: {e}")
            return None

    def pmc_config_changes(self, bot_config: BotConfig) -> bool:
        try:
            if self.armor_presets is None:
                self.armor_presets = load_armor_presets()
        except PresetError as e:
            self.logger.error(f"Could not load armor presets: {e}")
            return False
        return apply_armor_plate_weighting(
            bot_config, self.armor_presets, self.config.armor_preset, self.logger
        )

    def loyalty_level_changes(self, bot_config: BotConfig) -> Optional[RandomisationDetails]:
        try:
            if self.loyalty_profile is None:
                self.loyalty_profile = load_loyalty_profile()
        except PresetError as e:
            self.logger.error(f"Could not load loyalty profile: {e}")
            return None
        return apply_loyalty_profile(
            bot_config,
            self.loyalty_profile,
            self.config.active_chances,
            self.logger,
            attach=self.config.attach_loyalty_profile,
        )


def register(
    hooks: HookManager,
    logger: HostLogger,
    database_service: DatabaseService,
    config_server: ConfigServer,
    mod_helper: ModHelper,
    config_file_name: str = CONFIG_FILE_NAME,
) -> ProgressionMod:
    """Create the mod and register its startup hook with the host"""
    mod = ProgressionMod(
        logger, database_service, config_server, mod_helper, config_file_name=config_file_name
    )
    hooks.register(METADATA.mod_guid, mod.on_load, LOAD_PRIORITY)
    logger.info(f"Registered {METADATA.describe()}")
    return mod
