"""Command-line interface for Valens Progression"""

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from .core.config import PACKAGE_DIR, CONFIG_FILE_NAME, config_fingerprint, parse_mod_config
from .core.errors import ConfigLoadError, PresetError
from .core.logging import LoggingHostLogger, setup_logging
from .host.lifecycle import HookManager
from .host.memory import FileModHelper, load_snapshot, write_snapshot
from .host.models import AmmoCaliber, EquipmentSlot
from .metadata import METADATA
from .mod import register
from .overrides.presets import load_armor_presets
from .overrides.schema import ShapeMismatch, parse_weight_map


def main(args: Optional[list] = None) -> int:
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        description=f"{METADATA.name}: PMC progression overrides for the game server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default="info",
        choices=["debug", "info", "warning", "error"],
        help="Logging level",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Also write JSONL logs to this file",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    validate_parser = subparsers.add_parser(
        "validate",
        help="Check a config.json without applying it",
    )
    validate_parser.add_argument(
        "config",
        type=str,
        nargs="?",
        default=str(PACKAGE_DIR / CONFIG_FILE_NAME),
        help="Path to config.json",
    )
    validate_parser.set_defaults(func=cmd_validate)

    presets_parser = subparsers.add_parser(
        "presets",
        help="List armor plate presets",
    )
    presets_parser.set_defaults(func=cmd_presets)

    apply_parser = subparsers.add_parser(
        "apply",
        help="Run the startup hook against a host snapshot",
    )
    apply_parser.add_argument(
        "--snapshot",
        required=True,
        help="JSON snapshot of the host bot table and bot/pmc configs",
    )
    apply_parser.add_argument(
        "--config",
        type=str,
        default=str(PACKAGE_DIR / CONFIG_FILE_NAME),
        help="Path to config.json",
    )
    apply_parser.add_argument(
        "--output",
        type=str,
        help="Write the modified snapshot here",
    )
    apply_parser.set_defaults(func=cmd_apply)

    parsed_args = parser.parse_args(args)

    setup_logging(
        level=getattr(logging, parsed_args.log_level.upper()),
        log_file=Path(parsed_args.log_file) if parsed_args.log_file else None,
    )

    if hasattr(parsed_args, "func"):
        return parsed_args.func(parsed_args)
    parser.print_help()
    return 0


def check_entries(names: dict, known: set, kind: str) -> List[str]:
    """Describe every unknown or malformed entry in one config section"""
    problems = []
    for name, raw in names.items():
        if name not in known:
            problems.append(f"unknown {kind} {name}")
            continue
        parsed = parse_weight_map(name, raw)
        if isinstance(parsed, ShapeMismatch):
            problems.append(f"{kind} {name}: {parsed.reason}")
    return problems


def cmd_validate(args) -> int:
    """Execute validate command"""
    logger = logging.getLogger("progression.cli")
    config_path = Path(args.config)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        config = parse_mod_config(data)
    except (OSError, ValueError) as e:
        logger.error(f"Could not read {config_path}: {e}")
        return 1
    except ConfigLoadError as e:
        logger.error(f"{config_path}: {e}")
        return 1

    problems = check_entries(config.pmc_equipment, {s.value for s in EquipmentSlot}, "equipment slot")
    problems += check_entries(config.pmc_ammo, {c.value for c in AmmoCaliber}, "ammo caliber")

    try:
        presets = load_armor_presets()
    except PresetError as e:
        logger.error(f"Could not load armor presets: {e}")
        return 1
    if config.armor_preset not in presets:
        problems.append(f"unknown armor preset {config.armor_preset}")

    for problem in problems:
        logger.error(problem)

    logger.info(
        f"{config_path.name} (fingerprint {config_fingerprint(data)}): "
        f"{len(config.pmc_equipment)} equipment slots, {len(config.pmc_ammo)} calibers, "
        f"{len(problems)} problems"
    )
    return 1 if problems else 0


def cmd_presets(args) -> int:
    """Execute presets command"""
    try:
        presets = load_armor_presets()
    except PresetError as e:
        logging.getLogger("progression.cli").error(f"Could not load armor presets: {e}")
        return 1

    for name, preset in presets.items():
        ranges = ", ".join(f"{b.level_range.min}-{b.level_range.max}" for b in preset.brackets)
        plates = "with plate weights" if any(b.plates for b in preset.brackets) else "bounds only"
        print(f"{name}: {ranges} ({plates})")
        if preset.description:
            print(f"    {preset.description}")
    return 0


def cmd_apply(args) -> int:
    """Execute apply command"""
    logger = logging.getLogger("progression.cli")

    try:
        snapshot = load_snapshot(Path(args.snapshot))
    except (OSError, ValueError, KeyError) as e:
        logger.error(f"Could not read snapshot {args.snapshot}: {e}")
        return 1

    config_path = Path(args.config)
    hooks = HookManager()
    mod = register(
        hooks,
        LoggingHostLogger(logging.getLogger("progression.host")),
        snapshot.database(),
        snapshot.config_server(),
        FileModHelper(config_path.parent),
        config_file_name=config_path.name,
    )
    failed = hooks.run_on_load()

    if failed or mod.factions is None:
        logger.error("Startup hook did not apply any changes")
        return 1

    for section, results in mod.results.items():
        applied = sorted(name for name, ok in results.items() if ok)
        skipped = sorted(name for name, ok in results.items() if not ok)
        logger.info(f"{section}: applied {applied or 'none'}, skipped {skipped or 'none'}")

    if args.output:
        write_snapshot(snapshot, Path(args.output))
        logger.info(f"Wrote modified snapshot to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
