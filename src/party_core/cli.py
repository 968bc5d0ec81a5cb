# Area: Shared
"""
party_core.cli — Command-line interface
=======================================

Runs a game headlessly and prints every bus event, or validates a
game.json file.

Usage:
    python -m party_core --demo                                  # Run the demo quiz
    python -m party_core --demo --actions ADVANCE,ADVANCE,BACK   # Scripted actions
    python -m party_core --validate games/nameblame/game.json    # Validate a config
    python -m party_core --config-dir games/ --game nameblame    # Discovered config

Settings can also come from the environment or a .env file
(PARTY_CONFIG_DIR, PARTY_GAME, PARTY_PLAYER_ID, PARTY_ROOM_ID,
PARTY_LOG_FILE, PARTY_LOG_LEVEL).
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from ._core.registry import ModuleRegistry
from ._host_config import HostSettings, load_settings
from ._shared import EventLogger, setup_logging
from .config import ConfigCatalog, load_game_config, parse_game_config
from .demo_module import DEMO_QUIZ_CONFIG, DEMO_QUIZ_ID, DemoQuizModule
from .errors import ConfigValidationError, GameLoadError
from .host import GameHost
from .types import GameAction


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="party-core",
        description="Party game framework core - run or validate game modules",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m party_core --demo
  python -m party_core --demo --actions ADVANCE,ADVANCE,ADVANCE
  python -m party_core --validate games/nameblame/game.json
  PARTY_CONFIG_DIR=games python -m party_core --game nameblame
        """,
    )

    parser.add_argument(
        "--demo",
        action="store_true",
        help="Run the built-in demo quiz",
    )

    parser.add_argument(
        "--validate",
        metavar="PATH",
        type=str,
        help="Validate a game.json file and exit",
    )

    parser.add_argument(
        "--config-dir",
        type=str,
        help="Directory scanned for game.json files; each game runs with the demo quiz controllers",
    )

    parser.add_argument(
        "--game",
        type=str,
        help="Game id to load",
    )

    parser.add_argument(
        "--actions",
        type=str,
        default="",
        help="Comma-separated actions to dispatch, e.g. ADVANCE,ADVANCE,BACK",
    )

    parser.add_argument(
        "--env-file",
        type=str,
        help="Path to a .env file (default: ./.env)",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored event output",
    )

    return parser.parse_args(argv)


def parse_actions(raw: str) -> List[GameAction]:
    """
    Parse a comma-separated action list.

    Raises:
        ValueError: If an entry is not a known action type
    """
    return [GameAction.coerce(part.strip().upper()) for part in raw.split(",") if part.strip()]


def validate_file(path: str) -> int:
    """Validate one game.json and print the result."""
    try:
        config = load_game_config(path)
    except ConfigValidationError as e:
        print(f"Invalid: {path}", file=sys.stderr)
        for message in e.errors:
            print(f"  • {message}", file=sys.stderr)
        return 1
    print(f"Valid: {config.id} v{config.version} ({len(config.phases)} phases)")
    for phase in config.phases:
        allowed = ", ".join(a.value for a in phase.allowed_actions)
        print(f"  {phase.id:16} screen={phase.screen_id:16} actions=[{allowed}]")
    return 0


def build_catalog(args: argparse.Namespace, settings: HostSettings) -> ConfigCatalog:
    """Discovered configs, plus the demo config unless a discovered one replaces it."""
    config_dir = args.config_dir or settings.config_dir
    catalog = ConfigCatalog.from_directory(config_dir) if config_dir else ConfigCatalog()
    if args.demo and DEMO_QUIZ_ID not in catalog:
        catalog.add(parse_game_config(DEMO_QUIZ_CONFIG))
    return catalog


async def run_game(
    host: GameHost,
    game_id: Optional[str],
    actions: List[GameAction],
    settings: HostSettings,
    event_logger: EventLogger,
) -> int:
    """Load a game, dispatch the scripted actions, and unload it."""
    game_id = game_id or host.select_initial_game()
    if not game_id:
        print("Error: No game configs found.", file=sys.stderr)
        return 1

    event_logger.attach(host.event_bus)
    try:
        ctx = await host.load(game_id, player_id=settings.player_id, room_id=settings.room_id)
    except GameLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for action in actions:
        ctx.dispatch(action)
        await host.settle()

    print(f"Final phase: {ctx.current_phase_id} (screen: {ctx.current_screen_id})")
    host.unload()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)

    try:
        settings = load_settings(args.env_file)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(log_file_path=settings.log_file, level=settings.level)

    if args.validate:
        return validate_file(args.validate)

    try:
        actions = parse_actions(args.actions)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    catalog = build_catalog(args, settings)
    if not len(catalog):
        print("Error: No game configs found. Use --demo or --config-dir.", file=sys.stderr)
        return 1

    registry = ModuleRegistry([DemoQuizModule(module_id=config.id) for config in catalog])
    host = GameHost(registry, catalog)
    game_id = args.game or settings.game or (DEMO_QUIZ_ID if args.demo else None)
    return asyncio.run(
        run_game(host, game_id, actions, settings, EventLogger(color=not args.no_color))
    )
