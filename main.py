"""Main entry point for the dodgeball game.

This module provides command-line options to run a match:
- Interactive mode (default): pygame window, mouse-controlled human player
- Headless mode: no display, faster than realtime for testing
"""

import argparse
import logging
import sys

from dodgeball.config.match_config import DEFAULT_TEAM_SIZE, MatchConfig, MatchMode
from dodgeball.entities.team import Team
from dodgeball.exceptions import ConfigurationError
from dodgeball.logging_config import configure_logging

logger = logging.getLogger(__name__)


def build_config(args: argparse.Namespace) -> MatchConfig:
    """Create a validated MatchConfig from parsed arguments.

    Raises:
        ConfigurationError: If the resulting configuration is invalid
    """
    config = MatchConfig(
        team_size=args.team_size,
        mode=MatchMode.INFINITE if args.infinite else MatchMode.FIXED_ROUND,
        human_nickname=args.nickname,
        human_team=Team(args.team) if args.team else None,
        seed=args.seed,
    )
    config.validate()
    return config


def run_headless(config: MatchConfig, max_ticks: int, stats_interval: int) -> None:
    """Run a match without a display and log the result."""
    from dodgeball.simulation.engine import MatchController

    controller = MatchController(config)
    controller.reset()
    controller.run_headless(max_ticks=max_ticks, stats_interval=stats_interval)


def run_game(config: MatchConfig) -> None:
    """Open the pygame window."""
    try:
        import dodgeball_game
    except ImportError as e:
        logger.error("Error: Required dependencies not installed: %s", e)
        logger.error("Install with: pip install -e .")
        sys.exit(1)

    dodgeball_game.main(config)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Two-team dodgeball arena",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Play in a window (default)
  python main.py

  # Infinite respawn mode with 3 players per side
  python main.py --infinite --team-size 3

  # Headless run for testing
  python main.py --headless --max-ticks 5000 --stats-interval 500

  # Reproducible headless match
  python main.py --headless --seed 42
        """,
    )

    parser.add_argument(
        "--headless", action="store_true", help="Run in headless mode (no UI, stats only)"
    )
    parser.add_argument(
        "--team-size",
        type=int,
        default=DEFAULT_TEAM_SIZE,
        help=f"Players per team (default: {DEFAULT_TEAM_SIZE})",
    )
    parser.add_argument(
        "--infinite", action="store_true", help="Infinite mode: eliminated players respawn"
    )
    parser.add_argument(
        "--team",
        choices=[team.value for team in Team],
        default=None,
        help="Side for the human player (default: random)",
    )
    parser.add_argument("--nickname", type=str, default="Player", help="Human player's label")
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for deterministic behavior (optional)"
    )
    parser.add_argument(
        "--max-ticks",
        type=int,
        default=10000,
        help="Maximum ticks to simulate in headless mode (default: 10000)",
    )
    parser.add_argument(
        "--stats-interval",
        type=int,
        default=300,
        help="Log stats every N ticks in headless mode (default: 300)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level name (default: $DODGEBALL_LOG_LEVEL or INFO)",
    )
    return parser


def main(argv=None) -> None:
    """Parse command-line arguments and run the appropriate mode."""
    args = create_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = build_config(args)
    except ConfigurationError as e:
        logger.error("Invalid configuration: %s", e)
        sys.exit(1)

    if args.headless:
        logger.info("Starting headless match...")
        logger.info(
            "Configuration: %d ticks, stats every %d ticks", args.max_ticks, args.stats_interval
        )
        logger.info("")
        run_headless(config, args.max_ticks, args.stats_interval)
    else:
        run_game(config)


if __name__ == "__main__":
    main()
