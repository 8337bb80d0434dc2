#!/usr/bin/env python3
"""
WCS Launcher - Easy start for wheelchair control

Usage:
    python launch.py              # Run core demo
    python launch.py --gamepad    # Drive with a game controller
    python launch.py --status     # Show configuration
"""

import sys
import argparse
import asyncio
import logging
from typing import Optional


def setup_logging(level: str = "INFO") -> None:
    """Configure logging"""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )


def launch_gamepad(env_file: Optional[str] = None) -> None:
    """Launch gamepad control mode"""
    print("Starting gamepad control mode...")
    print("START=power, Y=link, B=emergency stop, LB/RB=speed, stick=move")

    from wcs_input.gamepad_input import GamepadInput, HAS_PYGAME

    if not HAS_PYGAME:
        print("\nERROR: pygame not installed")
        print("Install with: pip install pygame")
        sys.exit(1)

    from wcs_config import get_config
    from wcs_core.mapper import Mapper
    from wcs_core.runner import SupervisorRunner
    from wcs_core.supervisor import ControlSupervisor

    config = get_config(env_file=env_file)
    supervisor = ControlSupervisor(config.supervisor_config())
    mapper = Mapper(config.mapper_config())
    runner = SupervisorRunner(supervisor, GamepadInput(), config.runner_config())

    logger = logging.getLogger("launch")

    def on_state_change(old_state, new_state):
        frame = mapper.map(new_state)
        logger.info(
            f"{new_state.describe()} | "
            f"wheels L={frame.left_speed:+4d} R={frame.right_speed:+4d}"
        )

    supervisor.add_state_callback(on_state_change)

    try:
        asyncio.run(runner.run())
    except KeyboardInterrupt:
        print("\nShutting down...")
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


def launch_demo(env_file: Optional[str] = None) -> None:
    """Launch core demo"""
    print("Starting core demo...")
    from demo_core import run_demo
    from wcs_config import get_config

    try:
        asyncio.run(run_demo(get_config(env_file=env_file)))
    except KeyboardInterrupt:
        print("\nDemo interrupted by user")
    except Exception as e:
        logging.getLogger("launch").error(f"Demo failed: {e}", exc_info=True)
        sys.exit(1)


def show_status(env_file: Optional[str] = None) -> None:
    """Print configuration status"""
    from wcs_config import get_config
    get_config(env_file=env_file).print_status()


def main():
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description="WCS - Wheelchair Control System",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python launch.py              Run core demo
  python launch.py --gamepad    Drive with a game controller
  python launch.py --status     Show configuration
        """
    )

    parser.add_argument(
        "--gamepad",
        action="store_true",
        help="Use gamepad control (requires pygame)"
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Run core demo (default)"
    )
    parser.add_argument(
        "--status",
        action="store_true",
        help="Show configuration and exit"
    )
    parser.add_argument(
        "--env-file",
        help="Path to .env file"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (default: WCS_LOG_LEVEL or INFO)"
    )

    args = parser.parse_args()

    if args.status:
        show_status(args.env_file)
        return

    from wcs_config import get_config, LOG_LEVELS

    level = args.log_level or get_config(env_file=args.env_file).log_level
    if level not in LOG_LEVELS:
        level = "INFO"
    setup_logging(level)

    if args.gamepad:
        launch_gamepad(args.env_file)
    else:
        launch_demo(args.env_file)


if __name__ == "__main__":
    main()
