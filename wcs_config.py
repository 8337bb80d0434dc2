#!/usr/bin/env python3
"""
WCS Environment Configuration Helper

Provides easy access to .env configuration for the control system.
Loads the .env file (if present) and provides defaults.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from wcs_core.types import MapperConfig, RunnerConfig, SupervisorConfig


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


class WcsConfig:
    """Configuration manager for the control system"""

    def __init__(self, env_file: Optional[str] = None):
        """
        Initialize configuration

        Args:
            env_file: Path to .env file (default: .env in current directory)
        """
        self._loaded = False

        env_path = Path(".env") if env_file is None else Path(env_file)
        if env_path.exists():
            load_dotenv(env_path)
            self._loaded = True

    @property
    def loaded(self) -> bool:
        """Whether a .env file was found and loaded"""
        return self._loaded

    @property
    def drain_rate(self) -> float:
        """Power units drained per second (default: 0.1)"""
        return float(os.getenv("WCS_DRAIN_RATE", "0.1"))

    @property
    def tick_interval(self) -> float:
        """Seconds between depletion ticks (default: 1.0)"""
        return float(os.getenv("WCS_TICK_INTERVAL", "1.0"))

    @property
    def loop_interval(self) -> float:
        """Seconds between intent polls (default: 0.05)"""
        return float(os.getenv("WCS_LOOP_INTERVAL", "0.05"))

    @property
    def turn_scale(self) -> float:
        """Fraction of speed used when turning (default: 0.5)"""
        return float(os.getenv("WCS_TURN_SCALE", "0.5"))

    @property
    def auto_power_off(self) -> bool:
        """Cut power when the source is depleted (default: off)"""
        return os.getenv("WCS_AUTO_POWER_OFF", "0").strip().lower() in _TRUE_VALUES

    @property
    def log_level(self) -> str:
        """Logging level (default: INFO)"""
        return os.getenv("WCS_LOG_LEVEL", "INFO").strip().upper()

    def supervisor_config(self) -> SupervisorConfig:
        return SupervisorConfig(
            drain_rate=self.drain_rate,
            power_off_when_depleted=self.auto_power_off,
        )

    def runner_config(self) -> RunnerConfig:
        return RunnerConfig(
            loop_interval=self.loop_interval,
            tick_interval=self.tick_interval,
        )

    def mapper_config(self) -> MapperConfig:
        return MapperConfig(turn_scale=self.turn_scale)

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate configuration

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []

        # name, allow zero, upper bound
        for name, allow_zero, upper in [
            ("WCS_DRAIN_RATE", True, None),
            ("WCS_TICK_INTERVAL", False, None),
            ("WCS_LOOP_INTERVAL", False, None),
            ("WCS_TURN_SCALE", True, 1.0),
        ]:
            raw = os.getenv(name)
            if raw is None:
                continue
            try:
                value = float(raw)
            except ValueError:
                errors.append(f"{name} is not a number: {raw!r}")
                continue
            if value < 0 or (value == 0 and not allow_zero):
                errors.append(f"{name} must be {'non-negative' if allow_zero else 'positive'}")
            elif upper is not None and value > upper:
                errors.append(f"{name} must not exceed {upper}")

        auto_off = os.getenv("WCS_AUTO_POWER_OFF")
        if auto_off is not None and auto_off.strip().lower() not in _TRUE_VALUES + _FALSE_VALUES:
            errors.append(f"WCS_AUTO_POWER_OFF is not a boolean: {auto_off!r}")

        if self.log_level not in LOG_LEVELS:
            errors.append(f"WCS_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")

        return len(errors) == 0, errors

    def print_status(self):
        """Print configuration status"""
        print("WCS Configuration Status:")
        print(f"  .env loaded:    {'Yes' if self._loaded else 'No'}")

        is_valid, errors = self.validate()
        if is_valid:
            print(f"  Drain rate:     {self.drain_rate}/s")
            print(f"  Tick interval:  {self.tick_interval}s")
            print(f"  Loop interval:  {self.loop_interval}s")
            print(f"  Turn scale:     {self.turn_scale}")
            print(f"  Auto power-off: {'Yes' if self.auto_power_off else 'No'}")
            print(f"  Log level:      {self.log_level}")
            print("\n  Status: Configuration is valid")
        else:
            print("\n  Status: Configuration has errors:")
            for error in errors:
                print(f"    - {error}")


# Global config instance
_config = None

def get_config(reload: bool = False, env_file: Optional[str] = None) -> WcsConfig:
    """
    Get the global configuration instance

    Args:
        reload: Force reload of .env file
        env_file: Path to .env file used when (re)loading

    Returns:
        WcsConfig instance
    """
    global _config
    if _config is None or reload:
        _config = WcsConfig(env_file)
    return _config


def main():
    """Command-line utility to check configuration"""
    import argparse
    import sys

    parser = argparse.ArgumentParser(
        description="WCS Configuration Utility",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Check current configuration:
    python wcs_config.py

  Validate configuration:
    python wcs_config.py --validate

  Use custom .env file:
    python wcs_config.py --env-file /path/to/.env
        """
    )

    parser.add_argument("--env-file", help="Path to .env file")
    parser.add_argument("--validate", action="store_true",
                       help="Validate configuration and exit with error if invalid")

    args = parser.parse_args()

    config = WcsConfig(args.env_file)
    config.print_status()

    if args.validate:
        is_valid, _ = config.validate()
        if not is_valid:
            print("\nValidation failed!")
            sys.exit(1)
        else:
            print("\nValidation passed!")


if __name__ == "__main__":
    main()
