"""
Mock (test) intent provider.

Plays back scripted operator intents for testing without a controller.
"""

import logging
from typing import List, Optional

from wcs_core.types import Direction, Intent


logger = logging.getLogger(__name__)


class MockInput:
    """
    Mock intent provider for testing.

    Returns the scripted intents one per read, then None once the
    script is exhausted.
    """

    def __init__(self, intents: Optional[List[Intent]] = None) -> None:
        """
        Initialize mock input.

        Args:
            intents: Intents to return in sequence.
                     If None, never returns anything.
        """
        self._intents = list(intents or [])
        self._index = 0
        self._running = False

    async def start(self) -> None:
        """Start the provider"""
        logger.info(f"[MOCK INPUT] Started - Script mode ({len(self._intents)} intents)")
        self._running = True
        self._index = 0

    async def stop(self) -> None:
        """Stop the provider"""
        logger.info("[MOCK INPUT] Stopped")
        self._running = False

    async def read_intent(self) -> Optional[Intent]:
        """Return next scripted intent"""
        if not self._running or self._index >= len(self._intents):
            return None

        intent = self._intents[self._index]
        self._index += 1
        return intent

    @property
    def exhausted(self) -> bool:
        """Check if every scripted intent has been read"""
        return self._index >= len(self._intents)

    def reset(self) -> None:
        """Reset to beginning of script"""
        self._index = 0

    def load_script(self, script_name: str) -> None:
        """
        Load a predefined test script.

        Args:
            script_name: Name of script to load from TestScripts
        """
        script_map = {
            "drive_forward": TestScripts.drive_forward,
            "emergency_stop": TestScripts.emergency_stop,
            "unpowered_connect": TestScripts.unpowered_connect,
            "depletion": TestScripts.depletion,
            "full_session": TestScripts.full_session,
        }

        if script_name in script_map:
            self._intents = script_map[script_name]()
            self._index = 0
            logger.info(f"Loaded script '{script_name}' with {len(self._intents)} intents")
        else:
            logger.warning(f"Unknown script '{script_name}'")


class TestScripts:
    """Pre-defined intent scripts"""

    __test__ = False  # not a pytest test class

    @staticmethod
    def drive_forward() -> List[Intent]:
        """Power up, connect, drive forward"""
        return [
            Intent.power(True),
            Intent.toggle_connection(),
            Intent.move(Direction.FORWARD),
        ]

    @staticmethod
    def emergency_stop() -> List[Intent]:
        """Drive forward, hit the e-stop, try to turn"""
        return TestScripts.drive_forward() + [
            Intent.emergency_stop(),
            # Rejected: e-stop engaged
            Intent.move(Direction.LEFT),
        ]

    @staticmethod
    def unpowered_connect() -> List[Intent]:
        """Try to connect without power (rejected)"""
        return [
            Intent.toggle_connection(),
        ]

    @staticmethod
    def depletion(seconds: int = 50) -> List[Intent]:
        """Drain for a while, power off, keep ticking"""
        return (
            [Intent.power(True), Intent.toggle_connection()]
            + [Intent.tick(1.0) for _ in range(seconds)]
            + [Intent.power(False)]
            + [Intent.tick(1.0) for _ in range(seconds)]
        )

    @staticmethod
    def full_session() -> List[Intent]:
        """Combined session: drive, adjust speed, turn, stop, power off"""
        return [
            Intent.power(True),
            Intent.toggle_connection(),
            Intent.speed(30),
            Intent.move(Direction.FORWARD),
            Intent.adjust_speed(20),
            Intent.move(Direction.RIGHT),
            Intent.end_move(),
            Intent.move(Direction.BACKWARD),
            Intent.emergency_stop(),
            Intent.emergency_stop(),
            Intent.move(Direction.LEFT),
            Intent.end_move(),
            Intent.toggle_connection(),
            Intent.power(False),
        ]
