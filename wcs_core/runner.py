"""
SupervisorRunner - Main loop wiring an intent source to the supervisor.

The runner:
- Starts the IntentProvider and the DepletionTicker
- Polls for intents and dispatches them to the ControlSupervisor
- Ends any movement if a loop iteration fails
- Always ends movement and releases everything on shutdown
"""

import asyncio
import logging
from typing import Optional

from .depletion import DepletionTicker
from .interfaces import IntentProvider
from .supervisor import ControlSupervisor
from .types import RunnerConfig


logger = logging.getLogger(__name__)


class SupervisorRunner:
    """Async control loop around a ControlSupervisor"""

    def __init__(
        self,
        supervisor: ControlSupervisor,
        intent_provider: IntentProvider,
        config: Optional[RunnerConfig] = None,
    ) -> None:
        """
        Args:
            supervisor: Supervisor receiving the intents
            intent_provider: Source of operator intents
            config: Loop and tick intervals
        """
        self.supervisor = supervisor
        self.input = intent_provider
        self.config = config or RunnerConfig()
        self.ticker = DepletionTicker(supervisor, interval=self.config.tick_interval)

        self._running = False
        self._intent_count = 0

    async def run(self) -> None:
        """
        Main control loop - runs until stopped.

        Call this from an async context.
        """
        logger.info("Runner starting")
        self._running = True

        try:
            await self.input.start()
            await self.ticker.start()

            while self._running:
                try:
                    await self._update()
                    await asyncio.sleep(self.config.loop_interval)
                except Exception as e:
                    logger.error(f"Error in runner update: {e}", exc_info=True)
                    self.supervisor.end_move()

        finally:
            logger.info("Runner stopping")
            await self._cleanup()

    def stop(self) -> None:
        """Stop the runner (call from outside async context)"""
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def intent_count(self) -> int:
        """Intents dispatched so far"""
        return self._intent_count

    async def _update(self) -> None:
        """Single iteration of the loop: one intent at most"""
        intent = await self.input.read_intent()
        if intent is None:
            return

        logger.debug(f"Intent: {intent.kind.value} {intent.value!r}")
        self.supervisor.dispatch(intent)
        self._intent_count += 1

    async def _cleanup(self) -> None:
        """Cleanup on shutdown"""
        # Motion never outlives the loop
        self.supervisor.end_move()

        try:
            await self.ticker.stop()
            await self.input.stop()
        except Exception as e:
            logger.error(f"Error during cleanup: {e}", exc_info=True)
