"""
DepletionTicker - Periodic power drain for a ControlSupervisor.

Runs an asyncio task that calls supervisor.tick(interval) at a fixed
cadence for as long as the device is powered and not emergency-stopped.
The task is cancelled as soon as that stops being true and restarted
when it becomes true again. Missed ticks are not caught up.

Cancellation is asynchronous (it goes through the event loop), but a
tick that lands after power-off or an emergency stop is still a no-op,
because the supervisor re-checks the drain condition under its lock.
"""

import asyncio
import logging
from typing import Optional

from .supervisor import ControlSupervisor
from .types import DeviceState


logger = logging.getLogger(__name__)


class DepletionTicker:
    """Cancellable periodic scheduler driving ControlSupervisor.tick()"""

    def __init__(self, supervisor: ControlSupervisor, interval: float = 1.0) -> None:
        """
        Args:
            supervisor: Supervisor whose power level should drain
            interval: Seconds between ticks (1.0 = 1 Hz)
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")

        self.supervisor = supervisor
        self.interval = interval

        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._task: Optional[asyncio.Task] = None
        self._running = False
        self._tick_count = 0

    async def start(self) -> None:
        """Subscribe to the supervisor and start ticking if draining"""
        if self._running:
            return

        self._loop = asyncio.get_running_loop()
        self._running = True
        self.supervisor.add_state_callback(self._on_state_change)
        logger.info(f"Depletion ticker started ({1.0 / self.interval:.1f} Hz)")
        self._sync(self.supervisor.current_state())

    async def stop(self) -> None:
        """Unsubscribe and cancel any running tick task"""
        if not self._running:
            return

        self._running = False
        self.supervisor.remove_state_callback(self._on_state_change)
        await self._cancel_task()
        logger.info(f"Depletion ticker stopped after {self._tick_count} draining ticks")

    @property
    def is_ticking(self) -> bool:
        """Check if a tick task is currently scheduled"""
        return self._task is not None and not self._task.done()

    @property
    def tick_count(self) -> int:
        """Ticks that actually drained power (for testing)"""
        return self._tick_count

    def _on_state_change(self, old_state: DeviceState, new_state: DeviceState) -> None:
        """State callback - may be invoked from any thread"""
        if old_state.is_draining == new_state.is_draining:
            return
        if self._loop is None or self._loop.is_closed():
            return

        try:
            running_loop = asyncio.get_running_loop()
        except RuntimeError:
            running_loop = None

        if running_loop is self._loop:
            self._sync(new_state)
        else:
            self._loop.call_soon_threadsafe(self._sync, self.supervisor.current_state())

    def _sync(self, state: DeviceState) -> None:
        """Start or cancel the tick task to match the drain condition"""
        if not self._running:
            return

        if state.is_draining and not self.is_ticking:
            logger.debug("Power draining - scheduling ticks")
            self._task = self._loop.create_task(self._run())
        elif not state.is_draining and self.is_ticking:
            logger.debug("Power drain halted - cancelling ticks")
            self._task.cancel()
            self._task = None

    async def _run(self) -> None:
        """Tick loop - one tick per interval until cancelled"""
        while True:
            await asyncio.sleep(self.interval)
            before = self.supervisor.current_state()
            after = self.supervisor.tick(self.interval)
            if after.power_level < before.power_level:
                self._tick_count += 1

    async def _cancel_task(self) -> None:
        task = self._task
        self._task = None
        if task is None or task.done():
            return

        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
