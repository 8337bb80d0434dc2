"""
ControlSupervisor - Interlocked state machine for the wheelchair remote.

The supervisor is the only thing allowed to change device state. It:
- Validates every intent against the current state
- Enforces the power / link / emergency-stop interlocks on motion
- Applies power depletion on each tick
- Notifies observers after every accepted change

Invalid intents are silent no-ops: the caller gets the unchanged
snapshot back and no observer fires.

This is safety-critical code.
"""

import logging
import math
import threading
from collections import deque
from dataclasses import replace
from typing import Deque, List, Optional, Tuple, Union

from .interfaces import StateObserver
from .types import (
    DeviceState,
    Direction,
    Intent,
    IntentKind,
    SPEED_MAX,
    SPEED_MIN,
    SupervisorConfig,
)


logger = logging.getLogger(__name__)

StateCallback = StateObserver


class ControlSupervisor:
    """
    Sole authority over the device state.

    All operations are serialized under an internal lock and may be
    called from any thread. Every operation returns the resulting
    snapshot, which is the unchanged one when the intent was rejected.

    Observers are called after the lock is released. Changes are queued
    as they commit and delivered in commit order by one thread at a
    time; a change committed while another thread is delivering is
    handed to that thread, so the committing call may return before
    its observers have run.
    """

    def __init__(self, config: Optional[SupervisorConfig] = None) -> None:
        """
        Initialize supervisor.

        Args:
            config: Supervisor configuration (drain rate, defaults, policy)
        """
        self.config = config or SupervisorConfig()

        initial_level = min(100.0, max(0.0, self.config.initial_power_level))
        initial_speed = _clamp(self.config.initial_speed, SPEED_MIN, SPEED_MAX)
        self._state = DeviceState(power_level=initial_level, speed_setting=initial_speed)

        self._lock = threading.RLock()
        self._state_callbacks: List[StateCallback] = []

        # Committed changes waiting for delivery
        self._pending: Deque[Tuple[DeviceState, DeviceState]] = deque()
        self._delivering = False

    # Subscription

    def add_state_callback(self, callback: StateCallback) -> None:
        """
        Register callback for state changes.

        Callback signature: callback(old_state, new_state)

        Args:
            callback: Function to call after every accepted change
        """
        with self._lock:
            self._state_callbacks.append(callback)

    def remove_state_callback(self, callback: StateCallback) -> None:
        """Unregister a previously added callback (ignored if unknown)"""
        with self._lock:
            if callback in self._state_callbacks:
                self._state_callbacks.remove(callback)

    # Query

    def current_state(self) -> DeviceState:
        """Get the current snapshot"""
        return self._state

    @property
    def state(self) -> DeviceState:
        return self._state

    # Commands

    def set_power(self, on: bool) -> DeviceState:
        """
        Switch power on or off. Always accepted.

        Dropping power drops the link and any motion in the same step.
        """
        with self._lock:
            result = self._apply_power(bool(on))
        self._deliver()
        return result

    def toggle_power(self) -> DeviceState:
        """Flip power (the power button)"""
        with self._lock:
            result = self._apply_power(not self._state.powered)
        self._deliver()
        return result

    def toggle_connection(self) -> DeviceState:
        """Connect or disconnect the remote link. Requires power."""
        with self._lock:
            current = self._state
            if not current.powered:
                return self._reject("toggle_connection", "device is not powered")

            if current.connected:
                # Link drop takes motion with it
                new_state = replace(current, connected=False, active_movement=None)
            else:
                new_state = replace(current, connected=True)
            result = self._commit("toggle_connection", current, new_state)
        self._deliver()
        return result

    def set_speed(self, value: float) -> DeviceState:
        """
        Change the speed setting, clamped to 0-100.

        Only allowed while the device can drive.
        """
        with self._lock:
            result = self._apply_speed("set_speed", value)
        self._deliver()
        return result

    def adjust_speed(self, delta: float) -> DeviceState:
        """Change the speed setting by a signed step"""
        with self._lock:
            if isinstance(delta, bool):
                return self._reject("adjust_speed", f"not a number: {delta!r}")
            try:
                target = self._state.speed_setting + float(delta)
            except (TypeError, ValueError):
                return self._reject("adjust_speed", f"not a number: {delta!r}")
            result = self._apply_speed("adjust_speed", target)
        self._deliver()
        return result

    def begin_move(self, direction: Union[Direction, str]) -> DeviceState:
        """
        Start moving in a direction. Requires power, link and no e-stop.

        A new direction replaces the active one.
        """
        with self._lock:
            current = self._state
            if not current.can_drive:
                return self._reject("begin_move", "device cannot drive")

            try:
                direction = Direction(direction)
            except ValueError:
                logger.warning(f"Ignoring unknown direction: {direction!r}")
                return current

            result = self._commit("begin_move", current, replace(current, active_movement=direction))
        self._deliver()
        return result

    def end_move(self) -> DeviceState:
        """Stop moving. Always accepted, idempotent."""
        with self._lock:
            current = self._state
            result = self._commit("end_move", current, replace(current, active_movement=None))
        self._deliver()
        return result

    def toggle_emergency_stop(self) -> DeviceState:
        """
        Engage or release the emergency stop. Always accepted.

        Both engaging and releasing clear motion; the operator has to
        start moving again explicitly.
        """
        with self._lock:
            current = self._state
            engaged = not current.emergency_stopped
            if engaged:
                logger.critical("EMERGENCY STOP engaged")
            else:
                logger.warning("Emergency stop released")
            new_state = replace(current, emergency_stopped=engaged, active_movement=None)
            result = self._commit("toggle_emergency_stop", current, new_state)
        self._deliver()
        return result

    def tick(self, delta_seconds: float = 1.0) -> DeviceState:
        """
        Advance power depletion by the elapsed time.

        Only has an effect while powered and not emergency-stopped.
        The level drains linearly at config.drain_rate and floors at 0.
        """
        with self._lock:
            current = self._state
            if not current.is_draining:
                return self._reject("tick", "device is not draining")

            try:
                delta_seconds = float(delta_seconds)
            except (TypeError, ValueError):
                delta_seconds = 0.0
            if not math.isfinite(delta_seconds) or delta_seconds < 0:
                delta_seconds = 0.0

            drain = max(0.0, self.config.drain_rate) * delta_seconds
            level = max(0.0, current.power_level - drain)
            new_state = replace(current, power_level=level)

            if level == 0.0 and current.power_level > 0.0:
                logger.warning("Power source depleted")
                if self.config.power_off_when_depleted:
                    logger.warning("Cutting power: source depleted")
                    new_state = replace(
                        new_state, powered=False, connected=False, active_movement=None
                    )

            result = self._commit("tick", current, new_state, log_level=logging.DEBUG)
        self._deliver()
        return result

    def dispatch(self, intent: Intent) -> DeviceState:
        """
        Route an Intent to the matching operation.

        Args:
            intent: Intent from any IntentProvider

        Returns:
            Resulting snapshot
        """
        kind = intent.kind
        if kind == IntentKind.SET_POWER:
            return self.set_power(bool(intent.value))
        if kind == IntentKind.TOGGLE_POWER:
            return self.toggle_power()
        if kind == IntentKind.TOGGLE_CONNECTION:
            return self.toggle_connection()
        if kind == IntentKind.SET_SPEED:
            return self.set_speed(intent.value)
        if kind == IntentKind.ADJUST_SPEED:
            return self.adjust_speed(intent.value)
        if kind == IntentKind.BEGIN_MOVE:
            return self.begin_move(intent.value)
        if kind == IntentKind.END_MOVE:
            return self.end_move()
        if kind == IntentKind.TOGGLE_EMERGENCY_STOP:
            return self.toggle_emergency_stop()
        if kind == IntentKind.TICK:
            return self.tick(1.0 if intent.value is None else intent.value)

        logger.warning(f"Ignoring unsupported intent: {kind}")
        return self._state

    # Internals (callers hold the lock)

    def _apply_power(self, on: bool) -> DeviceState:
        current = self._state
        if on:
            new_state = replace(current, powered=True)
        else:
            new_state = replace(current, powered=False, connected=False, active_movement=None)
        return self._commit("set_power", current, new_state)

    def _apply_speed(self, operation: str, value: float) -> DeviceState:
        current = self._state
        if not current.can_drive:
            return self._reject(operation, "device cannot drive")

        # bool is an int subclass, float(True) would pass
        if isinstance(value, bool):
            return self._reject(operation, f"not a number: {value!r}")
        try:
            value = float(value)
        except (TypeError, ValueError):
            return self._reject(operation, f"not a number: {value!r}")
        if math.isnan(value):
            return self._reject(operation, "not a number: nan")

        new_state = replace(current, speed_setting=_clamp(value, SPEED_MIN, SPEED_MAX))
        return self._commit(operation, current, new_state)

    def _reject(self, operation: str, reason: str) -> DeviceState:
        logger.debug(f"Rejected {operation}: {reason}")
        return self._state

    def _commit(
        self,
        operation: str,
        old_state: DeviceState,
        new_state: DeviceState,
        log_level: int = logging.INFO,
    ) -> DeviceState:
        """
        Store the new snapshot and queue it for observers if anything changed.

        Must be called with the lock held. Delivery happens in _deliver()
        once the caller has released the lock.
        """
        if new_state == old_state:
            return old_state

        self._state = new_state
        self._pending.append((old_state, new_state))
        logger.log(log_level, f"{operation}: {new_state.describe()}")
        return new_state

    def _deliver(self) -> None:
        """
        Notify observers of queued changes, outside the lock.

        Only one thread delivers at a time. A callback that issues an
        intent from the delivering thread has its change queued behind
        the current one and delivered by the same loop.
        """
        with self._lock:
            if self._delivering or not self._pending:
                return
            self._delivering = True

        try:
            while True:
                with self._lock:
                    if not self._pending:
                        self._delivering = False
                        return
                    old_state, new_state = self._pending.popleft()
                    callbacks = list(self._state_callbacks)

                for callback in callbacks:
                    try:
                        callback(old_state, new_state)
                    except Exception as e:
                        logger.error(f"Error in state callback: {e}", exc_info=True)
        except BaseException:
            with self._lock:
                self._delivering = False
            raise


def _clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp value to range [min_val, max_val]"""
    return max(min_val, min(max_val, value))
