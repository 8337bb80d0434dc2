"""
Mapper - Turns a device snapshot into a wheel command.

This is what an outbound drive bridge forwards to the actuators. The
Mapper enforces, again, that nothing but a stop frame comes out unless
the snapshot says the device can drive and a movement is active.

Differential drive:
- forward / backward: both wheels at the speed setting
- left / right: wheels counter-rotate at a fraction of the setting
"""

from .types import CommandFrame, DeviceState, Direction, MapperConfig


class Mapper:
    """Transforms DeviceState into CommandFrame"""

    def __init__(self, config: MapperConfig) -> None:
        """
        Initialize mapper with configuration.

        Args:
            config: Mapper configuration (turn scale, speed limit)
        """
        self.config = config

    def map(self, state: DeviceState) -> CommandFrame:
        """
        Convert a snapshot to the wheel command it implies.

        Args:
            state: Snapshot from the supervisor

        Returns:
            CommandFrame to forward (a stop frame when not driving)
        """
        # SAFETY: interlocks are re-checked here, not trusted
        if state.active_movement is None or not state.can_drive:
            return CommandFrame.stop()

        max_speed = max(0, min(100, self.config.max_speed))
        speed = self._clamp(state.speed_setting, 0, max_speed)
        turn = self._clamp(speed * self.config.turn_scale, 0, max_speed)

        left, right = self._differential_drive(state.active_movement, speed, turn)

        return CommandFrame(
            left_speed=int(round(left)),
            right_speed=int(round(right)),
        )

    def _differential_drive(self, direction: Direction, speed: float, turn: float) -> tuple[float, float]:
        """
        Wheel speeds for a direction.

        Returns:
            (left_speed, right_speed)
        """
        if direction == Direction.FORWARD:
            return speed, speed
        if direction == Direction.BACKWARD:
            return -speed, -speed
        if direction == Direction.LEFT:
            return -turn, turn
        return turn, -turn

    def _clamp(self, value: float, min_val: float, max_val: float) -> float:
        """Clamp value to range [min_val, max_val]"""
        return max(min_val, min(max_val, value))
