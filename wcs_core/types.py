"""
Core data types for the WCS control system.

All the data structures that flow through the system, fully typed.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional
import time


class Direction(Enum):
    """Directions the operator can drive in"""
    FORWARD = "forward"
    BACKWARD = "backward"
    LEFT = "left"
    RIGHT = "right"


class PowerBand(Enum):
    """Coarse power level band, used for status display"""
    NORMAL = "normal"      # Above 50%
    LOW = "low"            # 20% < level <= 50%
    CRITICAL = "critical"  # 20% and below


class IntentKind(Enum):
    """Kinds of operator intents accepted by the supervisor"""
    SET_POWER = "set_power"
    TOGGLE_POWER = "toggle_power"
    TOGGLE_CONNECTION = "toggle_connection"
    SET_SPEED = "set_speed"
    ADJUST_SPEED = "adjust_speed"
    BEGIN_MOVE = "begin_move"
    END_MOVE = "end_move"
    TOGGLE_EMERGENCY_STOP = "toggle_emergency_stop"
    TICK = "tick"


POWER_LEVEL_MAX = 100.0
SPEED_MIN = 0.0
SPEED_MAX = 100.0


@dataclass(frozen=True)
class DeviceState:
    """
    Snapshot of the device state.

    The supervisor owns the only live copy; everything handed out to
    callers and observers is one of these immutable snapshots.
    """
    powered: bool = False
    connected: bool = False
    emergency_stopped: bool = False
    power_level: float = POWER_LEVEL_MAX      # 0-100
    speed_setting: float = 50.0               # 0-100
    active_movement: Optional[Direction] = None

    @property
    def can_drive(self) -> bool:
        """Check if motion intents are allowed"""
        return self.powered and self.connected and not self.emergency_stopped

    @property
    def is_draining(self) -> bool:
        """Check if the power source is being depleted"""
        return self.powered and not self.emergency_stopped

    @property
    def is_moving(self) -> bool:
        return self.active_movement is not None

    @property
    def power_percent(self) -> int:
        """Power level rounded for display"""
        return int(round(self.power_level))

    @property
    def power_band(self) -> PowerBand:
        if self.power_level > 50:
            return PowerBand.NORMAL
        if self.power_level > 20:
            return PowerBand.LOW
        return PowerBand.CRITICAL

    @property
    def status_label(self) -> str:
        return "EMERGENCY STOP" if self.emergency_stopped else "Ready"

    @property
    def link_label(self) -> str:
        return "Connected" if self.connected else "Disconnected"

    def describe(self) -> str:
        """One-line summary for logs"""
        movement = self.active_movement.value if self.active_movement else "none"
        return (
            f"power={'on' if self.powered else 'off'} "
            f"link={self.link_label.lower()} "
            f"status={self.status_label} "
            f"battery={self.power_level:.1f}% "
            f"speed={self.speed_setting:.0f}% "
            f"move={movement}"
        )


@dataclass(frozen=True)
class Intent:
    """
    A caller-issued request to change the device state.

    `value` carries the argument for the kinds that take one:
    bool for SET_POWER, number for SET_SPEED / ADJUST_SPEED / TICK,
    Direction (or its string value) for BEGIN_MOVE.
    """
    kind: IntentKind
    value: Any = None
    timestamp: float = field(default_factory=time.time, compare=False)

    @classmethod
    def power(cls, on: bool) -> "Intent":
        return cls(IntentKind.SET_POWER, on)

    @classmethod
    def toggle_power(cls) -> "Intent":
        return cls(IntentKind.TOGGLE_POWER)

    @classmethod
    def toggle_connection(cls) -> "Intent":
        return cls(IntentKind.TOGGLE_CONNECTION)

    @classmethod
    def speed(cls, value: float) -> "Intent":
        return cls(IntentKind.SET_SPEED, value)

    @classmethod
    def adjust_speed(cls, delta: float) -> "Intent":
        return cls(IntentKind.ADJUST_SPEED, delta)

    @classmethod
    def move(cls, direction: Any) -> "Intent":
        return cls(IntentKind.BEGIN_MOVE, direction)

    @classmethod
    def end_move(cls) -> "Intent":
        return cls(IntentKind.END_MOVE)

    @classmethod
    def emergency_stop(cls) -> "Intent":
        return cls(IntentKind.TOGGLE_EMERGENCY_STOP)

    @classmethod
    def tick(cls, delta_seconds: float) -> "Intent":
        return cls(IntentKind.TICK, delta_seconds)


@dataclass
class CommandFrame:
    """
    Command frame for an outbound drive bridge.

    This is the output of the Mapper.
    Contains wheel speed values ready for transmission.
    """
    left_speed: int              # Left wheel speed: -100 to 100
    right_speed: int             # Right wheel speed: -100 to 100
    timestamp: float = field(default_factory=time.time)

    def __post_init__(self) -> None:
        """Validate ranges"""
        assert -100 <= self.left_speed <= 100, f"left_speed out of range: {self.left_speed}"
        assert -100 <= self.right_speed <= 100, f"right_speed out of range: {self.right_speed}"

    @property
    def is_stop(self) -> bool:
        """Check if this is a stop command"""
        return self.left_speed == 0 and self.right_speed == 0

    @classmethod
    def stop(cls) -> "CommandFrame":
        """Create a stop command"""
        return cls(left_speed=0, right_speed=0)


@dataclass
class SupervisorConfig:
    """Configuration for the ControlSupervisor"""
    drain_rate: float = 0.1                  # Power units lost per second while draining
    initial_power_level: float = POWER_LEVEL_MAX
    initial_speed: float = 50.0
    power_off_when_depleted: bool = False    # Cut power on the tick that reaches 0%


@dataclass
class MapperConfig:
    """Configuration for the Mapper"""
    turn_scale: float = 0.5            # Fraction of speed setting used when turning in place
    max_speed: int = 100               # Hard limit on wheel speed (0-100)


@dataclass
class RunnerConfig:
    """Configuration for the SupervisorRunner"""
    loop_interval: float = 0.05        # Intent polling interval (20Hz)
    tick_interval: float = 1.0         # Depletion tick interval (1Hz)
