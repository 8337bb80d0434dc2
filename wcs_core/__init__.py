"""
WCS Core - Typed, testable supervisory control for a remote-driven wheelchair.

This package contains the core logic:
- Types: Snapshot, intents, command frames, configuration
- Interfaces: Protocols for pluggable intent sources and observers
- Supervisor: Interlocked state machine for power, link, speed, motion and e-stop
- Depletion: Periodic power drain scheduler
- Mapper: Turns a snapshot into a wheel command for an outbound bridge
- Runner: Async loop feeding intents into the supervisor
"""

from .types import (
    CommandFrame,
    DeviceState,
    Direction,
    Intent,
    IntentKind,
    PowerBand,
    MapperConfig,
    RunnerConfig,
    SupervisorConfig,
)
from .interfaces import (
    IntentProvider,
    StateObserver,
)
from .supervisor import ControlSupervisor

__all__ = [
    "CommandFrame",
    "DeviceState",
    "Direction",
    "Intent",
    "IntentKind",
    "PowerBand",
    "MapperConfig",
    "RunnerConfig",
    "SupervisorConfig",
    "IntentProvider",
    "StateObserver",
    "ControlSupervisor",
]
