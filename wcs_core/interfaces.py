"""
Core interfaces (protocols) for pluggable components.

These define the contracts that intent sources and state observers
must follow. Nothing has to inherit from them; matching the method
signatures is enough.
"""

from typing import Optional, Protocol

from .types import DeviceState, Intent


class IntentProvider(Protocol):
    """
    Interface for intent sources (gamepad, scripted, UI bridge, etc.).

    All intent providers must implement these methods to be usable
    by the SupervisorRunner.
    """

    async def start(self) -> None:
        """
        Initialize and start the provider.

        Called once when the runner starts up.
        May open devices, create connections, etc.
        """
        ...

    async def stop(self) -> None:
        """
        Stop and cleanup the provider.

        Called when shutting down.
        Must close devices, release resources, etc.
        """
        ...

    async def read_intent(self) -> Optional[Intent]:
        """
        Read the next pending operator intent.

        This should be non-blocking and return immediately.
        Returns None if nothing is pending.
        """
        ...


class StateObserver(Protocol):
    """Callback notified after every accepted state change"""

    def __call__(self, old_state: DeviceState, new_state: DeviceState) -> None:
        ...
