"""
Gamepad Intent Provider

Reads operator intents from USB/wireless game controllers.
Button numbers follow the common XInput layout.
"""

import logging
from collections import deque
from typing import Deque, Dict, Optional, Tuple

try:
    import pygame
    HAS_PYGAME = True
except ImportError:
    HAS_PYGAME = False

from wcs_core.types import Direction, Intent


logger = logging.getLogger(__name__)


class GamepadInput:
    """
    Game controller intent provider.

    Maps gamepad controls to wheelchair intents:
    - START: Power on/off
    - Y: Connect/disconnect the link
    - B: Emergency stop on/off
    - LB / RB: Speed down / up
    - Left stick or D-pad: Move while held
    """

    BUTTON_B = 1
    BUTTON_Y = 3
    BUTTON_LB = 4
    BUTTON_RB = 5
    BUTTON_START = 7

    def __init__(
        self,
        deadzone: float = 0.3,
        speed_step: float = 10.0,
        invert_y: bool = False
    ) -> None:
        """
        Initialize gamepad input.

        Args:
            deadzone: Ignore stick movements below this threshold
            speed_step: Speed change per shoulder button press
            invert_y: Invert Y-axis (some controllers are backwards)
        """
        if not HAS_PYGAME:
            raise RuntimeError(
                "pygame not installed. Install with: pip install pygame"
            )

        self._deadzone = deadzone
        self._speed_step = speed_step
        self._invert_y = invert_y

        self._joystick: Optional["pygame.joystick.Joystick"] = None
        self._running = False

        self._axis_x = 0    # Left stick X
        self._axis_y = 1    # Left stick Y

        self._buttons_down: Dict[int, bool] = {}
        self._held_direction: Optional[Direction] = None
        self._pending: Deque[Intent] = deque()

    async def start(self) -> None:
        """Initialize pygame and connect to controller"""
        if self._running:
            return

        logger.info("Initializing gamepad input...")

        pygame.init()
        pygame.joystick.init()

        joystick_count = pygame.joystick.get_count()
        logger.info(f"Found {joystick_count} game controller(s)")

        if joystick_count == 0:
            raise RuntimeError("No game controllers found")

        self._joystick = pygame.joystick.Joystick(0)
        self._joystick.init()
        logger.info(f"Selected: {self._joystick.get_name()}")
        logger.info("Controls:")
        logger.info("  START: Power on/off")
        logger.info("  Y: Connect/disconnect")
        logger.info("  B: Emergency stop")
        logger.info("  LB/RB: Speed down/up")
        logger.info("  Left stick / D-pad: Move (hold)")

        self._running = True

    async def stop(self) -> None:
        """Disconnect from controller"""
        logger.info("Stopping gamepad input")
        self._running = False
        self._pending.clear()

        if self._joystick:
            self._joystick.quit()
            self._joystick = None

        pygame.joystick.quit()
        pygame.quit()

    async def read_intent(self) -> Optional[Intent]:
        """Return the next intent produced by the controller, if any"""
        if not self._running or not self._joystick:
            return None

        if not self._pending:
            pygame.event.pump()
            self._poll()

        if self._pending:
            return self._pending.popleft()
        return None

    def _poll(self) -> None:
        """Translate current controller state into queued intents"""
        if self._pressed(self.BUTTON_START):
            self._pending.append(Intent.toggle_power())
        if self._pressed(self.BUTTON_Y):
            self._pending.append(Intent.toggle_connection())
        if self._pressed(self.BUTTON_B):
            self._pending.append(Intent.emergency_stop())
        if self._pressed(self.BUTTON_LB):
            self._pending.append(Intent.adjust_speed(-self._speed_step))
        if self._pressed(self.BUTTON_RB):
            self._pending.append(Intent.adjust_speed(self._speed_step))

        hat = self._joystick.get_hat(0) if self._joystick.get_numhats() > 0 else (0, 0)
        x = self._joystick.get_axis(self._axis_x)
        y = self._joystick.get_axis(self._axis_y)
        direction = self.direction_from_axes(x, y, hat, self._deadzone, self._invert_y)

        if direction != self._held_direction:
            if direction is None:
                self._pending.append(Intent.end_move())
            else:
                self._pending.append(Intent.move(direction))
            logger.debug(f"Stick: X={x:+.2f} Y={y:+.2f} Hat={hat} -> {direction}")
            self._held_direction = direction

    def _pressed(self, button: int) -> bool:
        """Edge-detect a button press (down now, up last poll)"""
        if button >= self._joystick.get_numbuttons():
            return False

        down = bool(self._joystick.get_button(button))
        was_down = self._buttons_down.get(button, False)
        self._buttons_down[button] = down
        return down and not was_down

    @staticmethod
    def direction_from_axes(
        x: float,
        y: float,
        hat: Tuple[int, int] = (0, 0),
        deadzone: float = 0.3,
        invert_y: bool = False,
    ) -> Optional[Direction]:
        """
        Pick the dominant direction from stick axes and D-pad.

        The D-pad wins over the stick. Stick Y is negative for up on
        most controllers.
        """
        hat_x, hat_y = hat
        if hat_y > 0:
            return Direction.FORWARD
        if hat_y < 0:
            return Direction.BACKWARD
        if hat_x < 0:
            return Direction.LEFT
        if hat_x > 0:
            return Direction.RIGHT

        forward = y if invert_y else -y
        if abs(x) < deadzone and abs(forward) < deadzone:
            return None

        if abs(forward) >= abs(x):
            return Direction.FORWARD if forward > 0 else Direction.BACKWARD
        return Direction.RIGHT if x > 0 else Direction.LEFT
