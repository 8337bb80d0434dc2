"""Intent provider module"""

from wcs_input.mock_input import MockInput, TestScripts
from wcs_input.gamepad_input import GamepadInput, HAS_PYGAME

__all__ = ["MockInput", "TestScripts", "GamepadInput", "HAS_PYGAME"]
