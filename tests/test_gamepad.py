"""Tests for gamepad intent mapping (no controller needed)"""

import pytest
from wcs_core.types import Direction, Intent
from wcs_input import gamepad_input
from wcs_input.gamepad_input import GamepadInput


direction_from_axes = GamepadInput.direction_from_axes


def test_neutral_stick_is_none():
    """Centered stick means no movement"""
    assert direction_from_axes(0.0, 0.0) is None
    assert direction_from_axes(0.1, -0.2, deadzone=0.3) is None


@pytest.mark.parametrize("x, y, expected", [
    (0.0, -1.0, Direction.FORWARD),    # Up is negative on most controllers
    (0.0, 1.0, Direction.BACKWARD),
    (-1.0, 0.0, Direction.LEFT),
    (1.0, 0.0, Direction.RIGHT),
    (0.4, -0.9, Direction.FORWARD),    # Dominant axis wins
    (-0.9, 0.4, Direction.LEFT),
])
def test_stick_directions(x, y, expected):
    assert direction_from_axes(x, y) == expected


def test_invert_y():
    """Inverted controllers report up as positive"""
    assert direction_from_axes(0.0, 1.0, invert_y=True) == Direction.FORWARD


@pytest.mark.parametrize("hat, expected", [
    ((0, 1), Direction.FORWARD),
    ((0, -1), Direction.BACKWARD),
    ((-1, 0), Direction.LEFT),
    ((1, 0), Direction.RIGHT),
])
def test_dpad_directions(hat, expected):
    assert direction_from_axes(0.0, 0.0, hat) == expected


def test_dpad_overrides_stick():
    """D-pad wins over the stick"""
    assert direction_from_axes(1.0, 0.0, (0, -1)) == Direction.BACKWARD


class FakeJoystick:
    """Stands in for pygame.joystick.Joystick"""

    def __init__(self, buttons=12):
        self.buttons = [0] * buttons
        self.axes = [0.0, 0.0]
        self.hat = (0, 0)

    def get_numbuttons(self):
        return len(self.buttons)

    def get_button(self, button):
        return self.buttons[button]

    def get_numhats(self):
        return 1

    def get_hat(self, index):
        return self.hat

    def get_axis(self, axis):
        return self.axes[axis]


@pytest.fixture
def gamepad(monkeypatch):
    """GamepadInput wired to a fake controller"""
    monkeypatch.setattr(gamepad_input, "HAS_PYGAME", True)
    pad = GamepadInput()
    pad._joystick = FakeJoystick()
    pad._running = True
    return pad


def drain(pad):
    intents = list(pad._pending)
    pad._pending.clear()
    return intents


def test_button_held_fires_once(gamepad):
    """Holding START across polls toggles power only once"""
    gamepad._joystick.buttons[GamepadInput.BUTTON_START] = 1
    gamepad._poll()
    gamepad._poll()
    assert drain(gamepad) == [Intent.toggle_power()]

    # Release and press again
    gamepad._joystick.buttons[GamepadInput.BUTTON_START] = 0
    gamepad._poll()
    gamepad._joystick.buttons[GamepadInput.BUTTON_START] = 1
    gamepad._poll()
    assert drain(gamepad) == [Intent.toggle_power()]


@pytest.mark.parametrize("button, expected", [
    (GamepadInput.BUTTON_Y, Intent.toggle_connection()),
    (GamepadInput.BUTTON_B, Intent.emergency_stop()),
    (GamepadInput.BUTTON_LB, Intent.adjust_speed(-10.0)),
    (GamepadInput.BUTTON_RB, Intent.adjust_speed(10.0)),
])
def test_button_mapping(gamepad, button, expected):
    gamepad._joystick.buttons[button] = 1
    gamepad._poll()
    assert drain(gamepad) == [expected]


def test_stick_forward_then_center(gamepad):
    """Pushing the stick starts motion, releasing it ends motion"""
    gamepad._joystick.axes[1] = -1.0
    gamepad._poll()
    gamepad._joystick.axes[1] = 0.0
    gamepad._poll()

    assert drain(gamepad) == [Intent.move(Direction.FORWARD), Intent.end_move()]


def test_held_direction_not_repeated(gamepad):
    """Holding a direction only begins the move once"""
    gamepad._joystick.axes[1] = -1.0
    for _ in range(3):
        gamepad._poll()
    assert drain(gamepad) == [Intent.move(Direction.FORWARD)]

    # Changing direction replaces the move without an end in between
    gamepad._joystick.axes[1] = 0.0
    gamepad._joystick.hat = (1, 0)
    gamepad._poll()
    gamepad._poll()
    assert drain(gamepad) == [Intent.move(Direction.RIGHT)]


def test_centered_stick_queues_nothing(gamepad):
    gamepad._poll()
    assert drain(gamepad) == []


def test_missing_buttons_ignored(gamepad):
    """Controllers with fewer buttons never report them pressed"""
    gamepad._joystick = FakeJoystick(buttons=4)
    gamepad._joystick.buttons[GamepadInput.BUTTON_Y] = 1
    gamepad._poll()
    assert drain(gamepad) == [Intent.toggle_connection()]
