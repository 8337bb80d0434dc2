"""Tests for core types"""

import dataclasses

import pytest
from wcs_core.types import (
    CommandFrame,
    DeviceState,
    Direction,
    Intent,
    IntentKind,
    MapperConfig,
    PowerBand,
    RunnerConfig,
    SupervisorConfig,
)


def test_device_state_defaults():
    """Test default snapshot matches the power-up state"""
    state = DeviceState()
    assert state.powered is False
    assert state.connected is False
    assert state.emergency_stopped is False
    assert state.power_level == 100.0
    assert state.speed_setting == 50.0
    assert state.active_movement is None


def test_device_state_is_immutable():
    """Test snapshots cannot be modified"""
    state = DeviceState()
    with pytest.raises(dataclasses.FrozenInstanceError):
        state.powered = True


def test_device_state_can_drive():
    """Test drive gate needs power, link and no e-stop"""
    assert DeviceState(powered=True, connected=True).can_drive is True
    assert DeviceState(powered=True, connected=False).can_drive is False
    assert DeviceState(powered=False, connected=True).can_drive is False
    assert DeviceState(powered=True, connected=True, emergency_stopped=True).can_drive is False


def test_device_state_is_draining():
    """Test drain gate needs power and no e-stop"""
    assert DeviceState(powered=True).is_draining is True
    assert DeviceState(powered=False).is_draining is False
    assert DeviceState(powered=True, emergency_stopped=True).is_draining is False


def test_power_band_thresholds():
    """Test battery band boundaries"""
    assert DeviceState(power_level=100.0).power_band == PowerBand.NORMAL
    assert DeviceState(power_level=50.1).power_band == PowerBand.NORMAL
    assert DeviceState(power_level=50.0).power_band == PowerBand.LOW
    assert DeviceState(power_level=20.1).power_band == PowerBand.LOW
    assert DeviceState(power_level=20.0).power_band == PowerBand.CRITICAL
    assert DeviceState(power_level=0.0).power_band == PowerBand.CRITICAL


def test_power_percent_rounds():
    """Test displayed percentage"""
    assert DeviceState(power_level=94.6).power_percent == 95
    assert DeviceState(power_level=94.4).power_percent == 94


def test_labels():
    """Test status labels"""
    assert DeviceState().status_label == "Ready"
    assert DeviceState(emergency_stopped=True).status_label == "EMERGENCY STOP"
    assert DeviceState().link_label == "Disconnected"
    assert DeviceState(powered=True, connected=True).link_label == "Connected"


def test_describe_mentions_movement():
    """Test log summary"""
    state = DeviceState(powered=True, connected=True, active_movement=Direction.LEFT)
    text = state.describe()
    assert "power=on" in text
    assert "move=left" in text
    assert "move=none" in DeviceState().describe()


def test_direction_from_string():
    """Test directions parse from their values"""
    assert Direction("forward") is Direction.FORWARD
    assert Direction("backward") is Direction.BACKWARD
    assert Direction("left") is Direction.LEFT
    assert Direction("right") is Direction.RIGHT


def test_intent_constructors():
    """Test intent helpers"""
    assert Intent.power(True) == Intent(IntentKind.SET_POWER, True)
    assert Intent.move("left").kind == IntentKind.BEGIN_MOVE
    assert Intent.speed(30).value == 30
    assert Intent.tick(1.0).kind == IntentKind.TICK
    assert Intent.end_move().value is None


def test_intent_equality_ignores_timestamp():
    """Test intents compare by kind and value"""
    a = Intent(IntentKind.TOGGLE_CONNECTION, timestamp=1.0)
    b = Intent(IntentKind.TOGGLE_CONNECTION, timestamp=2.0)
    assert a == b


def test_command_frame_valid():
    """Test valid command frame creation"""
    frame = CommandFrame(left_speed=50, right_speed=-60)
    assert frame.left_speed == 50
    assert frame.right_speed == -60
    assert frame.timestamp > 0


def test_command_frame_validation():
    """Test command frame validates ranges"""
    with pytest.raises(AssertionError):
        CommandFrame(left_speed=150, right_speed=50)

    with pytest.raises(AssertionError):
        CommandFrame(left_speed=50, right_speed=-150)


def test_command_frame_stop():
    """Test stop command creation"""
    stop = CommandFrame.stop()
    assert stop.is_stop is True
    assert stop.left_speed == 0
    assert stop.right_speed == 0


def test_config_defaults():
    """Test configuration defaults"""
    assert SupervisorConfig().drain_rate == 0.1
    assert SupervisorConfig().power_off_when_depleted is False
    assert MapperConfig().turn_scale == 0.5
    assert RunnerConfig().tick_interval == 1.0
