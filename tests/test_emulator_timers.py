"""
Timer Unit Tests
================

Tests for the delay and sound timers.
"""

from chip8_sdk.emulator import Timers


class TestTimers:
    """Test countdown and sound behavior."""

    def test_initial(self):
        timers = Timers()
        assert timers.delay == 0
        assert timers.sound == 0
        assert timers.should_emit_sound is False

    def test_tick_decrements(self):
        timers = Timers(delay=5, sound=2)
        timers.tick()
        assert (timers.delay, timers.sound) == (4, 1)

    def test_tick_floors_at_zero(self):
        timers = Timers()
        timers.tick()
        assert (timers.delay, timers.sound) == (0, 0)

    def test_independent(self):
        timers = Timers(delay=3, sound=1)
        timers.tick()
        timers.tick()
        assert (timers.delay, timers.sound) == (1, 0)

    def test_sound_while_nonzero(self):
        timers = Timers(sound=2)
        assert timers.should_emit_sound is True
        timers.tick()
        assert timers.should_emit_sound is True
        timers.tick()
        assert timers.should_emit_sound is False

    def test_reset(self):
        timers = Timers(delay=9, sound=9)
        timers.reset()
        assert (timers.delay, timers.sound) == (0, 0)
