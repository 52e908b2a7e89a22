"""
Delay and Sound Timers
======================

Two byte counters that count down once per call to `tick()`. The host calls
`tick()` at 60 Hz no matter how many instructions it runs in between, so timer
pacing never drifts with the instruction rate.

Copyright (c) 2026 chip8-sdk Contributors
"""

from dataclasses import dataclass


@dataclass
class Timers:
    """
    Delay and sound down-counters.

    Attributes:
        delay: Delay timer, readable by programs via Fx07
        sound: Sound timer; the host beeps while it is nonzero
    """
    delay: int = 0
    sound: int = 0

    def tick(self) -> None:
        """Decrement each nonzero timer by one."""
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1

    def reset(self) -> None:
        self.delay = 0
        self.sound = 0

    @property
    def should_emit_sound(self) -> bool:
        """True while the sound timer is running."""
        return self.sound > 0
