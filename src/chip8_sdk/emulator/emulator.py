"""
CHIP-8 Emulator - Main Orchestrator
===================================

This module provides the main `Emulator` class that owns every part of the
virtual machine and gives the host a small, polling-style API.

The Emulator class:
- Creates all components (memory, CPU, display, keypad, timers)
- Loads raw program bytes at $200
- Exposes `step()` (one instruction) and `tick()` (one 60 Hz timer tick)
  as independent operations; the host decides how often to call each
- Exposes the display, "display changed", "should emit sound" and error
  state for the host to observe

The emulator performs no I/O. Reading ROM files, presenting frames, playing
sound and polling input are the host's job.

Example usage:
    >>> from chip8_sdk.emulator import Emulator, EmulatorConfig
    >>> emu = Emulator(EmulatorConfig(seed=1))
    >>> emu.load_program(Path("pong.ch8").read_bytes())
    >>> while running:
    ...     emu.run_frame(steps_per_tick=10)
    ...     if emu.consume_display_changed():
    ...         present(emu.display.get_rows())

Copyright (c) 2026 chip8-sdk Contributors
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional

from ..errors import MachineError
from .cpu import Chip8CPU
from .display import Display
from .keypad import Keypad, key_index
from .memory import Memory
from .timers import Timers

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmulatorConfig:
    """
    Configuration for emulator initialization.

    Attributes:
        seed: Seed for the random source used by Cxnn. None seeds from the OS.
        strict: Report misuse that the original machine silently ignored.
                Stack overflow/underflow halts with an error, and out-of-range
                key indices raise KeyIndexError.

    Example:
        >>> config = EmulatorConfig(seed=1234)  # reproducible runs
        >>> config = EmulatorConfig(strict=True)
    """
    seed: Optional[int] = None
    strict: bool = False


class Emulator:
    """
    CHIP-8 virtual machine owned by a host application.

    All state lives in this one object; two emulators never share anything.
    Calls must be serialized by the host if it uses threads.

    Attributes:
        config: The EmulatorConfig used to initialize this instance
        memory: 4 KiB memory image
        display: 64 × 32 framebuffer
        keypad: 16-key keypad and key-wait marker
        timers: Delay and sound timers
        cpu: Execution engine (accessible for low-level inspection)

    Example:
        >>> emu = Emulator()
        >>> emu.load_program(bytes([0x00, 0xE0, 0x6A, 0x05]))
        >>> emu.step(); emu.step()
        >>> emu.cpu.v[0xA]
        5
    """

    def __init__(self, config: Optional[EmulatorConfig] = None, rng: Optional[random.Random] = None):
        """
        Initialize the emulator in its power-on state.

        Args:
            config: EmulatorConfig; defaults are lenient and unseeded
            rng: Random source for Cxnn. Overrides config.seed when given.
        """
        self.config = config or EmulatorConfig()
        if rng is None:
            rng = random.Random(self.config.seed)

        self.memory = Memory()
        self.display = Display()
        self.keypad = Keypad(strict=self.config.strict)
        self.timers = Timers()
        self.cpu = Chip8CPU(
            self.memory,
            self.display,
            self.keypad,
            self.timers,
            rng=rng,
            strict=self.config.strict,
        )

        self._total_steps = 0

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def reset(self) -> None:
        """
        Reset to power-on state with no program loaded.

        - Memory zeroed, font reinstalled
        - Registers, stack and timers zeroed, PC = $200
        - Display cleared, keys released, key-wait cancelled
        - Error state cleared

        The random source is not reseeded.
        """
        self.memory.reset()
        self.cpu.reset()
        self.timers.reset()
        self.keypad.reset()
        self.display.reset()
        self._total_steps = 0
        logger.debug("Emulator reset")

    def load_program(self, data: bytes) -> None:
        """
        Load a program image at $200.

        Args:
            data: Raw program bytes, as produced by the host's ROM reader

        Raises:
            ProgramSizeError: If the image exceeds 3584 bytes
        """
        self.memory.load_program(data)

    # =========================================================================
    # Execution Control
    # =========================================================================

    def step(self) -> bool:
        """
        Execute a single instruction.

        Returns:
            True if an instruction ran; False if halted or waiting for a key
        """
        executed = self.cpu.step()
        if executed:
            self._total_steps += 1
        return executed

    def tick(self) -> None:
        """Advance the delay and sound timers by one 60 Hz period."""
        self.timers.tick()

    def run(self, max_steps: int) -> int:
        """
        Execute up to max_steps instructions.

        Stops early when the machine halts or blocks waiting for a key.
        Timers are not ticked.

        Returns:
            Number of instructions executed
        """
        executed = 0
        while executed < max_steps:
            if not self.step():
                break
            executed += 1
        return executed

    def run_frame(self, steps_per_tick: int = 10) -> int:
        """
        Run one 60 Hz frame: up to steps_per_tick instructions, then one tick.

        The timer tick happens even if the machine is blocked or halted, so a
        program waiting on a key still sees its timers run down.

        Returns:
            Number of instructions executed
        """
        executed = self.run(steps_per_tick)
        self.tick()
        return executed

    # =========================================================================
    # Keypad Input
    # =========================================================================

    def set_key(self, index: int, pressed: bool) -> None:
        """
        Set the state of keypad key 0-15.

        Out-of-range indices are ignored (strict mode: KeyIndexError).
        """
        self.keypad.set_key(index, pressed)

    def press_key(self, name: str, host_layout: bool = False) -> None:
        """
        Press a key by name.

        Args:
            name: Hex digit "0"-"F", or with host_layout a QWERTY key
            host_layout: Map PC keyboard keys (1234/QWER/ASDF/ZXCV)
        """
        self.keypad.set_key(key_index(name, host_layout), True)

    def release_key(self, name: str, host_layout: bool = False) -> None:
        """Release a key by name (see press_key)."""
        self.keypad.set_key(key_index(name, host_layout), False)

    # =========================================================================
    # Observation
    # =========================================================================

    @property
    def display_changed(self) -> bool:
        """True if the display changed since the host last consumed the flag."""
        return self.display.changed

    @display_changed.setter
    def display_changed(self, value: bool) -> None:
        self.display.changed = value

    def consume_display_changed(self) -> bool:
        """Return the display changed flag and lower it."""
        return self.display.consume_changed()

    @property
    def should_emit_sound(self) -> bool:
        """True while the sound timer is nonzero."""
        return self.timers.should_emit_sound

    @property
    def error(self) -> Optional[MachineError]:
        """The fault that halted execution, or None."""
        return self.cpu.error

    @property
    def has_error(self) -> bool:
        return self.cpu.error is not None

    @property
    def error_message(self) -> Optional[str]:
        """Human-readable fault description, or None."""
        error = self.cpu.error
        return error.message if error is not None else None

    @property
    def is_halted(self) -> bool:
        return self.cpu.halted

    @property
    def is_waiting_for_key(self) -> bool:
        return self.keypad.is_waiting

    @property
    def total_steps(self) -> int:
        """Instructions executed since construction or the last reset."""
        return self._total_steps

    @property
    def registers(self) -> dict:
        """
        Snapshot of register values.

        Returns:
            Dictionary with keys v0..vf, i, pc, dt, st, sp
        """
        result = {f"v{index:x}": value for index, value in enumerate(self.cpu.v)}
        result.update({
            "i": self.cpu.i,
            "pc": self.cpu.pc,
            "dt": self.timers.delay,
            "st": self.timers.sound,
            "sp": self.cpu.stack_size,
        })
        return result

    # =========================================================================
    # Memory Access
    # =========================================================================

    def read_byte(self, address: int) -> int:
        return self.memory.read(address)

    def read_bytes(self, address: int, count: int) -> bytes:
        return self.memory.read_bytes(address, count)

    def write_byte(self, address: int, value: int) -> None:
        self.memory.write(address, value)

    def __repr__(self) -> str:
        return (
            f"Emulator(pc=${self.cpu.pc:03X}, "
            f"steps={self._total_steps}, "
            f"halted={self.is_halted})"
        )
