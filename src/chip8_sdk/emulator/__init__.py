"""
CHIP-8 Virtual Machine
======================

An instruction-level emulator for the base CHIP-8 instruction set, built to be
embedded in a host application.

This package provides:

- **Execution Engine**: Full base instruction set, carry/borrow/shift flags
- **Memory Image**: 4 KiB with the built-in hex font at $000
- **Display Surface**: 64 × 32 XOR framebuffer with collision reporting
- **Keypad**: 16 keys plus the blocking key-wait state
- **Timers**: Delay and sound timers driven by the host's 60 Hz tick

The core performs no I/O. The host loads program bytes, calls `step()` and
`tick()` at rates of its choosing, and reads back the display, sound and
error state.

Quick Start
-----------

Basic usage::

    >>> from chip8_sdk.emulator import Emulator
    >>> emu = Emulator()
    >>> emu.load_program(rom_bytes)
    >>> for _ in range(600):
    ...     emu.run_frame(steps_per_tick=10)
    >>> print(emu.display.get_text())

Deterministic runs::

    >>> emu = Emulator(EmulatorConfig(seed=42))

Module Structure
----------------

- `emulator.py`: Main Emulator class (host API)
- `cpu.py`: Execution engine, registers and call stack
- `memory.py`: Memory image and font
- `display.py`: Framebuffer
- `keypad.py`: Keypad and key-wait state
- `timers.py`: Delay and sound timers

Copyright (c) 2026 chip8-sdk Contributors
"""

# Main entry point
from .emulator import Emulator, EmulatorConfig

# CPU components
from .cpu import Chip8CPU, CPUState

# Memory subsystem
from .memory import Memory, FONT, MEMORY_SIZE, PROGRAM_START, MAX_PROGRAM_SIZE

# I/O
from .display import Display, DISPLAY_WIDTH, DISPLAY_HEIGHT
from .keypad import Keypad, key_index, HOST_KEY_TO_KEYPAD
from .timers import Timers

__all__ = [
    # Main API
    "Emulator",
    "EmulatorConfig",

    # CPU
    "Chip8CPU",
    "CPUState",

    # Memory
    "Memory",
    "FONT",
    "MEMORY_SIZE",
    "PROGRAM_START",
    "MAX_PROGRAM_SIZE",

    # Display
    "Display",
    "DISPLAY_WIDTH",
    "DISPLAY_HEIGHT",

    # Keypad
    "Keypad",
    "key_index",
    "HOST_KEY_TO_KEYPAD",

    # Timers
    "Timers",
]
