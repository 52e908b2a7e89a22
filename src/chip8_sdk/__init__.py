"""
CHIP-8 SDK - Embeddable CHIP-8 Virtual Machine
==============================================

This package provides a virtual machine for programs written for the CHIP-8
instruction set, the interpreted 8-bit system of the COSMAC VIP era.

Main Components
---------------
- **emulator**: The virtual machine core
    Registers, memory, timers, framebuffer and keypad, driven one instruction
    at a time by the host

- **cli**: Command-line tools
    `c8run`, a headless reference host that runs a ROM file and prints or
    saves the resulting screen

Quick Start
-----------
Run a program:
    >>> from chip8_sdk import Emulator
    >>> emu = Emulator()
    >>> emu.load_program(open("maze.ch8", "rb").read())
    >>> emu.run(1000)
    >>> print(emu.display.get_text())

Or use the command-line tool:
    $ c8run maze.ch8 --steps 1000 --screenshot maze.png

Reference Documentation
-----------------------
- Cowgod's CHIP-8 Technical Reference: http://devernay.free.fr/hacks/chip8/C8TECH10.HTM
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from chip8_sdk.emulator import Emulator, EmulatorConfig
from chip8_sdk.errors import (
    Chip8Error,
    ProgramSizeError,
    KeyIndexError,
    KeyNameError,
    RomFileError,
    ErrorKind,
    MachineError,
)

__all__ = [
    "__version__",
    "Emulator",
    "EmulatorConfig",
    "Chip8Error",
    "ProgramSizeError",
    "KeyIndexError",
    "KeyNameError",
    "RomFileError",
    "ErrorKind",
    "MachineError",
]
