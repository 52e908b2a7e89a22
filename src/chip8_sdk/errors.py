"""
CHIP-8 SDK Error Hierarchy
==========================

This module defines the exception hierarchy for the CHIP-8 SDK.
All exceptions inherit from Chip8Error, allowing callers to catch all
SDK-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
Chip8Error (base)
├── ProgramSizeError - program image does not fit in memory
├── KeyIndexError - keypad index outside 0-15 (strict mode only)
├── KeyNameError - host key name with no keypad mapping
└── RomFileError - ROM file cannot be read by a host tool

Machine Errors Are Values
-------------------------
Faults raised by the *running program* (an unrecognised opcode, or a stack
overflow in strict mode) are never thrown. The execution engine records a
`MachineError` value and halts; the host polls `Emulator.error` after
stepping. Exceptions here are reserved for host-side contract violations.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class Chip8Error(Exception):
    """
    Base exception for all CHIP-8 SDK errors.

        try:
            emu.load_program(data)
        except Chip8Error as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Host Contract Exceptions
# =============================================================================

class ProgramSizeError(Chip8Error):
    """
    Raised when a program image is larger than the program area.

    Attributes:
        size: Size of the rejected program in bytes
        max_size: Largest program that fits
    """

    def __init__(self, size: int, max_size: int):
        self.size = size
        self.max_size = max_size
        super().__init__(
            f"program is {size} bytes, the program area holds at most {max_size}"
        )


class KeyIndexError(Chip8Error):
    """Raised in strict mode when a keypad index is outside 0-15."""

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"key index must be 0-15, got {index}")


class KeyNameError(Chip8Error):
    """Raised when a host key name has no keypad mapping."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown key name: {name!r}")


class RomFileError(Chip8Error):
    """
    Raised by host tools when a ROM file cannot be used.

    Attributes:
        path: Path of the offending file (as given)
    """

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)


# =============================================================================
# Machine Error State
# =============================================================================

class ErrorKind(Enum):
    """Kinds of fault that halt the execution engine."""
    UNRECOGNIZED_OPCODE = auto()
    STACK_OVERFLOW = auto()   # strict mode only
    STACK_UNDERFLOW = auto()  # strict mode only


@dataclass(frozen=True)
class MachineError:
    """
    Terminal fault recorded by the execution engine.

    Attributes:
        kind: What went wrong
        opcode: 16-bit opcode being executed
        address: Address the opcode was fetched from
    """
    kind: ErrorKind
    opcode: int
    address: int

    @property
    def message(self) -> str:
        """Human-readable description of the fault."""
        if self.kind is ErrorKind.UNRECOGNIZED_OPCODE:
            what = "Unrecognized opcode"
        elif self.kind is ErrorKind.STACK_OVERFLOW:
            what = "Stack overflow on"
        else:
            what = "Stack underflow on"
        return f"{what} {self.opcode:04X} at ${self.address:03X}"

    def __str__(self) -> str:
        return self.message
