"""
Memory Image for the CHIP-8 Virtual Machine
===========================================

Memory Map:
    $000-$04F  Built-in hexadecimal font (16 glyphs × 5 bytes)
    $050-$1FF  Unused (zero), historically the interpreter
    $200-$FFF  Program area

Addresses are not wrapped. Reads beyond $FFF return 0 and writes beyond
$FFF are dropped, so lenient programs that stray off the end of memory
keep running.

Copyright (c) 2026 chip8-sdk Contributors
"""

import logging
from typing import Iterable

from ..errors import ProgramSizeError

logger = logging.getLogger(__name__)

MEMORY_SIZE = 0x1000
PROGRAM_START = 0x200
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START

# Bytes per font glyph
GLYPH_SIZE = 5

# =============================================================================
# FONT
# =============================================================================
# Hex digits 0-F, 5 rows each. Only the high nibble of each row is lit.

FONT = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])


class Memory:
    """
    Flat 4 KiB byte store with the font preloaded at address 0.

    Example:
        >>> mem = Memory()
        >>> mem.load_program(bytes([0x12, 0x00]))
        >>> hex(mem.read(0x200))
        '0x12'
        >>> mem.read(0x2000)
        0
    """

    def __init__(self):
        self._data = bytearray(MEMORY_SIZE)
        self.reset()

    def reset(self) -> None:
        """Zero all memory and reinstall the font."""
        self._data[:] = bytes(MEMORY_SIZE)
        self._data[:len(FONT)] = FONT

    def read(self, address: int) -> int:
        """
        Read byte from memory.

        Args:
            address: Address to read

        Returns:
            Byte value at address, or 0 if outside memory
        """
        if 0 <= address < MEMORY_SIZE:
            return self._data[address]
        return 0

    def write(self, address: int, value: int) -> None:
        """
        Write byte to memory. Writes outside memory are ignored.

        Args:
            address: Address to write
            value: Byte value (truncated to 8 bits)
        """
        if 0 <= address < MEMORY_SIZE:
            self._data[address] = value & 0xFF

    def read_bytes(self, address: int, count: int) -> bytes:
        """Read `count` bytes starting at `address`."""
        return bytes(self.read(address + i) for i in range(count))

    def write_bytes(self, address: int, data: Iterable[int]) -> None:
        """Write bytes starting at `address`."""
        for i, byte in enumerate(data):
            self.write(address + i, byte)

    def load_program(self, data: bytes) -> None:
        """
        Copy a program image into memory at $200.

        Bytes beyond the end of the image keep their previous contents.

        Args:
            data: Raw program bytes

        Raises:
            ProgramSizeError: If the image is larger than the program area.
                Nothing is written in that case.
        """
        if len(data) > MAX_PROGRAM_SIZE:
            raise ProgramSizeError(len(data), MAX_PROGRAM_SIZE)
        self._data[PROGRAM_START:PROGRAM_START + len(data)] = bytes(data)
        logger.debug("Loaded %d program bytes at $%03X", len(data), PROGRAM_START)

    def __len__(self) -> int:
        return MEMORY_SIZE
