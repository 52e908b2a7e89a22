"""
Memory Image Unit Tests
=======================

Tests for the 4 KiB memory image:
- Font preloaded at $000
- Program loading at $200
- Lenient out-of-range reads and writes
"""

import pytest
from chip8_sdk.emulator import Memory, FONT, MEMORY_SIZE, PROGRAM_START, MAX_PROGRAM_SIZE
from chip8_sdk.errors import ProgramSizeError


@pytest.fixture
def mem():
    return Memory()


# =============================================================================
# Initial State
# =============================================================================

class TestMemoryInit:
    """Test memory power-on contents."""

    def test_size(self, mem):
        assert len(mem) == MEMORY_SIZE == 4096

    def test_font_present(self, mem):
        """Font occupies addresses 0-79."""
        assert len(FONT) == 80
        assert mem.read_bytes(0, 80) == FONT

    def test_glyph_zero(self, mem):
        assert mem.read_bytes(0, 5) == bytes([0xF0, 0x90, 0x90, 0x90, 0xF0])

    def test_glyph_f(self, mem):
        assert mem.read_bytes(15 * 5, 5) == bytes([0xF0, 0x80, 0xF0, 0x80, 0x80])

    def test_rest_is_zero(self, mem):
        assert mem.read_bytes(80, MEMORY_SIZE - 80) == bytes(MEMORY_SIZE - 80)


# =============================================================================
# Read / Write
# =============================================================================

class TestMemoryAccess:
    """Test byte access and bounds behavior."""

    def test_write_then_read(self, mem):
        mem.write(0x300, 0xAB)
        assert mem.read(0x300) == 0xAB

    def test_write_truncates_value(self, mem):
        mem.write(0x300, 0x1FF)
        assert mem.read(0x300) == 0xFF

    def test_last_address(self, mem):
        mem.write(0xFFF, 0x42)
        assert mem.read(0xFFF) == 0x42

    def test_read_out_of_range_is_zero(self, mem):
        assert mem.read(0x1000) == 0
        assert mem.read(0xFFFF) == 0

    def test_write_out_of_range_ignored(self, mem):
        mem.write(0x1000, 0x55)
        assert mem.read(0x1000) == 0
        # Nothing wrapped around to the start of memory
        assert mem.read(0x000) == FONT[0]

    def test_write_bytes(self, mem):
        mem.write_bytes(0x400, [1, 2, 3])
        assert mem.read_bytes(0x400, 3) == bytes([1, 2, 3])

    def test_read_bytes_past_end(self, mem):
        mem.write(0xFFF, 7)
        assert mem.read_bytes(0xFFF, 3) == bytes([7, 0, 0])


# =============================================================================
# Program Loading
# =============================================================================

class TestProgramLoading:
    """Test loading program images at $200."""

    def test_load_at_0x200(self, mem):
        mem.load_program(bytes([0x12, 0x00]))
        assert PROGRAM_START == 0x200
        assert mem.read(0x200) == 0x12
        assert mem.read(0x201) == 0x00

    def test_load_overwrites(self, mem):
        mem.load_program(bytes([1, 2, 3]))
        mem.load_program(bytes([9]))
        assert mem.read_bytes(0x200, 3) == bytes([9, 2, 3])

    def test_load_does_not_touch_font(self, mem):
        mem.load_program(bytes([0xFF] * 16))
        assert mem.read_bytes(0, 80) == FONT

    def test_load_max_size(self, mem):
        data = bytes([0xAA]) * MAX_PROGRAM_SIZE
        mem.load_program(data)
        assert mem.read(0xFFF) == 0xAA

    def test_load_too_large_rejected(self, mem):
        with pytest.raises(ProgramSizeError) as exc_info:
            mem.load_program(bytes(MAX_PROGRAM_SIZE + 1))
        assert exc_info.value.size == MAX_PROGRAM_SIZE + 1
        assert exc_info.value.max_size == 3584

    def test_load_too_large_writes_nothing(self, mem):
        with pytest.raises(ProgramSizeError):
            mem.load_program(bytes([0x77]) * (MAX_PROGRAM_SIZE + 1))
        assert mem.read(0x200) == 0

    def test_load_logged(self, mem, caplog):
        with caplog.at_level("DEBUG", logger="chip8_sdk.emulator.memory"):
            mem.load_program(bytes(10))
        assert "Loaded 10 program bytes at $200" in caplog.text

    def test_reset_clears_program(self, mem):
        mem.load_program(bytes([1, 2, 3]))
        mem.reset()
        assert mem.read_bytes(0x200, 3) == bytes(3)
        assert mem.read_bytes(0, 80) == FONT
