"""
Monochrome Display Surface for the CHIP-8 Virtual Machine
=========================================================

The display is a 64 × 32 grid of pixels, each either lit or unlit.

Sprites are drawn by XOR: each set bit in a sprite row toggles the pixel
beneath it. A draw reports a collision when it turns at least one lit pixel
off. Pixels that fall past the right or bottom edge are clipped; sprites do
not wrap around.

The `changed` flag is raised whenever a pixel flips. Only the host lowers it,
normally with `consume_changed()` once it has presented a frame.

Copyright (c) 2026 chip8-sdk Contributors
"""

import io
from typing import List, Protocol, Tuple

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32

# Sprite rows are one byte wide
SPRITE_WIDTH = 8


class SpriteSource(Protocol):
    """Anything that can supply sprite bytes (normally `Memory`)."""

    def read(self, address: int) -> int:
        ...


class Display:
    """
    64 × 32 XOR framebuffer with collision reporting.

    Pixels are stored row-major: pixel (x, y) lives at index x + y * 64.

    Example:
        >>> display = Display()
        >>> display.draw(0, 0, 0x000, 5, memory)  # glyph "0" from the font
        False
        >>> display.get_pixel(0, 0)
        True
        >>> display.consume_changed()
        True
    """

    def __init__(self):
        self._pixels = [False] * (DISPLAY_WIDTH * DISPLAY_HEIGHT)
        self._changed = False

    @property
    def width(self) -> int:
        return DISPLAY_WIDTH

    @property
    def height(self) -> int:
        return DISPLAY_HEIGHT

    @property
    def changed(self) -> bool:
        """True if any pixel has flipped since the flag was last lowered."""
        return self._changed

    @changed.setter
    def changed(self, value: bool) -> None:
        self._changed = value

    def consume_changed(self) -> bool:
        """Return the changed flag and lower it."""
        changed = self._changed
        self._changed = False
        return changed

    # =========================================================================
    # Drawing
    # =========================================================================

    def clear(self) -> None:
        """Turn every pixel off. Raises `changed` only if something was lit."""
        any_changed = False
        for index, lit in enumerate(self._pixels):
            if lit:
                self._pixels[index] = False
                any_changed = True
        self._changed |= any_changed

    def reset(self) -> None:
        """Power-on state: blank screen."""
        self.clear()

    def draw(self, sx: int, sy: int, address: int, height: int, source: SpriteSource) -> bool:
        """
        XOR a sprite onto the display.

        Args:
            sx: Left column of the sprite
            sy: Top row of the sprite
            address: Address of the first sprite row (row addresses wrap at
                     16 bits)
            height: Number of sprite rows (bytes)
            source: Where sprite bytes are read from

        Returns:
            True if any lit pixel was turned off
        """
        any_unset = False
        any_changed = False

        for row in range(height):
            bits = source.read((address + row) & 0xFFFF)
            py = sy + row
            if py >= DISPLAY_HEIGHT:
                continue
            for col in range(SPRITE_WIDTH):
                px = sx + col
                if px >= DISPLAY_WIDTH:
                    continue
                if not (bits >> (7 - col)) & 1:
                    continue
                index = px + py * DISPLAY_WIDTH
                lit = not self._pixels[index]
                self._pixels[index] = lit
                any_changed = True
                if not lit:
                    any_unset = True

        self._changed |= any_changed
        return any_unset

    # =========================================================================
    # Pixel Access
    # =========================================================================

    def get_pixel(self, x: int, y: int) -> bool:
        """
        Get a single pixel.

        Raises:
            IndexError: If (x, y) is off screen
        """
        if not (0 <= x < DISPLAY_WIDTH and 0 <= y < DISPLAY_HEIGHT):
            raise IndexError(f"pixel ({x}, {y}) is outside {DISPLAY_WIDTH}x{DISPLAY_HEIGHT}")
        return self._pixels[x + y * DISPLAY_WIDTH]

    @property
    def pixels(self) -> Tuple[bool, ...]:
        """All pixels, row-major (index x + y * width)."""
        return tuple(self._pixels)

    def get_rows(self) -> List[List[bool]]:
        """Pixels as a list of 32 rows of 64 booleans."""
        return [
            self._pixels[y * DISPLAY_WIDTH:(y + 1) * DISPLAY_WIDTH]
            for y in range(DISPLAY_HEIGHT)
        ]

    @property
    def lit_count(self) -> int:
        """Number of lit pixels."""
        return sum(self._pixels)

    def get_text(self, on: str = "#", off: str = ".") -> str:
        """
        Render the display as text, one line per pixel row.

        Args:
            on: Character for lit pixels
            off: Character for unlit pixels
        """
        return "\n".join(
            "".join(on if lit else off for lit in row)
            for row in self.get_rows()
        )

    # =========================================================================
    # Image Rendering
    # =========================================================================

    def render_image(
        self,
        scale: int = 8,
        on_color: Tuple[int, int, int] = (255, 255, 255),
        off_color: Tuple[int, int, int] = (0, 0, 0),
    ) -> bytes:
        """
        Render the display as a PNG image.

        Args:
            scale: Size of each pixel in image pixels
            on_color: RGB color of lit pixels
            off_color: RGB color of unlit pixels

        Returns:
            PNG image bytes
        """
        from PIL import Image, ImageDraw

        if scale < 1:
            raise ValueError(f"scale must be at least 1, got {scale}")

        img = Image.new("RGB", (DISPLAY_WIDTH * scale, DISPLAY_HEIGHT * scale), color=off_color)
        draw = ImageDraw.Draw(img)

        for y in range(DISPLAY_HEIGHT):
            for x in range(DISPLAY_WIDTH):
                if self._pixels[x + y * DISPLAY_WIDTH]:
                    draw.rectangle(
                        [x * scale, y * scale, (x + 1) * scale - 1, (y + 1) * scale - 1],
                        fill=on_color,
                    )

        buffer = io.BytesIO()
        img.save(buffer, format="PNG")
        return buffer.getvalue()

    def __repr__(self) -> str:
        return f"Display({DISPLAY_WIDTH}x{DISPLAY_HEIGHT}, lit={self.lit_count}, changed={self._changed})"
