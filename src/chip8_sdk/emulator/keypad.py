"""
Hexadecimal Keypad for the CHIP-8 Virtual Machine
=================================================

The keypad has 16 keys labelled 0-F, laid out on the original COSMAC VIP as:

    1 2 3 C
    4 5 6 D
    7 8 9 E
    A 0 B F

Hosts conventionally map that square onto the left-hand block of a PC
keyboard:

    1 2 3 4
    Q W E R
    A S D F
    Z X C V

Key state is changed only by the host between calls to `step()`. The keypad
also holds the key-wait marker set by the Fx0A instruction: while
`waiting_register` is not None the execution engine makes no progress until
some key is down.

Copyright (c) 2026 chip8-sdk Contributors
"""

import logging
from typing import Dict, List, Optional

from ..errors import KeyIndexError, KeyNameError

logger = logging.getLogger(__name__)

NUM_KEYS = 16


# =============================================================================
# HOST KEY NAME MAPPING
# =============================================================================
# Maps PC keyboard key names to keypad indices (QWERTY layout of the VIP
# square). Hex digit names are handled separately by `key_index()`.

HOST_KEY_TO_KEYPAD: Dict[str, int] = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "Q": 0x4, "W": 0x5, "E": 0x6, "R": 0xD,
    "A": 0x7, "S": 0x8, "D": 0x9, "F": 0xE,
    "Z": 0xA, "X": 0x0, "C": 0xB, "V": 0xF,
}


def key_index(name: str, host_layout: bool = False) -> int:
    """
    Resolve a key name to a keypad index.

    Args:
        name: A hex digit ("0"-"F", optionally "0x"-prefixed) or, with
              host_layout, a PC key from the QWERTY block
        host_layout: Interpret names as PC keys rather than hex digits

    Returns:
        Keypad index 0-15

    Raises:
        KeyNameError: If the name has no mapping

    Example:
        >>> key_index("a")
        10
        >>> key_index("Q", host_layout=True)
        4
    """
    upper = name.strip().upper()
    if host_layout:
        if upper in HOST_KEY_TO_KEYPAD:
            return HOST_KEY_TO_KEYPAD[upper]
        raise KeyNameError(name)

    if upper.startswith("0X"):
        upper = upper[2:]
    if len(upper) == 1:
        try:
            return int(upper, 16)
        except ValueError:
            pass
    raise KeyNameError(name)


class Keypad:
    """
    16-key state plus the key-wait marker.

    Example:
        >>> pad = Keypad()
        >>> pad.set_key(0xA, True)
        >>> pad.is_pressed(0xA)
        True
        >>> pad.first_pressed()
        10
    """

    def __init__(self, strict: bool = False):
        """
        Args:
            strict: Raise KeyIndexError for out-of-range indices instead of
                    ignoring them
        """
        self._strict = strict
        self._keys: List[bool] = [False] * NUM_KEYS
        self.waiting_register: Optional[int] = None

    def reset(self) -> None:
        """Release all keys and cancel any key-wait."""
        self.release_all()
        self.waiting_register = None

    def set_key(self, index: int, pressed: bool) -> None:
        """
        Set whether a key is held down.

        Out-of-range indices are ignored, or rejected in strict mode.

        Raises:
            KeyIndexError: In strict mode, if index is outside 0-15
        """
        if 0 <= index < NUM_KEYS:
            self._keys[index] = bool(pressed)
        elif self._strict:
            logger.warning("Rejected key index %d", index)
            raise KeyIndexError(index)

    def is_pressed(self, index: int) -> bool:
        """True if the key is held. Indices outside 0-15 are never pressed."""
        if 0 <= index < NUM_KEYS:
            return self._keys[index]
        return False

    def first_pressed(self) -> Optional[int]:
        """Lowest-numbered key currently held, or None."""
        for index, pressed in enumerate(self._keys):
            if pressed:
                return index
        return None

    def release_all(self) -> None:
        for index in range(NUM_KEYS):
            self._keys[index] = False

    @property
    def pressed_keys(self) -> List[int]:
        """Indices of all held keys, ascending."""
        return [index for index, pressed in enumerate(self._keys) if pressed]

    @property
    def is_waiting(self) -> bool:
        """True while a key-wait (Fx0A) is pending."""
        return self.waiting_register is not None

    # =========================================================================
    # Named Keys
    # =========================================================================

    def key_down(self, name: str, host_layout: bool = False) -> None:
        """Press a key by name (see `key_index`)."""
        self.set_key(key_index(name, host_layout), True)

    def key_up(self, name: str, host_layout: bool = False) -> None:
        """Release a key by name (see `key_index`)."""
        self.set_key(key_index(name, host_layout), False)
