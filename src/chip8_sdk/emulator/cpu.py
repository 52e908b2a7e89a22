"""
CHIP-8 Execution Engine
=======================

Fetch/decode/execute core for the base CHIP-8 instruction set.

Registers:
- V0-VF: 16 general purpose 8-bit registers. VF doubles as the carry,
  borrow, shift-out and collision flag.
- I: address register (16-bit storage, 12 bits meaningful)
- PC: program counter (16-bit, starts at $200)
- Call stack: 16 return addresses

Opcodes are 16 bits, fetched big-endian. PC is advanced past the opcode
before it executes, so jump and call targets are absolute and a call pushes
the address of the following instruction.

Opcode fields:
    a    - top nibble, selects the instruction family
    x, y - register nibbles (bits 8-11 and 4-7)
    n    - low nibble
    nn   - low byte
    nnn  - low 12 bits (address)

Engine states:
- Running: each `step()` executes one instruction.
- Waiting for key: set by Fx0A. `step()` is a no-op until a key is down;
  the lowest held key is stored in Vx and the same call goes on to execute
  the next instruction.
- Halted: entered on an unrecognised opcode (or a stack fault in strict
  mode). Terminal until `reset()`; `step()` is a no-op.

Copyright (c) 2026 chip8-sdk Contributors
"""

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Tuple

from ..errors import ErrorKind, MachineError
from .display import Display
from .keypad import Keypad
from .memory import GLYPH_SIZE, PROGRAM_START
from .timers import Timers

logger = logging.getLogger(__name__)

NUM_REGISTERS = 16
STACK_DEPTH = 16
VF = 0xF


class MemoryProtocol(Protocol):
    """
    Memory interface used by the engine.
    """
    def read(self, address: int) -> int:
        """Read byte from address (0 if out of range)."""
        ...

    def write(self, address: int, value: int) -> None:
        """Write byte to address (ignored if out of range)."""
        ...


@dataclass
class CPUState:
    """
    Register file and call stack.

    - v: sixteen 8-bit registers
    - i: address register
    - pc: program counter
    - stack: fixed 16-entry return address array
    - stack_size: number of live entries in `stack`
    """
    v: List[int] = field(default_factory=lambda: [0] * NUM_REGISTERS)
    i: int = 0
    pc: int = PROGRAM_START
    stack: List[int] = field(default_factory=lambda: [0] * STACK_DEPTH)
    stack_size: int = 0


class Chip8CPU:
    """
    CHIP-8 execution engine.

    The engine owns the register file and call stack and drives the memory,
    display, keypad and timers it is given.

    Example:
        >>> cpu = Chip8CPU(memory, display, keypad, timers)
        >>> memory.load_program(bytes([0x6A, 0x05]))
        >>> cpu.step()
        True
        >>> cpu.v[0xA]
        5
    """

    def __init__(
        self,
        memory: MemoryProtocol,
        display: Display,
        keypad: Keypad,
        timers: Timers,
        rng: Optional[random.Random] = None,
        strict: bool = False,
    ):
        """
        Args:
            memory: Memory image
            display: Framebuffer for 00E0/Dxyn
            keypad: Key state and key-wait marker
            timers: Delay and sound timers
            rng: Random source for Cxnn (a fresh unseeded one if None)
            strict: Halt on stack overflow/underflow instead of ignoring it
        """
        self.memory = memory
        self.display = display
        self.keypad = keypad
        self.timers = timers
        self.rng = rng or random.Random()
        self.strict = strict
        self.state = CPUState()
        self._error: Optional[MachineError] = None

    # ========================================
    # Register Properties
    # ========================================

    @property
    def v(self) -> List[int]:
        """General purpose registers V0-VF (live list)."""
        return self.state.v

    @property
    def i(self) -> int:
        """Address register I."""
        return self.state.i

    @i.setter
    def i(self, value: int) -> None:
        self.state.i = value & 0xFFFF

    @property
    def pc(self) -> int:
        """Program counter."""
        return self.state.pc

    @pc.setter
    def pc(self, value: int) -> None:
        self.state.pc = value & 0xFFFF

    @property
    def stack(self) -> Tuple[int, ...]:
        """Live call stack entries, oldest first."""
        return tuple(self.state.stack[:self.state.stack_size])

    @property
    def stack_size(self) -> int:
        return self.state.stack_size

    def _set_v(self, index: int, value: int) -> None:
        self.state.v[index] = value & 0xFF

    # ========================================
    # Error State
    # ========================================

    @property
    def error(self) -> Optional[MachineError]:
        """The fault that halted the engine, or None while running."""
        return self._error

    @property
    def halted(self) -> bool:
        return self._error is not None

    def _halt(self, kind: ErrorKind, opcode: int, address: int) -> None:
        self._error = MachineError(kind, opcode, address)
        logger.warning("Execution halted: %s", self._error.message)

    # ========================================
    # Reset
    # ========================================

    def reset(self) -> None:
        """
        Reset registers, stack and error state.

        PC returns to $200. Memory, display, keypad and timers are reset by
        their owner.
        """
        self.state = CPUState()
        self._error = None

    # ========================================
    # Stack Operations
    # ========================================

    def _push(self, address: int, opcode: int, fetch_address: int) -> None:
        """Push a return address. A full stack drops the push."""
        if self.state.stack_size >= STACK_DEPTH:
            if self.strict:
                self._halt(ErrorKind.STACK_OVERFLOW, opcode, fetch_address)
            return
        self.state.stack[self.state.stack_size] = address
        self.state.stack_size += 1

    def _pop(self, opcode: int, fetch_address: int) -> Optional[int]:
        """Pop a return address, or None if the stack is empty."""
        if self.state.stack_size == 0:
            if self.strict:
                self._halt(ErrorKind.STACK_UNDERFLOW, opcode, fetch_address)
            return None
        self.state.stack_size -= 1
        return self.state.stack[self.state.stack_size]

    # ========================================
    # Main Execution Loop
    # ========================================

    def step(self) -> bool:
        """
        Execute one instruction.

        Returns:
            True if an instruction was executed; False if the engine is
            halted or still waiting for a key
        """
        if self._error is not None:
            return False

        waiting = self.keypad.waiting_register
        if waiting is not None:
            key = self.keypad.first_pressed()
            if key is None:
                return False
            self._set_v(waiting, key)
            self.keypad.waiting_register = None

        address = self.pc
        opcode = (self.memory.read(address) << 8) | self.memory.read((address + 1) & 0xFFFF)
        self.pc = address + 2

        self._execute_instruction(opcode, address)
        return True

    def _skip_if(self, condition: bool) -> None:
        if condition:
            self.pc = self.pc + 2

    def _execute_instruction(self, opcode: int, address: int) -> None:
        """
        Decode and execute one opcode.

        Args:
            opcode: 16-bit instruction word
            address: Address it was fetched from (for error reports)
        """
        x = (opcode >> 8) & 0xF
        y = (opcode >> 4) & 0xF
        n = opcode & 0xF
        nn = opcode & 0xFF
        nnn = opcode & 0xFFF
        v = self.state.v

        match opcode >> 12:
            case 0x0:
                if opcode == 0x00E0:  # CLS
                    self.display.clear()
                elif opcode == 0x00EE:  # RET
                    target = self._pop(opcode, address)
                    if target is not None:
                        self.pc = target
                else:
                    self._halt(ErrorKind.UNRECOGNIZED_OPCODE, opcode, address)
            case 0x1:  # JP nnn
                self.pc = nnn
            case 0x2:  # CALL nnn
                self._push(self.pc, opcode, address)
                if self._error is None:
                    self.pc = nnn
            case 0x3:  # SE Vx, nn
                self._skip_if(v[x] == nn)
            case 0x4:  # SNE Vx, nn
                self._skip_if(v[x] != nn)
            case 0x5:
                if n == 0:  # SE Vx, Vy
                    self._skip_if(v[x] == v[y])
                else:
                    self._halt(ErrorKind.UNRECOGNIZED_OPCODE, opcode, address)
            case 0x6:  # LD Vx, nn
                v[x] = nn
            case 0x7:  # ADD Vx, nn (no carry)
                self._set_v(x, v[x] + nn)
            case 0x8:
                self._execute_alu(opcode, address, x, y, n)
            case 0x9:
                if n == 0:  # SNE Vx, Vy
                    self._skip_if(v[x] != v[y])
                else:
                    self._halt(ErrorKind.UNRECOGNIZED_OPCODE, opcode, address)
            case 0xA:  # LD I, nnn
                self.i = nnn
            case 0xB:  # JP V0, nnn
                self.pc = nnn + v[0]
            case 0xC:  # RND Vx, nn
                v[x] = nn & self.rng.randrange(256)
            case 0xD:  # DRW Vx, Vy, n
                collided = self.display.draw(v[x], v[y], self.i, n, self.memory)
                v[VF] = 1 if collided else 0
            case 0xE:
                if nn == 0x9E:  # SKP Vx
                    self._skip_if(self.keypad.is_pressed(v[x]))
                elif nn == 0xA1:  # SKNP Vx
                    self._skip_if(not self.keypad.is_pressed(v[x]))
                else:
                    self._halt(ErrorKind.UNRECOGNIZED_OPCODE, opcode, address)
            case 0xF:
                self._execute_misc(opcode, address, x, nn)

    def _execute_alu(self, opcode: int, address: int, x: int, y: int, op: int) -> None:
        """
        Register-register arithmetic (8xy_).

        Flag-producing operations write VF last, so with x == F the flag
        overwrites the result.
        """
        v = self.state.v
        vx = v[x]
        vy = v[y]

        match op:
            case 0x0:  # LD Vx, Vy
                v[x] = vy
            case 0x1:  # OR
                v[x] = vx | vy
            case 0x2:  # AND
                v[x] = vx & vy
            case 0x3:  # XOR
                v[x] = vx ^ vy
            case 0x4:  # ADD, VF = carry
                result = vx + vy
                self._set_v(x, result)
                v[VF] = 1 if result > 0xFF else 0
            case 0x5:  # SUB, VF = not borrow
                self._set_v(x, vx - vy)
                v[VF] = 0 if vy > vx else 1
            case 0x6:  # SHR, VF = bit shifted out
                v[x] = vx >> 1
                v[VF] = vx & 0x01
            case 0x7:  # SUBN, VF = not borrow
                self._set_v(x, vy - vx)
                v[VF] = 0 if vx > vy else 1
            case 0xE:  # SHL, VF = bit shifted out
                self._set_v(x, vx << 1)
                v[VF] = (vx >> 7) & 0x01
            case _:
                self._halt(ErrorKind.UNRECOGNIZED_OPCODE, opcode, address)

    def _execute_misc(self, opcode: int, address: int, x: int, op: int) -> None:
        """Timer, key-wait, I-register and memory transfer operations (Fx__)."""
        v = self.state.v

        match op:
            case 0x07:  # LD Vx, DT
                v[x] = self.timers.delay
            case 0x0A:  # LD Vx, K
                self.keypad.waiting_register = x
            case 0x15:  # LD DT, Vx
                self.timers.delay = v[x]
            case 0x18:  # LD ST, Vx
                self.timers.sound = v[x]
            case 0x1E:  # ADD I, Vx
                self.i = self.i + v[x]
            case 0x29:  # LD F, Vx
                self.i = (v[x] & 0x0F) * GLYPH_SIZE
            case 0x33:  # LD B, Vx
                value = v[x]
                self.memory.write(self.i, value // 100)
                self.memory.write((self.i + 1) & 0xFFFF, (value // 10) % 10)
                self.memory.write((self.i + 2) & 0xFFFF, value % 10)
            case 0x55:  # LD [I], V0..Vx
                for index in range(x + 1):
                    self.memory.write((self.i + index) & 0xFFFF, v[index])
            case 0x65:  # LD V0..Vx, [I]
                for index in range(x + 1):
                    v[index] = self.memory.read((self.i + index) & 0xFFFF)
            case _:
                self._halt(ErrorKind.UNRECOGNIZED_OPCODE, opcode, address)

    def __repr__(self) -> str:
        return (
            f"Chip8CPU(pc=${self.pc:03X}, i=${self.i:03X}, "
            f"stack={self.stack_size}, halted={self.halted})"
        )
