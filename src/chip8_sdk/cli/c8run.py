"""
c8run - Headless CHIP-8 Runner
==============================

This module implements a small reference host for the CHIP-8 virtual
machine. It does the jobs the core leaves to its host: reading the ROM file,
pacing timer ticks against instruction steps, holding keys down and
presenting the screen (as text, or as a PNG screenshot).

Usage Examples
--------------
Run a ROM for 1000 instructions and print the screen:
    $ c8run maze.ch8 --steps 1000

Run at 15 instructions per 60 Hz frame, reproducibly:
    $ c8run pong.ch8 --steps-per-tick 15 --seed 7

Hold keys 5 and A down for the whole run:
    $ c8run game.ch8 --key 5 --key A

Save a screenshot:
    $ c8run maze.ch8 --screenshot maze.png --scale 10
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click

from chip8_sdk import __version__
from chip8_sdk.cli.errors import ExitCode, handle_cli_exception
from chip8_sdk.emulator import MAX_PROGRAM_SIZE, Emulator, EmulatorConfig, key_index
from chip8_sdk.errors import RomFileError

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def read_rom(path: Path) -> bytes:
    """
    Read a ROM image from disk.

    Raises:
        RomFileError: If the file cannot be read, is empty, or is too large
    """
    try:
        data = path.read_bytes()
    except OSError as e:
        raise RomFileError(f"cannot read ROM: {e.strerror or e}", str(path)) from e

    if not data:
        raise RomFileError("ROM is empty", str(path))
    if len(data) > MAX_PROGRAM_SIZE:
        raise RomFileError(
            f"ROM is {len(data)} bytes, at most {MAX_PROGRAM_SIZE} fit in memory",
            str(path),
        )
    return data


def run_rom(emu: Emulator, max_steps: int, steps_per_tick: int) -> Tuple[int, int]:
    """
    Drive the emulator the way a real-time host would, minus the sleeping.

    Each frame runs up to steps_per_tick instructions and then ticks the
    timers once. Stops when max_steps instructions have run, the machine
    halts, or it blocks on a key that will never arrive.

    Returns:
        (instructions executed, frames run)
    """
    steps = 0
    frames = 0
    while steps < max_steps:
        budget = min(steps_per_tick, max_steps - steps)
        steps += emu.run_frame(budget)
        frames += 1
        if emu.is_halted:
            break
        if emu.is_waiting_for_key and not emu.keypad.pressed_keys:
            logger.debug("Program is waiting for a key, stopping")
            break
    return steps, frames


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "rom_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-n", "--steps",
    type=click.IntRange(min=0),
    default=1000,
    show_default=True,
    help="Maximum number of instructions to execute",
)
@click.option(
    "-t", "--steps-per-tick",
    type=click.IntRange(min=1),
    default=10,
    show_default=True,
    help="Instructions executed per 60 Hz timer tick",
)
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Seed for the random number instruction (default: unseeded)",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Halt on call stack overflow/underflow",
)
@click.option(
    "-k", "--key",
    "keys",
    multiple=True,
    help="Hex key (0-F) to hold down for the whole run. Repeatable.",
)
@click.option(
    "-s", "--screenshot",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the final screen to a PNG file",
)
@click.option(
    "--scale",
    type=click.IntRange(min=1),
    default=8,
    show_default=True,
    help="Screenshot pixel scale",
)
@click.option(
    "--text/--no-text",
    default=True,
    help="Print the final screen as text (default: enabled)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="c8run")
def main(
    rom_file: Path,
    steps: int,
    steps_per_tick: int,
    seed: Optional[int],
    strict: bool,
    keys: Tuple[str, ...],
    screenshot: Optional[Path],
    scale: int,
    text: bool,
    verbose: bool,
) -> None:
    """
    Run a CHIP-8 program headlessly.

    ROM_FILE is the raw program image, loaded at $200.

    Examples:

        # Run for 1000 instructions and print the screen
        c8run maze.ch8

        # Reproducible run holding key 5
        c8run game.ch8 --seed 1 --key 5
    """
    setup_logging(verbose)

    try:
        key_indices = [key_index(name) for name in keys]
        data = read_rom(rom_file)

        emu = Emulator(EmulatorConfig(seed=seed, strict=strict))
        emu.load_program(data)
        for index in key_indices:
            emu.set_key(index, True)

        if verbose:
            click.echo(f"ROM: {rom_file} ({len(data)} bytes)", err=True)

        executed, frames = run_rom(emu, steps, steps_per_tick)

        if text:
            click.echo(emu.display.get_text())

        status = (
            f"steps={executed} frames={frames} pc=${emu.cpu.pc:03X} "
            f"sound={'on' if emu.should_emit_sound else 'off'}"
        )
        if emu.is_waiting_for_key:
            status += f" waiting=V{emu.keypad.waiting_register:X}"
        click.echo(status)

        if screenshot:
            screenshot.write_bytes(emu.display.render_image(scale=scale))
            if verbose:
                click.echo(f"Screenshot written to: {screenshot}", err=True)

    except Exception as e:
        handle_cli_exception(e, verbose)

    if emu.has_error:
        click.echo(f"Error: {emu.error_message}", err=True)
        sys.exit(ExitCode.MACHINE_ERROR)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
