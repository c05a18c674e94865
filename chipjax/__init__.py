"""CHIP-8 / SUPER-CHIP interpreter package."""

__version__ = "0.1.0"

from chipjax.state import EmulatorState, ControlState, create_state
from chipjax.config import Mode, Quirks, UnknownOpcodePolicy, MachineConfig, make_config, quirks_for
from chipjax.emulator import execute, fetch, step, tick_timers
from chipjax.memory import load_program, load_rom
from chipjax.decode import DecodedInstruction, Op, decode, disassemble
from chipjax.errors import (
    EmulationError, RomTooLarge, UnknownOpcode, StackOverflow, StackUnderflow,
    OutOfBoundsAccess, InvalidRegister, InvalidKey,
)
from chipjax.machine import Machine
from chipjax.constants import *
from chipjax.rendering import display_to_rgb, create_color_scheme

__all__ = [
    "EmulatorState",
    "ControlState",
    "create_state",
    "Mode",
    "Quirks",
    "UnknownOpcodePolicy",
    "MachineConfig",
    "make_config",
    "quirks_for",
    "fetch",
    "execute",
    "step",
    "tick_timers",
    "load_program",
    "load_rom",
    "DecodedInstruction",
    "Op",
    "decode",
    "disassemble",
    "EmulationError",
    "RomTooLarge",
    "UnknownOpcode",
    "StackOverflow",
    "StackUnderflow",
    "OutOfBoundsAccess",
    "InvalidRegister",
    "InvalidKey",
    "Machine",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "display_to_rgb",
    "create_color_scheme",
]
