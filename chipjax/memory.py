"""CHIP-8 memory access.

All accessors are bounds-checked against the 4 KiB address space and raise
:class:`OutOfBoundsAccess` rather than wrapping.
"""

import jax.numpy as jnp

from chipjax.constants import MEMORY_SIZE, PROGRAM_START, MAX_PROGRAM_SIZE
from chipjax.errors import OutOfBoundsAccess, RomTooLarge
from chipjax.state import EmulatorState


def _check_range(address: int, length: int = 1) -> None:
    if address < 0 or length < 0 or address + length > MEMORY_SIZE:
        raise OutOfBoundsAccess(address, length)


def read_byte(state: EmulatorState, address: int) -> int:
    address = int(address)
    _check_range(address)
    return int(state.memory[address])


def write_byte(state: EmulatorState, address: int, value: int) -> EmulatorState:
    address = int(address)
    _check_range(address)
    return state.replace(memory=state.memory.at[address].set(int(value) & 0xFF))


def read_word(state: EmulatorState, address: int) -> int:
    """Read a big-endian 16-bit word."""
    address = int(address)
    _check_range(address, 2)
    return (int(state.memory[address]) << 8) | int(state.memory[address + 1])


def read_block(state: EmulatorState, address: int, length: int) -> jnp.ndarray:
    address = int(address)
    _check_range(address, length)
    return state.memory[address:address + length]


def write_block(state: EmulatorState, address: int, values) -> EmulatorState:
    address = int(address)
    values = jnp.asarray(values, dtype=jnp.uint8)
    _check_range(address, len(values))
    return state.replace(memory=state.memory.at[address:address + len(values)].set(values))


def load_program(state: EmulatorState, rom_data: bytes) -> EmulatorState:
    """Copy a program image into memory starting at 0x200."""
    if len(rom_data) > MAX_PROGRAM_SIZE:
        raise RomTooLarge(len(rom_data))
    if not rom_data:
        return state
    return write_block(state, PROGRAM_START, jnp.array(list(rom_data), dtype=jnp.uint8))


def load_rom(state: EmulatorState, filename: str) -> EmulatorState:
    """Load ROM data from a file into CHIP-8 memory starting at 0x200."""
    with open(filename, 'rb') as f:
        rom_data = f.read()
    return load_program(state, rom_data)
