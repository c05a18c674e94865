"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp

from chipjax import timers
from chipjax.constants import FONT_START, FONT_CHAR_SIZE, BIG_FONT_START, BIG_FONT_CHAR_SIZE
from chipjax.state import EmulatorState, ControlState
from chipjax.decode import DecodedInstruction
from chipjax.memory import read_block, write_block
from chipjax.registers import get_register, set_register, get_index, set_index


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return set_register(state, instruction.x, timers.read_delay(state))


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return timers.set_delay(state, get_register(state, instruction.x))


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return timers.set_sound(state, get_register(state, instruction.x))


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I register, VF unaffected."""
    return set_index(state, get_index(state) + get_register(state, instruction.x))


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for key press.

    Only flips the control state; the keypad is polled at the start of each
    following step until a key is down.
    """
    return state.replace(control=ControlState.WAITING_FOR_KEY, key_register=instruction.x)


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    digit = get_register(state, instruction.x) & 0xF
    return set_index(state, FONT_START + digit * FONT_CHAR_SIZE)


def execute_big_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX30 - Set I to location of the 8x10 sprite for decimal digit VX."""
    digit = get_register(state, instruction.x) % 10
    return set_index(state, BIG_FONT_START + digit * BIG_FONT_CHAR_SIZE)


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = get_register(state, instruction.x)
    digits = [value // 100, (value // 10) % 10, value % 10]
    return write_block(state, get_index(state), digits)


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    count = instruction.x + 1
    state = write_block(state, get_index(state), state.V[:count])

    if state.quirks.increment_index:
        return set_index(state, get_index(state) + count)
    return state


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    count = instruction.x + 1
    memory_values = read_block(state, get_index(state), count)
    state = state.replace(V=state.V.at[:count].set(memory_values))

    if state.quirks.increment_index:
        return set_index(state, get_index(state) + count)
    return state


def execute_store_flags(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX75 - Copy V0 through VX (X <= 7) to the RPL flag store."""
    count = instruction.x + 1
    return state.replace(rpl=state.rpl.at[:count].set(state.V[:count]))


def execute_load_flags(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX85 - Copy RPL flags 0 through X (X <= 7) back to V0 through VX."""
    count = instruction.x + 1
    return state.replace(V=state.V.at[:count].set(jnp.asarray(state.rpl[:count], dtype=jnp.uint8)))
