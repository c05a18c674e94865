"""General purpose, index and program counter register access."""

import jax.numpy as jnp

from chipjax.constants import NUM_REGISTERS, FLAG_REGISTER
from chipjax.errors import InvalidRegister
from chipjax.state import EmulatorState


def _check_register(x: int) -> int:
    x = int(x)
    if not 0 <= x < NUM_REGISTERS:
        raise InvalidRegister(x)
    return x


def get_register(state: EmulatorState, x: int) -> int:
    return int(state.V[_check_register(x)])


def set_register(state: EmulatorState, x: int, value: int) -> EmulatorState:
    """Set VX, wrapping the value to 8 bits."""
    return state.replace(V=state.V.at[_check_register(x)].set(int(value) & 0xFF))


def set_result_and_flag(state: EmulatorState, x: int, result: int, flag: int) -> EmulatorState:
    """Store an ALU result in VX, then the flag in VF.

    VF is written second so it wins when X is F.
    """
    state = set_register(state, x, result)
    return set_register(state, FLAG_REGISTER, 1 if flag else 0)


def get_index(state: EmulatorState) -> int:
    return int(state.I)


def set_index(state: EmulatorState, value: int) -> EmulatorState:
    """Set I, wrapping the value to 16 bits."""
    return state.replace(I=jnp.asarray(int(value) & 0xFFFF, dtype=jnp.uint16))


def get_pc(state: EmulatorState) -> int:
    return int(state.pc)


def set_pc(state: EmulatorState, address: int) -> EmulatorState:
    # Not masked to 12 bits: an address past 0xFFF must fail on the next fetch
    return state.replace(pc=jnp.asarray(int(address) & 0xFFFF, dtype=jnp.uint16))
