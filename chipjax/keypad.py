"""Hex keypad state, written only by the host."""

import jax.numpy as jnp

from chipjax.constants import NUM_KEYS
from chipjax.errors import InvalidKey
from chipjax.state import EmulatorState


def _check_key(key: int) -> int:
    key = int(key)
    if not 0 <= key < NUM_KEYS:
        raise InvalidKey(key)
    return key


def key_down(state: EmulatorState, key: int) -> EmulatorState:
    return state.replace(keypad=state.keypad.at[_check_key(key)].set(True))


def key_up(state: EmulatorState, key: int) -> EmulatorState:
    return state.replace(keypad=state.keypad.at[_check_key(key)].set(False))


def is_pressed(state: EmulatorState, key: int) -> bool:
    return bool(state.keypad[_check_key(key)])


def first_pressed(state: EmulatorState) -> int | None:
    """Lowest pressed key, or None when no key is down."""
    if not jnp.any(state.keypad):
        return None
    return int(jnp.argmax(state.keypad))
