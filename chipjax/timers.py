"""Delay and sound timers, decremented at 60 Hz by the host."""

import jax.numpy as jnp

from chipjax.state import EmulatorState


def tick(state: EmulatorState) -> EmulatorState:
    """Decrement both timers by one, clamping at zero."""
    return state.replace(
        delay_timer=jnp.astype(jnp.maximum(state.delay_timer.astype(jnp.int32) - 1, 0), jnp.uint8),
        sound_timer=jnp.astype(jnp.maximum(state.sound_timer.astype(jnp.int32) - 1, 0), jnp.uint8),
    )


def read_delay(state: EmulatorState) -> int:
    return int(state.delay_timer)


def set_delay(state: EmulatorState, value: int) -> EmulatorState:
    return state.replace(delay_timer=jnp.asarray(int(value) & 0xFF, dtype=jnp.uint8))


def read_sound(state: EmulatorState) -> int:
    return int(state.sound_timer)


def set_sound(state: EmulatorState, value: int) -> EmulatorState:
    return state.replace(sound_timer=jnp.asarray(int(value) & 0xFF, dtype=jnp.uint8))


def is_sound_active(state: EmulatorState) -> bool:
    """Buzzer is on exactly while the sound timer is non-zero."""
    return int(state.sound_timer) > 0
