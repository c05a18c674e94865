"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from chipjax import create_state, make_config, Mode, UnknownOpcodePolicy


@pytest.fixture
def fresh_state():
    """Provide a fresh base-mode emulator state for each test."""
    return create_state()


@pytest.fixture
def base_state():
    """Provide a fresh state with the CHIP-8 quirk table."""
    return create_state(config=make_config(Mode.BASE))


@pytest.fixture
def extended_state():
    """Provide a fresh state in SUPER-CHIP mode."""
    return create_state(config=make_config(Mode.EXTENDED))


@pytest.fixture
def skipping_state():
    """Provide a fresh state that steps over unknown opcodes."""
    return create_state(config=make_config(unknown_opcode=UnknownOpcodePolicy.SKIP))


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def program(*instructions):
    """Assemble 16-bit instruction words into a big-endian ROM image."""
    return b"".join(instruction.to_bytes(2, "big") for instruction in instructions)


def set_registers(state, **registers):
    """Assign registers by name, e.g. ``set_registers(state, V1=0x10, VF=1)``."""
    V = state.V
    for name, value in registers.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)
