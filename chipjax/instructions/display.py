"""CHIP-8 display operations."""

import jax.numpy as jnp

from chipjax import display
from chipjax.constants import FLAG_REGISTER, LARGE_SPRITE_SIZE, SPRITE_WIDTH
from chipjax.state import EmulatorState
from chipjax.decode import DecodedInstruction
from chipjax.memory import read_block
from chipjax.registers import get_register, get_index, set_register


def _draw(state: EmulatorState, instruction: DecodedInstruction, rows, width: int) -> EmulatorState:
    new_display, collision = display.draw_sprite(
        state.display,
        get_register(state, instruction.x),
        get_register(state, instruction.y),
        rows,
        width,
    )
    return set_register(state.replace(display=new_display), FLAG_REGISTER, int(collision))


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N."""
    rows = read_block(state, get_index(state), instruction.n)
    return _draw(state, instruction, rows, SPRITE_WIDTH)


def execute_display_large(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXY0 - Draw a 16x16 sprite (two bytes per row) at (VX, VY)."""
    sprite_bytes = read_block(state, get_index(state), LARGE_SPRITE_SIZE * 2).astype(jnp.int32)
    rows = (sprite_bytes[0::2] << 8) | sprite_bytes[1::2]
    return _draw(state, instruction, rows, LARGE_SPRITE_SIZE)
