"""CHIP-8 control flow instructions."""

from chipjax.state import EmulatorState
from chipjax.decode import DecodedInstruction
from chipjax.keypad import is_pressed
from chipjax.registers import get_pc, set_pc, get_register
from chipjax.stack import push


def execute_jump(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """1NNN - Jump to address NNN."""
    return set_pc(state, instruction.nnn)


def execute_call(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, state.pc))
    return execute_jump(state, instruction)


def make_skip_instruction(condition_fn):
    """Factory for skip instructions."""
    def skip_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        if condition_fn(state, instruction):
            return set_pc(state, get_pc(state) + 2)
        return state
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: get_register(state, inst.x) == inst.nn
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: get_register(state, inst.x) != inst.nn
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: get_register(state, inst.x) == get_register(state, inst.y)
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: get_register(state, inst.x) != get_register(state, inst.y)
)

# Only the low nibble of VX names a key
execute_skip_if_key = make_skip_instruction(
    lambda state, inst: is_pressed(state, get_register(state, inst.x) & 0xF)
)

execute_skip_if_not_key = make_skip_instruction(
    lambda state, inst: not is_pressed(state, get_register(state, inst.x) & 0xF)
)


def execute_jump_with_offset_modern(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """BXNN - Jump to address XNN + VX (SUPER-CHIP behavior)."""
    return set_pc(state, instruction.nnn + get_register(state, instruction.x))


def execute_jump_with_offset_legacy(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """BNNN - Jump to address NNN + V0 (CHIP-8 behavior)."""
    return set_pc(state, instruction.nnn + get_register(state, 0))


def execute_jump_with_offset(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    if state.quirks.jump_uses_vx:
        return execute_jump_with_offset_modern(state, instruction)
    return execute_jump_with_offset_legacy(state, instruction)
