"""Main CHIP-8 emulator execution engine."""

from chipjax import timers
from chipjax.config import UnknownOpcodePolicy
from chipjax.decode import DecodedInstruction, Op, decode
from chipjax.errors import UnknownOpcode
from chipjax.keypad import first_pressed
from chipjax.memory import read_word
from chipjax.registers import get_pc, set_pc, set_register
from chipjax.state import EmulatorState, ControlState
from chipjax.instructions.system import (
    execute_machine_call, execute_clear_screen, execute_return, execute_scroll_down,
    execute_scroll_right, execute_scroll_left, execute_exit, execute_low_resolution,
    execute_high_resolution,
)
from chipjax.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key, execute_skip_if_not_key,
)
from chipjax.instructions.alu import execute_alu_operation
from chipjax.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chipjax.instructions.display import execute_display, execute_display_large
from chipjax.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, execute_font_character,
    execute_big_font_character, execute_bcd_conversion, execute_store_registers,
    execute_load_registers, execute_store_flags, execute_load_flags,
)


def execute_unknown(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Unrecognised instruction: fail or step over it, per configuration."""
    if state.config.unknown_opcode is UnknownOpcodePolicy.SKIP:
        return state
    raise UnknownOpcode(instruction.raw, (get_pc(state) - 2) & 0xFFFF)


HANDLERS = {
    Op.SYS: execute_machine_call,
    Op.CLS: execute_clear_screen,
    Op.RET: execute_return,
    Op.JP: execute_jump,
    Op.CALL: execute_call,
    Op.SE_IMM: execute_skip_if_equal_immediate,
    Op.SNE_IMM: execute_skip_if_not_equal_immediate,
    Op.SE_REG: execute_skip_if_equal_register,
    Op.SNE_REG: execute_skip_if_not_equal_register,
    Op.LD_IMM: execute_set,
    Op.ADD_IMM: execute_add,
    Op.LD_REG: execute_alu_operation,
    Op.OR: execute_alu_operation,
    Op.AND: execute_alu_operation,
    Op.XOR: execute_alu_operation,
    Op.ADD_REG: execute_alu_operation,
    Op.SUB: execute_alu_operation,
    Op.SHR: execute_alu_operation,
    Op.SUBN: execute_alu_operation,
    Op.SHL: execute_alu_operation,
    Op.LD_I: execute_set_index,
    Op.JP_OFFSET: execute_jump_with_offset,
    Op.RND: execute_random,
    Op.DRW: execute_display,
    Op.SKP: execute_skip_if_key,
    Op.SKNP: execute_skip_if_not_key,
    Op.LD_VX_DT: execute_get_delay_timer,
    Op.LD_VX_K: execute_wait_for_key,
    Op.LD_DT_VX: execute_set_delay_timer,
    Op.LD_ST_VX: execute_set_sound_timer,
    Op.ADD_I: execute_add_to_index,
    Op.LD_F: execute_font_character,
    Op.LD_B: execute_bcd_conversion,
    Op.LD_MEM_VX: execute_store_registers,
    Op.LD_VX_MEM: execute_load_registers,
    Op.SCD: execute_scroll_down,
    Op.SCR: execute_scroll_right,
    Op.SCL: execute_scroll_left,
    Op.EXIT: execute_exit,
    Op.LOW: execute_low_resolution,
    Op.HIGH: execute_high_resolution,
    Op.DRW_LARGE: execute_display_large,
    Op.LD_HF: execute_big_font_character,
    Op.LD_R_VX: execute_store_flags,
    Op.LD_VX_R: execute_load_flags,
    Op.UNKNOWN: execute_unknown,
}


def dispatch(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Run the single handler for an already decoded instruction."""
    return HANDLERS[instruction.op](state, instruction)


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction."""
    return dispatch(state, decode(instruction, state.config.extended))


def fetch(state: EmulatorState) -> tuple[EmulatorState, int]:
    """Fetch next instruction from memory and advance PC past it."""
    instruction = read_word(state, get_pc(state))
    return set_pc(state, get_pc(state) + 2), instruction


def resume_if_key_pressed(state: EmulatorState) -> EmulatorState:
    """Leave WAITING_FOR_KEY if a key is down, storing it in the waiting register."""
    key = first_pressed(state)
    if key is None:
        return state
    state = set_register(state, state.key_register, key)
    return state.replace(control=ControlState.RUNNING, key_register=0)


def step(state: EmulatorState) -> tuple[EmulatorState, DecodedInstruction | None]:
    """Advance the machine by at most one instruction.

    Returns the new state and the instruction executed, or ``None`` when the
    machine is still waiting for a key and nothing ran.
    """
    if state.control is ControlState.WAITING_FOR_KEY:
        state = resume_if_key_pressed(state)
        if state.control is ControlState.WAITING_FOR_KEY:
            return state, None

    state, instruction = fetch(state)
    decoded_instruction = decode(instruction, state.config.extended)
    return dispatch(state, decoded_instruction), decoded_instruction


def tick_timers(state: EmulatorState) -> EmulatorState:
    """60 Hz timer tick, independent of instruction execution."""
    return timers.tick(state)
