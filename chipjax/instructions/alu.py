"""CHIP-8 ALU operations (8xxx).

Each operation maps ``(vx, vy)`` to ``(result, flag)``. A flag of ``None``
leaves VF untouched; anything else is written to VF after the result.
"""

from chipjax.state import EmulatorState
from chipjax.decode import DecodedInstruction, Op
from chipjax.registers import get_register, set_register, set_result_and_flag


def alu_set(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, 0


def alu_and(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, 0


def alu_xor(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, 0


def alu_add(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY4 - Add: VX += VY, set carry flag."""
    result = vx + vy
    return result & 0xFF, int(result > 0xFF)


def alu_sub_xy(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY5 - Subtract: VX -= VY, VF = 1 when there is no borrow."""
    return (vx - vy) & 0xFF, int(vx >= vy)


def alu_shift_right(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY6 - Shift right: VX >>= 1."""
    return vx >> 1, vx & 1


def alu_sub_yx(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY7 - Subtract: VX = VY - VX, VF = 1 when there is no borrow."""
    return (vy - vx) & 0xFF, int(vy >= vx)


def alu_shift_left(vx: int, vy: int) -> tuple[int, int | None]:
    """8XYE - Shift left: VX <<= 1."""
    return (vx << 1) & 0xFF, (vx & 0x80) >> 7


ALU_OPERATIONS = {
    Op.LD_REG: alu_set,
    Op.OR: alu_or,
    Op.AND: alu_and,
    Op.XOR: alu_xor,
    Op.ADD_REG: alu_add,
    Op.SUB: alu_sub_xy,
    Op.SHR: alu_shift_right,
    Op.SUBN: alu_sub_yx,
    Op.SHL: alu_shift_left,
}

_LOGIC = (Op.OR, Op.AND, Op.XOR)
_SHIFTS = (Op.SHR, Op.SHL)


def execute_alu_operation(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XYN - ALU operations dispatcher."""
    vx = get_register(state, instruction.x)
    vy = get_register(state, instruction.y)

    if instruction.op in _SHIFTS and state.quirks.shift_uses_vy:
        vx = vy

    result, vf = ALU_OPERATIONS[instruction.op](vx, vy)

    if instruction.op in _LOGIC and not state.quirks.logic_resets_flag:
        vf = None

    if vf is None:
        return set_register(state, instruction.x, result)
    return set_result_and_flag(state, instruction.x, result, vf)
