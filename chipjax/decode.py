"""CHIP-8 instruction decoding."""

import enum

from chex import dataclass


class Op(enum.Enum):
    """Every instruction kind the interpreter knows, plus UNKNOWN."""
    SYS = enum.auto()
    CLS = enum.auto()
    RET = enum.auto()
    JP = enum.auto()
    CALL = enum.auto()
    SE_IMM = enum.auto()
    SNE_IMM = enum.auto()
    SE_REG = enum.auto()
    SNE_REG = enum.auto()
    LD_IMM = enum.auto()
    ADD_IMM = enum.auto()
    LD_REG = enum.auto()
    OR = enum.auto()
    AND = enum.auto()
    XOR = enum.auto()
    ADD_REG = enum.auto()
    SUB = enum.auto()
    SHR = enum.auto()
    SUBN = enum.auto()
    SHL = enum.auto()
    LD_I = enum.auto()
    JP_OFFSET = enum.auto()
    RND = enum.auto()
    DRW = enum.auto()
    SKP = enum.auto()
    SKNP = enum.auto()
    LD_VX_DT = enum.auto()
    LD_VX_K = enum.auto()
    LD_DT_VX = enum.auto()
    LD_ST_VX = enum.auto()
    ADD_I = enum.auto()
    LD_F = enum.auto()
    LD_B = enum.auto()
    LD_MEM_VX = enum.auto()
    LD_VX_MEM = enum.auto()
    # SUPER-CHIP
    SCD = enum.auto()
    SCR = enum.auto()
    SCL = enum.auto()
    EXIT = enum.auto()
    LOW = enum.auto()
    HIGH = enum.auto()
    DRW_LARGE = enum.auto()
    LD_HF = enum.auto()
    LD_R_VX = enum.auto()
    LD_VX_R = enum.auto()
    UNKNOWN = enum.auto()


@dataclass(frozen=True)
class DecodedInstruction:
    """Decoded CHIP-8 instruction with extracted operands."""
    raw: int
    op: Op
    opcode: int  # First nibble
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate)
    nn: int      # Last byte (8-bit immediate)
    nnn: int     # Last 12 bits (12-bit address)


# Instructions identified by the leading nibble alone
_BY_NIBBLE = {
    0x1: Op.JP,
    0x2: Op.CALL,
    0x3: Op.SE_IMM,
    0x4: Op.SNE_IMM,
    0x6: Op.LD_IMM,
    0x7: Op.ADD_IMM,
    0xA: Op.LD_I,
    0xB: Op.JP_OFFSET,
    0xC: Op.RND,
    0xD: Op.DRW,
}

# Instructions identified by raw & 0xF00F
_BY_LAST_NIBBLE = {
    0x5000: Op.SE_REG,
    0x8000: Op.LD_REG,
    0x8001: Op.OR,
    0x8002: Op.AND,
    0x8003: Op.XOR,
    0x8004: Op.ADD_REG,
    0x8005: Op.SUB,
    0x8006: Op.SHR,
    0x8007: Op.SUBN,
    0x800E: Op.SHL,
    0x9000: Op.SNE_REG,
}

# Instructions identified by raw & 0xF0FF
_BY_LAST_BYTE = {
    0xE09E: Op.SKP,
    0xE0A1: Op.SKNP,
    0xF007: Op.LD_VX_DT,
    0xF00A: Op.LD_VX_K,
    0xF015: Op.LD_DT_VX,
    0xF018: Op.LD_ST_VX,
    0xF01E: Op.ADD_I,
    0xF029: Op.LD_F,
    0xF033: Op.LD_B,
    0xF055: Op.LD_MEM_VX,
    0xF065: Op.LD_VX_MEM,
}

_SUPERCHIP_BY_LAST_BYTE = {
    0xF030: Op.LD_HF,
    0xF075: Op.LD_R_VX,
    0xF085: Op.LD_VX_R,
}

_SYSTEM = {
    0x00E0: Op.CLS,
    0x00EE: Op.RET,
}

_SUPERCHIP_SYSTEM = {
    0x00FB: Op.SCR,
    0x00FC: Op.SCL,
    0x00FD: Op.EXIT,
    0x00FE: Op.LOW,
    0x00FF: Op.HIGH,
}


def _classify(instruction: int, extended: bool) -> Op:
    opcode = instruction >> 12

    if opcode == 0x0:
        if instruction in _SYSTEM:
            return _SYSTEM[instruction]
        if extended:
            if instruction & 0xFFF0 == 0x00C0:
                return Op.SCD
            if instruction in _SUPERCHIP_SYSTEM:
                return _SUPERCHIP_SYSTEM[instruction]
        return Op.SYS

    if opcode == 0xD and extended and instruction & 0xF == 0:
        return Op.DRW_LARGE

    if opcode in _BY_NIBBLE:
        return _BY_NIBBLE[opcode]

    if opcode in (0x5, 0x8, 0x9):
        return _BY_LAST_NIBBLE.get(instruction & 0xF00F, Op.UNKNOWN)

    masked = instruction & 0xF0FF
    if masked in _BY_LAST_BYTE:
        return _BY_LAST_BYTE[masked]
    if extended and masked in _SUPERCHIP_BY_LAST_BYTE:
        # RPL only has room for V0-V7
        if masked in (0xF075, 0xF085) and (instruction & 0x0F00) >> 8 > 7:
            return Op.UNKNOWN
        return _SUPERCHIP_BY_LAST_BYTE[masked]
    return Op.UNKNOWN


def decode(instruction: int, extended: bool = False) -> DecodedInstruction:
    """Decode 16-bit instruction into components.

    SUPER-CHIP instructions are only recognised when ``extended`` is set;
    otherwise they decode as whatever the base instruction set makes of them.
    """
    instruction = int(instruction) & 0xFFFF
    return DecodedInstruction(
        raw=instruction,
        op=_classify(instruction, extended),
        opcode=(instruction & 0xF000) >> 12,
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=instruction & 0x000F,
        nn=instruction & 0x00FF,
        nnn=instruction & 0x0FFF
    )


_MNEMONICS = {
    Op.SYS: "SYS 0x{nnn:03X}",
    Op.CLS: "CLS",
    Op.RET: "RET",
    Op.JP: "JP 0x{nnn:03X}",
    Op.CALL: "CALL 0x{nnn:03X}",
    Op.SE_IMM: "SE V{x:X}, 0x{nn:02X}",
    Op.SNE_IMM: "SNE V{x:X}, 0x{nn:02X}",
    Op.SE_REG: "SE V{x:X}, V{y:X}",
    Op.SNE_REG: "SNE V{x:X}, V{y:X}",
    Op.LD_IMM: "LD V{x:X}, 0x{nn:02X}",
    Op.ADD_IMM: "ADD V{x:X}, 0x{nn:02X}",
    Op.LD_REG: "LD V{x:X}, V{y:X}",
    Op.OR: "OR V{x:X}, V{y:X}",
    Op.AND: "AND V{x:X}, V{y:X}",
    Op.XOR: "XOR V{x:X}, V{y:X}",
    Op.ADD_REG: "ADD V{x:X}, V{y:X}",
    Op.SUB: "SUB V{x:X}, V{y:X}",
    Op.SHR: "SHR V{x:X}, V{y:X}",
    Op.SUBN: "SUBN V{x:X}, V{y:X}",
    Op.SHL: "SHL V{x:X}, V{y:X}",
    Op.LD_I: "LD I, 0x{nnn:03X}",
    Op.JP_OFFSET: "JP V0, 0x{nnn:03X}",
    Op.RND: "RND V{x:X}, 0x{nn:02X}",
    Op.DRW: "DRW V{x:X}, V{y:X}, {n}",
    Op.SKP: "SKP V{x:X}",
    Op.SKNP: "SKNP V{x:X}",
    Op.LD_VX_DT: "LD V{x:X}, DT",
    Op.LD_VX_K: "LD V{x:X}, K",
    Op.LD_DT_VX: "LD DT, V{x:X}",
    Op.LD_ST_VX: "LD ST, V{x:X}",
    Op.ADD_I: "ADD I, V{x:X}",
    Op.LD_F: "LD F, V{x:X}",
    Op.LD_B: "LD B, V{x:X}",
    Op.LD_MEM_VX: "LD [I], V{x:X}",
    Op.LD_VX_MEM: "LD V{x:X}, [I]",
    Op.SCD: "SCD {n}",
    Op.SCR: "SCR",
    Op.SCL: "SCL",
    Op.EXIT: "EXIT",
    Op.LOW: "LOW",
    Op.HIGH: "HIGH",
    Op.DRW_LARGE: "DRW V{x:X}, V{y:X}, 0",
    Op.LD_HF: "LD HF, V{x:X}",
    Op.LD_R_VX: "LD R, V{x:X}",
    Op.LD_VX_R: "LD V{x:X}, R",
    Op.UNKNOWN: "??? 0x{raw:04X}",
}


def disassemble(instruction: DecodedInstruction) -> str:
    """Assembler-style text for a decoded instruction, used in trace logs."""
    return _MNEMONICS[instruction.op].format(
        raw=instruction.raw, x=instruction.x, y=instruction.y,
        n=instruction.n, nn=instruction.nn, nnn=instruction.nnn,
    )
