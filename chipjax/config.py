"""Interpreter configuration: machine mode, quirk tables and opcode policy."""

import enum

from flax.struct import dataclass, field


class Mode(enum.Enum):
    """Machine flavour selected at construction."""
    BASE = "chip8"
    EXTENDED = "superchip"


class UnknownOpcodePolicy(enum.Enum):
    """What ``execute`` does with an instruction it cannot decode."""
    FAIL = "fail"
    SKIP = "skip"


@dataclass(frozen=True)
class Quirks:
    """Behaviour switches for opcodes whose semantics differ between interpreters.

    Attributes:
        shift_uses_vy: 8XY6/8XYE shift VY into VX instead of shifting VX in place.
        jump_uses_vx: BXNN jumps to XNN + VX instead of BNNN jumping to NNN + V0.
        increment_index: FX55/FX65 leave I pointing past the last register copied.
        logic_resets_flag: 8XY1/8XY2/8XY3 reset VF to 0.
    """
    shift_uses_vy: bool = field(pytree_node=False, default=True)
    jump_uses_vx: bool = field(pytree_node=False, default=False)
    increment_index: bool = field(pytree_node=False, default=True)
    logic_resets_flag: bool = field(pytree_node=False, default=True)


CHIP8_QUIRKS = Quirks()

SUPERCHIP_QUIRKS = Quirks(
    shift_uses_vy=False,
    jump_uses_vx=True,
    increment_index=False,
    logic_resets_flag=False,
)


def quirks_for(mode: Mode) -> Quirks:
    """Default quirk table for a machine mode."""
    return SUPERCHIP_QUIRKS if mode is Mode.EXTENDED else CHIP8_QUIRKS


@dataclass(frozen=True)
class MachineConfig:
    """Construction-time settings carried (statically) by the emulator state."""
    mode: Mode = field(pytree_node=False, default=Mode.BASE)
    quirks: Quirks = field(pytree_node=False, default=CHIP8_QUIRKS)
    unknown_opcode: UnknownOpcodePolicy = field(pytree_node=False, default=UnknownOpcodePolicy.FAIL)

    @property
    def extended(self) -> bool:
        return self.mode is Mode.EXTENDED


def make_config(
    mode: Mode = Mode.BASE,
    quirks: Quirks | None = None,
    unknown_opcode: UnknownOpcodePolicy = UnknownOpcodePolicy.FAIL,
) -> MachineConfig:
    """Build a config, filling in the mode's default quirk table."""
    return MachineConfig(
        mode=mode,
        quirks=quirks_for(mode) if quirks is None else quirks,
        unknown_opcode=unknown_opcode,
    )
