"""Host-facing CHIP-8 machine.

:class:`Machine` owns one immutable :class:`~chipjax.state.EmulatorState`
and swaps in a new one after each successful operation, so a failing
``step()`` leaves the machine exactly as it was.
"""

import jax
import numpy as np

from chipjax import display, keypad, timers
from chipjax.config import Mode, Quirks, UnknownOpcodePolicy, make_config
from chipjax.decode import DecodedInstruction, Op, disassemble
from chipjax.emulator import step as step_state, tick_timers as tick_state
from chipjax.errors import EmulationError
from chipjax.logging import ConsoleLogger
from chipjax.memory import load_program
from chipjax.state import EmulatorState, ControlState, create_state


class Machine:
    """A CHIP-8 or SUPER-CHIP machine driven one instruction at a time.

    Args:
        rom: Program image loaded at 0x200.
        mode: ``Mode.BASE`` (64x32, CHIP-8 quirks) or ``Mode.EXTENDED``
            (SUPER-CHIP opcodes and quirks, 128x64 available).
        seed: Seed for the random number instruction.
        quirks: Override the mode's default quirk table.
        unknown_opcode: Whether unknown instructions raise or are skipped.
        logger: Logger for debug messages.
        trace: Log every executed instruction at DEBUG level.

    Raises:
        RomTooLarge: If ``rom`` does not fit in memory.
    """

    def __init__(
        self,
        rom: bytes,
        mode: Mode = Mode.BASE,
        *,
        seed: int = 0,
        quirks: Quirks | None = None,
        unknown_opcode: UnknownOpcodePolicy = UnknownOpcodePolicy.FAIL,
        logger: ConsoleLogger | None = None,
        trace: bool = False,
    ):
        self.logger = logger or ConsoleLogger(log_level="WARNING")
        self.trace = trace
        self.config = make_config(mode, quirks, unknown_opcode)
        state = create_state(jax.random.PRNGKey(seed), self.config)
        self._state = load_program(state, rom)
        self.cycles = 0
        self.logger.debug(f"Loaded {len(rom)} byte ROM in {mode.value} mode")

    @classmethod
    def initialize(cls, rom: bytes, mode: Mode = Mode.BASE, **options) -> "Machine":
        return cls(rom, mode, **options)

    @property
    def state(self) -> EmulatorState:
        """Current (immutable) emulator state."""
        return self._state

    @property
    def mode(self) -> Mode:
        return self.config.mode

    @property
    def control_state(self) -> ControlState:
        return self._state.control

    @property
    def is_waiting_for_key(self) -> bool:
        return self._state.waiting_for_key

    @property
    def resolution(self) -> tuple[int, int]:
        return display.resolution(self._state.hires)

    def step(self) -> DecodedInstruction | None:
        """Execute one instruction.

        Returns:
            The instruction executed, or None while waiting for a key.

        Raises:
            EmulationError: On a fatal condition; the machine state is unchanged.
        """
        previous = self._state
        try:
            new_state, instruction = step_state(previous)
        except EmulationError as e:
            self.logger.debug(f"Step failed at PC=0x{int(previous.pc):03X}: {e}")
            raise

        if instruction is not None:
            self.cycles += 1
            self._log_transitions(previous, new_state, instruction)
        elif previous.control is not new_state.control:
            self.logger.debug("Key wait satisfied")

        self._state = new_state
        return instruction

    def _log_transitions(self, previous: EmulatorState, new_state: EmulatorState, instruction: DecodedInstruction):
        if not self.logger.is_enabled_for("DEBUG"):
            return
        if self.trace:
            self.logger.debug(f"0x{int(previous.pc):03X}: {instruction.raw:04X}  {disassemble(instruction)}")
        if instruction.op is Op.UNKNOWN:
            self.logger.debug(f"Skipped unknown opcode 0x{instruction.raw:04X}")
        if previous.hires != new_state.hires:
            width, height = display.resolution(new_state.hires)
            self.logger.debug(f"Resolution switched to {width}x{height}")
        if new_state.waiting_for_key and not previous.waiting_for_key:
            self.logger.debug(f"Waiting for key into V{new_state.key_register:X}")

    def run(self, cycles: int) -> int:
        """Step up to ``cycles`` times; returns how many instructions ran."""
        executed = 0
        for _ in range(cycles):
            if self.step() is not None:
                executed += 1
        return executed

    def tick_timers(self):
        """Decrement delay and sound timers; call at 60 Hz."""
        self._state = tick_state(self._state)

    def framebuffer(self) -> np.ndarray:
        """Read-only snapshot of the display, indexed ``[x, y]``."""
        frame = np.array(self._state.display, dtype=np.bool_)
        frame.setflags(write=False)
        return frame

    def is_sound_active(self) -> bool:
        return timers.is_sound_active(self._state)

    def key_down(self, key: int):
        self._state = keypad.key_down(self._state, key)

    def key_up(self, key: int):
        self._state = keypad.key_up(self._state, key)

    def is_pressed(self, key: int) -> bool:
        return keypad.is_pressed(self._state, key)
