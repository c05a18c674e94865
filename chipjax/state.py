"""CHIP-8 emulator state structures."""

import enum

import jax
import jax.numpy as jnp
from flax.struct import dataclass, PyTreeNode, field

from chipjax.config import MachineConfig
from chipjax.constants import (
    PROGRAM_START, MEMORY_SIZE, FONT_START, FONT_DATA, BIG_FONT_START, BIG_FONT_DATA,
    SCREEN_WIDTH, SCREEN_HEIGHT, STACK_SIZE, NUM_REGISTERS, NUM_KEYS, RPL_SIZE,
)


class ControlState(enum.Enum):
    """Interpreter control state checked at the top of every step."""
    RUNNING = "running"
    WAITING_FOR_KEY = "waiting_for_key"


@dataclass(frozen=True)
class StackState:
    """Stack state for subroutine calls."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: int = 0


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state.

    ``display`` is indexed ``[x, y]`` and its shape follows the active
    resolution. ``key_register`` is only meaningful while ``control`` is
    ``WAITING_FOR_KEY``.
    """
    rng: jax.random.PRNGKey
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.astype(PROGRAM_START, jnp.uint16))
    display: jnp.ndarray = field(default_factory=lambda: jnp.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=jnp.bool_))
    stack: StackState = StackState()
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    rpl: jnp.ndarray = field(default_factory=lambda: jnp.zeros(RPL_SIZE, dtype=jnp.uint8))
    hires: bool = field(pytree_node=False, default=False)
    control: ControlState = field(pytree_node=False, default=ControlState.RUNNING)
    key_register: int = field(pytree_node=False, default=0)
    config: MachineConfig = field(pytree_node=False, default=MachineConfig())

    @property
    def quirks(self):
        return self.config.quirks

    @property
    def waiting_for_key(self) -> bool:
        return self.control is ControlState.WAITING_FOR_KEY


def create_state(
    rng: jax.random.PRNGKey = jax.random.PRNGKey(0),
    config: MachineConfig | None = None,
) -> EmulatorState:
    """Create initial emulator state with both fonts loaded."""
    state = EmulatorState(rng, config=config or MachineConfig())
    memory = state.memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(FONT_DATA)
    memory = memory.at[BIG_FONT_START:BIG_FONT_START + len(BIG_FONT_DATA)].set(BIG_FONT_DATA)
    return state.replace(memory=memory)
