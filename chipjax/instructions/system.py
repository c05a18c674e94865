"""CHIP-8 system instructions (0x0xxx), including the SUPER-CHIP screen controls."""

from chipjax import display
from chipjax.constants import SCROLL_DISTANCE
from chipjax.state import EmulatorState
from chipjax.decode import DecodedInstruction
from chipjax.registers import get_pc, set_pc
from chipjax.stack import pop


def execute_machine_call(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """0NNN - Call machine code routine (ignored)."""
    return state


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Clear display."""
    return state.replace(display=display.clear(state.display))


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return set_pc(state.replace(stack=stack), address)


def execute_scroll_down(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00CN - Scroll display N rows down."""
    return state.replace(display=display.scroll_down(state.display, instruction.n))


def execute_scroll_right(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00FB - Scroll display 4 pixels right."""
    return state.replace(display=display.scroll_right(state.display, SCROLL_DISTANCE))


def execute_scroll_left(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00FC - Scroll display 4 pixels left."""
    return state.replace(display=display.scroll_left(state.display, SCROLL_DISTANCE))


def execute_exit(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00FD - Exit interpreter.

    The program counter is wound back onto this instruction so the machine
    parks here; the host decides when to stop stepping.
    """
    return set_pc(state, get_pc(state) - 2)


def execute_low_resolution(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00FE - Switch to 64x32, clearing the display."""
    return state.replace(display=display.set_resolution(False), hires=False)


def execute_high_resolution(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00FF - Switch to 128x64, clearing the display."""
    return state.replace(display=display.set_resolution(True), hires=True)
