"""CHIP-8 stack operations."""

import jax.numpy as jnp

from chipjax.constants import STACK_SIZE
from chipjax.errors import StackOverflow, StackUnderflow
from chipjax.state import StackState


def depth(stack: StackState) -> int:
    return int(stack.pointer)


def push(stack: StackState, address: jnp.ndarray) -> StackState:
    """Push address onto stack."""
    pointer = depth(stack)
    if pointer >= STACK_SIZE:
        raise StackOverflow(int(address))
    # Not masked: a return past 0xFFF must fail on the next fetch
    new_data = stack.data.at[pointer].set(int(address))
    return stack.replace(data=new_data, pointer=pointer + 1)


def pop(stack: StackState) -> tuple[StackState, int]:
    """Pop address from stack."""
    pointer = depth(stack)
    if pointer == 0:
        raise StackUnderflow()
    new_pointer = pointer - 1
    popped_address = int(stack.data[new_pointer])
    new_data = stack.data.at[new_pointer].set(0)
    return stack.replace(data=new_data, pointer=new_pointer), popped_address
