"""CHIP-8 stack operations.

Capacity is checked by ``chip8vm.interpreter`` before dispatch. Here the
slot index is clamped so a traced ``execute`` never indexes out of bounds.
"""

import jax.numpy as jnp
from chip8vm.constants import ADDRESS_MASK, STACK_SIZE
from chip8vm.state import StackState


def is_full(stack: StackState) -> bool:
    return stack.pointer >= STACK_SIZE


def is_empty(stack: StackState) -> bool:
    return stack.pointer <= 0


def push(stack: StackState, address: jnp.ndarray) -> StackState:
    """Push address onto stack."""
    slot = jnp.clip(stack.pointer, 0, STACK_SIZE - 1)
    masked_address = jnp.astype(address, jnp.uint16) & ADDRESS_MASK
    new_data = stack.data.at[slot].set(masked_address)
    return stack.replace(data=new_data, pointer=jnp.minimum(stack.pointer + 1, STACK_SIZE))


def pop(stack: StackState) -> tuple[StackState, jnp.ndarray]:
    """Pop address from stack."""
    new_pointer = jnp.maximum(stack.pointer - 1, 0)
    popped_address = stack.data[new_pointer]
    new_data = stack.data.at[new_pointer].set(0)
    return stack.replace(data=new_data, pointer=new_pointer), popped_address
