"""Program loading."""

import jax.numpy as jnp

from chip8vm.constants import PROGRAM_START, MAX_PROGRAM_SIZE
from chip8vm.errors import ProgramTooLarge, ProgramUnreadable
from chip8vm.state import EmulatorState, create_state


def reset_state(state: EmulatorState) -> EmulatorState:
    """Return the power-on configuration, keeping the random stream of ``state``."""
    return create_state(state.rng)


def load_program(state: EmulatorState, program: bytes) -> EmulatorState:
    """Reset the machine and copy ``program`` into memory at 0x200.

    Raises:
        ProgramTooLarge: if the image does not fit between 0x200 and the end of memory.
    """
    if len(program) > MAX_PROGRAM_SIZE:
        raise ProgramTooLarge(len(program), MAX_PROGRAM_SIZE)

    state = reset_state(state)
    if not program:
        return state
    program_array = jnp.array(list(program), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(program)].set(program_array)
    return state.replace(memory=new_memory)


def read_program(filename: str) -> bytes:
    """Read a raw program image from disk."""
    try:
        with open(filename, 'rb') as f:
            return f.read()
    except OSError as e:
        raise ProgramUnreadable(str(filename), e.strerror or str(e)) from e


def load_rom(state: EmulatorState, filename: str) -> EmulatorState:
    """Load ROM data from ``filename`` into CHIP-8 memory starting at 0x200."""
    return load_program(state, read_program(filename))
