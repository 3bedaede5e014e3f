"""Stateful CHIP-8 interpreter.

``Interpreter`` owns the current ``EmulatorState`` and connects the pure core
to its collaborators: a keypad source sampled once per step, a monotonic clock
for the 60 Hz timers, and a logger.
"""

import time
from typing import Callable, Iterable, Optional, Protocol, Sequence

import jax
import jax.numpy as jnp
import numpy as np

from chip8vm.constants import ADDRESS_MASK, NUM_KEYS
from chip8vm.emulator import run_instruction
from chip8vm.errors import StackOverflow, StackUnderflow
from chip8vm.instructions.misc import resolve_wait_for_key
from chip8vm.loader import load_program, read_program, reset_state
from chip8vm.logging import ConsoleLogger, build_tqdm_progress_bar
from chip8vm.stack import is_empty, is_full
from chip8vm.state import EmulatorState, create_state
from chip8vm.timers import TimerClock


class KeypadSource(Protocol):
    """Input collaborator.

    ``snapshot`` is called first on every step and returns the level of the
    16 keys. ``key_events`` then returns the key codes that went down since the
    previous call. Only edges from the step that dispatches FX0A or later
    can resolve it. Setting ``quit_requested`` stops the interpreter.
    """
    quit_requested: bool

    def snapshot(self) -> Sequence[bool]:
        ...

    def key_events(self) -> Iterable[int]:
        ...


class NullKeypad:
    """Keypad with no keys pressed, for headless runs."""
    quit_requested = False

    def snapshot(self) -> Sequence[bool]:
        return [False] * NUM_KEYS

    def key_events(self) -> Iterable[int]:
        return ()


def export_framebuffer(state: EmulatorState) -> np.ndarray:
    """Row-major ``(32, 64)`` boolean copy of the display."""
    return np.ascontiguousarray(np.array(state.display, dtype=np.bool_).T)


_run_instruction = jax.jit(run_instruction)


class Interpreter:
    """A CHIP-8 machine driven one ``step()`` at a time."""

    def __init__(
        self,
        keypad: Optional[KeypadSource] = None,
        clock: Callable[[], float] = time.monotonic,
        seed: int = 0,
        logger: Optional[ConsoleLogger] = None,
    ):
        self.keypad = keypad or NullKeypad()
        self.timers = TimerClock(clock)
        self.logger = logger or ConsoleLogger(log_level="WARNING")
        self.state = create_state(jax.random.PRNGKey(seed))
        self.running = True
        self.cycles = 0
        self._pending_keys = []

    @property
    def waiting_for_key(self) -> bool:
        return bool(self.state.waiting)

    def reset(self):
        """Return to the power-on configuration."""
        self.state = reset_state(self.state)
        self.timers.reset()
        self.running = True
        self.cycles = 0
        self._pending_keys = []

    def load(self, program: bytes):
        """Reset the machine and load ``program`` at 0x200.

        On ``ProgramTooLarge`` the machine stays in its freshly reset state.
        """
        self.reset()
        self.state = load_program(self.state, program)
        self.logger.info(f"Loaded {len(program)} byte program")

    def load_file(self, filename: str):
        self.load(read_program(filename))
        self.logger.info(f"Program source: {filename}")

    def framebuffer(self) -> np.ndarray:
        return export_framebuffer(self.state)

    def _peek_instruction(self) -> tuple[int, int]:
        address = int(self.state.pc) & ADDRESS_MASK
        memory = self.state.memory
        instruction = (int(memory[address]) << 8) | int(memory[(address + 1) & ADDRESS_MASK])
        return address, instruction

    def _check_stack(self, address: int, instruction: int):
        if instruction >> 12 == 0x2 and is_full(self.state.stack):
            raise StackOverflow(address, instruction)
        if instruction == 0x00EE and is_empty(self.state.stack):
            raise StackUnderflow(address, instruction)

    def _resolve_wait(self, key_events: list) -> bool:
        key = next((k for k in key_events if 0 <= k < NUM_KEYS), None)
        if key is None:
            return False
        self.state = resolve_wait_for_key(self.state, key)
        self.logger.debug(f"Key {key:X} resolved wait")
        return True

    def step(self):
        """Run one cycle: sample input, execute one instruction, tick timers.

        While awaiting a key only the input is serviced; PC and timers hold.
        Key-down edges drained in the step that dispatches FX0A count toward it.

        Raises:
            StackOverflow, StackUnderflow: before the faulting instruction is
                applied, with the machine state untouched.
        """
        snapshot = self.keypad.snapshot()
        key_events = list(self.keypad.key_events())
        if self.keypad.quit_requested:
            self.running = False
            return

        if self.waiting_for_key:
            key_events, self._pending_keys = self._pending_keys + key_events, []
            self.state = self.state.replace(keypad=jnp.asarray(snapshot, dtype=jnp.bool_))
            if not self._resolve_wait(key_events):
                return
        else:
            address, instruction = self._peek_instruction()
            self._check_stack(address, instruction)
            self.state = self.state.replace(keypad=jnp.asarray(snapshot, dtype=jnp.bool_))
            self.state = _run_instruction(self.state)
            if self.waiting_for_key:
                self._pending_keys = key_events

        self.state = self.timers.tick(self.state)
        self.cycles += 1

    def run_cycles(self, n: int, progress: bool = False):
        """Call ``step()`` up to ``n`` times, stopping early on a quit request."""
        update, close = build_tqdm_progress_bar(n, disable=not progress)
        try:
            for i in range(n):
                if not self.running:
                    break
                self.step()
                update(i)
        finally:
            close()
