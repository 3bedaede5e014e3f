"""60 Hz delay and sound timers.

The timers count down in wall-clock time, independently of how many
instructions run. Each timer keeps its own last-decrement timestamp so a
late tick on one does not shift the other.
"""

import time
from typing import Callable

import jax.numpy as jnp

from chip8vm.constants import TIMER_PERIOD
from chip8vm.state import EmulatorState


def decrement_timers(state: EmulatorState, delay: bool = True, sound: bool = True) -> EmulatorState:
    """Decrement the selected timers by one, stopping at zero."""
    delay_timer = state.delay_timer
    sound_timer = state.sound_timer
    if delay:
        delay_timer = jnp.where(delay_timer > 0, delay_timer - 1, delay_timer)
    if sound:
        sound_timer = jnp.where(sound_timer > 0, sound_timer - 1, sound_timer)
    return state.replace(
        delay_timer=jnp.astype(delay_timer, jnp.uint8),
        sound_timer=jnp.astype(sound_timer, jnp.uint8),
    )


class TimerClock:
    """Decides when each timer is due against a monotonic clock.

    A timer is due once it is nonzero and at least one period has passed
    since its own last decrement. The timestamp only moves on a decrement.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic, period: float = TIMER_PERIOD):
        self.clock = clock
        self.period = period
        self.reset()

    def reset(self):
        now = self.clock()
        self.last_delay_tick = now
        self.last_sound_tick = now

    def tick(self, state: EmulatorState) -> EmulatorState:
        """Apply whatever decrements are due at the current time."""
        now = self.clock()
        delay_due = int(state.delay_timer) > 0 and now - self.last_delay_tick >= self.period
        sound_due = int(state.sound_timer) > 0 and now - self.last_sound_tick >= self.period
        if not (delay_due or sound_due):
            return state

        if delay_due:
            self.last_delay_tick = now
        if sound_due:
            self.last_sound_tick = now
        return decrement_timers(state, delay=delay_due, sound=sound_due)
