"""Tests for the 60 Hz timers."""

import jax.numpy as jnp
from chip8vm import TimerClock, decrement_timers
from conftest import FakeClock


def with_timers(state, delay, sound):
    return state.replace(
        delay_timer=jnp.astype(delay, jnp.uint8),
        sound_timer=jnp.astype(sound, jnp.uint8),
    )


def test_decrement_stops_at_zero(fresh_state):
    state = with_timers(fresh_state, 1, 0)

    state = decrement_timers(state)
    state = decrement_timers(state)

    assert state.delay_timer == 0
    assert state.sound_timer == 0


def test_decrement_selected_timer_only(fresh_state):
    state = with_timers(fresh_state, 5, 5)

    state = decrement_timers(state, delay=False, sound=True)

    assert state.delay_timer == 5
    assert state.sound_timer == 4


def test_no_tick_before_period(fresh_state):
    clock = FakeClock()
    timers = TimerClock(clock)
    state = with_timers(fresh_state, 10, 10)

    clock.advance(0.01)
    state = timers.tick(state)

    assert state.delay_timer == 10
    assert state.sound_timer == 10


def test_one_decrement_per_period(fresh_state):
    clock = FakeClock()
    timers = TimerClock(clock)
    state = with_timers(fresh_state, 10, 10)

    clock.advance(0.02)
    state = timers.tick(state)
    state = timers.tick(state)  # same instant, not due again

    assert state.delay_timer == 9
    assert state.sound_timer == 9


def test_late_tick_decrements_only_once(fresh_state):
    clock = FakeClock()
    timers = TimerClock(clock)
    state = with_timers(fresh_state, 10, 0)

    clock.advance(1.0)
    state = timers.tick(state)

    assert state.delay_timer == 9


def test_timers_keep_independent_cadence(fresh_state):
    clock = FakeClock()
    timers = TimerClock(clock)
    state = with_timers(fresh_state, 10, 0)

    clock.advance(0.02)
    state = timers.tick(state)  # delay ticks at t=0.02, sound idle
    assert state.delay_timer == 9

    state = state.replace(sound_timer=jnp.astype(3, jnp.uint8))
    clock.advance(0.01)  # t=0.03
    state = timers.tick(state)

    # sound has not ticked since t=0, delay ticked 0.01 ago
    assert state.sound_timer == 2
    assert state.delay_timer == 9

    clock.advance(0.01)  # t=0.04
    state = timers.tick(state)
    assert state.delay_timer == 8
    assert state.sound_timer == 2


def test_zero_timer_is_not_decremented(fresh_state):
    clock = FakeClock()
    timers = TimerClock(clock)

    clock.advance(0.5)
    state = timers.tick(fresh_state)

    assert state.delay_timer == 0
    assert timers.last_delay_tick == 0.0
