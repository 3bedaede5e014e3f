"""Test configuration and fixtures for CHIP-8 machine tests."""

import pytest
import jax.numpy as jnp
from chip8vm import create_state, Interpreter


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeKeypad:
    """Scripted keypad: set ``pressed`` levels and queue key-down events."""

    def __init__(self):
        self.pressed = [False] * 16
        self.pending = []
        self.quit_requested = False

    def press(self, key):
        self.pressed[key] = True
        self.pending.append(key)

    def release(self, key):
        self.pressed[key] = False

    def snapshot(self):
        return list(self.pressed)

    def key_events(self):
        events, self.pending = self.pending, []
        return events


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def keypad():
    return FakeKeypad()


@pytest.fixture
def interpreter(keypad, clock):
    return Interpreter(keypad=keypad, clock=clock)


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def program(*words):
    """Assemble 16-bit instruction words into a big-endian program image."""
    return b"".join(word.to_bytes(2, "big") for word in words)
