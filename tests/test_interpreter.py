"""Tests for the stateful interpreter: step cycle, input, faults and export."""

import jax.numpy as jnp
import numpy as np
import pytest
from chip8vm import (
    Interpreter, NullKeypad, ProgramTooLarge, StackOverflow, StackUnderflow, MAX_PROGRAM_SIZE,
    run_n_instructions, create_state, load_program,
)
from conftest import program


class TestStepCycle:

    def test_end_to_end_scenario(self, interpreter):
        interpreter.load(program(
            0x00E0,  # 200: clear
            0x6A3C,  # 202: VA = 0x3C
            0xA500,  # 204: I = 0x500
            0xD0A1,  # 206: draw 1 row at (V0, VA)
            0x3A3C,  # 208: skip next if VA == 0x3C
            0x6B01,  # 20A: skipped
            0x6C02,  # 20C
        ))
        interpreter.state = interpreter.state.replace(
            display=jnp.ones_like(interpreter.state.display),
            memory=interpreter.state.memory.at[0x500].set(0x80),
        )

        interpreter.step()
        assert not interpreter.framebuffer().any()

        interpreter.step()
        assert interpreter.state.V[0xA] == 0x3C

        interpreter.step()
        assert interpreter.state.I == 0x500

        interpreter.step()
        # D0A1 draws at (V0, VA) = (0, 0x3C); 0x3C wraps to row 28
        frame = interpreter.framebuffer()
        assert frame[0x3C % 32, 0]
        assert frame.sum() == 1
        assert interpreter.state.V[15] == 0

        interpreter.step()
        assert interpreter.state.pc == 0x20C

        interpreter.step()
        assert interpreter.state.V[0xB] == 0
        assert interpreter.state.V[0xC] == 2

    def test_draw_single_pixel_at_origin(self, interpreter):
        interpreter.load(program(0xA500, 0xD0A1))
        interpreter.state = interpreter.state.replace(memory=interpreter.state.memory.at[0x500].set(0x80))

        interpreter.step()
        interpreter.step()

        frame = interpreter.framebuffer()
        assert frame[0, 0]
        assert frame.sum() == 1
        assert interpreter.state.V[15] == 0

    @pytest.mark.parametrize("setup, instruction, advance", [
        (0x6A3C, 0x3A3C, 4),
        (0x6A3D, 0x3A3C, 2),
        (0x6A3D, 0x4A3C, 4),
        (0x6A3C, 0x4A3C, 2),
        (0x6A00, 0x5A00, 4),
        (0x6A01, 0x5A00, 2),
        (0x6A01, 0x9A00, 4),
        (0x6A00, 0x9A00, 2),
    ])
    def test_skip_net_advance(self, interpreter, setup, instruction, advance):
        interpreter.load(program(setup, instruction))
        interpreter.step()
        before = int(interpreter.state.pc)

        interpreter.step()

        assert int(interpreter.state.pc) - before == advance

    def test_ordinary_instruction_advances_two(self, interpreter):
        interpreter.load(program(0x6001))
        interpreter.step()
        assert interpreter.state.pc == 0x202

    def test_undefined_instruction_only_advances(self, interpreter):
        interpreter.load(program(0x812F, 0xFFFF))
        before = interpreter.state

        interpreter.step()
        interpreter.step()

        assert interpreter.state.pc == 0x204
        assert jnp.array_equal(interpreter.state.V, before.V)
        assert jnp.array_equal(interpreter.state.memory, before.memory)

    def test_call_return_round_trip(self, interpreter):
        interpreter.load(program(0x2206, 0x6101, 0x1204, 0x00EE))

        interpreter.step()  # CALL 0x206
        assert interpreter.state.pc == 0x206
        assert interpreter.state.stack.pointer == 1

        interpreter.step()  # RET
        assert interpreter.state.pc == 0x202
        assert interpreter.state.stack.pointer == 0

    def test_keypad_snapshot_is_visible_to_same_step(self, interpreter, keypad):
        interpreter.load(program(0xE09E, 0x6101, 0x6102))
        keypad.pressed[0] = True

        interpreter.step()

        assert interpreter.state.pc == 0x204

    def test_cycles_counted(self, interpreter):
        interpreter.load(program(0x1200))
        interpreter.run_cycles(5)
        assert interpreter.cycles == 5
        assert interpreter.state.pc == 0x200


class TestLoading:

    def test_load_too_large_leaves_reset_state(self, interpreter):
        interpreter.load(program(0x6A3C))
        interpreter.step()

        with pytest.raises(ProgramTooLarge):
            interpreter.load(bytes(MAX_PROGRAM_SIZE + 1))

        assert interpreter.state.V[10] == 0
        assert interpreter.state.pc == 0x200
        assert interpreter.state.memory[0x200] == 0
        assert interpreter.cycles == 0

    def test_load_file(self, interpreter, tmp_path):
        path = tmp_path / "program.ch8"
        path.write_bytes(program(0x6A3C))

        interpreter.load_file(str(path))
        interpreter.step()

        assert interpreter.state.V[10] == 0x3C


class TestStackFaults:

    def test_overflow_raises_before_applying(self, interpreter):
        interpreter.load(program(0x2200))  # calls itself forever

        for _ in range(16):
            interpreter.step()
        assert interpreter.state.stack.pointer == 16

        with pytest.raises(StackOverflow) as excinfo:
            interpreter.step()

        assert excinfo.value.address == 0x200
        assert excinfo.value.instruction == 0x2200
        assert "0x200" in str(excinfo.value)
        assert interpreter.state.stack.pointer == 16
        assert interpreter.state.pc == 0x200

    def test_fault_leaves_keypad_snapshot_untouched(self, interpreter, keypad):
        interpreter.load(program(0x00EE))
        keypad.press(0x3)

        with pytest.raises(StackUnderflow):
            interpreter.step()

        assert not interpreter.state.keypad.any()

    def test_underflow_raises(self, interpreter):
        interpreter.load(program(0x00EE))

        with pytest.raises(StackUnderflow) as excinfo:
            interpreter.step()

        assert excinfo.value.address == 0x200
        assert excinfo.value.instruction == 0x00EE
        assert interpreter.state.pc == 0x200

    def test_pure_core_saturates(self):
        """Without the interpreter's check the stack index is clamped."""
        state = load_program(create_state(), program(0x2200))

        state = run_n_instructions(state, 20)

        assert state.stack.pointer == 16
        assert state.pc == 0x200


class TestWaitForKey:

    def test_wait_holds_pc_and_timers(self, interpreter, clock):
        interpreter.load(program(0x603C, 0xF015, 0xF30A, 0x6101))
        interpreter.step()
        interpreter.step()  # DT = 0x3C
        interpreter.step()  # FX0A
        assert interpreter.waiting_for_key
        pc = int(interpreter.state.pc)

        for _ in range(5):
            clock.advance(0.05)
            interpreter.step()

        assert interpreter.waiting_for_key
        assert interpreter.state.pc == pc
        assert interpreter.state.delay_timer == 0x3C

    def test_key_down_edge_resolves(self, interpreter, keypad):
        interpreter.load(program(0xF30A, 0x6101))
        interpreter.step()

        keypad.press(0xA)
        interpreter.step()

        assert not interpreter.waiting_for_key
        assert interpreter.state.V[3] == 0xA
        assert interpreter.state.pc == 0x202

        interpreter.step()
        assert interpreter.state.V[1] == 1

    def test_held_key_does_not_resolve(self, interpreter, keypad):
        """A key that went down before FX0A is a level, not an edge."""
        interpreter.load(program(0x6000, 0xF30A))
        keypad.press(0x4)
        interpreter.step()  # event drained by 6000

        interpreter.step()  # FX0A
        interpreter.step()

        assert interpreter.waiting_for_key

    def test_edge_in_same_step_as_wait_resolves(self, interpreter, keypad):
        interpreter.load(program(0xF30A, 0x6101))
        keypad.press(0x7)

        interpreter.step()  # FX0A, edge drained alongside it
        assert interpreter.waiting_for_key

        interpreter.step()

        assert not interpreter.waiting_for_key
        assert interpreter.state.V[3] == 0x7
        assert interpreter.state.pc == 0x202

    def test_reset_forgets_edges_held_for_a_wait(self, interpreter, keypad):
        interpreter.load(program(0xF30A))
        keypad.press(0x7)
        interpreter.step()

        interpreter.load(program(0xF30A))
        interpreter.step()
        interpreter.step()

        assert interpreter.waiting_for_key

    def test_first_event_wins(self, interpreter, keypad):
        interpreter.load(program(0xF30A))
        interpreter.step()

        keypad.press(0x2)
        keypad.press(0x9)
        interpreter.step()

        assert interpreter.state.V[3] == 0x2

    def test_quit_while_waiting(self, interpreter, keypad):
        interpreter.load(program(0xF00A))
        interpreter.step()

        keypad.quit_requested = True
        interpreter.run_cycles(10)

        assert not interpreter.running
        assert interpreter.waiting_for_key


class TestTimersInStep:

    def test_timer_ticks_with_elapsed_time(self, interpreter, clock):
        interpreter.load(program(0x6005, 0xF015, 0x1204))
        interpreter.step()
        interpreter.step()
        assert interpreter.state.delay_timer == 5

        interpreter.run_cycles(100)
        assert interpreter.state.delay_timer == 5  # no time has passed

        clock.advance(0.02)
        interpreter.step()
        assert interpreter.state.delay_timer == 4


class TestFramebufferExport:

    def test_shape_and_row_major(self, interpreter):
        interpreter.state = interpreter.state.replace(
            display=interpreter.state.display.at[63, 1].set(True)
        )

        frame = interpreter.framebuffer()

        assert frame.shape == (32, 64)
        assert frame.dtype == np.bool_
        assert frame[1, 63]

    def test_export_is_a_copy(self, interpreter):
        frame = interpreter.framebuffer()
        frame[0, 0] = True
        assert not interpreter.framebuffer()[0, 0]


def test_null_keypad():
    keypad = NullKeypad()
    assert keypad.snapshot() == [False] * 16
    assert list(keypad.key_events()) == []
    assert not keypad.quit_requested
