"""Draw the sixteen built-in font glyphs and print the screen.

Runs the same program twice: once through the compiled pure core, once
through the stateful ``Interpreter``.
"""

import jax.numpy as jnp

from chip8vm import Interpreter, create_state, load_program, run_n_instructions, export_framebuffer
from chip8vm.cli import framebuffer_to_text


def assemble(*words):
    return b"".join(word.to_bytes(2, "big") for word in words)


# V0 = digit, V1 = x, V2 = y
PROGRAM = assemble(
    0x6000,  # 200: V0 = 0
    0x6101,  # 202: V1 = 1
    0x6201,  # 204: V2 = 1
    0xF029,  # 206: I = glyph(V0)
    0xD125,  # 208: draw 5 rows at (V1, V2)
    0x7001,  # 20A: V0 += 1
    0x7107,  # 20C: V1 += 7
    0x3008,  # 20E: skip if V0 == 8
    0x1214,  # 210: -> 214
    0x6101,  # 212: second row starts at V1 = 1
    0x3008,  # 214: skip if V0 == 8
    0x121A,  # 216: -> 21A
    0x7208,  # 218: V2 += 8
    0x3010,  # 21A: skip if V0 == 16
    0x1206,  # 21C: -> 206
    0x121E,  # 21E: halt
)


if __name__ == "__main__":
    state = load_program(create_state(), PROGRAM)
    state = run_n_instructions(state, 200)
    print(framebuffer_to_text(export_framebuffer(state)))

    vm = Interpreter()
    vm.load(PROGRAM)
    vm.run_cycles(200, progress=True)
    assert jnp.array_equal(vm.state.display, state.display)
