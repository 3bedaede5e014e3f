"""CHIP-8 virtual machine package."""

from chip8vm.state import EmulatorState, StackState, create_state
from chip8vm.emulator import execute, fetch, run_instruction, run_n_instructions
from chip8vm.loader import load_program, load_rom, read_program, reset_state
from chip8vm.decode import DecodedInstruction, Op, classify, decode
from chip8vm.timers import TimerClock, decrement_timers
from chip8vm.interpreter import Interpreter, KeypadSource, NullKeypad, export_framebuffer
from chip8vm.errors import (
    Chip8Error, LoadError, ProgramTooLarge, ProgramUnreadable,
    StepError, StackOverflow, StackUnderflow,
)
from chip8vm.constants import (
    PROGRAM_START, FONT_START, SCREEN_WIDTH, SCREEN_HEIGHT, MEMORY_SIZE, MAX_PROGRAM_SIZE,
)
from chip8vm.rendering import framebuffer_to_rgb, create_color_scheme

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "fetch",
    "execute",
    "run_instruction",
    "run_n_instructions",
    "load_program",
    "load_rom",
    "read_program",
    "reset_state",
    "DecodedInstruction",
    "Op",
    "classify",
    "decode",
    "TimerClock",
    "decrement_timers",
    "Interpreter",
    "KeypadSource",
    "NullKeypad",
    "export_framebuffer",
    "Chip8Error",
    "LoadError",
    "ProgramTooLarge",
    "ProgramUnreadable",
    "StepError",
    "StackOverflow",
    "StackUnderflow",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "MEMORY_SIZE",
    "MAX_PROGRAM_SIZE",
    "framebuffer_to_rgb",
    "create_color_scheme",
]
