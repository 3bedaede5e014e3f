"""
Run a CHIP-8 program in a pygame window.

    python main.py path/to/program.ch8 [--scale 16] [--steps-per-frame 10]
"""

import sys

from chip8vm.cli import main

if __name__ == "__main__":
    sys.exit(main())
