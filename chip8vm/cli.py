"""Command-line entry point."""

import argparse
import sys

from chip8vm.errors import Chip8Error
from chip8vm.logging import ConsoleLogger
from chip8vm.rendering import COLOR_SCHEMES


def framebuffer_to_text(framebuffer, on: str = "#", off: str = ".") -> str:
    return "\n".join("".join(on if pixel else off for pixel in row) for row in framebuffer)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chip8vm", description="Run a CHIP-8 program")
    parser.add_argument("program", help="path to a raw CHIP-8 program image")
    parser.add_argument("--scale", type=int, default=16, help="window pixels per CHIP-8 pixel")
    parser.add_argument("--steps-per-frame", type=int, default=10, help="instructions run per displayed frame")
    parser.add_argument("--fps", type=int, default=60, help="displayed frames per second")
    parser.add_argument("--colors", default="white", choices=sorted(COLOR_SCHEMES), help="color scheme name")
    parser.add_argument("--seed", type=int, default=0, help="random generator seed")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--headless", action="store_true",
                        help="run without a window and print the final screen")
    parser.add_argument("--cycles", type=int, default=1000, help="cycles to run in headless mode")
    return parser


def run_headless(args, logger: ConsoleLogger) -> int:
    from chip8vm.interpreter import Interpreter

    interpreter = Interpreter(seed=args.seed, logger=logger)
    interpreter.load_file(args.program)
    interpreter.run_cycles(args.cycles, progress=True)
    if interpreter.waiting_for_key:
        logger.warning("Program is waiting for a key press")
    print(framebuffer_to_text(interpreter.framebuffer()))
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logger = ConsoleLogger(log_level=args.log_level)

    try:
        if args.headless:
            return run_headless(args, logger)

        from chip8vm.frontend import FrontendConfig, run
        config = FrontendConfig(
            scale=args.scale,
            steps_per_frame=args.steps_per_frame,
            fps=args.fps,
            color_scheme=args.colors,
            seed=args.seed,
        )
        return run(args.program, config, logger)
    except Chip8Error as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
