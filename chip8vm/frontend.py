"""pygame window and keypad for the interpreter."""

import dataclasses
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np
import pygame

from chip8vm.constants import NUM_KEYS, SCREEN_WIDTH, SCREEN_HEIGHT
from chip8vm.errors import StepError
from chip8vm.interpreter import Interpreter
from chip8vm.logging import ConsoleLogger
from chip8vm.rendering import framebuffer_to_rgb, create_color_scheme

# 1 2 3 C        1 2 3 4
# 4 5 6 D   <-   Q W E R
# 7 8 9 E        A S D F
# A 0 B F        Z X C V
KEY_MAP = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}


@dataclasses.dataclass
class FrontendConfig:
    """Window and pacing settings.

    Attributes:
        scale: Window pixels per CHIP-8 pixel (16 gives a 1024x512 window)
        steps_per_frame: Interpreter steps run between two presented frames
        fps: Frames presented per second
        color_scheme: Name understood by ``create_color_scheme``
        seed: Seed of the random number generator used by CXNN
        key_map: pygame key code to CHIP-8 key code
    """
    scale: int = 16
    steps_per_frame: int = 10
    fps: int = 60
    color_scheme: str = "white"
    seed: int = 0
    key_map: Dict[int, int] = dataclasses.field(default_factory=lambda: dict(KEY_MAP))


class PygameKeypad:
    """``KeypadSource`` fed by the pygame event queue."""

    def __init__(self, key_map: Optional[Dict[int, int]] = None):
        self.key_map = KEY_MAP if key_map is None else key_map
        self.pressed = [False] * NUM_KEYS
        self.quit_requested = False
        self._key_downs: List[int] = []

    def handle_event(self, event):
        if event.type == pygame.QUIT:
            self.quit_requested = True
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.quit_requested = True
            elif event.key in self.key_map:
                key = self.key_map[event.key]
                self.pressed[key] = True
                self._key_downs.append(key)
        elif event.type == pygame.KEYUP:
            if event.key in self.key_map:
                self.pressed[self.key_map[event.key]] = False

    def snapshot(self) -> Sequence[bool]:
        for event in pygame.event.get():
            self.handle_event(event)
        return list(self.pressed)

    def key_events(self) -> Iterable[int]:
        key_downs, self._key_downs = self._key_downs, []
        return key_downs


def present(screen, framebuffer: np.ndarray, scale: int, colors):
    """Blit a row-major framebuffer onto ``screen``."""
    on_color, off_color = colors
    rgb = framebuffer_to_rgb(framebuffer, scale, on_color, off_color)
    # pygame surfaces are indexed (x, y)
    pygame.surfarray.blit_array(screen, rgb.swapaxes(0, 1))
    pygame.display.flip()


def run(program_path: str, config: Optional[FrontendConfig] = None, logger: Optional[ConsoleLogger] = None) -> int:
    """Open a window and run ``program_path`` until the window is closed.

    Returns a process exit status.
    """
    config = config or FrontendConfig()
    logger = logger or ConsoleLogger()
    colors = create_color_scheme(config.color_scheme)

    keypad = PygameKeypad(config.key_map)
    interpreter = Interpreter(keypad=keypad, seed=config.seed, logger=logger)
    interpreter.load_file(program_path)

    pygame.init()
    try:
        screen = pygame.display.set_mode((SCREEN_WIDTH * config.scale, SCREEN_HEIGHT * config.scale))
        pygame.display.set_caption("CHIP-8")
        clock = pygame.time.Clock()

        while interpreter.running:
            for _ in range(config.steps_per_frame):
                interpreter.step()
                if not interpreter.running:
                    break
            present(screen, interpreter.framebuffer(), config.scale, colors)
            clock.tick(config.fps)
    except StepError as e:
        logger.error(str(e))
        return 1
    finally:
        pygame.quit()

    logger.info(f"Stopped after {interpreter.cycles} cycles")
    return 0
