"""Console logging for the interpreter and its front ends.

``ConsoleLogger`` prints leveled, optionally colored lines stamped with the
time since the logger was created. ``build_tqdm_progress_bar`` reports
progress of long headless runs.
"""

import sys
import time
from typing import Callable, Optional, Tuple

from tqdm import tqdm

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_ANSI = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
_RESET = "\033[0m"


class ConsoleLogger:
    """Leveled console logger.

    Colors are only used when ``stream`` is a terminal. Unknown level names
    rank as INFO.
    """

    def __init__(
        self,
        name: str = "chip8vm",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream=None,
    ):
        self.name = name
        self.log_level = log_level.upper()
        self.stream = stream or sys.stdout
        self.use_colors = use_colors and getattr(self.stream, "isatty", lambda: False)()
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

    @staticmethod
    def _rank(level: str) -> int:
        level = level.upper()
        return LEVELS.index(level) if level in LEVELS else LEVELS.index("INFO")

    def enabled_for(self, level: str) -> bool:
        return self._rank(level) >= self._rank(self.log_level)

    def _format_message(self, level: str, message: str) -> str:
        level = level.upper()
        tag = f"[{level:>8s}]"
        if self.use_colors and level in _ANSI:
            tag = f"{_ANSI[level]}{tag}{_RESET}"
        stamp = f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        return f"{stamp}{tag}[{self.name}] {message}"

    def log(self, level: str, message: str):
        if self.enabled_for(level):
            print(self._format_message(level, message), file=self.stream, flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def critical(self, message: str):
        self.log("CRITICAL", message)


def build_tqdm_progress_bar(
    n: int,
    print_rate: Optional[int] = None,
    desc: Optional[str] = None,
    **kwargs,
) -> Tuple[Callable, Callable]:
    """Build a tqdm bar over ``n`` interpreter cycles.

    Returns ``(update, close)``. ``update(iter_num)`` takes the zero-based
    cycle index and refreshes the bar every ``print_rate`` cycles and on the
    last one.
    """
    desc = desc or f"Running ({n:,} cycles)"
    for reserved in ("total", "mininterval", "maxinterval", "miniters"):
        kwargs.pop(reserved, None)

    if print_rate is None:
        print_rate = min(n // 20, 50)
    print_rate = max(1, min(print_rate, max(n, 1)))

    bar = tqdm(total=n, desc=desc, unit="cycle", **kwargs)
    reported = [0]

    def update(iter_num):
        done = iter_num + 1
        if done % print_rate == 0 or done == n:
            bar.update(done - reported[0])
            reported[0] = done

    return update, bar.close
