"""Console logging for the interpreter and its command-line host.

:class:`ConsoleLogger` prints levelled, optionally coloured lines with the
time elapsed since the logger was created. :class:`RunLogger` adds the
banners and ``tqdm`` progress bar used by headless runs.
"""

import sys
import time
from typing import Any, Dict, Iterable, Optional

from tqdm import tqdm

LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40, "CRITICAL": 50}

COLORS = {
    "DEBUG": "\033[36m",     # cyan
    "INFO": "\033[32m",      # green
    "WARNING": "\033[33m",   # yellow
    "ERROR": "\033[31m",     # red
    "CRITICAL": "\033[35m",  # magenta
}
RESET = "\033[0m"


def _level_number(level: str) -> int:
    try:
        return LEVELS[level.upper()]
    except KeyError:
        raise ValueError(f"Unknown log level '{level}'. Available: {list(LEVELS)}") from None


class ConsoleLogger:
    """Levelled console logger.

    Args:
        name: Tag printed on every line.
        log_level: Minimum level shown (``DEBUG`` to ``CRITICAL``).
        use_colors: Colour the level tag; ignored unless stdout is a terminal.
        show_timestamps: Prefix lines with seconds since creation.
    """

    def __init__(
        self,
        name: str = "chipjax",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
    ):
        self.name = name
        self.set_level(log_level)
        self.use_colors = use_colors and hasattr(sys.stdout, "isatty") and sys.stdout.isatty()
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

    def set_level(self, log_level: str):
        self._threshold = _level_number(log_level)
        self.log_level = log_level.upper()

    def is_enabled_for(self, level: str) -> bool:
        return _level_number(level) >= self._threshold

    def _format_message(self, level: str, message: str) -> str:
        tag = f"[{level:>8s}]"
        if self.use_colors:
            tag = f"{COLORS[level]}{tag}{RESET}"
        prefix = f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        return f"{prefix}{tag}[{self.name}] {message}"

    def log(self, level: str, message: str):
        level = level.upper()
        if self.is_enabled_for(level):
            print(self._format_message(level, message), flush=True)

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


class RunLogger(ConsoleLogger):
    """Logger for batch (headless) runs: settings banner, progress, summary."""

    def _banner(self, title: str, values: Dict[str, Any]):
        rule = "=" * 60
        self.info(rule)
        self.info(title)
        for key, value in values.items():
            self.info(f"  {key}: {value:.2f}" if isinstance(value, float) else f"  {key}: {value}")
        self.info(rule)

    def log_run_start(self, config: Dict[str, Any]):
        self._banner("Starting run with configuration:", config)

    def log_run_end(self, stats: Dict[str, Any]):
        self._banner(f"Run completed in {time.time() - self.start_time:.1f}s", stats)

    def progress(self, n: int, desc: Optional[str] = None) -> Iterable[int]:
        """``range(n)`` wrapped in a progress bar, hidden when INFO is filtered out."""
        return tqdm(
            range(n),
            desc=desc or f"Emulating ({n:,} frames)",
            unit="frame",
            disable=not self.is_enabled_for("INFO"),
        )
