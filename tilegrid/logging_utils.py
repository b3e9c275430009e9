"""Console logging for tilegrid.

Each line carries a short tag so output stays readable without color.
Progress lines from path map builds and grid loading only appear when
``TILEGRID_VERBOSE`` is set; ``TILEGRID_NO_COLOR`` strips the ANSI codes.
"""

import os
from enum import Enum


class Color(Enum):
    BLUE = "\033[94m"      # Builds and queries
    RED = "\033[91m"       # Errors
    GREEN = "\033[92m"     # Finished work
    CYAN = "\033[96m"      # Grid info
    RESET = "\033[0m"


def colored(text: str, color: Color) -> str:
    """Return ``text`` wrapped in ``color``, or unchanged under TILEGRID_NO_COLOR."""
    if os.getenv("TILEGRID_NO_COLOR"):
        return text
    return f"{color.value}{text}{Color.RESET.value}"


def verbose_enabled() -> bool:
    """Return True when TILEGRID_VERBOSE asks for progress output."""
    return os.getenv("TILEGRID_VERBOSE", "").lower() in ("1", "true", "yes")


def log_deterministic(message: str) -> None:
    print(colored(f"{LOG_TAG_DETERMINISTIC} {message}", Color.BLUE))


def log_error(message: str) -> None:
    print(colored(f"{LOG_TAG_ERROR} {message}", Color.RED))


def log_success(message: str) -> None:
    print(colored(f"{LOG_TAG_SUCCESS} {message}", Color.GREEN))


def log_info(message: str) -> None:
    print(colored(f"{LOG_TAG_INFO} {message}", Color.CYAN))


# Tags keep log kinds distinguishable without color
LOG_TAG_DETERMINISTIC = "[•]"
LOG_TAG_ERROR = "[!]"
LOG_TAG_SUCCESS = "[✓]"
LOG_TAG_INFO = "[i]"
