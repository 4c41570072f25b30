"""Level-gated logging and helpers that turn numeric codes into names."""

from __future__ import annotations

import logging
import time
from typing import Iterable, Optional, Tuple

from kltekit.msg_q import MsgQueueStatus
from kltekit.target import GnssTarget, SscType, gnss_type

_log = logging.getLogger("kltekit.loc")

UNKNOWN_STR = "UNKNOWN"

# Value of DEBUG_LEVEL meaning "no level configured": defer to the
# underlying logger's own levels.
DEBUG_LEVEL_UNSET = 0xFF

ERROR = 1
WARNING = 2
INFO = 3
DEBUG = 4
VERBOSE = 5

_LEVELS = {
    ERROR: ("E", logging.ERROR),
    WARNING: ("W", logging.WARNING),
    INFO: ("I", logging.INFO),
    DEBUG: ("D", logging.DEBUG),
    VERBOSE: ("V", logging.DEBUG),
}

BOOL_STR = ("False", "True")
VOID_RET = "None"
FROM_AFW = "===>"
TO_MODEM = "--->"
FROM_MODEM = "<---"
TO_AFW = "<==="
EXIT_TAG = "Exiting"
ENTRY_TAG = "Entering"

NameTable = Iterable[Tuple[str, int]]

MSG_Q_STATUS_NAMES: tuple[tuple[str, int], ...] = tuple(
    (f"eMSG_Q_{status.name}", int(status)) for status in MsgQueueStatus
)

TARGET_NAMES: tuple[tuple[str, int], ...] = tuple(
    (f"GNSS_{gnss.name}", int(gnss)) for gnss in GnssTarget
)


class LocLogger:
    """Logger whose output is gated by a numeric debug level from 1 to 5.

    Levels 1 to 5 enable messages of that level and below and emit them at
    error priority with a one-letter prefix. The value 0xFF leaves the
    choice to the standard logging levels. Any other value disables output.
    """

    def __init__(self, debug_level: int = 0, timestamp: int = 0) -> None:
        self.debug_level = int(debug_level)
        self.timestamp = int(timestamp)

    def configure(self, debug_level: int, timestamp: int) -> None:
        """Set the debug level and timestamp flag."""
        self.debug_level = int(debug_level)
        self.timestamp = int(timestamp)

    @staticmethod
    def _check_level(level: int) -> None:
        if level not in _LEVELS:
            raise ValueError(f"invalid log level: {level!r}")

    def enabled(self, level: int) -> bool:
        """Tell whether a message at ``level`` would be passed on."""
        self._check_level(level)
        if level <= self.debug_level <= VERBOSE:
            return True
        return self.debug_level == DEBUG_LEVEL_UNSET

    def log(self, level: int, message: str, *args: object) -> bool:
        """Emit ``message % args`` at ``level``; return whether it was passed on."""
        self._check_level(level)
        letter, std_level = _LEVELS[level]
        text = f"{letter}/{message}"
        if level <= self.debug_level <= VERBOSE:
            _log.error(text, *args)
            return True
        if self.debug_level == DEBUG_LEVEL_UNSET:
            _log.log(std_level, text, *args)
            return True
        return False


loc_logger = LocLogger()


def logger_init(debug_level: int, timestamp: int) -> LocLogger:
    """Configure the shared logger and return it."""
    loc_logger.configure(debug_level, timestamp)
    return loc_logger


def get_name_from_mask(table: NameTable, mask: int) -> str:
    """Return the name of the first entry whose value shares a bit with ``mask``."""
    for name, value in table:
        if value & mask:
            return name
    return UNKNOWN_STR


def get_name_from_val(table: NameTable, value: int) -> str:
    """Return the name of the first entry equal to ``value``."""
    for name, entry in table:
        if entry == value:
            return name
    return UNKNOWN_STR


def get_msg_q_status(status: int) -> str:
    """Return the name of a message queue status code."""
    return get_name_from_val(MSG_Q_STATUS_NAMES, int(status))


def succ_fail_string(is_succ: object) -> str:
    """Return "successful" or "failed"."""
    return "successful" if is_succ else "failed"


def get_target_name(target: int) -> str:
    """Describe a target value by GNSS type and SSC presence."""
    target = int(target) & 0xFFFFFFFF
    index = gnss_type(target)
    if index >= len(TARGET_NAMES) or index < 0:
        index = len(TARGET_NAMES) - 1
    name = get_name_from_val(TARGET_NAMES, index)
    if target & SscType.HAS_SSC == SscType.HAS_SSC:
        return f" {name} with SSC"
    return f" {name}  without SSC"


def _split(now: Optional[float]) -> tuple[int, int]:
    if now is None:
        now = time.time()
    seconds, micros = divmod(int(round(now * 1_000_000)), 1_000_000)
    return seconds, micros


def get_time(now: Optional[float] = None) -> str:
    """Return local time as HH:MM:SS.mmm for ``now`` seconds since the epoch."""
    seconds, micros = _split(now)
    hms = time.strftime("%H:%M:%S", time.localtime(seconds))
    return f"{hms}.{micros // 1000:03d}"


def get_timestamp(now: Optional[float] = None) -> str:
    """Return the time of day since the epoch as HH:MM:SS.uuuuuu."""
    seconds, micros = _split(now)
    hh = seconds // 3600 % 24
    mm = (seconds % 3600) // 60
    ss = seconds % 60
    return f"{hh:02d}:{mm:02d}:{ss:02d}.{micros:06d}"