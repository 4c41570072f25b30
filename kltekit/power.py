"""Enabling and disabling touch input devices with the screen state."""

from __future__ import annotations

import logging
import os
from pathlib import Path

_log = logging.getLogger(__name__)

TK_POWER = "/sys/class/input/input1/enabled"
TS_POWER = "/sys/class/input/input2/enabled"


def sysfs_write(path: str | Path, value: str) -> bool:
    """Write ``value`` to an existing file; log failures and return success."""
    try:
        fd = os.open(path, os.O_WRONLY)
    except OSError as exc:
        _log.error("Error opening %s: %s", path, exc.strerror)
        return False
    try:
        os.write(fd, value.encode())
        return True
    except OSError as exc:
        _log.error("Error writing to %s: %s", path, exc.strerror)
        return False
    finally:
        os.close(fd)


def set_interactive_ext(on: bool, root: str | Path = "/") -> bool:
    """Enable or disable the touch keys and touch screen; return whether both took."""
    _log.debug("%s input devices", "enabling" if on else "disabling")
    base = Path(root)
    value = "1" if on else "0"
    results = [sysfs_write(base / path.lstrip("/"), value) for path in (TK_POWER, TS_POWER)]
    return all(results)