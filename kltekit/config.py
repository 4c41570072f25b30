"""Reading ``NAME = value`` configuration files into typed parameter tables."""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence, TextIO

from kltekit.log import LocLogger, loc_logger
from kltekit.misc_utils import trim_space

_log = logging.getLogger(__name__)

LOC_MAX_PARAM_NAME = 48
LOC_MAX_PARAM_STRING = 80
LOC_MAX_PARAM_LINE = 80

_C_SPACE = " \t\n\v\f\r"
_INT_RE = re.compile(rf"[{_C_SPACE}]*([+-]?\d+)")
_FLOAT_RE = re.compile(
    rf"[{_C_SPACE}]*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)
_HEX_RE = re.compile(rf"[{_C_SPACE}]*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]+)")

_LONG_MAX = 2**63 - 1
_LONG_MIN = -(2**63)


class ParamType(str, enum.Enum):
    """Kind of value a configuration parameter holds."""

    NUMBER = "n"
    STRING = "s"
    FLOAT = "f"


_DEFAULTS = {ParamType.NUMBER: 0, ParamType.STRING: "", ParamType.FLOAT: 0.0}


@dataclass
class ConfigParam:
    """One entry of a configuration table: a named, typed slot for a value."""

    name: str
    type: ParamType
    value: Any = None
    is_set: bool = False

    def __post_init__(self) -> None:
        self.type = ParamType(self.type)
        if self.value is None:
            self.value = _DEFAULTS[self.type]


@dataclass
class ConfigValue:
    """A parsed ``NAME = value`` line with its numeric interpretations."""

    name: str
    str_value: str
    int_value: int = 0
    float_value: float = 0.0


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x1_0000_0000 if value & 0x8000_0000 else value


def _parse_hex(text: str) -> int:
    match = _HEX_RE.match(text)
    if match is None:
        return 0
    number = int(match.group(2), 16)
    if match.group(1) == "-":
        number = -number
    number = max(_LONG_MIN, min(_LONG_MAX, number))
    return _to_int32(number)


def _parse_int(text: str) -> int:
    match = _INT_RE.match(text)
    return _to_int32(int(match.group(1))) if match else 0


def _parse_float(text: str) -> float:
    match = _FLOAT_RE.match(text)
    return float(match.group(1)) if match else 0.0


def parse_line(line: str) -> Optional[ConfigValue]:
    """Parse one configuration line, or return None when it holds no assignment.

    The name is the first run of text not containing ``=`` and the value the
    second; both are trimmed. A value starting ``0x`` is read as hexadecimal
    into the integer only; any other value is read both as a decimal integer
    and as a float, from its leading numeric part.
    """
    tokens = [token for token in line.split("=") if token]
    if len(tokens) < 2:
        return None
    name = trim_space(tokens[0])
    text = trim_space(tokens[1])
    value = ConfigValue(name=name, str_value=text)
    if len(text) >= 3 and text[0] == "0" and text[1].lower() == "x":
        value.int_value = _parse_hex(text[2:])
    else:
        value.float_value = _parse_float(text)
        value.int_value = _parse_int(text)
    return value


def set_config_entry(entry: ConfigParam, value: ConfigValue) -> bool:
    """Store ``value`` in ``entry`` if the names match; return whether it was stored."""
    if entry is None or value is None:
        raise ValueError("config entry and value must not be None")
    if entry.name != value.name:
        return False
    if entry.type is ParamType.STRING:
        if value.str_value == "NULL":
            entry.value = ""
        else:
            entry.value = value.str_value[:LOC_MAX_PARAM_STRING]
    elif entry.type is ParamType.NUMBER:
        entry.value = value.int_value
    else:
        entry.value = value.float_value
    _log.debug("PARAM %s = %s", entry.name, entry.value)
    entry.is_set = True
    return True


def read_conf_r(stream: TextIO, table: Sequence[ConfigParam]) -> int:
    """Fill ``table`` from ``stream`` and return how many assignments were made.

    Every entry's ``is_set`` flag is cleared first. Reading stops at end of
    input or as soon as as many assignments as the table has entries have
    been made, leaving the stream positioned for a further call. Lines are
    read in pieces of at most ``LOC_MAX_PARAM_LINE - 1`` characters.
    """
    if stream is None:
        raise ValueError("stream must not be None")
    table = list(table or ())
    for entry in table:
        entry.is_set = False

    remaining = len(table)
    assigned = 0
    _log.debug("num_params: %d", remaining)
    while remaining:
        line = stream.readline(LOC_MAX_PARAM_LINE - 1)
        if not line:
            break
        value = parse_line(line)
        if value is None:
            continue
        for entry in table:
            if set_config_entry(entry, value):
                remaining -= 1
                assigned += 1
    return assigned


# Parameters every configuration file may set for the logger.
LOC_PARAMETER_TABLE: tuple[ConfigParam, ...] = (
    ConfigParam("DEBUG_LEVEL", ParamType.NUMBER, 0xFF),
    ConfigParam("TIMESTAMP", ParamType.NUMBER, 0),
)


def _param(name: str) -> int:
    for entry in LOC_PARAMETER_TABLE:
        if entry.name == name:
            return int(entry.value) & 0xFF
    raise KeyError(name)


def read_conf(
    path: str | Path,
    table: Optional[Sequence[ConfigParam]] = None,
    logger: Optional[LocLogger] = None,
) -> LocLogger:
    """Read the file at ``path`` into ``table`` and the logger parameters.

    A file that cannot be opened is skipped. The logger (the shared one by
    default) is then configured from the DEBUG_LEVEL and TIMESTAMP values,
    which are held as 8-bit quantities, and returned.
    """
    if logger is None:
        logger = loc_logger
    try:
        handle = open(path, "r", errors="replace")
    except OSError:
        handle = None
    if handle is not None:
        with handle:
            _log.debug("using %s", path)
            if table:
                read_conf_r(handle, table)
                handle.seek(0)
            read_conf_r(handle, LOC_PARAMETER_TABLE)
    logger.configure(_param("DEBUG_LEVEL"), _param("TIMESTAMP"))
    return logger