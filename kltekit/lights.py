"""Backlight, button and notification LED control through sysfs files."""

from __future__ import annotations

import enum
import logging
import os
import threading
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable, Optional

_log = logging.getLogger(__name__)

PANEL_FILE = "/sys/class/leds/lcd-backlight/brightness"
BUTTON_FILE = "/sys/class/sec/sec_touchkey/brightness"
LED_BLINK = "/sys/class/sec/led/led_blink"

LIGHT_ID_BACKLIGHT = "backlight"
LIGHT_ID_BUTTONS = "buttons"
LIGHT_ID_BATTERY = "battery"
LIGHT_ID_NOTIFICATIONS = "notifications"
LIGHT_ID_ATTENTION = "attention"

_BLINK_SIZE = 32


class FlashMode(enum.IntEnum):
    NONE = 0
    TIMED = 1
    HARDWARE = 2


@dataclass(frozen=True)
class LightState:
    """A requested light state: ARGB colour and flashing parameters."""

    color: int
    flash_mode: int = FlashMode.NONE
    flash_on_ms: int = 0
    flash_off_ms: int = 0


@dataclass
class LedConfig:
    """What the notification LED shows for one source."""

    color: int = 0
    delay_on: int = 0
    delay_off: int = 0


def rgb_to_brightness(state: LightState) -> int:
    """Weighted luminance of the state's RGB colour, 0 to 255."""
    color = state.color & 0x00FFFFFF
    return (
        77 * ((color >> 16) & 0xFF) + 150 * ((color >> 8) & 0xFF) + 29 * (color & 0xFF)
    ) >> 8


def is_lit(state: LightState) -> bool:
    """Tell whether the state's RGB colour is non-black."""
    return bool(state.color & 0x00FFFFFF)


def format_blink(led: Optional[LedConfig]) -> str:
    """Return the line written to the blink control file; None means off."""
    if led is None:
        led = LedConfig()
    text = f"0x{led.color & 0xFFFFFFFF:08x} {led.delay_on} {led.delay_off}"
    if len(text) >= _BLINK_SIZE - 1:
        _log.error('Truncated string: blink="%s".', text[: _BLINK_SIZE - 2])
        raise ValueError("blink specification too long")
    _log.debug(
        "color=0x%08x, delay_on=%d, delay_off=%d, blink=\"%s\".",
        led.color, led.delay_on, led.delay_off, text,
    )
    return text + "\n"


class Lights:
    """Light controller writing to the sysfs files under ``root``.

    Battery, notification and attention lights share one LED; the lit one
    of highest priority (attention, then notifications, then battery) shows.
    """

    def __init__(self, root: str | Path = "/") -> None:
        self._root = Path(root)
        self._lock = threading.RLock()
        self._leds = [LedConfig(), LedConfig(), LedConfig()]
        self._cur_led = -1

    def _path(self, path: str) -> Path:
        return self._root / path.lstrip("/")

    def _write_str(self, path: str, value: str) -> None:
        target = self._path(path)
        _log.debug("write: path %s, value %s", target, value)
        try:
            fd = os.open(target, os.O_RDWR)
        except OSError:
            _log.error("failed to open %s", target)
            raise
        try:
            os.write(fd, value.encode())
        finally:
            os.close(fd)

    def _write_int(self, path: str, value: int) -> None:
        self._write_str(path, f"{value}\n")

    def _write_leds(self, led: Optional[LedConfig]) -> None:
        blink = format_blink(led)
        with self._lock:
            self._write_str(LED_BLINK, blink)

    def set_backlight(self, state: LightState) -> None:
        """Set the panel brightness from the state's colour."""
        with self._lock:
            self._write_int(PANEL_FILE, rgb_to_brightness(state))

    def set_buttons(self, state: LightState) -> None:
        """Turn the touch-key lights on or off."""
        with self._lock:
            self._write_int(BUTTON_FILE, 1 if is_lit(state) else 0)

    def _set_leds(self, state: LightState, index: int) -> None:
        _log.debug(
            "type=%d, color=0x%010x, fM=%d, fOnMS=%d, fOffMs=%d.",
            index, state.color, state.flash_mode, state.flash_on_ms, state.flash_off_ms,
        )
        if not 0 <= index < len(self._leds):
            raise ValueError(f"invalid LED index {index}")
        try:
            mode = FlashMode(state.flash_mode)
        except ValueError:
            raise ValueError(f"invalid flash mode {state.flash_mode!r}") from None

        with self._lock:
            led = self._leds[index]
            if mode is FlashMode.NONE:
                led.delay_on = led.delay_off = 0
            else:
                led.delay_on = state.flash_on_ms
                led.delay_off = state.flash_off_ms
            led.color = state.color & 0x00FFFFFF

            if led.color > 0:
                if index >= self._cur_led:
                    self._cur_led = index
                    self._write_leds(led)
            elif index == self._cur_led:
                lower = next(
                    (i for i in range(index - 1, -1, -1) if self._leds[i].color > 0), -1
                )
                self._cur_led = lower
                self._write_leds(self._leds[lower] if lower >= 0 else None)

    def set_battery(self, state: LightState) -> None:
        """Set the battery indication, the lowest-priority LED source."""
        self._set_leds(state, 0)

    def set_notifications(self, state: LightState) -> None:
        """Set the notification indication."""
        self._set_leds(state, 1)

    def set_attention(self, state: LightState) -> None:
        """Set the attention indication, the highest-priority LED source."""
        fixed = state
        if state.flash_mode == FlashMode.NONE:
            # A request to stop flashing arrives with a non-zero colour.
            fixed = replace(state, color=0)
        elif state.flash_mode == FlashMode.HARDWARE:
            # A short on time with no off time only dims the LED: show it solid.
            if state.flash_on_ms > 0 and state.flash_off_ms == 0:
                fixed = replace(state, flash_mode=FlashMode.NONE)
        self._set_leds(fixed, 2)

    def open(self, name: str) -> Callable[[LightState], None]:
        """Return the setter for the light called ``name``."""
        setters = {
            LIGHT_ID_BACKLIGHT: self.set_backlight,
            LIGHT_ID_BUTTONS: self.set_buttons,
            LIGHT_ID_BATTERY: self.set_battery,
            LIGHT_ID_NOTIFICATIONS: self.set_notifications,
            LIGHT_ID_ATTENTION: self.set_attention,
        }
        try:
            return setters[name]
        except KeyError:
            raise ValueError(f"unknown light {name!r}") from None