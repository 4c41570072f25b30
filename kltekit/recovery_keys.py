"""Mapping of input key codes to recovery menu actions."""

from __future__ import annotations

import enum

KEY_BACKSPACE = 14
KEY_LEFTBRACE = 26
KEY_ENTER = 28
KEY_LEFTSHIFT = 42
KEY_CAPSLOCK = 58
KEY_UP = 103
KEY_END = 107
KEY_DOWN = 108
KEY_VOLUMEDOWN = 114
KEY_VOLUMEUP = 115
KEY_POWER = 116
KEY_MENU = 139
KEY_BACK = 158
KEY_HOMEPAGE = 172
KEY_F21 = 191
KEY_CAMERA = 212
KEY_SEARCH = 217
KEY_SEND = 231
BTN_MOUSE = 0x110


class KeyAction(enum.IntEnum):
    """What the recovery menu does in response to a key."""

    NO_ACTION = -1
    HIGHLIGHT_UP = -2
    HIGHLIGHT_DOWN = -3
    SELECT_ITEM = -4
    GO_BACK = -5


_KEY_ACTIONS = {
    **dict.fromkeys((KEY_CAPSLOCK, KEY_DOWN, KEY_VOLUMEDOWN), KeyAction.HIGHLIGHT_DOWN),
    KEY_MENU: KeyAction.NO_ACTION,
    **dict.fromkeys((KEY_LEFTSHIFT, KEY_UP, KEY_VOLUMEUP), KeyAction.HIGHLIGHT_UP),
    **dict.fromkeys(
        (KEY_HOMEPAGE, KEY_POWER, KEY_LEFTBRACE, KEY_ENTER, BTN_MOUSE, KEY_CAMERA, KEY_F21, KEY_SEND),
        KeyAction.SELECT_ITEM,
    ),
    **dict.fromkeys((KEY_END, KEY_BACKSPACE, KEY_SEARCH, KEY_BACK), KeyAction.GO_BACK),
}


def device_handle_key(key_code: int, visible: bool) -> KeyAction:
    """Return the menu action for ``key_code``; keys do nothing while the menu is hidden."""
    if not visible:
        return KeyAction.NO_ACTION
    return _KEY_ACTIONS.get(key_code, KeyAction.NO_ACTION)