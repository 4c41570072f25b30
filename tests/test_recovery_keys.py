import pytest

from kltekit import recovery_keys as rk
from kltekit.recovery_keys import KeyAction, device_handle_key


@pytest.mark.parametrize("key", [rk.KEY_CAPSLOCK, rk.KEY_DOWN, rk.KEY_VOLUMEDOWN])
def test_highlight_down(key):
    assert device_handle_key(key, True) is KeyAction.HIGHLIGHT_DOWN


@pytest.mark.parametrize("key", [rk.KEY_LEFTSHIFT, rk.KEY_UP, rk.KEY_VOLUMEUP])
def test_highlight_up(key):
    assert device_handle_key(key, True) is KeyAction.HIGHLIGHT_UP


@pytest.mark.parametrize(
    "key",
    [
        rk.KEY_HOMEPAGE,
        rk.KEY_POWER,
        rk.KEY_LEFTBRACE,
        rk.KEY_ENTER,
        rk.BTN_MOUSE,
        rk.KEY_CAMERA,
        rk.KEY_F21,
        rk.KEY_SEND,
    ],
)
def test_select_item(key):
    assert device_handle_key(key, True) is KeyAction.SELECT_ITEM


@pytest.mark.parametrize("key", [rk.KEY_END, rk.KEY_BACKSPACE, rk.KEY_SEARCH, rk.KEY_BACK])
def test_go_back(key):
    assert device_handle_key(key, True) is KeyAction.GO_BACK


def test_menu_key_does_nothing():
    assert device_handle_key(rk.KEY_MENU, True) is KeyAction.NO_ACTION


def test_unmapped_key_does_nothing():
    assert device_handle_key(rk.KEY_POWER + rk.KEY_SEND, True) is KeyAction.NO_ACTION


@pytest.mark.parametrize("key", [rk.KEY_POWER, rk.KEY_UP, rk.KEY_BACK, rk.KEY_DOWN])
def test_hidden_menu_ignores_keys(key):
    assert device_handle_key(key, False) is KeyAction.NO_ACTION