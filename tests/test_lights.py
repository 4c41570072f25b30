import pytest

from kltekit.lights import (
    BUTTON_FILE,
    LED_BLINK,
    PANEL_FILE,
    FlashMode,
    LedConfig,
    Lights,
    LightState,
    format_blink,
    is_lit,
    rgb_to_brightness,
)


@pytest.fixture
def root(tmp_path):
    for path in (PANEL_FILE, BUTTON_FILE, LED_BLINK):
        target = tmp_path / path.lstrip("/")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text("")
    return tmp_path


def _first_line(root, path):
    with open(root / path.lstrip("/")) as handle:
        return handle.readline()


def test_white_is_full_brightness():
    assert rgb_to_brightness(LightState(0xFFFFFF)) == 255


def test_brightness_ignores_alpha():
    assert rgb_to_brightness(LightState(0xFF123456)) == rgb_to_brightness(LightState(0x00123456))
    assert rgb_to_brightness(LightState(0xFF000000)) == 0


def test_is_lit():
    assert is_lit(LightState(0x000001))
    assert not is_lit(LightState(0xFF000000))


def test_format_blink_example():
    assert format_blink(LedConfig(0xFF0000, 500, 1000)) == "0x00ff0000 500 1000\n"


def test_format_blink_none_is_off():
    assert format_blink(None) == format_blink(LedConfig(0, 0, 0))


def test_format_blink_too_long():
    with pytest.raises(ValueError):
        format_blink(LedConfig(0xFFFFFF, 2**31 - 1, 2**31 - 1))


def test_backlight_written(root):
    lights = Lights(root)
    state = LightState(0xFF808080)
    lights.set_backlight(state)
    assert int(_first_line(root, PANEL_FILE)) == rgb_to_brightness(state)


def test_buttons_on_and_off(root):
    lights = Lights(root)
    lights.set_buttons(LightState(0x00FF00))
    assert int(_first_line(root, BUTTON_FILE)) == 1
    lights.set_buttons(LightState(0))
    assert int(_first_line(root, BUTTON_FILE)) == 0


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        Lights(tmp_path).set_backlight(LightState(0xFFFFFF))


def test_led_priority(root):
    lights = Lights(root)
    lights.set_notifications(LightState(0x0000FF, FlashMode.TIMED, 100, 200))
    notif = format_blink(LedConfig(0x0000FF, 100, 200))
    assert _first_line(root, LED_BLINK) == notif

    lights.set_battery(LightState(0xFF0000))
    assert _first_line(root, LED_BLINK) == notif

    lights.set_notifications(LightState(0))
    assert _first_line(root, LED_BLINK) == format_blink(LedConfig(0xFF0000, 0, 0))

    lights.set_battery(LightState(0))
    assert _first_line(root, LED_BLINK) == format_blink(None)


def test_flash_none_clears_delays(root):
    lights = Lights(root)
    lights.set_battery(LightState(0x00FF00, FlashMode.NONE, 300, 400))
    assert _first_line(root, LED_BLINK) == format_blink(LedConfig(0x00FF00, 0, 0))


def test_attention_stop_flashing_turns_off(root):
    lights = Lights(root)
    lights.set_battery(LightState(0x00FF00))
    lights.set_attention(LightState(0xFFFFFF, FlashMode.NONE))
    assert _first_line(root, LED_BLINK) == format_blink(LedConfig(0x00FF00, 0, 0))


def test_attention_hardware_short_pulse_is_solid(root):
    lights = Lights(root)
    lights.set_attention(LightState(0xFFFFFF, FlashMode.HARDWARE, 3, 0))
    assert _first_line(root, LED_BLINK) == format_blink(LedConfig(0xFFFFFF, 0, 0))


def test_attention_hardware_blink_kept(root):
    lights = Lights(root)
    lights.set_attention(LightState(0x00FFFF, FlashMode.HARDWARE, 250, 750))
    assert _first_line(root, LED_BLINK) == format_blink(LedConfig(0x00FFFF, 250, 750))


def test_invalid_flash_mode(root):
    with pytest.raises(ValueError):
        Lights(root).set_battery(LightState(0xFF0000, 7))


def test_open_known_and_unknown(root):
    lights = Lights(root)
    setter = lights.open("buttons")
    setter(LightState(0xFFFFFF))
    assert int(_first_line(root, BUTTON_FILE)) == 1
    with pytest.raises(ValueError):
        lights.open("keyboard")