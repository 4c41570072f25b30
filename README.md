# kltekit

Pure-Python helpers for a phone's device-support layer: the small utilities
a location service relies on (target detection, a message queue, a
configuration reader, level-gated logging, one-shot timers) plus LED, power
and recovery-key handling done through sysfs files. Everything that touches
the file system works under a root directory you pass in, so it can be
pointed at a scratch directory as easily as at `/`.

No third-party dependencies.

## Install

```
pip install kltekit
```

For the tests, install the extra as well:

```
pip install "kltekit[test]"
```

## Modules

- `kltekit.misc_utils`
  - `split_string(raw_string, max_num_substrings, delimiter=" ")` splits on
    a single-character delimiter and keeps at most `max_num_substrings`
    parts. It always keeps at least one. A NUL character ends the string.
  - `trim_space(text)` strips leading and trailing whitespace. A string of
    whitespace only comes back unchanged.
- `kltekit.target`
  - `GnssTarget` and `SscType` enums, plus `target_set` and `gnss_type` to
    pack and unpack a target value. Constants such as `TARGET_MDM`,
    `TARGET_APQ_SA`, `TARGET_MPQ`, `TARGET_MSM_NO_SSC`, `TARGET_QCA1530`
    and `TARGET_UNKNOWN` are predefined.
  - `is_qca1530`, `get_target_baseband` and `get_platform_name` read system
    properties through a getter you supply: `get_property(name, default)`
    returns a string, or None when the property cannot be read.
  - `TargetDetector(get_property, root="/", sleep=time.sleep).detect()`
    works out the target from those properties and the SoC files under
    `root`. It caches the first definite answer.
- `kltekit.linked_list`
  - `LinkedList` adds at the head and removes from the tail, so `remove()`
    returns the oldest item. It has `is_empty`, `flush`, `search`, `len()`
    and iteration in oldest-first order.
  - Each item may carry a `dealloc` callable. It runs on `flush()`, and on a
    search that removes the item without handing it back.
  - Errors are raised as `LinkedListError`, or `EmptyListError` for an empty
    list. Each has a `LinkedListStatus` in `.status`.
- `kltekit.msg_q`
  - `MessageQueue` is a thread-safe FIFO. `receive()` blocks until a message
    arrives.
  - `unblock()` wakes every waiter. After it, `send` and `receive` raise
    `QueueUnblockedError`.
  - `close()` flushes the queue, and using the queue as a context manager
    calls it for you. A closed queue raises `MsgQueueError` with status
    `INVALID_HANDLE`.
- `kltekit.log`
  - `LocLogger` gates messages by a debug level. Levels 1 (error) to 5
    (verbose) pass messages at or below that level. `0xFF` defers to the
    standard `logging` levels. Any other value disables output.
  - `logger_init` configures the shared `loc_logger` instance.
  - Name lookups:
    - `get_name_from_val` and `get_name_from_mask` search a table of
      `(name, value)` pairs.
    - `get_msg_q_status` names a queue status code.
    - `get_target_name` describes a target value, for example
      `" GNSS_MDM with SSC"`.
    - `succ_fail_string` returns `"successful"` or `"failed"`.
  - Time strings: `get_time` gives local `HH:MM:SS.mmm` and `get_timestamp`
    gives `HH:MM:SS.uuuuuu`, the time of day counted from the epoch.
- `kltekit.config`
  - `ConfigParam` entries (`ParamType.NUMBER`, `STRING` or `FLOAT`) form a
    table for `NAME = value` files.
  - `parse_line` parses a single line.
  - `read_conf_r(stream, table)` fills the table and returns how many
    assignments it made.
  - `read_conf(path, table=None, logger=None)` reads a file, which may be
    missing. It also takes `DEBUG_LEVEL` and `TIMESTAMP` from the file into
    the logger, which it returns.
  - Values beginning `0x` are read as hexadecimal. The string value `NULL`
    sets a string parameter to empty.
- `kltekit.timer`
  - `LocTimer(msec, callback, user_data)` calls
    `callback(user_data, errno.ETIMEDOUT)` from a background thread once the
    delay passes. Nothing is called if `stop()` comes first.
  - `start_timer` creates a timer and starts it.
- `kltekit.lights`
  - `Lights(root)` writes the panel brightness and the touch-key light.
  - Battery, notifications and attention share one blink LED. The lit
    source of highest priority shows: attention first, then notifications,
    then battery.
  - `open(name)` returns the setter for `"backlight"`, `"buttons"`,
    `"battery"`, `"notifications"` or `"attention"`.
  - The target files must already exist. Write failures raise `OSError`.
- `kltekit.power`
  - `set_interactive_ext(on, root="/")` writes `1` or `0` to the touch-key
    and touchscreen `enabled` files. It returns whether both writes
    succeeded and logs any failure rather than raising.
- `kltekit.recovery_keys`
  - `device_handle_key(key_code, visible)` maps input key codes to a
    `KeyAction`. While the menu is hidden it always returns `NO_ACTION`.

## Examples

```python
from kltekit.msg_q import MessageQueue

with MessageQueue() as queue:
    queue.send("first")
    queue.send("second")
    assert queue.receive() == "first"
```

```python
import io
from kltekit.config import ConfigParam, ParamType, read_conf_r

table = [
    ConfigParam("SUPL_HOST", ParamType.STRING),
    ConfigParam("INTERMEDIATE_POS", ParamType.NUMBER),
]
read_conf_r(io.StringIO("SUPL_HOST = supl.example.com\nINTERMEDIATE_POS=0x10\n"), table)
assert table[0].value == "supl.example.com"
assert table[1].value == 16
```

```python
import pathlib
import tempfile
from kltekit.lights import LED_BLINK, Lights, LightState

root = pathlib.Path(tempfile.mkdtemp())
blink = root / LED_BLINK.lstrip("/")
blink.parent.mkdir(parents=True)
blink.touch()

Lights(root=root).set_notifications(LightState(color=0x00FF00))
assert blink.read_text() == "0x0000ff00 0 0\n"
```

## What it does not do

This is a library only.

- It installs no command and runs no service or daemon.
- It does not read the system's property store. Target detection uses
  whatever property getter you hand it.
- It does not load as a hardware module. The lights and power functions
  are plain Python calls that write files.

## Running the tests

```
pytest
```