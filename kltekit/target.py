"""Detection of the GNSS target type of the running platform."""

from __future__ import annotations

import enum
import logging
import time
from pathlib import Path
from typing import Callable, Optional

_log = logging.getLogger(__name__)

PropertyGetter = Callable[[str, str], Optional[str]]

PROPERTY_VALUE_MAX = 92
LINE_LEN = 100
QCA1530_DETECT_TIMEOUT = 30
QCA1530_PROPERTY = "persist.qca1530"
QCA1530_DETECT_PRESENT = "yes"
QCA1530_DETECT_PROGRESS = "detect"

MPQ8064_ID_1 = "130"
MSM8930_ID_1 = "142"
MSM8930_ID_2 = "116"

STR_LIQUID = "Liquid"
STR_SURF = "Surf"
STR_MTP = "MTP"
STR_APQ = "apq"

HW_PLATFORM = "/sys/devices/soc0/hw_platform"
SOC_ID = "/sys/devices/soc0/soc_id"
HW_PLATFORM_DEP = "/sys/devices/system/soc/soc0/hw_platform"
SOC_ID_DEP = "/sys/devices/system/soc/soc0/id"
MDM_DEVICE = "/dev/mdm"

# Returned when detection could not settle on a target; not cached.
TARGET_INVALID = 0xFFFFFFFF


class GnssTarget(enum.IntEnum):
    NONE = 0
    MSM = 1
    GSS = 2
    MDM = 3
    QCA1530 = 4
    UNKNOWN = 5


class SscType(enum.IntEnum):
    NO_SSC = 0
    HAS_SSC = 1


def target_set(gnss: int, ssc: int) -> int:
    """Combine a GNSS type and an SSC flag into a target value."""
    return (int(gnss) << 1) | int(ssc)


def gnss_type(target: int) -> int:
    """Extract the GNSS type from a target value."""
    return int(target) >> 1


TARGET_DEFAULT = target_set(GnssTarget.MSM, SscType.HAS_SSC)
TARGET_MDM = target_set(GnssTarget.MDM, SscType.HAS_SSC)
TARGET_APQ_SA = target_set(GnssTarget.GSS, SscType.NO_SSC)
TARGET_MPQ = target_set(GnssTarget.NONE, SscType.NO_SSC)
TARGET_MSM_NO_SSC = target_set(GnssTarget.MSM, SscType.NO_SSC)
TARGET_QCA1530 = target_set(GnssTarget.QCA1530, SscType.NO_SSC)
TARGET_UNKNOWN = target_set(GnssTarget.UNKNOWN, SscType.NO_SSC)


def _get(get_property: PropertyGetter, name: str, default: str) -> Optional[str]:
    value = get_property(name, default)
    if value is None:
        return None
    return value[: PROPERTY_VALUE_MAX - 1]


def is_qca1530(get_property: PropertyGetter, sleep: Callable[[float], object] = time.sleep) -> bool:
    """Tell whether the QCA1530 SoC is configured, waiting while detection runs."""
    result = False
    for _ in range(QCA1530_DETECT_TIMEOUT):
        value = _get(get_property, QCA1530_PROPERTY, "")
        if value is None:
            _log.debug("qca1530: property %s is not accessible", QCA1530_PROPERTY)
            break
        if value == QCA1530_DETECT_PRESENT:
            result = True
            break
        if value == QCA1530_DETECT_PROGRESS:
            _log.debug("qca1530: SoC detection is in progress.")
            sleep(1)
            continue
        break
    _log.debug("qca1530: detected=%s", "true" if result else "false")
    return result


def get_target_baseband(get_property: PropertyGetter) -> str:
    """Return the baseband property, or an empty string."""
    return _get(get_property, "ro.baseband", "") or ""


def get_platform_name(get_property: PropertyGetter) -> str:
    """Return the board platform property, or an empty string."""
    return _get(get_property, "ro.board.platform", "") or ""


def _matches(line: str, word: str) -> bool:
    """True when ``line`` is ``word`` followed by end of string or a line end."""
    if not line.startswith(word):
        return False
    rest = line[len(word):]
    return rest == "" or rest[0] in "\n\r"


class TargetDetector:
    """Works out the target type from properties and sysfs files under ``root``."""

    def __init__(
        self,
        get_property: PropertyGetter,
        root: str | Path = "/",
        sleep: Callable[[float], object] = time.sleep,
    ) -> None:
        self._get_property = get_property
        self._root = Path(root)
        self._sleep = sleep
        self._target: Optional[int] = None

    def _path(self, path: str) -> Path:
        return self._root / path.lstrip("/")

    def _read_a_line(self, path: str) -> Optional[str]:
        try:
            with open(self._path(path), "r", errors="replace") as handle:
                return handle.readline(LINE_LEN - 1)
        except OSError as exc:
            _log.error("open failed: %s: %s", path, exc)
            return None

    def _read_first(self, preferred: str, fallback: str) -> str:
        path = preferred if self._path(preferred).exists() else fallback
        return self._read_a_line(path) or ""

    def detect(self) -> int:
        """Return the target value, computing and caching it on first success."""
        if self._target is not None:
            return self._target

        target = TARGET_INVALID
        if is_qca1530(self._get_property, self._sleep):
            target = TARGET_QCA1530
        else:
            baseband = get_target_baseband(self._get_property)
            hw_platform = self._read_first(HW_PLATFORM, HW_PLATFORM_DEP)
            soc_id = self._read_first(SOC_ID, SOC_ID_DEP)

            if baseband.startswith(STR_APQ):
                target = TARGET_MPQ if _matches(soc_id, MPQ8064_ID_1) else TARGET_APQ_SA
            elif any(_matches(hw_platform, word) for word in (STR_LIQUID, STR_SURF, STR_MTP)):
                if self._read_a_line(MDM_DEVICE) is not None:
                    target = TARGET_MDM
            elif _matches(soc_id, MSM8930_ID_1) or _matches(soc_id, MSM8930_ID_2):
                target = TARGET_MSM_NO_SSC
            else:
                target = TARGET_UNKNOWN

        _log.debug("detect returned %d", target)
        if target != TARGET_INVALID:
            self._target = target
        return target