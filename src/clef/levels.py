# Severity table mapping numeric log level codes to CLEF level names

from typing import Dict
import bisect

from .exceptions import UnknownLevelError


DEBUG = 100
INFO = 200
NOTICE = 250
WARNING = 300
ERROR = 400
CRITICAL = 500
ALERT = 550
EMERGENCY = 600

LEVEL_MAP: Dict[int, str] = {
    DEBUG: 'Debug',
    INFO: 'Information',
    NOTICE: 'Information',
    WARNING: 'Warning',
    ERROR: 'Error',
    CRITICAL: 'Error',
    ALERT: 'Fatal',
    EMERGENCY: 'Fatal',
}

# stdlib logging levels, ascending
PYTHON_LEVEL_MAP = [
    (10, DEBUG),
    (20, INFO),
    (30, WARNING),
    (40, ERROR),
    (50, CRITICAL),
]


def severityName(code: int) -> str:
    try:
        return LEVEL_MAP[int(code)]
    except (KeyError, TypeError, ValueError):
        raise UnknownLevelError(code) from None


def fromPythonLevel(levelno: int) -> int:
    """
    Map a stdlib ``logging`` level number onto the nearest lower level code.

    Levels below DEBUG map to DEBUG, levels above CRITICAL map to CRITICAL.
    """
    thresholds = [threshold for threshold, _ in PYTHON_LEVEL_MAP]
    index = bisect.bisect_right(thresholds, levelno) - 1
    return PYTHON_LEVEL_MAP[max(index, 0)][1]
