"""
utils.py

Utility functions for the parameter editor: lenient attribute parsing for
loaded documents and conversions between Python values and Qt value types.
"""

from __future__ import annotations

import datetime
from typing import Iterable, List, Optional

from PyQt6.QtCore import QDate, QDateTime, QTime
from PyQt6.QtGui import QColor

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1


def clamp_int32(value: float) -> int:
    """Clamp *value* into the range a QSpinBox accepts."""
    return int(max(INT32_MIN, min(INT32_MAX, value)))


# ----------------------------
# Attribute parsing
# ----------------------------

def parse_int(s: Optional[str]) -> Optional[int]:
    """
    Parse a decimal integer attribute.

    Accepts "42", " -7 " and float text such as "3.0". Anything else,
    including a missing attribute, yields None.
    """
    if s is None:
        return None
    s = s.strip()
    try:
        return int(s)
    except ValueError:
        pass
    try:
        f = float(s)
    except ValueError:
        return None
    if f != f or f in (float("inf"), float("-inf")):
        return None
    return int(f)


def parse_float(s: Optional[str]) -> Optional[float]:
    """Parse a decimal attribute; None when missing, malformed or NaN."""
    if s is None:
        return None
    try:
        f = float(s.strip())
    except ValueError:
        return None
    if f != f:
        return None
    return f


def format_bool(value: bool) -> str:
    return "true" if value else "false"


def parse_bool(s: Optional[str]) -> Optional[bool]:
    """Only the exact text "true" is truthy; any other present text is false."""
    if s is None:
        return None
    return s == "true"


def parse_color(s: Optional[str]) -> Optional[QColor]:
    """
    Parse a color attribute.

    Args:
        s: Named color ("blue") or hex string ("#RRGGBB", "#AARRGGBB")

    Returns:
        Parsed QColor, or None if missing or invalid
    """
    if not s:
        return None
    color = QColor(s.strip())
    if not color.isValid():
        return None
    return color


def qcolor_to_hex(c: QColor) -> str:
    """Convert a QColor to a lowercase "#rrggbb" string."""
    return c.name()


# ----------------------------
# String lists
# ----------------------------

def join_list(items: Iterable[str]) -> str:
    """Join list items with commas, the persisted string-list form."""
    return ",".join(items)


def split_list(s: str) -> List[str]:
    """Split a comma-joined string, dropping empty items; whitespace is kept."""
    return [part for part in s.split(",") if part]


# ----------------------------
# Python <-> Qt temporal values
# ----------------------------

def to_qdate(value) -> QDate:
    if isinstance(value, QDate):
        return QDate(value)
    if isinstance(value, datetime.date):
        return QDate(value.year, value.month, value.day)
    return QDate()


def to_qtime(value) -> QTime:
    if isinstance(value, QTime):
        return QTime(value)
    if isinstance(value, datetime.time):
        return QTime(value.hour, value.minute, value.second, value.microsecond // 1000)
    return QTime()


def to_qdatetime(value) -> QDateTime:
    if isinstance(value, QDateTime):
        return QDateTime(value)
    if isinstance(value, datetime.datetime):
        return QDateTime(to_qdate(value.date()), to_qtime(value.time()))
    return QDateTime()


def qdate_to_py(value: QDate) -> Optional[datetime.date]:
    if not value.isValid():
        return None
    return datetime.date(value.year(), value.month(), value.day())


def qtime_to_py(value: QTime) -> Optional[datetime.time]:
    if not value.isValid():
        return None
    return datetime.time(value.hour(), value.minute(), value.second(), value.msec() * 1000)


def qdatetime_to_py(value: QDateTime) -> Optional[datetime.datetime]:
    if not value.isValid():
        return None
    d = qdate_to_py(value.date())
    t = qtime_to_py(value.time())
    return datetime.datetime.combine(d, t)
