"""
params/temporal.py

Date, time and date-time parameters. Values are persisted as ISO 8601
text; the display format only affects the control.
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import QDate, QDateTime, Qt, QTime
from PyQt6.QtWidgets import QDateEdit, QDateTimeEdit, QTimeEdit

from params.base import ParamBase

DEFAULT_DATE_FORMAT = "dd/MM/yyyy"
DEFAULT_TIME_FORMAT = "hh:mm:ss"
DEFAULT_DATETIME_FORMAT = "dd/MM/yyyy hh:mm"

_ISO = Qt.DateFormat.ISODate


class DateParam(ParamBase):
    """Parameter for date values."""

    def __init__(self, name, slot, default: Optional[QDate] = None, tip: str = "", label=None,
                 display_format: str = DEFAULT_DATE_FORMAT, parent=None):
        super().__init__(name, slot, tip, label, parent)
        self.def_val = QDate(slot.value if default is None else default)
        self.date_edit = QDateEdit(QDate(slot.value))
        self.date_edit.setDisplayFormat(display_format)
        self.date_edit.setToolTip(tip)
        self.date_edit.setCalendarPopup(True)
        self.widget = self.date_edit

    def apply(self):
        self.slot.value = self.date_edit.date()

    def reset(self):
        self.date_edit.setDate(self.def_val)

    def current_value(self) -> QDate:
        return self.date_edit.date()

    def attributes(self):
        return {"value": self.date_edit.date().toString(_ISO)}

    def load(self, element):
        value = element.get("value")
        if value is None:
            return
        date = QDate.fromString(value, _ISO)
        if date.isValid():
            self.date_edit.setDate(date)


class TimeParam(ParamBase):
    """Parameter for time-of-day values."""

    def __init__(self, name, slot, default: Optional[QTime] = None, tip: str = "", label=None,
                 display_format: str = DEFAULT_TIME_FORMAT, parent=None):
        super().__init__(name, slot, tip, label, parent)
        self.def_val = QTime(slot.value if default is None else default)
        self.time_edit = QTimeEdit(QTime(slot.value))
        self.time_edit.setDisplayFormat(display_format)
        self.time_edit.setToolTip(tip)
        self.widget = self.time_edit

    def apply(self):
        self.slot.value = self.time_edit.time()

    def reset(self):
        self.time_edit.setTime(self.def_val)

    def current_value(self) -> QTime:
        return self.time_edit.time()

    def attributes(self):
        return {"value": self.time_edit.time().toString(_ISO)}

    def load(self, element):
        value = element.get("value")
        if value is None:
            return
        time = QTime.fromString(value, _ISO)
        if time.isValid():
            self.time_edit.setTime(time)


class DateTimeParam(ParamBase):
    """Parameter for date-time values."""

    def __init__(self, name, slot, default: Optional[QDateTime] = None, tip: str = "", label=None,
                 display_format: str = DEFAULT_DATETIME_FORMAT, parent=None):
        super().__init__(name, slot, tip, label, parent)
        self.def_val = QDateTime(slot.value if default is None else default)
        self.date_time_edit = QDateTimeEdit(QDateTime(slot.value))
        self.date_time_edit.setDisplayFormat(display_format)
        self.date_time_edit.setToolTip(tip)
        self.date_time_edit.setCalendarPopup(True)
        self.widget = self.date_time_edit

    def apply(self):
        self.slot.value = self.date_time_edit.dateTime()

    def reset(self):
        self.date_time_edit.setDateTime(self.def_val)

    def current_value(self) -> QDateTime:
        return self.date_time_edit.dateTime()

    def attributes(self):
        return {"value": self.date_time_edit.dateTime().toString(_ISO)}

    def load(self, element):
        value = element.get("value")
        if value is None:
            return
        dt = QDateTime.fromString(value, _ISO)
        if dt.isValid():
            self.date_time_edit.setDateTime(dt)
