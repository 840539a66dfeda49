"""
binding/dispatch.py

Type dispatch for the reflection binder.

Every bindable value type resolves to one ValueKind. Each kind has exactly
one factory building its parameter; the table is checked for completeness
at import time so a new kind cannot be added without a factory.

A Resolution also carries the converters between the property's own value
type and the buffer the parameter edits (e.g. ``datetime.date`` <-> QDate,
enum member <-> option index).
"""

from __future__ import annotations

import datetime
import enum
import logging
import typing
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Dict, Optional, Tuple

import numpy as np
from PyQt6.QtCore import QDate, QDateTime, QPoint, QRect, QSize, QTime
from PyQt6.QtGui import QColor, QFont

from binding.property_info import PropertyInfo
from params import (
    BoolParam,
    ColorParam,
    ComboParam,
    DateParam,
    DateTimeParam,
    DoubleParam,
    FloatParam,
    FontParam,
    IntParam,
    ParamBase,
    PointParam,
    RectParam,
    SizeParam,
    StringListParam,
    StringParam,
    TimeParam,
    ValueSlot,
    VariantParam,
)
from params.numeric import DOUBLE_MAX, FLOAT32_MAX
from settings import EditorSettings
from utils import (
    INT32_MAX,
    INT32_MIN,
    clamp_int32,
    qdate_to_py,
    qdatetime_to_py,
    qtime_to_py,
    to_qdate,
    to_qdatetime,
    to_qtime,
)

log = logging.getLogger(__name__)


class ValueKind(enum.Enum):
    """Closed set of value categories the binder can edit."""
    INT = "int"
    DOUBLE = "double"
    FLOAT = "float"
    BOOL = "bool"
    STRING = "string"
    COLOR = "color"
    FONT = "font"
    STRING_LIST = "string_list"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    POINT = "point"
    SIZE = "size"
    RECT = "rect"
    VARIANT = "variant"
    ENUM = "enum"


@dataclass(frozen=True)
class Resolution:
    """How one property type is edited.

    Attributes:
        kind: Selects the parameter factory.
        to_buffer: Property value -> buffer value.
        from_buffer: Buffer value -> property value; None when no conversion
            is needed.
        enum_names: Option names for ENUM, in definition order.
    """
    kind: ValueKind
    to_buffer: Callable[[Any], Any]
    from_buffer: Optional[Callable[[Any], Any]] = None
    enum_names: Tuple[str, ...] = ()


# ----------------------------
# Buffer converters
# ----------------------------

def _to_int(v) -> int:
    return 0 if v is None else int(v)


def _to_float(v) -> float:
    return 0.0 if v is None else float(v)


def _to_float32(v) -> np.float32:
    return np.float32(0.0 if v is None else v)


def _to_bool(v) -> bool:
    return bool(v)


def _to_str(v) -> str:
    return "" if v is None else str(v)


def _to_color(v) -> QColor:
    return QColor() if v is None else QColor(v)


def _to_font(v) -> QFont:
    return QFont(v) if isinstance(v, QFont) else QFont()


def _to_list(v) -> list:
    return [] if v is None else [str(item) for item in v]


def _to_point(v) -> QPoint:
    return QPoint(v) if isinstance(v, QPoint) else QPoint()


def _to_size(v) -> QSize:
    return QSize(v) if isinstance(v, QSize) else QSize()


def _to_rect(v) -> QRect:
    return QRect(v) if isinstance(v, QRect) else QRect()


def _identity(v):
    return v


def _member_index(members: tuple, value) -> int:
    return members.index(value) if value in members else 0


def _index_member(members: tuple, index: int):
    if 0 <= index < len(members):
        return members[index]
    return members[0]


def _enum_position(values: tuple, value) -> int:
    number = int(getattr(value, "value", value))
    return values.index(number) if number in values else 0


def _position_enum(values: tuple, index: int) -> int:
    if 0 <= index < len(values):
        return values[index]
    return values[0]


def _resolution(kind: ValueKind, to_buffer, from_buffer=None) -> Resolution:
    return Resolution(kind, to_buffer, from_buffer)


# Exact Python type matches. datetime.datetime subclasses datetime.date, so
# lookups are by exact type, never isinstance.
_PY_TYPES: Dict[Any, Resolution] = {
    int: _resolution(ValueKind.INT, _to_int),
    float: _resolution(ValueKind.DOUBLE, _to_float),
    np.float32: _resolution(ValueKind.FLOAT, _to_float32),
    bool: _resolution(ValueKind.BOOL, _to_bool),
    str: _resolution(ValueKind.STRING, _to_str),
    QColor: _resolution(ValueKind.COLOR, _to_color),
    QFont: _resolution(ValueKind.FONT, _to_font),
    QDate: _resolution(ValueKind.DATE, to_qdate),
    QTime: _resolution(ValueKind.TIME, to_qtime),
    QDateTime: _resolution(ValueKind.DATETIME, to_qdatetime),
    datetime.date: _resolution(ValueKind.DATE, to_qdate, qdate_to_py),
    datetime.time: _resolution(ValueKind.TIME, to_qtime, qtime_to_py),
    datetime.datetime: _resolution(ValueKind.DATETIME, to_qdatetime, qdatetime_to_py),
    QPoint: _resolution(ValueKind.POINT, _to_point),
    QSize: _resolution(ValueKind.SIZE, _to_size),
    QRect: _resolution(ValueKind.RECT, _to_rect),
}

# Type names reported by QMetaProperty.typeName()
_QT_TYPE_NAMES: Dict[str, Resolution] = {
    "int": _resolution(ValueKind.INT, _to_int),
    "double": _resolution(ValueKind.DOUBLE, _to_float),
    "float": _resolution(ValueKind.FLOAT, _to_float32, float),
    "bool": _resolution(ValueKind.BOOL, _to_bool),
    "QString": _resolution(ValueKind.STRING, _to_str),
    "QColor": _resolution(ValueKind.COLOR, _to_color),
    "QFont": _resolution(ValueKind.FONT, _to_font),
    "QStringList": _resolution(ValueKind.STRING_LIST, _to_list),
    "QDate": _resolution(ValueKind.DATE, to_qdate),
    "QTime": _resolution(ValueKind.TIME, to_qtime),
    "QDateTime": _resolution(ValueKind.DATETIME, to_qdatetime),
    "QPoint": _resolution(ValueKind.POINT, _to_point),
    "QSize": _resolution(ValueKind.SIZE, _to_size),
    "QRect": _resolution(ValueKind.RECT, _to_rect),
    "QVariant": _resolution(ValueKind.VARIANT, _identity),
    "PyQt_PyObject": _resolution(ValueKind.VARIANT, _identity),
}

_STRING_LIST = _resolution(ValueKind.STRING_LIST, _to_list)
_VARIANT = _resolution(ValueKind.VARIANT, _identity)


def _is_string_list(hint) -> bool:
    if hint is list:
        return True
    return typing.get_origin(hint) is list and typing.get_args(hint) in ((), (str,))


def resolve_enum(enum_type) -> Resolution:
    """Resolution for a Python Enum class; the buffer holds the member index."""
    members = tuple(enum_type)
    return Resolution(
        ValueKind.ENUM,
        partial(_member_index, members),
        partial(_index_member, members),
        tuple(m.name for m in members),
    )


def resolve_qt_enum(meta_enum) -> Optional[Resolution]:
    """Resolution for a QMetaEnum; the buffer holds the key position."""
    count = meta_enum.keyCount()
    if count == 0:
        log.debug("Enumeration %s has no keys", meta_enum.name())
        return None
    values = tuple(meta_enum.value(i) for i in range(count))
    return Resolution(
        ValueKind.ENUM,
        partial(_enum_position, values),
        partial(_position_enum, values),
        tuple(meta_enum.key(i) for i in range(count)),
    )


def resolve_hint(hint) -> Optional[Resolution]:
    """Resolve a Python type annotation; None when the type is unsupported."""
    try:
        found = _PY_TYPES.get(hint)
    except TypeError:
        # unhashable annotation
        return None
    if found is not None:
        return found
    if _is_string_list(hint):
        return _STRING_LIST
    if hint is Any or hint is object:
        return _VARIANT
    if isinstance(hint, type) and issubclass(hint, enum.Enum) and len(hint) > 0:
        return resolve_enum(hint)
    return None


def resolve_value(value) -> Optional[Resolution]:
    """Resolve from a runtime value, for objects without annotations."""
    if isinstance(value, list):
        if all(isinstance(item, str) for item in value):
            return _STRING_LIST
        return None
    return resolve_hint(type(value))


def resolve_type_name(type_name: str) -> Optional[Resolution]:
    """Resolve a Qt meta-type name; None when the type is unsupported."""
    return _QT_TYPE_NAMES.get(type_name)


# ----------------------------
# Parameter factories
# ----------------------------

def _bound(value: Optional[float], fallback: float) -> float:
    return fallback if value is None else value


def _int_param(info: PropertyInfo, slot: ValueSlot, settings: EditorSettings) -> ParamBase:
    return IntParam(
        info.name, slot,
        clamp_int32(_bound(info.minimum, INT32_MIN)),
        clamp_int32(_bound(info.maximum, INT32_MAX)),
        int(_bound(info.step, 1)),
        info.tooltip, info.display_name,
    )


def _double_param(info, slot, settings) -> ParamBase:
    return DoubleParam(
        info.name, slot,
        _bound(info.minimum, -DOUBLE_MAX),
        _bound(info.maximum, DOUBLE_MAX),
        _bound(info.step, 0.1),
        info.tooltip, info.display_name,
    )


def _float_param(info, slot, settings) -> ParamBase:
    return FloatParam(
        info.name, slot,
        _bound(info.minimum, -FLOAT32_MAX),
        _bound(info.maximum, FLOAT32_MAX),
        _bound(info.step, 0.1),
        info.tooltip, info.display_name,
    )


def _bool_param(info, slot, settings) -> ParamBase:
    return BoolParam(info.name, slot, tip=info.tooltip, label=info.display_name)


def _string_param(info, slot, settings) -> ParamBase:
    return StringParam(info.name, slot, tip=info.tooltip, label=info.display_name)


def _color_param(info, slot, settings) -> ParamBase:
    return ColorParam(info.name, slot, tip=info.tooltip, label=info.display_name)


def _font_param(info, slot, settings) -> ParamBase:
    return FontParam(info.name, slot, tip=info.tooltip, label=info.display_name)


def _string_list_param(info, slot, settings) -> ParamBase:
    return StringListParam(info.name, slot, tip=info.tooltip, label=info.display_name)


def _date_param(info, slot, settings) -> ParamBase:
    return DateParam(info.name, slot, tip=info.tooltip, label=info.display_name,
                     display_format=settings.formats.date)


def _time_param(info, slot, settings) -> ParamBase:
    return TimeParam(info.name, slot, tip=info.tooltip, label=info.display_name,
                     display_format=settings.formats.time)


def _datetime_param(info, slot, settings) -> ParamBase:
    return DateTimeParam(info.name, slot, tip=info.tooltip, label=info.display_name,
                         display_format=settings.formats.datetime)


def _point_param(info, slot, settings) -> ParamBase:
    return PointParam(info.name, slot, tip=info.tooltip, label=info.display_name)


def _size_param(info, slot, settings) -> ParamBase:
    return SizeParam(info.name, slot, tip=info.tooltip, label=info.display_name)


def _rect_param(info, slot, settings) -> ParamBase:
    return RectParam(info.name, slot, tip=info.tooltip, label=info.display_name)


def _variant_param(info, slot, settings) -> ParamBase:
    return VariantParam(info.name, slot, tip=info.tooltip, label=info.display_name)


def _enum_param(info, slot, settings) -> ParamBase:
    return ComboParam(info.name, info.enum_names, slot, tip=info.tooltip, label=info.display_name)


Factory = Callable[[PropertyInfo, ValueSlot, EditorSettings], ParamBase]

FACTORIES: Dict[ValueKind, Factory] = {
    ValueKind.INT: _int_param,
    ValueKind.DOUBLE: _double_param,
    ValueKind.FLOAT: _float_param,
    ValueKind.BOOL: _bool_param,
    ValueKind.STRING: _string_param,
    ValueKind.COLOR: _color_param,
    ValueKind.FONT: _font_param,
    ValueKind.STRING_LIST: _string_list_param,
    ValueKind.DATE: _date_param,
    ValueKind.TIME: _time_param,
    ValueKind.DATETIME: _datetime_param,
    ValueKind.POINT: _point_param,
    ValueKind.SIZE: _size_param,
    ValueKind.RECT: _rect_param,
    ValueKind.VARIANT: _variant_param,
    ValueKind.ENUM: _enum_param,
}

_missing = [kind.name for kind in ValueKind if kind not in FACTORIES]
if _missing:
    raise RuntimeError(f"No parameter factory for value kinds: {', '.join(_missing)}")


def create_param(kind: ValueKind, info: PropertyInfo, slot: ValueSlot,
                 settings: EditorSettings) -> ParamBase:
    """Build the parameter for *kind* editing *slot*."""
    return FACTORIES[kind](info, slot, settings)
