"""
params/geometry.py

Integer point, size and rectangle parameters built from labelled spin boxes.
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import QPoint, QRect, QSize
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QSpinBox, QWidget

from params.base import ParamBase
from utils import INT32_MAX, INT32_MIN, clamp_int32, parse_int


def _spin(minimum: int, maximum: int, value: int, tip: str) -> QSpinBox:
    spin = QSpinBox()
    spin.setRange(minimum, maximum)
    spin.setValue(clamp_int32(value))
    spin.setToolTip(tip)
    return spin


def _row(*pairs) -> QWidget:
    """Lay out (caption, spin box) pairs side by side."""
    container = QWidget()
    layout = QHBoxLayout(container)
    layout.setContentsMargins(0, 0, 0, 0)
    for caption, spin in pairs:
        layout.addWidget(QLabel(caption))
        layout.addWidget(spin)
    return container


def _ints(element, *keys):
    """Parse every attribute in *keys*; None unless all are present and valid."""
    values = [parse_int(element.get(k)) for k in keys]
    if any(v is None for v in values):
        return None
    return [clamp_int32(v) for v in values]


class PointParam(ParamBase):
    """Parameter for 2D integer points."""

    def __init__(self, name, slot, default: Optional[QPoint] = None, tip: str = "", label=None, parent=None):
        super().__init__(name, slot, tip, label, parent)
        self.def_val = QPoint(slot.value if default is None else default)
        p = slot.value
        self.x_spin = _spin(INT32_MIN, INT32_MAX, p.x(), f"{tip} (X coordinate)")
        self.y_spin = _spin(INT32_MIN, INT32_MAX, p.y(), f"{tip} (Y coordinate)")
        self.widget = _row(("X:", self.x_spin), ("Y:", self.y_spin))

    def apply(self):
        self.slot.value = self.current_value()

    def reset(self):
        self.x_spin.setValue(self.def_val.x())
        self.y_spin.setValue(self.def_val.y())

    def current_value(self) -> QPoint:
        return QPoint(self.x_spin.value(), self.y_spin.value())

    def attributes(self):
        return {"x": str(self.x_spin.value()), "y": str(self.y_spin.value())}

    def load(self, element):
        values = _ints(element, "x", "y")
        if values is not None:
            self.x_spin.setValue(values[0])
            self.y_spin.setValue(values[1])


class SizeParam(ParamBase):
    """Parameter for non-negative 2D sizes."""

    def __init__(self, name, slot, default: Optional[QSize] = None, tip: str = "", label=None, parent=None):
        super().__init__(name, slot, tip, label, parent)
        self.def_val = QSize(slot.value if default is None else default)
        s = slot.value
        self.width_spin = _spin(0, INT32_MAX, s.width(), f"{tip} (Width)")
        self.height_spin = _spin(0, INT32_MAX, s.height(), f"{tip} (Height)")
        self.widget = _row(("Width:", self.width_spin), ("Height:", self.height_spin))

    def apply(self):
        self.slot.value = self.current_value()

    def reset(self):
        self.width_spin.setValue(self.def_val.width())
        self.height_spin.setValue(self.def_val.height())

    def current_value(self) -> QSize:
        return QSize(self.width_spin.value(), self.height_spin.value())

    def attributes(self):
        return {"width": str(self.width_spin.value()), "height": str(self.height_spin.value())}

    def load(self, element):
        values = _ints(element, "width", "height")
        if values is not None:
            self.width_spin.setValue(values[0])
            self.height_spin.setValue(values[1])


class RectParam(ParamBase):
    """Parameter for rectangles given as x, y, width and height."""

    def __init__(self, name, slot, default: Optional[QRect] = None, tip: str = "", label=None, parent=None):
        super().__init__(name, slot, tip, label, parent)
        self.def_val = QRect(slot.value if default is None else default)
        r = slot.value
        self.x_spin = _spin(INT32_MIN, INT32_MAX, r.x(), f"{tip} (X coordinate)")
        self.y_spin = _spin(INT32_MIN, INT32_MAX, r.y(), f"{tip} (Y coordinate)")
        self.width_spin = _spin(0, INT32_MAX, r.width(), f"{tip} (Width)")
        self.height_spin = _spin(0, INT32_MAX, r.height(), f"{tip} (Height)")
        self.widget = _row(
            ("X:", self.x_spin),
            ("Y:", self.y_spin),
            ("W:", self.width_spin),
            ("H:", self.height_spin),
        )

    def apply(self):
        self.slot.value = self.current_value()

    def reset(self):
        self.x_spin.setValue(self.def_val.x())
        self.y_spin.setValue(self.def_val.y())
        self.width_spin.setValue(self.def_val.width())
        self.height_spin.setValue(self.def_val.height())

    def current_value(self) -> QRect:
        return QRect(self.x_spin.value(), self.y_spin.value(),
                     self.width_spin.value(), self.height_spin.value())

    def attributes(self):
        return {
            "x": str(self.x_spin.value()),
            "y": str(self.y_spin.value()),
            "width": str(self.width_spin.value()),
            "height": str(self.height_spin.value()),
        }

    def load(self, element):
        values = _ints(element, "x", "y", "width", "height")
        if values is not None:
            self.x_spin.setValue(values[0])
            self.y_spin.setValue(values[1])
            self.width_spin.setValue(values[2])
            self.height_spin.setValue(values[3])
