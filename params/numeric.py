"""
params/numeric.py

Integer, real, single-precision real and min/max range parameters.
Bounds and step are enforced by the spin boxes themselves.
"""

from __future__ import annotations

import math
import sys
from typing import Tuple

import numpy as np
from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QDoubleSpinBox, QHBoxLayout, QLabel, QSpinBox, QWidget

from params.base import ParamBase
from utils import INT32_MAX, INT32_MIN, clamp_int32, parse_float, parse_int

DOUBLE_MAX = sys.float_info.max
FLOAT32_MAX = float(np.finfo(np.float32).max)


def decimals_for_step(step: float, minimum: int = 2) -> int:
    """Number of decimals a spin box needs to show *step* exactly."""
    if step <= 0 or step >= 1:
        return minimum
    return max(minimum, min(10, int(math.ceil(-math.log10(step) - 1e-9))))


def _double_spin(minimum: float, maximum: float, step: float, decimals: int) -> QDoubleSpinBox:
    spin = QDoubleSpinBox()
    # decimals first: setRange/setValue round to the current precision
    spin.setDecimals(decimals)
    spin.setRange(minimum, maximum)
    spin.setSingleStep(step)
    return spin


class IntParam(ParamBase):
    """Parameter for integer values."""

    def __init__(self, name, slot, minimum: int = INT32_MIN, maximum: int = INT32_MAX,
                 step: int = 1, tip: str = "", label=None, parent=None):
        super().__init__(name, slot, tip, label, parent)
        self.def_val = int(slot.value)
        self.spin = QSpinBox()
        self.spin.setRange(clamp_int32(minimum), clamp_int32(maximum))
        self.spin.setSingleStep(max(1, int(step)))
        self.spin.setValue(clamp_int32(self.def_val))
        self.spin.setToolTip(tip)
        self.spin.setAlignment(Qt.AlignmentFlag.AlignRight)
        self.widget = self.spin

    def apply(self):
        self.slot.value = self.spin.value()

    def reset(self):
        self.spin.setValue(clamp_int32(self.def_val))

    def current_value(self) -> int:
        return self.spin.value()

    def attributes(self):
        return {"value": str(self.spin.value())}

    def load(self, element):
        value = parse_int(element.get("value"))
        if value is not None:
            self.spin.setValue(clamp_int32(value))


class DoubleParam(ParamBase):
    """Parameter for double-precision floating-point values."""

    def __init__(self, name, slot, minimum: float = -DOUBLE_MAX, maximum: float = DOUBLE_MAX,
                 step: float = 0.1, tip: str = "", label=None, decimals=None, parent=None):
        super().__init__(name, slot, tip, label, parent)
        self.def_val = float(slot.value)
        if decimals is None:
            decimals = decimals_for_step(step)
        self.spin = _double_spin(minimum, maximum, step, decimals)
        self.spin.setValue(self.def_val)
        self.spin.setToolTip(tip)
        self.spin.setAlignment(Qt.AlignmentFlag.AlignRight)
        self.widget = self.spin

    def apply(self):
        self.slot.value = self.spin.value()

    def reset(self):
        self.spin.setValue(self.def_val)

    def current_value(self) -> float:
        return self.spin.value()

    def attributes(self):
        return {"value": repr(self.spin.value())}

    def load(self, element):
        value = parse_float(element.get("value"))
        if value is not None:
            self.spin.setValue(value)


class FloatParam(ParamBase):
    """Parameter for single-precision values, stored as ``numpy.float32``."""

    def __init__(self, name, slot, minimum: float = -FLOAT32_MAX, maximum: float = FLOAT32_MAX,
                 step: float = 0.1, tip: str = "", label=None, decimals=None, parent=None):
        super().__init__(name, slot, tip, label, parent)
        self.def_val = np.float32(slot.value)
        if decimals is None:
            decimals = decimals_for_step(step)
        self.spin = _double_spin(float(minimum), float(maximum), float(step), decimals)
        self.spin.setValue(float(self.def_val))
        self.spin.setToolTip(tip)
        self.spin.setAlignment(Qt.AlignmentFlag.AlignRight)
        self.widget = self.spin

    def apply(self):
        self.slot.value = np.float32(self.spin.value())

    def reset(self):
        self.spin.setValue(float(self.def_val))

    def current_value(self) -> np.float32:
        return np.float32(self.spin.value())

    def attributes(self):
        return {"value": f"{self.spin.value():.6f}"}

    def load(self, element):
        value = parse_float(element.get("value"))
        if value is not None:
            self.spin.setValue(float(np.float32(value)))


class RangeParam(ParamBase):
    """Parameter for a (min, max) pair of reals sharing one global range."""

    def __init__(self, name, slot, global_min: float, global_max: float, step: float,
                 default: Tuple[float, float], tip: str = "", label=None, decimals=None, parent=None):
        super().__init__(name, slot, tip, label, parent)
        self.def_val = (float(default[0]), float(default[1]))
        if decimals is None:
            decimals = decimals_for_step(step)
        low, high = slot.value

        container = QWidget()
        layout = QHBoxLayout(container)
        layout.setContentsMargins(0, 0, 0, 0)

        self.min_spin = _double_spin(global_min, global_max, step, decimals)
        self.min_spin.setValue(float(low))
        self.min_spin.setToolTip(tip)
        self.max_spin = _double_spin(global_min, global_max, step, decimals)
        self.max_spin.setValue(float(high))
        self.max_spin.setToolTip(tip)

        layout.addWidget(self.min_spin)
        layout.addWidget(QLabel("to"))
        layout.addWidget(self.max_spin)
        self.widget = container

    def apply(self):
        self.slot.value = (self.min_spin.value(), self.max_spin.value())

    def reset(self):
        self.min_spin.setValue(self.def_val[0])
        self.max_spin.setValue(self.def_val[1])

    def current_value(self) -> Tuple[float, float]:
        return (self.min_spin.value(), self.max_spin.value())

    def attributes(self):
        return {"min": repr(self.min_spin.value()), "max": repr(self.max_spin.value())}

    def load(self, element):
        low = parse_float(element.get("min"))
        high = parse_float(element.get("max"))
        if low is not None and high is not None:
            self.min_spin.setValue(low)
            self.max_spin.setValue(high)
