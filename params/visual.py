"""
params/visual.py

Color and font parameters. Both show a push button that opens the
matching Qt picker; picking only changes the button state, the slot is
written on apply.
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtGui import QColor, QFont
from PyQt6.QtWidgets import QColorDialog, QFontDialog, QPushButton

from params.base import ParamBase
from utils import parse_color, qcolor_to_hex


class ColorButton(QPushButton):
    """A button that displays and allows selection of a color."""

    def __init__(self, color: QColor, title: str = "Select Color", parent=None):
        super().__init__(parent)
        self._color = QColor(color)
        self._title = title
        self._update_style()
        self.clicked.connect(self._pick_color)

    def _update_style(self):
        """Update button appearance to show current color."""
        # Determine text color based on luminance
        qc = self._color
        luminance = 0.299 * qc.red() + 0.587 * qc.green() + 0.114 * qc.blue()
        text_color = "#000000" if luminance > 128 else "#FFFFFF"
        self.setStyleSheet(
            f"QPushButton {{ background-color: {qc.name()}; color: {text_color}; "
            f"border: 1px solid black; }}"
        )
        self.setText(qc.name())

    def _pick_color(self):
        """Open color picker dialog."""
        color = QColorDialog.getColor(self._color, self, self._title)
        if color.isValid():
            self.setColor(color)

    def color(self) -> QColor:
        return QColor(self._color)

    def setColor(self, color: QColor):
        self._color = QColor(color)
        self._update_style()


class ColorParam(ParamBase):
    """Parameter for color selections."""

    def __init__(self, name, slot, default: Optional[QColor] = None, tip: str = "", label=None, parent=None):
        super().__init__(name, slot, tip, label, parent)
        self.def_val = QColor(slot.value if default is None else default)
        self.button = ColorButton(slot.value, self.label)
        self.button.setToolTip(tip)
        self.widget = self.button

    def apply(self):
        self.slot.value = self.button.color()

    def reset(self):
        self.button.setColor(self.def_val)

    def current_value(self) -> QColor:
        return self.button.color()

    def attributes(self):
        return {"color": qcolor_to_hex(self.button.color())}

    def load(self, element):
        color = parse_color(element.get("color"))
        if color is not None:
            self.button.setColor(color)


class FontParam(ParamBase):
    """Parameter for font selections."""

    def __init__(self, name, slot, default: Optional[QFont] = None, tip: str = "", label=None, parent=None):
        super().__init__(name, slot, tip, label, parent)
        self.def_val = QFont(slot.value if default is None else default)
        self.current_font = QFont(slot.value)
        self.button = QPushButton()
        self.button.setToolTip(tip)
        self.button.clicked.connect(self._pick_font)
        self._update_button()
        self.widget = self.button

    def _pick_font(self):
        font, ok = QFontDialog.getFont(self.current_font, self.button, self.label)
        if ok:
            self.current_font = QFont(font)
            self._update_button()

    def _update_button(self):
        f = self.current_font
        self.button.setText(f"{f.family()} {f.pointSize()}")

    def apply(self):
        self.slot.value = QFont(self.current_font)

    def reset(self):
        self.current_font = QFont(self.def_val)
        self._update_button()

    def current_value(self) -> QFont:
        return QFont(self.current_font)

    def attributes(self):
        return {"value": self.current_font.toString()}

    def load(self, element):
        value = element.get("value")
        if value is None:
            return
        font = QFont()
        if font.fromString(value):
            self.current_font = font
            self._update_button()
