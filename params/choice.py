"""
params/choice.py

Boolean and single-choice parameters.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from PyQt6.QtWidgets import QCheckBox, QComboBox

from params.base import ParamBase
from utils import format_bool, parse_bool, parse_int


class BoolParam(ParamBase):
    """Parameter for boolean values."""

    def __init__(self, name, slot, default: Optional[bool] = None, tip: str = "", label=None, parent=None):
        super().__init__(name, slot, tip, label, parent)
        self.def_val = bool(slot.value) if default is None else bool(default)
        self.check_box = QCheckBox()
        self.check_box.setChecked(bool(slot.value))
        self.check_box.setToolTip(tip)
        self.widget = self.check_box

    def apply(self):
        self.slot.value = self.check_box.isChecked()

    def reset(self):
        self.check_box.setChecked(self.def_val)

    def current_value(self) -> bool:
        return self.check_box.isChecked()

    def attributes(self):
        return {"value": format_bool(self.check_box.isChecked())}

    def load(self, element):
        value = parse_bool(element.get("value"))
        if value is not None:
            self.check_box.setChecked(value)


class ComboParam(ParamBase):
    """
    Parameter selecting one entry of an ordered option list.

    The slot holds the selected *index*, and the index is what gets
    serialized. Reordering the option list changes the meaning of stored
    documents.
    """

    def __init__(self, name, options: Sequence[str], slot, default_index: Optional[int] = None,
                 tip: str = "", label=None, parent=None):
        super().__init__(name, slot, tip, label, parent)
        self.options: List[str] = list(options)
        self.def_val = int(slot.value) if default_index is None else int(default_index)
        self.combo = QComboBox()
        self.combo.addItems(self.options)
        self._select(int(slot.value))
        self.combo.setToolTip(tip)
        self.widget = self.combo

    def _select(self, index: int) -> bool:
        if 0 <= index < self.combo.count():
            self.combo.setCurrentIndex(index)
            return True
        return False

    def apply(self):
        self.slot.value = self.combo.currentIndex()

    def reset(self):
        self._select(self.def_val)

    def current_value(self) -> int:
        return self.combo.currentIndex()

    def current_text(self) -> str:
        return self.combo.currentText()

    def attributes(self):
        return {"index": str(self.combo.currentIndex())}

    def load(self, element):
        index = parse_int(element.get("index"))
        if index is not None:
            self._select(index)
