"""
params/text.py

Line-edit based parameters: free text, passwords, file and directory paths,
comma-joined string lists and the opaque string fallback.
"""

from __future__ import annotations

from typing import List, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QFileDialog, QLineEdit

from params.base import ParamBase
from utils import join_list, split_list


class StringParam(ParamBase):
    """Parameter for string values."""

    def __init__(self, name, slot, default: Optional[str] = None,
                 hints: Qt.InputMethodHint = Qt.InputMethodHint.ImhNone,
                 tip: str = "", label=None, parent=None):
        super().__init__(name, slot, tip, label, parent)
        self.def_val = str(slot.value) if default is None else default
        self.edit = QLineEdit(str(slot.value))
        self.edit.setInputMethodHints(hints)
        self.edit.setToolTip(tip)
        self.widget = self.edit

    def apply(self):
        self.slot.value = self.edit.text()

    def reset(self):
        self.edit.setText(self.def_val)

    def current_value(self) -> str:
        return self.edit.text()

    def attributes(self):
        return {"value": self.edit.text()}

    def load(self, element):
        value = element.get("value")
        if value is not None:
            self.edit.setText(value)


class PasswordParam(StringParam):
    """String parameter with hidden input."""

    def __init__(self, name, slot, default: Optional[str] = None, tip: str = "", label=None, parent=None):
        super().__init__(name, slot, default, Qt.InputMethodHint.ImhHiddenText, tip, label, parent)
        self.edit.setEchoMode(QLineEdit.EchoMode.Password)


class _PathParam(StringParam):
    """Shared behavior of file and directory parameters: ``path`` attribute and browsing."""

    has_browse = True
    dialog_title = ""

    def attributes(self):
        return {"path": self.edit.text()}

    def load(self, element):
        value = element.get("path")
        if value is not None:
            self.edit.setText(value)

    def _choose(self) -> str:
        raise NotImplementedError

    def on_browse_clicked(self):
        """Open a chooser seeded with the current text; keep the text on cancel."""
        chosen = self._choose()
        if chosen:
            self.edit.setText(chosen)


class FilePathParam(_PathParam):
    """Parameter for a file path with a file chooser."""

    dialog_title = "Select File"

    def _choose(self) -> str:
        path, _ = QFileDialog.getOpenFileName(self.widget, self.dialog_title, self.edit.text())
        return path


class DirParam(_PathParam):
    """Parameter for a directory path with a directory chooser."""

    dialog_title = "Select Directory"

    def _choose(self) -> str:
        return QFileDialog.getExistingDirectory(self.widget, self.dialog_title, self.edit.text())


class StringListParam(ParamBase):
    """Parameter for an ordered list of strings, edited as comma-joined text."""

    def __init__(self, name, slot, default: Optional[List[str]] = None, tip: str = "", label=None, parent=None):
        super().__init__(name, slot, tip, label, parent)
        self.def_val = list(slot.value if default is None else default)
        self.edit = QLineEdit(join_list(slot.value))
        self.edit.setToolTip(tip)
        self.widget = self.edit

    def apply(self):
        self.slot.value = split_list(self.edit.text())

    def reset(self):
        self.edit.setText(join_list(self.def_val))

    def current_value(self) -> List[str]:
        return split_list(self.edit.text())

    def attributes(self):
        return {"value": join_list(self.current_value())}

    def load(self, element):
        value = element.get("value")
        if value is not None:
            self.edit.setText(join_list(split_list(value)))


class VariantParam(ParamBase):
    """Fallback parameter for values of any type, edited through their string form.

    ``apply`` stores the edited text, so the slot holds a ``str`` afterwards.
    """

    def __init__(self, name, slot, default=None, tip: str = "", label=None, parent=None):
        super().__init__(name, slot, tip, label, parent)
        self.def_val = slot.value if default is None else default
        self.edit = QLineEdit(_as_text(slot.value))
        self.edit.setToolTip(tip)
        self.widget = self.edit

    def apply(self):
        self.slot.value = self.edit.text()

    def reset(self):
        self.edit.setText(_as_text(self.def_val))

    def current_value(self) -> str:
        return self.edit.text()

    def attributes(self):
        return {"value": self.edit.text()}

    def load(self, element):
        value = element.get("value")
        if value is not None:
            self.edit.setText(value)


def _as_text(value) -> str:
    return "" if value is None else str(value)
