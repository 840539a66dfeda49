"""
params/base.py

Value slots and the abstract parameter every catalog variant derives from.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from typing import Any, Optional

from PyQt6.QtCore import QObject
from PyQt6.QtWidgets import QPushButton, QWidget

# XML names without namespace prefixes; ElementTree would accept anything
# and write a document that cannot be read back.
_TAG_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_.\-]*$")


class InvalidParamName(ValueError):
    """Raised when a parameter name cannot be used as an XML element tag."""


def validate_param_name(name: str) -> str:
    if not isinstance(name, str) or not _TAG_RE.match(name):
        raise InvalidParamName(f"Parameter name {name!r} is not a valid XML element tag")
    return name


# ----------------------------
# Value slots
# ----------------------------

class ValueSlot:
    """A mutable cell holding one externally owned value.

    The host keeps a reference to the slot and reads ``slot.value`` after
    the editor closes.
    """

    __slots__ = ("value",)

    def __init__(self, value: Any = None):
        self.value = value

    def __repr__(self) -> str:
        return f"ValueSlot({self.value!r})"


class AttrSlot:
    """A slot that reads and writes an attribute of another object."""

    __slots__ = ("target", "attr")

    def __init__(self, target: Any, attr: str):
        self.target = target
        self.attr = attr

    @property
    def value(self) -> Any:
        return getattr(self.target, self.attr)

    @value.setter
    def value(self, v: Any) -> None:
        setattr(self.target, self.attr, v)

    def __repr__(self) -> str:
        return f"AttrSlot({type(self.target).__name__}.{self.attr})"


# ----------------------------
# Abstract parameter
# ----------------------------

class ParamBase(QObject):
    """
    Abstract base class for parameter types in the ParamsEditor.

    A parameter wraps one named value: it owns the control the user edits,
    a snapshot of the default value and a reference to the slot it writes
    on :meth:`apply`.

    Attributes:
        name: Serialization tag and load match key.
        label: Text shown next to the control.
        widget: The control the editor places in the row.
        def_button: Reset button, assigned by the editor.
        browse_button: Browse button for path-like variants, assigned by the editor.
    """

    has_browse = False

    def __init__(self, name: str, slot, tip: str = "", label: Optional[str] = None, parent=None):
        super().__init__(parent)
        self.name = validate_param_name(name)
        self.label = label if label is not None else name
        self.tooltip = tip
        self.slot = slot
        self.widget: Optional[QWidget] = None
        self.def_button: Optional[QPushButton] = None
        self.browse_button: Optional[QPushButton] = None

    def apply(self) -> None:
        """Copy the control value into the slot."""
        raise NotImplementedError

    def reset(self) -> None:
        """Restore the control to the default snapshot."""
        raise NotImplementedError

    def current_value(self) -> Any:
        """Return the control value in the slot's value type."""
        raise NotImplementedError

    def attributes(self) -> dict:
        """Return the attributes written for this parameter."""
        raise NotImplementedError

    def load(self, element: ET.Element) -> None:
        """Update the control from *element*'s attributes.

        Missing or malformed attributes leave the control unchanged.
        """
        raise NotImplementedError

    def save(self, parent: ET.Element) -> ET.Element:
        """Append this parameter's element to *parent*."""
        return ET.SubElement(parent, self.name, self.attributes())

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"
