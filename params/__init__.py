"""
params package

Parameter catalog: one editable, named, typed unit per value category,
each bound to a value slot and able to save/load itself as an XML element.
"""

from params.base import AttrSlot, InvalidParamName, ParamBase, ValueSlot, validate_param_name
from params.numeric import DoubleParam, FloatParam, IntParam, RangeParam
from params.text import DirParam, FilePathParam, PasswordParam, StringListParam, StringParam, VariantParam
from params.choice import BoolParam, ComboParam
from params.visual import ColorButton, ColorParam, FontParam
from params.temporal import DateParam, DateTimeParam, TimeParam
from params.geometry import PointParam, RectParam, SizeParam

__all__ = [
    "AttrSlot",
    "InvalidParamName",
    "ParamBase",
    "ValueSlot",
    "validate_param_name",
    "DoubleParam",
    "FloatParam",
    "IntParam",
    "RangeParam",
    "DirParam",
    "FilePathParam",
    "PasswordParam",
    "StringListParam",
    "StringParam",
    "VariantParam",
    "BoolParam",
    "ComboParam",
    "ColorButton",
    "ColorParam",
    "FontParam",
    "DateParam",
    "DateTimeParam",
    "TimeParam",
    "PointParam",
    "RectParam",
    "SizeParam",
]
