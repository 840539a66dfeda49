"""
binding package

Reflection binder: turns an object's properties into editor parameters,
edited through editor-owned buffers and written back on accept.
"""

from binding.arena import BufferArena, WriteBack
from binding.property_info import PropertyInfo, display_name_for, extract_property_info
from binding.dispatch import FACTORIES, Resolution, ValueKind, create_param, resolve_hint, resolve_type_name
from binding.adapter import DEFAULT_TAB, PropertyAdapter, bind_object_to_editor

__all__ = [
    "BufferArena",
    "WriteBack",
    "PropertyInfo",
    "display_name_for",
    "extract_property_info",
    "FACTORIES",
    "Resolution",
    "ValueKind",
    "create_param",
    "resolve_hint",
    "resolve_type_name",
    "DEFAULT_TAB",
    "PropertyAdapter",
    "bind_object_to_editor",
]
