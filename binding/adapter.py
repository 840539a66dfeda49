"""
binding/adapter.py

Reflection binder: derives editor parameters from an object's properties.

Supported targets:
- QObject: writable meta-object properties (QObject's own ``objectName``
  excluded), typed by the meta-type name
- dataclass instances: fields, typed by their resolved annotations, with
  optional ``field(metadata={...})`` presentation metadata; frozen
  dataclasses are skipped since nothing could be written back
- any other object: public instance attributes, ``__slots__`` entries
  and writable class properties, typed by their current value

Each bound property is edited through a buffer owned by the editor; the
live property changes only when the editor is accepted.
"""

from __future__ import annotations

import dataclasses
import logging
import typing
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional

from PyQt6.QtCore import QObject

from binding.arena import WriteBack
from binding.dispatch import Resolution, create_param, resolve_hint, resolve_qt_enum, resolve_type_name, resolve_value
from binding.property_info import extract_property_info, is_metadata_sibling
from params.base import ParamBase

if TYPE_CHECKING:
    from params_editor import ParamsEditor

log = logging.getLogger(__name__)

DEFAULT_TAB = "Properties"


@dataclass
class BoundMember:
    """One bindable member discovered on a target object."""
    name: str
    value: Any
    resolution: Optional[Resolution]
    type_label: str
    metadata: Mapping[str, Any] = field(default_factory=dict)


# ----------------------------
# Member discovery
# ----------------------------

def _qobject_members(obj: QObject):
    """
    Writable meta-properties plus a lookup covering every property name.

    Read-only ``<name>Min``-style properties only feed the lookup; a
    writable one is bound like any other property.
    """
    meta = obj.metaObject()
    first = QObject.staticMetaObject.propertyCount()
    all_names = [meta.property(i).name() for i in range(first, meta.propertyCount())]
    dynamic = [bytes(n).decode("utf-8") for n in obj.dynamicPropertyNames()]
    all_names.extend(dynamic)

    members = []
    for i in range(first, meta.propertyCount()):
        prop = meta.property(i)
        name = prop.name()
        if not prop.isWritable():
            continue
        if prop.isEnumType():
            resolution = resolve_qt_enum(prop.enumerator())
        else:
            resolution = resolve_type_name(prop.typeName())
        members.append(BoundMember(name, obj.property(name), resolution, prop.typeName()))

    known = set(all_names)

    def lookup(name: str):
        if name in known:
            return obj.property(name)
        return None

    return members, lookup


def _dataclass_members(obj):
    if type(obj).__dataclass_params__.frozen:
        log.warning("Not binding frozen dataclass %s: fields cannot be written back",
                    type(obj).__name__)
        return [], _attr_lookup(obj)

    try:
        hints = typing.get_type_hints(type(obj))
    except (NameError, TypeError) as e:
        log.warning("Cannot resolve annotations of %s: %s", type(obj).__name__, e)
        hints = {}
    fields = [f for f in dataclasses.fields(obj) if not f.name.startswith("_")]
    names = [f.name for f in fields]

    members = []
    for f in fields:
        if is_metadata_sibling(f.name, names):
            continue
        hint = hints.get(f.name, f.type)
        members.append(BoundMember(
            f.name,
            getattr(obj, f.name),
            resolve_hint(hint),
            getattr(hint, "__name__", str(hint)),
            f.metadata,
        ))
    return members, _attr_lookup(obj)


def _writable_properties(cls) -> List[str]:
    names: Dict[str, None] = {}
    for klass in reversed(cls.__mro__):
        for name, attr in vars(klass).items():
            if isinstance(attr, property) and attr.fset is not None and not name.startswith("_"):
                names[name] = None
    return list(names)


def _slot_names(cls) -> List[str]:
    names: List[str] = []
    for klass in reversed(cls.__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(s for s in slots if s not in ("__dict__", "__weakref__"))
    return names


def _object_members(obj):
    names: Dict[str, None] = {}
    for name in list(getattr(obj, "__dict__", {})) + _slot_names(type(obj)) + _writable_properties(type(obj)):
        if not name.startswith("_"):
            names[name] = None

    members = []
    for name in names:
        if is_metadata_sibling(name, names):
            continue
        try:
            value = getattr(obj, name)
        except Exception as e:
            log.warning("Skipping property %s.%s: cannot read it (%s)", type(obj).__name__, name, e)
            continue
        members.append(BoundMember(name, value, resolve_value(value), type(value).__name__))
    return members, _attr_lookup(obj)


def _attr_lookup(obj) -> Callable[[str], Any]:
    def lookup(name: str):
        return getattr(obj, name, None)
    return lookup


def discover_members(obj):
    """Return (members, sibling lookup) for any supported target."""
    if isinstance(obj, QObject):
        return _qobject_members(obj)
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return _dataclass_members(obj)
    return _object_members(obj)


# ----------------------------
# Binding
# ----------------------------

def bind_object_to_editor(editor: "ParamsEditor", obj, default_tab: str = DEFAULT_TAB) -> List[ParamBase]:
    """
    Add one parameter per supported property of *obj* to *editor*.

    Properties are routed to tabs by category, *default_tab* when none is
    declared; each tab is created the first time its category is seen.
    Unsupported property types are skipped with a warning.

    Args:
        editor: The editor receiving the parameters and write-backs.
        obj: Target object.
        default_tab: Tab title for properties without a category.

    Returns:
        The created parameters, in property order.
    """
    members, lookup = discover_members(obj)
    tab_for_category: Dict[str, int] = {}
    created: List[ParamBase] = []

    for member in members:
        resolution = member.resolution
        if resolution is None:
            log.warning("Skipping property %s.%s: unsupported type %s",
                        type(obj).__name__, member.name, member.type_label)
            continue

        info = extract_property_info(member.name, lookup, member.metadata)
        info.enum_names = list(resolution.enum_names)

        try:
            buffered = resolution.to_buffer(member.value)
        except (TypeError, ValueError) as e:
            log.warning("Skipping property %s.%s: cannot convert %r (%s)",
                        type(obj).__name__, member.name, member.value, e)
            continue

        handle = editor.buffers.allocate(buffered)
        param = create_param(resolution.kind, info, editor.buffers.slot(handle), editor.settings)

        category = info.category or default_tab
        if category not in tab_for_category:
            tab_for_category[category] = editor.add_tab(category)
        editor.add_param(tab_for_category[category], param)
        editor.register_write_back(WriteBack(obj, member.name, handle, resolution.from_buffer))
        created.append(param)

    log.debug("Bound %d of %d properties of %s", len(created), len(members), type(obj).__name__)
    return created


class PropertyAdapter:
    """Namespace entry point for the reflection binder."""

    @staticmethod
    def bind_object_to_editor(editor: "ParamsEditor", obj, default_tab: str = DEFAULT_TAB) -> List[ParamBase]:
        return bind_object_to_editor(editor, obj, default_tab)
