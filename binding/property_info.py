"""
binding/property_info.py

Per-property presentation metadata for the reflection binder.

Metadata comes from explicit declarations (dataclass ``field(metadata=...)``)
or, failing that, from sibling members following a naming convention:

    width          the bound property
    widthDisplay   label text            (or width_display)
    widthTooltip   tooltip               (or width_tooltip)
    widthCategory  tab the row goes to   (or width_category)
    widthMin       lower bound           (or width_min)
    widthMax       upper bound           (or width_max)
    widthStep      spin box step         (or width_step)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Mapping, Optional

log = logging.getLogger(__name__)

# (metadata key, camelCase suffix)
METADATA_SUFFIXES = (
    ("display", "Display"),
    ("tooltip", "Tooltip"),
    ("category", "Category"),
    ("min", "Min"),
    ("max", "Max"),
    ("step", "Step"),
)


@dataclass
class PropertyInfo:
    """Metadata describing how one property is presented in the editor.

    Numeric bounds are None when not declared; the dispatch layer then
    substitutes the value type's extremes.
    """
    name: str
    display_name: str
    tooltip: str = ""
    category: str = ""
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    step: Optional[float] = None
    enum_names: List[str] = field(default_factory=list)


def display_name_for(identifier: str) -> str:
    """Human-readable label for a member name: ``m_max_speed`` -> ``max speed``."""
    name = identifier[2:] if identifier.startswith("m_") else identifier
    return name.replace("_", " ")


def sibling_names(name: str, suffix: str) -> List[str]:
    """Candidate member names for one metadata suffix, camelCase first."""
    return [f"{name}{suffix}", f"{name}_{suffix.lower()}"]


def is_metadata_sibling(member: str, names: Iterable[str]) -> bool:
    """True if *member* carries metadata for another member in *names*."""
    known = set(names)
    for _, suffix in METADATA_SUFFIXES:
        for candidate in (suffix, "_" + suffix.lower()):
            if member.endswith(candidate):
                base = member[: -len(candidate)]
                if base and base in known:
                    return True
    return False


def _as_number(value: Any, name: str) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        log.debug("Ignoring non-numeric metadata %s=%r", name, value)
        return None
    if math.isnan(number):
        return None
    return number


def extract_property_info(
    name: str,
    lookup: Callable[[str], Any],
    explicit: Optional[Mapping[str, Any]] = None,
) -> PropertyInfo:
    """
    Build the PropertyInfo for *name*.

    Args:
        name: Property identifier.
        lookup: Returns the value of a sibling member, or None when absent.
        explicit: Declared metadata; keys override sibling probing.

    Returns:
        The metadata, with unset fields left at their defaults.
    """
    explicit = explicit or {}
    found = {}
    for key, suffix in METADATA_SUFFIXES:
        if key in explicit:
            found[key] = explicit[key]
            continue
        for candidate in sibling_names(name, suffix):
            value = lookup(candidate)
            if value is not None:
                found[key] = value
                break

    display = found.get("display")
    return PropertyInfo(
        name=name,
        display_name=str(display) if display else display_name_for(name),
        tooltip=str(found.get("tooltip") or ""),
        category=str(found.get("category") or ""),
        minimum=_as_number(found.get("min"), f"{name} min"),
        maximum=_as_number(found.get("max"), f"{name} max"),
        step=_as_number(found.get("step"), f"{name} step"),
    )
