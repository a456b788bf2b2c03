"""Field-granular merging of layered configuration records.

Sources are given highest precedence first (explicit, theme, default).
Each field is resolved according to its category:

* scalars: the first source that defines the field wins;
* indexed arrays: the first source that defines the array wins and the
  array is used as a unit, never merged element by element;
* maps: merged key by key, a higher-precedence source only replaces the
  keys it names.

``None`` marks an undefined field. Every merge ends with a complete
built-in default, so an undefined result means the default is broken.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Any, Dict, Iterable, Optional

__all__ = ["camel_to_snake", "resolve_fields"]


def camel_to_snake(name: str) -> str:
    out = []
    for char in name:
        if char.isupper():
            out.append("_")
            out.append(char.lower())
        else:
            out.append(char)
    return "".join(out).lstrip("_")


def _first_defined(sources: Sequence[object], name: str) -> Any:
    for source in sources:
        value = getattr(source, name, None)
        if value is not None:
            return value
    raise LookupError(f"configuration field '{name}' is undefined at every level")


def resolve_fields(
    sources: Iterable[Optional[object]],
    *,
    scalars: Sequence[str],
    arrays: Sequence[str],
    maps: Sequence[str],
) -> Dict[str, Any]:
    """Resolve every named field across ``sources`` (highest precedence first)."""

    present = [source for source in sources if source is not None]
    resolved: Dict[str, Any] = {}
    for name in scalars:
        resolved[name] = _first_defined(present, name)
    for name in arrays:
        resolved[name] = tuple(_first_defined(present, name))
    for name in maps:
        merged: Dict[Any, Any] = {}
        for source in reversed(present):
            layer = getattr(source, name, None)
            if isinstance(layer, Mapping):
                merged.update(layer)
        resolved[name] = MappingProxyType(merged)
    return resolved
