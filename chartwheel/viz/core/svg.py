"""Small deterministic SVG scene graph used by the reference renderer.

Elements keep attributes as strings and children in insertion order, so a
given layout always serialises to the same bytes.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

SVG_NS = "http://www.w3.org/2000/svg"

__all__ = ["SVG_NS", "SvgDocument", "SvgElement", "format_number"]


def format_number(value: float, precision: int = 3) -> str:
    """Fixed-precision number without trailing zeros (``-0`` becomes ``0``)."""

    text = f"{value:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def _attr_name(name: str) -> str:
    # ``class_`` -> ``class``, ``stroke_width`` -> ``stroke-width``
    return name.rstrip("_").replace("_", "-")


@dataclass
class SvgElement:
    """A minimal SVG node."""

    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List["SvgElement"] = field(default_factory=list)
    text: Optional[str] = None

    def set(self, **attrs: object) -> "SvgElement":
        """Assign attributes and return ``self``.

        Underscores in keyword names become hyphens. ``None`` values are
        skipped and floats are written with fixed precision.
        """

        for key, value in attrs.items():
            if value is None:
                continue
            name = _attr_name(key)
            if isinstance(value, float):
                self.attributes[name] = format_number(value)
            else:
                self.attributes[name] = str(value)
        return self

    def add(self, *children: "SvgElement") -> "SvgElement":
        self.children.extend(children)
        return self

    def child(self, tag: str, text: Optional[str] = None, **attrs: object) -> "SvgElement":
        """Create, append and return a child element."""

        element = SvgElement(tag, text=text).set(**attrs)
        self.children.append(element)
        return element

    def find_all(self, tag: str) -> List["SvgElement"]:
        found: List[SvgElement] = []
        for node in self.children:
            if node.tag == tag:
                found.append(node)
            found.extend(node.find_all(tag))
        return found

    def to_string(self, indent: int = 0, pretty: bool = True) -> str:
        pad = "  " * indent if pretty else ""
        child_pad = "  " * (indent + 1) if pretty else ""
        joiner = "\n" if pretty else ""
        attrs = "".join(
            f" {name}={_quote(value)}" for name, value in sorted(self.attributes.items())
        )
        if not self.children and self.text is None:
            return f"{pad}<{self.tag}{attrs}/>"
        if not self.children:
            return f"{pad}<{self.tag}{attrs}>{_escape(self.text or '')}</{self.tag}>"

        parts: List[str] = [f"{pad}<{self.tag}{attrs}>"]
        if self.text is not None:
            parts.append(f"{child_pad}{_escape(self.text)}")
        for node in self.children:
            parts.append(node.to_string(indent + 1, pretty=pretty))
        parts.append(f"{pad}</{self.tag}>")
        return joiner.join(parts)


def _quote(value: str) -> str:
    return f'"{_escape(value)}"'


def _escape(value: str) -> str:
    return (
        value.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


@dataclass
class SvgDocument:
    """Scene container that serialises to a standalone SVG document."""

    width: float
    height: float
    background: Optional[str] = None
    root: SvgElement = field(init=False)

    def __post_init__(self) -> None:
        self.root = SvgElement("svg").set(
            xmlns=SVG_NS,
            width=format_number(self.width),
            height=format_number(self.height),
            viewBox=" ".join(format_number(v) for v in self.viewbox_tuple()),
        )
        if self.background:
            self.root.child(
                "rect",
                x=0,
                y=0,
                width=format_number(self.width),
                height=format_number(self.height),
                fill=self.background,
            )

    def group(self, parent: Optional[SvgElement] = None, **attrs: object) -> SvgElement:
        return (parent or self.root).child("g", **attrs)

    def to_string(self, pretty: bool = True) -> str:
        return self.root.to_string(indent=0, pretty=pretty)

    def to_bytes(self, pretty: bool = True) -> bytes:
        return self.to_string(pretty=pretty).encode("utf-8")

    def viewbox_tuple(self) -> Tuple[float, float, float, float]:
        return (0.0, 0.0, float(self.width), float(self.height))
