"""Models for the presentation tree produced by serialization."""

import html
import re
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

_VOID_TAGS = {"area", "br", "col", "embed", "hr", "img", "input", "source", "wbr"}
_ATTR_NAMES = {"class_name": "class", "html_for": "for"}
_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class Element(BaseModel):
    """One node of the presentation tree."""

    model_config = ConfigDict(frozen=True)

    tag: str
    props: dict[str, Any] = {}
    children: tuple[Any, ...] = ()
    key: Optional[str] = None

    def to_html(self) -> str:
        """Render this element and its subtree to HTML."""
        attrs = "".join(
            _render_attr(name, value) for name, value in self.props.items()
        )
        if self.tag in _VOID_TAGS:
            return f"<{self.tag}{attrs}>"
        inner = "".join(render_html(child) for child in self.children)
        return f"<{self.tag}{attrs}>{inner}</{self.tag}>"


def _render_style(style: Mapping[str, Any]) -> str:
    return ";".join(
        f"{_CAMEL_BOUNDARY.sub('-', prop).lower()}:{value}"
        for prop, value in style.items()
    )


def _render_attr(name: str, value: Any) -> str:
    if value is None or value is False:
        return ""
    attr = _ATTR_NAMES.get(name, name)
    if value is True:
        return f" {attr}"
    if name == "style" and isinstance(value, Mapping):
        value = _render_style(value)
    return f' {attr}="{html.escape(str(value))}"'


def render_html(node: Any) -> str:
    """Render an output node (element, text leaf or sequence of those) to HTML."""
    if node is None:
        return ""
    elif isinstance(node, Element):
        return node.to_html()
    elif isinstance(node, str):
        return html.escape(node, quote=False)
    elif isinstance(node, (list, tuple)):
        return "".join(render_html(child) for child in node)
    raise ValueError(f"Can not render node of type {type(node).__name__}")
