"""Models for the block content node tree."""

from collections.abc import Mapping
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

_NODE_CONFIG = ConfigDict(frozen=True, extra="allow", populate_by_name=True)


class PlainMark(BaseModel):
    """Mark referenced by its bare type name, e.g. `strong`."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["plain"] = "plain"
    name: str

    @property
    def type_name(self) -> str:
        """type_name."""
        return self.name


class StructuredMark(BaseModel):
    """Mark carrying its own `_type` plus a payload, e.g. a link with `href`."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["structured"] = "structured"
    type_name: Optional[str] = None
    payload: dict[str, Any] = {}

    def get(self, key: str, default: Any = None) -> Any:
        """Get a payload value."""
        return self.payload.get(key, default)


Mark = Union[PlainMark, StructuredMark]


def resolve_mark_type(mark: Optional[Mark]) -> Optional[str]:
    """Resolve the registry key of a mark, `None` when there is none."""
    if isinstance(mark, PlainMark):
        return mark.name
    elif isinstance(mark, StructuredMark):
        return mark.type_name
    return None


class Span(BaseModel):
    """Structured inline node: a mark wrapping nested spans or text leaves."""

    model_config = _NODE_CONFIG

    type_: str = Field(default="span", alias="_type")
    key: Optional[str] = Field(default=None, alias="_key")
    mark: Optional[Mark] = None
    children: tuple[Union[str, "Span"], ...] = ()

    @field_validator("mark", mode="before")
    @classmethod
    def _normalize_mark(cls, value: Any) -> Any:
        if isinstance(value, str):
            return PlainMark(name=value)
        if isinstance(value, Mapping) and "_type" not in value:
            # a dumped mark model
            if value.get("kind") == "plain":
                return PlainMark.model_validate(value)
            if value.get("kind") == "structured":
                return StructuredMark.model_validate(value)
        if isinstance(value, Mapping):
            payload = {k: v for k, v in value.items() if k != "_type"}
            return StructuredMark(type_name=value.get("_type"), payload=payload)
        return value


class Block(BaseModel):
    """Top-level unit of content, discriminated by `_type`."""

    model_config = _NODE_CONFIG

    type_: str = Field(alias="_type")
    key: Optional[str] = Field(default=None, alias="_key")
    style: Optional[str] = None
    children: tuple[Union[str, Span], ...] = ()

    # list membership
    list_item: Optional[str] = Field(default=None, alias="listItem")
    level: Optional[int] = None


def to_block(node: Union[Block, Mapping[str, Any]]) -> Block:
    """Get the passed node as a `Block`."""
    if isinstance(node, Block):
        return node
    return Block.model_validate(node)


def to_span(node: Union[Span, Mapping[str, Any]]) -> Span:
    """Get the passed node as a `Span`."""
    if isinstance(node, Span):
        return node
    return Span.model_validate(node)
