#
# Copyright IBM Corp. 2024 - 2025
# SPDX-License-Identifier: MIT
#

"""Define the serializer registry, context and parameters."""
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing_extensions import Self

from block_content_core.transforms.serializer.base import Serializer
from block_content_core.types.nodes import Mark

_NAMESPACES = ("types", "marks")


class RenderParams(BaseModel):
    """Rendering options threaded through a whole serialization."""

    model_config = ConfigDict(extra="allow")

    # image URL resolution
    cdn_base_url: str = "https://cdn.sanity.io/images"
    project_id: Optional[str] = None
    dataset: Optional[str] = None
    image_options: dict[str, Any] = {}

    # top-level container
    container_tag: str = "div"
    class_name: Optional[str] = None
    render_container_on_single_child: bool = False

    def merge_with_patch(self, patch: Mapping[str, Any]) -> Self:
        """Create an instance by merging the provided patch dict on top of self."""
        res = self.model_validate({**self.model_dump(), **patch})
        return res


class Serializers(BaseModel):
    """Registry mapping block and mark type names to serializers."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    # keyed by block `_type` and by resolved mark type
    types: dict[str, Serializer] = {}
    marks: dict[str, Serializer] = {}

    list_: Optional[Serializer] = Field(default=None, alias="list")
    list_item: Optional[Serializer] = Field(default=None, alias="listItem")

    block: Optional[Serializer] = None
    span: Optional[Serializer] = None
    hard_break: Optional[Serializer] = Field(default=None, alias="hardBreak")

    @field_validator("hard_break", mode="before")
    @classmethod
    def _disable_falsy_hard_break(cls, value: Any) -> Any:
        return value or None

    @classmethod
    def _slot_name(cls, key: str) -> str:
        if key in cls.model_fields:
            return key
        for name, field in cls.model_fields.items():
            if field.alias == key:
                return name
        raise ValueError(f"Unknown serializer slot: {key}")

    def merge_with_patch(self, patch: Optional[Mapping[str, Any]]) -> "Serializers":
        """Create a registry with the caller's overrides on top of self.

        `types` and `marks` are merged entry by entry, every other slot is
        replaced by the patched value.
        """
        data: dict[str, Any] = {
            name: getattr(self, name) for name in type(self).model_fields
        }
        for key, value in (patch or {}).items():
            name = self._slot_name(key)
            if name in _NAMESPACES:
                data[name] = {**data[name], **(value or {})}
            else:
                data[name] = value
        return Serializers(**data)


class SerializationContext(BaseModel):
    """Per-invocation data handed to every serializer."""

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    node: Any = None
    serializers: Optional[Serializers] = None
    options: RenderParams = RenderParams()
    is_inline: bool = Field(default=False, alias="isInline")

    # already serialized, in order
    children: tuple[Any, ...] = ()

    mark: Optional[Mark] = None
    key: Optional[str] = None

    # list serialization
    list_type: Optional[str] = Field(default=None, alias="type")
    level: Optional[int] = None
    index: Optional[int] = None
