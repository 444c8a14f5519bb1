#
# Copyright IBM Corp. 2024 - 2025
# SPDX-License-Identifier: MIT
#

"""Define the default serializers and the dispatch engines."""
import logging
import re
from collections.abc import Mapping
from typing import Any, Callable, Union

from pydantic import BaseModel, ConfigDict
from typing_extensions import override

from block_content_core.transforms.serializer.base import (
    BaseSerializer,
    ElementBuilder,
    ImageUrlResolver,
    UnknownBlockType,
    UnknownMarkType,
)
from block_content_core.transforms.serializer.common import (
    SerializationContext,
    Serializers,
)
from block_content_core.transforms.serializer.hyperscript import create_element
from block_content_core.transforms.serializer.image_url import get_image_url
from block_content_core.types.nodes import (
    Span,
    StructuredMark,
    resolve_mark_type,
    to_block,
    to_span,
)

_logger = logging.getLogger(__name__)

_HEADING_STYLE = re.compile(r"^h\d")


class _BuilderSerializer(BaseModel, BaseSerializer):
    """Serializer emitting its output through an element builder."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    h: Callable[..., Any]


class BlockSerializer(_BuilderSerializer):
    """Low-level block serializer, dispatching on the block's `_type`."""

    @override
    def serialize(self, ctx: SerializationContext) -> Any:
        """Hand the block over to the serializer registered for its type."""
        node = to_block(ctx.node)
        serializer = ctx.serializers.types.get(node.type_)
        if serializer is None:
            raise UnknownBlockType(node.type_)

        _logger.debug(f"dispatching block of type {node.type_}")
        return self.h(
            serializer,
            {"node": node, "options": ctx.options, "is_inline": ctx.is_inline},
            ctx.children,
        )


class SpanSerializer(_BuilderSerializer):
    """Low-level span serializer, dispatching on the span's mark type."""

    @override
    def serialize(self, ctx: SerializationContext) -> Any:
        """Hand the span over to the serializer registered for its mark."""
        node = to_span(ctx.node)
        mark_type = resolve_mark_type(node.mark)
        serializer = None if mark_type is None else ctx.serializers.marks.get(mark_type)
        if serializer is None:
            # a span without mark reports a placeholder name
            raise UnknownMarkType("<missing>" if mark_type is None else mark_type)

        return self.h(
            serializer,
            {
                "node": node,
                "mark": node.mark,
                "serializers": ctx.serializers,
                "options": ctx.options,
                "is_inline": True,
            },
            node.children,
        )


class ListSerializer(_BuilderSerializer):
    """Low-level list serializer."""

    @override
    def serialize(self, ctx: SerializationContext) -> Any:
        """Wrap the items in an unordered list for bullets, else an ordered one."""
        tag = "ul" if ctx.list_type == "bullet" else "ol"
        return self.h(tag, None, ctx.children)


class ListItemSerializer(_BuilderSerializer):
    """Low-level list item serializer."""

    @override
    def serialize(self, ctx: SerializationContext) -> Any:
        """Wrap the children in a list item."""
        return self.h("li", None, ctx.children)


class BlockTypeSerializer(_BuilderSerializer):
    """Serializer of the actual `block` type: paragraphs, headings, quotes."""

    @override
    def serialize(self, ctx: SerializationContext) -> Any:
        """Pick the tag from the block's style."""
        style = to_block(ctx.node).style or "normal"

        if _HEADING_STYLE.match(style):
            return self.h(style, None, ctx.children)

        tag = "blockquote" if style == "blockquote" else "p"
        return self.h(tag, None, ctx.children)


class RawTagSerializer(_BuilderSerializer):
    """Wraps the children in a fixed tag without any props."""

    tag: str

    @override
    def serialize(self, ctx: SerializationContext) -> Any:
        """Wrap the children."""
        return self.h(self.tag, None, ctx.children)


def make_raw_tag_serializer(h: ElementBuilder, tag: str) -> RawTagSerializer:
    """Create a serializer wrapping its children in `tag`."""
    return RawTagSerializer(h=h, tag=tag)


class UnderlineSerializer(_BuilderSerializer):
    """Underline mark serializer."""

    @override
    def serialize(self, ctx: SerializationContext) -> Any:
        """Wrap the children in an underlined span."""
        return self.h(
            "span", {"style": {"textDecoration": "underline"}}, ctx.children
        )


class StrikeThroughSerializer(_BuilderSerializer):
    """Strike-through mark serializer."""

    @override
    def serialize(self, ctx: SerializationContext) -> Any:
        """Wrap the children in a deletion."""
        return self.h("del", None, ctx.children)


class LinkSerializer(_BuilderSerializer):
    """Link mark serializer."""

    @override
    def serialize(self, ctx: SerializationContext) -> Any:
        """Wrap the children in an anchor pointing to the mark's `href`."""
        href = ctx.mark.get("href") if isinstance(ctx.mark, StructuredMark) else None
        return self.h("a", {"href": href}, ctx.children)


class ImageSerializer(_BuilderSerializer):
    """Image block serializer."""

    image_url_resolver: Callable[..., str]

    @override
    def serialize(self, ctx: SerializationContext) -> Any:
        """Emit the image, in a figure unless it is inline."""
        img = self.h("img", {"src": self.image_url_resolver(ctx)}, None)
        return img if ctx.is_inline else self.h("figure", None, img)


class HardBreakSerializer(_BuilderSerializer):
    """Hard break serializer."""

    @override
    def serialize(self, ctx: SerializationContext) -> Any:
        """Emit a line break."""
        return self.h("br", None, None)


class SerializerSuite(BaseModel):
    """Default registry and span recursion bound to one element builder."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    h: Callable[..., Any]
    default_serializers: Serializers

    def serialize_span(
        self,
        span: Union[str, Span, Mapping[str, Any]],
        serializers: Serializers,
        index: int,
    ) -> Any:
        """Serialize a span tree, recursing into its children.

        Args:
            span: a text leaf or a structured span.
            serializers: the registry to resolve serializers from.
            index: position of the span among its siblings, used for keys.

        Returns:
            The text leaf unchanged, else the output of the span serializer.
        """
        if span == "\n" and serializers.hard_break:
            return self.h(serializers.hard_break, {"key": f"hb-{index}"}, None)

        if isinstance(span, str):
            return span

        node = to_span(span)
        serialized_node = node.model_copy(
            update={
                "children": tuple(
                    self.serialize_span(child, serializers, i)
                    for i, child in enumerate(node.children)
                )
            }
        )

        return self.h(
            serializers.span,
            {
                "key": node.key or f"span-{index}",
                "node": serialized_node,
                "serializers": serializers,
            },
            None,
        )


def create_serializers(
    h: ElementBuilder = create_element,
    image_url_resolver: ImageUrlResolver = get_image_url,
) -> SerializerSuite:
    """Create the default serializers emitting through `h`."""
    default_serializers = Serializers(
        # common overrides
        types={
            "block": BlockTypeSerializer(h=h),
            "image": ImageSerializer(h=h, image_url_resolver=image_url_resolver),
        },
        marks={
            "strong": make_raw_tag_serializer(h, "strong"),
            "em": make_raw_tag_serializer(h, "em"),
            "code": make_raw_tag_serializer(h, "code"),
            "underline": UnderlineSerializer(h=h),
            "strike-through": StrikeThroughSerializer(h=h),
            "link": LinkSerializer(h=h),
        },
        # less common overrides
        list_=ListSerializer(h=h),
        list_item=ListItemSerializer(h=h),
        block=BlockSerializer(h=h),
        span=SpanSerializer(h=h),
        hard_break=HardBreakSerializer(h=h),
    )
    return SerializerSuite(h=h, default_serializers=default_serializers)


_default_suite = create_serializers()

default_serializers = _default_suite.default_serializers
serialize_span = _default_suite.serialize_span
