#
# Copyright IBM Corp. 2024 - 2025
# SPDX-License-Identifier: MIT
#

"""Serialization of a whole sequence of top-level blocks."""
import logging
from collections.abc import Mapping, Sequence
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from block_content_core.transforms.serializer.common import (
    RenderParams,
    Serializers,
)
from block_content_core.transforms.serializer.defaults import (
    SerializerSuite,
    create_serializers,
)
from block_content_core.types.nodes import Block, to_block

_logger = logging.getLogger(__name__)

_DEFAULT_LIST_LEVEL = 1


class ListItemNode(BaseModel):
    """A list item block together with the lists nested below it."""

    block: Block
    sublists: list["ListNode"] = []


class ListNode(BaseModel):
    """Consecutive list item blocks of the same type and level."""

    list_type: str
    level: int
    items: list[ListItemNode] = []


ListItemNode.model_rebuild()
ListNode.model_rebuild()


def nest_lists(blocks: Sequence[Block]) -> list[Union[Block, ListNode]]:
    """Group consecutive list item blocks into (nested) lists.

    A deeper level opens a list below the last item of the enclosing one,
    a different list type on the same level starts a sibling list.
    """
    res: list[Union[Block, ListNode]] = []
    stack: list[ListNode] = []

    for block in blocks:
        if not block.list_item:
            res.append(block)
            stack = []
            continue

        level = block.level or _DEFAULT_LIST_LEVEL
        while stack and (
            stack[-1].level > level
            or (stack[-1].level == level and stack[-1].list_type != block.list_item)
        ):
            stack.pop()

        if stack and stack[-1].level == level:
            stack[-1].items.append(ListItemNode(block=block))
            continue

        new_list = ListNode(
            list_type=block.list_item,
            level=level,
            items=[ListItemNode(block=block)],
        )
        if stack:
            stack[-1].items[-1].sublists.append(new_list)
        else:
            res.append(new_list)
        stack.append(new_list)

    return res


class BlocksSerializer(BaseModel):
    """Serializes a sequence of top-level blocks into one output tree."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="forbid")

    suite: SerializerSuite = Field(default_factory=create_serializers)
    serializers: Optional[Mapping[str, Any]] = None  # caller overrides
    params: RenderParams = RenderParams()

    def get_serializers(self) -> Serializers:
        """Get the registry used for a serialization, defaults plus overrides."""
        return self.suite.default_serializers.merge_with_patch(self.serializers)

    def serialize(
        self,
        blocks: Union[Sequence[Any], Block, Mapping[str, Any]],
        **kwargs: Any,
    ) -> Any:
        """Serialize the passed blocks.

        Args:
            blocks: the top-level blocks, or a single block.
            **kwargs: patch applied on top of the render params.

        Returns:
            The single serialized node, or a container wrapping all of them.
        """
        params = self.params.merge_with_patch(patch=kwargs)
        serializers = self.get_serializers()

        if isinstance(blocks, (Block, Mapping)):
            blocks = [blocks]
        parts = [
            self._serialize_part(part, serializers, params, index=i)
            for i, part in enumerate(nest_lists([to_block(b) for b in blocks]))
        ]
        _logger.debug(f"serialized {len(parts)} top-level parts")

        if len(parts) == 1 and not params.render_container_on_single_child:
            return parts[0]

        return self.suite.h(
            params.container_tag,
            {"class_name": params.class_name} if params.class_name else None,
            parts,
        )

    def _serialize_part(
        self,
        part: Union[Block, ListNode],
        serializers: Serializers,
        params: RenderParams,
        index: int,
    ) -> Any:
        if isinstance(part, ListNode):
            return self._serialize_list(part, serializers, params, index=index)
        return self.serialize_block(part, serializers, params, index=index)

    def _serialize_children(self, block: Block, serializers: Serializers) -> list:
        return [
            self.suite.serialize_span(child, serializers, i)
            for i, child in enumerate(block.children)
        ]

    def serialize_block(
        self,
        block: Block,
        serializers: Serializers,
        params: RenderParams,
        index: int = 0,
        is_inline: bool = False,
    ) -> Any:
        """Serialize one block through the block dispatcher."""
        return self.suite.h(
            serializers.block,
            {
                "key": block.key or f"block-{index}",
                "node": block,
                "serializers": serializers,
                "options": params,
                "is_inline": is_inline,
            },
            self._serialize_children(block, serializers),
        )

    def _serialize_list(
        self,
        list_node: ListNode,
        serializers: Serializers,
        params: RenderParams,
        index: int,
    ) -> Any:
        items = []
        for i, item in enumerate(list_node.items):
            children = self._serialize_children(item.block, serializers)
            children.extend(
                self._serialize_list(sublist, serializers, params, index=j)
                for j, sublist in enumerate(item.sublists)
            )
            items.append(
                self.suite.h(
                    serializers.list_item,
                    {
                        "key": item.block.key or f"li-{i}",
                        "node": item.block,
                        "serializers": serializers,
                        "options": params,
                        "index": i,
                    },
                    children,
                )
            )

        return self.suite.h(
            serializers.list_,
            {
                "key": f"list-{list_node.level}-{index}",
                "type": list_node.list_type,
                "level": list_node.level,
                "serializers": serializers,
                "options": params,
            },
            items,
        )
