#
# Copyright IBM Corp. 2024 - 2025
# SPDX-License-Identifier: MIT
#

"""Reference element builder producing `Element` trees."""
from collections.abc import Mapping
from typing import Any, Optional, Union

from block_content_core.transforms.serializer.base import Serializer
from block_content_core.transforms.serializer.common import SerializationContext
from block_content_core.types.element import Element


def _as_children(children: Any) -> tuple[Any, ...]:
    if children is None:
        return ()
    elif isinstance(children, (list, tuple)):
        return tuple(children)
    return (children,)


def create_element(
    tag: Union[str, Serializer],
    props: Optional[Mapping[str, Any]] = None,
    children: Any = None,
) -> Any:
    """Build one output node.

    Args:
        tag: an element tag name, or a serializer to invoke.
        props: the attributes of the element, or the context of the serializer.
            A `key` entry is used as identity of the produced element.
        children: a single child, a sequence of children or None.

    Returns:
        The `Element` for a tag, else whatever the serializer produced.
    """
    my_props = dict(props or {})
    key = my_props.pop("key", None)
    my_children = _as_children(children)

    if isinstance(tag, str):
        return Element(tag=tag, props=my_props, children=my_children, key=key)

    if not callable(tag):
        raise ValueError(f"Can not build an element out of {tag!r}")

    ctx = SerializationContext.model_validate(
        {**my_props, "key": key, "children": my_children}
    )
    res = tag(ctx)
    if key is not None and isinstance(res, Element) and res.key is None:
        res = res.model_copy(update={"key": key})
    return res
