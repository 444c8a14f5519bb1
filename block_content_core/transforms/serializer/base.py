#
# Copyright IBM Corp. 2024 - 2025
# SPDX-License-Identifier: MIT
#

"""Define base classes for serialization."""
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Callable, Optional, Protocol, Union

if TYPE_CHECKING:
    from block_content_core.transforms.serializer.common import SerializationContext

# a serializer is anything callable with a `SerializationContext`
Serializer = Callable[..., Any]


class UnknownBlockType(ValueError):
    """Raised when no serializer is registered for a block's `_type`."""

    def __init__(self, type_name: Optional[str]):
        """Init."""
        self.type_name = type_name
        super().__init__(
            f'Unknown block type "{type_name}", please specify a serializer '
            "for it in the `serializers.types` prop"
        )


class UnknownMarkType(ValueError):
    """Raised when no serializer is registered for a span's mark type."""

    def __init__(self, type_name: Optional[str]):
        """Init."""
        self.type_name = type_name
        super().__init__(
            f'Unknown mark type "{type_name}", please specify a serializer '
            "for it in the `serializers.marks` prop"
        )


class ElementBuilder(Protocol):
    """Builds one output node out of a tag or serializer, props and children."""

    def __call__(
        self,
        tag: Union[str, Serializer],
        props: Optional[Mapping[str, Any]] = None,
        children: Any = None,
    ) -> Any:
        """Build the node."""
        ...


class ImageUrlResolver(Protocol):
    """Maps the serialization context of an image node to its URL."""

    def __call__(self, ctx: "SerializationContext") -> str:
        """Resolve the URL."""
        ...


class BaseSerializer(ABC):
    """Base class for node serializers."""

    @abstractmethod
    def serialize(self, ctx: "SerializationContext") -> Any:
        """Serializes the node of the passed context."""
        ...

    def __call__(self, ctx: "SerializationContext") -> Any:
        """Serializers are used as components by the element builder."""
        return self.serialize(ctx)
