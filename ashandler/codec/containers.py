from __future__ import annotations

from typing import Any, Callable, Iterable, List

from ashandler.types.constants import TYPE_LIST
from ashandler.types.descriptor import Descriptor
from ashandler.types.errors import CouldNotCoerce, ListItemNotFound

from .base import Codec


class ListCodec:
    """
    Sequence of values sharing one element codec.

    Encoding appends every element in input order; decoding walks the list
    from index 1 up to ``number_of_items``.
    """

    def __init__(self, element: Codec, container: Callable[[List[Any]], Any] = list) -> None:
        self.element = element
        self.container = container
        self.type_name = f"list[{element.type_name}]"

    def encode(self, value: Iterable[Any]) -> Descriptor:
        if isinstance(value, (str, bytes)):
            raise TypeError(f"cannot encode {type(value).__name__} as {self.type_name}")
        packed = Descriptor.list()
        for item in value:
            # index 0 appends
            packed.insert(self.element.encode(item), 0)
        return packed

    def decode(self, descriptor: Descriptor) -> Any:
        items = descriptor.coerce(TYPE_LIST)
        if items is None:
            raise CouldNotCoerce(descriptor.type_name, self.type_name)
        out = []
        for index in range(1, items.number_of_items + 1):
            item = items.at_index(index)
            if item is None:
                raise ListItemNotFound(index)
            out.append(self.element.decode(item))
        return self.container(out)


class OptionalCodec:
    """Wraps a codec so that None travels as the null descriptor."""

    def __init__(self, inner: Codec) -> None:
        self.inner = inner
        self.type_name = f"Optional[{inner.type_name}]"

    def encode(self, value: Any) -> Descriptor:
        if value is None:
            return Descriptor.null()
        return self.inner.encode(value)

    def decode(self, descriptor: Descriptor) -> Any:
        if descriptor.is_null:
            return None
        return self.inner.decode(descriptor)


class DescriptorCodec:
    """Passes descriptors through untouched."""

    type_name = "Descriptor"

    def encode(self, value: Any) -> Descriptor:
        if not isinstance(value, Descriptor):
            raise TypeError(f"expected a Descriptor, got {type(value).__name__}")
        return value

    def decode(self, descriptor: Descriptor) -> Descriptor:
        return descriptor
