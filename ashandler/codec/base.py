from __future__ import annotations

import dataclasses
import types
import typing
from contextlib import contextmanager
from collections.abc import Sequence as AbcSequence
from typing import (
    Any,
    Callable,
    Dict,
    Iterator,
    List,
    Optional,
    Protocol,
    Tuple,
    Union,
    runtime_checkable,
)

from ashandler.types.descriptor import Descriptor


@runtime_checkable
class Codec(Protocol):
    """
    Converts values of one Python type to and from descriptors.

    ``decode`` raises a `ConversionError` when the descriptor cannot be read
    as the codec's type.
    """

    type_name: str

    def encode(self, value: Any) -> Descriptor: ...

    def decode(self, descriptor: Descriptor) -> Any: ...


CodecFactory = Callable[[Any, "CodecRegistry"], Codec]

_SEQUENCE_ORIGINS = (list, tuple, AbcSequence)


class CodecRegistry:
    """
    Maps Python types and type hints to codecs.

    Plain types are looked up exactly (so ``bool`` never falls through to the
    ``int`` codec). Generic hints are composed on demand:

    - ``list[T]``, ``List[T]``, ``Sequence[T]``, ``tuple[T, ...]`` -> `ListCodec`
    - ``Optional[T]`` / ``T | None`` -> `OptionalCodec`
    - dataclasses -> `RecordCodec`

    Anything that already implements `Codec` is returned unchanged.
    """

    def __init__(self) -> None:
        self._by_type: Dict[Any, Codec] = {}
        self._factories: List[Tuple[Callable[[Any], bool], CodecFactory]] = []
        self._pending: Dict[Any, Codec] = {}

    def register(self, pytype: Any, codec: Codec) -> None:
        """Register ``codec`` for values of ``pytype`` (replacing any previous one)."""
        if not isinstance(codec, Codec):
            raise TypeError(f"{codec!r} does not implement the Codec protocol")
        self._by_type[pytype] = codec

    def register_factory(self, predicate: Callable[[Any], bool], factory: CodecFactory) -> None:
        """Register a codec factory consulted for hints no exact entry matches."""
        self._factories.append((predicate, factory))

    @contextmanager
    def resolving(self, hint: Any, codec: Codec) -> Iterator[None]:
        """
        Make ``codec`` resolvable for ``hint`` while its own parts are resolved.

        A codec whose fields refer back to its own type (``next: Optional[Node]``)
        then reuses the codec under construction instead of building another.
        """
        self._pending[hint] = codec
        try:
            yield
        finally:
            del self._pending[hint]

    def resolve(self, hint: Any) -> Codec:
        """
        Return the codec for a type, type hint or codec instance.

        Raises
        ------
        TypeError
            If no codec can be built for ``hint``.
        """
        if not isinstance(hint, type) and isinstance(hint, Codec):
            return hint

        try:
            codec = self._by_type.get(hint)
            if codec is None:
                codec = self._pending.get(hint)
        except TypeError:
            codec = None
        if codec is not None:
            return codec

        from .containers import ListCodec, OptionalCodec

        origin = typing.get_origin(hint)
        args = typing.get_args(hint)

        if origin is Union or (hasattr(types, "UnionType") and origin is types.UnionType):
            members = [a for a in args if a is not type(None)]
            if len(members) == 1 and len(args) == 2:
                return OptionalCodec(self.resolve(members[0]))
            raise TypeError(f"Only Optional[T] unions are supported, got {hint!r}")

        if origin in _SEQUENCE_ORIGINS:
            if origin is tuple:
                if len(args) != 2 or args[1] is not Ellipsis:
                    raise TypeError(
                        f"Only homogeneous tuple[T, ...] hints are supported, got {hint!r}"
                    )
                return ListCodec(self.resolve(args[0]), container=tuple)
            if len(args) != 1:
                raise TypeError(f"Sequence hint needs an element type, got {hint!r}")
            return ListCodec(self.resolve(args[0]))

        for predicate, factory in self._factories:
            if predicate(hint):
                return factory(hint, self)

        raise TypeError(f"No codec registered for {hint!r}")

    def encode(self, value: Any, hint: Optional[Any] = None) -> Descriptor:
        """Encode ``value`` using the codec for ``hint`` (default: ``type(value)``)."""
        return self.resolve(type(value) if hint is None else hint).encode(value)

    def decode(self, descriptor: Descriptor, hint: Any) -> Any:
        return self.resolve(hint).decode(descriptor)


def is_dataclass_type(hint: Any) -> bool:
    return isinstance(hint, type) and dataclasses.is_dataclass(hint)
