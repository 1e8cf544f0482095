from __future__ import annotations

import dataclasses
import typing
from typing import Any, Dict, Optional, Type

from ashandler.types.constants import TYPE_RECORD
from ashandler.types.descriptor import Descriptor
from ashandler.types.errors import CouldNotCoerce, RecordFieldNotFound

from .base import Codec, CodecRegistry


class RecordCodec:
    """
    Generic codec that maps a dataclass to an AppleScript record.

    Each field becomes a user field keyed by the field name and is encoded
    with the codec resolved from its annotation, so nested lists, optionals
    and other dataclasses compose.

    Parameters
    ----------
    cls : type
        Dataclass to convert.
    registry : CodecRegistry
        Registry used to resolve the field annotations.
    """

    def __init__(self, cls: Type[Any], registry: CodecRegistry) -> None:
        if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
            raise TypeError(f"{cls!r} is not a dataclass")

        self._cls = cls
        self.type_name = cls.__name__
        hints = typing.get_type_hints(cls)
        self._fields = [f for f in dataclasses.fields(cls) if f.init]
        with registry.resolving(cls, self):
            self._field_codecs: Dict[str, Codec] = {
                f.name: registry.resolve(hints[f.name]) for f in self._fields
            }

    def encode(self, value: Any) -> Descriptor:
        if not isinstance(value, self._cls):
            raise TypeError(f"expected {self.type_name}, got {type(value).__name__}")
        record = Descriptor.record()
        for name, codec in self._field_codecs.items():
            record.set_for_key(name, codec.encode(getattr(value, name)))
        return record

    def decode(self, descriptor: Descriptor) -> Any:
        record = descriptor.coerce(TYPE_RECORD)
        if record is None:
            raise CouldNotCoerce(descriptor.type_name, self.type_name)

        kwargs: Dict[str, Any] = {}
        for field in self._fields:
            item = _lookup(record, field.name)
            if item is None:
                if _has_default(field):
                    continue
                raise RecordFieldNotFound(field.name)
            kwargs[field.name] = self._field_codecs[field.name].decode(item)
        return self._cls(**kwargs)


def _lookup(record: Descriptor, key: str) -> Optional[Descriptor]:
    item = record.for_key(key)
    if item is not None:
        return item
    # plain AppleScript identifiers come back case-folded
    folded = key.lower()
    for candidate in record.record_keys():
        if candidate.lower() == folded:
            return record.for_key(candidate)
    return None


def _has_default(field: dataclasses.Field) -> bool:
    return (
        field.default is not dataclasses.MISSING
        or field.default_factory is not dataclasses.MISSING
    )
