from __future__ import annotations

from typing import Any

import numpy as np

from ashandler.types.constants import (
    INT32_MAX,
    INT32_MIN,
    TYPE_BOOLEAN,
    TYPE_IEEE64,
    TYPE_SINT32,
    TYPE_UNICODE_TEXT,
)
from ashandler.types.descriptor import Descriptor
from ashandler.types.errors import CouldNotCoerce


def _coerced(descriptor: Descriptor, tag: int, type_name: str) -> Any:
    coerced = descriptor.coerce(tag)
    if coerced is None:
        raise CouldNotCoerce(descriptor.type_name, type_name)
    return coerced.value


def _reject(value: Any, type_name: str) -> TypeError:
    return TypeError(f"cannot encode {type(value).__name__} value {value!r} as {type_name}")


class TextCodec:
    type_name = "str"

    def encode(self, value: Any) -> Descriptor:
        if not isinstance(value, (str, np.str_)):
            raise _reject(value, self.type_name)
        return Descriptor.string(str(value))

    def decode(self, descriptor: Descriptor) -> str:
        return _coerced(descriptor, TYPE_UNICODE_TEXT, self.type_name)


class Int32Codec:
    type_name = "int32"

    def encode(self, value: Any) -> Descriptor:
        # bool is an int subclass but has its own descriptor type
        if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
            raise _reject(value, self.type_name)
        value = int(value)
        if not INT32_MIN <= value <= INT32_MAX:
            raise CouldNotCoerce("int", self.type_name)
        return Descriptor.int32(value)

    def decode(self, descriptor: Descriptor) -> int:
        return _coerced(descriptor, TYPE_SINT32, self.type_name)


class DoubleCodec:
    type_name = "float"

    def encode(self, value: Any) -> Descriptor:
        # ints are accepted where a float is declared, as in typing's numeric tower
        if isinstance(value, (bool, np.bool_)) or not isinstance(
            value, (float, int, np.floating, np.integer)
        ):
            raise _reject(value, self.type_name)
        try:
            return Descriptor.double(float(value))
        except OverflowError:
            raise CouldNotCoerce(type(value).__name__, self.type_name) from None

    def decode(self, descriptor: Descriptor) -> float:
        return _coerced(descriptor, TYPE_IEEE64, self.type_name)


class BooleanCodec:
    type_name = "bool"

    def encode(self, value: Any) -> Descriptor:
        if not isinstance(value, (bool, np.bool_)):
            raise _reject(value, self.type_name)
        return Descriptor.boolean(bool(value))

    def decode(self, descriptor: Descriptor) -> bool:
        return _coerced(descriptor, TYPE_BOOLEAN, self.type_name)
