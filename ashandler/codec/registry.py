from typing import Optional

import numpy as np

from ashandler.types.descriptor import Descriptor

from .arrays import NumpyArrayCodec
from .base import CodecRegistry, is_dataclass_type
from .builtin import BooleanCodec, DoubleCodec, Int32Codec, TextCodec
from .containers import DescriptorCodec
from .record import RecordCodec

_default_registry: Optional[CodecRegistry] = None


def get_default_registry() -> CodecRegistry:
    global _default_registry
    if _default_registry is None:
        reg = CodecRegistry()
        reg.register(str, TextCodec())
        reg.register(int, Int32Codec())
        reg.register(float, DoubleCodec())
        reg.register(bool, BooleanCodec())
        reg.register(np.ndarray, NumpyArrayCodec())
        reg.register(Descriptor, DescriptorCodec())

        reg.register_factory(is_dataclass_type, RecordCodec)

        _default_registry = reg
    return _default_registry
