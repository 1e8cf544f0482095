from .arrays import NumpyArrayCodec
from .base import Codec, CodecRegistry
from .builtin import BooleanCodec, DoubleCodec, Int32Codec, TextCodec
from .containers import DescriptorCodec, ListCodec, OptionalCodec
from .record import RecordCodec
from .registry import get_default_registry

__all__ = [
    "Codec",
    "CodecRegistry",
    "TextCodec",
    "Int32Codec",
    "DoubleCodec",
    "BooleanCodec",
    "ListCodec",
    "OptionalCodec",
    "DescriptorCodec",
    "RecordCodec",
    "NumpyArrayCodec",
    "get_default_registry",
]
