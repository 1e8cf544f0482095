from __future__ import annotations

from typing import Any

import numpy as np

from ashandler.types.descriptor import Descriptor

from .builtin import DoubleCodec, Int32Codec
from .containers import ListCodec


class NumpyArrayCodec:
    """
    One-dimensional numeric arrays as AppleScript lists.

    Integer dtypes travel as int32 items, everything else as doubles. Arrays
    always come back as float64, since AppleScript lists carry no dtype.
    """

    type_name = "numpy.ndarray"

    def __init__(self) -> None:
        self._ints = ListCodec(Int32Codec())
        self._reals = ListCodec(DoubleCodec())

    def encode(self, value: Any) -> Descriptor:
        arr = np.asarray(value)
        if arr.ndim != 1:
            raise TypeError(f"only 1-D arrays can be encoded, got shape {arr.shape}")
        if arr.dtype.kind in "iu":
            return self._ints.encode(arr.tolist())
        if arr.dtype.kind not in "fb":
            raise TypeError(f"cannot encode array of dtype {arr.dtype} as a list of numbers")
        return self._reals.encode([float(x) for x in arr])

    def decode(self, descriptor: Descriptor) -> np.ndarray:
        return np.asarray(self._reals.decode(descriptor), dtype=np.float64)
