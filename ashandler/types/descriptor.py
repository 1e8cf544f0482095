from __future__ import annotations

"""
Pure-Python model of an Apple event descriptor.

A `Descriptor` is the unit of exchange across the call boundary: a
four-character type tag plus a value. Codecs produce and consume
descriptors, the event builder packs them into an `AppleEvent`, and the
PyObjC bridge in [`ashandler.runtime._bridge`][ashandler.runtime._bridge]
translates them to and from ``NSAppleEventDescriptor`` only at the moment of
execution. Keeping the model in Python means everything except the actual
dispatch works (and is testable) without macOS.

Value layout by tag
-------------------
- text (``utxt``/``utf8``/``TEXT``): ``str``
- int32 (``long``): ``int``
- double (``doub``): ``float``
- boolean (``bool``/``true``/``fals``): ``bool``
- list (``list``): ``list[Descriptor]``
- record (``reco``): ``dict[str, Descriptor]`` of user fields
- null (``null``): ``None``
- anything else: raw ``bytes``
"""

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional

from ashandler.helpers.fourcc import four_char_code_to_str
from ashandler.types.constants import (
    INT32_MAX,
    INT32_MIN,
    TEXT_TYPES,
    TYPE_BOOLEAN,
    TYPE_FALSE,
    TYPE_IEEE64,
    TYPE_LIST,
    TYPE_NULL,
    TYPE_RECORD,
    TYPE_SINT32,
    TYPE_TRUE,
    TYPE_UNICODE_TEXT,
)

BOOLEAN_TYPES = frozenset({TYPE_BOOLEAN, TYPE_TRUE, TYPE_FALSE})


@dataclass
class Descriptor:
    """
    Tagged value container.

    Parameters
    ----------
    tag : int
        Four-character descriptor type.
    value : Any
        Native payload, see the module docstring for the layout per tag.

    Notes
    -----
    Equality compares tag and value, so the null descriptor never equals an
    encoded primitive, list or record. Lists are 1-indexed, as in the Apple
    event API.
    """

    tag: int
    value: Any = field(default=None)

    # -- constructors -----------------------------------------------------

    @classmethod
    def string(cls, value: str) -> Descriptor:
        return cls(TYPE_UNICODE_TEXT, value)

    @classmethod
    def int32(cls, value: int) -> Descriptor:
        return cls(TYPE_SINT32, int(value))

    @classmethod
    def double(cls, value: float) -> Descriptor:
        return cls(TYPE_IEEE64, float(value))

    @classmethod
    def boolean(cls, value: bool) -> Descriptor:
        return cls(TYPE_BOOLEAN, bool(value))

    @classmethod
    def list(cls, items: Optional[List[Descriptor]] = None) -> Descriptor:
        return cls(TYPE_LIST, [] if items is None else [*items])

    @classmethod
    def record(cls, fields: Optional[Mapping[str, Descriptor]] = None) -> Descriptor:
        return cls(TYPE_RECORD, {} if fields is None else dict(fields))

    @classmethod
    def null(cls) -> Descriptor:
        return cls(TYPE_NULL, None)

    @classmethod
    def opaque(cls, tag: int, data: bytes) -> Descriptor:
        return cls(tag, bytes(data))

    # -- inspection -------------------------------------------------------

    @property
    def type_name(self) -> str:
        """Four-character spelling of the tag (``'long'``, ``'utxt'`` ...)."""
        return four_char_code_to_str(self.tag)

    @property
    def is_list(self) -> bool:
        return self.tag == TYPE_LIST

    @property
    def is_record(self) -> bool:
        return self.tag == TYPE_RECORD

    @property
    def is_null(self) -> bool:
        return self.tag == TYPE_NULL

    def __repr__(self) -> str:
        return f"Descriptor({self.type_name!r}, {self.value!r})"

    # -- list access ------------------------------------------------------

    @property
    def number_of_items(self) -> int:
        """Item count for lists and records; 0 for every other tag."""
        if self.tag in (TYPE_LIST, TYPE_RECORD):
            return len(self.value)
        return 0

    def insert(self, item: Descriptor, index: int = 0) -> None:
        """
        Insert ``item`` into a list descriptor.

        ``index == 0`` appends; any other index is the 1-based position the
        item will occupy afterwards.
        """
        if self.tag != TYPE_LIST:
            raise TypeError(f"cannot insert into a {self.type_name!r} descriptor")
        if index == 0:
            self.value.append(item)
            return
        if not 1 <= index <= len(self.value) + 1:
            raise IndexError(f"list insertion index {index} out of range")
        self.value.insert(index - 1, item)

    def at_index(self, index: int) -> Optional[Descriptor]:
        """Return the item at 1-based ``index``, or None if there is no such slot."""
        if self.tag != TYPE_LIST or not 1 <= index <= len(self.value):
            return None
        return self.value[index - 1]

    def __iter__(self) -> Iterator[Descriptor]:
        if self.tag != TYPE_LIST:
            raise TypeError(f"{self.type_name!r} descriptor is not a list")
        return iter(self.value)

    # -- record access ----------------------------------------------------

    def set_for_key(self, key: str, item: Descriptor) -> None:
        if self.tag != TYPE_RECORD:
            raise TypeError(f"{self.type_name!r} descriptor is not a record")
        self.value[key] = item

    def for_key(self, key: str) -> Optional[Descriptor]:
        if self.tag != TYPE_RECORD:
            return None
        return self.value.get(key)

    def record_keys(self) -> List[str]:
        if self.tag != TYPE_RECORD:
            return []
        return [*self.value]

    # -- coercion ---------------------------------------------------------

    def coerce(self, tag: int) -> Optional[Descriptor]:
        """
        Coerce to another descriptor type the way the script runtime does.

        Returns None when the runtime would refuse the coercion.
        """
        if tag == self.tag:
            return self
        if self.tag in TEXT_TYPES and tag in TEXT_TYPES:
            return Descriptor(tag, self.value)
        if self.tag in BOOLEAN_TYPES and tag in BOOLEAN_TYPES:
            return Descriptor(tag, self.value)
        coercion = _COERCIONS.get(tag)
        if coercion is None:
            return None
        return coercion(self)


def _parse_real(text: str) -> Optional[float]:
    try:
        value = float(text.strip())
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def _single_item(desc: Descriptor) -> Optional[Descriptor]:
    if desc.tag == TYPE_LIST and len(desc.value) == 1:
        return desc.value[0]
    return None


def _to_text(desc: Descriptor) -> Optional[Descriptor]:
    if desc.tag == TYPE_LIST:
        # items are concatenated without a delimiter
        parts = [
            None if item is None else item.coerce(TYPE_UNICODE_TEXT)
            for item in desc.value
        ]
        if any(part is None for part in parts):
            return None
        return Descriptor.string("".join(part.value for part in parts))
    if desc.tag == TYPE_SINT32:
        return Descriptor.string(str(desc.value))
    if desc.tag == TYPE_IEEE64:
        return Descriptor.string(repr(desc.value))
    if desc.tag in BOOLEAN_TYPES:
        return Descriptor.string("true" if desc.value else "false")
    return None


def _round_to_int32(value: float) -> Optional[int]:
    if not math.isfinite(value):
        return None
    rounded = round(value)
    if not INT32_MIN <= rounded <= INT32_MAX:
        return None
    return rounded


def _to_int32(desc: Descriptor) -> Optional[Descriptor]:
    item = _single_item(desc)
    if item is not None:
        return item.coerce(TYPE_SINT32)
    if desc.tag in BOOLEAN_TYPES:
        return Descriptor.int32(1 if desc.value else 0)
    if desc.tag == TYPE_IEEE64:
        rounded = _round_to_int32(desc.value)
    elif desc.tag in TEXT_TYPES:
        try:
            rounded = int(desc.value.strip())
        except ValueError:
            real = _parse_real(desc.value)
            rounded = None if real is None else _round_to_int32(real)
        if rounded is not None and not INT32_MIN <= rounded <= INT32_MAX:
            rounded = None
    else:
        return None
    return None if rounded is None else Descriptor.int32(rounded)


def _to_double(desc: Descriptor) -> Optional[Descriptor]:
    item = _single_item(desc)
    if item is not None:
        return item.coerce(TYPE_IEEE64)
    if desc.tag == TYPE_SINT32:
        return Descriptor.double(float(desc.value))
    if desc.tag in TEXT_TYPES:
        real = _parse_real(desc.value)
        return None if real is None else Descriptor.double(real)
    return None


def _to_boolean(desc: Descriptor) -> Optional[Descriptor]:
    item = _single_item(desc)
    if item is not None:
        return item.coerce(TYPE_BOOLEAN)
    if desc.tag == TYPE_SINT32 and desc.value in (0, 1):
        return Descriptor.boolean(desc.value == 1)
    if desc.tag in TEXT_TYPES:
        lowered = desc.value.strip().lower()
        if lowered in ("true", "false"):
            return Descriptor.boolean(lowered == "true")
    return None


def _to_list(desc: Descriptor) -> Optional[Descriptor]:
    # a single value is promoted to a one-item list
    if desc.tag in (TYPE_NULL, TYPE_RECORD):
        return None
    return Descriptor.list([desc])


_COERCIONS: Dict[int, Callable[[Descriptor], Optional[Descriptor]]] = {
    TYPE_UNICODE_TEXT: _to_text,
    TYPE_SINT32: _to_int32,
    TYPE_IEEE64: _to_double,
    TYPE_BOOLEAN: _to_boolean,
    TYPE_LIST: _to_list,
}
