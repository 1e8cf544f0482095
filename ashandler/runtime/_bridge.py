"""
Descriptor <-> NSAppleEventDescriptor conversion.

Only imported when an `AppleScript` actually executes an event, so PyObjC is
never required by the pure layers.
"""

from typing import Any

from ashandler.helpers.fourcc import four_char_code_to_str
from ashandler.types.constants import (
    KEY_USER_RECORD_FIELDS,
    TEXT_TYPES,
    TYPE_BOOLEAN,
    TYPE_FALSE,
    TYPE_IEEE32,
    TYPE_IEEE64,
    TYPE_LIST,
    TYPE_NULL,
    TYPE_RECORD,
    TYPE_SINT16,
    TYPE_SINT32,
    TYPE_SINT64,
    TYPE_TRUE,
    TYPE_UINT32,
)
from ashandler.types.descriptor import Descriptor
from ashandler.types.event import AppleEvent

from .script import _foundation

_INTEGER_TYPES = (TYPE_SINT16, TYPE_SINT32)
_REAL_TYPES = (TYPE_IEEE32, TYPE_IEEE64, TYPE_SINT64, TYPE_UINT32)


def to_ns(desc: Descriptor) -> Any:
    """Convert a `Descriptor` into an ``NSAppleEventDescriptor``."""
    ns = _foundation().NSAppleEventDescriptor

    if desc.tag in TEXT_TYPES:
        return ns.descriptorWithString_(desc.value)
    if desc.tag == TYPE_SINT32:
        return ns.descriptorWithInt32_(desc.value)
    if desc.tag == TYPE_IEEE64:
        return ns.descriptorWithDouble_(desc.value)
    if desc.tag in (TYPE_BOOLEAN, TYPE_TRUE, TYPE_FALSE):
        return ns.descriptorWithBoolean_(bool(desc.value))
    if desc.is_null:
        return ns.nullDescriptor()
    if desc.is_list:
        out = ns.listDescriptor()
        for item in desc.value:
            out.insertDescriptor_atIndex_(to_ns(item), 0)
        return out
    if desc.tag == TYPE_RECORD:
        # user-defined keys travel as a flat [key, value, key, value ...] list
        fields = ns.listDescriptor()
        for key, item in desc.value.items():
            fields.insertDescriptor_atIndex_(ns.descriptorWithString_(key), 0)
            fields.insertDescriptor_atIndex_(to_ns(item), 0)
        out = ns.recordDescriptor()
        out.setDescriptor_forKeyword_(fields, KEY_USER_RECORD_FIELDS)
        return out
    data = bytes(desc.value or b"")
    return ns.descriptorWithDescriptorType_bytes_length_(desc.tag, data, len(data))


def to_ns_event(event: AppleEvent) -> Any:
    """Build the ``NSAppleEventDescriptor`` Apple event for ``event``."""
    ns = _foundation().NSAppleEventDescriptor
    ns_event = ns.appleEventWithEventClass_eventID_targetDescriptor_returnID_transactionID_(
        event.event_class,
        event.event_id,
        to_ns(event.target),
        event.return_id,
        event.transaction_id,
    )
    for keyword, value in event.params.items():
        ns_event.setParamDescriptor_forKeyword_(to_ns(value), keyword)
    return ns_event


def from_ns(ns_desc: Any) -> Descriptor:
    """Convert an ``NSAppleEventDescriptor`` into a `Descriptor`."""
    tag = ns_desc.descriptorType()

    if tag in TEXT_TYPES:
        return Descriptor(tag, str(ns_desc.stringValue()))
    if tag in _INTEGER_TYPES:
        return Descriptor.int32(ns_desc.int32Value())
    if tag in _REAL_TYPES:
        return Descriptor.double(ns_desc.doubleValue())
    if tag in (TYPE_BOOLEAN, TYPE_TRUE, TYPE_FALSE):
        return Descriptor.boolean(bool(ns_desc.booleanValue()))
    if tag == TYPE_NULL:
        return Descriptor.null()
    if tag == TYPE_LIST:
        out = Descriptor.list()
        for index in range(1, ns_desc.numberOfItems() + 1):
            item = ns_desc.descriptorAtIndex_(index)
            # a missing slot is kept as a hole for the list codec to report
            out.insert(from_ns(item) if item is not None else None, 0)
        return out
    if tag == TYPE_RECORD:
        return _record_from_ns(ns_desc)

    data = ns_desc.data()
    return Descriptor.opaque(tag, bytes(data) if data is not None else b"")


def _record_from_ns(ns_desc: Any) -> Descriptor:
    out = Descriptor.record()
    user_fields = ns_desc.descriptorForKeyword_(KEY_USER_RECORD_FIELDS)
    if user_fields is not None:
        count = user_fields.numberOfItems()
        for index in range(1, count, 2):
            key = user_fields.descriptorAtIndex_(index)
            value = user_fields.descriptorAtIndex_(index + 1)
            if key is None or value is None:
                continue
            out.set_for_key(str(key.stringValue()), from_ns(value))
    # keyword-keyed fields (e.g. `name`, `class`) are exposed by their code
    for index in range(1, ns_desc.numberOfItems() + 1):
        keyword = ns_desc.keywordForDescriptorAtIndex_(index)
        if keyword == KEY_USER_RECORD_FIELDS:
            continue
        value = ns_desc.descriptorAtIndex_(index)
        if value is not None:
            out.set_for_key(four_char_code_to_str(keyword), from_ns(value))
    return out
