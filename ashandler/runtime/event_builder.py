from __future__ import annotations

import struct
from typing import Any, Optional, Union

from ashandler.types.config import CallConfig
from ashandler.types.constants import (
    APPLESCRIPT_SUITE,
    K_ANY_TRANSACTION_ID,
    K_AUTO_GENERATE_RETURN_ID,
    K_CURRENT_PROCESS,
    KEY_DIRECT_OBJECT,
    KEY_SUBROUTINE_NAME,
    SUBROUTINE_EVENT,
    TYPE_PROCESS_SERIAL_NUMBER,
)
from ashandler.types.descriptor import Descriptor
from ashandler.types.event import AppleEvent


def current_process_target() -> Descriptor:
    """
    Address descriptor for the calling process itself.

    A ``ProcessSerialNumber`` of ``{0, kCurrentProcess}`` in native byte
    order; the handler lives in the script executing in-process.
    """
    return Descriptor.opaque(
        TYPE_PROCESS_SERIAL_NUMBER, struct.pack("=II", 0, K_CURRENT_PROCESS)
    )


def normalize_handler_name(name: str, config: CallConfig) -> str:
    if not isinstance(name, str) or not name:
        raise ValueError(f"handler name must be a non-empty string, got {name!r}")
    return name.lower() if config.lowercase_names else name


def build_event(
    name: str,
    arguments: Optional[Descriptor] = None,
    config: Union[None, dict[str, Any], CallConfig] = None,
) -> AppleEvent:
    """
    Build the subroutine-call event for one handler invocation.

    Parameters
    ----------
    name : str
        Handler name. Lower-cased unless ``config.lowercase_names`` is False.
    arguments : Descriptor, optional
        Packed argument list. The event has a single positional slot, the
        direct object, so every logical argument travels inside this one
        list. When None, no direct object is set.
    config : CallConfig or dict, optional
        Call options.

    Returns
    -------
    AppleEvent
        A fresh ``ascr/psbr`` event, to be sent exactly once.
    """
    config = CallConfig.from_obj(config)
    event = AppleEvent(
        target=current_process_target(),
        event_class=APPLESCRIPT_SUITE,
        event_id=SUBROUTINE_EVENT,
        return_id=K_AUTO_GENERATE_RETURN_ID,
        transaction_id=K_ANY_TRANSACTION_ID,
    )
    event.set_param(
        KEY_SUBROUTINE_NAME, Descriptor.string(normalize_handler_name(name, config))
    )
    if arguments is not None:
        event.set_param(KEY_DIRECT_OBJECT, arguments)
    return event
