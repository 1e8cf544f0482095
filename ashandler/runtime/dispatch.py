from __future__ import annotations

from typing import Any, Callable, Optional, Union

from ashandler.helpers.fourcc import four_char_code_to_str
from ashandler.helpers.log import LogTime, log_debug, log_warning
from ashandler.types.config import CallConfig
from ashandler.types.constants import KEY_SUBROUTINE_NAME
from ashandler.types.descriptor import Descriptor
from ashandler.types.errors import InternalDispatchError, RuntimeInvocationError
from ashandler.types.event import AppleEvent

from .event_builder import build_event
from .script import ScriptResource


def dispatch(script: ScriptResource, event: AppleEvent) -> Descriptor:
    """
    Execute ``event`` against ``script`` and interpret the outcome.

    Blocks until the runtime answers. There is no timeout: if the handler
    drives another application, macOS may hold the call while it asks the
    user for automation permission.

    Returns
    -------
    Descriptor
        The handler's result; a null descriptor for handlers returning nothing.

    Raises
    ------
    RuntimeInvocationError
        The runtime reported an error (most specific subclass for its code).
    InternalDispatchError
        The runtime reported neither a result nor an error.
    """
    name_desc = event.param(KEY_SUBROUTINE_NAME)
    label = name_desc.value if name_desc is not None else four_char_code_to_str(event.event_id)
    log_debug(f"dispatching {event!r}")

    with LogTime(f"handler {label!r}"):
        result, error = script.execute_event(event)

    if error is not None:
        if result is not None:
            log_warning(
                f"handler {label!r} returned both a result and error {error.code}; "
                "treating the call as failed"
            )
        raise RuntimeInvocationError.from_info(error)

    if result is None:
        raise InternalDispatchError(
            f"handler {label!r}: script runtime returned neither a result nor an error"
        )

    log_debug(f"handler {label!r} returned {result!r}")
    return result


def raw_handler(
    script: ScriptResource,
    name: str,
    config: Union[None, dict[str, Any], CallConfig] = None,
) -> Callable[[Optional[Descriptor]], Descriptor]:
    """
    Return a callable that runs handler ``name`` with a pre-packed argument list.

    The callable keeps a strong reference to ``script``. Each call builds a
    fresh event, so the callable can be reused.
    """
    config = CallConfig.from_obj(config)

    def call(arguments: Optional[Descriptor] = None) -> Descriptor:
        return dispatch(script, build_event(name, arguments, config))

    call.__name__ = name
    call.__qualname__ = f"raw_handler.{name}"
    return call


def raw_call(
    script: ScriptResource,
    name: str,
    arguments: Optional[Descriptor] = None,
    config: Union[None, dict[str, Any], CallConfig] = None,
) -> Descriptor:
    """One-shot form of `raw_handler`."""
    return raw_handler(script, name, config)(arguments)
