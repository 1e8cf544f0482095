from __future__ import annotations

"""
Script resources that can execute a handler-call event.

Anything with an ``execute_event(event) -> (result, error)`` method can back
a handler. `AppleScript` is the real implementation on macOS, wrapping
``NSAppleScript`` through PyObjC; the Foundation bridge is imported lazily so
that the descriptor, codec and event layers stay importable everywhere.
"""

import threading
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional, Protocol, Sequence, Tuple, Union, runtime_checkable

from ashandler.helpers.log import log_debug
from ashandler.types.config import CallConfig
from ashandler.types.descriptor import Descriptor
from ashandler.types.errors import (
    AppleScriptUnavailableError,
    ErrorInfo,
    ScriptCompileError,
)
from ashandler.types.event import AppleEvent

if TYPE_CHECKING:
    from ashandler.handler import TypedHandler, VoidHandler


@runtime_checkable
class ScriptResource(Protocol):
    """
    A compiled script able to run handler-call events.

    ``execute_event`` must return exactly one of a result descriptor or an
    error record; the dispatcher treats any other combination as a failure.
    """

    def execute_event(
        self, event: AppleEvent
    ) -> Tuple[Optional[Descriptor], Optional[ErrorInfo]]: ...


def _foundation() -> Any:
    try:
        import Foundation
    except ImportError as e:
        raise AppleScriptUnavailableError(
            "AppleScript execution needs macOS and PyObjC. Install it with:\n\n"
            "  pip install pyobjc-framework-Cocoa\n"
        ) from e
    return Foundation


class AppleScript:
    """
    Compiled AppleScript backed by ``NSAppleScript``.

    Parameters
    ----------
    source : str
        AppleScript source. It is compiled immediately.

    Raises
    ------
    ScriptCompileError
        If the source fails to compile.
    AppleScriptUnavailableError
        If PyObjC's Foundation bridge is not importable (e.g. not on macOS).

    Notes
    -----
    ``NSAppleScript`` is not safe for simultaneous use, so calls on one
    instance are serialized with a lock. Handlers created from this object
    keep it alive for as long as they are reachable.

    Examples
    --------
    >>> script = AppleScript('on add(a, b)\\n return a + b\\nend add')
    >>> add = script.handler("add", (int, int), int)
    >>> add(2, 3)
    5
    """

    def __init__(self, source: str) -> None:
        foundation = _foundation()
        self.source = source
        self._lock = threading.Lock()
        self._ns_script = foundation.NSAppleScript.alloc().initWithSource_(source)
        ok, error = self._ns_script.compileAndReturnError_(None)
        if not ok:
            info = ErrorInfo.from_error_dict(error)
            raise ScriptCompileError(info.code, info.message)
        log_debug(f"compiled script ({len(source)} characters)")

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> AppleScript:
        return cls(Path(path).read_text(encoding="utf-8"))

    def execute_event(
        self, event: AppleEvent
    ) -> Tuple[Optional[Descriptor], Optional[ErrorInfo]]:
        from ._bridge import from_ns, to_ns_event

        ns_event = to_ns_event(event)
        with self._lock:
            ns_result, ns_error = self._ns_script.executeAppleEvent_error_(ns_event, None)

        result = from_ns(ns_result) if ns_result is not None else None
        error = ErrorInfo.from_error_dict(ns_error) if ns_error is not None else None
        return result, error

    # -- handler factories ------------------------------------------------

    def raw_handler(self, name: str, config: Union[None, dict, CallConfig] = None):
        from .dispatch import raw_handler

        return raw_handler(self, name, config)

    def handler(
        self,
        name: str,
        argument_types: Sequence[Any] = (),
        return_type: Any = Descriptor,
        config: Union[None, dict, CallConfig] = None,
    ) -> TypedHandler:
        from ashandler.handler import handler

        return handler(self, name, argument_types, return_type, config=config)

    def void_handler(
        self,
        name: str,
        argument_types: Sequence[Any] = (),
        config: Union[None, dict, CallConfig] = None,
    ) -> VoidHandler:
        from ashandler.handler import void_handler

        return void_handler(self, name, argument_types, config=config)
