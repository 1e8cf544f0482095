"""
Public type definitions for ashandler.

- [`Descriptor`][ashandler.types.descriptor.Descriptor]: the tagged value
  exchanged with scripts.
- [`AppleEvent`][ashandler.types.event.AppleEvent]: the handler-call event.
- [`CallConfig`][ashandler.types.config.CallConfig]: call options.
- Error types in [`ashandler.types.errors`][ashandler.types.errors].
"""

from .config import CallConfig
from .descriptor import Descriptor
from .errors import (
    AppleScriptHandlerError,
    AppleScriptUnavailableError,
    ConversionError,
    CouldNotCoerce,
    ErrorInfo,
    HandlerNotFoundError,
    InternalDispatchError,
    ListItemNotFound,
    PermissionDeniedError,
    RecordFieldNotFound,
    RuntimeInvocationError,
    ScriptCompileError,
)
from .event import AppleEvent

__all__ = [
    "AppleEvent",
    "CallConfig",
    "Descriptor",
    "ErrorInfo",
    "AppleScriptHandlerError",
    "AppleScriptUnavailableError",
    "ConversionError",
    "CouldNotCoerce",
    "ListItemNotFound",
    "RecordFieldNotFound",
    "RuntimeInvocationError",
    "HandlerNotFoundError",
    "PermissionDeniedError",
    "ScriptCompileError",
    "InternalDispatchError",
]
