from __future__ import annotations

"""
Error types exposed by ashandler.

Two families reach callers of a handler:

- `ConversionError`: a Python value could not be turned into a descriptor,
  or a descriptor returned by the script could not be read back as the
  declared Python type.
- `RuntimeInvocationError`: the script runtime refused or failed the call
  (compile failure, unknown handler, error inside the handler, automation
  permission denied) or answered inconsistently.

Malformed four-character codes are programming errors and are signalled
with `AssertionError` by [`four_char_code()`][ashandler.helpers.fourcc.four_char_code]
instead of an exception from this module.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Type

ERR_INTERNAL_DISPATCH = -1
ERR_EVENT_NOT_HANDLED = -1708
ERR_CANT_GET = -1728
ERR_EVENT_NOT_PERMITTED = -1743
ERR_SYNTAX = -2740
ERR_SYNTAX_EXPECTED = -2741


@dataclass(frozen=True)
class ErrorInfo:
    """
    Error record reported by the script runtime.

    Parameters
    ----------
    code : int
        Runtime error number (``NSAppleScriptErrorNumber``).
    message : str
        Runtime error message (``NSAppleScriptErrorMessage``).
    """

    code: int
    message: str

    @classmethod
    def from_error_dict(cls, error: Optional[Dict[str, Any]]) -> ErrorInfo:
        """
        Build from an ``NSAppleScript`` error dictionary.

        Missing entries fall back to ``-1`` and the dictionary's repr, so a
        failed call always yields a usable record.
        """
        error = dict(error or {})
        code = error.get("NSAppleScriptErrorNumber")
        message = error.get("NSAppleScriptErrorMessage")
        if message is None:
            message = error.get("NSAppleScriptErrorBriefMessage") or repr(error)
        return cls(
            code=int(code) if code is not None else ERR_INTERNAL_DISPATCH,
            message=str(message),
        )


class AppleScriptHandlerError(Exception):
    """Base class for all ashandler errors."""


class ConversionError(AppleScriptHandlerError, ValueError):
    """Raised when a value cannot be converted to or from a descriptor."""


class CouldNotCoerce(ConversionError):
    """
    Raised when a descriptor cannot be coerced to the requested type.

    Parameters
    ----------
    descriptor_type : str
        Four-character type of the offending descriptor (or the Python type
        name when encoding).
    type_name : str
        Name of the type the value should have become.
    """

    def __init__(self, descriptor_type: str, type_name: str) -> None:
        self.descriptor_type = descriptor_type
        self.type_name = type_name
        super().__init__(
            f"Failed to convert descriptor to type {type_name}; "
            f"descriptor typecode: {descriptor_type!r}"
        )


class ListItemNotFound(ConversionError):
    """Raised when a list descriptor has no item at a 1-based index."""

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(f"Could not retrieve descriptor at index {index}")


class RecordFieldNotFound(ConversionError):
    """Raised when a record descriptor lacks a field required by a dataclass."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Record has no field {key!r}")


class RuntimeInvocationError(AppleScriptHandlerError, RuntimeError):
    """
    Error raised when the script runtime fails a handler call.

    Parameters
    ----------
    code : int
        Runtime error number, or ``-1`` when synthesized locally.
    message : str
        Runtime error message.

    Notes
    -----
    Use `from_info()` to get the most specific subclass for a runtime error
    record. Callers that only care that the call failed can catch this class.
    """

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"AppleScript error {code}: {message}")

    @classmethod
    def from_info(cls, info: ErrorInfo) -> RuntimeInvocationError:
        error_cls: Type[RuntimeInvocationError] = _BY_CODE.get(
            info.code, RuntimeInvocationError
        )
        return error_cls(info.code, info.message)


class HandlerNotFoundError(RuntimeInvocationError):
    """The script does not define a handler with the requested name."""


class PermissionDeniedError(RuntimeInvocationError):
    """The user (or TCC policy) refused automation of another application."""


class ScriptCompileError(RuntimeInvocationError):
    """The script source failed to compile."""


class InternalDispatchError(RuntimeInvocationError):
    """
    The runtime reported neither a result nor an error.

    The platform API documents the result as nullable; when it is missing and
    no error record was filled in, the call is treated as failed rather than
    successful.
    """

    def __init__(
        self,
        message: str = "script runtime returned neither a result nor an error",
        code: int = ERR_INTERNAL_DISPATCH,
    ) -> None:
        super().__init__(code, message)


class AppleScriptUnavailableError(AppleScriptHandlerError, ImportError):
    """Raised when PyObjC's Foundation bridge cannot be imported."""


_BY_CODE: Dict[int, Type[RuntimeInvocationError]] = {
    ERR_EVENT_NOT_HANDLED: HandlerNotFoundError,
    ERR_CANT_GET: HandlerNotFoundError,
    ERR_EVENT_NOT_PERMITTED: PermissionDeniedError,
    ERR_SYNTAX: ScriptCompileError,
    ERR_SYNTAX_EXPECTED: ScriptCompileError,
}
