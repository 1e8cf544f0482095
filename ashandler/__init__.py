"""
ashandler: call AppleScript handlers from typed Python code.

Arguments are converted to Apple event descriptors by codecs, packed into a
single list, and sent to the script as a generic subroutine-call event; the
result descriptor is decoded back into the declared Python type.

Examples
--------
>>> from ashandler import AppleScript
>>> script = AppleScript('''
... on add(a, b)
...     return a + b
... end add
... ''')
>>> add = script.handler("add", (int, int), int)
>>> add(2, 3)
5
"""

__version__ = "0.1.0"
__license__ = "Apache-2.0"

from ashandler.codec import (
    BooleanCodec,
    Codec,
    CodecRegistry,
    DescriptorCodec,
    DoubleCodec,
    Int32Codec,
    ListCodec,
    NumpyArrayCodec,
    OptionalCodec,
    RecordCodec,
    TextCodec,
    get_default_registry,
)
from ashandler.handler import TypedHandler, VoidHandler, handler, void_handler
from ashandler.helpers.fourcc import four_char_code, four_char_code_to_str
from ashandler.helpers.log import get_logger, set_log_level
from ashandler.runtime import (
    AppleScript,
    ScriptResource,
    build_event,
    dispatch,
    raw_call,
    raw_handler,
)
from ashandler.types import (
    AppleEvent,
    AppleScriptHandlerError,
    AppleScriptUnavailableError,
    CallConfig,
    ConversionError,
    CouldNotCoerce,
    Descriptor,
    ErrorInfo,
    HandlerNotFoundError,
    InternalDispatchError,
    ListItemNotFound,
    PermissionDeniedError,
    RecordFieldNotFound,
    RuntimeInvocationError,
    ScriptCompileError,
)

__all__ = [
    # calls
    "AppleScript",
    "ScriptResource",
    "handler",
    "void_handler",
    "raw_handler",
    "raw_call",
    "TypedHandler",
    "VoidHandler",
    "build_event",
    "dispatch",
    # data
    "Descriptor",
    "AppleEvent",
    "ErrorInfo",
    "CallConfig",
    "four_char_code",
    "four_char_code_to_str",
    # codecs
    "Codec",
    "CodecRegistry",
    "TextCodec",
    "Int32Codec",
    "DoubleCodec",
    "BooleanCodec",
    "ListCodec",
    "OptionalCodec",
    "RecordCodec",
    "NumpyArrayCodec",
    "DescriptorCodec",
    "get_default_registry",
    # errors
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
    # logging
    "get_logger",
    "set_log_level",
]
