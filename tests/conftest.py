"""
Pytest configuration and shared fixtures for ashandler tests
"""

import io
import logging
import os
import sys
from typing import Callable, Dict, List, Optional, Tuple

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from ashandler.types.constants import (
    KEY_DIRECT_OBJECT,
    KEY_SUBROUTINE_NAME,
    TYPE_IEEE64,
    TYPE_SINT32,
)
from ashandler.types.descriptor import Descriptor
from ashandler.types.errors import ERR_EVENT_NOT_HANDLED, ErrorInfo
from ashandler.types.event import AppleEvent


class ScriptFailure(Exception):
    """Raised by fake handlers to simulate `error "..." number N` in AppleScript."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class FakeScript:
    """
    In-process stand-in for a compiled AppleScript.

    Handlers are Python callables taking and returning descriptors, keyed by
    the (already case-folded) name AppleScript would store. Every event that
    reaches the script is recorded in ``events``.
    """

    def __init__(self, handlers: Optional[Dict[str, Callable[..., Optional[Descriptor]]]] = None):
        self.handlers = dict(handlers or {})
        self.events: List[AppleEvent] = []

    def execute_event(self, event: AppleEvent) -> Tuple[Optional[Descriptor], Optional[ErrorInfo]]:
        self.events.append(event)
        name = event.param(KEY_SUBROUTINE_NAME).value
        fn = self.handlers.get(name)
        if fn is None:
            return None, ErrorInfo(
                ERR_EVENT_NOT_HANDLED, f"«script» doesn’t understand the “{name}” message."
            )

        direct = event.param(KEY_DIRECT_OBJECT)
        args = list(direct) if direct is not None else []
        try:
            result = fn(*args)
        except ScriptFailure as e:
            return None, ErrorInfo(e.code, e.message)
        except TypeError as e:
            # AppleScript reports a parameter count mismatch as -1721
            return None, ErrorInfo(-1721, str(e))
        return (Descriptor.null() if result is None else result), None


def _add(a: Descriptor, b: Descriptor) -> Descriptor:
    return Descriptor.int32(a.coerce(TYPE_SINT32).value + b.coerce(TYPE_SINT32).value)


def _fail(message: Descriptor) -> Descriptor:
    raise ScriptFailure(-2700, message.value)


@pytest.fixture
def fake_script() -> FakeScript:
    """
    Script with a handful of handlers:

    - ``add(a, b)`` -> int32 sum
    - ``dothing()`` -> nothing
    - ``echo(x)`` -> x
    - ``average(xs)`` -> double mean of a list
    - ``fail(msg)`` -> raises error -2700
    """
    return FakeScript(
        {
            "add": _add,
            "dothing": lambda: None,
            "echo": lambda x: x,
            "average": lambda xs: Descriptor.double(
                sum(i.coerce(TYPE_IEEE64).value for i in xs) / xs.number_of_items
            ),
            "fail": _fail,
        }
    )


@pytest.fixture
def log_stream():
    """Capture ashandler log output (the logger does not propagate to root)."""
    from ashandler.helpers.log import AshandlerFormatter, get_logger

    logger = get_logger()
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(AshandlerFormatter())
    previous = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        yield stream
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous)


def _applescript_available() -> bool:
    if sys.platform != "darwin":
        return False
    try:
        import Foundation  # noqa: F401
    except ImportError:
        return False
    return True


def pytest_collection_modifyitems(config, items):
    """
    Skip tests that need a real AppleScript runtime when none is available.
    """
    if _applescript_available():
        return
    skip_macos = pytest.mark.skip(reason="needs macOS with pyobjc-framework-Cocoa")
    for item in items:
        if "macos" in item.keywords:
            item.add_marker(skip_macos)
