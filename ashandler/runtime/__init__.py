from .dispatch import dispatch, raw_call, raw_handler
from .event_builder import build_event, current_process_target
from .script import AppleScript, ScriptResource

__all__ = [
    "AppleScript",
    "ScriptResource",
    "build_event",
    "current_process_target",
    "dispatch",
    "raw_call",
    "raw_handler",
]
