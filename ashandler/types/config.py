from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass
class CallConfig:
    """
    Options applied when building handler calls.

    Parameters
    ----------
    lowercase_names : bool, default=True
        Lower-case handler names before dispatch. AppleScript matches
        handler identifiers case-insensitively and stores them folded, so
        ``"doThing"`` must be sent as ``"dothing"``. Disable only for
        runtimes that match names exactly.
    """

    lowercase_names: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"lowercase_names": self.lowercase_names}

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> CallConfig:
        return cls(lowercase_names=bool(obj.get("lowercase_names", True)))

    @classmethod
    def from_obj(cls, obj: Union[None, dict[str, Any], CallConfig]) -> CallConfig:
        if obj is None:
            return cls()
        if isinstance(obj, dict):
            return cls.from_dict(obj)
        return obj
