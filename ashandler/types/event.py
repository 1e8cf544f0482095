from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from ashandler.helpers.fourcc import four_char_code_to_str
from ashandler.types.constants import K_ANY_TRANSACTION_ID, K_AUTO_GENERATE_RETURN_ID
from ashandler.types.descriptor import Descriptor


@dataclass
class AppleEvent:
    """
    One-shot Apple event addressed to a script.

    Attributes
    ----------
    target : Descriptor
        Address descriptor of the receiving process.
    event_class, event_id : int
        Four-character codes identifying the command.
    return_id, transaction_id : int
        Apple event bookkeeping identifiers.
    params : dict[int, Descriptor]
        Parameters keyed by four-character keyword.
    """

    target: Descriptor
    event_class: int
    event_id: int
    return_id: int = K_AUTO_GENERATE_RETURN_ID
    transaction_id: int = K_ANY_TRANSACTION_ID
    params: Dict[int, Descriptor] = field(default_factory=dict)

    def set_param(self, keyword: int, value: Descriptor) -> None:
        self.params[keyword] = value

    def param(self, keyword: int) -> Optional[Descriptor]:
        return self.params.get(keyword)

    def __repr__(self) -> str:
        params = ", ".join(
            f"{four_char_code_to_str(k)}={v!r}" for k, v in self.params.items()
        )
        return (
            f"AppleEvent({four_char_code_to_str(self.event_class)}/"
            f"{four_char_code_to_str(self.event_id)}, {params})"
        )
