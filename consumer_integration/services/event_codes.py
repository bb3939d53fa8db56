"""
Translation of stored order events into the partner's status-code vocabulary.

Rules are evaluated in order and the first match wins. Kind-based rules come
before status-based ones: a ``created`` event that also carries a status is
still reported as PLACED.
"""

from typing import Callable, List, NamedTuple, Optional, Tuple

from consumer_integration.constants.order_status import (
    CANCELLED_STATUSES,
    CONCLUDED,
    CONFIRMED_STATUSES,
    DISPATCHED,
    READY_TO_PICKUP,
    OrderEventKind,
)

UNKNOWN_SHORT_CODE = "UNK"


class PartnerCode(NamedTuple):
    full_code: str
    short_code: str


Rule = Tuple[Callable[[OrderEventKind, str], bool], PartnerCode]

_RULES: List[Rule] = [
    (lambda kind, status: kind is OrderEventKind.CREATED,
     PartnerCode("PLACED", "PLC")),
    (lambda kind, status: kind is OrderEventKind.ORDER_DETAILS_REQUESTED,
     PartnerCode("ORDER_DETAILS_REQUESTED", "ODR")),
    (lambda kind, status: status in CONFIRMED_STATUSES,
     PartnerCode("CONFIRMED", "CFM")),
    (lambda kind, status: status in CANCELLED_STATUSES,
     PartnerCode("CANCELLED", "CAN")),
    (lambda kind, status: status == DISPATCHED,
     PartnerCode("DISPATCHED", "DSP")),
    (lambda kind, status: status == READY_TO_PICKUP,
     PartnerCode("READY_TO_PICKUP", "RTP")),
    (lambda kind, status: status == CONCLUDED,
     PartnerCode("CONCLUDED", "CON")),
]


def translate_event(event_type: str, new_status: Optional[str] = None) -> PartnerCode:
    kind = OrderEventKind(event_type)
    status = (new_status or "").lower()

    for matches, code in _RULES:
        if matches(kind, status):
            return code

    return PartnerCode((event_type or "").upper(), UNKNOWN_SHORT_CODE)
