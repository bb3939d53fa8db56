from enum import Enum


class OrderEventKind(str, Enum):
    CREATED = "created"
    ORDER_DETAILS_REQUESTED = "order_details_requested"
    ORDER_DETAILS_SENT = "order_details_sent"
    STATUS_UPDATED = "status_updated"
    # any kind stored by a newer writer
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value == value.lower():
                    return member
        return cls.UNKNOWN


# partner status vocabulary, Portuguese aliases included
CONFIRMED_STATUSES = {"confirmed", "confirmado"}
CANCELLED_STATUSES = {"cancelled", "cancelado"}
DISPATCHED = "dispatched"
READY_TO_PICKUP = "ready_to_pickup"
CONCLUDED = "concluded"
