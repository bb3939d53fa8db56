# consumer_integration/services/order_event_service.py

import logging
from typing import Optional, Union
from sqlmodel import Session
from consumer_integration.constants.order_status import OrderEventKind
from consumer_integration.models.order_event import OrderEvent

logger = logging.getLogger(__name__)


def log_order_event(
    session: Session,
    order_id: str,
    kind: Union[OrderEventKind, str],
    new_status: Optional[str] = None,
) -> OrderEvent:
    """
    Append-only event log read by the polling endpoint.

    The row joins the caller's transaction; it becomes visible to pollers
    when the caller commits together with any order mutation.
    """

    event_type = kind.value if isinstance(kind, OrderEventKind) else kind

    event = OrderEvent(
        order_id=order_id,
        event_type=event_type,
        new_status=new_status,
    )

    session.add(event)
    session.flush()

    logger.info(f"Order event {event.id} appended: {event_type} for order {order_id}")
    return event
