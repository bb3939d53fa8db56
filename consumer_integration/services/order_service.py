# consumer_integration/services/order_service.py

import logging
from typing import Any, Iterable, Optional

from sqlalchemy import case
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from consumer_integration.config import settings
from consumer_integration.constants.order_status import OrderEventKind
from consumer_integration.errors import NotFoundError, StorageError, ValidationError
from consumer_integration.models.base import utcnow
from consumer_integration.models.order import Order
from consumer_integration.services.order_event_service import log_order_event

logger = logging.getLogger(__name__)

ORDER_NOT_FOUND = "Order not found"

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def resolve_field(document: dict[str, Any], aliases: Iterable[str]) -> Optional[str]:
    """First non-empty value among ``aliases``, in priority order."""
    for alias in aliases:
        value = document.get(alias)
        if value is None:
            continue
        value = str(value).strip()
        if value:
            return value
    return None


def upsert_order(
    session: Session,
    order_id: str,
    payload: dict[str, Any],
    proposed_status: Optional[str] = None,
) -> bool:
    """
    Insert the order or merge a re-submission into it.

    The payload always replaces the stored one. The status is only written
    when none is stored yet, so a replayed submission never reverts a status
    change. Returns True when the order did not exist before.
    """
    dialect = session.get_bind().dialect.name
    insert = _UPSERT_DIALECTS.get(dialect)
    if insert is None:
        raise StorageError(f"Upsert not supported on dialect {dialect}")

    existed = session.get(Order, order_id) is not None
    now = utcnow()

    statement = insert(Order).values(
        id=order_id,
        payload=payload,
        status=proposed_status or settings.default_order_status,
        created_at=now,
        updated_at=now,
    )
    statement = statement.on_conflict_do_update(
        index_elements=[Order.id],
        set_={
            "payload": statement.excluded.payload,
            "status": case(
                (Order.status.is_(None), statement.excluded.status),
                else_=Order.status,
            ),
            "updated_at": statement.excluded.updated_at,
        },
    )
    session.exec(statement)
    # the identity map copy, if any, is stale after the raw statement
    session.expire_all()

    return not existed


def submit_order_details(session: Session, document: dict[str, Any]) -> Order:
    order_id = resolve_field(document, settings.order_id_aliases)
    if order_id is None:
        raise ValidationError("Order id is required")

    proposed_status = resolve_field(document, settings.status_aliases)

    try:
        created = upsert_order(session, order_id, document, proposed_status)
        order = session.get(Order, order_id)
        if created:
            log_order_event(session, order_id, OrderEventKind.CREATED, new_status=order.status)
        else:
            # no status: a re-submission must not replay a status code to the partner
            log_order_event(session, order_id, OrderEventKind.ORDER_DETAILS_SENT)
        session.commit()
        session.refresh(order)
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception(f"Error saving details for order {order_id}")
        raise StorageError(str(e)) from e

    logger.info(f"Order {order_id} details stored ({'created' if created else 'updated'}), status {order.status}")
    return order


def get_order_details(session: Session, order_id: str) -> dict[str, Any]:
    """
    Return the stored partner document.

    Every successful read appends an ORDER_DETAILS_REQUESTED event, even for
    repeated reads of the same order.
    """
    try:
        order = session.get(Order, order_id)
        if not order:
            raise NotFoundError(ORDER_NOT_FOUND, extra={"item": None})

        payload = order.payload
        log_order_event(session, order_id, OrderEventKind.ORDER_DETAILS_REQUESTED)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception(f"Error fetching order {order_id}")
        raise StorageError(str(e), extra={"item": None}) from e

    return payload


def update_order_status(
    session: Session,
    order_id: Optional[str],
    new_status: Optional[str],
    justification: Optional[str] = None,
) -> str:
    """Authoritative status change; not subject to the upsert merge rule."""
    if not order_id or not new_status:
        raise ValidationError("orderId and status are required")

    try:
        order = session.get(Order, order_id)
        if not order:
            raise NotFoundError(ORDER_NOT_FOUND)

        order.status = new_status
        order.updated_at = utcnow()
        session.add(order)

        log_order_event(session, order_id, OrderEventKind.STATUS_UPDATED, new_status=new_status)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception(f"Error updating status of order {order_id}")
        raise StorageError(str(e)) from e

    logger.info(f"Order {order_id} status changed to {new_status}")
    return f"{order_id} changed to '{new_status}': {justification or 'Status updated'}."
