# consumer_integration/services/polling_service.py

import logging
from typing import List, Sequence

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from consumer_integration.errors import StorageError
from consumer_integration.models.order_event import OrderEvent
from consumer_integration.schemas.polling_schemas import PolledEvent
from consumer_integration.services.event_codes import translate_event

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 10


def select_unconsumed(session: Session, max_size: int) -> Sequence[OrderEvent]:
    """Oldest unconsumed events first, skipping rows another poller holds."""
    statement = (
        select(OrderEvent)
        .where(OrderEvent.consumed == False)  # noqa: E712
        .order_by(OrderEvent.id)
        .limit(max_size)
        .with_for_update(skip_locked=True)
    )
    return session.exec(statement).all()


def mark_consumed(session: Session, event_ids: List[int]) -> set:
    """
    Flip consumed for the given ids and return the ids this call actually
    flipped. Rows already retired by a concurrent claim are not returned.
    """
    if not event_ids:
        return set()

    statement = (
        update(OrderEvent)
        .where(OrderEvent.id.in_(event_ids))
        .where(OrderEvent.consumed == False)  # noqa: E712
        .values(consumed=True)
        .returning(OrderEvent.id)
    )
    return set(session.exec(statement).scalars().all())


def to_polled_event(event: OrderEvent) -> PolledEvent:
    code = translate_event(event.event_type, event.new_status)
    return PolledEvent(
        id=str(event.id),
        order_id=event.order_id,
        created_at=event.created_at,
        full_code=code.full_code,
        short_code=code.short_code,
    )


def claim_batch(session: Session, max_size: int = DEFAULT_BATCH_SIZE) -> List[PolledEvent]:
    """
    Claim up to ``max_size`` unconsumed events for one polling cycle.

    Select and mark run in one transaction. If anything fails before the
    commit the events stay unconsumed and are handed out again on the next
    poll, so delivery is at-least-once.
    """
    try:
        events = select_unconsumed(session, max_size)
        claimed_ids = mark_consumed(session, [e.id for e in events])
        batch = [to_polled_event(e) for e in events if e.id in claimed_ids]
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception("Error claiming polling batch")
        raise StorageError(str(e)) from e

    if len(batch) < len(events):
        logger.info(f"Skipped {len(events) - len(batch)} events claimed by a concurrent poll")
    if batch:
        logger.info(f"Delivered {len(batch)} events (ids {batch[0].id}..{batch[-1].id})")

    return batch
