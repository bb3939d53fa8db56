from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field
from sqlalchemy import Index

from consumer_integration.models.base import utcnow


class OrderEvent(SQLModel, table=True):
    __tablename__ = "order_event"
    __table_args__ = (
        # unconsumed rows in id order
        Index("ix_order_event_consumed_id", "consumed", "id"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)

    # no foreign key: events may arrive before the order is stored
    order_id: str = Field(index=True)
    event_type: str

    new_status: Optional[str] = Field(default=None)
    consumed: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utcnow)
