from sqlmodel import SQLModel, Field
from typing import Any, Optional
from datetime import datetime

from sqlalchemy import Column, JSON
from sqlalchemy.dialects.postgresql import JSONB

from consumer_integration.models.base import utcnow


class Order(SQLModel, table=True):
    __tablename__ = "consumer_order"

    # partner-assigned identifier
    id: str = Field(primary_key=True)

    # latest partner document, replaced wholesale on every submission
    payload: dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False),
    )
    status: Optional[str] = Field(default=None, index=True)

    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: datetime = Field(default_factory=utcnow)
