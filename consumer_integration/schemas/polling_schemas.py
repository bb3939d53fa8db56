from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PolledEvent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    order_id: str = Field(alias="orderId")
    created_at: datetime = Field(alias="createdAt")
    full_code: str = Field(alias="fullCode")
    short_code: str = Field(alias="shortCode")


class PollingResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    items: List[PolledEvent]
    status_code: int = Field(default=0, alias="statusCode")
    reason_phrase: Optional[str] = Field(default=None, alias="reasonPhrase")
