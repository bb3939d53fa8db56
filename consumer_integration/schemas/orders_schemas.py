from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class PartnerResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(default=0, alias="statusCode")
    reason_phrase: Optional[str] = Field(default=None, alias="reasonPhrase")


class OrderDetailResponse(PartnerResponse):
    item: Optional[dict[str, Any]] = None


class SampleOrderResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    order_id: str = Field(alias="orderId")
