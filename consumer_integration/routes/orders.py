from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlmodel import Session

from consumer_integration.config import settings
from consumer_integration.database import get_session
from consumer_integration.schemas.orders_schemas import OrderDetailResponse, PartnerResponse
from consumer_integration.services.order_service import (
    get_order_details,
    resolve_field,
    submit_order_details,
    update_order_status,
)

router = APIRouter()


@router.get("/{order_id}", response_model=OrderDetailResponse)
def order_details(
    order_id: str,
    session: Session = Depends(get_session),
):
    return OrderDetailResponse(item=get_order_details(session, order_id))


@router.post("/details", response_model=PartnerResponse)
def receive_order_details(
    document: dict[str, Any] = Body(...),
    session: Session = Depends(get_session),
):
    order = submit_order_details(session, document)
    return PartnerResponse(reason_phrase=f"{order.id} sent successfully.")


@router.post("/status", response_model=PartnerResponse)
def change_order_status(
    body: dict[str, Any] = Body(...),
    session: Session = Depends(get_session),
):
    message = update_order_status(
        session,
        order_id=resolve_field(body, settings.order_id_aliases),
        new_status=resolve_field(body, settings.status_aliases),
        justification=body.get("justification"),
    )
    return PartnerResponse(reason_phrase=message)
