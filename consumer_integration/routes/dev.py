import random
from datetime import datetime, timezone
import time

from fastapi import APIRouter, Depends
from sqlmodel import Session

from consumer_integration.database import get_session
from consumer_integration.schemas.orders_schemas import SampleOrderResponse
from consumer_integration.services.order_service import submit_order_details

router = APIRouter()


def build_sample_order() -> dict:
    stamp = int(time.time() * 1000)
    return {
        "id": f"TEST-{stamp}",
        "orderType": "DELIVERY",
        "displayId": str(random.randint(0, 9999)),
        "salesChannel": "PARTNER",
        "createdAt": datetime.now(timezone.utc).isoformat(),
        "merchant": {"id": "2eff44c8-ff06-4507-8233-e3f72c4e59af", "name": "Test - Consumer Integration"},
        "items": [{
            "id": f"ITEM-{stamp}",
            "name": "Test Pizza",
            "externalCode": "112",
            "quantity": 1,
            "unitPrice": 35.00,
            "totalPrice": 35.00,
        }],
        "total": {"itemsPrice": 35.00, "deliveryFee": 5.00, "orderAmount": 40.00},
        "customer": {"id": f"CUSTOMER-{stamp}", "name": "Test Customer", "phone": {"number": "11999999999"}},
        "payments": {"methods": [{"method": "CREDIT", "type": "ONLINE", "value": 40.00}], "prepaid": 40.00, "pending": 0},
        "delivery": {
            "mode": "DEFAULT",
            "deliveredBy": "MERCHANT",
            "deliveryAddress": {
                "streetName": "Rua Teste", "streetNumber": "123",
                "neighborhood": "Bairro Teste", "city": "São Paulo",
                "state": "SP", "postalCode": "01234-567", "country": "BR",
            },
        },
    }


@router.post("/orders", response_model=SampleOrderResponse)
def create_sample_order(session: Session = Depends(get_session)):
    """Store a fake partner order through the normal submission path."""
    order = submit_order_details(session, build_sample_order())
    return SampleOrderResponse(message="Test order created", order_id=order.id)
