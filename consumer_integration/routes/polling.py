from fastapi import APIRouter, Depends
from sqlmodel import Session

from consumer_integration.config import settings
from consumer_integration.database import get_session
from consumer_integration.errors import StorageError
from consumer_integration.schemas.polling_schemas import PollingResponse
from consumer_integration.services.polling_service import claim_batch

router = APIRouter()


@router.get("/polling", response_model=PollingResponse)
def poll_events(session: Session = Depends(get_session)):
    """Hand out the oldest unconsumed events and retire them."""
    try:
        items = claim_batch(session, settings.poll_batch_size)
    except StorageError as e:
        e.extra.setdefault("items", [])
        raise

    return PollingResponse(items=items)
