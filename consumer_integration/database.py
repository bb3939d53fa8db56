from sqlmodel import SQLModel, create_engine, Session
from consumer_integration.config import settings


def _connect_args(url: str) -> dict:
    # FastAPI runs sync endpoints in a threadpool
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.database_url,
    echo=False,
    pool_pre_ping=True,      # checks dead connections
    pool_recycle=1800,       # refresh every 30 min
    connect_args=_connect_args(settings.database_url),
)


def create_db_and_tables():
    from consumer_integration.models import order, order_event
    SQLModel.metadata.create_all(engine)


def get_session():
    with Session(engine) as session:
        yield session
