from typing import List, Optional

from pydantic_settings import BaseSettings
from urllib.parse import quote_plus

class Settings(BaseSettings):
    env: str = "local"
    log_level: str = "INFO"

    postgres_user: str = "postgres"
    postgres_password: str = ""
    postgres_db: str = "postgres"
    postgres_host: str = "localhost"
    postgres_port: str = "5432"

    # full SQLAlchemy URL, wins over the postgres_* fields when set
    sqlalchemy_database_url: Optional[str] = None

    api_token: str
    token_header_aliases: List[str] = ["X-Api-Token", "X-Api-Key", "X-Access-Token"]
    token_query_param: str = "token"

    order_id_aliases: List[str] = ["Id", "id", "orderId", "order_id", "OrderId"]
    status_aliases: List[str] = ["status", "Status"]
    default_order_status: str = "PLACED"
    poll_batch_size: int = 10

    cors_origins: List[str] = ["*"]

    @property
    def database_url(self):
        if self.sqlalchemy_database_url:
            return self.sqlalchemy_database_url
        encoded_password = quote_plus(self.postgres_password)
        return (
            f"postgresql+psycopg2://{self.postgres_user}:"
            f"{encoded_password}@{self.postgres_host}:"
            f"{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def is_development(self) -> bool:
        return self.env == "development"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "allow"

settings = Settings()
