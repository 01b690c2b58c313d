import os
import sys
from dataclasses import dataclass

from loguru import logger

STORE_BACKENDS = ("postgres", "memory")


@dataclass
class Settings:
    secret_key: str = "dev-secret-key-change-in-production"
    token_expiry_days: int = 30
    database_host: str = "localhost"
    database_port: int = 5432
    database_user: str = "postgres"
    database_password: str = "postgres"
    database_name: str = "postgres"
    store_backend: str = "postgres"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls):
        """Build settings from the process environment (call load_dotenv() first)."""
        backend = os.getenv("TASKBOARD_STORE", "postgres").strip().lower()
        if backend not in STORE_BACKENDS:
            raise ValueError(f"Unknown TASKBOARD_STORE: {backend}")
        return cls(
            secret_key=os.getenv("SECRET_KEY", cls.secret_key),
            token_expiry_days=int(os.getenv("TOKEN_EXPIRY_DAYS", cls.token_expiry_days)),
            database_host=os.getenv("DATABASE_HOST", cls.database_host),
            database_port=int(os.getenv("DATABASE_PORT", cls.database_port)),
            database_user=os.getenv("DATABASE_USER", cls.database_user),
            database_password=os.getenv("DATABASE_PASSWORD", cls.database_password),
            database_name=os.getenv("DATABASE_NAME", cls.database_name),
            store_backend=backend,
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
        )

    def connection_params(self):
        return {
            "host": self.database_host,
            "port": self.database_port,
            "user": self.database_user,
            "password": self.database_password,
            "dbname": self.database_name,
        }


def configure_logging(settings):
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level)
