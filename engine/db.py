from __future__ import annotations
import os
from functools import lru_cache
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from dotenv import load_dotenv

load_dotenv()

class Settings:
    DATABASE_URL: str
    DIALECT: str
    LOG_LEVEL: str

    def __init__(self) -> None:
        # in-memory sqlite unless told otherwise; only used to verify generated DDL
        self.DATABASE_URL = os.getenv("DATABASE_URL", "sqlite://")
        self.DIALECT = os.getenv("DIALECT", "postgresql").lower()
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

@lru_cache
def get_settings() -> Settings:
    return Settings()

def make_engine(database_url: Optional[str] = None) -> Engine:
    url = database_url or get_settings().DATABASE_URL
    return create_engine(url, pool_pre_ping=True, future=True)
