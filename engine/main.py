# engine/main.py
# uvicorn engine.main:app
from __future__ import annotations
import logging

from engine.app_factory import create_app
from engine.db import get_settings

settings = get_settings()
logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL, logging.INFO))
logger = logging.getLogger("engine.main")

app = create_app()
logger.info("Codegen service ready (default dialect=%s)", settings.DIALECT)
