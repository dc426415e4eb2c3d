# usagechart/main.py
import logging
from fastapi import FastAPI

from usagechart.config import LOG_LEVEL
from usagechart.routers import usage

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Usage Chart API",
    version="0.1.0"
)

app.include_router(usage.router, prefix="/api/usage", tags=["usage"])
