from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .routers import takeoff

logger = logging.getLogger("takeoff")

app = FastAPI(
    title=settings.APP_NAME,
    description="Reinforcement takeoff and section geometry engine for steel rebar quotes",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(takeoff.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "rebar-takeoff"}


@app.on_event("startup")
def announce():
    logger.info("%s ready: stirrup cap %d per element, unit heuristics %s",
                settings.APP_NAME, settings.MAX_STIRRUPS,
                "on" if settings.UNIT_HEURISTICS_ENABLED else "off")
