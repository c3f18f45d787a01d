import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .db import Base, engine, ensure_schema
from .logging_setup import setup_logging
from .settings import settings
from .routers import health
from .routers import coldcall
from .routers import rca
from .routers import progress
from . import models  # noqa: F401  (registers tables on Base.metadata)

logger = logging.getLogger(__name__)

app = FastAPI(title="Praxy API")
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
app.include_router(health.router, prefix="/api")
app.include_router(coldcall.router, prefix="/api")
app.include_router(rca.router, prefix="/api")
app.include_router(progress.router, prefix="/api")


@app.get("/api/ping")
def ping():
	return {"message": "Pong!"}


@app.on_event("startup")
async def startup_event():
	setup_logging(settings.log_level, settings.log_file)
	# Initialize DB schema
	Base.metadata.create_all(bind=engine)
	# Apply lightweight dev migrations
	try:
		ensure_schema()
	except Exception:
		logger.exception("Schema migration failed")
	logger.info("Praxy API started (AI scoring %s)", "enabled" if settings.openrouter_api_key else "disabled")
