from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .database import engine, Base
from .routers import projects, persistence, quantity

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("constructtrack")

# Create tables (handles new tables but won't add columns to existing ones)
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title=settings.APP_NAME,
    description="Construction project tracking: areas, work items, quantities and progress",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(projects.router, prefix="/api")
app.include_router(persistence.router, prefix="/api")
app.include_router(quantity.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "constructtrack"}


@app.on_event("startup")
def auto_load():
    """Restore the newest snapshot, or the demo project on a fresh database."""
    from .database import SessionLocal
    from .seed import default_projects
    from .snapshots import load_latest
    from .state import get_store
    store = get_store()
    db = SessionLocal()
    try:
        loaded = load_latest(db)
    except ValueError as e:
        logger.warning(f"Saved projects could not be restored: {e}")
        loaded = None
    finally:
        db.close()
    if loaded is not None:
        store.replace(loaded)
    elif settings.SEED_ON_EMPTY:
        logger.info("No saved projects, loading demo project")
        store.replace(default_projects())
