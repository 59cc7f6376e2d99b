# app/main.py
from fastapi import FastAPI
from contextlib import asynccontextmanager
from .db import Base, engine, SessionLocal
from . import models  # noqa: F401  (registers tables on Base.metadata)
from .errors import install_error_handlers
from .logging_config import log_event
from .seed import seed_demo_data
from .settings import get_settings
from .routes import applicants, applications, ops, relations, schemes

settings = get_settings()


def _ensure_db_ready() -> None:
    Base.metadata.create_all(bind=engine)


# Run schema init at import time so pytest cannot bypass it
_ensure_db_ready()


@asynccontextmanager
async def lifespan(app: FastAPI):
    _ensure_db_ready()

    if settings.SEED_DEMO_DATA:
        db = SessionLocal()
        try:
            seed_demo_data(db)
        finally:
            db.close()

    log_event("STARTUP", "service ready", {"version": settings.APP_VERSION, "env": settings.ENV})
    yield


app = FastAPI(title="Financial Assistance Schemes API", version=settings.APP_VERSION, lifespan=lifespan)
install_error_handlers(app)

app.include_router(applicants.router)
app.include_router(relations.router)
app.include_router(schemes.router)
app.include_router(applications.router)
app.include_router(ops.router)


@app.get("/")
def health():
    return {"status": "ok", "service": settings.APP_NAME}
