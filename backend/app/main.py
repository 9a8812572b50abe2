from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import health
from app.core.config import settings
from app.core.observability import configure_observability
from app.db.session import Base, engine
from app.domains.timesheets.router import router as timesheets_router
from timesheet.logging import configure_logging, get_logger

configure_logging(settings.log_level, json_output=True)
configure_observability()
logger = get_logger(__name__)

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(origin) for origin in settings.cors_origins] or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(timesheets_router)


@app.on_event("startup")
def startup_event() -> None:
    if settings.create_schema:
        Base.metadata.create_all(bind=engine)
    logger.info("startup_complete", env=settings.env)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "Timesheet API running", "environment": settings.env}
