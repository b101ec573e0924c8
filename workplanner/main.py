"""WorkPlanner FastAPI application"""
import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from workplanner.api.v1 import api_router
from workplanner.auth import get_password_hash
from workplanner.config import settings
from workplanner.database import Base, SessionLocal, engine
from workplanner.logging_config import configure_logging
from workplanner.models import User, UserRole
from workplanner.workflow.errors import WorkflowError

logger = logging.getLogger(__name__)


def seed_default_admin(db) -> None:
    email = settings.DEFAULT_ADMIN_EMAIL.lower()
    if db.query(User).filter(User.email == email).first():
        return

    db.add(
        User(
            email=email,
            first_name="Admin",
            last_name="User",
            password_hash=get_password_hash(settings.DEFAULT_ADMIN_PASSWORD),
            role=UserRole.ADMIN,
        )
    )
    db.commit()
    logger.info("Seeded default admin %s", email)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    Base.metadata.create_all(bind=engine)
    if settings.SEED_DEFAULT_ADMIN:
        db = SessionLocal()
        try:
            seed_default_admin(db)
        finally:
            db.close()
    logger.info("%s %s started", settings.APP_NAME, settings.APP_VERSION)
    yield


app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION, lifespan=lifespan)


@app.exception_handler(WorkflowError)
async def workflow_error_handler(request: Request, exc: WorkflowError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message, "code": exc.code})


@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    response.headers["X-Request-ID"] = request_id
    logger.info(
        "%s %s %s -> %s (%.1f ms)",
        request_id,
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


app.include_router(api_router)


@app.get("/health")
def health():
    return {"status": "ok", "app": settings.APP_NAME, "version": settings.APP_VERSION}


def run() -> None:
    import uvicorn

    uvicorn.run("workplanner.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)


if __name__ == "__main__":
    run()
