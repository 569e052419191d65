# liftoff/main.py
import time
import logging
import uuid
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from liftoff.db import Database
from liftoff.errors import LiftoffError, StorageError, ValidationError
from liftoff.settings import Settings, get_settings
from liftoff.routers.auth import router as auth_router
from liftoff.routers.workouts import router as workouts_router
from liftoff.routers.exercises import router as exercises_router
from liftoff.routers.sessions import router as sessions_router
from liftoff.routers.exercise_sets import router as exercise_sets_router
from liftoff.routers.progress import router as progress_router

log = logging.getLogger("uvicorn")

OPENAPI_TAGS = [
    {"name": "auth", "description": "Registration & login"},
    {"name": "workouts", "description": "Workout plans"},
    {"name": "exercises", "description": "Planned exercises per workout"},
    {"name": "sessions", "description": "Live and completed workout sessions"},
    {"name": "sets", "description": "Exercise sets per session exercise"},
    {"name": "progress", "description": "Max weight and volume per exercise and day"},
]

@asynccontextmanager
async def lifespan(app: FastAPI):
    # backend is picked once here and kept for the life of the process
    database = Database.connect(app.state.settings)
    app.state.database = database
    log.info("liftoff ready env=%s backend=%s", app.state.settings.ENV, database.backend.name)
    try:
        yield
    finally:
        database.close()

def _error_response(exc: LiftoffError) -> JSONResponse:
    body = {"detail": exc.message}
    if isinstance(exc, ValidationError):
        body["field"] = exc.field
    return JSONResponse(status_code=exc.status_code, content=body)

def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        log.error("storage failure on %s %s: %s", request.method, request.url.path, exc.message,
                  exc_info=exc.__cause__ or exc)
        return JSONResponse(status_code=exc.status_code, content={"detail": "Storage unavailable"})

    @app.exception_handler(LiftoffError)
    async def liftoff_error_handler(request: Request, exc: LiftoffError):
        return _error_response(exc)

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
        log.error("storage failure on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=503, content={"detail": "Storage unavailable"})

def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Liftoff API", version=settings.API_VERSION, openapi_tags=OPENAPI_TAGS, lifespan=lifespan)
    app.state.settings = settings

    # CORS (relax for local dev; tighten origins in prod via env)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOW_ORIGINS.split(","),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_request_id_and_log(request: Request, call_next):
        req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        response.headers["X-Request-ID"] = req_id
        log.info("rid=%s %s %s -> %s in %.1fms",
                 req_id, request.method, request.url.path, response.status_code, duration_ms)
        return response

    register_error_handlers(app)

    @app.get("/")
    def root():
        return {"ok": True, "name": "Liftoff API"}

    @app.get("/ping")
    def ping():
        return {"pong": True}

    @app.get("/healthz")
    def healthz(request: Request):
        # Quick DB sanity check
        try:
            database = request.app.state.database
            database.ping()
            return {"status": "ok", "backend": database.backend.name}
        except Exception as e:
            return {"status": "degraded", "error": str(e)}

    @app.get("/version")
    def version():
        return {"version": settings.API_VERSION}

    # Routers
    app.include_router(auth_router)
    app.include_router(workouts_router)
    app.include_router(exercises_router)
    app.include_router(sessions_router)
    app.include_router(exercise_sets_router)
    app.include_router(progress_router)
    return app

app = create_app()
