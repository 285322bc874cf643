from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app_logger import get_logger, setup_logging
from config import Settings, get_settings
from seed import seed_sample_classes
from storage.base import DuplicateRecordError, RecordStore
from storage.memory import MemoryStore
from storage.sql import SqlStore

# --- IMPORT ROUTERS (APIs) ---
from routers import classes, dashboard, expenses, fees, performances, students

log = get_logger("main")


def build_store(settings: Settings) -> RecordStore:
    if settings.store_backend == "sql":
        log.info("Using SQL store at %s", settings.database_url)
        return SqlStore.from_url(settings.database_url)
    log.info("Using in-memory store")
    return MemoryStore()


# ==========================================
#   ERROR HANDLERS
# ==========================================
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request data", "errors": jsonable_encoder(exc.errors())},
    )


async def duplicate_error_handler(request: Request, exc: DuplicateRecordError):
    return JSONResponse(
        status_code=400,
        content={
            "detail": str(exc),
            "errors": [{"loc": ["body", exc.field], "msg": "already exists", "type": "unique"}],
        },
    )


async def unexpected_error_handler(request: Request, exc: Exception):
    # Details stay in the log, the caller only sees a generic message
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app(store: Optional[RecordStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)
    if store is None:
        store = build_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.seed_sample_classes:
            seed_sample_classes(app.state.store)
        yield
        app.state.store.close()

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.store = store

    # ==========================================
    #   CORS MIDDLEWARE
    # ==========================================
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(DuplicateRecordError, duplicate_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    # --- REGISTER ROUTERS ---
    app.include_router(students.router)
    app.include_router(fees.router)
    app.include_router(expenses.router)
    app.include_router(performances.router)
    app.include_router(classes.router)
    app.include_router(dashboard.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000)
