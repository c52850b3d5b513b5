# app/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api import ROUTERS
from app.data.database import Base, init_db
from app.data.seed import seed
from app.utils.settings import SEED_CATALOG
from app.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Initializing database...")
    try:
        init_db()
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    logger.info(f"Tables ready: {sorted(Base.metadata.tables.keys())}")

    if SEED_CATALOG:
        seed()

    yield


async def validation_error_handler(request: Request, exc: RequestValidationError):
    # zly ksztalt requestu to 400 InvalidInput, tak jak bledy walidacji w serwisach
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


def create_app() -> FastAPI:
    app = FastAPI(
        title="Joyville Store API",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_exception_handler(RequestValidationError, validation_error_handler)

    for router in ROUTERS:
        app.include_router(router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
