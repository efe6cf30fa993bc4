# barbershop/main.py

from contextlib import asynccontextmanager

from fastapi import FastAPI

from .config import LOG_LEVEL, PROJECT_NAME
from .db import init_db
from .logging_config import setup_logging
from .routers import operations_routes, users_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    setup_logging(LOG_LEVEL)

    app = FastAPI(title=PROJECT_NAME, lifespan=lifespan)

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    app.include_router(operations_routes.router)
    app.include_router(users_routes.router)
    return app


app = create_app()
