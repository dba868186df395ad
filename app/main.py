import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

from app.config import CORS_ORIGINS, HOST, PORT
from app.database import init_database, verify_tables
from app.routers import health, info, regions

logger = logging.getLogger(__name__)


def create_app(engine: Optional[Engine] = None) -> FastAPI:
    """
    Build the API. With no engine given, one is created from the DB_*
    environment at startup; either way the four tables are checked before
    the first request is served.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if engine is None:
            app.state.engine = init_database()
        else:
            verify_tables(engine)
            app.state.engine = engine
        try:
            yield
        finally:
            if engine is None:
                app.state.engine.dispose()
                logger.info("Database connection closed")

    app = FastAPI(title="Wilayah Indonesia API", version="1.0.0", lifespan=lifespan)

    # CORS setup
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(info.router, tags=["Info"])
    app.include_router(regions.router, tags=["Regions"])
    app.include_router(health.router, prefix="/health", tags=["Health"])
    return app


app = create_app()


def run():
    logger.info("Starting server on %s:%s", HOST, PORT)
    uvicorn.run("app.main:app", host=HOST, port=PORT)


if __name__ == "__main__":
    run()
