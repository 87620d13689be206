import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from core import settings
from core.db import Database
from core.errors import register_error_handlers
from core.log import setup_logging
from core.responses import MessageResponse
from users.repository import UserRepository
from users.router import router as users_router

ROOT_MESSAGE = "Hello World from Python"

# uvicorn exposes no header-read timeout; keep-alive is the nearest bound.
HEADER_READ_TIMEOUT_S = 10

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Open the DB pool once per process; any failure aborts startup.
    try:
        database = await Database.connect(settings.database_url(), ssl=settings.ssl_mode())
    except Exception as exc:
        logger.error("db_connect_failed host=%s detail=%s", settings.db_host(), exc)
        raise
    app.state.user_repository = UserRepository(database)
    try:
        yield
    finally:
        app.state.user_repository = None
        await database.close()


def create_app() -> FastAPI:
    # No docs/openapi routes: every path outside the three below is a 404.
    app = FastAPI(lifespan=lifespan, docs_url=None, redoc_url=None, openapi_url=None)
    register_error_handlers(app)
    app.include_router(users_router, tags=["users"])

    @app.get("/", response_model=MessageResponse)
    async def root() -> MessageResponse:
        return MessageResponse(message=ROOT_MESSAGE)

    return app


app = create_app()


def run() -> None:
    setup_logging(settings.log_level())
    port = settings.http_port()
    logger.info("Server listening on :%s", port)
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port,
        log_config=None,
        timeout_keep_alive=HEADER_READ_TIMEOUT_S,
    )


if __name__ == "__main__":
    run()
