# site_backend/main.py

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
import uvicorn

from site_backend.api import auth, basic
from site_backend.config import Settings, get_settings
from site_backend.core.errors import register_error_handlers
from site_backend.core.storage import UPLOAD_URL_PREFIX
from site_backend.database import init_db, make_engine, make_session_factory


logger = logging.getLogger(__name__)


def configure_logging(level: str):
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Builds the application around one settings object. The engine and
    session factory hang off app.state so each app (and each test) owns its own.
    """
    settings = settings or get_settings()

    engine = make_engine(settings.database_url)
    # raises on an unreachable database; startup must not continue past it
    init_db(engine)
    os.makedirs(settings.upload_dir, exist_ok=True)

    app = FastAPI(title="Site Config Backend")
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    app.include_router(auth.router)
    app.include_router(basic.router)

    app.mount(
        f"/{UPLOAD_URL_PREFIX}",
        StaticFiles(directory=settings.upload_dir),
        name=UPLOAD_URL_PREFIX,
    )

    logger.info("Application ready, uploads served from %s", settings.upload_dir)
    return app


def main():
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
