import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .auth.router import router as auth_router
from .core.config import Settings, get_settings
from .core.exceptions import register_exception_handlers
from .core.logging_config import configure_logging
from .images.router import router as images_router
from .movies.router import router as movies_router
from .users.router import router as users_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(title="myFlix API")
    app.state.settings = settings
    app.state.db = None
    app.state.storage = None

    @app.get("/")
    def read_root():
        return {"message": "Welcome to the myFlix API"}

    @app.get("/health", response_class=PlainTextResponse)
    def health():
        return "OK"

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(movies_router)
    app.include_router(images_router)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    logger.info("myFlix API ready")
    return app
