import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from task_tracker import bootstrap
from task_tracker.api import router
from task_tracker.config import Settings
from task_tracker.errors import FatalStartupError, install_error_handlers

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, store=None) -> FastAPI:
    """
    Build the API. When a store is given it is used as-is and no connection
    is made; otherwise Firestore is connected and seeded during lifespan
    startup and closed at shutdown.
    """
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if store is not None:
            yield
            return
        app.state.store = await asyncio.to_thread(bootstrap.start, settings)
        try:
            yield
        finally:
            try:
                await asyncio.to_thread(bootstrap.disconnect, app.state.store)
            except FatalStartupError as e:
                logger.error(str(e))
                app.state.clean_shutdown = False

    app = FastAPI(title="Task Tracker", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.state.clean_shutdown = True

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.allowed_origin],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        allow_credentials=True,
    )
    install_error_handlers(app)
    app.include_router(router)
    return app


app = create_app()
