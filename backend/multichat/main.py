from contextlib import asynccontextmanager

from fastapi import FastAPI

from multichat.core.config import settings
from multichat.core.context import AppContext, build_app_context
from multichat.core.errors import register_exception_handlers
from multichat.core.logging import setup_logging
from multichat.middleware.cors import setup_cors
from multichat.modules.chatbot.router import router as chatbot_router
from multichat.modules.models.router import router as models_router
from multichat.modules.settings.router import router as settings_router

setup_logging()


def create_app(context: AppContext | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "context", None) is None:
            app.state.context = build_app_context(settings)
        try:
            yield
        finally:
            app.state.context.close()

    app = FastAPI(title="Multi-Model Chat API", lifespan=lifespan)
    app.state.context = context

    setup_cors(app)
    register_exception_handlers(app)

    app.include_router(chatbot_router)
    app.include_router(models_router)
    app.include_router(settings_router)
    return app


app = create_app()
