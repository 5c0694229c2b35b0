from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from multichat.core.config import settings


def setup_cors(app: FastAPI, origins: list[str] | None = None) -> None:
    allow_origins = (origins if origins is not None else settings.cors_origins) or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials="*" not in allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
