from pathlib import Path

from pydantic_settings import BaseSettings
from dotenv import load_dotenv

ENV_FILE = Path(__file__).resolve().parents[3] / ".env"
load_dotenv(dotenv_path=ENV_FILE)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)


class Settings(BaseSettings):
    # Provider keys (a missing key fails the model call, not startup)
    OPENAI_API_KEY: str = ""
    ANTHROPIC_API_KEY: str = ""
    GOOGLE_API_KEY: str = ""
    XAI_API_KEY: str = ""

    # Model calls
    LLM_MAX_TOKENS: int = 2000
    LLM_TIMEOUT_SECONDS: float = 30.0
    CHAT_SEARCH_MAX_RESULTS: int = 5

    # Web search (Custom Search API when both are set, DuckDuckGo otherwise)
    GOOGLE_SEARCH_API_KEY: str = ""
    GOOGLE_SEARCH_ENGINE_ID: str = ""
    WEB_SEARCH_TIMEOUT: float = 10.0
    WEB_SEARCH_USER_AGENT: str = DEFAULT_USER_AGENT

    # Conversation store (empty = in-memory)
    APP_DATABASE_URL: str = ""

    CORS_ORIGINS: str = "*"
    LOG_LEVEL: str = "INFO"

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def search_api_configured(self) -> bool:
        return bool(self.GOOGLE_SEARCH_API_KEY.strip() and self.GOOGLE_SEARCH_ENGINE_ID.strip())

    class Config:
        env_file = str(ENV_FILE)
        extra = "ignore"


settings = Settings()
