"""Runtime settings, overridable through ``LIVE_SEARCH_*`` environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="LIVE_SEARCH_")

    # Ollama model server
    ollama_host: str = "http://localhost:11434"
    default_model: str = "gemma3:1b"

    # public lookup endpoints
    duckduckgo_url: str = "https://api.duckduckgo.com/"
    wikipedia_url: str = "https://en.wikipedia.org/api/rest_v1/page/summary/"

    # None keeps httpx's default timeout
    timeout: float | None = None

    # messages folded into the chat prompt
    history_limit: int = 10


@lru_cache
def get_settings() -> Settings:
    return Settings()
