"""Application settings loaded from environment variables via pydantic-settings.

Values come from (highest priority first) real environment variables, then
a ``.env`` file in the working directory, then the defaults below.  Field
``tmdb_api_key`` maps to ``TMDB_API_KEY`` and so on.

An empty credential means "not configured": without ``TMDB_API_KEY`` every
catalog call fails with a configuration error, and without
``OPENAI_API_KEY`` the assistant answers with its deterministic summary.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """cineAssist application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === Movie catalog (TMDB) ===
    tmdb_api_key: str = ""
    tmdb_base_url: str = "https://api.themoviedb.org/3"
    primary_locale: str = "pt-BR"
    fallback_locale: str = "en-US"

    # === Text completion (optional) ===
    openai_api_key: str = ""
    openai_base_url: str = ""  # OpenAI-compatible endpoint (TogetherAI, Groq, ...)
    openai_text_model: str = ""

    # === Cache ===
    cache_ttl_seconds: int = 300
    cache_max_size: int = 1000

    # === Search & assistant ===
    search_page_size: int = 20
    assistant_batch_size: int = 3
    # Upstream pages gathered per cascade stage before local pagination.
    cascade_max_pages: int = 3
    completion_max_chars: int = 280
    stream_chunk_delay: float = 0.03

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 5000
    app_env: str = "development"
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    def completion_enabled(self) -> bool:
        """Return ``True`` when a text-completion credential is configured."""
        return bool(self.openai_api_key)
