from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Used by the daily verse scheduler

    # LLM providers
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    llm_provider: str = "anthropic"  # preferred provider when a language has no preference available
    openai_model: str = "gpt-4o-mini"
    anthropic_model: str = "claude-3-5-haiku-20241022"
    anthropic_multilingual_model: str = "claude-3-5-sonnet-20241022"  # Hindi and Malayalam
    llm_timeout_seconds: int = 60
    use_mock_llm: bool = False

    # Study generation rate limits (fixed windows)
    anonymous_rate_limit: int = 1
    anonymous_window_minutes: int = 480
    authenticated_rate_limit: int = 5
    authenticated_window_minutes: int = 60

    # Anonymous sessions
    anonymous_session_ttl_hours: int = 24

    # Daily verse
    daily_verse_cache_days: int = 7
    daily_verse_history_days: int = 30
    daily_verse_scheduler_enabled: bool = False
    daily_verse_check_interval_seconds: int = 3600

    # App
    app_name: str = "disciplefy-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
        extra="ignore"
    )


settings = Settings()
