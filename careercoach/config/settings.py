"""
Application settings and configuration management.

Uses pydantic-settings for environment variable loading.
"""

from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from careercoach.core.errors import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "CareerCoach"
    app_version: str = "0.1.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # Primary model (Gemini generateContent API)
    gemini_api_key: str = ""
    gemini_api_url: str = (
        "https://generativelanguage.googleapis.com/v1beta/models/"
        "gemini-1.5-flash:generateContent"
    )
    gemini_temperature: float = 0.7
    gemini_top_k: int = 40
    gemini_top_p: float = 0.95
    gemini_max_output_tokens: int = 2048

    # Secondary models behind an AI gateway (chat-completions style)
    gateway_host: str = ""
    gateway_token: str = ""
    analysis_endpoint: str = "/serving-endpoints/openai-gpt/invocations"
    analysis_service_name: str = "OpenAI"
    drafting_endpoint: str = "/serving-endpoints/claude-sonnet/invocations"
    drafting_service_name: str = "Claude"

    # Hard per-call bound, applied on top of the HTTP client timeout
    model_timeout_seconds: float = 30.0

    # Use deterministic canned models instead of live endpoints
    use_mock_models: bool = False

    # Result cache (sizes and TTLs in seconds)
    cache_questions_max_size: int = 500
    cache_questions_write_ttl: int = 3600
    cache_questions_access_ttl: int = 1800
    cache_paths_max_size: int = 200
    cache_paths_write_ttl: int = 7200
    cache_paths_access_ttl: int = 3600
    cache_responses_max_size: int = 300
    cache_responses_write_ttl: int = 2700
    cache_responses_access_ttl: int = 1200

    # Background task queues
    general_queue_workers: int = 5
    general_queue_capacity: int = 25
    general_queue_drain_seconds: float = 60.0
    ai_queue_workers: int = 3
    ai_queue_capacity: int = 15
    ai_queue_drain_seconds: float = 120.0

    # Call monitoring
    slow_call_threshold_ms: int = 10000
    error_rate_threshold: float = 0.1
    service_base_costs: dict[str, int] = Field(
        default_factory=lambda: {"OpenAI": 100, "Claude": 150}
    )
    default_base_cost: int = 50
    cost_per_second: int = 10

    # Knowledge base enrichment. No external similarity-search backend is
    # wired; the bundled sample documents are used when enabled (always
    # with mock models).
    use_sample_knowledge_base: bool = False
    reference_doc_limit: int = 3

    # Langfuse observability
    langfuse_enabled: bool = False
    langfuse_secret_key: str = ""
    langfuse_public_key: str = ""
    langfuse_base_url: str = "https://cloud.langfuse.com"

    # CORS - stored as comma-separated string in env
    # Uses validation_alias to read from CORS_ORIGINS env var
    cors_origins_str: str = Field(
        default="http://localhost:3000,http://localhost:8000",
        validation_alias="cors_origins"
    )

    @computed_field
    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]

    def validate_model_credentials(self) -> None:
        """
        Fail fast when live models are selected without credentials.

        Raises:
            ConfigurationError: If a required key, host or URL is missing
        """
        if self.use_mock_models:
            return

        missing = []
        if not self.gemini_api_key:
            missing.append("GEMINI_API_KEY")
        if not self.gemini_api_url:
            missing.append("GEMINI_API_URL")
        if not self.gateway_host:
            missing.append("GATEWAY_HOST")
        if not self.gateway_token:
            missing.append("GATEWAY_TOKEN")

        if missing:
            raise ConfigurationError(
                f"Missing model configuration: {', '.join(missing)} "
                f"(set USE_MOCK_MODELS=true to run without live models)"
            )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
