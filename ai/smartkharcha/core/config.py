"""Application configuration using Pydantic Settings."""

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_KB_PATH = Path(__file__).resolve().parent.parent / "data" / "seed_kb.json"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    env: str = "dev"

    # Admin API Security
    api_key: str = "dev-secret"

    # LLM Provider
    llm_provider: Literal["openai", "ollama"] = "openai"
    llm_timeout_seconds: float = 30.0
    llm_temperature: float = 0.0
    llm_max_tokens: int = 800

    # OpenAI-compatible endpoint (set base url for Groq and similar gateways)
    openai_api_key: str = ""
    openai_base_url: str = ""
    openai_chat_model: str = "gpt-4o-mini"
    openai_vision_model: str = "gpt-4o-mini"

    # Ollama
    ollama_model: str = "llama3"
    ollama_host: str = "http://localhost:11434"

    # Knowledge base
    kb_path: Path = DEFAULT_KB_PATH
    max_prompt_docs: int = 5

    # Advice rules
    cover_multiplier: int = 10

    # HTTP
    rate_limit: str = "30/minute"

    # Logging
    log_level: str = "INFO"

    @property
    def is_local_llm(self) -> bool:
        """Check if using local LLM."""
        return self.llm_provider == "ollama"


# Global settings instance
settings = Settings()
