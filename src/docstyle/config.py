"""Configuration management for Document Style Profiler."""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Generative backend (OpenAI-compatible chat completions)
    llm_base_url: Optional[str] = None
    llm_model: Optional[str] = None
    llm_api_key: Optional[str] = None
    llm_timeout: float = 60.0

    # Batch limits
    max_documents: int = 10
    max_file_size_mb: int = 20

    # Logging
    log_level: str = "INFO"

    @property
    def llm_configured(self) -> bool:
        """Whether both backend URL and model are set."""
        return bool(self.llm_base_url and self.llm_model)

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
