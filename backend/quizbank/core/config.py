"""Application settings and configuration."""

from typing import Literal

from pydantic import Field, model_validator  # type: ignore
from pydantic_settings import BaseSettings, SettingsConfigDict  # type: ignore


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    ENV: Literal["dev", "staging", "prod", "test"] = Field(default="dev")
    PROJECT_NAME: str = Field(default="Question Bank Search API")

    # API
    API_PREFIX: str = Field(default="/v1")

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    # MongoDB
    MONGO_URL: str = Field(default="mongodb://localhost:27017")
    MONGO_DB_NAME: str = Field(default="quizbank")
    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = Field(default=5000, ge=1)

    # Collections
    QUESTIONS_COLLECTION: str = Field(default="questions")
    LOGIC_QUESTIONS_COLLECTION: str = Field(default="logicquestions")
    TOPICS_COLLECTION: str = Field(default="topics")
    LANGUAGES_COLLECTION: str = Field(default="languages")
    POSITIONS_COLLECTION: str = Field(default="positions")

    # Random sampling: match sets up to this size are shuffled in memory,
    # larger ones use the store's native sample primitive.
    RANDOM_SAMPLE_IN_MEMORY_THRESHOLD: int = Field(default=1000, ge=1)

    # Pagination
    DEFAULT_PAGE_SIZE: int = Field(default=20, ge=1)
    LOGIC_DEFAULT_PAGE_SIZE: int = Field(default=10, ge=1)
    MAX_PAGE_SIZE: int = Field(default=100, ge=1, le=100)

    @model_validator(mode="after")
    def check_page_sizes(self):
        """Default page sizes must fit under the cap."""
        if self.DEFAULT_PAGE_SIZE > self.MAX_PAGE_SIZE:
            raise ValueError("DEFAULT_PAGE_SIZE must be <= MAX_PAGE_SIZE")
        if self.LOGIC_DEFAULT_PAGE_SIZE > self.MAX_PAGE_SIZE:
            raise ValueError("LOGIC_DEFAULT_PAGE_SIZE must be <= MAX_PAGE_SIZE")
        return self


settings = Settings()
