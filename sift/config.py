from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sift.constants import (
    CODE_FETCH_COUNT,
    CODE_SEARCH_LIMIT,
    DEFAULT_TOP_N,
    PARALLEL_DEFAULT_PROCESSOR,
    PARALLEL_MAX_CHARS,
    PARALLEL_MAX_RESULTS,
    PARALLEL_MIN_CHARS,
    PARALLEL_PROCESSORS,
    REQUEST_TIMEOUT,
    RESEARCH_DIR,
)
from sift.logging import LOG_LEVELS


class Config(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SIFT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_assignment=True,
        populate_by_name=True,
    )

    # API keys - standard env vars, no prefix
    github_token: str | None = Field(default=None, alias="GITHUB_TOKEN")
    parallel_api_key: str | None = Field(default=None, alias="PARALLEL_API_KEY")

    # Saved reports land in research_dir/<github|parallel>/
    research_dir: Path = Path(RESEARCH_DIR)

    log_level: str = "WARNING"
    request_timeout: float = REQUEST_TIMEOUT

    # Code search
    code_search_limit: int = CODE_SEARCH_LIMIT
    top_n: int = DEFAULT_TOP_N
    fetch_count: int = CODE_FETCH_COUNT

    # Web search
    processor: str = PARALLEL_DEFAULT_PROCESSOR
    max_results: int = PARALLEL_MAX_RESULTS
    max_chars: int = PARALLEL_MAX_CHARS

    @field_validator("processor")
    @classmethod
    def _validate_processor(cls, v: str) -> str:
        if v not in PARALLEL_PROCESSORS:
            raise ValueError(f"Invalid processor: {v}. Must be one of: {', '.join(PARALLEL_PROCESSORS)}")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        level = str(v).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("max_chars")
    @classmethod
    def _validate_max_chars(cls, v: int) -> int:
        if v < PARALLEL_MIN_CHARS:
            raise ValueError(f"max_chars must be at least {PARALLEL_MIN_CHARS}, got {v}")
        return v

    @field_validator("top_n", "code_search_limit", "max_results")
    @classmethod
    def _validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"must be at least 1, got {v}")
        return v

    @property
    def github_reports_dir(self) -> Path:
        return self.research_dir / "github"

    @property
    def parallel_reports_dir(self) -> Path:
        return self.research_dir / "parallel"
