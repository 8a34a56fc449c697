"""Configuration settings loaded from environment variables."""

from __future__ import annotations

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field


load_dotenv()


class Settings(BaseModel):
    """Application settings loaded from environment variables."""

    log_level: str = Field(default="INFO", description="Logging level")

    # Benchmark Configuration
    benchmark_iterations: int = Field(
        default=1000,
        gt=0,
        description="Evaluations per benchmark scenario",
    )
    benchmark_large_size: int = Field(
        default=1000,
        gt=0,
        description="Number of users in the large benchmark context",
    )
    benchmark_extreme_size: int = Field(
        default=10000,
        gt=0,
        description="Number of accounts in the extremely large benchmark context",
    )

    model_config = {"extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance loaded from environment."""
    return Settings(
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        benchmark_iterations=int(os.getenv("BENCHMARK_ITERATIONS", "1000")),
        benchmark_large_size=int(os.getenv("BENCHMARK_LARGE_SIZE", "1000")),
        benchmark_extreme_size=int(os.getenv("BENCHMARK_EXTREME_SIZE", "10000")),
    )
