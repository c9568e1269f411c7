"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for data locations, the
fare schedule, search defaults and logging.

Configuration can be overridden via environment variables:
- METRO_GRAPH_DATA_DIR=/path/to/data
- METRO_GRAPH_SOURCE=csv
- METRO_FARE_CARD_DISCOUNT=0.8
- METRO_FARE_TIERS='[[4, 2], [8, 3]]'
- METRO_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .pricing.fare_calculator import (
    DEFAULT_CARD_DISCOUNT,
    DEFAULT_DAY_PASSES,
    DEFAULT_MAX_FARE,
    DEFAULT_TIERS,
    FareSchedule,
)


class GraphConfig(BaseSettings):
    """Graph data configuration.

    Environment variables prefixed with METRO_GRAPH_.
    """

    model_config = SettingsConfigDict(env_prefix="METRO_GRAPH_")

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent / "data"
    )
    data_file: str = "subway.txt"
    source: Literal["timetable", "csv"] = "timetable"

    @property
    def data_path(self) -> Path:
        """Full path to the network data file."""
        return self.data_dir / self.data_file


class FareConfig(BaseSettings):
    """Fare schedule configuration.

    Environment variables prefixed with METRO_FARE_.
    """

    model_config = SettingsConfigDict(env_prefix="METRO_FARE_")

    tiers: List[Tuple[float, float]] = Field(
        default_factory=lambda: [tuple(map(float, tier)) for tier in DEFAULT_TIERS]
    )
    max_fare: Optional[float] = DEFAULT_MAX_FARE
    card_discount: float = Field(default=DEFAULT_CARD_DISCOUNT, gt=0, le=1)
    day_passes: Dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_DAY_PASSES)
    )

    @field_validator("tiers")
    @classmethod
    def _tiers_ascending(cls, tiers: List[Tuple[float, float]]) -> List[Tuple[float, float]]:
        if not tiers:
            raise ValueError("at least one fare tier is required")
        bounds = [bound for bound, _ in tiers]
        prices = [price for _, price in tiers]
        if bounds != sorted(set(bounds)) or prices != sorted(prices):
            raise ValueError("fare tiers must increase monotonically")
        return tiers

    @model_validator(mode="after")
    def _max_fare_covers_tiers(self) -> FareConfig:
        if self.max_fare is not None and self.max_fare < self.tiers[-1][1]:
            raise ValueError(
                f"max_fare {self.max_fare} is below the last tier price {self.tiers[-1][1]}"
            )
        return self

    def to_schedule(self) -> FareSchedule:
        return FareSchedule.from_pairs(
            self.tiers,
            max_fare=self.max_fare,
            card_discount=self.card_discount,
            day_passes=self.day_passes,
        )


class SearchConfig(BaseSettings):
    """Defaults for the command-line search commands.

    Environment variables prefixed with METRO_SEARCH_.
    """

    model_config = SettingsConfigDict(env_prefix="METRO_SEARCH_")

    default_hops: int = Field(default=2, ge=0)
    default_radius_km: float = Field(default=5.0, ge=0)
    path_limit: int = Field(default=20, ge=1)


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with METRO_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="METRO_LOG_")

    level: str = "WARNING"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.graph.data_path)
        print(config.fares.card_discount)

    Environment variables prefixed with METRO_.
    """

    model_config = SettingsConfigDict(env_prefix="METRO_")

    graph: GraphConfig = Field(default_factory=GraphConfig)
    fares: FareConfig = Field(default_factory=FareConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache."""
    get_config.cache_clear()


def configure_logging(config: Optional[ObservabilityConfig] = None) -> None:
    """Apply the observability settings to the root logger."""
    config = config or get_config().observability
    logging.basicConfig(
        level=getattr(logging, config.level.upper(), logging.WARNING),
        format=config.format,
        force=True,
    )
