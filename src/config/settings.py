# src/config/settings.py
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for algorithm parameters, comparison thresholds,
report flag tiers and logging.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === MOSS-like comparator ===
    moss_k: int = 4
    moss_window: int = 5

    # === Byte-level comparator ===
    rabin_karp_k: int = 25

    # === Candidate filtering ===
    min_char_length: int = 20
    min_line_count: int = 3
    max_length_ratio: float = 10.0

    # === Scoring ===
    moss_weight: float = 0.6
    rabin_karp_weight: float = 0.4
    high_confidence_threshold: float = 0.8

    # === Report flags (percentages) ===
    flag_very_high_threshold: float = 80.0
    flag_high_threshold: float = 70.0
    flag_significant_moss_threshold: float = 60.0
    flag_significant_rabin_karp_threshold: float = 60.0

    # === Batch ===
    normalize_timeout_seconds: float = 60.0
    include_file_details: bool = False

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("moss_k", "moss_window", "rabin_karp_k")
    @classmethod
    def validate_positive(cls, v: int) -> int:  # noqa: N805
        if v < 1:
            raise ValueError("value must be >= 1")
        return v

    @field_validator("min_char_length", "min_line_count")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:  # noqa: N805
        if v < 0:
            raise ValueError("value must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.moss_weight < 0 or self.rabin_karp_weight < 0:
            errors.append("MOSS_WEIGHT and RABIN_KARP_WEIGHT must be >= 0")
        elif self.moss_weight + self.rabin_karp_weight <= 0:
            errors.append("MOSS_WEIGHT + RABIN_KARP_WEIGHT must be > 0")

        if self.max_length_ratio < 1.0:
            errors.append("MAX_LENGTH_RATIO must be >= 1")

        if not 0.0 <= self.high_confidence_threshold <= 1.0:
            errors.append("HIGH_CONFIDENCE_THRESHOLD must be within [0, 1]")

        for name in (
            "flag_very_high_threshold",
            "flag_high_threshold",
            "flag_significant_moss_threshold",
            "flag_significant_rabin_karp_threshold",
        ):
            if not 0.0 <= getattr(self, name) <= 100.0:
                errors.append(f"{name.upper()} must be within [0, 100]")

        if self.normalize_timeout_seconds <= 0:
            errors.append("NORMALIZE_TIMEOUT_SECONDS must be > 0")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def weight_sum(self) -> float:
        """Denominator of the combined score."""
        return self.moss_weight + self.rabin_karp_weight


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-request config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
