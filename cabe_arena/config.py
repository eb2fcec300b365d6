"""Application configuration with validation."""
from typing import Literal, Optional
from functools import lru_cache
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Scoring engine settings, read from the environment and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "CaBE Arena Scoring Engine"
    APP_VERSION: str = "5.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # Service Points Formula v5
    SCORING_ALPHA: float = Field(default=5.5, gt=0, le=20.0)
    MAX_BONUS_CAP: int = Field(default=1000, ge=1)
    OVER_CAP_BOOST: float = Field(default=1.5, ge=1.0, le=5.0)
    POINTS_PER_LEVEL: int = Field(default=1000, ge=1)

    # Integrity heuristics
    MIN_PROOF_LENGTH: int = Field(default=20, ge=0)
    MAX_SUBMISSIONS_PER_HOUR: int = Field(default=10, ge=1)
    MIN_SECONDS_BETWEEN_SUBMISSIONS: int = Field(default=300, ge=0)
    DAILY_POINTS_LIMIT: int = Field(default=2000, ge=0)
    SUSPICIOUS_THRESHOLD: float = Field(default=0.3, ge=0, le=1)
    HIGH_RISK_THRESHOLD: float = Field(default=0.7, ge=0, le=1)
    AUTO_REJECT_THRESHOLD: float = Field(default=0.9, ge=0, le=1)

    # Engagement notifications
    ENGAGEMENT_MESSAGE_PROBABILITY: float = Field(default=0.1, ge=0, le=1)
    RANDOM_SEED: Optional[int] = None

    @model_validator(mode="after")
    def validate_risk_thresholds(self):
        """Thresholds must escalate: suspicious < review < auto-reject."""
        if not (
            self.SUSPICIOUS_THRESHOLD
            < self.HIGH_RISK_THRESHOLD
            < self.AUTO_REJECT_THRESHOLD
        ):
            raise ValueError(
                "Risk thresholds must satisfy SUSPICIOUS < HIGH_RISK < AUTO_REJECT, got "
                f"{self.SUSPICIOUS_THRESHOLD} / {self.HIGH_RISK_THRESHOLD} / "
                f"{self.AUTO_REJECT_THRESHOLD}"
            )
        return self

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Production runs must not have DEBUG enabled."""
        if self.APP_ENV == "production" and self.DEBUG:
            raise ValueError("DEBUG must be False in production")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
