"""
Configuration Module
====================

Application settings and configuration management using Pydantic.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety.
    """

    # ========== Application ==========
    app_name: str = Field(default="qa-audit-sla", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root logging level")

    # ========== SLA Configuration ==========
    sla_config_path: Path = Field(
        default=Path("sla_config.yaml"),
        description="Path to SLA window configuration YAML file"
    )
    sla_config_watch: bool = Field(
        default=False,
        description="Reload the SLA window configuration when the file changes"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is one of allowed values."""
        allowed = {"development", "staging", "production"}
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        level = v.upper()
        if level not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return level


@lru_cache()
def get_settings() -> Settings:
    """Returns cached Settings instance."""
    return Settings()


# ========== Constants ==========

class SLAWindowType(str, Enum):
    """Business-day windows enforced by the audit and dispute workflow."""
    AGENT_ACKNOWLEDGE = "agent_acknowledge"    # Agent acknowledges or disputes a released audit
    TL_SIGN_OFF = "tl_sign_off"                # Team lead signs off, one day after the agent window
    OPS_TL_REVIEW = "ops_tl_review"            # Ops TL reviews a submitted dispute
    DISPUTE_FILING = "dispute_filing"          # Last day a dispute may be raised
    REAPPEAL_FILING = "reappeal_filing"        # Last day to re-appeal a QA rejection


class SLAState(str, Enum):
    """SLA status states."""
    ON_TRACK = "on_track"
    AT_RISK = "at_risk"
    BREACHED = "breached"
    MET = "met"


# ========== Lists for validation ==========

VALID_SLA_WINDOW_TYPES = [window.value for window in SLAWindowType]
VALID_SLA_STATES = [state.value for state in SLAState]

DEFAULT_WINDOW_BUSINESS_DAYS = {
    SLAWindowType.AGENT_ACKNOWLEDGE.value: 3,
    SLAWindowType.TL_SIGN_OFF.value: 4,
    SLAWindowType.OPS_TL_REVIEW.value: 1,
    SLAWindowType.DISPUTE_FILING.value: 5,
    SLAWindowType.REAPPEAL_FILING.value: 3,
}
