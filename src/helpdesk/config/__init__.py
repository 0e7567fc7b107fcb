"""
Configuration Module
====================

Application settings and configuration management using Pydantic.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety.
    """

    # ========== Application ==========
    app_name: str = Field(default="bank-helpdesk", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root log level")

    # ========== Server ==========
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=3003, description="Server port", ge=1, le=65535)

    # ========== Database ==========
    database_url: str = Field(
        default="sqlite+aiosqlite:///./helpdesk.db",
        description="Ticket store connection URL (async driver)"
    )
    db_pool_size: int = Field(default=5, description="Database connection pool size", ge=1)
    db_max_overflow: int = Field(default=10, description="Max overflow connections", ge=0)

    # ========== Access Control ==========
    access_policy_path: Optional[Path] = Field(
        default=None,
        description="Optional YAML file replacing the built-in department access policy"
    )

    # ========== SLA Configuration ==========
    sla_config_path: Path = Field(
        default=Path("sla_config.yaml"),
        description="Path to SLA configuration YAML file"
    )
    sla_sweep_enabled: bool = Field(
        default=True,
        description="Run the background SLA sweep"
    )
    sla_sweep_interval: int = Field(
        default=300,
        description="Seconds between SLA sweeps",
        ge=10
    )

    # ========== Directory ==========
    seed_directory: bool = Field(
        default=True,
        description="Insert the default employee directory when the users table is empty"
    )

    # ========== CORS ==========
    cors_origins: List[str] = Field(
        default=["*"],
        description="Allowed CORS origins"
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


@lru_cache()
def get_settings() -> Settings:
    """Returns cached Settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


# ========== Constants ==========

class Priority(str, Enum):
    """Ticket priority levels, P1 being the most urgent."""
    P1 = "P1"
    P2 = "P2"
    P3 = "P3"
    P4 = "P4"


class TicketStatus(str, Enum):
    """Ticket lifecycle statuses."""
    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    CLOSED = "Closed"


class TicketCategory(str, Enum):
    """Ticket categories."""
    REQUEST = "Request"
    INCIDENT = "Incident"
    PROBLEM = "Problem"
    CHANGE = "Change"


class SLAStatus(str, Enum):
    """Derived SLA states."""
    UNKNOWN = "unknown"
    BREACH = "breach"
    WARNING = "warning"
    GOOD = "good"


class AuditAction(str, Enum):
    """Actions recorded in the audit trail."""
    CREATE_TICKET = "Create Ticket"
    UPDATE_TICKET = "Update Ticket"
    ESCALATE_TICKET = "Escalate Ticket"


# ========== Well-known departments ==========

CUSTOMER_DEPARTMENT = "Customer"
DEFAULT_ASSIGNEE_DEPARTMENT = "Customer Service"
