#!/usr/bin/env python3
"""
Configuration Management for famfinance

Handles environment-based configuration with defaults and validation.
Only the CLI and the file-backed collaborators read configuration; engine
calls always receive their parameters explicitly.
"""

import logging
import os
import re
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class ReportConfig:
    """Defaults applied by the reporting commands."""

    top_outflows_limit: int = 10
    max_outflows: int = 50
    net_worth_months: int = 6


@dataclass
class Config:
    """
    Main configuration class for famfinance.

    Loads configuration from environment variables with defaults
    and validation for each environment type.
    """

    environment: Environment

    # Family data lives under data_dir/<family_id>/
    data_dir: Path

    currency: str
    reports: ReportConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("FAMFINANCE_ENV", "development"))

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_famfinance"
            data_dir = Path(os.getenv("FAMFINANCE_DATA_DIR", str(default_test_dir)))
        else:
            data_dir = Path(os.getenv("FAMFINANCE_DATA_DIR", "./data")).expanduser().resolve()

        data_dir.mkdir(parents=True, exist_ok=True)

        reports = ReportConfig(
            top_outflows_limit=int(os.getenv("FAMFINANCE_TOP_OUTFLOWS_LIMIT", "10")),
            max_outflows=int(os.getenv("FAMFINANCE_MAX_OUTFLOWS", "50")),
            net_worth_months=int(os.getenv("FAMFINANCE_NET_WORTH_MONTHS", "6")),
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            currency=os.getenv("FAMFINANCE_CURRENCY", "USD").strip().upper(),
            reports=reports,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.data_dir.exists():
            errors.append(f"data_dir does not exist: {self.data_dir}")

        if not re.match(r"^[A-Z]{3}$", self.currency):
            errors.append(f"FAMFINANCE_CURRENCY must be a 3-letter ISO code, got {self.currency!r}")

        if self.reports.top_outflows_limit <= 0:
            errors.append("Top outflows limit must be positive")
        if self.reports.max_outflows <= 0:
            errors.append("Max outflows must be positive")
        if self.reports.top_outflows_limit > self.reports.max_outflows:
            errors.append("Top outflows limit cannot exceed max outflows")
        if self.reports.net_worth_months < 0:
            errors.append("Net worth months must be non-negative")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        if self.debug:
            logging.getLogger("famfinance").setLevel(logging.DEBUG)

    def family_dir(self, family_id: str) -> Path:
        """Directory holding one family's data files."""
        return self.data_dir / family_id

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a JSON-friendly dictionary."""
        return {
            "environment": self.environment.value,
            "data_dir": str(self.data_dir),
            "currency": self.currency,
            "reports": dict(self.reports.__dict__),
            "debug": self.debug,
            "log_level": self.log_level,
        }


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        config = Config.from_environment()

        errors = config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        config.setup_logging()
        _config = config

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()


def get_data_dir() -> Path:
    """Get the data directory path."""
    return get_config().data_dir


def is_test() -> bool:
    """Check if running in test environment."""
    return get_config().environment == Environment.TEST
