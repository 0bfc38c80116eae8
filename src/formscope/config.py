"""Application configuration read from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from formscope.errors import ConfigurationError

FREEZE_FORMATS = ("json", "yaml")


@dataclass
class ManagerConfig:
    """Settings shared by the CLI and applications embedding formscope.

    Attributes:
        profiles_path: Directory holding profile YAML files
        freeze_format: Default format for ``ValidationManager.freeze``
        log_level: Root log level name (e.g. "WARNING", "DEBUG")
    """

    profiles_path: Path
    freeze_format: str = "json"
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, base_path: Path | None = None) -> ManagerConfig:
        """Create config from environment variables.

        Resolution order for the profiles directory:
        1. FORMSCOPE_PROFILES_PATH env var
        2. {base_path}/profiles
        3. ./profiles

        Raises:
            ConfigurationError: If FORMSCOPE_FREEZE_FORMAT is not json or yaml
        """
        profiles = os.environ.get("FORMSCOPE_PROFILES_PATH")
        if profiles:
            profiles_path = Path(profiles)
        elif base_path:
            profiles_path = base_path / "profiles"
        else:
            profiles_path = Path("profiles")

        freeze_format = os.environ.get("FORMSCOPE_FREEZE_FORMAT", "json").lower()
        if freeze_format not in FREEZE_FORMATS:
            raise ConfigurationError(
                f"Unsupported FORMSCOPE_FREEZE_FORMAT '{freeze_format}'. "
                "Expected one of: " + ", ".join(FREEZE_FORMATS)
            )

        log_level = os.environ.get("FORMSCOPE_LOG_LEVEL", "WARNING").upper()

        return cls(
            profiles_path=profiles_path,
            freeze_format=freeze_format,
            log_level=log_level,
        )


def configure_logging(level: str) -> None:
    """Configure root logging for command-line use."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
