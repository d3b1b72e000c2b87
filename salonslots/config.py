"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .domain.models import AppointmentStatus


class DefaultsConfig(BaseModel):
    """Default settings for slot queries."""
    slot_duration_minutes: int = 30

    @field_validator("slot_duration_minutes")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Ensure slot duration is positive."""
        if value <= 0:
            raise ValueError("slot_duration_minutes must be greater than zero")
        return value


class AppConfig(BaseModel):
    """Application configuration."""
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    timezone: str = "UTC"
    active_appointment_statuses: List[AppointmentStatus] = Field(
        default_factory=lambda: [
            AppointmentStatus.PENDING,
            AppointmentStatus.CONFIRMED,
            AppointmentStatus.IN_SERVICE,
        ]
    )
    data_file: Optional[Path] = None

    @field_validator("active_appointment_statuses")
    @classmethod
    def validate_active_statuses(
        cls, value: List[AppointmentStatus]
    ) -> List[AppointmentStatus]:
        """Terminal statuses never hold a slot; drop duplicates, keep order."""
        terminal = {AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED}
        blocked = [status.value for status in value if status in terminal]
        if blocked:
            raise ValueError(
                f"active_appointment_statuses cannot include terminal statuses: {blocked}"
            )

        deduped: List[AppointmentStatus] = []
        for status in value:
            if status not in deduped:
                deduped.append(status)
        return deduped

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try the directory that contains the salonslots package
        package_parent = Path(__file__).resolve().parent.parent
        config_path = package_parent / "config.yaml"

    return config_path


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """
    Load an explicit config file, or the default one if it exists.

    Falls back to built-in defaults only when no path was given and no
    default config file is present.
    """
    if config_path is not None:
        return AppConfig.load_from_yaml(config_path)

    default_path = get_default_config_path()
    if default_path.exists():
        return AppConfig.load_from_yaml(default_path)

    return AppConfig()
