"""Configuration management for the SendGrid emailer."""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError
from .validators import validate_email_address

logger = logging.getLogger(__name__)

# Attribute names read from duck-typed tenant objects.
_TENANT_ATTRIBUTES = ("api_key", "sendgrid_api_key", "from_email", "from_name")


class SendGridConfig(BaseModel):
    """Validated SendGrid tenant configuration."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    api_key: str = Field(
        ...,
        strict=True,
        min_length=10,
        max_length=255,
        validation_alias=AliasChoices("api_key", "sendgrid_api_key"),
        description="SendGrid API key",
    )
    from_email: Optional[str] = Field(None, description="Default sender address")
    from_name: Optional[str] = Field(None, description="Default sender display name")

    @field_validator("from_email")
    @classmethod
    def _check_from_email(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        is_valid, error = validate_email_address(value)
        if not is_valid:
            raise ValueError(error)
        return value


class EmailerSettings(BaseSettings):
    """SendGrid settings read from ``SENDGRID_*`` environment variables."""

    api_key: Optional[str] = Field(None, description="SendGrid API key")
    from_email: Optional[str] = None
    from_name: Optional[str] = None

    model_config = SettingsConfigDict(
        env_prefix="SENDGRID_", case_sensitive=False, extra="ignore"
    )


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    level: str = Field("INFO", description="Logging level")
    format: str = Field(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string",
    )
    file_path: Optional[str] = Field(None, description="Path to log file")
    max_file_size: int = Field(10 * 1024 * 1024, description="Maximum log file size in bytes")
    backup_count: int = Field(5, description="Number of backup log files to keep")
    console_output: bool = Field(True, description="Enable console logging")

    model_config = SettingsConfigDict(
        env_prefix="SENDGRID_EMAILER_LOG_", case_sensitive=False, extra="ignore"
    )


@dataclass
class ConfigValidation:
    """Outcome of validating a tenant config: a config or a list of errors."""

    config: Optional[SendGridConfig] = None
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.config is not None and not self.errors


def _format_error(error: Dict[str, Any]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ())) or "config"
    return f"{location}: {error['msg']}"


def _as_mapping(raw: Any) -> Any:
    if raw is None or isinstance(raw, (Mapping, SendGridConfig)):
        return raw
    return {name: getattr(raw, name) for name in _TENANT_ATTRIBUTES if hasattr(raw, name)}


def validate_config(raw: Any) -> ConfigValidation:
    """Validate a tenant config without raising.

    Args:
        raw: Mapping or attribute-bearing object holding the tenant settings

    Returns:
        ConfigValidation holding either the config or every violated rule
    """
    if isinstance(raw, SendGridConfig):
        return ConfigValidation(config=raw)

    try:
        config = SendGridConfig.model_validate(_as_mapping(raw))
    except PydanticValidationError as e:
        errors = [_format_error(err) for err in e.errors()]
        for error in errors:
            logger.debug(f"SendGrid config violation: {error}")
        return ConfigValidation(errors=errors)

    return ConfigValidation(config=config)


def verify_config(raw: Any) -> SendGridConfig:
    """Validate a tenant config, raising on any violation.

    Raises:
        ConfigurationError: With every violated rule joined by ", "
    """
    result = validate_config(raw)
    if not result.ok:
        message = ", ".join(result.errors)
        logger.error(f"SendGrid config validation failed: {message}")
        raise ConfigurationError(f"SendGrid config invalid: {message}", errors=result.errors)
    return result.config


def _load_config_file(config_file: Path) -> Dict[str, Any]:
    """Load configuration from YAML or JSON file."""
    if not config_file.exists():
        logger.warning(f"Config file {config_file} not found, skipping")
        return {}

    with open(config_file, "r") as f:
        if config_file.suffix.lower() in [".yaml", ".yml"]:
            data = yaml.safe_load(f) or {}
        elif config_file.suffix.lower() == ".json":
            data = json.load(f)
        else:
            raise ConfigurationError(f"Unsupported config file format: {config_file.suffix}")

    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Config file {config_file} must contain a mapping")

    section = data.get("sendgrid")
    return dict(section) if isinstance(section, Mapping) else dict(data)


def _merge_configs(*configs: Dict[str, Any]) -> Dict[str, Any]:
    """Merge configuration dictionaries, later ones winning."""
    result = {}
    for config in configs:
        if config:
            result.update(config)
    return result


def load_tenant_config(
    config_file: Optional[Union[str, Path]] = None,
    env_file: Optional[Union[str, Path]] = None,
) -> Dict[str, Any]:
    """
    Load a raw tenant config from files and the environment.

    Sources are loaded in order of precedence (later sources override earlier):
    1. Configuration file (YAML/JSON, optionally under a ``sendgrid`` key)
    2. Environment file (.env)
    3. Environment variables (``SENDGRID_API_KEY``, ``SENDGRID_FROM_EMAIL``, ...)

    The result is not validated; pass it to ``verify_config`` or
    ``create_sendgrid_emailer``.

    Args:
        config_file: Path to a YAML or JSON config file
        env_file: Path to a .env file (default: .env in the working directory)

    Returns:
        Raw configuration mapping
    """
    env_path = Path(env_file) if env_file is not None else Path(os.getcwd()) / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    file_config = _load_config_file(Path(config_file)) if config_file else {}
    env_config = EmailerSettings().model_dump(exclude_none=True)

    return _merge_configs(file_config, env_config)
