"""Configuration management for jobby."""

import os
import tomllib
from enum import Enum
from pathlib import Path
from typing import Self

import tomli_w
from pydantic import BaseModel, Field, ValidationError, model_validator

from .constants import CONFIG_ENV_VAR, CONFIG_FILE
from .errors import ConfigError


class TransportType(str, Enum):
    """Mail transports jobby can deliver through."""

    SENDMAIL = "sendmail"
    SMTP = "smtp"


class SmtpSecurity(str, Enum):
    """Transport security for SMTP connections."""

    NONE = "none"
    STARTTLS = "starttls"
    SSL = "ssl"


class MailerConfig(BaseModel):
    """Configuration for notification delivery."""

    transport: TransportType = TransportType.SENDMAIL
    sendmail_command: str = "/usr/sbin/sendmail"
    smtp_host: str = "localhost"
    smtp_port: int = Field(default=25, ge=1, le=65535)
    smtp_username: str | None = None
    smtp_password: str | None = None
    smtp_security: SmtpSecurity = SmtpSecurity.NONE

    @model_validator(mode="after")
    def validate_credentials_pair(self) -> Self:
        """Ensure SMTP username and password are set together."""
        if bool(self.smtp_username) != bool(self.smtp_password):
            raise ValueError("smtp_username and smtp_password must be set together")
        return self


class LockConfig(BaseModel):
    """Configuration for job lock files."""

    directory: Path | None = None  # Defaults to the resolved temp dir


class JobbyConfig(BaseModel):
    """Root configuration for jobby."""

    mailer: MailerConfig = Field(default_factory=MailerConfig)
    locks: LockConfig = Field(default_factory=LockConfig)


def get_config_path(path: Path | None = None) -> Path:
    """Get the config file location.

    Args:
        path: Explicit path, takes precedence

    Returns:
        path, else $JOBBY_CONFIG, else ./jobby.toml
    """
    if path is not None:
        return path
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return Path.cwd() / CONFIG_FILE


def load_config(path: Path | None = None) -> JobbyConfig:
    """Load config from a TOML file.

    Args:
        path: Config file path (see get_config_path)

    Returns:
        Loaded configuration, or defaults if the file doesn't exist

    Raises:
        ConfigError: If the file is not valid TOML or fails validation
    """
    config_path = get_config_path(path)
    if not config_path.exists():
        return JobbyConfig()
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
        return JobbyConfig.model_validate(data)
    except (tomllib.TOMLDecodeError, ValidationError) as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from e


def write_config_template(path: Path) -> Path:
    """Write default config template.

    Args:
        path: Destination file

    Returns:
        Path to the written config file
    """
    template = {
        "mailer": {
            # "sendmail" pipes to a local MTA, "smtp" talks to a relay
            "transport": "sendmail",
            "sendmail_command": "/usr/sbin/sendmail",
            "smtp_host": "localhost",
            "smtp_port": 25,
            "smtp_security": "none",
        },
        "locks": {},
    }
    with open(path, "wb") as f:
        tomli_w.dump(template, f)
    return path
