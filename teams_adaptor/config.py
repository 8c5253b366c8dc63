"""Configuration loading from environment and optional YAML.

The Teams hostname (TEAMS_HOSTNAME) is mandatory; the adaptor refuses to
start without it. Log level and trace level follow the RLOG_* variables
(RLOG_LOG_LEVEL, RLOG_TRACE_LEVEL). Config is read once at startup and
is immutable afterwards.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from teams_adaptor.errors import ConfigError

# Injected by load_config so ${VAR} in YAML can be substituted
_current_env: dict[str, str] = {}


class TeamsConfig(BaseSettings):
    """Downstream Teams incoming-webhook settings."""

    model_config = SettingsConfigDict(env_prefix="TEAMS_", extra="ignore", env_ignore_empty=True, frozen=True)

    hostname: str = Field(description="Teams webhook FQDN, e.g. somecorp.webhook.office.com")
    timeout: float | None = Field(default=None, gt=0, description="Outbound timeout in seconds; None = no timeout")

    @field_validator("hostname")
    @classmethod
    def _hostname_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("hostname must not be empty")
        return v


class ServerConfig(BaseSettings):
    """Inbound HTTP listeners."""

    model_config = SettingsConfigDict(env_prefix="SERVER_", extra="ignore", env_ignore_empty=True, frozen=True)

    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(default=8080, ge=0, le=65535, description="Main listener port")
    health_port: int = Field(default=9000, ge=0, le=65535, description="Health-only listener port")
    health_enabled: bool = Field(default=True, description="Start the health-only listener")


class LoggingConfig(BaseSettings):
    """Logging settings (RLOG_LOG_LEVEL, RLOG_TRACE_LEVEL, RLOG_FORMAT)."""

    model_config = SettingsConfigDict(env_prefix="RLOG_", extra="ignore", env_ignore_empty=True, frozen=True)

    log_level: str = Field(default="INFO", description="DEBUG, INFO, WARN, ERROR, CRITICAL or NONE")
    # -1 (or unset) disables trace output
    trace_level: int = Field(default=-1, description="Trace verbosity; >= 0 enables TRACE")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )

    @property
    def trace_enabled(self) -> bool:
        return self.trace_level >= 0

    @property
    def redact_paths(self) -> bool:
        """True when webhook ids must be hashed in log lines."""
        return self.log_level.strip().upper() != "DEBUG" and not self.trace_enabled


class AppConfig(BaseSettings):
    """Root application config."""

    model_config = SettingsConfigDict(extra="ignore", frozen=True)

    teams: TeamsConfig
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings with os.environ.

    Unset variables become None so the field falls back to its default.
    """
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return _current_env.get(key) or None
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return _current_env.get(key) or None
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    section = raw.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Config section '{name}' must be a mapping")
    return {k: v for k, v in section.items() if v is not None}


def _describe(err: ValidationError) -> str:
    parts = []
    for e in err.errors():
        loc = ".".join(str(p) for p in e.get("loc", ())) or "config"
        parts.append(f"{loc}: {e.get('msg', '')}")
    return "; ".join(parts)


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from environment and, if present, a YAML file.

    Values from YAML take precedence over environment variables. Raises
    ConfigError when TEAMS_HOSTNAME is missing or a value does not
    validate (e.g. RLOG_TRACE_LEVEL is not an integer).
    """
    global _current_env
    import os

    _current_env = dict(os.environ)

    raw: dict[str, Any] = {}
    if config_path is not None and config_path.is_file():
        try:
            raw = yaml.safe_load(config_path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
        if not isinstance(raw, dict):
            raise ConfigError(f"Config file {config_path} must contain a mapping")
        raw = _substitute_env(raw)

    try:
        teams = TeamsConfig(**_section(raw, "teams"))
        server = ServerConfig(**_section(raw, "server"))
        logging = LoggingConfig(**_section(raw, "logging"))
    except ValidationError as e:
        if any(err.get("type") == "missing" and err.get("loc") == ("hostname",) for err in e.errors()):
            raise ConfigError(
                "Mandatory environment variable TEAMS_HOSTNAME (FQDN from webhook) is not set. "
                "You can set it as localhost for development"
            ) from e
        raise ConfigError(_describe(e)) from e

    return AppConfig(teams=teams, server=server, logging=logging)
