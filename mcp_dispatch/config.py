"""
Server configuration.

Values are layered, lowest priority first: built-in defaults, a JSON config
file, ``MCP_*`` environment variables, then explicit overrides (the CLI).
Every layer is validated by the pydantic models below; invalid values raise
ConfigError instead of being coerced.
"""

import json
import logging
import os
from typing import Any, Dict, List, Literal, Mapping, Optional, get_args

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    ValidationError,
    field_validator,
)

from .errors import ConfigError


logger = logging.getLogger(__name__)

DEFAULT_ALLOWED_EXTENSIONS = [".txt", ".json", ".md", ".csv", ".log"]

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LOG_LEVELS = get_args(LogLevel)


def _upper_level(value: Any) -> Any:
    return value.upper() if isinstance(value, str) else value


class ToolConfig(BaseModel):
    """Per-tool settings."""
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    enabled: StrictBool = Field(True, description="Whether the tool is registered")
    description_override: Optional[StrictStr] = Field(
        None, description="Replaces the tool's own description"
    )
    parameters: Dict[str, Any] = Field(
        default_factory=dict, description="Tool-specific settings"
    )

    @classmethod
    def from_dict(cls, data: dict) -> "ToolConfig":
        return _validate(cls, data)

    def to_dict(self) -> dict:
        return self.model_dump()


class ServerConfig(BaseModel):
    """Configuration for MCP server."""
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    name: StrictStr = Field("mcp-dispatch", description="Server name reported to clients")
    version: StrictStr = Field("0.1.0", description="Server version reported to clients")
    log_level: LogLevel = Field("INFO", description="Logging level")
    allowed_paths: List[StrictStr] = Field(
        default_factory=lambda: ["."],
        description="Directories the file tools may access",
    )
    allowed_extensions: Optional[List[StrictStr]] = Field(
        default_factory=lambda: list(DEFAULT_ALLOWED_EXTENSIONS),
        description="File extensions the file tools accept; None allows any",
    )
    max_file_size: StrictInt = Field(1024 * 1024, ge=0, description="Size limit in bytes")
    read_only: StrictBool = Field(False, description="Refuse file writes and deletes")
    tools: Dict[str, ToolConfig] = Field(default_factory=dict)

    normalize_log_level = field_validator("log_level", mode="before")(_upper_level)

    def tool_config(self, name: str) -> ToolConfig:
        """Settings for a tool; tools without an entry use defaults."""
        config = self.tools.get(name)
        return config if config is not None else ToolConfig()

    def tool_enabled(self, name: str) -> bool:
        return self.tool_config(name).enabled

    def to_dict(self) -> dict:
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: dict) -> "ServerConfig":
        return _validate(cls, data)


class EnvironmentOverrides(BaseModel):
    """
    Values read from ``MCP_*`` variables.

    Environment values are always strings, so this model validates in lax
    mode: ``"10"`` becomes an int and ``"yes"``/``"off"`` become booleans.
    """
    name: Optional[str] = None
    log_level: Optional[LogLevel] = None
    allowed_paths: Optional[List[str]] = None
    max_file_size: Optional[int] = Field(None, ge=0)
    read_only: Optional[bool] = None

    normalize_log_level = field_validator("log_level", mode="before")(_upper_level)


ENVIRONMENT_VARIABLES = {
    "MCP_SERVER_NAME": "name",
    "MCP_LOG_LEVEL": "log_level",
    "MCP_ALLOWED_PATHS": "allowed_paths",
    "MCP_MAX_FILE_SIZE": "max_file_size",
    "MCP_READ_ONLY": "read_only",
}


def _validate(model, data: Any):
    if not isinstance(data, dict):
        raise ConfigError(f"{model.__name__} must be an object, got {type(data).__name__}")
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def _update(config: ServerConfig, values: Mapping[str, Any]) -> None:
    """Assign values onto a config; each assignment is validated."""
    for key, value in values.items():
        try:
            setattr(config, key, value)
        except ValidationError as e:
            raise ConfigError(f"Invalid value for {key}: {e}") from e


def load_config_file(path: str) -> ServerConfig:
    """Read a ServerConfig from a JSON file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file {path}: {e}") from e

    logger.info(f"Loaded configuration from {path}")
    return ServerConfig.from_dict(data)


def apply_environment(config: ServerConfig, environ: Mapping[str, str]) -> ServerConfig:
    """Apply ``MCP_*`` environment overrides in place. Empty variables are ignored."""
    raw: Dict[str, Any] = {}
    for variable, key in ENVIRONMENT_VARIABLES.items():
        value = environ.get(variable)
        if value:
            raw[key] = value
    if "allowed_paths" in raw:
        raw["allowed_paths"] = [p for p in raw["allowed_paths"].split(os.pathsep) if p]

    try:
        overrides = EnvironmentOverrides.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid environment configuration: {e}") from e

    _update(config, overrides.model_dump(exclude_none=True))
    return config


def load_config(
    config_file: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    name: Optional[str] = None,
    log_level: Optional[str] = None,
    allowed_paths: Optional[List[str]] = None,
    read_only: Optional[bool] = None,
    disabled_tools: Optional[List[str]] = None,
) -> ServerConfig:
    """
    Build the effective configuration.

    Args:
        config_file: JSON config path; falls back to ``MCP_CONFIG_FILE``
        environ: Environment mapping, ``os.environ`` by default
        name, log_level, allowed_paths, read_only: Highest-priority overrides
        disabled_tools: Tool names to switch off

    Returns:
        The merged ServerConfig
    """
    environ = os.environ if environ is None else environ

    config_file = config_file or environ.get("MCP_CONFIG_FILE")
    config = load_config_file(config_file) if config_file else ServerConfig()

    apply_environment(config, environ)

    overrides: Dict[str, Any] = {}
    if name:
        overrides["name"] = name
    if log_level:
        overrides["log_level"] = log_level
    if allowed_paths:
        overrides["allowed_paths"] = list(allowed_paths)
    if read_only is not None:
        overrides["read_only"] = read_only
    _update(config, overrides)

    for tool_name in disabled_tools or ():
        config.tools.setdefault(tool_name, ToolConfig()).enabled = False

    return config
