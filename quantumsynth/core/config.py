"""
Configuration module for the QuantumSynth API.

Settings are assembled from three layers, highest precedence first:
environment variables, an optional YAML config file, and fixed defaults.
The resulting Settings value is passed explicitly to the application
factory; nothing in the package reads configuration from globals.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from ..models.schemas import QuantumMode
from .exceptions import ConfigError

logger = logging.getLogger(__name__)

# Searched in order when no explicit config path is given
DEFAULT_CONFIG_PATHS = ("config.yaml", "config/config.yaml")

KNOWN_MODES = tuple(mode.value for mode in QuantumMode)

LOG_LEVELS = {
    "debug": "debug",
    "info": "info",
    "warn": "warning",
    "warning": "warning",
    "error": "error",
    "critical": "critical",
}


@dataclass(frozen=True)
class ServerConfig:
    """
    HTTP server binding.

    Attributes:
        host: Interface uvicorn binds to
        port: TCP port uvicorn listens on
        shutdown_timeout: Seconds to drain in-flight requests on shutdown
    """
    host: str = "0.0.0.0"
    port: int = 8080
    shutdown_timeout: int = 10


@dataclass(frozen=True)
class LogConfig:
    """Logging level name understood by the logging module (lower case)."""
    level: str = "info"


@dataclass(frozen=True)
class QuantumConfig:
    """
    Synthesis behaviour.

    Attributes:
        default_mode: Mode applied when a process request omits one
        max_jobs: Maximum number of dispatches allowed in flight at once
    """
    default_mode: str = "superposition"
    max_jobs: int = 64


@dataclass(frozen=True)
class SecurityConfig:
    """
    Security settings.

    Authentication is not enforced by the service; the values are carried
    so deployments can keep a single config file across versions.
    """
    enable_auth: bool = False
    jwt_secret: str = field(default="", repr=False)
    allowed_origins: str = "*"

    @property
    def origins(self) -> list[str]:
        """Comma separated allowed_origins as a list for CORS."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


class Settings:
    """
    Central settings value that aggregates all configuration.

    Build one with Settings.load() at startup, or construct it directly
    with explicit sections in tests.
    """

    def __init__(
        self,
        server: Optional[ServerConfig] = None,
        log: Optional[LogConfig] = None,
        quantum: Optional[QuantumConfig] = None,
        security: Optional[SecurityConfig] = None,
    ):
        self.server = server or ServerConfig()
        self.log = log or LogConfig()
        self.quantum = quantum or QuantumConfig()
        self.security = security or SecurityConfig()

    @classmethod
    def load(
        cls,
        config_path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "Settings":
        """
        Load settings from environment, config file and defaults.

        Args:
            config_path: Explicit YAML file; when None the default
                locations are searched
            environ: Environment mapping, os.environ when None

        Returns:
            A fully populated Settings value

        Raises:
            ConfigError: If the file is unreadable or a value is invalid
        """
        env = os.environ if environ is None else environ
        file_data = _read_config_file(config_path)

        def lookup(section: str, key: str, *aliases: str) -> Any:
            for name in (f"{section}_{key}".upper(), *aliases):
                value = env.get(name)
                if value not in (None, ""):
                    return value
            section_data = file_data.get(section) or {}
            if not isinstance(section_data, dict):
                raise ConfigError(f"Config section '{section}' must be a mapping")
            return section_data.get(key)

        defaults_server = ServerConfig()
        server = ServerConfig(
            host=_as_str(lookup("server", "host"), defaults_server.host),
            port=_as_int(lookup("server", "port", "PORT"), "server.port",
                         defaults_server.port, minimum=1, maximum=65535),
            shutdown_timeout=_as_int(lookup("server", "shutdown_timeout"),
                                     "server.shutdown_timeout",
                                     defaults_server.shutdown_timeout, minimum=0),
        )

        level = _as_str(lookup("log", "level"), LogConfig().level).lower()
        if level not in LOG_LEVELS:
            raise ConfigError(f"log.level must be one of {sorted(LOG_LEVELS)}, got '{level}'")
        log = LogConfig(level=LOG_LEVELS[level])

        defaults_quantum = QuantumConfig()
        default_mode = _as_str(lookup("quantum", "default_mode"), defaults_quantum.default_mode)
        if default_mode not in KNOWN_MODES:
            raise ConfigError(
                f"quantum.default_mode must be one of {list(KNOWN_MODES)}, got '{default_mode}'"
            )
        quantum = QuantumConfig(
            default_mode=default_mode,
            max_jobs=_as_int(lookup("quantum", "max_jobs"), "quantum.max_jobs",
                             defaults_quantum.max_jobs, minimum=1),
        )

        jwt_secret = _as_str(lookup("security", "jwt_secret"), "")
        if not jwt_secret:
            jwt_secret = env.get("QUANTUMSYNTH_JWT_SECRET", "")
        security = SecurityConfig(
            enable_auth=_as_bool(lookup("security", "enable_auth"), "security.enable_auth"),
            jwt_secret=jwt_secret,
            allowed_origins=_as_str(lookup("security", "allowed_origins"),
                                    SecurityConfig().allowed_origins),
        )

        return cls(server=server, log=log, quantum=quantum, security=security)

    @property
    def api_title(self) -> str:
        """API title for OpenAPI documentation."""
        return "QuantumSynth"

    @property
    def api_version(self) -> str:
        """API version string."""
        return "1.0.0"

    @property
    def api_description(self) -> str:
        """API description for OpenAPI documentation."""
        return "QuantumSynth: quantum-inspired text and noise synthesis API."


def _read_config_file(config_path: Optional[str]) -> dict[str, Any]:
    """Read the first YAML config file found, or {} if there is none."""
    if config_path:
        candidates = [Path(config_path)]
    else:
        candidates = [Path(p) for p in DEFAULT_CONFIG_PATHS]

    for path in candidates:
        if not path.is_file():
            continue
        try:
            with path.open("r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Unable to read config file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        logger.info(f"Using config file: {path}")
        return data

    searched = ", ".join(str(p) for p in candidates)
    logger.warning(f"Config file not found ({searched}), using ENV or defaults")
    return {}


def _as_str(value: Any, default: str) -> str:
    if value is None:
        return default
    return str(value).strip() or default


def _as_int(
    value: Any,
    name: str,
    default: int,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
) -> int:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from e
    if minimum is not None and number < minimum:
        raise ConfigError(f"{name} must be >= {minimum}, got {number}")
    if maximum is not None and number > maximum:
        raise ConfigError(f"{name} must be <= {maximum}, got {number}")
    return number


def _as_bool(value: Any, name: str) -> bool:
    if value is None or value == "":
        return False
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off"):
        return False
    raise ConfigError(f"{name} must be a boolean, got {value!r}")
