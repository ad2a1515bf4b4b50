"""
Configuration module for voyagekit.

Supports loading from YAML/JSON files with environment variable overrides.
Default values are loaded from defaults.yaml for maintainability.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.voyageai.com/v1"
API_KEY_ENV_VAR = "VOYAGE_API_KEY"

# Path to the default configuration file
_DEFAULTS_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"

# Cache for default values
_defaults_cache: dict[str, Any] | None = None


def _load_defaults() -> dict[str, Any]:
    """Load default configuration values from defaults.yaml."""
    global _defaults_cache

    if _defaults_cache is not None:
        return _defaults_cache

    if not _DEFAULTS_CONFIG_PATH.exists():
        logger.warning(f"Defaults config not found: {_DEFAULTS_CONFIG_PATH}")
        _defaults_cache = {}
        return _defaults_cache

    try:
        content = _DEFAULTS_CONFIG_PATH.read_text(encoding="utf-8")
        _defaults_cache = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse defaults config: {e}")
        _defaults_cache = {}

    return _defaults_cache


def _get_default(section: str, key: str, fallback: Any = None) -> Any:
    """Get a default value from the defaults config."""
    defaults = _load_defaults()
    section_defaults = defaults.get(section) or {}
    return section_defaults.get(key, fallback)


def _as_attempt_count(value: Any) -> Optional[int]:
    """Coerce a configured max_retries value to an int, None stays None."""
    if value is None:
        return None
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValueError(f"max_retries must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"max_retries must be an integer, got {value!r}") from e


@dataclass(frozen=True)
class ClientConfig:
    """
    Connection settings for a VoyageClient.

    Frozen so one instance can be shared by clients used from several
    threads; the client never writes back into it.

    Attributes:
        api_key: API key; empty means read VOYAGE_API_KEY at client creation
        base_url: API root, overridable for testing
        timeout: Per-attempt timeout in seconds, None for no timeout
        max_retries: Maximum attempts per call; 0 or None means one attempt
    """

    api_key: str = field(default_factory=lambda: _get_default("client", "api_key", ""))
    base_url: str = field(
        default_factory=lambda: _get_default("client", "base_url", DEFAULT_BASE_URL)
    )
    timeout: Optional[float] = field(default_factory=lambda: _get_default("client", "timeout", None))
    max_retries: Optional[int] = field(
        default_factory=lambda: _get_default("client", "max_retries", 0)
    )

    def resolve_api_key(self) -> str:
        """Return the configured key, falling back to the environment."""
        return self.api_key or os.environ.get(API_KEY_ENV_VAR, "")


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for the delay between retries.

    The number of attempts is part of the client configuration
    (``ClientConfig.max_retries``); this only controls backoff.

    Attributes:
        base_delay: Delay in seconds before the second attempt.
        max_delay: Maximum delay in seconds between attempts.
        exponential_base: Base for exponential backoff calculation.
        respect_retry_after: Wait at least as long as a numeric Retry-After
            header asks, still capped by max_delay.
    """

    base_delay: float = field(default_factory=lambda: _get_default("retry", "base_delay", 1.0))
    max_delay: float = field(default_factory=lambda: _get_default("retry", "max_delay", 60.0))
    exponential_base: float = field(
        default_factory=lambda: _get_default("retry", "exponential_base", 2.0)
    )
    respect_retry_after: bool = field(
        default_factory=lambda: _get_default("retry", "respect_retry_after", True)
    )


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = field(default_factory=lambda: _get_default("logging", "level", "WARNING"))
    format: str = field(
        default_factory=lambda: _get_default(
            "logging", "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    )


@dataclass
class VoyageConfig:
    """Main configuration class for voyagekit."""

    client: ClientConfig = field(default_factory=ClientConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, path: Path | str) -> "VoyageConfig":
        """
        Load configuration from a YAML or JSON file.

        Args:
            path: Path to the configuration file (.yaml, .yml, or .json)

        Returns:
            VoyageConfig instance with loaded values

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ValueError: If the file format is unsupported or max_retries is
                not an integer
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        content = path.read_text(encoding="utf-8")

        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content) or {}
        elif path.suffix == ".json":
            data = json.loads(content) if content.strip() else {}
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "VoyageConfig":
        """Create VoyageConfig from a dictionary; missing keys keep defaults."""
        config = cls()

        if "client" in data:
            client_data = dict(data["client"])
            if "max_retries" in client_data:
                client_data["max_retries"] = _as_attempt_count(client_data["max_retries"])
            config.client = replace(config.client, **client_data)
        if "retry" in data:
            config.retry = replace(config.retry, **data["retry"])
        if "logging" in data:
            config.logging = LoggingConfig(**data["logging"])

        return config

    def apply_env_overrides(self) -> "VoyageConfig":
        """
        Apply environment variable overrides to the configuration.

        Environment variables:
            - VOYAGE_API_KEY
            - VOYAGE_BASE_URL
            - VOYAGE_TIMEOUT
            - VOYAGE_MAX_RETRIES
            - VOYAGE_RETRY_BASE_DELAY
            - VOYAGE_RETRY_MAX_DELAY
            - VOYAGE_LOG_LEVEL

        Returns:
            Self with environment overrides applied
        """
        env_mappings = {
            API_KEY_ENV_VAR: ("client", "api_key", str),
            "VOYAGE_BASE_URL": ("client", "base_url", str),
            "VOYAGE_TIMEOUT": ("client", "timeout", float),
            "VOYAGE_MAX_RETRIES": ("client", "max_retries", int),
            "VOYAGE_RETRY_BASE_DELAY": ("retry", "base_delay", float),
            "VOYAGE_RETRY_MAX_DELAY": ("retry", "max_delay", float),
            "VOYAGE_LOG_LEVEL": ("logging", "level", str),
        }

        for env_var, (section, key, converter) in env_mappings.items():
            value = os.environ.get(env_var)
            if value is None:
                continue
            try:
                converted = converter(value)
            except ValueError:
                logger.warning(f"Ignoring invalid value for {env_var}: {value!r}")
                continue
            # client and retry sections are frozen
            setattr(self, section, replace(getattr(self, section), **{key: converted}))

        return self

    def to_dict(self) -> dict:
        """Convert configuration to a dictionary."""
        return asdict(self)

    def to_yaml(self) -> str:
        """Serialize configuration to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)

    def to_json(self) -> str:
        """Serialize configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    def save(self, path: Path | str) -> None:
        """
        Save configuration to a file.

        Args:
            path: Path to save the configuration (.yaml, .yml, or .json)

        Raises:
            ValueError: If the file format is unsupported
        """
        path = Path(path)

        if path.suffix in (".yaml", ".yml"):
            content = self.to_yaml()
        elif path.suffix == ".json":
            content = self.to_json()
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def load_config(config_path: Optional[Path | str] = None, apply_env: bool = True) -> VoyageConfig:
    """
    Load configuration with optional environment variable overrides.

    Args:
        config_path: Optional path to config file. If None, uses defaults.
        apply_env: Whether to apply environment variable overrides.

    Returns:
        VoyageConfig instance
    """
    if config_path:
        config = VoyageConfig.from_file(config_path)
    else:
        config = VoyageConfig()

    if apply_env:
        config.apply_env_overrides()

    return config

