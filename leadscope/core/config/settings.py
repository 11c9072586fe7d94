"""Configuration management for the leadscope client and service."""

import os
import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from leadscope.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_HOME = Path.home() / ".leadscope"

DEFAULT_NCUA_ENDPOINTS = [
    "https://data.ncua.gov/resource/9k6a-5st2.json",
    "https://data.ncua.gov/resource/kp6f-mwpt.json",
    "https://data.ncua.gov/resource/7kii-a53n.json",
]


@dataclass
class SourcesConfig:
    """Upstream source configuration."""

    fdic_base_url: str = "https://banks.data.fdic.gov/api"
    ncua_endpoints: list[str] = field(default_factory=lambda: list(DEFAULT_NCUA_ENDPOINTS))
    proxy_url: str | None = None
    timeout: float = 30.0
    result_limit: int = 10000


@dataclass
class OverridesConfig:
    """Override store configuration."""

    remote_url: str | None = None
    local_path: str = str(DEFAULT_HOME / "overrides.duckdb")
    namespace: str = "lead_overrides"


@dataclass
class CacheConfig:
    """In-process cache used by the credit union proxy endpoint."""

    enabled: bool = True
    memory_size: int = 16
    ttl: int = 3600


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    file: str | None = None


@dataclass
class WebConfig:
    """Web service binding."""

    host: str = "127.0.0.1"
    port: int = 8000
    reload: bool = False


@dataclass
class LeadscopeConfig:
    """Top level leadscope configuration."""

    sources: SourcesConfig = field(default_factory=SourcesConfig)
    overrides: OverridesConfig = field(default_factory=OverridesConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    web: WebConfig = field(default_factory=WebConfig)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "LeadscopeConfig":
        """Build a configuration from a nested dictionary."""
        return cls(
            sources=SourcesConfig(**config_dict.get("sources", {})),
            overrides=OverridesConfig(**config_dict.get("overrides", {})),
            cache=CacheConfig(**config_dict.get("cache", {})),
            logging=LoggingConfig(**config_dict.get("logging", {})),
            web=WebConfig(**config_dict.get("web", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a nested dictionary."""
        return {
            "sources": asdict(self.sources),
            "overrides": asdict(self.overrides),
            "cache": asdict(self.cache),
            "logging": asdict(self.logging),
            "web": asdict(self.web),
        }


def _deep_update(d: dict[str, Any], u: dict[str, Any]) -> dict[str, Any]:
    for k, v in u.items():
        if isinstance(v, dict):
            d[k] = _deep_update(d.get(k, {}), v)
        else:
            d[k] = v
    return d


class ConfigManager:
    """Loads configuration from TOML and the environment."""

    def __init__(self, config_path: Path | None = None, *, use_env: bool = True):
        """Initialise the manager.

        Args:
            config_path: TOML file to read; defaults to ``~/.leadscope/config.toml``
            use_env: Overlay ``LEADSCOPE_*`` environment variables
        """
        self.config_path = config_path or DEFAULT_HOME / "config.toml"
        self.use_env = use_env
        self.config = self._load_config()

    def _load_config(self) -> LeadscopeConfig:
        config_dict: dict[str, Any] = {}
        if self.config_path.exists():
            try:
                with open(self.config_path, "rb") as f:
                    config_dict = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as e:
                logger.warning(f"Failed to load config from {self.config_path}: {e}")
                config_dict = {}

        if self.use_env:
            _deep_update(config_dict, load_config_from_env())

        try:
            return LeadscopeConfig.from_dict(config_dict)
        except TypeError as e:
            logger.warning(f"Ignoring invalid configuration in {self.config_path}: {e}")
            return LeadscopeConfig()

    def get_config(self) -> LeadscopeConfig:
        """Return the current configuration."""
        return self.config

    def update_config(self, **updates: Any) -> None:
        """Apply nested updates to the current configuration."""
        config_dict = self.config.to_dict()
        _deep_update(config_dict, updates)
        self.config = LeadscopeConfig.from_dict(config_dict)


def get_default_config() -> LeadscopeConfig:
    """Return a configuration with every default applied."""
    return LeadscopeConfig()


def load_config_from_env() -> dict[str, Any]:
    """Read ``LEADSCOPE_*`` environment variables into a nested dictionary."""
    config: dict[str, Any] = {}

    sources_config: dict[str, Any] = {}
    overrides_config: dict[str, Any] = {}

    api_url = os.getenv("LEADSCOPE_API_URL")
    if api_url:
        base = api_url.rstrip("/")
        sources_config["proxy_url"] = f"{base}/api/ncua/credit-unions"
        overrides_config["remote_url"] = base
    fdic_url = os.getenv("LEADSCOPE_FDIC_URL")
    if fdic_url:
        sources_config["fdic_base_url"] = fdic_url
    ncua_endpoints = os.getenv("LEADSCOPE_NCUA_ENDPOINTS")
    if ncua_endpoints:
        sources_config["ncua_endpoints"] = [e.strip() for e in ncua_endpoints.split(",") if e.strip()]
    timeout = os.getenv("LEADSCOPE_PROVIDER_TIMEOUT")
    if timeout is not None:
        sources_config["timeout"] = float(timeout)
    result_limit = os.getenv("LEADSCOPE_RESULT_LIMIT")
    if result_limit is not None:
        sources_config["result_limit"] = int(result_limit)

    overrides_path = os.getenv("LEADSCOPE_OVERRIDES_PATH")
    if overrides_path:
        overrides_config["local_path"] = overrides_path
    namespace = os.getenv("LEADSCOPE_OVERRIDES_NAMESPACE")
    if namespace:
        overrides_config["namespace"] = namespace

    if sources_config:
        config["sources"] = sources_config
    if overrides_config:
        config["overrides"] = overrides_config

    cache_ttl = os.getenv("LEADSCOPE_CACHE_TTL")
    if cache_ttl is not None:
        config["cache"] = {"ttl": int(cache_ttl)}

    logging_config: dict[str, Any] = {}
    level = os.getenv("LEADSCOPE_LOGGING_LEVEL")
    if level is not None:
        logging_config["level"] = level
    log_file = os.getenv("LEADSCOPE_LOGGING_FILE")
    if log_file is not None:
        logging_config["file"] = log_file
    if logging_config:
        config["logging"] = logging_config

    web_config: dict[str, Any] = {}
    host = os.getenv("LEADSCOPE_HOST")
    if host:
        web_config["host"] = host
    port = os.getenv("LEADSCOPE_PORT")
    if port is not None:
        web_config["port"] = int(port)
    reload = os.getenv("LEADSCOPE_RELOAD")
    if reload is not None:
        web_config["reload"] = reload.lower() in ("1", "true", "yes")
    if web_config:
        config["web"] = web_config

    return config
