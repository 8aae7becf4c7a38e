"""Configuration models and loading."""

import json
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from core.exceptions import ConfigurationError

CONFIG_DIR = Path.home() / ".config" / "prerender-gateway"
CONFIG_FILE = CONFIG_DIR / "config.json"

# Crawlers that get prerendered HTML instead of the client-rendered app
BOT_AGENTS = (
    "googlebot",
    "bingbot",
    "yahoo! slurp",
    "duckduckbot",
    "baiduspider",
    "yandexbot",
    "sogou",
    "twitterbot",
    "facebookexternalhit",
    "linkedinbot",
    "pinterest",
    "slackbot",
    "discordbot",
    "google-adsense",
)


class ProxySettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8080
    debug: bool = False
    # Only honor X-Forwarded-Host behind a front end that sets it
    trust_forwarded_host: bool = False


class PrerenderSettings(BaseModel):
    service_url: str = "https://service.prerender.io"
    token: str = ""

    @field_validator("service_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class RoutingSettings(BaseModel):
    bot_agents: list[str] = Field(default_factory=lambda: list(BOT_AGENTS))
    site_scheme: str = "https"
    index_path: str = "/index.html"


class UpstreamSettings(BaseModel):
    timeout: float = 30.0
    connect_timeout: float = 10.0
    retries: int = Field(default=1, ge=0)
    max_connections: int = 100
    max_keepalive_connections: int = 20
    chunk_size: int = 64 * 1024


class Config(BaseModel):
    proxy: ProxySettings = Field(default_factory=ProxySettings)
    prerender: PrerenderSettings = Field(default_factory=PrerenderSettings)
    routing: RoutingSettings = Field(default_factory=RoutingSettings)
    upstream: UpstreamSettings = Field(default_factory=UpstreamSettings)


def config_path() -> Path:
    """Return the config file path, honoring PRERENDER_GATEWAY_CONFIG."""
    override = os.environ.get("PRERENDER_GATEWAY_CONFIG")
    if override:
        return Path(override).expanduser()
    return CONFIG_FILE


def load_config(path: Path | None = None) -> Config:
    """Load configuration from JSON file, creating default if needed.

    Environment variables PRERENDER_TOKEN and PORT take precedence over
    the file so secrets never have to be written to disk.
    """
    path = path or config_path()
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        config = Config()
        path.write_text(config.model_dump_json(indent=2))
    else:
        try:
            data = json.loads(path.read_text())
            config = Config.model_validate(data)
        except (json.JSONDecodeError, ValidationError):
            # Backup corrupted config and recreate default
            backup = path.with_suffix(".json.bak")
            path.rename(backup)
            config = Config()
            path.write_text(config.model_dump_json(indent=2))

    return _apply_env_overrides(config)


def _apply_env_overrides(config: Config) -> Config:
    token = os.environ.get("PRERENDER_TOKEN")
    if token:
        config.prerender.token = token

    trust = os.environ.get("PRERENDER_TRUST_FORWARDED_HOST")
    if trust:
        config.proxy.trust_forwarded_host = trust.lower() in ("1", "true", "yes")

    port = os.environ.get("PORT")
    if port:
        try:
            config.proxy.port = int(port)
        except ValueError as e:
            raise ConfigurationError(f"PORT must be an integer, got {port!r}") from e

    return config


def require_serving_config(config: Config) -> Config:
    """Fail fast when settings required to serve traffic are missing."""
    if not config.prerender.token:
        raise ConfigurationError(
            "Prerender token not configured (set PRERENDER_TOKEN or prerender.token)"
        )
    if not config.routing.bot_agents:
        raise ConfigurationError("routing.bot_agents must not be empty")
    return config
