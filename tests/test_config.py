"""
Tests for configuration loading
"""
import json

import pytest

from core.config import (
    BOT_AGENTS,
    Config,
    PrerenderSettings,
    config_path,
    load_config,
    require_serving_config,
)
from core.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("PRERENDER_TOKEN", "PORT", "PRERENDER_GATEWAY_CONFIG", "PRERENDER_TRUST_FORWARDED_HOST"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = Config()
    assert config.prerender.service_url == "https://service.prerender.io"
    assert config.prerender.token == ""
    assert tuple(config.routing.bot_agents) == BOT_AGENTS
    assert config.routing.index_path == "/index.html"
    assert config.upstream.retries == 1


def test_missing_file_is_created(tmp_path):
    path = tmp_path / "nested" / "config.json"
    config = load_config(path)

    assert path.exists()
    assert json.loads(path.read_text())["prerender"]["service_url"] == config.prerender.service_url


def test_values_read_from_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "prerender": {"token": "from-file", "service_url": "https://render.internal/"},
        "routing": {"bot_agents": ["somebot"]},
    }))

    config = load_config(path)
    assert config.prerender.token == "from-file"
    assert config.prerender.service_url == "https://render.internal"
    assert config.routing.bot_agents == ["somebot"]


def test_corrupt_file_backed_up(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")

    config = load_config(path)
    assert config == Config()
    assert (tmp_path / "config.json.bak").read_text() == "{not json"


def test_env_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("PRERENDER_TOKEN", "env-token")
    monkeypatch.setenv("PORT", "9000")

    config = load_config(tmp_path / "config.json")
    assert config.prerender.token == "env-token"
    assert config.proxy.port == 9000


def test_invalid_port_env(tmp_path, monkeypatch):
    monkeypatch.setenv("PORT", "eighty")
    with pytest.raises(ConfigurationError):
        load_config(tmp_path / "config.json")


def test_config_path_env(tmp_path, monkeypatch):
    monkeypatch.setenv("PRERENDER_GATEWAY_CONFIG", str(tmp_path / "gw.json"))
    assert config_path() == tmp_path / "gw.json"


def test_require_token():
    with pytest.raises(ConfigurationError, match="token"):
        require_serving_config(Config())

    config = Config(prerender=PrerenderSettings(token="abc"))
    assert require_serving_config(config) is config


def test_require_bot_agents():
    config = Config(prerender=PrerenderSettings(token="abc"))
    config.routing.bot_agents = []
    with pytest.raises(ConfigurationError):
        require_serving_config(config)


def test_forwarded_host_trust_env(tmp_path, monkeypatch):
    assert load_config(tmp_path / "config.json").proxy.trust_forwarded_host is False

    monkeypatch.setenv("PRERENDER_TRUST_FORWARDED_HOST", "true")
    assert load_config(tmp_path / "config.json").proxy.trust_forwarded_host is True
