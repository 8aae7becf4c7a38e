"""
Tests for the command line entry point
"""
import sys

import pytest

import cli


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv("PRERENDER_GATEWAY_CONFIG", str(tmp_path / "config.json"))
    monkeypatch.delenv("PRERENDER_TOKEN", raising=False)
    monkeypatch.delenv("PORT", raising=False)


def run(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["prerender-gateway", *args])
    cli.main()


def test_classify_crawler(monkeypatch, capsys):
    run(monkeypatch, "--classify", "Slackbot-LinkExpanding", "https://example.com/product/123")
    out = capsys.readouterr().out
    assert "crawler" in out
    assert "https://service.prerender.io/https://example.com/product/123" in out


def test_classify_human(monkeypatch, capsys):
    run(monkeypatch, "--classify", "Mozilla/5.0", "https://example.com/")
    out = capsys.readouterr().out
    assert "human" in out
    assert "https://example.com/index.html" in out


def test_serving_without_token_exits(monkeypatch, capsys):
    with pytest.raises(SystemExit) as exc:
        run(monkeypatch, "--plain")
    assert exc.value.code == 1
    assert "token" in capsys.readouterr().out.lower()


def test_unknown_argument(monkeypatch):
    with pytest.raises(SystemExit) as exc:
        run(monkeypatch, "--bogus")
    assert exc.value.code == 2


def test_config_location(monkeypatch, capsys, tmp_path):
    run(monkeypatch, "--config")
    assert "config.json" in capsys.readouterr().out
