"""Tests for environment-driven configuration."""

import pytest

from siterank.config import DEFAULT_SERVICE_URL, ViewerConfig

_VARS = ("SITERANK_SERVICE_URL", "SITERANK_TIMEOUT", "SITERANK_NO_COLOR")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate each test from real SITERANK_* variables and .env files.

    Each variable is set then deleted so monkeypatch restores the prior
    state even when load_dotenv writes it during the test.
    """
    monkeypatch.chdir(tmp_path)
    for name in _VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


class TestViewerConfig:

    def test_defaults(self):
        config = ViewerConfig.from_env()
        assert config.service_url == DEFAULT_SERVICE_URL
        assert config.timeout is None
        assert config.no_color is False

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("SITERANK_SERVICE_URL", "http://svc:9000")
        monkeypatch.setenv("SITERANK_TIMEOUT", "12.5")
        monkeypatch.setenv("SITERANK_NO_COLOR", "yes")

        config = ViewerConfig.from_env()

        assert config.service_url == "http://svc:9000"
        assert config.timeout == 12.5
        assert config.no_color is True

    def test_reads_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("SITERANK_SERVICE_URL=http://from-dotenv\n", encoding="utf-8")
        assert ViewerConfig.from_env().service_url == "http://from-dotenv"

    def test_dotenv_can_be_skipped(self, tmp_path):
        (tmp_path / ".env").write_text("SITERANK_SERVICE_URL=http://from-dotenv\n", encoding="utf-8")
        assert ViewerConfig.from_env(dotenv=False).service_url == DEFAULT_SERVICE_URL

    @pytest.mark.parametrize("raw", ["soon", "0", "-3"])
    def test_invalid_timeout(self, monkeypatch, raw):
        monkeypatch.setenv("SITERANK_TIMEOUT", raw)
        with pytest.raises(ValueError, match="SITERANK_TIMEOUT"):
            ViewerConfig.from_env()

    def test_merged_ignores_none(self):
        config = ViewerConfig(service_url="http://a").merged(service_url=None, timeout=3.0)
        assert config.service_url == "http://a"
        assert config.timeout == 3.0

    def test_analyze_endpoint(self):
        assert ViewerConfig(service_url="http://a/").analyze_endpoint == "http://a/analyze"
