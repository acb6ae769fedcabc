import dataclasses

import pytest
import requests_mock

from nakamastream_project.animes import AnimeCatalogClient
from nakamastream_project.captcha import CaptchaClient
from nakamastream_project.config import DEFAULT_BASE_URL, ClientConfig

ENV_VARS = (
    "NAKAMASTREAM_API_URL",
    "NAKAMASTREAM_TIMEOUT",
    "NAKAMASTREAM_RATE_LIMIT",
    "NAKAMASTREAM_MAX_REQUESTS_PER_MINUTE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # setenv first so anything load_dotenv writes is removed on teardown
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def test_defaults(tmp_path):
    config = ClientConfig.from_env(tmp_path / "missing.env")
    assert config == ClientConfig()
    assert config.base_url == DEFAULT_BASE_URL
    assert config.timeout == 5.0
    assert config.rate_limit == 60.0
    assert config.max_requests_per_minute == 60


def test_config_is_frozen_and_strips_slash():
    config = ClientConfig(base_url="http://localhost/api/")
    assert config.base_url == "http://localhost/api"
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.timeout = 1.0


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("NAKAMASTREAM_API_URL", "http://localhost:9000/api")
    monkeypatch.setenv("NAKAMASTREAM_MAX_REQUESTS_PER_MINUTE", "5")
    config = ClientConfig.from_env(tmp_path / "missing.env")
    assert config.base_url == "http://localhost:9000/api"
    assert config.max_requests_per_minute == 5


def test_dotenv_file_is_loaded(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("NAKAMASTREAM_TIMEOUT=2.5\nNAKAMASTREAM_RATE_LIMIT=10\n", encoding="utf-8")
    config = ClientConfig.from_env(env_file)
    assert config.timeout == 2.5
    assert config.rate_limit == 10.0


def test_invalid_number_names_variable(monkeypatch, tmp_path):
    monkeypatch.setenv("NAKAMASTREAM_TIMEOUT", "soon")
    with pytest.raises(ValueError, match="NAKAMASTREAM_TIMEOUT"):
        ClientConfig.from_env(tmp_path / "missing.env")


def test_clients_from_config():
    config = ClientConfig(base_url="http://localhost/api", timeout=1.5, rate_limit=5, max_requests_per_minute=3)
    with requests_mock.Mocker() as mocker:
        mocker.get("http://localhost/api/animes", json=[])
        catalog = AnimeCatalogClient.from_config(config)
        catalog.fetch_all_animes()
        assert catalog.limiter.window == 5
        assert mocker.last_request.timeout == 1.5

    with CaptchaClient.from_config(config) as captcha:
        assert captcha.max_requests_per_minute == 3
        assert captcha.url == "http://localhost/api/auth/new-captcha"


def test_from_config_explicit_kwargs_win():
    config = ClientConfig(rate_limit=60)
    catalog = AnimeCatalogClient.from_config(config, rate_limit=1, timeout=0.5)
    assert catalog.limiter.window == 1
    assert catalog.timeout == 0.5
    with CaptchaClient.from_config(config, max_requests_per_minute=7) as captcha:
        assert captcha.max_requests_per_minute == 7
