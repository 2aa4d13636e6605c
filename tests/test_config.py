"""Tests for configuration helpers."""

import pytest

from rum_tools.common import config


@pytest.fixture
def no_env_file(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "ENV_PATH", tmp_path / ".env")
    for key in ("DD_API_KEY", "DD_APP_KEY", "DD_SITE"):
        # register the key so anything load_env writes is undone
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    return tmp_path / ".env"


def test_missing_credentials(no_env_file):
    with pytest.raises(ValueError, match="Missing Datadog credentials"):
        config.get_credentials()


def test_credentials_from_env_file(no_env_file, monkeypatch):
    no_env_file.write_text(
        "# Datadog\n"
        "DD_API_KEY='api-from-file'\n"
        "DD_APP_KEY=\"app-from-file\"\n"
        "\n"
        "not a setting\n"
    )
    monkeypatch.setenv("DD_APP_KEY", "app-from-env")

    credentials = config.get_credentials()

    assert credentials == {
        "api_key": "api-from-file",
        "app_key": "app-from-env",
        "site": "datadoghq.com",
    }


def test_api_config(no_env_file, monkeypatch):
    monkeypatch.setenv("DD_API_KEY", "api")
    monkeypatch.setenv("DD_APP_KEY", "app")
    monkeypatch.setenv("DD_SITE", "datadoghq.eu")

    configuration = config.get_api_config()

    assert configuration.api_key["apiKeyAuth"] == "api"
    assert configuration.api_key["appKeyAuth"] == "app"
    assert configuration.server_variables["site"] == "datadoghq.eu"


def test_output_path(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "DATA_DIR", tmp_path)

    assert config.get_output_path("a.json") == tmp_path / "datadog" / "a.json"
    path = config.get_output_path("b.yaml", "2026-02-03_analysis")
    assert path == tmp_path / "2026-02-03_analysis" / "datadog" / "b.yaml"
    assert path.parent.is_dir()
