from __future__ import annotations

import pytest

from quote_fetcher.config import AppConfig, ClientConfig


def test_client_config_defaults_match_upstream() -> None:
    cfg = ClientConfig()
    assert cfg.base_url == "https://api.1000kitap.com/"
    assert cfg.endpoint == "okurCekV2"
    assert cfg.section == "alintilar"
    assert (cfg.app_version, cfg.platform, cfg.locale) == ("2.43.2", "web", "tr")


def test_client_config_normalises_base_url() -> None:
    assert ClientConfig(base_url=" https://example.test/api ").base_url == "https://example.test/api/"
    with pytest.raises(ValueError):
        ClientConfig(base_url="ftp://example.test")


@pytest.mark.parametrize("timeout", [0, -1, "-2"])
def test_client_config_rejects_non_positive_timeout(timeout) -> None:
    with pytest.raises(ValueError):
        ClientConfig(timeout=timeout)


@pytest.mark.parametrize("timeout", [None, "soon", [5]])
def test_client_config_rejects_non_numeric_timeout(timeout) -> None:
    with pytest.raises(ValueError, match="timeout must be a number"):
        ClientConfig(timeout=timeout)


def test_app_config_output_format_is_restricted() -> None:
    assert AppConfig(default_output_format="csv").default_output_format == "csv"
    with pytest.raises(ValueError):
        AppConfig(default_output_format="xml")
