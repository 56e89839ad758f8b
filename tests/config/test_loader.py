from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from quote_fetcher.config import AppConfig, ClientConfig, ConfigLocator, ConfigRepository


def test_config_locator_uses_env_and_creates_directories(isolated_home: Path) -> None:
    locator = ConfigLocator()
    assert locator.project_root == isolated_home.resolve()
    assert locator.data_dir.exists()
    assert locator.logs_dir.exists()
    assert locator.config_path() == locator.data_dir / "config.yaml"


def test_repository_writes_defaults_when_missing(temp_config_repository: ConfigRepository) -> None:
    config = temp_config_repository.load()
    path = temp_config_repository.locator.config_path()
    assert config == AppConfig()
    assert path.exists()
    stored = yaml.safe_load(path.read_text(encoding="utf-8"))
    assert stored["client"]["endpoint"] == "okurCekV2"


def test_repository_roundtrip(temp_config_repository: ConfigRepository) -> None:
    config = AppConfig(
        client=ClientConfig(cookies={"token": "t"}, timeout=30),
        show_progress=False,
        default_output_format="csv",
    )
    temp_config_repository.save(config)
    fresh = ConfigRepository(temp_config_repository.locator)
    assert fresh.load() == config


def test_repository_reads_json_config(isolated_home: Path) -> None:
    locator = ConfigLocator()
    (locator.data_dir / "config.json").write_text('{"show_progress": false}', encoding="utf-8")
    config = ConfigRepository(locator).load()
    assert config.show_progress is False


def test_repository_rejects_non_mapping(isolated_home: Path) -> None:
    locator = ConfigLocator()
    locator.config_path().write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        ConfigRepository(locator).load()


def test_repository_reports_null_timeout_as_validation_error(isolated_home: Path) -> None:
    locator = ConfigLocator()
    locator.config_path().write_text("client:\n  timeout: null\n", encoding="utf-8")
    with pytest.raises(ValueError, match="timeout must be a number"):
        ConfigRepository(locator).load()
