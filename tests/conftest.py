"""Shared test fixtures for the record-editor test suite."""

from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from record_editor.models import FormState, Record


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def mock_toml_files(test_config_dir: Path) -> Callable[[dict[str, str]], None]:
    """Factory fixture to create TOML files in the test config directory.

    Usage:
        def test_something(mock_toml_files):
            mock_toml_files({
                "default.toml": "app_name = 'test'",
                "development.toml": "debug = true",
            })
    """

    def _create_toml_files(files: dict[str, str]) -> None:
        for filename, content in files.items():
            (test_config_dir / filename).write_text(content)

    return _create_toml_files


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the settings cache and TOML source before and after each test."""
    from record_editor.config import get_settings
    from record_editor.config.settings import set_toml_config

    get_settings.cache_clear()
    set_toml_config({})
    yield
    get_settings.cache_clear()
    set_toml_config({})


@pytest.fixture
def valid_form() -> FormState:
    return FormState(
        name="Ada Lovelace",
        username="ada",
        email="ada@example.com",
        phone="5551234567",
        balance="250",
    )


@pytest.fixture
def make_record() -> Callable[..., Record]:
    """Factory for records as the bank service returns them."""

    def _make(record_id: int = 1, **overrides) -> Record:
        data = {
            "id": record_id,
            "name": f"Customer {record_id}",
            "username": f"customer{record_id}",
            "email": f"customer{record_id}@example.com",
            "phone": "5550000000",
            "balance": 100,
        }
        data.update(overrides)
        return Record.model_validate(data)

    return _make
