"""Tests for runtime configuration."""

import pytest
from pydantic import ValidationError

from gql_bootstrap.core import Config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("FIELD_VISIBILITY", "PRINT_DATA_FETCHER_EXCEPTION", "BATCH_MAX_SIZE"):
        monkeypatch.delenv(f"GQL_BOOTSTRAP_{name}", raising=False)


class TestConfig:
    """Tests for Config."""

    def test_defaults(self):
        config = Config()
        assert config.field_visibility is None
        assert config.print_data_fetcher_exception is False
        assert config.batch_max_size is None

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("GQL_BOOTSTRAP_FIELD_VISIBILITY", "no-introspection")
        monkeypatch.setenv("GQL_BOOTSTRAP_PRINT_DATA_FETCHER_EXCEPTION", "true")
        monkeypatch.setenv("GQL_BOOTSTRAP_BATCH_MAX_SIZE", "50")

        config = Config()
        assert config.field_visibility == "no-introspection"
        assert config.print_data_fetcher_exception is True
        assert config.batch_max_size == 50

    def test_explicit_values_win(self, monkeypatch):
        monkeypatch.setenv("GQL_BOOTSTRAP_BATCH_MAX_SIZE", "50")
        assert Config(batch_max_size=5).batch_max_size == 5

    def test_ignores_empty_and_unprefixed(self, monkeypatch):
        monkeypatch.setenv("GQL_BOOTSTRAP_BATCH_MAX_SIZE", "")
        monkeypatch.setenv("FIELD_VISIBILITY", "secret.*")
        assert Config() == Config(field_visibility=None, batch_max_size=None)

    def test_invalid_value(self, monkeypatch):
        monkeypatch.setenv("GQL_BOOTSTRAP_BATCH_MAX_SIZE", "many")
        with pytest.raises(ValidationError):
            Config()
