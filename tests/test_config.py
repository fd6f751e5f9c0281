"""Tests for configuration loading."""

from book_catalog_api.app.core.config import Settings, _env_flag


class TestSettings:
    def test_defaults(self) -> None:
        config = Settings()
        assert config.database_name == "exercise-2"
        assert config.collection_name == "information"
        assert config.store_timeout > 0

    def test_overrides(self) -> None:
        config = Settings(database_uri="mongodb://db:27017", seed_on_startup=False)
        assert config.database_uri == "mongodb://db:27017"
        assert config.seed_on_startup is False


class TestEnvFlag:
    def test_truthy_values(self, monkeypatch) -> None:
        for value in ("1", "true", "TRUE", "yes"):
            monkeypatch.setenv("CATALOG_TEST_FLAG", value)
            assert _env_flag("CATALOG_TEST_FLAG", "false") is True

    def test_falsy_values(self, monkeypatch) -> None:
        monkeypatch.setenv("CATALOG_TEST_FLAG", "off")
        assert _env_flag("CATALOG_TEST_FLAG", "true") is False

    def test_default(self, monkeypatch) -> None:
        monkeypatch.delenv("CATALOG_TEST_FLAG", raising=False)
        assert _env_flag("CATALOG_TEST_FLAG", "true") is True
