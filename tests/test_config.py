"""
Configuration selection and safety checks.
"""

import pytest

from config import (
    Config,
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    check_config,
    get_config,
)


class TestGetConfig:

    @pytest.mark.parametrize("environment, expected", [
        ("production", ProductionConfig),
        ("PRODUCTION", ProductionConfig),
        ("development", DevelopmentConfig),
        ("testing", TestingConfig),
        ("staging", Config),
    ])
    def test_by_name(self, environment, expected):
        assert get_config(environment) is expected

    def test_defaults_to_flask_env(self, monkeypatch):
        monkeypatch.setenv("FLASK_ENV", "testing")
        assert get_config() is TestingConfig

    def test_testing_config_uses_memory_backend(self):
        assert TestingConfig.ORDER_BACKEND == "memory"
        assert TestingConfig.TESTING


class TestCheckConfig:

    def test_production_needs_secret_key(self):
        problems = check_config({"ENVIRONMENT": "production", "SECRET_KEY": "dev-secret-key"})
        assert problems == ["FLASK_SECRET_KEY is not set"]

    def test_development_tolerates_default_secret(self):
        assert check_config({"ENVIRONMENT": "development", "SECRET_KEY": "dev-secret-key"}) == []

    def test_mongo_backend_needs_uri(self):
        problems = check_config({"ENVIRONMENT": "production", "SECRET_KEY": "x", "ORDER_BACKEND": "mongo", "MONGO_URI": ""})
        assert problems == ["ORDER_BACKEND is 'mongo' but MONGO_URI is empty"]
