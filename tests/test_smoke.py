"""
Smoke test - verifies test infrastructure is working.
Run: pytest tests/test_smoke.py -v
"""


def test_import_app():
    """Verify users_api package can be imported."""
    from users_api.core.config import get_settings

    settings = get_settings()
    assert settings is not None
    assert hasattr(settings, "db_host")


def test_default_settings(test_settings):
    assert test_settings.db_name == "test_users_db"
    assert test_settings.rate_limit_per_second == 0
    assert test_settings.debug is False


def test_pytest_runs():
    """Basic sanity check that pytest executes tests."""
    assert True
