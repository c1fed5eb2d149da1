"""
Unit tests for application settings.
"""

from project_health.core.config import Settings, get_settings


def test_environment_flags():
    local = Settings(ENVIRONMENT="local")
    test = Settings(ENVIRONMENT="test")

    assert (local.is_local, local.is_test) == (True, False)
    assert (test.is_local, test.is_test) == (False, True)


def test_suite_runs_in_test_environment():
    assert get_settings().is_test is True
