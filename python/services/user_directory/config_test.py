from user_directory.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.app_name == "user-directory"
    assert settings.api_port == 8080
    assert not settings.is_production


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("USER_DIRECTORY_API_PORT", "9090")
    monkeypatch.setenv("USER_DIRECTORY_ENVIRONMENT", "production")
    settings = Settings(_env_file=None)
    assert settings.api_port == 9090
    assert settings.is_production
