"""Settings tests."""
from user_sync.config import Settings


def test_defaults(monkeypatch):
    for name in ("PORT", "API_KEY", "SUPABASE_URL", "SUPABASE_SERVICE_KEY", "SUPABASE_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.port == 3000
    assert settings.api_key == ""
    assert settings.supabase_timeout is None


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://project.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_KEY", "service-key")
    monkeypatch.setenv("API_KEY", "secret")
    monkeypatch.setenv("PORT", "8080")

    settings = Settings(_env_file=None)

    assert settings.supabase_url == "https://project.supabase.co"
    assert settings.supabase_service_key == "service-key"
    assert settings.api_key == "secret"
    assert settings.port == 8080
