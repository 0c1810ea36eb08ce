from graph_canvas.config.settings import APISettings, DatabaseSettings, Settings, get_settings


def test_database_path_default(monkeypatch) -> None:
    monkeypatch.delenv("GRAPH_DB_PATH", raising=False)
    settings = DatabaseSettings()
    assert settings.path == "data/graph.duckdb"
    assert not settings.is_memory


def test_database_path_from_env(monkeypatch) -> None:
    monkeypatch.setenv("GRAPH_DB_PATH", ":memory:")
    assert DatabaseSettings().is_memory


def test_blank_database_path_falls_back(monkeypatch) -> None:
    monkeypatch.setenv("GRAPH_DB_PATH", "   ")
    assert DatabaseSettings().path == "data/graph.duckdb"


def test_allowed_origins_are_split(monkeypatch) -> None:
    monkeypatch.setenv("API_CORS_ALLOWED_ORIGINS", "http://a.test, ,http://b.test ")
    assert APISettings().allowed_origins == ["http://a.test", "http://b.test"]


def test_api_port_from_env(monkeypatch) -> None:
    monkeypatch.setenv("API_PORT", "9001")
    assert APISettings().port == 9001


def test_settings_nesting(monkeypatch) -> None:
    monkeypatch.setenv("GRAPH_DB_PATH", "/tmp/graph.duckdb")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    settings = Settings()
    assert settings.database.path == "/tmp/graph.duckdb"
    assert settings.log_level == "DEBUG"


def test_get_settings_is_cached() -> None:
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()
