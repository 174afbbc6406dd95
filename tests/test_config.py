from sociomap.config import Settings


def test_defaults(monkeypatch):
    for var in ("LLM_PROVIDER", "PORT", "ENVIRONMENT", "CORS_ORIGINS"):
        monkeypatch.delenv(var, raising=False)
    s = Settings(_env_file=None)
    assert s.llm_provider == "openai"
    assert s.openai_model == "gpt-4o-mini"
    assert s.generation_temperature == 0.7
    assert s.generation_max_tokens == 1000
    assert s.port == 3001
    assert s.is_production is False
    assert s.cors_origin_list == ["*"]


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("ENVIRONMENT", "Production")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example,")
    s = Settings(_env_file=None)
    assert s.port == 8080
    assert s.is_production is True
    assert s.openai_api_key == "sk-env"
    assert s.cors_origin_list == ["https://a.example", "https://b.example"]
