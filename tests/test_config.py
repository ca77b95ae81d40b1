from quotation_api.config import DEFAULT_IMAGE_MODEL, Settings


def test_from_env_reads_overrides(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "abc")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-test")
    monkeypatch.setenv("GEMINI_RETRY_BASE_DELAY", "0.5")
    monkeypatch.setenv("IMAGE_CONCURRENCY", "2")
    monkeypatch.setenv("ENABLE_IMAGE_GENERATION", "false")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.example, https://b.example,")
    monkeypatch.delenv("IMAGE_MODEL", raising=False)

    settings = Settings.from_env()

    assert settings.api_key == "abc"
    assert settings.text_model == "gemini-test"
    assert settings.image_model == DEFAULT_IMAGE_MODEL
    assert settings.retry_base_delay == 0.5
    assert settings.image_concurrency == 2
    assert settings.enable_images is False
    assert settings.cors_origins == ["https://a.example", "https://b.example"]


def test_vertex_settings(monkeypatch):
    monkeypatch.setenv("GOOGLE_GENAI_USE_VERTEXAI", "True")
    monkeypatch.setenv("GCP_PROJECT_ID", "my-project")
    monkeypatch.delenv("GCP_GLOBAL_LOCATION", raising=False)
    monkeypatch.setenv("GCP_LOCATION", "us-central1")

    settings = Settings.from_env()

    assert settings.use_vertexai is True
    assert settings.project_id == "my-project"
    assert settings.location == "us-central1"
