from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    pdf_engine: str = "pymupdf"
    pdf_render_scale: float = 4.0
    ocr_min_chars_per_page: int = 50
    offload_image_processing: bool = True
    ingest_concurrency: int = 1

    recognition_provider: str = "openai"
    recognition_model_name: str = "gpt-4o"

    generation_provider: str = "openai"
    generation_model_name: str = "gpt-4o-mini"
    generation_temperature: float = 0.2

    openai_api_key: str = ""
    openai_timeout_seconds: int = 30

    openai_compatible_base_url: str = ""
    openai_compatible_api_key: str = ""
