from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    app_name: str = "Design Agent API"
    app_env: str = Field("dev", alias="APP_ENV")
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(5001, alias="PORT")

    secret_key: str = Field("change-me", alias="JWT_SECRET")
    access_token_expire_minutes: int = Field(60 * 24 * 7, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    database_url: str | None = Field(default=None, alias="DATABASE_URL")

    openai_api_key: str | None = Field(default=None, alias="OPENAI_API_KEY")
    gemini_api_key: str | None = Field(default=None, alias="GEMINI_API_KEY")
    qwen_api_key: str | None = Field(default=None, alias="QWEN_API_KEY")
    default_ai_provider: str = Field("openai", alias="DEFAULT_AI_PROVIDER")

    upload_path: str = Field("./uploads", alias="UPLOAD_PATH")
    max_file_size: int = Field(5 * 1024 * 1024, alias="MAX_FILE_SIZE")
    max_body_size: int = Field(10 * 1024 * 1024, alias="MAX_BODY_SIZE")

    rate_limit_window_seconds: int = Field(15 * 60, alias="RATE_LIMIT_WINDOW_SECONDS")
    rate_limit_max_calls: int = Field(100, alias="RATE_LIMIT_MAX_CALLS")
    cors_origins: str = Field("*", alias="CORS_ORIGINS")
    fatal_async_errors: bool = Field(True, alias="FATAL_ASYNC_ERRORS")

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

settings = Settings()
