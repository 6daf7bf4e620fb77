from typing import Optional
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PostgresSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    host: str = Field(default="localhost", alias="POSTGRES_HOST")
    port: int = Field(default=5432, alias="POSTGRES_DB_PORT")
    db_name: str = Field(default="notes", alias="POSTGRES_DB_NAME")
    user: str = Field(default="postgres", alias="POSTGRES_DB_USER")
    password: str = Field(default="postgres", alias="POSTGRES_DB_PASSWORD")
    # Full SQLAlchemy URL; takes precedence over the discrete fields above
    url_override: Optional[str] = Field(default=None, alias="DATABASE_URL")

    @computed_field
    def connection_string(self) -> str:
        if self.url_override:
            return self.url_override
        return f"postgresql+asyncpg://{self.user}:{self.password}@{self.host}:{self.port}/{self.db_name}"


class PerplexitySettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    api_key: Optional[str] = Field(default=None, alias="PERPLEXITY_API_KEY")
    base_url: str = Field(
        default="https://api.perplexity.ai", alias="PERPLEXITY_BASE_URL"
    )
    model: str = Field(default="sonar-pro", alias="PERPLEXITY_MODEL")
    temperature: float = Field(default=0.3, alias="PERPLEXITY_TEMPERATURE")
    max_tokens: int = Field(default=3000, alias="PERPLEXITY_MAX_TOKENS")
    search_domains: list[str] = Field(
        default_factory=lambda: ["edu", "gov", "org"],
        alias="PERPLEXITY_SEARCH_DOMAINS",
    )
    recency_filter: str = Field(default="month", alias="PERPLEXITY_RECENCY_FILTER")


class WebhookSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    url: Optional[str] = Field(default=None, alias="WORKATO_WEBHOOK_URL")
    api_token: Optional[str] = Field(default=None, alias="WORKATO_API_TOKEN")
    timeout_seconds: float = Field(default=10.0, alias="WORKATO_TIMEOUT_SECONDS")


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    name: str = Field(default="notes-to-flashcards", alias="APP_NAME")
    version: str = Field(default="v1", alias="API_VERSION")
    port: int = Field(default=9000, alias="APP_PORT")
    mode: str = Field(default="prod", alias="MODE")
    jwt_secret: str = Field(alias="JWT_SECRET")
    token_lifetime_seconds: int = Field(
        default=3600, alias="JWT_TOKEN_LIFETIME_SECONDS"
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"], alias="CORS_ORIGINS"
    )

    @computed_field
    def is_production(self) -> bool:
        return self.mode != "dev"

    @computed_field
    def is_testing(self) -> bool:
        return self.mode == "test"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=lambda: AppSettings())
    postgres: PostgresSettings = Field(default_factory=lambda: PostgresSettings())
    perplexity: PerplexitySettings = Field(
        default_factory=lambda: PerplexitySettings()
    )
    webhook: WebhookSettings = Field(default_factory=lambda: WebhookSettings())


settings = Settings()
